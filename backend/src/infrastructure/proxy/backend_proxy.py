"""
Backend Proxy
Forwards gateway requests to the backend API and relays its answer unchanged
"""
import json
from typing import Any, Optional
from urllib.parse import quote

import httpx
from fastapi import Response, status
from fastapi.responses import JSONResponse, PlainTextResponse

from core.config import settings
from core.logging_config import logger


# Methods whose request body is never forwarded
BODYLESS_METHODS = {"GET", "DELETE"}

# Statuses that must not carry a response body
EMPTY_BODY_STATUSES = {204, 304}

# RFC 3986 path characters left unescaped when re-encoding a decoded path
PATH_SAFE_CHARS = "/:@!$&'()*+,;=-._~"


def error_envelope(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"success": False, "message": message}, status_code=status_code)


class BackendProxy:
    """Relays requests to {BACKEND_API_URL}/{path}"""

    def __init__(self, client: httpx.AsyncClient, base_url: Optional[str] = None):
        self.client = client
        self.base_url = (base_url or settings.BACKEND_API_URL).rstrip("/")

    def build_url(self, path: str, query: str = "") -> str:
        url = f"{self.base_url}/{quote(path.lstrip('/'), safe=PATH_SAFE_CHARS)}"
        return f"{url}?{query}" if query else url

    async def forward(
        self,
        method: str,
        path: str,
        label: str,
        query: str = "",
        body: Optional[bytes] = None,
        authorization: Optional[str] = None,
    ) -> Response:
        """
        Forward one request and relay the backend response

        Args:
            method: HTTP method to use against the backend
            path: Backend path relative to BACKEND_API_URL
            label: Route name used in log lines, e.g. "POST /api/*"
            query: Raw query string, without the leading '?'
            body: Request body; dropped for GET and DELETE
            authorization: Caller's Authorization header, forwarded verbatim

        Returns:
            The backend's status and body, or 500 {success: false, message} on failure
        """
        method = method.upper()
        headers = {"Content-Type": "application/json"}
        if authorization:
            headers["Authorization"] = authorization

        content = body if body and method not in BODYLESS_METHODS else None
        url = self.build_url(path, query)

        try:
            response = await self.client.request(method, url, headers=headers, content=content)
            logger.debug(f"{label} -> {method} {url}: {response.status_code}")
            return self._relay(response)
        except (httpx.HTTPError, ValueError) as e:
            return self.failure(label, e)

    async def forward_json(
        self,
        method: str,
        path: str,
        label: str,
        payload: Any = None,
        authorization: Optional[str] = None,
    ) -> Response:
        """Forward an already-parsed JSON body"""
        body = None if payload is None else json.dumps(payload).encode("utf-8")
        return await self.forward(method, path, label, body=body, authorization=authorization)

    def failure(self, label: str, error: Exception) -> JSONResponse:
        """500 envelope for network and parsing failures"""
        message = str(error) or error.__class__.__name__
        logger.error(f"{label} proxy error: {message}")
        return error_envelope(message, status.HTTP_500_INTERNAL_SERVER_ERROR)

    def _relay(self, response: httpx.Response) -> Response:
        if response.status_code in EMPTY_BODY_STATUSES:
            return Response(status_code=response.status_code)

        if not response.is_success:
            try:
                error_data = response.json()
            except ValueError:
                error_data = {"message": response.reason_phrase}
            return JSONResponse(error_data, status_code=response.status_code)

        if not response.content:
            return JSONResponse({"success": True}, status_code=response.status_code)

        try:
            data = response.json()
        except ValueError:
            return PlainTextResponse(response.text, status_code=response.status_code)

        return JSONResponse(data, status_code=response.status_code)
