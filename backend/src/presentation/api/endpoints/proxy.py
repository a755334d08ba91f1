"""
Catch-all Proxy Endpoint
ANY /api/{path} -> {BACKEND_API_URL}/{path}{?query}
"""
from typing import Optional

from fastapi import APIRouter, Depends, Header, Request, Response

from infrastructure.proxy.backend_proxy import BackendProxy
from presentation.api.container import get_backend_proxy
from presentation.api.schemas.envelope import PROXY_ERROR_RESPONSES


router = APIRouter()

PROXIED_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH"]


@router.api_route("/{path:path}", methods=PROXIED_METHODS, responses=PROXY_ERROR_RESPONSES)
async def proxy_request(
    path: str,
    request: Request,
    authorization: Optional[str] = Header(None),
    proxy: BackendProxy = Depends(get_backend_proxy)
) -> Response:
    """Forward method, body and Authorization; relay status and body verbatim"""
    method = request.method
    body = await request.body() if method not in ("GET", "DELETE") else None

    return await proxy.forward(
        method,
        path,
        f"{method} /api/*",
        query=request.url.query,
        body=body,
        authorization=authorization,
    )
