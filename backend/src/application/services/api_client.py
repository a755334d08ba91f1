"""
Backend API Client
Authenticated HTTP calls with a primary/fallback endpoint strategy.

Every request is tried against the primary base URL first; on any failure
(network error, non-2xx status, unparsable body) it is retried once against
the fallback base URL. When both fail, the primary error is raised.
"""
import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import aiofiles
import httpx
from loguru import logger

from application.services.storage.interfaces import AUTH_TOKEN_KEY, IKeyValueStore
from core.config import settings
from core.exceptions import ApiConnectionError, ApiError
from infrastructure.external.file_storage_service import guess_content_type, validate_profile_photo


# (filename, content, content type), kept in memory so the fallback attempt can resend it
FilePart = Tuple[str, bytes, str]
ApiResponse = Dict[str, Any]


def build_query(params: Mapping[str, Any]) -> str:
    """Encode query parameters, skipping None values

    Booleans are written the way the web client wrote them ("true"/"false").
    """
    pairs = []
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        pairs.append((key, str(value)))
    return str(httpx.QueryParams(pairs))


def with_query(endpoint: str, params: Mapping[str, Any]) -> str:
    query = build_query(params)
    return f"{endpoint}?{query}" if query else endpoint


class ApiClient:
    """Async client for the job portal backend"""

    def __init__(
        self,
        store: IKeyValueStore,
        base_url: Optional[str] = None,
        fallback_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
    ):
        self.store = store
        self.base_url = (base_url or settings.NEXT_PUBLIC_API_URL).rstrip("/")
        self.fallback_url = (fallback_url or settings.FALLBACK_API_URL).rstrip("/")
        self.token: Optional[str] = None
        self._http = httpx.AsyncClient(
            transport=transport,
            timeout=timeout if timeout is not None else settings.HTTP_TIMEOUT_SECONDS,
        )

    @classmethod
    async def create(cls, store: IKeyValueStore, **kwargs: Any) -> "ApiClient":
        """Build a client and restore the stored token"""
        client = cls(store, **kwargs)
        await client.load_token()
        return client

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # ========================================
    # Token management
    # ========================================
    async def load_token(self) -> Optional[str]:
        self.token = await self.store.get(AUTH_TOKEN_KEY)
        return self.token

    async def set_token(self, token: str) -> None:
        self.token = token
        await self.store.set(AUTH_TOKEN_KEY, token)

    async def clear_token(self) -> None:
        self.token = None
        await self.store.delete(AUTH_TOKEN_KEY)

    # ========================================
    # Transport
    # ========================================
    async def request(
        self,
        endpoint: str,
        method: str = "GET",
        json: Optional[Any] = None,
        files: Optional[Dict[str, FilePart]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> ApiResponse:
        """Call the primary API, falling back to the secondary one on failure"""
        try:
            return await self._make_request(self.base_url + endpoint, method, json, files, headers)
        except ApiError as primary_error:
            logger.warning(f"Primary API failed ({primary_error}), trying fallback...")
            try:
                return await self._make_request(self.fallback_url + endpoint, method, json, files, headers)
            except ApiError as fallback_error:
                logger.error(f"Both primary and fallback APIs failed: {fallback_error}")
                raise primary_error

    async def _make_request(
        self,
        url: str,
        method: str,
        payload: Optional[Any],
        files: Optional[Dict[str, FilePart]],
        extra_headers: Optional[Dict[str, str]],
    ) -> ApiResponse:
        """Perform a single HTTP attempt"""
        headers = httpx.Headers(extra_headers or {})

        # Multipart bodies get their Content-Type (with boundary) from httpx
        if not files and "Content-Type" not in headers:
            headers["Content-Type"] = "application/json"

        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        else:
            logger.debug("No token available for API request")

        logger.debug(f"API Request: {method} {url} (token={'yes' if self.token else 'no'})")

        content = None
        if payload is not None and not files:
            content = json_dumps(payload)

        try:
            response = await self._http.request(
                method,
                url,
                headers=headers,
                content=content,
                files=files,
            )
        except httpx.HTTPError as e:
            logger.error(f"API request failed: {method} {url}: {e}")
            raise ApiConnectionError(str(e) or e.__class__.__name__) from e

        logger.debug(f"API Response: {response.status_code} {response.reason_phrase}")

        # Handle empty responses (e.g., 204 No Content)
        if response.headers.get("Content-Length") == "0" or not response.content:
            data: Any = {"success": response.is_success}
        else:
            try:
                data = response.json()
            except ValueError as e:
                if not response.is_success:
                    raise ApiError(
                        _error_message(None, response.status_code),
                        status_code=response.status_code,
                    ) from e
                raise ApiError(
                    f"Invalid JSON response from API (status: {response.status_code})",
                    status_code=response.status_code,
                ) from e

        if not response.is_success:
            logger.error(f"API Error Response: {response.status_code} {data}")
            raise ApiError(
                _error_message(data, response.status_code),
                status_code=response.status_code,
                payload=data,
            )

        return data

    # ========================================
    # Authentication
    # ========================================
    async def login(self, email: str, password: str, role: str) -> ApiResponse:
        return await self.request(
            "/auth/login", "POST", json={"email": email, "password": password, "role": role}
        )

    async def register(self, user_data: Dict[str, Any]) -> ApiResponse:
        return await self.request("/auth/register", "POST", json=user_data)

    async def logout(self) -> ApiResponse:
        return await self.request("/auth/logout", "POST")

    async def verify_email(self, email: str, code: str) -> ApiResponse:
        return await self.request("/auth/verify-email", "POST", json={"email": email, "code": code})

    async def resend_verification_code(self, email: str) -> ApiResponse:
        return await self.request("/auth/resend-verification", "POST", json={"email": email})

    async def forgot_password(self, email: str) -> ApiResponse:
        return await self.request("/auth/forgot-password", "POST", json={"email": email})

    async def reset_password(self, email: str, code: str, new_password: str) -> ApiResponse:
        return await self.request(
            "/auth/reset-password", "POST",
            json={"email": email, "code": code, "newPassword": new_password},
        )

    async def change_email(self, new_email: str, password: str) -> ApiResponse:
        return await self.request(
            "/auth/change-email", "POST", json={"newEmail": new_email, "password": password}
        )

    async def verify_email_change(self, email: str, code: str) -> ApiResponse:
        return await self.request(
            "/auth/verify-email-change", "POST", json={"email": email, "code": code}
        )

    # ========================================
    # Profile
    # ========================================
    async def get_profile(self) -> ApiResponse:
        return await self.request("/profile")

    async def update_profile(self, profile_data: Dict[str, Any]) -> ApiResponse:
        logger.debug(f"Updating profile fields: {sorted(profile_data)}")
        return await self.request("/profile", "PUT", json=profile_data)

    async def upload_profile_photo(self, path: str) -> ApiResponse:
        """Validate and upload a profile photo (multipart field 'photo')"""
        part = await _read_file_part(path)
        validate_profile_photo(part[0], len(part[1]), part[2])
        return await self.request("/profile/photo", "POST", files={"photo": part})

    # ========================================
    # CV Upload
    # ========================================
    async def upload_cv(self, path: str) -> ApiResponse:
        return await self.request("/cv/upload", "POST", files={"cv": await _read_file_part(path)})

    async def get_cv_uploads(self) -> ApiResponse:
        return await self.request("/cv/uploads")

    # ========================================
    # Jobs
    # ========================================
    async def get_jobs(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
        experience: Optional[str] = None,
        job_type: Optional[str] = None,
        work_mode: Optional[str] = None,
        location: Optional[str] = None,
        sort_by: Optional[str] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> ApiResponse:
        return await self.request(with_query("/jobs", {
            "search": search,
            "category": category,
            "experience": experience,
            "type": job_type,
            "workMode": work_mode,
            "location": location,
            "sortBy": sort_by,
            "page": page,
            "limit": limit,
        }))

    async def get_job(self, job_id: str) -> ApiResponse:
        return await self.request(f"/jobs/{job_id}")

    async def create_job(self, job_data: Dict[str, Any]) -> ApiResponse:
        return await self.request("/jobs", "POST", json=job_data)

    async def update_job(self, job_id: str, job_data: Dict[str, Any]) -> ApiResponse:
        logger.debug(f"Updating job {job_id}")
        return await self.request(f"/jobs/{job_id}", "PUT", json=job_data)

    async def delete_job(self, job_id: str) -> ApiResponse:
        return await self.request(f"/jobs/{job_id}", "DELETE")

    async def toggle_job_status(self, job_id: str, is_active: bool) -> ApiResponse:
        logger.debug(f"Toggling job {job_id} active={is_active}")
        return await self.request(f"/jobs/{job_id}/status", "PATCH", json={"isActive": is_active})

    # ========================================
    # Applications
    # ========================================
    async def apply_to_job(
        self,
        job_id: str,
        cover_letter: Optional[str] = None,
        portfolio_links: Optional[List[str]] = None,
        custom_answers: Optional[Any] = None,
    ) -> ApiResponse:
        body: Dict[str, Any] = {"jobId": job_id}
        if cover_letter is not None:
            body["coverLetter"] = cover_letter
        if portfolio_links is not None:
            body["portfolioLinks"] = portfolio_links
        if custom_answers is not None:
            body["customAnswers"] = custom_answers
        return await self.request("/applications", "POST", json=body)

    async def get_applications(
        self,
        job_id: Optional[str] = None,
        status: Optional[str] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> ApiResponse:
        return await self.request(with_query("/applications", {
            "jobId": job_id,
            "status": status,
            "page": page,
            "limit": limit,
        }))

    # ========================================
    # Saved Jobs
    # ========================================
    async def save_job(self, job_id: str) -> ApiResponse:
        return await self.request("/saved-jobs", "POST", json={"jobId": job_id})

    async def unsave_job(self, job_id: str) -> ApiResponse:
        return await self.request(f"/saved-jobs/{job_id}", "DELETE")

    async def get_saved_jobs(self) -> ApiResponse:
        return await self.request("/saved-jobs")

    # ========================================
    # Notifications
    # ========================================
    async def get_notifications(
        self,
        unread_only: Optional[bool] = None,
        type: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> ApiResponse:
        return await self.request(with_query("/notifications", {
            "unreadOnly": unread_only,
            "type": type,
            "limit": limit,
        }))

    async def mark_notifications_as_read(self, notification_ids: List[str]) -> ApiResponse:
        return await self.request(
            "/notifications", "PUT",
            json={"notificationIds": notification_ids, "markAsRead": True},
        )

    # ========================================
    # AI Features
    # ========================================
    async def get_job_matches(self) -> ApiResponse:
        return await self.request("/ai/job-matches")

    async def generate_profile_summary(self) -> ApiResponse:
        return await self.request("/ai/profile-summary", "POST")

    # ========================================
    # Analytics
    # ========================================
    async def get_profile_analytics(self) -> ApiResponse:
        return await self.request("/analytics/profile")

    async def get_job_analytics(self, job_id: str) -> ApiResponse:
        return await self.request(f"/analytics/jobs/{job_id}")

    # ========================================
    # Companies
    # ========================================
    async def get_companies(
        self,
        search: Optional[str] = None,
        industry: Optional[str] = None,
        size: Optional[str] = None,
        location: Optional[str] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> ApiResponse:
        return await self.request(with_query("/companies", {
            "search": search,
            "industry": industry,
            "size": size,
            "location": location,
            "page": page,
            "limit": limit,
        }))

    async def get_company(self, company_id: str) -> ApiResponse:
        return await self.request(f"/companies/{company_id}")

    # ========================================
    # Talent
    # ========================================
    async def get_talent(
        self,
        search: Optional[str] = None,
        skills: Optional[str] = None,
        experience: Optional[str] = None,
        location: Optional[str] = None,
        availability: Optional[str] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> ApiResponse:
        return await self.request(with_query("/talent", {
            "search": search,
            "skills": skills,
            "experience": experience,
            "location": location,
            "availability": availability,
            "page": page,
            "limit": limit,
        }))

    async def get_talent_profile(self, talent_id: str) -> ApiResponse:
        return await self.request(f"/talent/{talent_id}")


def json_dumps(payload: Any) -> bytes:
    return json.dumps(payload).encode("utf-8")


def _error_message(data: Any, status_code: int) -> str:
    if isinstance(data, dict):
        message = data.get("error") or data.get("message")
        if message:
            return str(message)
    return f"HTTP error! status: {status_code}"


async def _read_file_part(path: str) -> FilePart:
    file_path = Path(path)
    async with aiofiles.open(file_path, "rb") as f:
        content = await f.read()
    return file_path.name, content, guess_content_type(file_path.name)
