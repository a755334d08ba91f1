"""
Authentication Proxy Endpoints
POST /api/auth/register, POST|GET /api/auth/{endpoint}
"""
from typing import Optional

from fastapi import APIRouter, Depends, Header, Request, Response

from infrastructure.proxy.backend_proxy import BackendProxy
from presentation.api.container import get_backend_proxy
from presentation.api.dependencies import require_authorization
from presentation.api.schemas.envelope import (
    ApiEnvelope,
    PROXY_ERROR_RESPONSES,
    UNAUTHORIZED_RESPONSES,
)


router = APIRouter()


@router.post(
    "/register",
    responses={200: {"model": ApiEnvelope}, **PROXY_ERROR_RESPONSES},
)
async def register(
    request: Request,
    proxy: BackendProxy = Depends(get_backend_proxy)
) -> Response:
    """Create an account; the Authorization header is not forwarded"""
    label = "POST /api/auth/register"
    try:
        payload = await request.json()
    except ValueError as e:
        return proxy.failure(label, e)

    return await proxy.forward_json("POST", "auth/register", label, payload)


@router.post(
    "/{endpoint:path}",
    responses={200: {"model": ApiEnvelope}, **PROXY_ERROR_RESPONSES},
)
async def auth_post(
    endpoint: str,
    request: Request,
    authorization: Optional[str] = Header(None),
    proxy: BackendProxy = Depends(get_backend_proxy)
) -> Response:
    """Forward login, logout, verification and password flows"""
    label = "POST /api/auth/*"
    try:
        payload = await request.json()
    except ValueError as e:
        return proxy.failure(label, e)

    return await proxy.forward_json("POST", f"auth/{endpoint}", label, payload, authorization)


@router.get(
    "/{endpoint:path}",
    responses={200: {"model": ApiEnvelope}, **UNAUTHORIZED_RESPONSES, **PROXY_ERROR_RESPONSES},
)
async def auth_get(
    endpoint: str,
    authorization: str = Depends(require_authorization),
    proxy: BackendProxy = Depends(get_backend_proxy)
) -> Response:
    """Authenticated lookups such as the current user"""
    return await proxy.forward("GET", f"auth/{endpoint}", "GET /api/auth/*", authorization=authorization)
