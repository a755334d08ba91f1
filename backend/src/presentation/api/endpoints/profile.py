"""
Profile Proxy Endpoints
GET|PUT /api/profile, both requiring an Authorization header
"""
from fastapi import APIRouter, Depends, Request, Response

from infrastructure.proxy.backend_proxy import BackendProxy
from presentation.api.container import get_backend_proxy
from presentation.api.dependencies import require_authorization
from presentation.api.schemas.envelope import (
    ApiEnvelope,
    PROXY_ERROR_RESPONSES,
    UNAUTHORIZED_RESPONSES,
)


router = APIRouter()

PROFILE_RESPONSES = {200: {"model": ApiEnvelope}, **UNAUTHORIZED_RESPONSES, **PROXY_ERROR_RESPONSES}


@router.get("", responses=PROFILE_RESPONSES)
async def get_profile(
    authorization: str = Depends(require_authorization),
    proxy: BackendProxy = Depends(get_backend_proxy)
) -> Response:
    return await proxy.forward("GET", "profile", "GET /api/profile", authorization=authorization)


@router.put("", responses=PROFILE_RESPONSES)
async def update_profile(
    request: Request,
    authorization: str = Depends(require_authorization),
    proxy: BackendProxy = Depends(get_backend_proxy)
) -> Response:
    label = "PUT /api/profile"
    try:
        payload = await request.json()
    except ValueError as e:
        return proxy.failure(label, e)

    return await proxy.forward_json("PUT", "profile", label, payload, authorization)
