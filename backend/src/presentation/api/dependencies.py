"""
FastAPI Dependencies
Authorization header checks and session lookup
"""
from typing import Any, Dict, Optional

from fastapi import Depends, Header, Request

from core.exceptions import AuthenticationException
from infrastructure.security.jwt_service import SessionTokenService
from .container import get_session_token_service


async def require_authorization(
    authorization: Optional[str] = Header(None)
) -> str:
    """
    Require an Authorization header; its value is forwarded, not verified

    Usage:
        @router.get("/protected")
        async def protected_route(authorization: str = Depends(require_authorization)):
            ...
    """
    if not authorization:
        raise AuthenticationException("Unauthorized")
    return authorization


async def get_session_user(
    request: Request,
    tokens: SessionTokenService = Depends(get_session_token_service)
) -> Optional[Dict[str, Any]]:
    """Decoded session payload, or None when there is no valid session"""
    return tokens.get_user_from_request(request)
