"""
Session Endpoint
GET /session - decoded session token of the caller
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends

from core.exceptions import AuthenticationException
from presentation.api.dependencies import get_session_user
from presentation.api.schemas.envelope import SessionResponse, UNAUTHORIZED_RESPONSES


router = APIRouter()


@router.get("", response_model=SessionResponse, responses=UNAUTHORIZED_RESPONSES)
async def read_session(
    session: Optional[Dict[str, Any]] = Depends(get_session_user)
) -> SessionResponse:
    """Return the caller's session claims from a Bearer token or the session cookie"""
    if session is None:
        raise AuthenticationException("Unauthorized")
    return SessionResponse(session=session)
