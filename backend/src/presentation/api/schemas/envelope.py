"""
Response Envelope Schemas
Shapes shared with the backend API, used for OpenAPI documentation
"""
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict


class ErrorEnvelope(BaseModel):
    """Error body produced by the gateway itself"""

    success: bool = False
    message: str


class ApiEnvelope(BaseModel):
    """Backend response envelope; extra fields are passed through"""

    model_config = ConfigDict(extra="allow")

    success: bool
    data: Any = None
    message: str | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str


class SessionResponse(BaseModel):
    """Decoded session token claims"""

    model_config = ConfigDict(extra="allow")

    success: bool = True
    session: Dict[str, Any]


# Documented error responses for routes that require Authorization
UNAUTHORIZED_RESPONSES = {401: {"model": ErrorEnvelope, "description": "Missing Authorization header"}}
PROXY_ERROR_RESPONSES = {500: {"model": ErrorEnvelope, "description": "Backend unreachable or bad request body"}}
