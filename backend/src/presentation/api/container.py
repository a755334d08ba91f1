"""
Dependency Injection Container
Manages service instances used by the gateway
"""
import httpx
from fastapi import Depends

from core.config import settings
from core.http_client import get_http_client
from infrastructure.proxy.backend_proxy import BackendProxy
from infrastructure.security.jwt_service import SessionTokenService


# Singleton instances
_session_token_service: SessionTokenService | None = None


def get_session_token_service() -> SessionTokenService:
    """Get session token service instance (singleton)"""
    global _session_token_service
    if _session_token_service is None:
        _session_token_service = SessionTokenService()
    return _session_token_service


def get_backend_proxy(
    client: httpx.AsyncClient = Depends(get_http_client)
) -> BackendProxy:
    """Get backend proxy bound to the shared HTTP client (per-request)"""
    return BackendProxy(client, settings.BACKEND_API_URL)
