"""
Shared Outbound HTTP Client
One httpx.AsyncClient per process, opened and closed by the app lifespan
"""
from typing import Optional

import httpx

from .config import settings


_client: Optional[httpx.AsyncClient] = None


async def init_http_client(transport: Optional[httpx.AsyncBaseTransport] = None) -> httpx.AsyncClient:
    """Create the shared client (idempotent)"""
    global _client
    if _client is None:
        _client = httpx.AsyncClient(
            timeout=settings.HTTP_TIMEOUT_SECONDS,
            transport=transport,
        )
    return _client


async def close_http_client():
    """Close pooled connections"""
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None


def get_http_client() -> httpx.AsyncClient:
    """
    FastAPI dependency for the shared client

    Usage:
        @router.get("/things")
        async def things(client: httpx.AsyncClient = Depends(get_http_client)):
            ...
    """
    if _client is None:
        raise RuntimeError("HTTP client not initialized; is the app lifespan running?")
    return _client
