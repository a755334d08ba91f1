"""
Shared test fixtures
"""
import os

# Settings are read at import time
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("BACKEND_API_URL", "http://backend.test/api")
os.environ.setdefault("JWT_SECRET", "test-secret")

import httpx
import pytest
from fastapi.testclient import TestClient

from application.services.api_client import ApiClient
from infrastructure.proxy.backend_proxy import BackendProxy
from infrastructure.storage import MemoryKeyValueStore
from main import app
from presentation.api.container import get_backend_proxy


PRIMARY_URL = "http://primary.test/api"
FALLBACK_URL = "http://fallback.test/api"
BACKEND_URL = "http://backend.test/api"


class RecordingHandler:
    """MockTransport handler that records requests and answers from a callable"""

    def __init__(self, respond):
        self.respond = respond
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.respond(request)


@pytest.fixture
def memory_store():
    return MemoryKeyValueStore()


@pytest.fixture
def make_api_client(memory_store):
    """Build an ApiClient whose primary and fallback calls go through `respond`"""
    def factory(respond, store=None):
        handler = RecordingHandler(respond)
        client = ApiClient(
            store or memory_store,
            base_url=PRIMARY_URL,
            fallback_url=FALLBACK_URL,
            transport=httpx.MockTransport(handler),
        )
        return client, handler

    return factory


@pytest.fixture
def gateway():
    """TestClient whose backend calls go through `respond`"""
    def factory(respond):
        handler = RecordingHandler(respond)
        backend = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        app.dependency_overrides[get_backend_proxy] = lambda: BackendProxy(backend, BACKEND_URL)
        return TestClient(app, raise_server_exceptions=False), handler

    yield factory
    app.dependency_overrides.clear()
