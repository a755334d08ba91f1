"""
Tests for the gateway routes
"""
import json

import httpx
import pytest

from infrastructure.security.jwt_service import SessionTokenService


def json_response(status_code, body):
    return lambda request: httpx.Response(status_code, json=body)


class TestCatchAllProxy:
    """Test ANY /api/{path} forwarding"""

    def test_post_forwards_body_and_authorization(self, gateway):
        """Test POST /api/jobs reaches the backend with body and token"""
        client, handler = gateway(json_response(201, {"success": True, "data": {"id": "j1"}}))

        response = client.post(
            "/api/jobs",
            json={"title": "Dev"},
            headers={"Authorization": "Bearer T"}
        )

        assert response.status_code == 201
        assert response.json() == {"success": True, "data": {"id": "j1"}}

        sent = handler.requests[0]
        assert sent.method == "POST"
        assert str(sent.url) == "http://backend.test/api/jobs"
        assert sent.headers["authorization"] == "Bearer T"
        assert sent.headers["content-type"] == "application/json"
        assert json.loads(sent.content) == {"title": "Dev"}

    def test_get_keeps_query_string(self, gateway):
        """Test query parameters are passed through unchanged"""
        client, handler = gateway(json_response(200, {"success": True, "data": []}))

        response = client.get("/api/jobs?page=2&limit=5")

        assert response.status_code == 200
        sent = handler.requests[0]
        assert str(sent.url) == "http://backend.test/api/jobs?page=2&limit=5"
        assert sent.content == b""
        assert "authorization" not in sent.headers

    def test_nested_path(self, gateway):
        """Test multi-segment paths are joined to the backend base"""
        client, handler = gateway(json_response(200, {"success": True}))

        client.patch("/api/jobs/j1/status", json={"isActive": False})

        assert str(handler.requests[0].url) == "http://backend.test/api/jobs/j1/status"
        assert handler.requests[0].method == "PATCH"

    def test_delete_drops_body(self, gateway):
        """Test DELETE never forwards a request body"""
        client, handler = gateway(json_response(200, {"success": True}))

        client.request("DELETE", "/api/saved-jobs/j1", content=b'{"x": 1}')

        assert handler.requests[0].method == "DELETE"
        assert handler.requests[0].content == b""

    def test_error_status_and_body_pass_through(self, gateway):
        """Test backend error responses are relayed verbatim"""
        client, _ = gateway(json_response(404, {"success": False, "error": "Job not found"}))

        response = client.get("/api/jobs/missing")

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Job not found"}

    def test_non_json_error_uses_reason_phrase(self, gateway):
        """Test a plain-text error body becomes {message: reason}"""
        client, _ = gateway(lambda request: httpx.Response(500, text="stack trace"))

        response = client.get("/api/jobs")

        assert response.status_code == 500
        assert response.json() == {"message": "Internal Server Error"}

    def test_empty_success_body(self, gateway):
        """Test an empty 2xx body becomes {success: true}"""
        client, _ = gateway(lambda request: httpx.Response(200))

        response = client.post("/api/notifications", json={})

        assert response.status_code == 200
        assert response.json() == {"success": True}

    def test_no_content_status(self, gateway):
        """Test 204 is relayed without a body"""
        client, _ = gateway(lambda request: httpx.Response(204))

        response = client.delete("/api/jobs/j1")

        assert response.status_code == 204
        assert response.content == b""

    def test_text_body_relayed(self, gateway):
        """Test non-JSON success bodies are relayed as text"""
        client, _ = gateway(lambda request: httpx.Response(200, text="pong"))

        response = client.get("/api/ping")

        assert response.status_code == 200
        assert response.text == "pong"

    def test_backend_unreachable(self, gateway):
        """Test network failures become a 500 envelope"""
        def refuse(request):
            raise httpx.ConnectError("Connection refused", request=request)

        client, _ = gateway(refuse)

        response = client.get("/api/jobs")

        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Connection refused"}

    def test_encoded_path_segments_stay_encoded(self, gateway):
        """Test percent-encoded ?, # and spaces are not decoded into the backend URL"""
        client, handler = gateway(json_response(200, {"success": True}))

        response = client.get("/api/jobs/a%3Fb%23c%20d")

        assert response.status_code == 200
        sent = handler.requests[0]
        assert sent.url.raw_path == b"/api/jobs/a%3Fb%23c%20d"
        assert sent.url.query == b""

    def test_non_compliant_json_body(self, gateway):
        """Test a backend body that cannot be re-rendered becomes a 500 envelope"""
        client, _ = gateway(lambda request: httpx.Response(
            200,
            content=b'{"score": NaN}',
            headers={"Content-Type": "application/json"}
        ))

        response = client.get("/api/ai/job-matches")

        assert response.status_code == 500
        assert response.json()["success"] is False


class TestAuthRoutes:
    """Test /api/auth/* routes"""

    def test_register_does_not_forward_authorization(self, gateway):
        """Test registration is sent without the caller's token"""
        client, handler = gateway(json_response(201, {"success": True, "data": {"token": "t"}}))

        response = client.post(
            "/api/auth/register",
            json={"email": "a@b.c", "password": "pw"},
            headers={"Authorization": "Bearer stale"}
        )

        assert response.status_code == 201
        sent = handler.requests[0]
        assert str(sent.url) == "http://backend.test/api/auth/register"
        assert "authorization" not in sent.headers
        assert json.loads(sent.content) == {"email": "a@b.c", "password": "pw"}

    def test_register_invalid_json(self, gateway):
        """Test unparsable registration bodies fail with 500 before forwarding"""
        client, handler = gateway(json_response(200, {"success": True}))

        response = client.post("/api/auth/register", content=b"not json")

        assert response.status_code == 500
        assert response.json()["success"] is False
        assert handler.requests == []

    def test_login_forwarded(self, gateway):
        """Test POST /api/auth/login is forwarded with its body"""
        client, handler = gateway(json_response(401, {"success": False, "error": "Invalid credentials"}))

        response = client.post("/api/auth/login", json={"email": "a@b.c", "password": "x"})

        assert response.status_code == 401
        assert response.json()["error"] == "Invalid credentials"
        assert str(handler.requests[0].url) == "http://backend.test/api/auth/login"

    def test_post_forwards_authorization(self, gateway):
        """Test POST /api/auth/* passes the caller's token through"""
        client, handler = gateway(json_response(200, {"success": True}))

        response = client.post(
            "/api/auth/logout",
            json={},
            headers={"Authorization": "Bearer T"}
        )

        assert response.status_code == 200
        sent = handler.requests[0]
        assert sent.method == "POST"
        assert str(sent.url) == "http://backend.test/api/auth/logout"
        assert sent.headers["authorization"] == "Bearer T"

    def test_get_requires_authorization(self, gateway):
        """Test GET /api/auth/* answers 401 locally without a token"""
        client, handler = gateway(json_response(200, {"success": True}))

        response = client.get("/api/auth/me")

        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Unauthorized"}
        assert handler.requests == []

    def test_get_with_authorization(self, gateway):
        """Test GET /api/auth/* forwards the token"""
        client, handler = gateway(json_response(200, {"success": True, "data": {"id": "u1"}}))

        response = client.get("/api/auth/me", headers={"Authorization": "Bearer T"})

        assert response.status_code == 200
        assert handler.requests[0].headers["authorization"] == "Bearer T"


class TestProfileRoutes:
    """Test /api/profile routes"""

    @pytest.mark.parametrize("method", ["GET", "PUT"])
    def test_requires_authorization(self, gateway, method):
        """Test profile routes reject requests without a token"""
        client, handler = gateway(json_response(200, {"success": True}))

        response = client.request(method, "/api/profile", json={"firstName": "A"})

        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Unauthorized"}
        assert handler.requests == []

    def test_get_profile(self, gateway):
        """Test GET /api/profile forwards the token to the backend profile"""
        client, handler = gateway(json_response(200, {"success": True, "data": {"id": "u1"}}))

        response = client.get("/api/profile", headers={"Authorization": "Bearer T"})

        assert response.status_code == 200
        assert response.json()["data"] == {"id": "u1"}
        sent = handler.requests[0]
        assert sent.method == "GET"
        assert str(sent.url) == "http://backend.test/api/profile"
        assert sent.headers["authorization"] == "Bearer T"

    def test_update_profile(self, gateway):
        """Test PUT /api/profile forwards JSON and token"""
        client, handler = gateway(json_response(200, {"success": True, "data": {"slug": "jane"}}))

        response = client.put(
            "/api/profile",
            json={"slug": "jane"},
            headers={"Authorization": "Bearer T"}
        )

        assert response.status_code == 200
        assert response.json()["data"]["slug"] == "jane"
        sent = handler.requests[0]
        assert sent.method == "PUT"
        assert str(sent.url) == "http://backend.test/api/profile"
        assert json.loads(sent.content) == {"slug": "jane"}


class TestLocalRoutes:
    """Test routes answered by the gateway itself"""

    def test_health(self, gateway):
        client, _ = gateway(json_response(200, {}))

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_session_from_bearer_token(self, gateway):
        """Test /session decodes a valid token"""
        client, _ = gateway(json_response(200, {}))
        token = SessionTokenService().encrypt({"userId": "u1", "role": "HRD"})

        response = client.get("/session", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["session"]["userId"] == "u1"

    def test_session_from_cookie(self, gateway):
        """Test /session falls back to the session cookie"""
        client, _ = gateway(json_response(200, {}))
        token = SessionTokenService().encrypt({"userId": "u2"})
        response = client.get("/session", headers={"Cookie": f"session={token}"})

        assert response.status_code == 200
        assert response.json()["session"]["userId"] == "u2"

    def test_session_without_token(self, gateway):
        client, _ = gateway(json_response(200, {}))

        response = client.get("/session")

        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Unauthorized"}
