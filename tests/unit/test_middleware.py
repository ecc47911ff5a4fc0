"""Tests for CORS and security headers middleware."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from gaia.api.middleware import SecurityHeadersMiddleware, setup_cors
from gaia.core.config import Settings


def _create_test_app() -> FastAPI:
    """Create a minimal FastAPI app for middleware testing."""
    app = FastAPI()

    @app.get("/test")
    async def test_route() -> dict:
        return {"ok": True}

    return app


class TestSecurityHeadersMiddleware:
    """Tests for SecurityHeadersMiddleware."""

    @pytest.fixture
    def client(self) -> TestClient:
        app = _create_test_app()
        app.add_middleware(SecurityHeadersMiddleware)
        return TestClient(app)

    def test_x_content_type_options(self, client: TestClient) -> None:
        response = client.get("/test")
        assert response.headers["X-Content-Type-Options"] == "nosniff"

    def test_x_frame_options(self, client: TestClient) -> None:
        response = client.get("/test")
        assert response.headers["X-Frame-Options"] == "DENY"

    def test_strict_transport_security(self, client: TestClient) -> None:
        response = client.get("/test")
        assert "max-age=31536000" in response.headers["Strict-Transport-Security"]
        assert "includeSubDomains" in response.headers["Strict-Transport-Security"]

    def test_headers_on_not_found(self, client: TestClient) -> None:
        response = client.get("/missing")
        assert response.status_code == 404
        assert response.headers["X-Content-Type-Options"] == "nosniff"


class TestCors:
    """Tests for setup_cors."""

    def _client(self, cors_origins: str) -> TestClient:
        app = _create_test_app()
        settings = Settings(
            database_url="sqlite+aiosqlite:///:memory:",
            radar_api_key="k",
            cors_origins=cors_origins,
            _env_file=None,  # type: ignore[call-arg]
        )
        setup_cors(app, settings)
        return TestClient(app)

    def test_allowed_origin_is_echoed(self) -> None:
        client = self._client("http://localhost:3000")
        response = client.get("/test", headers={"Origin": "http://localhost:3000"})
        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"

    def test_unlisted_origin_gets_no_header(self) -> None:
        client = self._client("http://localhost:3000")
        response = client.get("/test", headers={"Origin": "http://evil.example"})
        assert "access-control-allow-origin" not in response.headers

    def test_no_origins_configured(self) -> None:
        client = self._client("")
        response = client.get("/test", headers={"Origin": "http://localhost:3000"})
        assert "access-control-allow-origin" not in response.headers
