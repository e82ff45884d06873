"""
Tests for gadgetsinc/main.py - application assembly, health and error handling.
"""
from unittest.mock import patch

import pytest
from httpx import ASGITransport, AsyncClient

from gadgetsinc.core.config import Settings
from gadgetsinc.core.exceptions import ConfigurationError
from gadgetsinc.core.version import APP_VERSION
from gadgetsinc.main import SERVICE_NAME, create_app


def _raising_client(app):
    """Client that returns 500 responses instead of re-raising app errors."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    return AsyncClient(transport=transport, base_url="http://test")


def _add_failing_route(app):
    @app.get("/boom")
    async def boom():
        raise RuntimeError("secret internals")


class TestHealthEndpoint:
    """Test application health check endpoint."""

    @pytest.mark.asyncio
    async def test_health_check(self, async_client):
        response = await async_client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == SERVICE_NAME
        assert data["version"].startswith(APP_VERSION)
        assert data["checks"] == {"tools": True}
        assert data["backend"] == "mock"

    @pytest.mark.asyncio
    async def test_root(self, async_client):
        response = await async_client.get("/")

        assert response.json() == {"message": "Welcome to the GadgetsInc Chat API"}


class TestGlobalExceptionHandler:
    """Test global exception handler."""

    @pytest.mark.asyncio
    async def test_development_includes_details(self, chat_app):
        _add_failing_route(chat_app)

        async with _raising_client(chat_app) as client:
            response = await client.get("/boom")

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "RuntimeError"
        assert data["detail"] == "secret internals"
        assert data["path"] == "/boom"

    @pytest.mark.asyncio
    async def test_production_hides_details(self, api_registry, orchestrator):
        settings = Settings(_env_file=None, ENVIRONMENT="production", DEBUG=False, CHAT_BACKEND="mock")
        app = create_app(settings, registry=api_registry, orchestrator=orchestrator)
        _add_failing_route(app)

        async with _raising_client(app) as client:
            response = await client.get("/boom")
            docs = await client.get("/docs")

        data = response.json()
        assert response.status_code == 500
        assert data["error"] == "Internal server error"
        assert "secret internals" not in data["detail"]
        assert data["detail"].startswith("An unexpected error occurred. Reference ID:")
        assert docs.status_code == 404


class TestCreateApp:
    """Test application assembly."""

    def test_services_on_app_state(self, chat_app, api_registry, orchestrator, test_settings):
        assert chat_app.state.tool_registry is api_registry
        assert chat_app.state.orchestrator is orchestrator
        assert chat_app.state.settings is test_settings

    def test_builds_mock_backend_from_settings(self, test_settings):
        app = create_app(test_settings)

        assert app.state.orchestrator.completion_service.backend_name == "mock"
        assert "get_product_info" in app.state.tool_registry

    def test_configuration_error_stops_startup(self, test_settings):
        with patch(
            "gadgetsinc.main.build_completion_service",
            side_effect=ConfigurationError("AZURE_OPENAI_API_KEY required for the azure_openai backend"),
        ):
            with pytest.raises(ConfigurationError):
                create_app(test_settings)

    def test_missing_azure_connection_stops_startup(self):
        settings = Settings(_env_file=None, CHAT_BACKEND="azure_openai", USE_MOCK_CHAT=False)

        with pytest.raises(ConfigurationError, match="azure_openai backend"):
            create_app(settings)

    @pytest.mark.asyncio
    async def test_cors_wildcard_without_credentials(self, async_client):
        response = await async_client.options(
            "/chat/simple",
            headers={"Origin": "http://example.com", "Access-Control-Request-Method": "POST"},
        )

        assert response.headers["access-control-allow-origin"] == "*"
        assert "access-control-allow-credentials" not in response.headers
