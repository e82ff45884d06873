"""
Shared test fixtures and configuration for the GadgetsInc backend tests.
"""
import os
from datetime import datetime

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Set test environment before importing app modules
os.environ["ENVIRONMENT"] = "development"
os.environ["DEBUG"] = "true"
os.environ["CHAT_BACKEND"] = "mock"
os.environ["MOCK_CHUNK_DELAY_MS"] = "0"
os.environ["MOCK_RESPONSE_DELAY_MS"] = "0"

from gadgetsinc.core.config import Settings  # noqa: E402
from gadgetsinc.services.ai.latency import NO_DELAY  # noqa: E402
from gadgetsinc.services.ai.mock_completion_service import MockCompletionService  # noqa: E402
from gadgetsinc.services.chat_orchestrator import ChatOrchestrator  # noqa: E402
from gadgetsinc.services.data.catalog import build_default_catalog  # noqa: E402
from gadgetsinc.services.data.shipping import ShippingDirectory  # noqa: E402
from gadgetsinc.services.tools.executor import ToolExecutor  # noqa: E402
from gadgetsinc.services.tools.toolsets import (  # noqa: E402
    build_api_registry,
    build_catalog_registry,
    build_shipping_registry,
)

FIXED_NOW = datetime(2026, 3, 14, 9, 30)


@pytest.fixture
def fixed_clock():
    """Clock pinned to FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def catalog():
    return build_default_catalog()


@pytest.fixture
def shipping_directory(fixed_clock):
    return ShippingDirectory(clock=fixed_clock)


@pytest.fixture
def api_registry(catalog, shipping_directory):
    return build_api_registry(catalog, shipping_directory)


@pytest.fixture
def catalog_registry(catalog, fixed_clock):
    return build_catalog_registry(catalog, clock=fixed_clock)


@pytest.fixture
def shipping_registry(shipping_directory):
    return build_shipping_registry(shipping_directory)


@pytest.fixture
def api_executor(api_registry):
    return ToolExecutor(api_registry)


@pytest.fixture
def mock_completion(api_registry):
    """Mock backend without simulated latency."""
    return MockCompletionService(registry=api_registry, latency=NO_DELAY)


@pytest.fixture
def test_settings():
    """Settings for the mock backend, ignoring any local .env file."""
    return Settings(
        _env_file=None,
        ENVIRONMENT="development",
        DEBUG=True,
        CHAT_BACKEND="mock",
        MOCK_CHUNK_DELAY_MS=0,
        MOCK_RESPONSE_DELAY_MS=0,
    )


@pytest.fixture
def orchestrator(mock_completion, api_registry, test_settings):
    return ChatOrchestrator(
        completion_service=mock_completion,
        system_prompt=test_settings.CHAT_SYSTEM_PROMPT,
        simple_system_prompt=test_settings.SIMPLE_CHAT_SYSTEM_PROMPT,
        registry=api_registry,
    )


@pytest.fixture
def chat_app(test_settings, api_registry, orchestrator):
    """Chat API application wired to the mock backend."""
    from gadgetsinc.main import create_app

    return create_app(test_settings, registry=api_registry, orchestrator=orchestrator)


@pytest_asyncio.fixture
async def async_client(chat_app):
    """Async HTTP client bound to the chat API application."""
    transport = ASGITransport(app=chat_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
