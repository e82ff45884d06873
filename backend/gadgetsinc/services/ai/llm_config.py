"""
Helpers for building the completion backend selected by configuration.
"""

import logging
from typing import Optional

from ollama import AsyncClient
from openai import AsyncAzureOpenAI

from gadgetsinc.core.config import Settings
from gadgetsinc.core.exceptions import ConfigurationError
from gadgetsinc.services.ai.completion_service import CompletionService
from gadgetsinc.services.ai.latency import LatencyPolicy
from gadgetsinc.services.ai.mock_completion_service import MockCompletionService
from gadgetsinc.services.ai.ollama_completion_service import OllamaCompletionService
from gadgetsinc.services.ai.openai_completion_service import AzureOpenAICompletionService
from gadgetsinc.services.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

SUPPORTED_BACKENDS = ("mock", "ollama", "azure_openai")


def model_for_backend(settings: Settings, backend: str) -> str:
    if backend == "azure_openai":
        return settings.AZURE_OPENAI_DEPLOYMENT
    if backend == "ollama":
        return settings.OLLAMA_MODEL
    return "mock"


def build_completion_service(
    settings: Settings,
    registry: Optional[ToolRegistry] = None
) -> CompletionService:
    """
    Build exactly one completion backend from settings.

    Raises:
        ConfigurationError: Unknown backend or missing connection info
    """
    backend = settings.effective_chat_backend
    if backend not in SUPPORTED_BACKENDS:
        raise ConfigurationError(
            f"Unknown chat backend {backend!r}. Expected one of: {', '.join(SUPPORTED_BACKENDS)}"
        )

    logger.info(f"Chat backend: {backend} (model={model_for_backend(settings, backend)})")

    if backend == "mock":
        latency = LatencyPolicy.from_milliseconds(
            settings.MOCK_CHUNK_DELAY_MS, settings.MOCK_RESPONSE_DELAY_MS
        )
        return MockCompletionService(registry=registry, latency=latency)

    if backend == "ollama":
        if not settings.OLLAMA_BASE_URL:
            raise ConfigurationError("OLLAMA_BASE_URL is required for the ollama backend")
        client = AsyncClient(host=settings.OLLAMA_BASE_URL, timeout=settings.LLM_REQUEST_TIMEOUT)
        return OllamaCompletionService(
            client=client,
            model=settings.OLLAMA_MODEL,
            registry=registry,
            temperature=settings.LLM_TEMPERATURE,
            max_tool_rounds=settings.LLM_MAX_TOOL_ROUNDS,
            request_timeout=settings.LLM_REQUEST_TIMEOUT,
        )

    missing = [
        name for name, value in (
            ("AZURE_OPENAI_API_KEY", settings.AZURE_OPENAI_API_KEY),
            ("AZURE_OPENAI_ENDPOINT", settings.AZURE_OPENAI_ENDPOINT),
        )
        if not value
    ]
    if missing:
        raise ConfigurationError(f"{' and '.join(missing)} required for the azure_openai backend")

    client = AsyncAzureOpenAI(
        api_key=settings.AZURE_OPENAI_API_KEY,
        azure_endpoint=settings.AZURE_OPENAI_ENDPOINT,
        api_version=settings.AZURE_OPENAI_API_VERSION,
        timeout=settings.LLM_REQUEST_TIMEOUT,
    )
    return AzureOpenAICompletionService(
        client=client,
        deployment=settings.AZURE_OPENAI_DEPLOYMENT,
        registry=registry,
        temperature=settings.LLM_TEMPERATURE,
        max_tool_rounds=settings.LLM_MAX_TOOL_ROUNDS,
        request_timeout=settings.LLM_REQUEST_TIMEOUT,
    )
