"""
Provider Adapter - Tool-calling capabilities of the completion backends

The mock backend calls tools itself by keyword matching; the real backends
let the model choose tools through native function calling.
"""

from dataclasses import dataclass
from typing import Any, Dict, List


@dataclass(frozen=True)
class ProviderCapabilities:
    """Whether a backend accepts tool specs, and how many per request"""
    native_function_calling: bool
    max_tools_per_request: int


PROVIDER_CAPABILITIES: Dict[str, ProviderCapabilities] = {
    "azure_openai": ProviderCapabilities(native_function_calling=True, max_tools_per_request=128),
    "ollama": ProviderCapabilities(native_function_calling=True, max_tools_per_request=32),
    # Tools are matched by keyword, never sent to a model
    "mock": ProviderCapabilities(native_function_calling=False, max_tools_per_request=0),
}

DEFAULT_CAPABILITIES = ProviderCapabilities(native_function_calling=False, max_tools_per_request=0)


def get_provider_capabilities(provider: str) -> ProviderCapabilities:
    """
    Get capabilities for a completion backend.

    Args:
        provider: Backend identifier ("mock", "ollama", "azure_openai")
    """
    return PROVIDER_CAPABILITIES.get(provider.lower(), DEFAULT_CAPABILITIES)


def limit_tools(provider: str, tools: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Trim a tool spec list to what the backend accepts in one request"""
    capabilities = get_provider_capabilities(provider)
    if not capabilities.native_function_calling:
        return []
    return tools[:capabilities.max_tools_per_request]
