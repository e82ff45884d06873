"""
Tool Calling System for the GadgetsInc chat assistant

Main components:
- schema.py: Pydantic models for tool definitions (OpenAI format)
- registry.py: Name-keyed tool registry, one per process
- executor.py: Validated tool execution with inline error results
- toolsets.py: The registries of the API service and the tool servers
- provider_adapter.py: Tool-calling capabilities per completion backend
"""

from gadgetsinc.services.tools.schema import ToolSchema, ToolDefinition, ToolParameter, ToolDescriptor
from gadgetsinc.services.tools.registry import ToolRegistry
from gadgetsinc.services.tools.executor import ToolExecutor
from gadgetsinc.services.tools.provider_adapter import get_provider_capabilities, ProviderCapabilities
from gadgetsinc.services.tools.toolsets import build_api_registry, build_catalog_registry, build_shipping_registry

__all__ = [
    "ToolSchema",
    "ToolDefinition",
    "ToolParameter",
    "ToolDescriptor",
    "ToolRegistry",
    "ToolExecutor",
    "get_provider_capabilities",
    "ProviderCapabilities",
    "build_api_registry",
    "build_catalog_registry",
    "build_shipping_registry",
]
