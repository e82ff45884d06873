"""
Tool Registry - Registration of the tools one process exposes

A registry is filled once while the application is assembled and is only
read afterwards. It is an ordinary object handed to whoever needs it
(completion services, executors, tool servers), not a global.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional

from gadgetsinc.core.exceptions import ConfigurationError
from gadgetsinc.services.tools.schema import ToolCategory, ToolDefinition, ToolDescriptor

logger = logging.getLogger(__name__)

ToolHandler = Callable[..., str]


@dataclass(frozen=True)
class RegisteredTool:
    """A tool that has been registered with the registry"""
    definition: ToolDefinition
    handler: ToolHandler

    @property
    def name(self) -> str:
        return self.definition.tool_schema.name


class ToolRegistry:
    """
    Name-keyed collection of tools.

    Usage:
        registry = ToolRegistry("catalog")

        # Register a tool
        @registry.register(definition)
        def get_product(product_no: int) -> str:
            ...

        # Or programmatically
        registry.register_tool(definition, handler)

        # OpenAI function-calling specs for a completion backend
        specs = registry.get_openai_tools_spec()

    Registering two tools with the same name raises ConfigurationError.
    """

    def __init__(self, name: str = "default"):
        self.name = name
        self._tools: Dict[str, RegisteredTool] = {}

    def register(self, definition: ToolDefinition) -> Callable[[ToolHandler], ToolHandler]:
        """
        Decorator to register a tool handler.

        Usage:
            @registry.register(my_tool_definition)
            def my_tool(**kwargs) -> str:
                ...
        """
        def decorator(func: ToolHandler) -> ToolHandler:
            self.register_tool(definition, func)
            return func
        return decorator

    def register_tool(self, definition: ToolDefinition, handler: ToolHandler) -> None:
        """
        Programmatic registration of a tool.

        Args:
            definition: The tool definition
            handler: Synchronous function returning the tool's text result

        Raises:
            ConfigurationError: If a tool with the same name already exists
        """
        name = definition.tool_schema.name
        if name in self._tools:
            raise ConfigurationError(
                f"Tool '{name}' is already registered in registry '{self.name}'"
            )
        self._tools[name] = RegisteredTool(definition=definition, handler=handler)
        logger.debug(f"Registered tool: {name} (registry={self.name})")

    def get_tool(self, name: str) -> Optional[RegisteredTool]:
        """Get a registered tool by exact name"""
        return self._tools.get(name)

    def get_all_tools(self) -> List[RegisteredTool]:
        """Get all registered tools, in registration order"""
        return list(self._tools.values())

    def get_tools_by_category(self, category: ToolCategory) -> List[RegisteredTool]:
        """Get all tools in a specific category"""
        return [
            tool for tool in self._tools.values()
            if tool.definition.category == category.value
        ]

    def get_openai_tools_spec(self) -> List[Dict[str, Any]]:
        """
        Get all tools in OpenAI function calling format.

        Returns a list suitable for passing as the `tools` parameter of
        OpenAI-compatible chat APIs (Azure OpenAI, Ollama).
        """
        return [
            tool.definition.tool_schema.to_openai_format()
            for tool in self._tools.values()
        ]

    def describe(self) -> List[ToolDescriptor]:
        """Descriptors for every tool, for external tool-invocation clients"""
        return [
            ToolDescriptor(
                name=tool.name,
                description=tool.definition.tool_schema.description,
                parameters=tool.definition.tool_schema.parameter_list(),
                input_schema=tool.definition.tool_schema.parameters,
                category=tool.definition.category,
            )
            for tool in self._tools.values()
        ]

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[RegisteredTool]:
        return iter(list(self._tools.values()))
