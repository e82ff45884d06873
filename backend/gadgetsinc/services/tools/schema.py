"""
Tool Definition Schema - OpenAI Function Calling Format

Defines Pydantic models for tool definitions that are compatible with
OpenAI's function calling API format, plus the descriptor shape published
to external tool-invocation clients.
"""

import json
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ToolCategory(str, Enum):
    """Categories of tools for organization"""
    PRODUCT = "product"
    SUPPORT = "support"
    CATALOG = "catalog"
    SHIPPING = "shipping"
    MATH = "math"


class ToolParameter(BaseModel):
    """One entry of a tool's ordered parameter list"""
    name: str
    type: Literal["string", "number", "integer", "boolean", "array", "object"]
    description: str = ""
    required: bool = True


class ToolSchema(BaseModel):
    """
    OpenAI-compatible function/tool definition.

    This schema follows the OpenAI function calling format:
    https://platform.openai.com/docs/guides/function-calling

    Parameter order in ``parameters["properties"]`` is significant: it is the
    order in which parameters are published to clients.
    """
    name: str = Field(..., description="Unique tool identifier (snake_case)")
    description: str = Field(..., description="Clear description of what the tool does and when to use it")
    parameters: Dict[str, Any] = Field(
        default_factory=lambda: {"type": "object", "properties": {}, "required": []},
        description="JSON Schema for the tool's parameters"
    )

    def to_openai_format(self) -> Dict[str, Any]:
        """Convert to OpenAI tools API format"""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters
            }
        }

    def parameter_list(self) -> List[ToolParameter]:
        """Ordered parameter list with semantic types"""
        properties = self.parameters.get("properties", {})
        required = set(self.parameters.get("required", []))
        return [
            ToolParameter(
                name=param_name,
                type=spec.get("type", "string"),
                description=spec.get("description", ""),
                required=param_name in required,
            )
            for param_name, spec in properties.items()
        ]


class ToolDefinition(BaseModel):
    """
    Full tool registration metadata.

    This extends ToolSchema with additional metadata for the registry.
    """
    model_config = ConfigDict(use_enum_values=True)

    # Named tool_schema to avoid shadowing BaseModel.schema
    tool_schema: ToolSchema
    category: ToolCategory = ToolCategory.PRODUCT


class ToolDescriptor(BaseModel):
    """What an external caller needs to build a valid call without source access"""
    name: str
    description: str
    parameters: List[ToolParameter]
    input_schema: Dict[str, Any]
    category: str


class ToolCall(BaseModel):
    """Represents a single tool call requested by the LLM"""
    id: str = Field(..., description="Unique identifier for this tool call")
    name: str = Field(..., description="Name of the tool to call")
    arguments: Union[Dict[str, Any], str] = Field(
        default_factory=dict,
        description="Arguments to pass to the tool, as a mapping or a raw JSON string"
    )


class ToolResult(BaseModel):
    """Result from tool execution"""
    tool_call_id: str
    tool_name: str
    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    execution_time_ms: int = 0

    def to_message_content(self) -> str:
        """Convert to the text handed back to the LLM or the external caller"""
        if self.success:
            if isinstance(self.data, (dict, list)):
                return json.dumps(self.data, indent=2, default=str)
            return str(self.data)
        return f"Error: {self.error}"
