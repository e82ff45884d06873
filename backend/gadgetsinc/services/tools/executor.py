"""
Tool Executor - Safe execution of tools with validation

This module provides the single entry point for running a registered tool:
- Argument parsing and validation against the tool's JSON schema
- Error handling: bad input never aborts the surrounding request, it is
  returned as an inline "Error: ..." result
- Timing and logging
"""

import json
import logging
import time
from typing import Any, Dict, Optional, Union

from gadgetsinc.core.exceptions import ToolInputError
from gadgetsinc.services.tools.registry import ToolRegistry
from gadgetsinc.services.tools.schema import ToolResult

logger = logging.getLogger(__name__)


class ToolValidationError(ToolInputError):
    """Raised when tool arguments do not match the tool's schema"""
    pass


class ToolExecutor:
    """
    Safe tool execution against one registry.

    This class wraps tool execution to ensure:
    1. Unknown tools and invalid arguments produce error results
    2. ToolInputError raised by a tool becomes an error result
    3. Any other tool failure is logged and becomes an error result
    """

    _TYPE_MAP = {
        "string": str,
        "number": (int, float),
        "integer": int,
        "boolean": bool,
        "array": list,
        "object": dict,
    }

    def __init__(self, registry: ToolRegistry):
        self.registry = registry

    def invoke(self, tool_name: str, arguments: Union[Dict[str, Any], str, None] = None) -> str:
        """
        Run a tool and return its text result.

        Always returns text; failures are rendered as "Error: <message>".
        """
        return self.execute(tool_name, arguments).to_message_content()

    def execute(
        self,
        tool_name: str,
        arguments: Union[Dict[str, Any], str, None] = None,
        tool_call_id: Optional[str] = None,
    ) -> ToolResult:
        """
        Execute a tool with the given arguments.

        Args:
            tool_name: Exact name of the tool to execute
            arguments: Argument mapping, or a JSON object string as sent by LLMs
            tool_call_id: Identifier of the LLM tool call, echoed in the result

        Returns:
            ToolResult with success status and data or error
        """
        start_time = time.perf_counter()
        call_id = tool_call_id or f"call_{tool_name}"

        registered_tool = self.registry.get_tool(tool_name)
        if not registered_tool:
            return ToolResult(
                tool_call_id=call_id,
                tool_name=tool_name,
                success=False,
                error=f"Unknown tool: {tool_name}"
            )

        try:
            parsed = self._parse_arguments(arguments)
            validated = self._validate_arguments(
                tool_name, parsed, registered_tool.definition.tool_schema.parameters
            )
            data = registered_tool.handler(**validated)
        except ToolInputError as e:
            logger.info(f"Tool {tool_name} rejected input: {e}")
            return ToolResult(
                tool_call_id=call_id,
                tool_name=tool_name,
                success=False,
                error=str(e),
                execution_time_ms=self._elapsed_ms(start_time)
            )
        except Exception as e:
            logger.exception(f"Tool {tool_name} failed: {e}")
            return ToolResult(
                tool_call_id=call_id,
                tool_name=tool_name,
                success=False,
                error=f"Tool '{tool_name}' failed: {e}",
                execution_time_ms=self._elapsed_ms(start_time)
            )

        execution_time_ms = self._elapsed_ms(start_time)
        logger.info(f"Tool {tool_name} executed in {execution_time_ms}ms")

        return ToolResult(
            tool_call_id=call_id,
            tool_name=tool_name,
            success=True,
            data=data,
            execution_time_ms=execution_time_ms
        )

    @staticmethod
    def _elapsed_ms(start_time: float) -> int:
        return int((time.perf_counter() - start_time) * 1000)

    def _parse_arguments(self, arguments: Union[Dict[str, Any], str, None]) -> Dict[str, Any]:
        if arguments is None or arguments == "":
            return {}
        if isinstance(arguments, str):
            try:
                arguments = json.loads(arguments)
            except json.JSONDecodeError as e:
                raise ToolValidationError(f"Arguments are not valid JSON: {e.msg}")
        if not isinstance(arguments, dict):
            raise ToolValidationError("Arguments must be a JSON object")
        return arguments

    def _validate_arguments(
        self,
        tool_name: str,
        arguments: Dict[str, Any],
        schema: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Validate tool arguments against the schema.

        Numeric strings are coerced for integer/number parameters, since
        local models often quote numbers, and whole floats such as 3.0 are
        accepted as integers. Unknown parameters are dropped.

        Raises ToolValidationError if validation fails.
        """
        properties = schema.get("properties", {})
        required = schema.get("required", [])

        for param in required:
            if param not in arguments:
                raise ToolValidationError(f"Missing required parameter: {param}")

        validated: Dict[str, Any] = {}
        for param_name, param_value in arguments.items():
            if param_name not in properties:
                logger.warning(f"Unknown parameter {param_name} for tool {tool_name}")
                continue

            expected_type = properties[param_name].get("type")
            if expected_type:
                param_value = self._coerce(param_value, expected_type)
                if not self._check_type(param_value, expected_type):
                    raise ToolValidationError(
                        f"Parameter {param_name} should be {expected_type}, got {type(param_value).__name__}"
                    )
            validated[param_name] = param_value

        return validated

    def _coerce(self, value: Any, expected: str) -> Any:
        if expected == "integer" and isinstance(value, float) and value.is_integer():
            return int(value)
        if not isinstance(value, str):
            return value
        try:
            if expected == "integer":
                return int(value.strip())
            if expected == "number":
                return float(value.strip())
        except ValueError:
            return value
        return value

    def _check_type(self, value: Any, expected: str) -> bool:
        """Check if value matches expected JSON Schema type"""
        expected_types = self._TYPE_MAP.get(expected)
        if expected_types is None:
            return True  # Unknown type, allow
        if isinstance(value, bool) and expected in ("integer", "number"):
            return False
        return isinstance(value, expected_types)
