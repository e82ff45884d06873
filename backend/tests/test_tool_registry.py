"""
Tests for the tool registry and executor
"""

import pytest

from gadgetsinc.core.exceptions import ConfigurationError
from gadgetsinc.services.tools.executor import ToolExecutor
from gadgetsinc.services.tools.provider_adapter import (
    DEFAULT_CAPABILITIES,
    get_provider_capabilities,
    limit_tools,
)
from gadgetsinc.services.tools.registry import ToolRegistry
from gadgetsinc.services.tools.schema import ToolCategory, ToolDefinition, ToolSchema


def _definition(name: str, category: ToolCategory = ToolCategory.PRODUCT) -> ToolDefinition:
    return ToolDefinition(
        tool_schema=ToolSchema(
            name=name,
            description=f"{name} tool",
            parameters={
                "type": "object",
                "properties": {
                    "count": {"type": "integer", "description": "How many"},
                    "label": {"type": "string", "description": "Optional label"},
                },
                "required": ["count"],
            },
        ),
        category=category,
    )


@pytest.fixture
def registry():
    return ToolRegistry("test")


class TestToolRegistry:
    """Tests for ToolRegistry"""

    def test_register_and_lookup(self, registry):
        registry.register_tool(_definition("echo"), lambda count, label="": f"{count}{label}")

        assert "echo" in registry
        assert len(registry) == 1
        assert registry.get_tool("echo").name == "echo"
        assert registry.get_tool("missing") is None

    def test_duplicate_name_is_rejected(self, registry):
        registry.register_tool(_definition("echo"), lambda count: str(count))

        with pytest.raises(ConfigurationError, match="already registered"):
            registry.register_tool(_definition("echo"), lambda count: str(count))

    def test_decorator_registration(self, registry):
        @registry.register(_definition("twice"))
        def twice(count: int, label: str = "") -> str:
            return str(count * 2)

        assert twice(count=2) == "4"
        assert registry.get_tool("twice").handler is twice

    def test_openai_spec_format(self, registry):
        registry.register_tool(_definition("echo"), lambda count: str(count))

        spec = registry.get_openai_tools_spec()

        assert spec == [{
            "type": "function",
            "function": {
                "name": "echo",
                "description": "echo tool",
                "parameters": _definition("echo").tool_schema.parameters,
            },
        }]

    def test_describe_keeps_registration_and_parameter_order(self, registry):
        registry.register_tool(_definition("second"), lambda count: "")
        registry.register_tool(_definition("first"), lambda count: "")

        descriptors = registry.describe()

        assert [d.name for d in descriptors] == ["second", "first"]
        assert [(p.name, p.type, p.required) for p in descriptors[0].parameters] == [
            ("count", "integer", True),
            ("label", "string", False),
        ]
        assert descriptors[0].category == "product"

    def test_category_filter(self, shipping_registry):
        math_tools = shipping_registry.get_tools_by_category(ToolCategory.MATH)

        assert [t.name for t in math_tools] == ["add", "subtract", "multiply", "divide"]

    def test_toolset_contents(self, api_registry, catalog_registry, shipping_registry):
        assert [t.name for t in api_registry] == [
            "get_product_info", "calculate_shipping", "check_stock",
            "get_support_info", "track_order", "create_support_ticket",
        ]
        assert [t.name for t in catalog_registry] == ["get_product", "search_product", "search_tag"]
        assert len(shipping_registry) == 7


class TestToolExecutor:
    """Tests for ToolExecutor"""

    @pytest.fixture
    def executor(self, registry):
        registry.register_tool(_definition("echo"), lambda count, label="": f"{count}:{label}")

        def broken(count):
            raise RuntimeError("disk on fire")

        registry.register_tool(_definition("broken"), broken)
        return ToolExecutor(registry)

    def test_execute_success(self, executor):
        result = executor.execute("echo", {"count": 3, "label": "x"}, tool_call_id="call_1")

        assert result.success is True
        assert result.data == "3:x"
        assert result.tool_call_id == "call_1"
        assert result.to_message_content() == "3:x"

    def test_unknown_tool(self, executor):
        assert executor.invoke("nope", {}) == "Error: Unknown tool: nope"

    def test_missing_required_parameter(self, executor):
        assert executor.invoke("echo", {"label": "x"}) == "Error: Missing required parameter: count"

    def test_json_string_arguments(self, executor):
        assert executor.invoke("echo", '{"count": "7"}') == "7:"

    def test_invalid_json_arguments(self, executor):
        result = executor.execute("echo", "{not json")

        assert result.success is False
        assert result.error.startswith("Arguments are not valid JSON")

    def test_non_object_arguments(self, executor):
        assert executor.invoke("echo", "[1, 2]") == "Error: Arguments must be a JSON object"

    def test_unknown_parameters_are_dropped(self, executor):
        assert executor.invoke("echo", {"count": 1, "colour": "red"}) == "1:"

    def test_wrong_type(self, executor):
        assert executor.invoke("echo", {"count": "many"}) == "Error: Parameter count should be integer, got str"

    def test_whole_float_accepted_as_integer(self, executor):
        assert executor.invoke("echo", {"count": 3.0}) == "3:"
        assert executor.invoke("echo", '{"count": 4.0}') == "4:"

    def test_fractional_float_rejected_as_integer(self, executor):
        assert executor.invoke("echo", {"count": 2.5}) == "Error: Parameter count should be integer, got float"

    def test_handler_failure_becomes_error_result(self, executor):
        result = executor.execute("broken", {"count": 1})

        assert result.success is False
        assert result.to_message_content() == "Error: Tool 'broken' failed: disk on fire"


class TestProviderAdapter:
    """Tests for provider capabilities and tool limits"""

    def test_known_providers(self):
        assert get_provider_capabilities("azure_openai").native_function_calling is True
        assert get_provider_capabilities("Ollama").max_tools_per_request == 32
        assert get_provider_capabilities("mock").native_function_calling is False

    def test_unknown_provider_uses_default(self):
        assert get_provider_capabilities("something-else") == DEFAULT_CAPABILITIES

    def test_limit_tools(self, shipping_registry):
        specs = shipping_registry.get_openai_tools_spec()

        assert limit_tools("mock", specs) == []
        assert limit_tools("azure_openai", specs) == specs

    def test_limit_tools_truncates_to_backend_maximum(self, shipping_registry):
        specs = shipping_registry.get_openai_tools_spec() * 40

        assert len(limit_tools("ollama", specs)) == 32
        assert limit_tools("ollama", specs) == specs[:32]
