"""
Shipping Tools - Shipment, package and search lookups plus basic arithmetic

Exposed by the shipping tool server. The arithmetic tools let a model do
cost sums without guessing.
"""

import logging
from functools import partial

from gadgetsinc.core.exceptions import ToolInputError
from gadgetsinc.services.data.shipping import ShippingDirectory
from gadgetsinc.services.tools.registry import ToolRegistry
from gadgetsinc.services.tools.schema import ToolCategory, ToolDefinition, ToolSchema

logger = logging.getLogger(__name__)


# =============================================================================
# Tool Definitions
# =============================================================================

GET_SHIPPING_DEF = ToolDefinition(
    tool_schema=ToolSchema(
        name="get_shipping",
        description="Get shipping information by shipping ID. Returns detailed shipping status, tracking information, and delivery details.",
        parameters={
            "type": "object",
            "properties": {
                "shipping_id": {
                    "type": "integer",
                    "description": "Numeric shipping ID"
                }
            },
            "required": ["shipping_id"]
        }
    ),
    category=ToolCategory.SHIPPING
)

GET_PACKAGE_DEF = ToolDefinition(
    tool_schema=ToolSchema(
        name="get_package",
        description="Get package information by package ID. Returns package details including contents, weight, dimensions, and current location.",
        parameters={
            "type": "object",
            "properties": {
                "package_id": {
                    "type": "string",
                    "description": "Package ID, e.g. 'PKG123456'"
                }
            },
            "required": ["package_id"]
        }
    ),
    category=ToolCategory.SHIPPING
)

SEARCH_SHIPMENTS_DEF = ToolDefinition(
    tool_schema=ToolSchema(
        name="search_shipments",
        description="Search shipping and package records by search term. Returns matching shipments and packages based on tracking numbers, package IDs, destinations, or other criteria.",
        parameters={
            "type": "object",
            "properties": {
                "search_term": {
                    "type": "string",
                    "description": "Tracking number, package ID, destination or other text"
                }
            },
            "required": ["search_term"]
        }
    ),
    category=ToolCategory.SHIPPING
)


def _math_definition(name: str, description: str) -> ToolDefinition:
    return ToolDefinition(
        tool_schema=ToolSchema(
            name=name,
            description=description,
            parameters={
                "type": "object",
                "properties": {
                    "a": {"type": "number", "description": "First operand"},
                    "b": {"type": "number", "description": "Second operand"}
                },
                "required": ["a", "b"]
            }
        ),
        category=ToolCategory.MATH
    )


ADD_DEF = _math_definition("add", "Addition of 2 numbers. Accepts decimal and natural numbers. Returns the sum.")
SUBTRACT_DEF = _math_definition("subtract", "Subtraction of 2 numbers. Accepts decimal and natural numbers. Returns a minus b.")
MULTIPLY_DEF = _math_definition("multiply", "Multiplication of 2 numbers. Accepts decimal and natural numbers. Returns the product.")
DIVIDE_DEF = _math_definition("divide", "Division of 2 numbers. Accepts decimal and natural numbers. Returns a divided by b.")


# =============================================================================
# Tool Implementations
# =============================================================================

def get_shipping(shipping: ShippingDirectory, shipping_id: int) -> str:
    if shipping_id <= 0:
        raise ToolInputError("Shipping ID must be a positive integer.")

    record = shipping.shipping(shipping_id)
    return "\n".join([
        f"Shipping ID: {record.shipping_id}",
        f"Status: {record.status}",
        f"Carrier: {record.carrier}",
        f"Tracking Number: {record.tracking_number}",
        f"Origin: {record.origin}",
        f"Destination: {record.destination}",
        f"Shipped Date: {record.shipped_date:%Y-%m-%d}",
        f"Expected Delivery: {record.expected_delivery:%Y-%m-%d}",
        f"Last Updated: {shipping.now():%Y-%m-%d %H:%M}",
    ])


def get_package(shipping: ShippingDirectory, package_id: str) -> str:
    if not package_id or not package_id.strip():
        raise ToolInputError("Package ID cannot be empty.")

    record = shipping.package(package_id)
    return "\n".join([
        f"Package ID: {record.package_id}",
        f"Package Type: {record.package_type}",
        f"Weight: {record.weight_lbs} lbs",
        f"Dimensions: {record.length_in}\" x {record.width_in}\" x {record.height_in}\"",
        f"Current Location: {record.current_location}",
        f"Insurance Value: ${record.insurance_value}",
        f"Fragile: {'Yes' if record.fragile else 'No'}",
        f"Last Scanned: {record.last_scanned:%Y-%m-%d %H:%M}",
    ])


def search_shipments(shipping: ShippingDirectory, search_term: str) -> str:
    if not search_term or not search_term.strip():
        raise ToolInputError("Search term cannot be empty.")

    lines = shipping.search(search_term)
    numbered = [f"{i}. {line}" for i, line in enumerate(lines, start=1)]
    return (
        f"Search results for '{search_term}':\n\n"
        + "\n".join(numbered)
        + f"\n\nFound {len(lines)} result(s)"
    )


def format_number(value: float) -> str:
    """Render integral results without a trailing '.0'"""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def add(a: float, b: float) -> str:
    return format_number(a + b)


def subtract(a: float, b: float) -> str:
    return format_number(a - b)


def multiply(a: float, b: float) -> str:
    return format_number(a * b)


def divide(a: float, b: float) -> str:
    if b == 0:
        raise ToolInputError("Cannot divide by zero.")
    return format_number(a / b)


def register_shipping_tools(registry: ToolRegistry, shipping: ShippingDirectory) -> None:
    """Register the shipping lookup tools"""
    registry.register_tool(GET_SHIPPING_DEF, partial(get_shipping, shipping))
    registry.register_tool(GET_PACKAGE_DEF, partial(get_package, shipping))
    registry.register_tool(SEARCH_SHIPMENTS_DEF, partial(search_shipments, shipping))


def register_math_tools(registry: ToolRegistry) -> None:
    """Register the arithmetic tools"""
    registry.register_tool(ADD_DEF, add)
    registry.register_tool(SUBTRACT_DEF, subtract)
    registry.register_tool(MULTIPLY_DEF, multiply)
    registry.register_tool(DIVIDE_DEF, divide)
