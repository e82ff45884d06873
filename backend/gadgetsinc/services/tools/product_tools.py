"""
Product Tools - Product line information, shipping cost and stock checks

These are the product tools of the chat API service:
- Summary of a product line ("smartphone", "laptop", ...)
- Shipping cost estimates
- Stock availability
"""

import logging
from functools import partial

from gadgetsinc.services.data.catalog import CatalogStore
from gadgetsinc.services.data.shipping import shipping_cost
from gadgetsinc.services.tools.registry import ToolRegistry
from gadgetsinc.services.tools.schema import ToolCategory, ToolDefinition, ToolSchema

logger = logging.getLogger(__name__)


# =============================================================================
# Tool Definitions
# =============================================================================

GET_PRODUCT_INFO_DEF = ToolDefinition(
    tool_schema=ToolSchema(
        name="get_product_info",
        description="Get information about GadgetsInc products. Provides details about available gadgets and their features.",
        parameters={
            "type": "object",
            "properties": {
                "product_name": {
                    "type": "string",
                    "description": "Product line, e.g. 'smartphone', 'laptop', 'smartwatch', 'headphones', 'tablet'"
                }
            },
            "required": ["product_name"]
        }
    ),
    category=ToolCategory.PRODUCT
)

CALCULATE_SHIPPING_DEF = ToolDefinition(
    tool_schema=ToolSchema(
        name="calculate_shipping",
        description="Calculate shipping cost based on product weight and destination. Returns estimated shipping cost in USD.",
        parameters={
            "type": "object",
            "properties": {
                "weight_in_kg": {
                    "type": "number",
                    "description": "Package weight in kilograms"
                },
                "destination": {
                    "type": "string",
                    "description": "Destination region: domestic, canada, europe, asia, or any other for international"
                }
            },
            "required": ["weight_in_kg", "destination"]
        }
    ),
    category=ToolCategory.PRODUCT
)

CHECK_STOCK_DEF = ToolDefinition(
    tool_schema=ToolSchema(
        name="check_stock",
        description="Check product availability and stock status. Returns current stock information.",
        parameters={
            "type": "object",
            "properties": {
                "product_name": {
                    "type": "string",
                    "description": "Product line to check, e.g. 'laptop'"
                }
            },
            "required": ["product_name"]
        }
    ),
    category=ToolCategory.PRODUCT
)


# =============================================================================
# Tool Implementations
# =============================================================================

def get_product_info(catalog: CatalogStore, product_name: str) -> str:
    product = catalog.product_for_line(product_name)
    if product:
        return product.summary

    return (
        f"Sorry, I couldn't find information about '{product_name}'. "
        f"Available products: {', '.join(catalog.product_line_keys())}"
    )


def calculate_shipping(weight_in_kg: float, destination: str) -> str:
    cost = shipping_cost(weight_in_kg, destination)
    return f"{cost:.2f}"


def check_stock(catalog: CatalogStore, product_name: str) -> str:
    entry = catalog.stock_for(product_name)
    if entry:
        return f"{product_name}: {entry.units} units {entry.status}"

    return f"Product '{product_name}' not found in inventory system."


def register_product_tools(registry: ToolRegistry, catalog: CatalogStore) -> None:
    """Register the product tools against a catalog"""
    registry.register_tool(GET_PRODUCT_INFO_DEF, partial(get_product_info, catalog))
    registry.register_tool(CALCULATE_SHIPPING_DEF, calculate_shipping)
    registry.register_tool(CHECK_STOCK_DEF, partial(check_stock, catalog))
