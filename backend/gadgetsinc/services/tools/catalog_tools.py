"""
Catalog Tools - Product lookup, search and tag filtering

Exposed by the product catalog tool server.
"""

import logging
from datetime import datetime
from functools import partial
from typing import Callable

from gadgetsinc.core.exceptions import ToolInputError
from gadgetsinc.services.data.catalog import CatalogStore, Product
from gadgetsinc.services.tools.registry import ToolRegistry
from gadgetsinc.services.tools.schema import ToolCategory, ToolDefinition, ToolSchema

logger = logging.getLogger(__name__)

DETAIL_HINT = "Use get_product() with the product number for detailed information."


# =============================================================================
# Tool Definitions
# =============================================================================

GET_PRODUCT_DEF = ToolDefinition(
    tool_schema=ToolSchema(
        name="get_product",
        description="Get product information by product number. Returns detailed product information including name, description, price, category, and tags.",
        parameters={
            "type": "object",
            "properties": {
                "product_no": {
                    "type": "integer",
                    "description": "Product number, e.g. 1001"
                }
            },
            "required": ["product_no"]
        }
    ),
    category=ToolCategory.CATALOG
)

SEARCH_PRODUCT_DEF = ToolDefinition(
    tool_schema=ToolSchema(
        name="search_product",
        description="Search products by search term. Returns matching products based on name, description, or category. Supports partial matching and case-insensitive search.",
        parameters={
            "type": "object",
            "properties": {
                "search_term": {
                    "type": "string",
                    "description": "Text to look for in product name, description or category"
                }
            },
            "required": ["search_term"]
        }
    ),
    category=ToolCategory.CATALOG
)

SEARCH_TAG_DEF = ToolDefinition(
    tool_schema=ToolSchema(
        name="search_tag",
        description="Search products by tag. Returns products that match the specified tag. Tags include categories like 'smartphone', 'wireless', 'gaming', etc.",
        parameters={
            "type": "object",
            "properties": {
                "search_term": {
                    "type": "string",
                    "description": "Tag or part of a tag, e.g. 'wireless'"
                }
            },
            "required": ["search_term"]
        }
    ),
    category=ToolCategory.CATALOG
)


# =============================================================================
# Tool Implementations
# =============================================================================

def _price(product: Product) -> str:
    return f"${product.price:.2f}"


def get_product(catalog: CatalogStore, clock: Callable[[], datetime], product_no: int) -> str:
    if product_no <= 0:
        raise ToolInputError("Product number must be a positive integer.")

    product = catalog.get_product(product_no)
    if product is None:
        available = ", ".join(str(n) for n in catalog.product_numbers())
        raise ToolInputError(
            f"Product with number {product_no} not found. Available product numbers: {available}"
        )

    return "\n".join([
        f"Product Number: {product.product_number}",
        f"Name: {product.name}",
        f"Description: {product.description}",
        f"Price: {_price(product)}",
        f"Category: {product.category}",
        f"Tags: {', '.join(product.tags)}",
        "In Stock: Yes",
        f"Last Updated: {clock():%Y-%m-%d %H:%M}",
    ])


def search_product(catalog: CatalogStore, search_term: str) -> str:
    if not search_term or not search_term.strip():
        raise ToolInputError("Search term cannot be empty.")

    matches = catalog.search(search_term)
    if not matches:
        return (
            f"No products found matching '{search_term}'. "
            "Try searching for terms like 'smartphone', 'laptop', 'camera', or 'wireless'."
        )

    results = [
        f"{i}. Product #{p.product_number}: {p.name} - {_price(p)} ({p.category})"
        for i, p in enumerate(matches, start=1)
    ]
    return (
        f"Search results for '{search_term}':\n\n"
        + "\n".join(results)
        + f"\n\nFound {len(matches)} product(s). {DETAIL_HINT}"
    )


def search_tag(catalog: CatalogStore, search_term: str) -> str:
    if not search_term or not search_term.strip():
        raise ToolInputError("Search tag cannot be empty.")

    matches = catalog.search_tags(search_term)
    if not matches:
        return (
            f"No products found with tag '{search_term}'. "
            f"Available tags: {', '.join(catalog.all_tags())}"
        )

    results = [
        f"{i}. Product #{m.product.product_number}: {m.product.name} - {_price(m.product)}\n"
        f"   Tags: {', '.join(m.matched_tags)}"
        for i, m in enumerate(matches, start=1)
    ]
    return (
        f"Products with tag '{search_term}':\n\n"
        + "\n\n".join(results)
        + f"\n\nFound {len(matches)} product(s). {DETAIL_HINT}"
    )


def register_catalog_tools(
    registry: ToolRegistry,
    catalog: CatalogStore,
    clock: Callable[[], datetime] = datetime.now
) -> None:
    """Register the product catalog tools"""
    registry.register_tool(GET_PRODUCT_DEF, partial(get_product, catalog, clock))
    registry.register_tool(SEARCH_PRODUCT_DEF, partial(search_product, catalog))
    registry.register_tool(SEARCH_TAG_DEF, partial(search_tag, catalog))
