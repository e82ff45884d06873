"""
Tool Sets - The registries each process serves

Every process builds its own registry once at startup: the chat API
service, the catalog tool server and the shipping tool server.
"""

from datetime import datetime
from typing import Callable, Optional

from gadgetsinc.services.data.catalog import CatalogStore, build_default_catalog
from gadgetsinc.services.data.shipping import ShippingDirectory
from gadgetsinc.services.tools.catalog_tools import register_catalog_tools
from gadgetsinc.services.tools.product_tools import register_product_tools
from gadgetsinc.services.tools.registry import ToolRegistry
from gadgetsinc.services.tools.shipping_tools import register_math_tools, register_shipping_tools
from gadgetsinc.services.tools.support_tools import register_support_tools


def build_api_registry(
    catalog: Optional[CatalogStore] = None,
    shipping: Optional[ShippingDirectory] = None
) -> ToolRegistry:
    """Product and customer-service tools of the chat API service"""
    catalog = catalog or build_default_catalog()
    shipping = shipping or ShippingDirectory()

    registry = ToolRegistry("api")
    register_product_tools(registry, catalog)
    register_support_tools(registry, catalog, shipping)
    return registry


def build_catalog_registry(
    catalog: Optional[CatalogStore] = None,
    clock: Callable[[], datetime] = datetime.now
) -> ToolRegistry:
    """Tools of the product catalog tool server"""
    registry = ToolRegistry("catalog")
    register_catalog_tools(registry, catalog or build_default_catalog(), clock)
    return registry


def build_shipping_registry(shipping: Optional[ShippingDirectory] = None) -> ToolRegistry:
    """Tools of the shipping tool server"""
    registry = ToolRegistry("shipping")
    register_shipping_tools(registry, shipping or ShippingDirectory())
    register_math_tools(registry)
    return registry
