# Data Services Package
# Read-only datasets queried by the tool functions

from gadgetsinc.services.data.catalog import CatalogStore, Product, StockEntry, build_default_catalog
from gadgetsinc.services.data.shipping import ShippingDirectory, shipping_cost

__all__ = [
    "CatalogStore",
    "Product",
    "StockEntry",
    "build_default_catalog",
    "ShippingDirectory",
    "shipping_cost",
]
