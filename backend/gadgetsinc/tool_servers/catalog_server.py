"""
Product catalog tool server.

Run with: uvicorn gadgetsinc.tool_servers.catalog_server:app --port 8101
"""

from gadgetsinc.core.logging_config import setup_logging
from gadgetsinc.services.tools.toolsets import build_catalog_registry
from gadgetsinc.tool_servers.server import create_tool_server

SERVICE_NAME = "gadgetsinc-product-catalog"

setup_logging(SERVICE_NAME)

app = create_tool_server(
    name=SERVICE_NAME,
    description="Product lookup, product search and tag search over the GadgetsInc catalog",
    registry=build_catalog_registry(),
)


def run() -> None:
    import uvicorn

    uvicorn.run("gadgetsinc.tool_servers.catalog_server:app", host="0.0.0.0", port=8101)
