"""
Shipping tool server.

Run with: uvicorn gadgetsinc.tool_servers.shipping_server:app --port 8102
"""

from gadgetsinc.core.logging_config import setup_logging
from gadgetsinc.services.tools.toolsets import build_shipping_registry
from gadgetsinc.tool_servers.server import create_tool_server

SERVICE_NAME = "gadgetsinc-shipping"

setup_logging(SERVICE_NAME)

app = create_tool_server(
    name=SERVICE_NAME,
    description="Shipment, package and search lookups plus arithmetic helpers",
    registry=build_shipping_registry(),
)


def run() -> None:
    import uvicorn

    uvicorn.run("gadgetsinc.tool_servers.shipping_server:app", host="0.0.0.0", port=8102)
