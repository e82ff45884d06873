"""
Support Tools - Customer support topics, order tracking and tickets
"""

import logging
import zlib
from datetime import timedelta
from functools import partial

from gadgetsinc.core.exceptions import ToolInputError
from gadgetsinc.services.data.catalog import CatalogStore
from gadgetsinc.services.data.shipping import ShippingDirectory
from gadgetsinc.services.tools.registry import ToolRegistry
from gadgetsinc.services.tools.schema import ToolCategory, ToolDefinition, ToolSchema

logger = logging.getLogger(__name__)

DATE_FORMAT = "%b %d, %Y"


# =============================================================================
# Tool Definitions
# =============================================================================

GET_SUPPORT_INFO_DEF = ToolDefinition(
    tool_schema=ToolSchema(
        name="get_support_info",
        description="Get customer support information for common issues and questions.",
        parameters={
            "type": "object",
            "properties": {
                "issue_type": {
                    "type": "string",
                    "description": "One of: warranty, return, repair, shipping, payment, contact"
                }
            },
            "required": ["issue_type"]
        }
    ),
    category=ToolCategory.SUPPORT
)

TRACK_ORDER_DEF = ToolDefinition(
    tool_schema=ToolSchema(
        name="track_order",
        description="Track order status by order number. Provides current shipping and delivery information.",
        parameters={
            "type": "object",
            "properties": {
                "order_number": {
                    "type": "string",
                    "description": "Order number, e.g. 'ORD123456'"
                }
            },
            "required": ["order_number"]
        }
    ),
    category=ToolCategory.SUPPORT
)

CREATE_SUPPORT_TICKET_DEF = ToolDefinition(
    tool_schema=ToolSchema(
        name="create_support_ticket",
        description="Generate a support ticket for customer issues. Returns ticket number and next steps.",
        parameters={
            "type": "object",
            "properties": {
                "customer_email": {
                    "type": "string",
                    "description": "Customer email address for follow-up"
                },
                "issue_description": {
                    "type": "string",
                    "description": "Short description of the problem"
                }
            },
            "required": ["customer_email", "issue_description"]
        }
    ),
    category=ToolCategory.SUPPORT
)


# =============================================================================
# Tool Implementations
# =============================================================================

def get_support_info(catalog: CatalogStore, issue_type: str) -> str:
    info = catalog.support_topic(issue_type)
    if info:
        return info

    return (
        "For general support questions, please contact our customer service team at "
        "1-800-GADGETS or support@gadgetsinc.com. "
        f"Available topics: {', '.join(catalog.support_topic_keys())}."
    )


def track_order(shipping: ShippingDirectory, order_number: str) -> str:
    if not order_number or not order_number.strip():
        raise ToolInputError("Order number cannot be empty.")

    order = shipping.order(order_number)
    today = order.as_of

    if order.status == "Processing":
        ship_date = today + timedelta(days=1)
        return (
            f"Order {order_number}: Currently being processed. "
            f"Estimated shipping date: {ship_date.strftime(DATE_FORMAT)}"
        )
    if order.status == "Shipped":
        return (
            f"Order {order_number}: Shipped via {order.carrier}. Tracking: {order.tracking_number}. "
            f"Estimated delivery: {order.estimated_delivery.strftime(DATE_FORMAT)}"
        )
    if order.status == "Out for Delivery":
        return f"Order {order_number}: Out for delivery with {order.carrier}. Expected delivery today."
    if order.status == "Delivered":
        delivered = today - timedelta(days=1)
        return f"Order {order_number}: Delivered successfully on {delivered.strftime(DATE_FORMAT)}"

    return f"Order {order_number}: Status unknown. Please contact customer service."


def create_support_ticket(shipping: ShippingDirectory, customer_email: str, issue_description: str) -> str:
    if not customer_email or "@" not in customer_email:
        raise ToolInputError("A valid customer email is required to open a ticket.")
    if not issue_description or not issue_description.strip():
        raise ToolInputError("Issue description cannot be empty.")

    # Same customer + issue on the same day maps to the same ticket
    suffix = zlib.crc32(f"{customer_email.lower()}|{issue_description}".encode("utf-8")) % 9000 + 1000
    ticket_number = f"TK{shipping.now():%Y%m%d}{suffix}"

    return (
        f"Support ticket {ticket_number} created for {customer_email}. "
        f"Issue: {issue_description}. "
        f"Our support team will respond within 24 hours. "
        f"You can track your ticket at gadgetsinc.com/support/track/{ticket_number}"
    )


def register_support_tools(
    registry: ToolRegistry,
    catalog: CatalogStore,
    shipping: ShippingDirectory
) -> None:
    """Register the customer support tools"""
    registry.register_tool(GET_SUPPORT_INFO_DEF, partial(get_support_info, catalog))
    registry.register_tool(TRACK_ORDER_DEF, partial(track_order, shipping))
    registry.register_tool(CREATE_SUPPORT_TICKET_DEF, partial(create_support_ticket, shipping))
