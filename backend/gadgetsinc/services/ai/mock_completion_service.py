"""
Mock Completion Service - Keyword-driven replies without a model

Used for demos and tests. The reply is chosen from the last message of the
history by the first matching keyword rule; the data behind every reply
comes from the tool registry, exactly as a model would get it.
"""

import logging
import re
from typing import AsyncIterator, List, Optional

from gadgetsinc.services.ai.completion_service import CompletionService
from gadgetsinc.services.ai.conversation import ConversationHistory, StreamChunk
from gadgetsinc.services.ai.latency import NO_DELAY, LatencyPolicy
from gadgetsinc.services.tools.executor import ToolExecutor
from gadgetsinc.services.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

HELP_MESSAGE = (
    "Hello! I'm your GadgetsInc AI assistant. I can help you with:\n\n"
    "• Product information (smartphones, laptops, smartwatches, headphones, tablets)\n"
    "• Shipping cost calculations\n"
    "• Stock availability\n"
    "• Order tracking\n"
    "• Customer support and warranty information\n\n"
    "What would you like to know about?"
)

# (keywords, product line); order matters, "phone" also matches "headphones"
PRODUCT_RULES = (
    (("smartphone", "phone"), "smartphone"),
    (("laptop",), "laptop"),
    (("smartwatch", "watch"), "smartwatch"),
    (("headphones",), "headphones"),
    (("tablet",), "tablet"),
)

STOCK_PRODUCTS = ("smartphone", "laptop", "smartwatch", "headphones", "tablet")

DEMO_ORDER_NUMBER = "ORD123456"

_WORD_PATTERN = re.compile(r"\s*\S+\s*")


def split_words(text: str) -> List[str]:
    """Split text into word chunks that keep their whitespace, so "".join() restores it"""
    words = _WORD_PATTERN.findall(text)
    if not words and text:
        return [text]
    return words


class MockCompletionService(CompletionService):
    """
    Deterministic completion backend.

    Args:
        registry: Tools backing the replies (product, shipping and support tools)
        latency: Simulated delays; NO_DELAY in tests
    """

    backend_name = "mock"

    def __init__(self, registry: Optional[ToolRegistry] = None, latency: LatencyPolicy = NO_DELAY):
        super().__init__(registry)
        self.latency = latency

    async def complete(
        self,
        history: ConversationHistory,
        tools: Optional[ToolRegistry] = None
    ) -> str:
        response = self.generate_response(self._last_content(history), self._registry_for(tools))
        await self.latency.before_response()
        return response

    async def complete_streaming(
        self,
        history: ConversationHistory,
        tools: Optional[ToolRegistry] = None
    ) -> AsyncIterator[StreamChunk]:
        response = self.generate_response(self._last_content(history), self._registry_for(tools))
        for word in split_words(response):
            await self.latency.before_chunk()
            yield StreamChunk(content=word)

    @staticmethod
    def _last_content(history: ConversationHistory) -> str:
        if not history:
            return ""
        return history[-1].content or ""

    def generate_response(self, message: str, registry: Optional[ToolRegistry]) -> str:
        """Pick the reply for a user message; first matching rule wins"""
        text = message.lower()

        def invoke(tool_name: str, **arguments) -> str:
            if registry is None:
                return f"Error: Unknown tool: {tool_name}"
            return ToolExecutor(registry).invoke(tool_name, arguments)

        for keywords, product_line in PRODUCT_RULES:
            if any(keyword in text for keyword in keywords):
                return invoke("get_product_info", product_name=product_line)

        if "shipping" in text and "cost" in text:
            weight = 1.5
            destination = "domestic"
            for region in ("europe", "canada", "asia"):
                if region in text:
                    destination = region
            if "2kg" in text or "2 kg" in text:
                weight = 2.0
            if "3kg" in text or "3 kg" in text:
                weight = 3.0

            cost = invoke("calculate_shipping", weight_in_kg=weight, destination=destination)
            return f"Shipping cost for {weight:g}kg to {destination}: ${cost}"

        if "stock" in text or "available" in text:
            for product_line in STOCK_PRODUCTS:
                if product_line in text:
                    return invoke("check_stock", product_name=product_line)

        if "track" in text and "order" in text:
            return invoke("track_order", order_number=DEMO_ORDER_NUMBER)

        if "return" in text or "warranty" in text:
            return invoke("get_support_info", issue_type="warranty")

        if "support" in text or "help" in text or "contact" in text:
            return invoke("get_support_info", issue_type="contact")

        return HELP_MESSAGE
