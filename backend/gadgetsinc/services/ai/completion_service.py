"""
Completion Service - The interface every chat backend implements

A backend turns a conversation history into either one completion or a
lazy sequence of text fragments. A tool registry may be passed per call;
otherwise the backend uses the registry it was built with.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import AsyncIterator, Dict, List, Optional

from gadgetsinc.core.exceptions import ProviderError
from gadgetsinc.services.ai.conversation import ConversationHistory, StreamChunk
from gadgetsinc.services.tools.executor import ToolExecutor
from gadgetsinc.services.tools.provider_adapter import limit_tools
from gadgetsinc.services.tools.registry import ToolRegistry
from gadgetsinc.services.tools.schema import ToolCall

logger = logging.getLogger(__name__)


class CompletionService(ABC):
    """
    Base class for chat completion backends.

    Subclasses set ``backend_name`` and implement ``complete`` and
    ``complete_streaming``. For the same history, concatenating the
    streamed chunks should give the non-streamed completion.
    """

    backend_name: str = "base"

    def __init__(self, registry: Optional[ToolRegistry] = None):
        self.registry = registry

    @abstractmethod
    async def complete(
        self,
        history: ConversationHistory,
        tools: Optional[ToolRegistry] = None
    ) -> str:
        """Return one completion for the history"""

    @abstractmethod
    def complete_streaming(
        self,
        history: ConversationHistory,
        tools: Optional[ToolRegistry] = None
    ) -> AsyncIterator[StreamChunk]:
        """Yield the completion as text fragments, in order"""

    def _registry_for(self, tools: Optional[ToolRegistry]) -> Optional[ToolRegistry]:
        return tools if tools is not None else self.registry


class ToolCallingCompletionService(CompletionService):
    """
    Shared tool-call loop plumbing for backends with native function calling.

    The model may request tools; they are executed through a ToolExecutor and
    their results fed back, for at most ``max_tool_rounds`` rounds. The final
    round is sent without tools so the model has to answer in text.
    """

    def __init__(
        self,
        registry: Optional[ToolRegistry] = None,
        temperature: float = 0.3,
        max_tool_rounds: int = 5,
        request_timeout: float = 120,
    ):
        super().__init__(registry)
        self.temperature = temperature
        self.max_tool_rounds = max_tool_rounds
        self.request_timeout = request_timeout

    def _tool_specs(self, registry: Optional[ToolRegistry]) -> List[Dict]:
        if registry is None or len(registry) == 0:
            return []
        return limit_tools(self.backend_name, registry.get_openai_tools_spec())

    def _specs_for_round(self, specs: List[Dict], round_index: int) -> Optional[List[Dict]]:
        if not specs or round_index >= self.max_tool_rounds:
            return None
        return specs

    def _run_tool_calls(self, registry: Optional[ToolRegistry], calls: List[ToolCall]) -> List[str]:
        """Execute requested tool calls in order and return their text results"""
        if registry is None:
            return [f"Error: Unknown tool: {call.name}" for call in calls]

        executor = ToolExecutor(registry)
        results = []
        for call in calls:
            logger.info(f"{self.backend_name}: model requested tool {call.name}")
            result = executor.execute(call.name, call.arguments, tool_call_id=call.id)
            results.append(result.to_message_content())
        return results

    def _provider_error(self, error: BaseException) -> ProviderError:
        if isinstance(error, ProviderError):
            return error
        if isinstance(error, asyncio.TimeoutError):
            return ProviderError(
                f"LLM API error ({self.backend_name}): "
                f"Request timed out after {self.request_timeout}s",
                provider=self.backend_name,
            )
        error_type = type(error).__name__
        return ProviderError(
            f"LLM API error ({self.backend_name}): [{error_type}] {error}",
            provider=self.backend_name,
        )
