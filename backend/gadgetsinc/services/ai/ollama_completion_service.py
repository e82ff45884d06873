"""
Ollama Completion Service - Local model runtime with native tool calling
"""

import asyncio
import logging
from typing import Any, AsyncIterator, Dict, List, Optional

from ollama import AsyncClient

from gadgetsinc.services.ai.completion_service import ToolCallingCompletionService
from gadgetsinc.services.ai.conversation import ConversationHistory, StreamChunk, to_message_dicts
from gadgetsinc.services.tools.registry import ToolRegistry
from gadgetsinc.services.tools.schema import ToolCall

logger = logging.getLogger(__name__)


class OllamaCompletionService(ToolCallingCompletionService):
    """
    Chat completions from an Ollama server.

    Tool calls arrive whole (never as partial deltas), in the final chunk
    of a streamed round.
    """

    backend_name = "ollama"

    def __init__(
        self,
        client: AsyncClient,
        model: str,
        registry: Optional[ToolRegistry] = None,
        temperature: float = 0.3,
        max_tool_rounds: int = 5,
        request_timeout: float = 120,
    ):
        super().__init__(registry, temperature, max_tool_rounds, request_timeout)
        self.client = client
        self.model = model

    async def complete(
        self,
        history: ConversationHistory,
        tools: Optional[ToolRegistry] = None
    ) -> str:
        registry = self._registry_for(tools)
        specs = self._tool_specs(registry)
        messages: List[Dict[str, Any]] = to_message_dicts(history)

        try:
            for round_index in range(self.max_tool_rounds + 1):
                response = await asyncio.wait_for(
                    self._chat(messages, self._specs_for_round(specs, round_index)),
                    timeout=self.request_timeout
                )
                message = _field(response, "message")
                content = _field(message, "content") or ""
                tool_calls = self._parse_tool_calls(_field(message, "tool_calls"), round_index)

                if not tool_calls:
                    return content

                self._append_tool_round(messages, registry, content, tool_calls)
        except Exception as e:
            raise self._provider_error(e) from e

        return ""

    async def complete_streaming(
        self,
        history: ConversationHistory,
        tools: Optional[ToolRegistry] = None
    ) -> AsyncIterator[StreamChunk]:
        registry = self._registry_for(tools)
        specs = self._tool_specs(registry)
        messages: List[Dict[str, Any]] = to_message_dicts(history)

        for round_index in range(self.max_tool_rounds + 1):
            content_parts: List[str] = []
            tool_calls: List[ToolCall] = []

            try:
                stream = await self._chat(messages, self._specs_for_round(specs, round_index), stream=True)
                async for part in stream:
                    message = _field(part, "message")
                    delta = _field(message, "content") or ""
                    tool_calls.extend(self._parse_tool_calls(_field(message, "tool_calls"), round_index))
                    if delta:
                        content_parts.append(delta)
                        yield StreamChunk(content=delta)
            except Exception as e:
                raise self._provider_error(e) from e

            if not tool_calls:
                return

            self._append_tool_round(messages, registry, "".join(content_parts), tool_calls)

    async def _chat(self, messages: List[Dict[str, Any]], tools: Optional[List[Dict]], stream: bool = False):
        kwargs: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "options": {"temperature": self.temperature},
        }
        if tools:
            kwargs["tools"] = tools
        if stream:
            kwargs["stream"] = True
        return await self.client.chat(**kwargs)

    def _parse_tool_calls(self, raw_calls: Any, round_index: int) -> List[ToolCall]:
        calls = []
        for i, raw in enumerate(raw_calls or []):
            function = _field(raw, "function")
            calls.append(ToolCall(
                id=f"ollama_{round_index}_{i}",
                name=_field(function, "name") or "",
                arguments=dict(_field(function, "arguments") or {}),
            ))
        return calls

    def _append_tool_round(
        self,
        messages: List[Dict[str, Any]],
        registry: Optional[ToolRegistry],
        content: str,
        tool_calls: List[ToolCall]
    ) -> None:
        messages.append({
            "role": "assistant",
            "content": content,
            "tool_calls": [
                {"function": {"name": call.name, "arguments": call.arguments}}
                for call in tool_calls
            ],
        })
        for call, result in zip(tool_calls, self._run_tool_calls(registry, tool_calls)):
            messages.append({"role": "tool", "content": result, "tool_name": call.name})


def _field(obj: Any, name: str) -> Any:
    """Read a response field from either a dict or an ollama response model"""
    if obj is None:
        return None
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)
