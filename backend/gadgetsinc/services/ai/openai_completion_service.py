"""
Azure OpenAI Completion Service - Hosted chat completions with function calling
"""

import asyncio
import json
import logging
from typing import Any, AsyncIterator, Dict, List, Optional

from openai import AsyncAzureOpenAI

from gadgetsinc.services.ai.completion_service import ToolCallingCompletionService
from gadgetsinc.services.ai.conversation import ConversationHistory, StreamChunk, to_message_dicts
from gadgetsinc.services.tools.registry import ToolRegistry
from gadgetsinc.services.tools.schema import ToolCall

logger = logging.getLogger(__name__)


class AzureOpenAICompletionService(ToolCallingCompletionService):
    """
    Chat completions from an Azure OpenAI deployment.

    When streaming, tool calls arrive as deltas keyed by index: the id and
    name come first, the JSON arguments in fragments after.
    """

    backend_name = "azure_openai"

    def __init__(
        self,
        client: AsyncAzureOpenAI,
        deployment: str,
        registry: Optional[ToolRegistry] = None,
        temperature: float = 0.3,
        max_tool_rounds: int = 5,
        request_timeout: float = 120,
    ):
        super().__init__(registry, temperature, max_tool_rounds, request_timeout)
        self.client = client
        self.deployment = deployment

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
                    self._create(messages, self._specs_for_round(specs, round_index)),
                    timeout=self.request_timeout
                )
                if not response.choices:
                    raise ValueError("Response contained no choices")

                message = response.choices[0].message
                content = message.content or ""
                tool_calls = [
                    ToolCall(id=tc.id, name=tc.function.name, arguments=tc.function.arguments or "")
                    for tc in (message.tool_calls or [])
                ]

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
            pending: Dict[int, Dict[str, str]] = {}

            try:
                stream = await self._create(messages, self._specs_for_round(specs, round_index), stream=True)
                async for chunk in stream:
                    # Azure sends content-filter results in chunks without choices
                    if not chunk.choices:
                        continue
                    delta = chunk.choices[0].delta
                    if delta is None:
                        continue

                    for tc in delta.tool_calls or []:
                        entry = pending.setdefault(tc.index, {"id": "", "name": "", "arguments": ""})
                        if tc.id:
                            entry["id"] = tc.id
                        if tc.function is not None:
                            if tc.function.name:
                                entry["name"] += tc.function.name
                            if tc.function.arguments:
                                entry["arguments"] += tc.function.arguments

                    if delta.content:
                        content_parts.append(delta.content)
                        yield StreamChunk(content=delta.content)
            except Exception as e:
                raise self._provider_error(e) from e

            if not pending:
                return

            tool_calls = [
                ToolCall(
                    id=entry["id"] or f"call_{index}",
                    name=entry["name"],
                    arguments=entry["arguments"],
                )
                for index, entry in sorted(pending.items())
            ]
            self._append_tool_round(messages, registry, "".join(content_parts), tool_calls)

    async def _create(self, messages: List[Dict[str, Any]], tools: Optional[List[Dict]], stream: bool = False):
        request_kwargs: Dict[str, Any] = {
            "model": self.deployment,
            "messages": messages,
            "temperature": self.temperature,
        }
        if tools:
            request_kwargs["tools"] = tools
            request_kwargs["tool_choice"] = "auto"
        if stream:
            request_kwargs["stream"] = True
        return await self.client.chat.completions.create(**request_kwargs)

    def _append_tool_round(
        self,
        messages: List[Dict[str, Any]],
        registry: Optional[ToolRegistry],
        content: str,
        tool_calls: List[ToolCall]
    ) -> None:
        messages.append({
            "role": "assistant",
            "content": content or None,
            "tool_calls": [
                {
                    "id": call.id,
                    "type": "function",
                    "function": {
                        "name": call.name,
                        "arguments": call.arguments if isinstance(call.arguments, str) else json.dumps(call.arguments),
                    },
                }
                for call in tool_calls
            ],
        })
        for call, result in zip(tool_calls, self._run_tool_calls(registry, tool_calls)):
            messages.append({"role": "tool", "tool_call_id": call.id, "content": result})
