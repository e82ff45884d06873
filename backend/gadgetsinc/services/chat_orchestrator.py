"""
Chat Orchestrator - System prompt, history replay and stream framing

Sits between the HTTP layer and the completion backend:
- simple_chat: one user message in, one completion out
- stream_chat: a conversation in, ``data: {json}\\n\\n`` frames out, ending
  with ``data: [DONE]\\n\\n`` or, on failure, with a single error frame
"""

import json
import logging
from typing import Any, AsyncIterator, Dict, Iterable, List, Optional

from gadgetsinc.core.exceptions import SerializationError
from gadgetsinc.services.ai.completion_service import CompletionService
from gadgetsinc.services.ai.conversation import ConversationMessage, Role
from gadgetsinc.services.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

DONE_FRAME = "data: [DONE]\n\n"

# Roles a client may replay; anything else is dropped
REPLAYABLE_ROLES = {Role.USER.value, Role.ASSISTANT.value}


def format_frame(payload: Dict[str, Any]) -> str:
    """Encode one event frame"""
    try:
        frame = f"data: {json.dumps(payload, ensure_ascii=False)}\n\n"
        # Lone surrogates survive json.dumps but not the UTF-8 response body
        frame.encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Cannot encode frame: {e}") from e
    return frame


def error_frame(message: str) -> str:
    """Encode the terminal error frame; ASCII escapes make it always encodable"""
    return f"data: {json.dumps({'error': message})}\n\n"


class ChatOrchestrator:
    """
    Turns chat requests into completion-backend calls.

    Args:
        completion_service: The backend selected at startup
        system_prompt: Prompt prepended to streamed conversations
        simple_system_prompt: Prompt for one-turn simple chat
        registry: Tools offered to the backend
    """

    def __init__(
        self,
        completion_service: CompletionService,
        system_prompt: str,
        simple_system_prompt: str,
        registry: Optional[ToolRegistry] = None,
    ):
        self.completion_service = completion_service
        self.system_prompt = system_prompt
        self.simple_system_prompt = simple_system_prompt
        self.registry = registry

    async def simple_chat(self, message: str) -> str:
        """Complete a single user message. Backend errors propagate."""
        history = [
            ConversationMessage.system(self.simple_system_prompt),
            ConversationMessage.user(message),
        ]
        return await self.completion_service.complete(history, self.registry)

    def build_history(self, messages: Iterable[Any]) -> List[ConversationMessage]:
        """
        System prompt followed by the replayable part of the client history.

        Accepts ConversationMessage objects, API models or dicts with
        ``role`` and ``content``.
        """
        history = [ConversationMessage.system(self.system_prompt)]
        for message in messages:
            role = _get(message, "role")
            role = role.value if isinstance(role, Role) else str(role or "").lower()
            if role not in REPLAYABLE_ROLES:
                logger.debug(f"Ignoring message with role {role!r}")
                continue
            history.append(ConversationMessage(Role(role), _get(message, "content") or ""))
        return history

    async def stream_chat(self, messages: Iterable[Any]) -> AsyncIterator[str]:
        """
        Stream a completion as event frames.

        Cancellation is not intercepted: when the consumer goes away the
        backend call is cancelled and nothing more is emitted.
        """
        history = self.build_history(messages)

        try:
            async for chunk in self.completion_service.complete_streaming(history, self.registry):
                if not chunk.content:
                    continue
                try:
                    frame = format_frame({"content": chunk.content})
                except SerializationError as e:
                    logger.warning(f"Skipping chunk: {e}")
                    continue
                yield frame
        except Exception as e:
            logger.error(f"Streaming chat failed: {e}", exc_info=True)
            yield error_frame(str(e))
            return

        yield DONE_FRAME


def _get(message: Any, name: str) -> Any:
    if isinstance(message, dict):
        return message.get(name)
    return getattr(message, name, None)
