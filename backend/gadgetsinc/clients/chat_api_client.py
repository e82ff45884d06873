"""
Chat API Client for the GadgetsInc web front end.

Talks to the chat API service:
- POST /chat/simple for one-shot replies
- POST /chat for streamed replies, parsed frame by frame

No retries: a failed call surfaces as ProviderError.
"""

import json
import logging
from typing import Any, AsyncIterator, Dict, Iterable, Optional, Union

import httpx

from gadgetsinc.core.exceptions import ProviderError

logger = logging.getLogger(__name__)

DATA_PREFIX = "data: "
DONE_MARKER = "[DONE]"


class ChatApiClient:
    """
    Async HTTP client for the chat API.

    Pass ``client`` to reuse an existing httpx.AsyncClient (for example one
    bound to an ASGI app in tests); otherwise one is created on first use.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 120.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                headers={"Content-Type": "application/json"},
            )
            self._owns_client = True
        return self._client

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client and self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "ChatApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def send_message(self, message: str) -> str:
        """Send one message and return the whole reply."""
        client = await self._get_client()
        try:
            response = await client.post("/chat/simple", json={"message": message})
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise ProviderError(f"Chat API error: [{type(e).__name__}] {e}") from e

        return payload.get("response") or "No response received."

    async def send_message_stream(
        self,
        messages: Iterable[Union[Dict[str, Any], Any]]
    ) -> AsyncIterator[str]:
        """
        Send a conversation and yield reply fragments as they arrive.

        Stops at the ``[DONE]`` frame. Frames that are not valid JSON are
        skipped; an error frame raises ProviderError.
        """
        client = await self._get_client()
        body = {"messages": [_message_dict(m) for m in messages]}

        try:
            async with client.stream("POST", "/chat", json=body) as response:
                response.raise_for_status()
                async for line in response.aiter_lines():
                    if not line.startswith(DATA_PREFIX):
                        continue

                    data = line[len(DATA_PREFIX):]
                    if data == DONE_MARKER:
                        return

                    try:
                        chunk = json.loads(data)
                    except json.JSONDecodeError:
                        logger.debug(f"Skipping invalid frame: {data[:80]}")
                        continue
                    if not isinstance(chunk, dict):
                        continue

                    if chunk.get("error"):
                        raise ProviderError(f"Chat stream failed: {chunk['error']}")
                    if chunk.get("content") is not None:
                        yield chunk["content"]
        except httpx.HTTPError as e:
            raise ProviderError(f"Chat API error: [{type(e).__name__}] {e}") from e


def _message_dict(message: Union[Dict[str, Any], Any]) -> Dict[str, Any]:
    if isinstance(message, dict):
        return {"role": message.get("role"), "content": message.get("content", "")}
    role = getattr(message, "role")
    return {"role": getattr(role, "value", role), "content": getattr(message, "content", "")}
