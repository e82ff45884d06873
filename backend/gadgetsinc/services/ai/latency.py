"""
Simulated latency for the mock backend.

Delays are plain ``asyncio.sleep`` calls so a cancelled request stops
waiting immediately.
"""

import asyncio
from dataclasses import dataclass


@dataclass(frozen=True)
class LatencyPolicy:
    chunk_delay: float = 0.0  # seconds before each streamed chunk
    response_delay: float = 0.0  # seconds before a non-streamed completion

    @classmethod
    def from_milliseconds(cls, chunk_ms: int, response_ms: int) -> "LatencyPolicy":
        return cls(chunk_delay=chunk_ms / 1000, response_delay=response_ms / 1000)

    async def before_chunk(self) -> None:
        if self.chunk_delay > 0:
            await asyncio.sleep(self.chunk_delay)

    async def before_response(self) -> None:
        if self.response_delay > 0:
            await asyncio.sleep(self.response_delay)


NO_DELAY = LatencyPolicy()
