"""
Request dependencies: services assembled at startup live on ``app.state``.
"""

from fastapi import Request

from gadgetsinc.services.chat_orchestrator import ChatOrchestrator
from gadgetsinc.services.tools.registry import ToolRegistry


def get_orchestrator(request: Request) -> ChatOrchestrator:
    return request.app.state.orchestrator


def get_tool_registry(request: Request) -> ToolRegistry:
    return request.app.state.tool_registry
