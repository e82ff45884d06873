"""
Tool-invocation routes shared by the tool servers.

- GET  /.well-known/mcp/manifest  server description and endpoints
- GET  /mcp/tools                 tool descriptors
- POST /mcp/tools/call            run one tool, text result verbatim
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Request, status

from gadgetsinc.api.deps import get_tool_registry
from gadgetsinc.core.version import APP_VERSION
from gadgetsinc.schemas.tools import (
    ServerManifest,
    ToolCallRequest,
    ToolCallResponse,
    ToolListResponse,
    ToolServerHealth,
)
from gadgetsinc.services.tools.executor import ToolExecutor
from gadgetsinc.services.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health", response_model=ToolServerHealth)
async def health():
    return ToolServerHealth(status="healthy", timestamp=datetime.now(timezone.utc))


@router.get("/.well-known/mcp/manifest", response_model=ServerManifest)
async def manifest(request: Request):
    base_url = str(request.base_url).rstrip("/")
    return ServerManifest(
        name=request.app.title,
        version=APP_VERSION,
        description=request.app.description,
        tools_endpoint=f"{base_url}/mcp/tools",
        call_endpoint=f"{base_url}/mcp/tools/call",
        health_endpoint=f"{base_url}/health",
    )


@router.get("/mcp/tools", response_model=ToolListResponse)
async def list_tools(registry: ToolRegistry = Depends(get_tool_registry)):
    return ToolListResponse(tools=registry.describe())


@router.post("/mcp/tools/call", response_model=ToolCallResponse)
async def call_tool(
    call: ToolCallRequest,
    registry: ToolRegistry = Depends(get_tool_registry)
):
    """
    Invoke a tool by exact name.

    Bad arguments are not an HTTP error: the tool's inline "Error: ..." text
    comes back with ``is_error`` set.
    """
    if call.name not in registry:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown tool: {call.name}"
        )

    result = ToolExecutor(registry).execute(call.name, call.arguments)
    return ToolCallResponse(
        name=call.name,
        content=result.to_message_content(),
        is_error=not result.success,
    )
