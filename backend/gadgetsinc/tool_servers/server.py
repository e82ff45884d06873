"""
Tool server factory.

Each tool server is a small FastAPI app publishing one registry over the
tool-invocation routes in ``gadgetsinc.api.tools``.
"""

import logging

from fastapi import FastAPI

from gadgetsinc.api import tools
from gadgetsinc.core.logging_config import RequestLoggingMiddleware
from gadgetsinc.core.version import get_full_version
from gadgetsinc.services.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)


def create_tool_server(name: str, description: str, registry: ToolRegistry) -> FastAPI:
    app = FastAPI(title=name, description=description, version=get_full_version())
    app.state.tool_registry = registry

    app.add_middleware(RequestLoggingMiddleware)
    app.include_router(tools.router, tags=["tools"])

    logger.info(f"{name} ready with tools: {', '.join(tool.name for tool in registry)}")
    return app
