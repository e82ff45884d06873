from datetime import datetime
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from gadgetsinc.services.tools.schema import ToolDescriptor


class ToolListResponse(BaseModel):
    tools: List[ToolDescriptor]


class ToolCallRequest(BaseModel):
    name: str = Field(..., description="Exact tool name")
    arguments: Dict[str, Any] = Field(default_factory=dict, description="Tool arguments by parameter name")


class ToolCallResponse(BaseModel):
    name: str
    content: str = Field(..., description="The tool's text result, verbatim")
    is_error: bool = False


class ServerManifest(BaseModel):
    name: str
    version: str
    description: str
    tools_endpoint: str
    call_endpoint: str
    health_endpoint: str


class ToolServerHealth(BaseModel):
    status: str
    timestamp: datetime
