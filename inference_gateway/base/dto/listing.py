"""Pydantic DTOs for the model and MCP tool listing endpoints."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Model(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    object: str = "model"
    created: Optional[int] = None
    owned_by: Optional[str] = None
    served_by: Optional[str] = None


class ListModelsResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    provider: Optional[str] = None
    object: str = "list"
    data: List[Model] = Field(default_factory=list)


class MCPTool(BaseModel):
    """A tool the gateway discovered on an MCP server.

    Calls to these tools are executed by the gateway itself; they reach a
    stream's ``mcp_tool_call`` channel rather than the local one.
    """

    model_config = ConfigDict(extra="allow")

    name: str
    description: str = ""
    server: Optional[str] = None
    input_schema: Optional[Dict[str, Any]] = None


class ListToolsResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    object: str = "list"
    data: List[MCPTool] = Field(default_factory=list)

    def names(self) -> List[str]:
        return [tool.name for tool in self.data]


__all__ = ["Model", "ListModelsResponse", "MCPTool", "ListToolsResponse"]
