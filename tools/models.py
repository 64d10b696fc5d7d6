"""Shared response model for MCP tools."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field


class ToolOutput(BaseModel):
    """Standardized envelope serialized into MCP text content."""

    status: Literal["success", "error"] = "success"
    content: Optional[str] = Field(None, description="Tool output, usually a JSON document")
    content_type: Literal["text", "json"] = "text"
    metadata: Optional[dict[str, Any]] = Field(default_factory=dict)
