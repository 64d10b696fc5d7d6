"""detee tool - expose DeeTEE CLI actions as structured MCP results."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

from mcp.types import TextContent
from pydantic import BaseModel, Field, ValidationError

from detee.actions import ActionError, DeteeActions, WorkerNotFoundError
from detee.runner import CommandError
from tools.models import ToolOutput

logger = logging.getLogger(__name__)


class DeteeRequest(BaseModel):
    """Request model for the detee tool."""

    action: str = Field(..., description="Name of the DeeTEE action to run.")
    parameters: dict[str, Any] = Field(
        default_factory=dict,
        description="Action parameters, e.g. {'worker_id': '...'} for get_worker.",
    )


class DeteeTool:
    """Run a named DeeTEE action and return its translated output as JSON.

    Each call runs exactly one CLI command. The command blocks, so it is moved
    to a worker thread to keep the event loop responsive.
    """

    def __init__(self, actions: DeteeActions | None = None) -> None:
        self._actions = actions or DeteeActions()

    def get_name(self) -> str:
        return "detee"

    def get_description(self) -> str:
        return (
            "Manage DeeTEE virtual machines through the detee-cli container: install checks, account "
            "setup, and creating, listing, inspecting, updating or deleting workers."
        )

    def get_annotations(self) -> dict[str, Any]:
        return {"readOnlyHint": False}

    def get_request_model(self):
        return DeteeRequest

    def get_input_schema(self) -> dict[str, Any]:
        action_names = self._actions.list_actions()
        summaries: list[str] = []
        for name in action_names:
            definition = self._actions.get_action_definition(name)
            params = ", ".join(
                f"{param.name}{'' if param.required else '?'}: {param.type}" for param in definition.parameters
            )
            summaries.append(f"{name}({params})")

        return {
            "type": "object",
            "properties": {
                "action": {
                    "type": "string",
                    "enum": action_names,
                    "description": "DeeTEE action to run. Available: " + "; ".join(summaries),
                },
                "parameters": {
                    "type": "object",
                    "description": "Parameters for the selected action.",
                },
            },
            "required": ["action"],
            "additionalProperties": False,
        }

    async def execute(self, arguments: dict[str, Any]) -> list[TextContent]:
        try:
            request = self.get_request_model()(**arguments)
        except ValidationError as exc:
            return [self._error_response(f"Invalid request: {exc}")]

        try:
            result = await asyncio.to_thread(self._actions.execute_action, request.action, request.parameters)
        except CommandError as exc:
            metadata = self._build_error_metadata(request.action, exc)
            error_output = ToolOutput(
                status="error",
                content=f"DeeTEE action '{request.action}' failed: {exc}",
                content_type="text",
                metadata=metadata,
            )
            return [TextContent(type="text", text=error_output.model_dump_json())]
        except WorkerNotFoundError as exc:
            return [self._error_response(str(exc), metadata={"action": request.action, "not_found": True})]
        except ActionError as exc:
            return [self._error_response(str(exc), metadata={"action": request.action})]

        tool_output = ToolOutput(
            status="success",
            content=json.dumps(result),
            content_type="json",
            metadata={"action": request.action},
        )
        return [TextContent(type="text", text=tool_output.model_dump_json())]

    def _build_error_metadata(self, action: str, exc: CommandError) -> dict[str, Any]:
        """Assemble metadata for failed CLI calls."""
        metadata: dict[str, Any] = {
            "action": action,
            "return_code": exc.returncode,
        }
        if exc.stdout:
            metadata["stdout"] = exc.stdout.strip()
        if exc.stderr:
            metadata["stderr"] = exc.stderr.strip()
        return metadata

    def _error_response(self, message: str, metadata: dict[str, Any] | None = None) -> TextContent:
        error_output = ToolOutput(status="error", content=message, content_type="text", metadata=metadata or {})
        return TextContent(type="text", text=error_output.model_dump_json())
