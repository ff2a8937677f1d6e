"""get_request_status tool: one snapshot of an inference request."""
from __future__ import annotations

from ..core.errors import ToolInputError
from ..core.models import InferState
from .rendering import error_text, render_cost, render_output

TOOL_DEFINITION = {
    "name": "get_request_status",
    "description": "Check the status of an inference request. Use this to get results of async requests.",
    "input_schema": {
        "type": "object",
        "properties": {
            "request_id": {
                "type": "string",
                "description": "The inference request ID (returned from infer tool)",
            },
        },
        "required": ["request_id"],
    },
}


async def get_request_status(client, request_id: str) -> str:
    if not request_id:
        raise ToolInputError("request_id is required")
    request = await client.get_infer_request(request_id)

    out = f"Request ID: {request.id}\n"
    out += f"State: {request.state}\n"
    out += f"Created: {request.create_time}\n"
    out += f"Updated: {request.update_time}\n\n"

    if request.state == InferState.SUCCESS:
        out += render_output(request)
        out += render_cost(request)
    elif request.state == InferState.ERROR:
        out += f"**Error:** {error_text(request)}\n"
    elif request.state in (InferState.PENDING, InferState.PROCESSING):
        out += f"The request is still {request.state}. Check again in a few seconds.\n"
    return out


__all__ = ["TOOL_DEFINITION", "get_request_status"]
