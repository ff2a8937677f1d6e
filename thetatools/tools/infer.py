"""infer tool: submit one inference job and report whatever state comes back.

The remote side does the waiting (``wait`` seconds, 0-60). A job that has
not finished by then is reported as pending together with the follow-up
``get_request_status`` call.
"""
from __future__ import annotations
from typing import Any, Dict, Optional

from ..core.config_loader import DEFAULT_WAIT_S, MAX_WAIT_S
from ..core.errors import ToolInputError
from ..core.models import InferRequest, InferState
from .rendering import error_text, render_cost, render_output

TOOL_DEFINITION = {
    "name": "infer",
    "description": (
        "Run AI inference on a Theta EdgeCloud model. Supports image generation, "
        "audio transcription, text generation, and more."
    ),
    "input_schema": {
        "type": "object",
        "properties": {
            "service": {
                "type": "string",
                "description": 'Service alias (e.g., "whisper", "flux-1-schnell", "llama-3-1-8b")',
            },
            "input": {
                "type": "object",
                "description": "Input parameters for the model (varies by service)",
                "additionalProperties": True,
            },
            "wait": {
                "type": "number",
                "description": "Seconds to wait for result (0-60, default 30). Use 0 for async processing.",
                "minimum": 0,
                "maximum": MAX_WAIT_S,
                "default": DEFAULT_WAIT_S,
            },
            "prediction": {
                "type": "string",
                "description": "Specific prediction method if service has multiple (usually not needed)",
            },
            "variant": {
                "type": "string",
                "description": 'Model variant to use (e.g., "turbo", "large-v3") if available',
            },
            "webhook": {
                "type": "string",
                "description": "Optional URL the API calls when the request finishes",
            },
        },
        "required": ["service", "input"],
    },
}


def _check_wait(wait: Any) -> float:
    if isinstance(wait, bool) or not isinstance(wait, (int, float)):
        raise ToolInputError(f"wait must be a number between 0 and {MAX_WAIT_S}, got {wait!r}")
    if not 0 <= wait <= MAX_WAIT_S:
        raise ToolInputError(f"wait must be between 0 and {MAX_WAIT_S}, got {wait}")
    return wait


def format_success(request: InferRequest) -> str:
    out = "Inference completed successfully!\n\n"
    out += f"Request ID: {request.id}\n\n"
    out += render_output(request)
    out += render_cost(request)
    return out


def format_error(request: InferRequest) -> str:
    out = "Inference failed.\n\n"
    out += f"Request ID: {request.id}\n"
    out += f"Error: {error_text(request)}\n"
    return out


def format_pending(request: InferRequest) -> str:
    out = "Inference request is still processing.\n\n"
    out += f"Request ID: {request.id}\n"
    out += f"Current State: {request.state}\n\n"
    out += "To check the status later, use:\n"
    out += f'get_request_status(request_id="{request.id}")\n'
    return out


async def infer(
    client,
    service: str,
    input: Dict[str, Any],
    wait: Optional[float] = None,
    prediction: Optional[str] = None,
    variant: Optional[str] = None,
    webhook: Optional[str] = None,
) -> str:
    if not service:
        raise ToolInputError("service is required")
    if not isinstance(input, dict):
        raise ToolInputError("input must be an object")
    wait_s = _check_wait(DEFAULT_WAIT_S if wait is None else wait)
    request = await client.create_infer_request(
        service,
        input,
        wait=wait_s,
        prediction=prediction,
        variant=variant,
        webhook=webhook,
    )
    if not request.is_terminal:
        return format_pending(request)
    if request.state == InferState.ERROR:
        return format_error(request)
    return format_success(request)


__all__ = ["TOOL_DEFINITION", "infer", "format_success", "format_error", "format_pending"]
