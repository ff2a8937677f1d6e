"""Text rendering shared by the infer and status tools."""
from __future__ import annotations
from typing import Any
import json

from ..core.models import InferRequest


def to_json(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False, default=str)


def format_number(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def render_output(request: InferRequest) -> str:
    """Best-effort typed rendering of a successful request's output."""
    out = request.output
    if not out:
        return ""
    if isinstance(out.get("text"), str):
        return f"**Result:**\n{out['text']}\n"
    if isinstance(out.get("url"), str):
        return f"**Generated Image URL:**\n{out['url']}\n"
    if isinstance(out.get("urls"), list):
        lines = ["**Generated Image URLs:**"]
        lines.extend(f"- {u}" for u in out["urls"])
        return "\n".join(lines) + "\n"
    return f"**Output:**\n```json\n{to_json(out)}\n```\n"


def render_cost(request: InferRequest) -> str:
    if request.cost is None:
        return ""
    return f"\nCost: {format_number(request.cost.total)} credits"


def error_text(request: InferRequest) -> str:
    if request.error:
        return str(request.error)
    if request.output and request.output.get("error"):
        return str(request.output["error"])
    return "Unknown error"


__all__ = ["render_output", "render_cost", "error_text", "to_json", "format_number"]
