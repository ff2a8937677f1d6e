"""list_services tool: discover the public models and how to call them."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..core.models import Service
from .rendering import to_json

TOOL_DEFINITION = {
    "name": "list_services",
    "description": (
        "List all available AI models and services on Theta EdgeCloud. "
        "Returns service names, descriptions, and input/output specifications."
    ),
    "input_schema": {
        "type": "object",
        "properties": {
            "category": {
                "type": "string",
                "description": 'Optional filter by category (e.g., "image", "audio", "text")',
            },
        },
        "required": [],
    },
}

# Checked in order; first group with a keyword in the alias wins.
CATEGORY_KEYWORDS = (
    ("audio", ("whisper", "audio", "voice")),
    ("image", ("flux", "sdxl", "stable", "image", "upscale")),
    ("text", ("llama", "llm", "text", "chat", "mistral")),
    ("video", ("video",)),
)
OTHER = "other"

NO_DESCRIPTION = "No description available"


@dataclass
class ServiceSummary:
    alias: str
    name: str
    description: str
    category: str
    input_example: Dict[str, Any]
    variants: Optional[List[str]] = None


def categorize(alias: str) -> str:
    alias = (alias or "").lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(k in alias for k in keywords):
            return category
    return OTHER


def _fallback(value: Any, default: Any) -> Any:
    return default if value is None else value


def example_input(service: Service) -> Dict[str, Any]:
    """Placeholder input object built from the default prediction's input vars."""
    prediction = service.default()
    if prediction is None:
        return {}
    example: Dict[str, Any] = {}
    for name, var in prediction.input_vars.items():
        if var.type == "string":
            if "url" in name or "filename" in name:
                example[name] = "https://example.com/file"
            elif name == "prompt":
                example[name] = "Your prompt here"
            else:
                example[name] = var.default or "string value"
        elif var.type in ("number", "integer"):
            example[name] = _fallback(var.default, 1)
        elif var.type == "boolean":
            example[name] = _fallback(var.default, False)
        elif var.type == "array":
            example[name] = _fallback(var.default, [])
        else:
            example[name] = var.default
    return example


def available_variants(service: Service) -> Optional[List[str]]:
    prediction = service.default()
    if prediction and prediction.variants and len(prediction.variants) > 1:
        return list(prediction.variants)
    return None


def summarize(service: Service) -> ServiceSummary:
    prediction = service.default()
    return ServiceSummary(
        alias=service.alias,
        name=service.name,
        description=(prediction.instructions if prediction else None) or NO_DESCRIPTION,
        category=categorize(service.alias),
        input_example=example_input(service),
        variants=available_variants(service),
    )


def render_report(summaries: List[ServiceSummary]) -> str:
    by_category: Dict[str, List[ServiceSummary]] = {}
    for s in summaries:
        by_category.setdefault(s.category, []).append(s)

    out = f"Found {len(summaries)} available services:\n\n"
    for category, items in by_category.items():
        out += f"## {category.upper()}\n\n"
        for s in items:
            out += f"### {s.name} ({s.alias})\n"
            out += f"{s.description}\n"
            if s.variants:
                out += f"Variants: {', '.join(s.variants)}\n"
            out += f"Example input: {to_json(s.input_example)}\n\n"
    return out


async def list_services(client, category: Optional[str] = None) -> str:
    services = await client.list_services()
    public = [s for s in services if s.is_public]
    if category:
        wanted = category.lower()
        public = [s for s in public if categorize(s.alias) == wanted]
    return render_report([summarize(s) for s in public])


__all__ = [
    "TOOL_DEFINITION",
    "ServiceSummary",
    "categorize",
    "example_input",
    "available_variants",
    "render_report",
    "list_services",
]
