"""The four MCP tools exposed by the adapter.

Each module holds a TOOL_DEFINITION (name, description, JSON input schema)
and an async formatter taking the API client as its first argument.
"""
from __future__ import annotations

from ..core.registry import ToolMeta, ToolRegistry
from . import infer, list_services, request_status, upload_url

TOOL_MODULES = [
    (list_services.TOOL_DEFINITION, list_services.list_services),
    (infer.TOOL_DEFINITION, infer.infer),
    (request_status.TOOL_DEFINITION, request_status.get_request_status),
    (upload_url.TOOL_DEFINITION, upload_url.get_upload_url),
]


def default_registry() -> ToolRegistry:
    registry = ToolRegistry()
    for definition, handler in TOOL_MODULES:
        registry.register(
            ToolMeta(
                name=definition["name"],
                description=definition["description"],
                handler=handler,
                input_schema=definition["input_schema"],
            )
        )
    return registry


__all__ = ["default_registry", "TOOL_MODULES"]
