"""MCP server (FastMCP) wrapping ToolManager, plus an optional FastAPI app.

Transports:
  stdio  -> create_mcp().run()
  http   -> create_app() under uvicorn; MCP streamable-http routes are merged
            at the root next to /health, /tools and /metrics.

CLI will import this module and call create_mcp() / create_app().
"""
from typing import Annotated, Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Query
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from . import __version__
from .core.config_loader import DEFAULT_WAIT_S, MAX_WAIT_S
from .core.logging import core_logger
from .core.tool_manager import ToolManager
from .tools import default_registry

SERVER_NAME = "theta-edgecloud-on-demand-api"


def _description(manager: ToolManager, name: str) -> str:
    meta = manager.registry.get(name)
    return meta.description if meta else name


def create_mcp(manager: Optional[ToolManager] = None) -> FastMCP:
    manager = manager or ToolManager(default_registry())
    mcp = FastMCP(SERVER_NAME)

    async def _run(name: str, **arguments: Any) -> str:
        result = await manager.call(name, arguments)
        if result.is_error:
            raise ToolError(result.text)
        return result.text

    async def list_services(
        category: Annotated[
            Optional[str], Field(description='Optional filter by category (e.g., "image", "audio", "text")')
        ] = None,
    ) -> str:
        return await _run("list_services", category=category)

    async def infer(
        service: Annotated[str, Field(description='Service alias (e.g., "whisper", "flux-1-schnell", "llama-3-1-8b")')],
        input: Annotated[Dict[str, Any], Field(description="Input parameters for the model (varies by service)")],
        wait: Annotated[
            float,
            Field(ge=0, le=MAX_WAIT_S, description="Seconds to wait for result (0-60, default 30). Use 0 for async processing."),
        ] = DEFAULT_WAIT_S,
        prediction: Annotated[
            Optional[str], Field(description="Specific prediction method if service has multiple (usually not needed)")
        ] = None,
        variant: Annotated[
            Optional[str], Field(description='Model variant to use (e.g., "turbo", "large-v3") if available')
        ] = None,
        webhook: Annotated[
            Optional[str], Field(description="Optional URL the API calls when the request finishes")
        ] = None,
    ) -> str:
        return await _run(
            "infer", service=service, input=input, wait=wait, prediction=prediction, variant=variant, webhook=webhook
        )

    async def get_request_status(
        request_id: Annotated[str, Field(description="The inference request ID (returned from infer tool)")],
    ) -> str:
        return await _run("get_request_status", request_id=request_id)

    async def get_upload_url(
        service: Annotated[str, Field(description='Service alias (e.g., "whisper", "sdxl")')],
        input_field: Annotated[
            str, Field(description='Which input field needs the file (e.g., "audio_filename", "image")')
        ],
    ) -> str:
        return await _run("get_upload_url", service=service, input_field=input_field)

    for fn in (list_services, infer, get_request_status, get_upload_url):
        if manager.registry.get(fn.__name__) is None:
            core_logger.warning("[MCP] %s not in registry; skipping", fn.__name__)
            continue
        mcp.tool(name=fn.__name__, description=_description(manager, fn.__name__))(fn)
    core_logger.info("[MCP] available tools (count=%d): %s", len(manager.registry.list()),
                     ", ".join(m.name for m in manager.registry.list()))
    return mcp


def create_app(manager: Optional[ToolManager] = None, enable_mcp: bool = True) -> FastAPI:
    manager = manager or ToolManager(default_registry())
    registry = manager.registry

    mcp_app = None
    if enable_mcp:
        mcp_app = create_mcp(manager).http_app(transport="streamable-http")

    app = FastAPI(
        title="thetatools-mcp",
        version=__version__,
        lifespan=mcp_app.lifespan if mcp_app is not None else None,
    )

    @app.get("/health")
    def health():
        return {"status": "ok", "tools": len(registry.list()), "mcp": enable_mcp}

    @app.get("/tools")
    def list_tools():
        return {"tools": [m.to_payload() for m in registry.list()]}

    @app.get("/metrics")
    def metrics(tool: Optional[str] = Query(None)):
        if tool and registry.get(tool) is None:
            raise HTTPException(status_code=404, detail="Tool not found")
        return manager.get_metrics(tool)

    if mcp_app is not None:
        for r in mcp_app.routes:
            if not any(getattr(er, "path", None) == getattr(r, "path", None) for er in app.routes):
                app.router.routes.append(r)
        core_logger.info("[MCP] streamable-http routes merged at root")

    app.state.tool_manager = manager
    app.state.registry = registry
    return app


__all__ = ["create_mcp", "create_app", "SERVER_NAME"]
