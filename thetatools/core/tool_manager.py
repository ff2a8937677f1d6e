"""ToolManager: dispatch tool calls and keep per-tool call metrics.

This is the boundary between the MCP transport and the formatters. Every
failure below it (HTTP errors, missing entities, bad arguments, missing
configuration) comes back as an error-flagged text result instead of an
exception, so one bad call never takes the server down.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional
import time

from .errors import ToolInputError, ToolNotFoundError
from .logging import core_logger, summarize_for_log
from .registry import ToolRegistry


@dataclass
class ToolResult:
    text: str
    is_error: bool = False


def _default_client_factory():
    from ..api.client import get_client
    return get_client()


class ToolManager:
    def __init__(self, registry: ToolRegistry, client_factory: Optional[Callable[[], Any]] = None):
        self.registry = registry
        self._client_factory = client_factory or _default_client_factory
        # metrics: per tool name
        self._metrics: Dict[str, Dict[str, Any]] = {}

    def _check_arguments(self, name: str, arguments: Dict[str, Any]) -> Dict[str, Any]:
        meta = self.registry.get(name)
        if meta is None:
            raise ToolNotFoundError(f"Unknown tool: {name}")
        missing = [p for p in meta.required if arguments.get(p) is None]
        if missing:
            raise ToolInputError(f"Missing required argument(s) for {name}: {', '.join(missing)}")
        known = set(meta.params)
        unknown = sorted(k for k in arguments if k not in known)
        if unknown:
            raise ToolInputError(f"Unknown argument(s) for {name}: {', '.join(unknown)}")
        # None means "not provided"
        return {k: v for k, v in arguments.items() if v is not None}

    def _record(self, name: str, latency: float, failed: bool):
        m = self._metrics.setdefault(
            name, {"call_count": 0, "error_count": 0, "total_latency_ms": 0.0, "last_latency_ms": 0.0}
        )
        m["call_count"] += 1
        if failed:
            m["error_count"] += 1
        m["total_latency_ms"] += latency
        m["last_latency_ms"] = latency
        m["avg_latency_ms"] = m["total_latency_ms"] / m["call_count"]

    async def call(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> ToolResult:
        arguments = dict(arguments or {})
        core_logger.info("tool call name=%s args=%s", name, summarize_for_log(arguments))
        start = time.time()
        try:
            kwargs = self._check_arguments(name, arguments)
            meta = self.registry.get(name)
            client = self._client_factory()
            text = await meta.handler(client, **kwargs)
            result = ToolResult(text=text)
        except ToolNotFoundError as e:
            core_logger.warning("%s", e)
            return ToolResult(text=f"Error: {e}", is_error=True)
        except Exception as e:  # noqa: BLE001 - every failure becomes an error result
            core_logger.warning("tool %s failed: %s: %s", name, type(e).__name__, e)
            result = ToolResult(text=f"Error: {e}", is_error=True)
        latency = (time.time() - start) * 1000.0
        self._record(name, latency, result.is_error)
        core_logger.debug("tool %s done error=%s latency_ms=%.2f", name, result.is_error, latency)
        return result

    def get_metrics(self, name: str | None = None):
        """Return metrics for a single tool or all tools.
        If name is None returns dict of all metrics plus aggregate summary under key '__aggregate__'."""
        if name:
            return self._metrics.get(name, {}).copy()
        aggregate = {"tools": len(self._metrics), "call_total": 0, "error_total": 0, "avg_latency_ms": 0.0}
        total_latency = 0.0
        for m in self._metrics.values():
            aggregate["call_total"] += m.get("call_count", 0)
            aggregate["error_total"] += m.get("error_count", 0)
            total_latency += m.get("total_latency_ms", 0.0)
        if aggregate["call_total"]:
            aggregate["avg_latency_ms"] = total_latency / aggregate["call_total"]
        all_metrics = {tid: data.copy() for tid, data in self._metrics.items()}
        all_metrics["__aggregate__"] = aggregate
        return all_metrics


__all__ = ["ToolManager", "ToolResult"]
