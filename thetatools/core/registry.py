"""In-memory tool registry."""
from __future__ import annotations
from typing import Any, Awaitable, Callable, Dict, List, Optional
from dataclasses import dataclass, field
import threading

Handler = Callable[..., Awaitable[str]]


@dataclass
class ToolMeta:
    name: str
    description: str
    handler: Handler
    input_schema: Dict[str, Any] = field(default_factory=dict)

    @property
    def required(self) -> List[str]:
        return list(self.input_schema.get("required") or [])

    @property
    def params(self) -> List[str]:
        return list((self.input_schema.get("properties") or {}).keys())

    def to_payload(self) -> Dict[str, Any]:
        return {"name": self.name, "description": self.description, "input_schema": self.input_schema}


class ToolRegistry:
    def __init__(self):
        self._lock = threading.RLock()
        self._tools: Dict[str, ToolMeta] = {}

    def register(self, meta: ToolMeta):
        with self._lock:
            if meta.name in self._tools:
                raise ValueError(f"Duplicate tool name: {meta.name}")
            self._tools[meta.name] = meta

    def get(self, name: str) -> Optional[ToolMeta]:
        return self._tools.get(name)

    def list(self) -> List[ToolMeta]:
        return list(self._tools.values())

    def clear(self):
        with self._lock:
            self._tools.clear()

__all__ = ["ToolRegistry", "ToolMeta", "Handler"]
