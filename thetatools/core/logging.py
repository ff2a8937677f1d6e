"""Lightweight logging setup for the adapter.

Users can override log level with THETATOOLS_LOG_LEVEL env var.

Handlers write to stderr only: stdout belongs to the stdio MCP transport.

Also includes a helper to summarize JSON payloads (model inputs/outputs,
service listings) for logging without dumping full bodies to the logs.
"""
from __future__ import annotations
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict


def _preview(value: Any, limit: int = 120) -> str:
    try:
        s = str(value)
    except Exception:
        return f"<{type(value).__name__}>"
    if len(s) > limit:
        s = s[: limit - 3] + "..."
    return s


def summarize_for_log(obj: Any, *, max_items: int = 8) -> Any:
    """Return a compact, JSON-serializable summary suitable for logging.

    - Dict: size, keys (truncated) and value types (not full values)
    - List/Tuple: length and a short preview of item values
    - str: length and truncated preview
    - Other scalars: returned directly
    """
    if obj is None or isinstance(obj, (bool, int, float)):
        return obj
    if isinstance(obj, str):
        return {"type": "str", "len": len(obj), "preview": obj if len(obj) <= 200 else obj[:197] + "..."}
    if isinstance(obj, (bytes, bytearray)):
        return {"type": type(obj).__name__, "len": len(obj)}
    if isinstance(obj, dict):
        keys = list(obj.keys())[:max_items]
        out: Dict[str, Any] = {"type": "dict", "len": len(obj), "keys": [str(k) for k in keys]}
        out["value_types"] = {str(k): type(obj[k]).__name__ for k in keys}
        return out
    if isinstance(obj, (list, tuple)):
        items = list(obj)[:max_items]
        return {
            "type": type(obj).__name__,
            "len": len(obj),
            "preview": [_preview(x) for x in items],
        }
    return {"type": type(obj).__name__}


LOG_LEVEL = os.getenv("THETATOOLS_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured: Dict[str, logging.Logger] = {}


def _file_handler(log_dir: str) -> logging.Handler:
    p = Path(log_dir)
    p.mkdir(parents=True, exist_ok=True)
    fh = logging.FileHandler(p / "thetatools.log", encoding="utf-8")
    fh.setFormatter(logging.Formatter(LOG_FORMAT))
    return fh


def get_logger(name: str = "thetatools") -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(stream_handler)
        # Optional file handler if THETATOOLS_LOG_DIR is set
        log_dir = os.getenv("THETATOOLS_LOG_DIR")
        if log_dir:
            try:
                logger.addHandler(_file_handler(log_dir))
            except OSError as e:
                logger.warning("could not open log file in %s: %s", log_dir, e)
        logger.setLevel(os.getenv("THETATOOLS_LOG_LEVEL", LOG_LEVEL).upper())
        logger.propagate = False
        _configured[name] = logger
    return logger


def enable_file_logging(log_dir: str):
    """Point every logger created so far at thetatools.log in log_dir.

    A file handler writing somewhere else is replaced.
    """
    target = os.path.abspath(Path(log_dir) / "thetatools.log")
    handler = None
    for logger in _configured.values():
        old = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
        if any(h.baseFilename == target for h in old):
            continue
        if handler is None:
            handler = _file_handler(log_dir)
        for h in old:
            logger.removeHandler(h)
            h.close()
        logger.addHandler(handler)


core_logger = get_logger("thetatools.core")

__all__ = ["get_logger", "core_logger", "summarize_for_log", "enable_file_logging"]
