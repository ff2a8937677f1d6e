"""Client configuration loading and validation.

Sources, lowest precedence first:
- built-in defaults
- YAML file (explicit path or THETATOOLS_CONFIG_FILE)
- environment: THETA_API_KEY, THETA_API_BASE_URL, THETATOOLS_TIMEOUT_S

YAML keys: api_key, base_url, timeout_s.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional
import os
import yaml
from .errors import ConfigError, MissingApiKeyError

DEFAULT_BASE_URL = "https://ondemand.thetaedgecloud.com"
DEFAULT_TIMEOUT_S = 90.0
DEFAULT_WAIT_S = 30
MAX_WAIT_S = 60

API_KEY_ENV = "THETA_API_KEY"
BASE_URL_ENV = "THETA_API_BASE_URL"
TIMEOUT_ENV = "THETATOOLS_TIMEOUT_S"
CONFIG_FILE_ENV = "THETATOOLS_CONFIG_FILE"

_FILE_KEYS = {"api_key", "base_url", "timeout_s"}


@dataclass(frozen=True)
class ClientConfig:
    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout_s: float = DEFAULT_TIMEOUT_S


def _read_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    unknown = set(data) - _FILE_KEYS
    if unknown:
        raise ConfigError(f"Unknown config keys in {path}: {', '.join(sorted(unknown))}")
    return data


def _as_float(name: str, value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be a number, got {value!r}") from None


def _validate(cfg: ClientConfig):
    if not cfg.api_key:
        raise MissingApiKeyError(f"{API_KEY_ENV} environment variable is required")
    if not cfg.base_url.startswith(("http://", "https://")):
        raise ConfigError(f"Invalid base_url (expected http(s)://...): {cfg.base_url}")
    if cfg.timeout_s <= 0:
        raise ConfigError(f"timeout_s must be positive, got {cfg.timeout_s}")


def load_config(path: Optional[str] = None, env: Optional[Mapping[str, str]] = None) -> ClientConfig:
    env = os.environ if env is None else env
    merged: Dict[str, Any] = {
        "api_key": "",
        "base_url": DEFAULT_BASE_URL,
        "timeout_s": DEFAULT_TIMEOUT_S,
    }
    cfg_path = path or env.get(CONFIG_FILE_ENV)
    if cfg_path:
        p = Path(cfg_path)
        if not p.exists():
            raise ConfigError(f"Config file not found: {p}")
        merged.update({k: v for k, v in _read_yaml(p).items() if v is not None})
    if env.get(API_KEY_ENV):
        merged["api_key"] = env[API_KEY_ENV]
    if env.get(BASE_URL_ENV):
        merged["base_url"] = env[BASE_URL_ENV]
    if env.get(TIMEOUT_ENV):
        merged["timeout_s"] = env[TIMEOUT_ENV]
    cfg = ClientConfig(
        api_key=str(merged["api_key"] or "").strip(),
        base_url=str(merged["base_url"]).rstrip("/"),
        timeout_s=_as_float("timeout_s", merged["timeout_s"]),
    )
    _validate(cfg)
    return cfg


def mask_secret(value: str, keep: int = 4) -> str:
    """Log-safe rendering of an API key: length plus the first few chars."""
    if not value:
        return "<empty>"
    if len(value) <= keep * 2:
        return f"len={len(value)} ****"
    return f"len={len(value)} {value[:keep]}****"


__all__ = [
    "ClientConfig",
    "load_config",
    "mask_secret",
    "ConfigError",
    "MissingApiKeyError",
    "DEFAULT_BASE_URL",
    "DEFAULT_WAIT_S",
    "MAX_WAIT_S",
]
