"""Core framework components for thetatools.

Modules:
  config_loader: Client configuration from YAML file and environment.
  errors: Exception hierarchy.
  logging: Logger setup and payload summaries.
  models: Value shapes returned by the on-demand API.
  registry: In-memory registry of tool metadata.
  tool_manager: Tool dispatch with uniform error results and metrics.
"""

from .registry import ToolRegistry  # noqa: F401
