"""Centralized exception hierarchy for the Theta tool adapter."""
from __future__ import annotations
from typing import Optional


class ThetaToolsError(Exception):
    """Base class for all adapter errors."""


class ConfigError(ThetaToolsError):
    pass


class MissingApiKeyError(ConfigError):
    pass


class ToolNotFoundError(ThetaToolsError):
    pass


class ToolInputError(ThetaToolsError):  # bad tool arguments
    pass


class ApiError(ThetaToolsError):
    """Non-success response (or transport failure) from the remote API."""

    def __init__(self, status: Optional[int], message: str):
        self.status = status
        self.message = message
        if status is None:
            super().__init__(f"API Error: {message}")
        else:
            super().__init__(f"API Error ({status}): {message}")


class NotFoundError(ApiError):
    """The remote call succeeded but returned no matching entity."""

    def __init__(self, message: str):
        super().__init__(404, message)
