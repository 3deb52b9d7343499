"""Typed exception hierarchy for CLI-related errors."""

from typing import Optional

from confluence_attach.confluence_client.errors import SyncError


class CLIError(SyncError):
    """Base exception for all CLI-related errors."""
    pass


class ConfigError(CLIError):
    """Raised when an environment setting has an invalid value."""

    def __init__(self, message: str, setting: Optional[str] = None):
        if setting:
            full_message = f"Config error in '{setting}': {message}"
        else:
            full_message = f"Config error: {message}"
        super().__init__(full_message)
        self.setting = setting
        self.original_message = message
