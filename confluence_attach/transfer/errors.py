"""Exceptions raised while resolving and preparing a transfer.

These are detected locally, before any network activity happens.
"""

from typing import List

from confluence_attach.confluence_client.errors import SyncError


class TransferError(SyncError):
    """Base exception for transfer preparation errors."""
    pass


class InsufficientParametersError(TransferError):
    """Raised when the action, filename, page id or user cannot be determined."""

    def __init__(self, missing: List[str], message: str = "Not enough command line arguments detected"):
        if missing:
            message = f"{message} (missing: {', '.join(missing)})"
        super().__init__(message)
        self.missing = missing


class LocalFileNotFoundError(TransferError):
    """Raised when the file to push does not exist locally."""

    def __init__(self, path: str):
        super().__init__(f'Could not find file "{path}"')
        self.path = path
