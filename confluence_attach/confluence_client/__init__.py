"""Confluence client library for attachment transfers.

This package wraps the Confluence REST API calls needed to list, download
and upload page attachments, and translates HTTP failures into a typed
exception hierarchy.
"""

from .errors import (
    SyncError,
    ConfluenceError,
    AuthFailedError,
    PageNotFoundError,
    TransportError,
    RemoteLookupFailedError,
    TransferFailedError,
    UpsertNotConfirmedError,
)

__all__ = [
    "SyncError",
    "ConfluenceError",
    "AuthFailedError",
    "PageNotFoundError",
    "TransportError",
    "RemoteLookupFailedError",
    "TransferFailedError",
    "UpsertNotConfirmedError",
]
