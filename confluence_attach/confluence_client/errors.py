"""Typed exception hierarchy for Confluence-related errors.

This module defines the exceptions raised while talking to a Confluence
server. All of them inherit from ConfluenceError so callers can catch the
whole family, and each carries the context needed to explain the failure
to the user.
"""

from typing import Optional


class SyncError(Exception):
    """Base exception for all confluence-attach errors.

    Use this to catch any application-level error from the tool.
    """
    pass


class ConfluenceError(SyncError):
    """Base exception for all Confluence-related errors."""
    pass


class AuthFailedError(ConfluenceError):
    """Raised when the server rejects the basic-auth credentials."""

    def __init__(self, user: str, endpoint: str):
        super().__init__(
            f"Could not authenticate against Confluence URL {endpoint} (user: {user})"
        )
        self.user = user
        self.endpoint = endpoint


class PageNotFoundError(ConfluenceError):
    """Raised when the page or attachment behind a URL does not exist."""

    def __init__(self, page_id: str, url: Optional[str] = None):
        if url:
            message = f"There is no valid attachment link at URL: {url}"
        else:
            message = f"Page {page_id} not found"
        super().__init__(message)
        self.page_id = page_id
        self.url = url


class TransportError(ConfluenceError):
    """Raised when the server cannot be reached at the network level."""

    def __init__(self, endpoint: str, reason: Optional[str] = None):
        message = f"Confluence is not reachable at {endpoint}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.endpoint = endpoint
        self.reason = reason


class RemoteLookupFailedError(ConfluenceError):
    """Raised when the attachment list of a page cannot be read."""

    def __init__(self, page_id: str, reason: Optional[str] = None):
        message = f"Could not list attachments of page {page_id}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.page_id = page_id
        self.reason = reason


class TransferFailedError(ConfluenceError):
    """Raised when a transfer completed but its result could not be confirmed."""

    def __init__(self, action: str, filename: str, url: str, detail: Optional[str] = None):
        direction = "from" if action == "pull" else "to"
        message = f'Failed to {action} file "{filename}" {direction} {url}'
        if detail:
            message += f" ({detail})"
        super().__init__(message)
        self.action = action
        self.filename = filename
        self.url = url
        self.detail = detail


class UpsertNotConfirmedError(TransferFailedError):
    """Raised when a push response does not confirm the uploaded attachment."""

    def __init__(self, filename: str, url: str, detail: Optional[str] = None):
        super().__init__("push", filename, url, detail)
