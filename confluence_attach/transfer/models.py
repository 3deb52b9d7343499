"""Data models for a single attachment transfer.

Every model here is created, consumed and discarded within one invocation.
The request-side models are frozen dataclasses so nothing downstream can
change the resolved parameters after resolution.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple


class Action(str, Enum):
    """Transfer direction."""
    PULL = "pull"
    PUSH = "push"

    @property
    def past_tense(self) -> str:
        return f"{self.value}ed"

    @property
    def direction(self) -> str:
        """Preposition used in user-facing messages ("from" / "to")."""
        return "from" if self is Action.PULL else "to"


@dataclass(frozen=True)
class VersionedFilename:
    """A user-supplied filename split into its real name and version.

    Attributes:
        real_filename: Filename with any trailing ``.v<digits>`` removed
        version: The integer version, or None when the name carries no marker
    """
    real_filename: str
    version: Optional[int] = None

    @property
    def remote_title(self) -> str:
        """Attachment title on the server (directory components stripped)."""
        return os.path.basename(self.real_filename)


@dataclass(frozen=True)
class TransferRequest:
    """Fully resolved parameters of one invocation.

    Attributes:
        action: Pull or push
        page_id: Confluence page that owns the attachment
        filename: Local path exactly as supplied (may carry a ``.vN`` suffix)
        remote_filename: Attachment title on the server
        version: Requested historical version, None for the latest
        base_url: Server root derived from --urlbase, None to use the default
    """
    action: Action
    page_id: str
    filename: str
    remote_filename: str
    version: Optional[int] = None
    base_url: Optional[str] = None


@dataclass(frozen=True)
class ExistingAttachment:
    """An attachment already present on the target page."""
    title: str
    id: str


@dataclass(frozen=True)
class ResolvedEndpoint:
    """Final HTTP request for the transfer.

    Attributes:
        method: HTTP method
        url: Complete URL including any query string
        headers: Extra request headers
        form: Multipart form fields other than the file
        file_path: Local file sent as the ``file`` multipart field (push only)
        upload_name: Filename announced for the multipart file (push only)
        attachment_id: Id of the attachment being versioned (push update only)
    """
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    form: Tuple[Tuple[str, str], ...] = ()
    file_path: Optional[str] = None
    upload_name: Optional[str] = None
    attachment_id: Optional[str] = None

    @property
    def is_update(self) -> bool:
        return self.attachment_id is not None


class OutcomeReason(str, Enum):
    """Why a transfer was classified the way it was."""
    PAGE_NOT_FOUND = "page_not_found"
    AUTH_FAILED = "auth_failed"
    EMPTY_RESULT = "empty_result"
    NOT_CONFIRMED = "not_confirmed"
    CONFIRMED_MATCH = "confirmed_match"


@dataclass(frozen=True)
class Outcome:
    """Terminal classification of a transfer response."""
    succeeded: bool
    reason: OutcomeReason
    detail: Optional[str] = None

    @classmethod
    def success(cls) -> "Outcome":
        return cls(succeeded=True, reason=OutcomeReason.CONFIRMED_MATCH)

    @classmethod
    def failure(cls, reason: OutcomeReason, detail: Optional[str] = None) -> "Outcome":
        return cls(succeeded=False, reason=reason, detail=detail)


@dataclass
class TransferConfig:
    """Explicit configuration for one invocation.

    Attributes:
        base_url: Default Confluence server root (e.g. https://wiki.example.com)
        username: Default basic-auth user
        password: Default basic-auth password
        timeout: Request timeout in seconds
        scratch_root: Directory under which per-process scratch areas are made
        verify_ssl: Whether to verify the server's TLS certificate
    """
    base_url: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    timeout: int = 30
    scratch_root: Optional[str] = None
    verify_ssl: bool = True
