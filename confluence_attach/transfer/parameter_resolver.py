"""Resolution of transfer parameters from flags and/or a Confluence URL.

The tool accepts either explicit ``--action``/``--filename``/``--pageid``
flags, a single ``--urlbase`` pointing at an attachment resource, or a mix
of both. Values mined from the URL only fill the gaps left by explicit
flags; an explicitly supplied value is never overwritten.

Recognized URL shapes (segments counted after splitting on ``/``):

    https://host/rest/api/content/<pageid>/child/attachment
        -> action=push, page_id=<pageid>

    https://host/download/attachments/<pageid>/<filename>?api=v2
        -> action=pull, page_id=<pageid>, filename=<filename>

The mined filename is percent-decoded so it holds the real attachment title.
"""

import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import unquote

from .errors import InsufficientParametersError
from .models import Action, TransferRequest
from .version_extractor import extract_version

logger = logging.getLogger(__name__)

# Segments 3 and 4 of "https://host/<a>/<b>/..." split on "/"
_ACTION_SEGMENTS = slice(3, 5)
_PUSH_MARKER = ["rest", "api"]
_PULL_MARKER = ["download", "attachments"]


@dataclass(frozen=True)
class MinedParameters:
    """Values recovered from a Confluence attachment URL."""
    action: Action
    page_id: str
    server_root: str
    filename: Optional[str] = None


def mine_url(url: str) -> Optional[MinedParameters]:
    """Extract action, page id and filename from an attachment URL.

    Args:
        url: A push (REST API) or pull (download) attachment URL

    Returns:
        MinedParameters, or None if the URL has neither recognized shape
    """
    if not url:
        return None

    parts = url.split('/')
    if len(parts) < 6:
        return None

    marker = parts[_ACTION_SEGMENTS]
    server_root = '/'.join(parts[:3])

    if marker == _PUSH_MARKER:
        return MinedParameters(
            action=Action.PUSH,
            page_id=parts[-3],
            server_root=server_root,
        )

    if marker == _PULL_MARKER:
        return MinedParameters(
            action=Action.PULL,
            page_id=parts[-2],
            filename=unquote(parts[-1].split('?')[0]),
            server_root=server_root,
        )

    return None


def _parse_action(value: Optional[str]) -> Optional[Action]:
    if not value:
        return None
    try:
        return Action(value.strip().lower())
    except ValueError:
        raise InsufficientParametersError([], f'Unknown action: "{value}"')


class ParameterResolver:
    """Builds a TransferRequest from CLI flags and an optional URL.

    Example:
        >>> resolver = ParameterResolver()
        >>> request = resolver.resolve(
        ...     urlbase="https://wiki/download/attachments/1001/a.pdf?api=v2",
        ...     username="alice",
        ... )
        >>> request.action, request.page_id, request.filename
        (<Action.PULL: 'pull'>, '1001', 'a.pdf')
    """

    def resolve(
        self,
        action: Optional[str] = None,
        filename: Optional[str] = None,
        page_id: Optional[str] = None,
        urlbase: Optional[str] = None,
        username: Optional[str] = None,
    ) -> TransferRequest:
        """Resolve the canonical transfer request.

        Args:
            action: "push" or "pull"
            filename: Local/remote attachment name, optionally ``.v<N>`` suffixed
            page_id: Confluence page id
            urlbase: Attachment URL to mine, or a plain server root
            username: Basic-auth user (only validated here)

        Returns:
            Immutable TransferRequest

        Raises:
            InsufficientParametersError: If action, filename, page id or
                username is still empty after mining
        """
        resolved_action = _parse_action(action)
        base_url = None

        if urlbase:
            mined = mine_url(urlbase)
            if mined is None:
                # Not an attachment URL; treat it as the server root
                base_url = urlbase.rstrip('/')
                logger.debug(f"Using {base_url} as Confluence base URL")
            else:
                logger.debug(f"Mined {mined} from {urlbase}")
                base_url = mined.server_root
                resolved_action = resolved_action or mined.action
                page_id = page_id or mined.page_id
                filename = filename or mined.filename

        missing = []
        if resolved_action is None:
            missing.append("action")
        if not filename:
            missing.append("filename")
        if not page_id:
            missing.append("pageid")
        if not username:
            missing.append("username")
        if missing:
            raise InsufficientParametersError(missing)

        versioned = extract_version(filename)
        return TransferRequest(
            action=resolved_action,
            page_id=str(page_id).strip(),
            filename=filename,
            remote_filename=versioned.remote_title,
            version=versioned.version,
            base_url=base_url,
        )
