"""Classification of transfer responses into success or failure.

Confluence answers several logical errors with HTTP 200: a download of a
missing attachment returns an HTML "Page Not Found" page, and a rejected
login can return a page mentioning "Basic Authentication Failure". The
HTTP status is checked first where it is meaningful, then the downloaded
bytes are scanned for those phrases.

Known limitation: a genuine attachment whose content contains one of the
phrases is classified as a failure and removed.
"""

import json
import logging
import os
from typing import Any, Dict, Iterable, Optional
from urllib.parse import unquote

from .models import Outcome, OutcomeReason

logger = logging.getLogger(__name__)

PAGE_NOT_FOUND_MARKERS = (b"page not found", b"page does not exist")
AUTH_FAILURE_MARKERS = (b"basic authentication failure",)

_SCAN_CHUNK_SIZE = 1024 * 1024
_MARKER_OVERLAP = max(len(m) for m in PAGE_NOT_FOUND_MARKERS + AUTH_FAILURE_MARKERS) - 1


def classify_status(status_code: Optional[int]) -> Optional[Outcome]:
    """Classify auth and not-found statuses, or return None for anything else."""
    if status_code in (401, 403):
        return Outcome.failure(OutcomeReason.AUTH_FAILED, f"HTTP {status_code}")
    if status_code == 404:
        return Outcome.failure(OutcomeReason.PAGE_NOT_FOUND, "HTTP 404")
    return None


def _contains_any(haystack: bytes, markers: Iterable[bytes]) -> bool:
    return any(marker in haystack for marker in markers)


def classify_pull_content(content: bytes) -> Outcome:
    """Classify downloaded bytes by phrase scanning (case-insensitive).

    Example:
        >>> classify_pull_content(b"<h1>Page Not Found</h1>").reason
        <OutcomeReason.PAGE_NOT_FOUND: 'page_not_found'>
    """
    if not content:
        return Outcome.failure(OutcomeReason.EMPTY_RESULT)

    lowered = content.lower()
    if _contains_any(lowered, PAGE_NOT_FOUND_MARKERS):
        return Outcome.failure(OutcomeReason.PAGE_NOT_FOUND)
    if _contains_any(lowered, AUTH_FAILURE_MARKERS):
        return Outcome.failure(OutcomeReason.AUTH_FAILED)
    return Outcome.success()


def _scan_file(path: str) -> Outcome:
    """Phrase-scan a file in chunks so large attachments are not loaded whole."""
    page_not_found = False
    auth_failed = False
    tail = b""
    size = 0

    with open(path, 'rb') as fh:
        while True:
            chunk = fh.read(_SCAN_CHUNK_SIZE)
            if not chunk:
                break
            size += len(chunk)
            window = tail + chunk.lower()
            page_not_found = page_not_found or _contains_any(window, PAGE_NOT_FOUND_MARKERS)
            auth_failed = auth_failed or _contains_any(window, AUTH_FAILURE_MARKERS)
            tail = window[-_MARKER_OVERLAP:]

    if size == 0:
        return Outcome.failure(OutcomeReason.EMPTY_RESULT)
    if page_not_found:
        return Outcome.failure(OutcomeReason.PAGE_NOT_FOUND)
    if auth_failed:
        return Outcome.failure(OutcomeReason.AUTH_FAILED)
    return Outcome.success()


def classify_pull(path: str, status_code: Optional[int] = None) -> Outcome:
    """Classify a completed download and remove it if it is not genuine.

    Args:
        path: Local file the response body was written to
        status_code: HTTP status of the download, if known

    Returns:
        Outcome; on failure the file at ``path`` no longer exists
    """
    outcome = classify_status(status_code)
    if outcome is None and status_code is not None and status_code >= 400:
        outcome = Outcome.failure(OutcomeReason.NOT_CONFIRMED, f"HTTP {status_code}")
    if outcome is None:
        if not os.path.exists(path):
            outcome = Outcome.failure(OutcomeReason.EMPTY_RESULT, "nothing was downloaded")
        else:
            outcome = _scan_file(path)

    if not outcome.succeeded and os.path.exists(path):
        logger.info(f"Removing {path}: download classified as {outcome.reason.value}")
        os.remove(path)

    return outcome


def extract_json_payload(body: str) -> Optional[Dict[str, Any]]:
    """Return the first line of ``body`` that starts with '{"' and parses as JSON."""
    for line in body.splitlines():
        line = line.strip()
        if not line.startswith('{"'):
            continue
        try:
            payload = json.loads(line)
        except ValueError:
            logger.debug(f"Ignoring unparseable JSON line: {line[:80]}")
            continue
        if isinstance(payload, dict):
            return payload
    return None


def _webui_link(payload: Dict[str, Any], updating: bool) -> Optional[str]:
    try:
        if updating:
            return payload['_links']['webui']
        return payload['results'][0]['_links']['webui']
    except (KeyError, IndexError, TypeError):
        return None


def classify_push(
    body: str,
    remote_title: str,
    updating: bool,
    status_code: Optional[int] = None,
) -> Outcome:
    """Classify an upload response.

    The upload is confirmed when the ``webui`` link of the returned
    attachment (``results[0]._links.webui`` for a new attachment,
    ``_links.webui`` for a new version) contains the attachment's name.

    Args:
        body: Response body text
        remote_title: Attachment title that was uploaded
        updating: True if a new version of an existing attachment was posted
        status_code: HTTP status of the upload, if known
    """
    outcome = classify_status(status_code)
    if outcome is not None:
        return outcome

    payload = extract_json_payload(body)
    if payload is None and status_code is not None and status_code >= 400:
        return Outcome.failure(OutcomeReason.NOT_CONFIRMED, f"HTTP {status_code}")
    if payload is None:
        return Outcome.failure(OutcomeReason.EMPTY_RESULT, "no JSON in response")

    if status_code is not None and status_code >= 400:
        message = payload.get('message') or f"HTTP {status_code}"
        return Outcome.failure(OutcomeReason.NOT_CONFIRMED, message)

    webui = _webui_link(payload, updating)
    if not isinstance(webui, str) or not webui:
        return Outcome.failure(OutcomeReason.EMPTY_RESULT, "response has no webui link")

    title = os.path.basename(remote_title)
    if title in webui or title in unquote(webui):
        return Outcome.success()
    return Outcome.failure(OutcomeReason.NOT_CONFIRMED, f"webui link {webui} does not name {title}")
