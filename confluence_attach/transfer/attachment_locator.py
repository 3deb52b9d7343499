"""Lookup of an existing attachment on the target page (push only).

Confluence creates a new attachment when posting to the page's attachment
collection and a new version when posting to an attachment's ``data``
resource, so a push first has to find out whether the title is taken.
"""

import logging
from typing import Any, Dict, Iterable, Optional

from confluence_attach.confluence_client.api_wrapper import AttachmentClient

from .models import ExistingAttachment

logger = logging.getLogger(__name__)


def find_attachment(
    attachments: Iterable[Dict[str, Any]],
    title: str,
) -> Optional[ExistingAttachment]:
    """Return the first attachment whose title equals ``title`` exactly."""
    for entry in attachments:
        if entry.get('title') == title and entry.get('id'):
            return ExistingAttachment(title=entry['title'], id=str(entry['id']))
    return None


class AttachmentLocator:
    """Finds an attachment already titled like the file being pushed.

    Lookup failures propagate: an authentication failure raises
    AuthFailedError and any other failure RemoteLookupFailedError, so a
    broken lookup never turns into "create a new attachment".
    """

    def __init__(self, client: AttachmentClient):
        self.client = client

    def locate(self, page_id: str, remote_title: str) -> Optional[ExistingAttachment]:
        """Look up ``remote_title`` among the attachments of ``page_id``.

        Returns:
            ExistingAttachment if found, None if the page has no such attachment
        """
        attachments = self.client.get_attachments(page_id, filename=remote_title)
        existing = find_attachment(attachments, remote_title)

        if existing:
            logger.info(f'Attachment "{remote_title}" exists on page {page_id} with id {existing.id}')
        else:
            logger.info(f'Attachment "{remote_title}" not found on page {page_id}, will create it')
        return existing
