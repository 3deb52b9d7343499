"""Unit tests for transfer.attachment_locator module."""

import pytest
from unittest.mock import Mock

from confluence_attach.confluence_client.errors import AuthFailedError, RemoteLookupFailedError
from confluence_attach.transfer.attachment_locator import AttachmentLocator, find_attachment
from confluence_attach.transfer.models import ExistingAttachment
from tests.fixtures.attachment_responses import attachment_entry


class TestFindAttachment:
    """Test cases for find_attachment."""

    def test_returns_first_exact_title_match(self):
        entries = [
            attachment_entry("other.txt", "10"),
            attachment_entry("notes.txt", "55"),
            attachment_entry("notes.txt", "56"),
        ]

        assert find_attachment(entries, "notes.txt") == ExistingAttachment(title="notes.txt", id="55")

    def test_title_match_is_exact(self):
        """Prefixes and different case do not match."""
        entries = [attachment_entry("notes.txt.bak", "1"), attachment_entry("Notes.txt", "2")]

        assert find_attachment(entries, "notes.txt") is None

    def test_empty_listing(self):
        assert find_attachment([], "notes.txt") is None

    def test_numeric_id_is_stringified(self):
        assert find_attachment([{"title": "a", "id": 9}], "a").id == "9"


class TestAttachmentLocator:
    """Test cases for AttachmentLocator."""

    def test_locate_found(self):
        client = Mock()
        client.get_attachments.return_value = [attachment_entry("notes.txt", "55")]

        existing = AttachmentLocator(client).locate("1001", "notes.txt")

        assert existing.id == "55"
        client.get_attachments.assert_called_once_with("1001", filename="notes.txt")

    def test_locate_not_found(self):
        client = Mock()
        client.get_attachments.return_value = []

        assert AttachmentLocator(client).locate("1001", "notes.txt") is None

    def test_auth_failure_is_not_treated_as_not_found(self):
        """Lookup authentication failures propagate instead of meaning "create"."""
        client = Mock()
        client.get_attachments.side_effect = AuthFailedError(user="alice", endpoint="https://wiki")

        with pytest.raises(AuthFailedError):
            AttachmentLocator(client).locate("1001", "notes.txt")

    def test_lookup_failure_propagates(self):
        client = Mock()
        client.get_attachments.side_effect = RemoteLookupFailedError(page_id="1001", reason="boom")

        with pytest.raises(RemoteLookupFailedError):
            AttachmentLocator(client).locate("1001", "notes.txt")
