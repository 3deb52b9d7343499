"""Construction of the final pull/push HTTP request.

    pull:          GET  {base}/download/attachments/{page}/{title}?[version=N&]api=v2
    push (new):    POST {base}/rest/api/content/{page}/child/attachment
    push (update): POST {base}/rest/api/content/{page}/child/attachment/{id}/data
"""

import os
from datetime import datetime
from typing import Optional
from urllib.parse import quote

from .errors import InsufficientParametersError, LocalFileNotFoundError
from .models import Action, ExistingAttachment, ResolvedEndpoint, TransferRequest

NOCHECK_HEADERS = {"X-Atlassian-Token": "nocheck"}


def require_local_file(path: str) -> None:
    """Raise LocalFileNotFoundError unless ``path`` is an existing file."""
    if not os.path.isfile(path):
        raise LocalFileNotFoundError(path)


class RequestBuilder:
    """Assembles ResolvedEndpoint objects for a resolved TransferRequest.

    Args:
        default_base_url: Server root used when the request carries none
        clock: Returns the current time, used for the upload comment
    """

    def __init__(self, default_base_url: Optional[str] = None, clock=datetime.now):
        self.default_base_url = default_base_url
        self._clock = clock

    def base_url_for(self, request: TransferRequest) -> str:
        base_url = request.base_url or self.default_base_url
        if not base_url:
            raise InsufficientParametersError(
                [], "No Confluence base URL configured (use --urlbase or CONFLUENCE_URL)"
            )
        return base_url.rstrip('/')

    def attachments_url(self, request: TransferRequest) -> str:
        """REST collection URL of the page's attachments."""
        return f"{self.base_url_for(request)}/rest/api/content/{request.page_id}/child/attachment"

    def build(
        self,
        request: TransferRequest,
        existing: Optional[ExistingAttachment] = None,
    ) -> ResolvedEndpoint:
        if request.action is Action.PULL:
            return self.build_pull(request)
        return self.build_push(request, existing)

    def build_pull(self, request: TransferRequest) -> ResolvedEndpoint:
        query = "api=v2"
        if request.version is not None:
            query = f"version={request.version}&{query}"

        url = (
            f"{self.base_url_for(request)}/download/attachments/"
            f"{request.page_id}/{quote(request.remote_filename)}?{query}"
        )
        return ResolvedEndpoint(method="GET", url=url)

    def build_push(
        self,
        request: TransferRequest,
        existing: Optional[ExistingAttachment] = None,
    ) -> ResolvedEndpoint:
        """Build the create or new-version upload request.

        Raises:
            LocalFileNotFoundError: If the file to upload does not exist
        """
        require_local_file(request.filename)

        form = [("comment", f"uploaded {self._clock().strftime('%a %b %d %H:%M:%S %Y')}")]
        url = self.attachments_url(request)
        attachment_id = None

        if existing is not None:
            attachment_id = existing.id
            url = f"{url}/{attachment_id}/data"
            form.append(("minorEdit", "false"))

        return ResolvedEndpoint(
            method="POST",
            url=url,
            headers=dict(NOCHECK_HEADERS),
            form=tuple(form),
            file_path=request.filename,
            upload_name=request.remote_filename,
            attachment_id=attachment_id,
        )
