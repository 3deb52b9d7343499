"""Transfer command orchestration.

This module implements TransferCommand, which runs exactly one pull or push
per invocation:

    resolve parameters -> (push) look up existing attachment
    -> build request -> send -> classify response -> report

Every failure is terminal. Parameter problems are reported before any
credential prompt or network activity. An authentication failure during a
pull takes a separate, fatal path without the usage text.
"""

import logging
import os
from datetime import datetime
from typing import Callable, Optional

from requests.exceptions import ChunkedEncodingError, ConnectionError, Timeout

from confluence_attach.confluence_client.api_wrapper import AttachmentClient
from confluence_attach.confluence_client.auth import (
    CredentialProvider,
    PromptCredentialProvider,
)
from confluence_attach.confluence_client.errors import (
    AuthFailedError,
    PageNotFoundError,
    SyncError,
    TransferFailedError,
    TransportError,
    UpsertNotConfirmedError,
)
from confluence_attach.transfer.attachment_locator import AttachmentLocator
from confluence_attach.transfer.models import (
    Action,
    Outcome,
    OutcomeReason,
    ResolvedEndpoint,
    TransferConfig,
    TransferRequest,
)
from confluence_attach.transfer.outcome_classifier import (
    classify_pull,
    classify_push,
    classify_status,
)
from confluence_attach.transfer.parameter_resolver import ParameterResolver
from confluence_attach.transfer.request_builder import RequestBuilder, require_local_file
from confluence_attach.transfer.scratch import capture_json_lines, scratch_directory

from .models import ExitCode
from .output import OutputHandler

logger = logging.getLogger(__name__)

DOWNLOAD_CHUNK_SIZE = 64 * 1024


class TransferCommand:
    """Runs one attachment pull or push.

    Dependencies can be injected for testing; by default credentials are
    prompted for on the terminal and an AttachmentClient is created for the
    resolved server.

    Example:
        >>> from confluence_attach.cli.config import ConfigLoader
        >>> cmd = TransferCommand(config=ConfigLoader.load())
        >>> exit_code = cmd.run(action="pull", filename="a.pdf", page_id="1001",
        ...                     username="alice")
    """

    def __init__(
        self,
        config: Optional[TransferConfig] = None,
        output_handler: Optional[OutputHandler] = None,
        resolver: Optional[ParameterResolver] = None,
        credential_provider: Optional[CredentialProvider] = None,
        client_factory: Optional[Callable[..., AttachmentClient]] = None,
        confirm: Optional[Callable[[str], bool]] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """Initialize the command.

        Args:
            config: Transfer configuration (defaults apply if None)
            output_handler: Terminal output handler
            resolver: Parameter resolver
            credential_provider: Credential source; a PromptCredentialProvider
                for the resolved user is created if None
            client_factory: Callable(base_url, credential_provider, timeout,
                verify_ssl) returning an AttachmentClient
            confirm: Asks a yes/no question, used before overwriting a local file
            clock: Current-time source for the upload comment
        """
        self.config = config or TransferConfig()
        self.output_handler = output_handler or OutputHandler()
        self.resolver = resolver or ParameterResolver()
        self.credential_provider = credential_provider
        self.client_factory = client_factory or AttachmentClient
        self.confirm = confirm
        self.clock = clock

    def run(
        self,
        action: Optional[str] = None,
        filename: Optional[str] = None,
        page_id: Optional[str] = None,
        urlbase: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        debug: bool = False,
        assume_yes: bool = False,
    ) -> ExitCode:
        """Execute the transfer and report the result.

        Returns:
            ExitCode for the process
        """
        username = username or self.config.username
        password = password or self.config.password

        try:
            request = self.resolver.resolve(
                action=action,
                filename=filename,
                page_id=page_id,
                urlbase=urlbase,
                username=username,
            )
            builder = RequestBuilder(self.config.base_url, clock=self.clock)
            base_url = builder.base_url_for(request)
            if request.action is Action.PUSH:
                require_local_file(request.filename)

            logger.info(
                f"Resolved {request.action.value} of {request.remote_filename} "
                f"(version: {request.version or 'latest'}) on page {request.page_id}"
            )

            provider = self.credential_provider or PromptCredentialProvider(username, password)
            client = self.client_factory(
                base_url,
                provider,
                timeout=self.config.timeout,
                verify_ssl=self.config.verify_ssl,
            )

            existing = None
            if request.action is Action.PUSH:
                existing = AttachmentLocator(client).locate(request.page_id, request.remote_filename)

            endpoint = builder.build(request, existing)

            if debug:
                self.output_handler.print_debug_request(
                    request, endpoint, username, password_supplied=bool(password)
                )
                return ExitCode.SUCCESS

            if request.action is Action.PULL:
                return self._pull(client, request, endpoint, assume_yes)
            return self._push(client, request, endpoint, username)

        except TransportError as e:
            logger.error(f"Transfer failed: {e}")
            self.output_handler.print_failure(str(e))
            return ExitCode.NETWORK_ERROR

        except SyncError as e:
            logger.error(f"Transfer failed: {e}")
            self.output_handler.print_failure(str(e))
            return ExitCode.GENERAL_ERROR

        except Exception as e:
            logger.exception("Unexpected error during transfer")
            self.output_handler.print_failure(f"Unexpected error: {e}")
            return ExitCode.GENERAL_ERROR

    def _confirm_overwrite(self, path: str, assume_yes: bool) -> bool:
        """Ask before replacing an existing local file; True means go ahead."""
        if assume_yes:
            return True
        if self.confirm is None:
            return False
        return self.confirm(f'WARNING:  Filename "{path}" exists ... overwrite?')

    def _pull(
        self,
        client: AttachmentClient,
        request: TransferRequest,
        endpoint: ResolvedEndpoint,
        assume_yes: bool,
    ) -> ExitCode:
        """Download the attachment into request.filename and verify it."""
        target = request.filename

        if os.path.exists(target):
            if not self._confirm_overwrite(target, assume_yes):
                self.output_handler.print("Operation cancelled by user")
                return ExitCode.SUCCESS
            self.output_handler.warning(f'Local file "{target}" WILL BE REMOVED')
            os.remove(target)

        response = client.send(endpoint.method, endpoint.url, stream=True)
        try:
            status_code = response.status_code
            if classify_status(status_code) is None and status_code < 400:
                self._download(response, target, endpoint.url)
        finally:
            response.close()

        outcome = classify_pull(target, status_code)
        logger.info(f"Pull classified as {outcome.reason.value}")

        if outcome.succeeded:
            self._report_success(request, endpoint)
            return ExitCode.SUCCESS

        if outcome.reason is OutcomeReason.AUTH_FAILED:
            # Fatal: no usage text, distinct exit code
            self.output_handler.error(
                f"Could not authenticate against Confluence URL {endpoint.url} ... exiting"
            )
            return ExitCode.AUTH_ERROR

        if outcome.reason is OutcomeReason.PAGE_NOT_FOUND:
            raise PageNotFoundError(page_id=request.page_id, url=endpoint.url)

        raise TransferFailedError(
            action=request.action.value,
            filename=request.filename,
            url=endpoint.url,
            detail=outcome.detail or outcome.reason.value,
        )

    def _download(self, response, target: str, url: str) -> None:
        """Stream the response body into target, removing it if the stream breaks."""
        try:
            with open(target, 'wb') as fh:
                for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                    if chunk:
                        fh.write(chunk)
        except (ChunkedEncodingError, ConnectionError, Timeout) as e:
            logger.error(f"Download interrupted, removing partial file {target}: {e}")
            if os.path.exists(target):
                os.remove(target)
            raise TransportError(endpoint=url, reason=f"download interrupted: {e}")

    def _push(
        self,
        client: AttachmentClient,
        request: TransferRequest,
        endpoint: ResolvedEndpoint,
        username: str,
    ) -> ExitCode:
        """Upload request.filename and confirm the server accepted it."""
        with scratch_directory(self.config.scratch_root) as scratch_dir:
            response = client.send(
                endpoint.method,
                endpoint.url,
                headers=endpoint.headers,
                form=endpoint.form,
                file_path=endpoint.file_path,
                upload_name=endpoint.upload_name,
            )
            capture = capture_json_lines(response.text, scratch_dir)
            outcome = classify_push(
                capture.read_text(encoding="utf-8"),
                request.remote_filename,
                updating=endpoint.is_update,
                status_code=response.status_code,
            )

        logger.info(f"Push classified as {outcome.reason.value}")
        if outcome.succeeded:
            self._report_success(request, endpoint)
            return ExitCode.SUCCESS

        raise self._push_failure(request, endpoint, outcome, username)

    def _push_failure(
        self,
        request: TransferRequest,
        endpoint: ResolvedEndpoint,
        outcome: Outcome,
        username: str,
    ) -> SyncError:
        """Map a failed push outcome to the exception reported to the user."""
        if outcome.reason is OutcomeReason.AUTH_FAILED:
            return AuthFailedError(user=username, endpoint=endpoint.url)
        if outcome.reason is OutcomeReason.PAGE_NOT_FOUND:
            return PageNotFoundError(page_id=request.page_id)
        return UpsertNotConfirmedError(
            filename=request.filename,
            url=endpoint.url,
            detail=outcome.detail,
        )

    def _report_success(self, request: TransferRequest, endpoint: ResolvedEndpoint) -> None:
        self.output_handler.success(
            f'Successfully {request.action.past_tense} file "{request.filename}" '
            f'{request.action.direction} {endpoint.url}'
        )
