"""Request resolution and outcome classification for attachment transfers.

This package turns CLI flags or an attachment URL into a TransferRequest,
looks up existing attachments for pushes, builds the final HTTP request and
classifies the server's response.
"""

from .models import (
    Action,
    TransferRequest,
    VersionedFilename,
    ExistingAttachment,
    ResolvedEndpoint,
    Outcome,
    OutcomeReason,
    TransferConfig,
)
from .errors import TransferError, InsufficientParametersError, LocalFileNotFoundError
from .version_extractor import extract_version
from .parameter_resolver import ParameterResolver, mine_url
from .attachment_locator import AttachmentLocator
from .request_builder import RequestBuilder
from .outcome_classifier import classify_pull, classify_push

__all__ = [
    'Action',
    'TransferRequest',
    'VersionedFilename',
    'ExistingAttachment',
    'ResolvedEndpoint',
    'Outcome',
    'OutcomeReason',
    'TransferConfig',
    'TransferError',
    'InsufficientParametersError',
    'LocalFileNotFoundError',
    'extract_version',
    'ParameterResolver',
    'mine_url',
    'AttachmentLocator',
    'RequestBuilder',
    'classify_pull',
    'classify_push',
]
