"""Command-line interface for Confluence attachment transfers.

This package provides the `confluence-attach` CLI tool that resolves the
requested transfer, runs it against the Confluence server and reports the
result with a meaningful exit code.
"""

from .transfer_command import TransferCommand
from .models import ExitCode
from .errors import CLIError, ConfigError

__all__ = [
    'TransferCommand',
    'ExitCode',
    'CLIError',
    'ConfigError',
]
