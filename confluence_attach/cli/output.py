"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output,
including the usage text shown after a failed invocation and the request
preview printed by --debug.
"""

from typing import Optional

from rich.console import Console
from rich.markup import escape

from confluence_attach.transfer.models import ResolvedEndpoint, TransferRequest

STDOUT_OFFSET = "    "

USAGE = f"""confluence-attach
{STDOUT_OFFSET * 4}[ --action <valid values are "pull" or "push" *REQUIRED*> ]
{STDOUT_OFFSET * 4}[ --filename <the name of a confluence attachment *REQUIRED*> ]
{STDOUT_OFFSET * 4}[ --pageid <the parent page identifier in confluence *REQUIRED*> ]
{STDOUT_OFFSET * 4}[ --urlbase <the confluence base URL *OPTIONAL*> ]
{STDOUT_OFFSET * 4}[ --username <the confluence username to use for authentication *REQUIRED*> ]
{STDOUT_OFFSET * 4}[ --password <the confluence password to use for authentication *OPTIONAL*> ]
{STDOUT_OFFSET * 4}[ --debug <print the request instead of executing it *OPTIONAL*> ]"""


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Logging verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Operation completed")
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False, console: Optional[Console] = None):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
            console: Console to print to (a stdout console is created if None)
        """
        self.verbosity = verbosity
        self.console = console or Console(
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        """Display success message in green."""
        self.console.print(f"\n[green]{escape(message)}[/green]")

    def error(self, message: str) -> None:
        """Display error message in red."""
        self.console.print(f"\n{STDOUT_OFFSET}[red]{escape(message)}[/red]")

    def warning(self, message: str) -> None:
        """Display warning message in yellow."""
        self.console.print(f"{STDOUT_OFFSET}[yellow]WARNING:  {escape(message)}[/yellow]")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(message, markup=False)

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2)."""
        if self.verbosity >= 2:
            self.console.print(f"[dim]{escape(message)}[/dim]")

    def print(self, message: str) -> None:
        """Display message without formatting."""
        self.console.print(message, markup=False)

    def print_failure(self, reason: str) -> None:
        """Display the halted-processing error line followed by the usage text."""
        self.error(f"ERROR:  {reason} ... processing halted")
        self.print_usage()

    def print_usage(self) -> None:
        self.console.print(f"\n{STDOUT_OFFSET}USAGE:  {USAGE}\n", markup=False)

    def print_debug_request(
        self,
        request: TransferRequest,
        endpoint: ResolvedEndpoint,
        username: str,
        password_supplied: bool,
    ) -> None:
        """Display the resolved parameters and the request that would be sent.

        The password itself is never printed.
        """
        lines = [
            f"My action is: {request.action.value}",
            f"My filename is: {request.filename}",
            f"My remote filename is: {request.remote_filename}",
            f"My version is: {request.version if request.version is not None else 'latest'}",
            f"My pageid is: {request.page_id}",
            f"My urlbase is: {endpoint.url}",
            f"My username is: {username}",
            f"My password is: {'********' if password_supplied else '(prompt)'}",
            f"My request is: {endpoint.method} {endpoint.url}",
        ]
        for name, value in endpoint.headers.items():
            lines.append(f"  header {name}: {value}")
        for name, value in endpoint.form:
            lines.append(f"  form {name}={value}")
        if endpoint.file_path:
            lines.append(f"  form file=@{endpoint.file_path} ({endpoint.upload_name})")

        for line in lines:
            self.print(line)
