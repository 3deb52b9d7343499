"""Main CLI entry point for the confluence-attach command.

This module provides the Typer application that pushes a local file to, or
pulls an attachment from, a Confluence page. All options are flags on the
single command.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from confluence_attach import __version__
from confluence_attach.cli.config import ConfigLoader
from confluence_attach.cli.errors import ConfigError
from confluence_attach.cli.models import ExitCode
from confluence_attach.cli.output import OutputHandler
from confluence_attach.cli.transfer_command import TransferCommand

app = typer.Typer(
    name="confluence-attach",
    help="""Push or pull a single Confluence page attachment.

EXAMPLES:
  confluence-attach --action pull --filename report.pdf --pageid 1001 --username alice
  confluence-attach --action pull --filename report.pdf.v3 --pageid 1001 --username alice
  confluence-attach --action push --filename notes.txt --pageid 1001 --username alice
  confluence-attach --urlbase https://wiki.example.com/download/attachments/1001/report.pdf?api=v2 --username alice""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=False,
)

# Module logger
logger = logging.getLogger(__name__)

APP_LOGGER_NAME = "confluence_attach"


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'confluence_attach' namespace logger to avoid
    affecting third-party libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:  # verbosity >= 2
        level = logging.DEBUG

    app_logger = logging.getLogger(APP_LOGGER_NAME)
    app_logger.setLevel(level)

    log_format = "%(asctime)s [%(levelname)8s] %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(log_format, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"confluence-attach_{timestamp}.log"

        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_formatter = logging.Formatter(file_format, datefmt=date_format)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _confirm(question: str) -> bool:
    return typer.confirm(f"\n    {question}", default=False)


@app.command()
def main_command(
    action: Optional[str] = typer.Option(
        None,
        "--action",
        help='Valid values are "pull" or "push"',
    ),
    filename: Optional[str] = typer.Option(
        None,
        "--filename",
        help="The name of the attachment, optionally suffixed .v<N> to pull version N",
    ),
    page_id: Optional[str] = typer.Option(
        None,
        "--pageid",
        help="The parent page identifier in Confluence",
    ),
    urlbase: Optional[str] = typer.Option(
        None,
        "--urlbase",
        help="Full attachment URL to mine action/pageid/filename from, or the Confluence base URL",
        metavar="URL",
    ),
    username: Optional[str] = typer.Option(
        None,
        "--username",
        help="The Confluence username to use for authentication (default: CONFLUENCE_USER)",
    ),
    password: Optional[str] = typer.Option(
        None,
        "--password",
        help="The Confluence password; prompted for if omitted",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Print the resolved parameters and request instead of executing it",
    ),
    assume_yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Overwrite an existing local file on pull without asking",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
    ),
) -> None:
    """Push a local file to, or pull an attachment from, a Confluence page."""
    if version:
        typer.echo(f"confluence-attach version {__version__}")
        raise typer.Exit()

    _configure_logging(verbosity, logdir)
    output = OutputHandler(verbosity=verbosity, no_color=no_color)

    try:
        config = ConfigLoader.load()
    except ConfigError as e:
        output.print_failure(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    command = TransferCommand(config=config, output_handler=output, confirm=_confirm)
    exit_code = command.run(
        action=action,
        filename=filename,
        page_id=page_id,
        urlbase=urlbase,
        username=username,
        password=password,
        debug=debug,
        assume_yes=assume_yes,
    )

    raise typer.Exit(exit_code)


def main() -> None:
    """Main entry point for the CLI application."""
    app()


# Allow running as: python -m confluence_attach.cli.main
if __name__ == "__main__":
    main()
