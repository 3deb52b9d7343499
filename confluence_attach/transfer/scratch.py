"""Per-process scratch area for capturing push responses.

The scratch directory lives under ``<root>/<pid>`` and is removed when the
transfer finishes, whether it succeeded, failed or was interrupted by
SIGINT/SIGTERM/SIGHUP.
"""

import logging
import os
import shutil
import signal
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

logger = logging.getLogger(__name__)

_CLEANUP_SIGNALS = [sig for sig in ('SIGTERM', 'SIGHUP') if hasattr(signal, sig)]


def default_scratch_root() -> str:
    return os.path.join(tempfile.gettempdir(), "confluence")


def _exit_on_signal(signum, frame):
    raise SystemExit(128 + signum)


@contextmanager
def scratch_directory(root: Optional[str] = None) -> Iterator[Path]:
    """Create the scratch directory and guarantee its removal.

    SIGINT already surfaces as KeyboardInterrupt; SIGTERM and SIGHUP are
    turned into SystemExit for the duration of the block so the cleanup in
    ``finally`` runs for them as well.

    Yields:
        Path of the (existing) scratch directory
    """
    scratch_dir = Path(root or default_scratch_root()) / str(os.getpid())
    scratch_dir.mkdir(parents=True, exist_ok=True)

    previous = {}
    if threading.current_thread() is threading.main_thread():
        for name in _CLEANUP_SIGNALS:
            signum = getattr(signal, name)
            previous[signum] = signal.signal(signum, _exit_on_signal)

    try:
        yield scratch_dir
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)
        shutil.rmtree(scratch_dir, ignore_errors=True)
        logger.debug(f"Removed scratch directory {scratch_dir}")


def capture_json_lines(body: str, scratch_dir: Path) -> Path:
    """Write the JSON-looking lines of a response body to the scratch area.

    Returns:
        Path of the capture file
    """
    capture = scratch_dir / f"output.{os.getpid()}"
    lines = [line for line in body.splitlines() if line.lstrip().startswith('{"')]
    capture.write_text("\n".join(lines), encoding="utf-8")
    return capture
