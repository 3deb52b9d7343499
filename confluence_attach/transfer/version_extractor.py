"""Version marker detection for attachment filenames.

A filename such as ``report.pdf.v3`` asks for version 3 of the attachment
``report.pdf``. Only a ``.v<digits>`` suffix at the very end of the name
counts; ``v123`` appearing anywhere else is part of the name.
"""

import re

from .models import VersionedFilename

VERSION_SUFFIX_PATTERN = re.compile(r'\.v(\d+)$')


def extract_version(filename: str) -> VersionedFilename:
    """Split a filename into its real name and optional version.

    Args:
        filename: Local filename or path as supplied by the user

    Returns:
        VersionedFilename with the suffix stripped when one was present

    Example:
        >>> extract_version("docs/report.pdf.v3")
        VersionedFilename(real_filename='docs/report.pdf', version=3)
        >>> extract_version("report.pdf").version is None
        True
    """
    match = VERSION_SUFFIX_PATTERN.search(filename)
    if not match:
        return VersionedFilename(real_filename=filename)

    return VersionedFilename(
        real_filename=filename[:match.start()],
        version=int(match.group(1)),
    )
