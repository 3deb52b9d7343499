"""Root pytest configuration for all tests."""

import logging

# The atlassian client logs failed lookups at ERROR level; tests trigger
# those on purpose.
logging.getLogger("atlassian").setLevel(logging.WARNING)
