"""Configuration loading from the environment.

Settings are read from a ``.env`` file (python-dotenv) and the process
environment. Command-line flags override everything loaded here.

Environment variables:
    CONFLUENCE_URL: Confluence server root (e.g. https://wiki.example.com)
    CONFLUENCE_USER: Default basic-auth user
    CONFLUENCE_PASSWORD: Default basic-auth password
    CONFLUENCE_TIMEOUT: Request timeout in seconds (default 30)
    CONFLUENCE_SCRATCH_DIR: Root of the scratch area for push responses
    CONFLUENCE_VERIFY_SSL: "true"/"false" (default true)
"""

import os
from typing import Optional

from dotenv import load_dotenv

from confluence_attach.transfer.models import TransferConfig
from .errors import ConfigError

_TRUE_VALUES = ('1', 'true', 'yes', 'on')
_FALSE_VALUES = ('0', 'false', 'no', 'off')


class ConfigLoader:
    """Builds a TransferConfig from .env and environment variables."""

    DEFAULT_TIMEOUT = 30

    @classmethod
    def load(cls, env_file: Optional[str] = None) -> TransferConfig:
        """Load configuration.

        Args:
            env_file: Explicit .env path; the default search is used if None

        Returns:
            TransferConfig populated from the environment

        Raises:
            ConfigError: If a numeric or boolean setting cannot be parsed
        """
        load_dotenv(env_file)

        base_url = os.getenv('CONFLUENCE_URL')
        return TransferConfig(
            base_url=base_url.rstrip('/') if base_url else None,
            username=os.getenv('CONFLUENCE_USER') or None,
            password=os.getenv('CONFLUENCE_PASSWORD') or None,
            timeout=cls._parse_timeout(os.getenv('CONFLUENCE_TIMEOUT')),
            scratch_root=os.getenv('CONFLUENCE_SCRATCH_DIR') or None,
            verify_ssl=cls._parse_bool(os.getenv('CONFLUENCE_VERIFY_SSL'), 'CONFLUENCE_VERIFY_SSL'),
        )

    @classmethod
    def _parse_timeout(cls, value: Optional[str]) -> int:
        if not value:
            return cls.DEFAULT_TIMEOUT
        try:
            timeout = int(value)
        except ValueError:
            raise ConfigError(f"'{value}' is not an integer", 'CONFLUENCE_TIMEOUT')
        if timeout <= 0:
            raise ConfigError("must be positive", 'CONFLUENCE_TIMEOUT')
        return timeout

    @staticmethod
    def _parse_bool(value: Optional[str], setting: str) -> bool:
        if not value:
            return True
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise ConfigError(f"'{value}' is not a boolean", setting)
