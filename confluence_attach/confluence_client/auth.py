"""Credential providers for Confluence basic authentication.

A credential provider supplies the (user, password) pair used for every
request of an invocation. The interactive provider prompts on the terminal
with echo disabled when no password was given; the static provider is used
when both values are already known (tests, environment configuration).
"""

import logging
from typing import Callable, NamedTuple, Optional

import typer

logger = logging.getLogger(__name__)


class Credentials(NamedTuple):
    """Confluence basic-auth credentials."""
    user: str
    password: str


class CredentialProvider:
    """Interface for anything that can hand out Credentials."""

    def get_credentials(self) -> Credentials:
        raise NotImplementedError


class StaticCredentialProvider(CredentialProvider):
    """Returns a fixed, already-known credential pair."""

    def __init__(self, user: str, password: str):
        self._credentials = Credentials(user=user, password=password)

    def get_credentials(self) -> Credentials:
        return self._credentials


class PromptCredentialProvider(CredentialProvider):
    """Prompts for the password on the terminal when it was not supplied.

    The prompt hides input and is repeated until a non-blank password is
    entered. The answer is remembered so that the lookup and the transfer
    of one invocation share the same credentials.

    Example:
        >>> provider = PromptCredentialProvider("alice")
        >>> creds = provider.get_credentials()  # asks once
    """

    def __init__(
        self,
        user: str,
        password: Optional[str] = None,
        prompt: Callable[..., str] = typer.prompt,
        echo: Callable[[str], None] = typer.echo,
    ):
        self._user = user
        self._password = password or None
        self._prompt = prompt
        self._echo = echo

    def get_credentials(self) -> Credentials:
        while not self._password:
            answer = self._prompt(
                f'    Please enter the password for username: "{self._user}"',
                hide_input=True,
                default="",
                show_default=False,
            )
            if answer:
                self._password = answer
            else:
                self._echo("\n    ERROR:  Password cannot be blank\n")

        logger.debug(f"Using credentials for user {self._user}")
        return Credentials(user=self._user, password=self._password)
