"""Unit tests for confluence_client.auth module."""

import pytest
from unittest.mock import Mock

from confluence_attach.confluence_client.auth import (
    CredentialProvider,
    Credentials,
    PromptCredentialProvider,
    StaticCredentialProvider,
)


class TestCredentials:
    """Test cases for Credentials NamedTuple."""

    def test_credentials_are_immutable(self):
        creds = Credentials(user="alice", password="secret")
        with pytest.raises(AttributeError):
            creds.user = "bob"


class TestStaticCredentialProvider:
    """Test cases for StaticCredentialProvider."""

    def test_returns_given_pair(self):
        provider = StaticCredentialProvider("alice", "secret")

        assert provider.get_credentials() == Credentials(user="alice", password="secret")

    def test_is_a_credential_provider(self):
        assert isinstance(StaticCredentialProvider("a", "b"), CredentialProvider)


class TestCredentialProviderBase:
    def test_base_is_abstract(self):
        with pytest.raises(NotImplementedError):
            CredentialProvider().get_credentials()


class TestPromptCredentialProvider:
    """Test cases for PromptCredentialProvider."""

    def test_supplied_password_skips_prompt(self):
        prompt = Mock()
        provider = PromptCredentialProvider("alice", "secret", prompt=prompt)

        assert provider.get_credentials() == Credentials("alice", "secret")
        prompt.assert_not_called()

    def test_prompts_with_hidden_input(self):
        prompt = Mock(return_value="typed")
        provider = PromptCredentialProvider("alice", prompt=prompt)

        assert provider.get_credentials().password == "typed"
        args, kwargs = prompt.call_args
        assert 'username: "alice"' in args[0]
        assert kwargs["hide_input"] is True

    def test_blank_answer_is_asked_again(self):
        prompt = Mock(side_effect=["", "", "typed"])
        echo = Mock()
        provider = PromptCredentialProvider("alice", prompt=prompt, echo=echo)

        assert provider.get_credentials().password == "typed"
        assert prompt.call_count == 3
        assert echo.call_count == 2
        assert "Password cannot be blank" in echo.call_args[0][0]

    def test_answer_is_remembered(self):
        prompt = Mock(return_value="typed")
        provider = PromptCredentialProvider("alice", prompt=prompt)

        provider.get_credentials()
        provider.get_credentials()

        prompt.assert_called_once()
