"""Unit tests for cli.config module."""

import pytest
from unittest.mock import patch

from confluence_attach.cli.config import ConfigLoader
from confluence_attach.cli.errors import ConfigError


def fake_env(values):
    def getenv_side_effect(key):
        return values.get(key)
    return getenv_side_effect


class TestConfigLoader:
    """Test cases for ConfigLoader.load."""

    @patch('confluence_attach.cli.config.load_dotenv')
    def test_load_calls_dotenv(self, mock_load_dotenv):
        with patch('os.getenv', side_effect=fake_env({})):
            ConfigLoader.load(".env.test")

        mock_load_dotenv.assert_called_once_with(".env.test")

    @patch('confluence_attach.cli.config.load_dotenv')
    def test_defaults(self, mock_load_dotenv):
        with patch('os.getenv', side_effect=fake_env({})):
            config = ConfigLoader.load()

        assert config.base_url is None
        assert config.username is None
        assert config.password is None
        assert config.timeout == 30
        assert config.scratch_root is None
        assert config.verify_ssl is True

    @patch('confluence_attach.cli.config.load_dotenv')
    def test_all_values(self, mock_load_dotenv):
        env = {
            'CONFLUENCE_URL': 'https://wiki.example.com/',
            'CONFLUENCE_USER': 'alice',
            'CONFLUENCE_PASSWORD': 'secret',
            'CONFLUENCE_TIMEOUT': '45',
            'CONFLUENCE_SCRATCH_DIR': '/var/tmp/confluence',
            'CONFLUENCE_VERIFY_SSL': 'false',
        }
        with patch('os.getenv', side_effect=fake_env(env)):
            config = ConfigLoader.load()

        assert config.base_url == 'https://wiki.example.com'
        assert config.username == 'alice'
        assert config.password == 'secret'
        assert config.timeout == 45
        assert config.scratch_root == '/var/tmp/confluence'
        assert config.verify_ssl is False

    @patch('confluence_attach.cli.config.load_dotenv')
    def test_empty_strings_are_missing(self, mock_load_dotenv):
        env = {'CONFLUENCE_URL': '', 'CONFLUENCE_USER': '', 'CONFLUENCE_PASSWORD': ''}
        with patch('os.getenv', side_effect=fake_env(env)):
            config = ConfigLoader.load()

        assert config.base_url is None
        assert config.username is None
        assert config.password is None

    @patch('confluence_attach.cli.config.load_dotenv')
    @pytest.mark.parametrize("value", ["abc", "0", "-5"])
    def test_invalid_timeout(self, mock_load_dotenv, value):
        with patch('os.getenv', side_effect=fake_env({'CONFLUENCE_TIMEOUT': value})):
            with pytest.raises(ConfigError) as exc_info:
                ConfigLoader.load()

        assert exc_info.value.setting == 'CONFLUENCE_TIMEOUT'

    @patch('confluence_attach.cli.config.load_dotenv')
    def test_invalid_boolean(self, mock_load_dotenv):
        with patch('os.getenv', side_effect=fake_env({'CONFLUENCE_VERIFY_SSL': 'maybe'})):
            with pytest.raises(ConfigError):
                ConfigLoader.load()
