"""Tests for credential loading from mailgun.ini and the environment."""

import pytest

from mailgun_client.client import MailgunClient
from mailgun_client.config import MailgunConfig, api_base_for_region, load_config
from mailgun_client.dispatcher import DEFAULT_API_BASE, EU_API_BASE, Dispatcher
from mailgun_client.errors import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove MAILGUN_* variables leaking from the host environment."""
    for name in ("MAILGUN_CONFIG", "MAILGUN_API_KEY", "MAILGUN_DOMAIN",
                 "MAILGUN_API_BASE", "MAILGUN_REGION"):
        monkeypatch.delenv(name, raising=False)


def test_load_from_ini(tmp_path):
    """Test reading the [mailgun] section."""
    config_file = tmp_path / "mailgun.ini"
    config_file.write_text("""
[mailgun]
api_key = key-123
domain = mg.example.com
""")

    config = load_config(config_file)

    assert config.api_key == "key-123"
    assert config.domain == "mg.example.com"
    assert config.api_base == DEFAULT_API_BASE
    assert config.region is None


def test_environment_fallback(tmp_path, monkeypatch):
    """Test that missing options come from MAILGUN_* variables."""
    config_file = tmp_path / "mailgun.ini"
    config_file.write_text("""
[mailgun]
domain = mg.example.com
""")
    monkeypatch.setenv("MAILGUN_API_KEY", "env-key")
    monkeypatch.setenv("MAILGUN_DOMAIN", "ignored.example.com")

    config = load_config(config_file)

    assert config.api_key == "env-key"
    assert config.domain == "mg.example.com"


def test_environment_only(tmp_path, monkeypatch):
    """Test that a missing file is not an error."""
    monkeypatch.setenv("MAILGUN_CONFIG", str(tmp_path / "absent.ini"))
    monkeypatch.setenv("MAILGUN_API_KEY", "env-key")
    monkeypatch.setenv("MAILGUN_DOMAIN", "mg.example.com")
    monkeypatch.setenv("MAILGUN_REGION", "EU")

    config = load_config()

    assert config.api_base == EU_API_BASE
    assert config.region == "EU"


def test_explicit_api_base_wins_over_region(tmp_path):
    """Test that api_base overrides the region default."""
    config_file = tmp_path / "mailgun.ini"
    config_file.write_text("""
[mailgun]
api_key = k
domain = d
region = eu
api_base = http://localhost:8025/v3/
""")

    assert load_config(config_file).api_base == "http://localhost:8025/v3"


def test_missing_api_key(tmp_path):
    """Test that an absent API key is reported."""
    config_file = tmp_path / "mailgun.ini"
    config_file.write_text("[mailgun]\ndomain = mg.example.com\n")

    with pytest.raises(ConfigurationError, match="api_key"):
        load_config(config_file)


def test_missing_domain(tmp_path):
    """Test that a blank domain is reported."""
    config_file = tmp_path / "mailgun.ini"
    config_file.write_text("[mailgun]\napi_key = k\ndomain =\n")

    with pytest.raises(ConfigurationError, match="domain"):
        load_config(config_file)


def test_unknown_region():
    """Test region validation."""
    assert api_base_for_region(None) == DEFAULT_API_BASE
    assert api_base_for_region("us") == DEFAULT_API_BASE
    with pytest.raises(ConfigurationError, match="Unknown Mailgun region"):
        api_base_for_region("apac")


def test_factories():
    """Test building a dispatcher and a client from the config."""
    config = MailgunConfig(api_key="k", domain="mg.example.com", api_base=EU_API_BASE)

    dispatcher = config.dispatcher()
    assert isinstance(dispatcher, Dispatcher)
    assert dispatcher.messages_url == f"{EU_API_BASE}/mg.example.com/messages"

    client = config.client()
    assert isinstance(client, MailgunClient)
    assert client.api_key == "k"


def test_repr_hides_key():
    """Test that the API key never appears in repr."""
    assert "secret" not in repr(MailgunConfig(api_key="secret", domain="d"))
