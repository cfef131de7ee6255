"""Tests for environment-driven settings"""

import pytest
from pydantic import ValidationError

from src.infrastructure.config.settings import Settings
from tests.factories import TEST_SUBKEY


def _settings(**kwargs) -> Settings:
    return Settings(_env_file=None, **kwargs)


def test_defaults():
    settings = _settings(subkey=TEST_SUBKEY)

    assert settings.port == 3000
    assert settings.post_rate_limit == "2/5 minutes"
    assert settings.display_timezone == "Asia/Tokyo"
    assert settings.rich_entries_enabled is True
    assert settings.telemetry_enabled is False
    assert settings.upstream_connect_attempts == 3


def test_credential_and_home_host():
    settings = _settings(subkey=TEST_SUBKEY)

    assert settings.credential.ccid == "con1alice"
    assert settings.home_host == "home.example"


def test_missing_subkey_is_fatal(monkeypatch):
    monkeypatch.delenv("SUBKEY", raising=False)

    with pytest.raises(ValidationError, match="SUBKEY is required"):
        _settings()


def test_malformed_subkey_is_fatal():
    with pytest.raises(ValidationError, match="SUBKEY is malformed"):
        _settings(subkey="concrnt-subkey nothex")


def test_subkey_from_environment(monkeypatch):
    monkeypatch.setenv("SUBKEY", TEST_SUBKEY)
    monkeypatch.setenv("POST_RATE_LIMIT", "5/minute")

    settings = _settings()

    assert settings.subkey == TEST_SUBKEY
    assert settings.post_rate_limit == "5/minute"


@pytest.mark.parametrize(
    "proxy_ip, expected",
    [(None, []), ("", []), ("10.0.0.1", ["10.0.0.1"]), ("10.0.0.1, 10.0.0.2 ,", ["10.0.0.1", "10.0.0.2"])],
)
def test_trusted_proxies(proxy_ip, expected):
    assert _settings(subkey=TEST_SUBKEY, proxy_ip=proxy_ip).trusted_proxies == expected


def test_invalid_exporter():
    with pytest.raises(ValidationError, match="telemetry_exporter"):
        _settings(subkey=TEST_SUBKEY, telemetry_exporter="jaeger")


def test_connect_attempts_must_be_positive():
    with pytest.raises(ValidationError):
        _settings(subkey=TEST_SUBKEY, upstream_connect_attempts=0)
