import pytest

from config import DEFAULT_ORIGINS, _Settings, get_env_any, get_settings


def test_defaults(monkeypatch):
    for name in ("ASSETDESK_TIMEOUT", "ASSETDESK_MAX_ATTEMPTS", "ASSETDESK_PAGE_SIZE", "ASSETDESK_INVENTORY_URL"):
        monkeypatch.delenv(name, raising=False)
    settings = get_settings()
    assert settings.timeout == 10.0
    assert settings.max_attempts == 3
    assert settings.page_size == 10
    assert settings.origin("inventory") == DEFAULT_ORIGINS["inventory"]


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("ASSETDESK_TIMEOUT", "2.5")
    monkeypatch.setenv("ASSETDESK_PAGE_SIZE", "25")
    monkeypatch.setenv("ASSETDESK_MEDIA_URL", "https://media.internal/api/")
    monkeypatch.setenv("ASSETDESK_CORS_ORIGINS", "http://a,http://b")
    settings = get_settings()
    assert settings.timeout == 2.5
    assert settings.page_size == 25
    assert settings.origin("media") == "https://media.internal/api"
    assert settings.cors_origins == ["http://a", "http://b"]


@pytest.mark.parametrize("raw", ["abc", "0", "-1"])
def test_invalid_numbers_fall_back(monkeypatch, raw):
    monkeypatch.setenv("ASSETDESK_MAX_ATTEMPTS", raw)
    assert get_settings().max_attempts == 3


def test_unknown_origin():
    with pytest.raises(ValueError):
        _Settings().origin("billing")


def test_get_env_any(monkeypatch):
    monkeypatch.delenv("ASSETDESK_A", raising=False)
    monkeypatch.setenv("ASSETDESK_B", "b")
    assert get_env_any("ASSETDESK_A", "ASSETDESK_B") == "b"
    assert get_env_any("ASSETDESK_A", default="d") == "d"
