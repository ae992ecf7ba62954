"""Tests for application settings."""

import pytest
from pydantic import ValidationError

from storefront.core.config import Settings


def test_site_url_is_stored_without_trailing_slash() -> None:
    config = Settings(SITE_URL="https://shop.example/")
    assert config.SITE_URL == "https://shop.example"


def test_locales_are_normalized_to_lowercase() -> None:
    config = Settings(DEFAULT_LOCALE="SV-SE", SUPPORTED_LOCALES=["SV-SE", "En-US"])
    assert config.DEFAULT_LOCALE == "sv-se"
    assert config.SUPPORTED_LOCALES == ["sv-se", "en-us"]


def test_default_locale_must_be_supported() -> None:
    with pytest.raises(ValidationError):
        Settings(DEFAULT_LOCALE="de-de", SUPPORTED_LOCALES=["sv-se", "en-us"])


def test_cms_api_url_defaults_to_repository_endpoint() -> None:
    config = Settings(CMS_REPOSITORY_NAME="kumpan", CMS_API_URL=None)
    assert config.cms_api_url == "https://kumpan.cdn.prismic.io/api/v2"


def test_cms_api_url_override() -> None:
    config = Settings(CMS_API_URL="http://cms.local/api/v2/")
    assert config.cms_api_url == "http://cms.local/api/v2"


def test_wildcard_cors_origins_are_replaced_with_local_hosts() -> None:
    config = Settings(cors_origins=["*"])
    assert "*" not in config.cors_origins
    assert "http://localhost:3000" in config.cors_origins


def test_environment_values_from_test_setup(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STRIPE_SECRET_KEY", "sk_test_123")
    monkeypatch.setenv("HREFLANG_CACHE_TTL", "60")
    config = Settings()
    assert config.STRIPE_SECRET_KEY == "sk_test_123"
    assert config.HREFLANG_CACHE_TTL == 60
    assert config.DEFAULT_LOCALE == "sv-se"
    assert config.SUPPORTED_LOCALES == ["sv-se", "en-us", "da-dk"]


def test_negative_cache_ttl_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(HREFLANG_CACHE_TTL=-1)
