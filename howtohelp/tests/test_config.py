import pytest
from pydantic import ValidationError

from howtohelp.config import CMSConfig, LogLevel, SiteConfig, load_settings


def test_settings_from_nested_environment(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CMS__BASE_URL", "https://cms.howtohelp.in/")
    monkeypatch.setenv("CMS__REVALIDATE_SECONDS", "120")
    monkeypatch.setenv("METRICS__LOG_LEVEL", "DEBUG")

    settings = load_settings()

    assert settings.cms.base_url == "https://cms.howtohelp.in"
    assert settings.cms.revalidate_seconds == 120
    assert settings.cms.is_configured()
    assert settings.metrics.log_level == LogLevel.DEBUG


def test_defaults(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CMS__BASE_URL", raising=False)

    settings = load_settings()

    assert settings.cms.revalidate_seconds == 60
    assert settings.cms.retry_attempts == 1
    assert not settings.cms.is_configured()
    assert settings.site.url == "https://howtohelp.in"
    assert settings.site.logo_url == "https://howtohelp.in/logo.png"


def test_cms_config_validation():
    assert not CMSConfig(base_url="not a url").is_configured()
    with pytest.raises(ValidationError):
        CMSConfig(retry_attempts=0)


def test_site_url_must_be_absolute():
    with pytest.raises(ValidationError):
        SiteConfig(url="howtohelp.in")
