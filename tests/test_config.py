import pytest

from conftest import make_settings
from modules.shared.config import load_settings, validate_settings

SMTP = dict(smtp_host="smtp.example.com", smtp_user="mailer", smtp_pass="pw", smtp_from="noreply@example.com")


def test_production_refuses_token_exposure(tmp_path):
    settings = make_settings(tmp_path, app_env="production", expose_dev_tokens=True)

    with pytest.raises(RuntimeError):
        validate_settings(settings)


def test_exposure_requires_explicit_flag(tmp_path):
    assert not make_settings(tmp_path, app_env="development").dev_token_exposure
    assert make_settings(tmp_path, app_env="development", expose_dev_tokens=True).dev_token_exposure


def test_exposure_disabled_when_mail_is_delivered(tmp_path):
    settings = make_settings(tmp_path, app_env="development", expose_dev_tokens=True, **SMTP)

    validate_settings(settings)

    assert settings.smtp_configured
    assert not settings.dev_token_exposure


def test_load_settings_from_environment(monkeypatch):
    monkeypatch.setenv("APP_ENV", "Development")
    monkeypatch.setenv("EXPOSE_DEV_TOKENS", "yes")
    monkeypatch.setenv("SMTP_USER", "mailer@example.com")
    monkeypatch.setenv("SMTP_PORT", "")
    monkeypatch.delenv("SMTP_FROM", raising=False)
    monkeypatch.delenv("SMTP_HOST", raising=False)

    settings = load_settings()

    assert settings.app_env == "development"
    assert settings.expose_dev_tokens is True
    assert settings.smtp_port == 587
    assert settings.smtp_from == "mailer@example.com"
    assert not settings.smtp_configured


def test_defaults_to_production(monkeypatch):
    monkeypatch.delenv("APP_ENV", raising=False)
    monkeypatch.delenv("EXPOSE_DEV_TOKENS", raising=False)

    settings = load_settings()

    assert settings.is_production
    assert not settings.dev_token_exposure
