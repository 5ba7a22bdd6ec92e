from config import get_settings_module


def test_app_env_selects_module(monkeypatch):
    monkeypatch.delenv("HRMS_SETTINGS_MODULE", raising=False)

    monkeypatch.setenv("APP_ENV", "Production")
    assert get_settings_module() == "config.production"

    monkeypatch.setenv("APP_ENV", "test")
    assert get_settings_module() == "config.testing"

    monkeypatch.setenv("APP_ENV", "staging")
    assert get_settings_module() == "config.development"


def test_explicit_module_wins(monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.setenv("HRMS_SETTINGS_MODULE", "config.testing")

    assert get_settings_module() == "config.testing"
