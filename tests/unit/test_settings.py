import pytest

from ideahub.settings import app_settings_from_env, validate_log_level


@pytest.mark.unit
def test_defaults_without_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("APP_HOST", "APP_PORT", "DATABASE_URL", "AUTH_JWT_SECRET", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    settings = app_settings_from_env()

    assert settings.host == "0.0.0.0"
    assert settings.port == 8000
    assert settings.database_url is None
    assert settings.jwt_secret is None
    assert settings.log_level == "INFO"


@pytest.mark.unit
def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_PORT", "9100")
    monkeypatch.setenv("DATABASE_URL", "postgres://app:app@db:5432/app")
    monkeypatch.setenv("AUTH_JWT_SECRET", "s3cret")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = app_settings_from_env()

    assert settings.port == 9100
    assert settings.database_url == "postgres://app:app@db:5432/app"
    assert settings.jwt_secret == "s3cret"
    assert settings.log_level == "DEBUG"


@pytest.mark.unit
@pytest.mark.parametrize("value", ["abc", "0", "-1"])
def test_invalid_port_falls_back_to_default(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
    monkeypatch.setenv("APP_PORT", value)

    assert app_settings_from_env().port == 8000


@pytest.mark.unit
def test_unknown_log_level_is_rejected() -> None:
    with pytest.raises(ValueError):
        validate_log_level("verbose")
