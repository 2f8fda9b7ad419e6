from __future__ import annotations

import pytest

from cohort_tools.shared.config import AppConfig

STRONG_SECRET = "k3J9-production-signing-secret-0123456789abcdef"


@pytest.mark.parametrize("secret", ["dev", "changeme", "too-short-but-not-listed"])
def test_production_refuses_insecure_jwt_secret(
    monkeypatch: pytest.MonkeyPatch, secret: str
) -> None:
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.setenv("JWT_SECRET", secret)

    with pytest.raises(SystemExit) as excinfo:
        AppConfig()

    assert excinfo.value.code == 1


def test_production_accepts_strong_secret(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_ENV", "prod")
    monkeypatch.setenv("JWT_SECRET", STRONG_SECRET)

    config = AppConfig()

    assert config.is_production()
    assert config.auth.jwt_secret == STRONG_SECRET


def test_weak_secret_is_tolerated_outside_production(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_ENV", "development")
    monkeypatch.setenv("JWT_SECRET", "dev")

    assert AppConfig().auth.jwt_secret == "dev"


def test_nested_sections_read_their_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SIGNUP_RL_LIMIT", "5")
    monkeypatch.setenv("ENABLE_RATE_LIMIT", "false")
    monkeypatch.setenv("PASSWORD_SCHEME", "werkzeug")

    config = AppConfig()

    assert config.rate_limit.signup_limit == 5
    assert config.rate_limit.enabled is False
    assert config.auth.password_scheme == "werkzeug"
