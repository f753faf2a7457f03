"""Unit tests for Settings."""

import pytest
from pydantic import SecretStr
from pydantic import ValidationError as PydanticValidationError

from loginapp_config import Settings, clear_settings_cache, get_settings


class TestSettings:
    def test_defaults(self, jwt_secret):
        settings = Settings(jwt_secret_key=SecretStr(jwt_secret))

        assert settings.jwt_session_expire_days == 7
        assert settings.jwt_remember_me_expire_days == 30
        assert settings.reset_token_expire_minutes == 60
        assert settings.bcrypt_rounds == 10
        assert settings.smtp_enabled is False

    def test_short_jwt_secret_rejected(self):
        with pytest.raises(PydanticValidationError, match="at least 32"):
            Settings(jwt_secret_key=SecretStr("too-short"))

    def test_secret_not_in_repr(self, jwt_secret):
        settings = Settings(jwt_secret_key=SecretStr(jwt_secret))

        assert jwt_secret not in repr(settings)

    def test_cors_origins_parsed(self, jwt_secret):
        settings = Settings(
            jwt_secret_key=SecretStr(jwt_secret),
            api_cors_origins="http://localhost:5173, https://app.example.com",
        )

        assert settings.cors_origins == [
            "http://localhost:5173",
            "https://app.example.com",
        ]

    def test_cors_origins_accepts_list(self, jwt_secret):
        settings = Settings(
            jwt_secret_key=SecretStr(jwt_secret),
            api_cors_origins=["http://a.example.com", "http://b.example.com"],
        )

        assert len(settings.cors_origins) == 2


class TestGetSettings:
    def test_reads_environment_and_caches(self, monkeypatch, jwt_secret):
        monkeypatch.setenv("JWT_SECRET_KEY", jwt_secret)
        monkeypatch.setenv("BCRYPT_ROUNDS", "12")

        first = get_settings()
        second = get_settings()

        assert first is second
        assert first.bcrypt_rounds == 12

    def test_clear_cache_reloads(self, monkeypatch, jwt_secret):
        monkeypatch.setenv("JWT_SECRET_KEY", jwt_secret)
        monkeypatch.setenv("BCRYPT_ROUNDS", "11")
        first = get_settings()

        monkeypatch.setenv("BCRYPT_ROUNDS", "12")
        clear_settings_cache()

        assert get_settings() is not first
        assert get_settings().bcrypt_rounds == 12
