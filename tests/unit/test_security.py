"""Unit tests for password hashing and admin session tokens."""
from datetime import timedelta

from jose import jwt

from stable_admin.config import Settings
from stable_admin.core.security import (
    check_admin_password,
    create_session_token,
    decode_session_token,
    get_password_hash,
    verify_password,
)


def make_settings(**overrides) -> Settings:
    values = {"ADMIN_PASSWORD": "open-sesame", "SECRET_KEY": "unit-test-secret"}
    values.update(overrides)
    return Settings(**values)


class TestAdminPassword:
    """Tests for check_admin_password."""

    def test_correct_password(self):
        assert check_admin_password("open-sesame", make_settings()) is True

    def test_wrong_password(self):
        assert check_admin_password("open-sesame!", make_settings()) is False

    def test_missing_password(self):
        assert check_admin_password("", make_settings()) is False
        assert check_admin_password(None, make_settings()) is False

    def test_unset_admin_password_never_matches(self):
        assert check_admin_password("", make_settings(ADMIN_PASSWORD="")) is False


class TestSessionToken:
    """Tests for the signed session cookie value."""

    def test_round_trip(self):
        settings = make_settings()

        payload = decode_session_token(create_session_token(settings), settings)

        assert payload is not None
        assert payload["sub"] == "admin"

    def test_expired_token_rejected(self):
        settings = make_settings()
        token = create_session_token(settings, expires_delta=timedelta(seconds=-1))

        assert decode_session_token(token, settings) is None

    def test_token_signed_with_other_key_rejected(self):
        token = create_session_token(make_settings(SECRET_KEY="someone-else"))

        assert decode_session_token(token, make_settings()) is None

    def test_non_admin_subject_rejected(self):
        settings = make_settings()
        token = jwt.encode({"sub": "intruder"}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

        assert decode_session_token(token, settings) is None

    def test_garbage_rejected(self):
        assert decode_session_token("not-a-token", make_settings()) is None


class TestAccountPasswords:
    """Tests for bcrypt hashing of account passwords."""

    def test_hash_and_verify(self):
        hashed = get_password_hash("securepassword123")

        assert hashed.startswith("$2b$")
        assert verify_password("securepassword123", hashed) is True
        assert verify_password("wrong", hashed) is False


class TestSettingsDefaults:
    """Tests for defaults that do not depend on the environment."""

    def test_default_database_url_names_its_driver(self):
        default = Settings.model_fields["DATABASE_URL"].default

        assert default == "postgresql+psycopg2://localhost/stable_admin"
