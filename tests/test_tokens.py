"""Tests for password hashing and token issuing/verification."""

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from app.config import Settings
from app.services.jwt import AuthError, JWTService
from app.services.password import hash_password, verify_password

SECRET = "unit-test-secret"


class TestPasswordHasher:
    """Tests for bcrypt hashing."""

    def test_hash_differs_from_plaintext(self):
        digest = hash_password("secret1")
        assert digest != "secret1"
        assert digest.startswith("$2")

    def test_hash_is_salted(self):
        assert hash_password("secret1") != hash_password("secret1")

    def test_verify_roundtrip(self):
        digest = hash_password("secret1")
        assert verify_password("secret1", digest) is True
        assert verify_password("secret2", digest) is False

    def test_verify_malformed_digest_is_negative(self):
        assert verify_password("secret1", "not-a-bcrypt-hash") is False


class TestJWTService:
    """Tests for token creation and verification."""

    def test_empty_secret_rejected(self):
        with pytest.raises(ValueError):
            JWTService(secret_key="")

    def test_verify_returns_user_id(self):
        service = JWTService(secret_key=SECRET)
        assert service.verify(service.create_token(42)) == 42

    def test_default_lifetime_is_one_day(self):
        service = JWTService(secret_key=SECRET)
        issued = datetime(2026, 1, 1, tzinfo=timezone.utc)
        claims = jwt.get_unverified_claims(service.create_token(1, issued_at=issued))
        assert claims["exp"] - claims["iat"] == 24 * 60 * 60

    def test_accepted_just_before_expiry(self):
        """A token issued 23h59m ago is still valid."""
        service = JWTService(secret_key=SECRET)
        issued = datetime.now(timezone.utc) - timedelta(hours=23, minutes=59)
        assert service.verify(service.create_token(7, issued_at=issued)) == 7

    def test_rejected_just_after_expiry(self):
        """A token issued 24h01m ago is expired."""
        service = JWTService(secret_key=SECRET)
        issued = datetime.now(timezone.utc) - timedelta(hours=24, minutes=1)
        with pytest.raises(AuthError):
            service.verify(service.create_token(7, issued_at=issued))

    def test_wrong_secret_rejected(self):
        token = JWTService(secret_key="other-secret").create_token(1)
        with pytest.raises(AuthError):
            JWTService(secret_key=SECRET).verify(token)

    def test_garbage_rejected(self):
        with pytest.raises(AuthError):
            JWTService(secret_key=SECRET).verify("garbage")

    def test_non_numeric_subject_rejected(self):
        expires = datetime.now(timezone.utc) + timedelta(hours=1)
        token = jwt.encode({"sub": "abc", "exp": expires}, SECRET, algorithm="HS256")
        with pytest.raises(AuthError):
            JWTService(secret_key=SECRET).verify(token)

    def test_decode_token_returns_none_when_invalid(self):
        assert JWTService(secret_key=SECRET).decode_token("garbage") is None


class TestSettings:
    """Startup configuration checks."""

    def test_missing_secret_is_fatal(self):
        settings = Settings()
        settings.JWT_SECRET_KEY = ""
        assert any("JWT_SECRET_KEY" in error for error in settings.validate())

    def test_configured_secret_passes(self):
        settings = Settings()
        settings.JWT_SECRET_KEY = "configured"
        assert settings.validate() == []
