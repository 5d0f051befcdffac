"""Unit tests for security utilities (password hashing and JWT tokens)."""

from datetime import timedelta
from uuid import uuid4

import pytest
from jose import JWTError

from fintrack.core.security import (
    create_access_token,
    create_refresh_token,
    decode_token,
    get_user_id_from_token,
    hash_password,
    verify_password,
)


class TestPasswordHashing:
    """Test password hashing functions."""

    def test_hash_password(self):
        password = "MySecurePassword123!"
        hashed = hash_password(password)

        assert hashed != password
        # Argon2 hashes start with $argon2
        assert hashed.startswith("$argon2")

    def test_verify_password(self):
        hashed = hash_password("MySecurePassword123!")

        assert verify_password("MySecurePassword123!", hashed) is True
        assert verify_password("WrongPassword456!", hashed) is False

    def test_hash_same_password_different_hashes(self):
        """Hashing twice gives different hashes (salt) that both verify."""
        hash1 = hash_password("MySecurePassword123!")
        hash2 = hash_password("MySecurePassword123!")

        assert hash1 != hash2
        assert verify_password("MySecurePassword123!", hash1) is True
        assert verify_password("MySecurePassword123!", hash2) is True


class TestJWTTokens:
    """Test JWT token creation and validation."""

    def test_access_token_round_trip(self):
        user_id = uuid4()
        token = create_access_token(user_id)

        payload = decode_token(token)
        assert payload["sub"] == str(user_id)
        assert payload["type"] == "access"
        assert get_user_id_from_token(token) == user_id

    def test_refresh_token_type(self):
        user_id = uuid4()
        token = create_refresh_token(user_id)

        assert decode_token(token)["type"] == "refresh"
        assert get_user_id_from_token(token, expected_type="refresh") == user_id

    def test_refresh_token_rejected_as_access_token(self):
        token = create_refresh_token(uuid4())

        with pytest.raises(JWTError):
            get_user_id_from_token(token)

    def test_access_token_rejected_as_refresh_token(self):
        token = create_access_token(uuid4())

        with pytest.raises(JWTError):
            get_user_id_from_token(token, expected_type="refresh")

    def test_expired_token(self):
        token = create_access_token(uuid4(), expires_delta=timedelta(seconds=-1))

        with pytest.raises(JWTError):
            decode_token(token)

    def test_invalid_token(self):
        with pytest.raises(JWTError):
            decode_token("not.a.valid.token")
