"""
Unit tests for security utilities.
"""
from datetime import datetime, timedelta, timezone

from shopfront.core.security import (
    blacklist_token,
    cleanup_expired_tokens,
    hash_password,
    hash_token,
    is_token_blacklisted,
    verify_password,
    create_access_token,
    create_refresh_token,
    decode_token,
)
from shopfront.models.token_blacklist import TokenBlacklist


class TestPasswordHashing:
    """Tests for password hashing functions."""

    def test_hash_password(self):
        """Test that password hashing produces a hash."""
        password = "mysecretpassword"
        hashed = hash_password(password)

        assert hashed != password
        assert len(hashed) > 20  # bcrypt hashes are long

    def test_hash_password_different_each_time(self):
        """Test that hashing same password produces different hashes."""
        password = "mysecretpassword"
        hash1 = hash_password(password)
        hash2 = hash_password(password)

        assert hash1 != hash2  # Different salts

    def test_verify_password_correct(self):
        """Test verifying correct password."""
        password = "mysecretpassword"
        hashed = hash_password(password)

        assert verify_password(password, hashed) is True

    def test_verify_password_incorrect(self):
        """Test verifying incorrect password."""
        password = "mysecretpassword"
        hashed = hash_password(password)

        assert verify_password("wrongpassword", hashed) is False


class TestJWTTokens:
    """Tests for JWT token functions."""

    def test_create_access_token(self):
        """Test creating an access token."""
        token = create_access_token(subject="user-123")

        assert token is not None
        assert len(token) > 50

    def test_create_refresh_token(self):
        """Test creating a refresh token."""
        token = create_refresh_token(subject="user-123")

        assert token is not None
        assert len(token) > 50

    def test_decode_access_token(self):
        """Test decoding an access token."""
        subject = "user-123"
        token = create_access_token(subject=subject)

        payload = decode_token(token)

        assert payload is not None
        assert payload["sub"] == subject
        assert payload["type"] == "access"

    def test_decode_refresh_token(self):
        """Test decoding a refresh token."""
        subject = "user-456"
        token = create_refresh_token(subject=subject)

        payload = decode_token(token)

        assert payload is not None
        assert payload["sub"] == subject
        assert payload["type"] == "refresh"

    def test_decode_invalid_token(self):
        """Test decoding an invalid token returns None."""
        payload = decode_token("invalid.token.here")

        assert payload is None

    def test_access_token_with_custom_expiry(self):
        """Test access token with custom expiry."""
        token = create_access_token(
            subject="user-789",
            expires_delta=timedelta(minutes=5)
        )

        payload = decode_token(token)

        assert payload is not None
        assert payload["sub"] == "user-789"

    def test_tokens_minted_together_are_distinct(self):
        """Two tokens for the same subject in the same second still differ."""
        first = create_access_token(subject="user-123")
        second = create_access_token(subject="user-123")

        assert first != second
        assert decode_token(first)["jti"] != decode_token(second)["jti"]


class TestTokenBlacklist:
    """Tests for revoking tokens."""

    def test_blacklist_and_lookup(self, db):
        token = create_refresh_token(subject="user-123")
        expires = datetime.now(timezone.utc) + timedelta(days=1)

        assert is_token_blacklisted(token, db) is False
        blacklist_token(token, expires, db)
        blacklist_token(token, expires, db)

        assert is_token_blacklisted(token, db) is True
        assert db.query(TokenBlacklist).count() == 1

    def test_only_hash_is_stored(self, db):
        token = create_access_token(subject="user-123")
        blacklist_token(token, datetime.now(timezone.utc) + timedelta(hours=1), db)

        stored = db.query(TokenBlacklist).one()
        assert stored.token_hash == hash_token(token)
        assert token not in stored.token_hash

    def test_cleanup_removes_expired(self, db):
        expired = create_access_token(subject="old")
        live = create_access_token(subject="new")
        blacklist_token(expired, datetime.now(timezone.utc) - timedelta(minutes=1), db)
        blacklist_token(live, datetime.now(timezone.utc) + timedelta(minutes=30), db)

        assert cleanup_expired_tokens(db) == 1
        assert is_token_blacklisted(expired, db) is False
        assert is_token_blacklisted(live, db) is True
