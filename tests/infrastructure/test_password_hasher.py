"""Tests for bcrypt password hashing."""

import pytest

from infrastructure.password_hasher import PasswordHasher


@pytest.mark.unit
@pytest.mark.auth
class TestPasswordHasher:
    """Test PasswordHasher."""

    def test_hash_is_salted_and_verifiable(self, password_hasher: PasswordHasher) -> None:
        first = password_hasher.hash("secret123")
        second = password_hasher.hash("secret123")

        assert first != second
        assert first.startswith("$2")
        assert password_hasher.verify("secret123", first)
        assert password_hasher.verify("secret123", second)

    def test_wrong_password_does_not_verify(self, password_hasher: PasswordHasher) -> None:
        assert not password_hasher.verify("wrong", password_hasher.hash("secret123"))

    def test_corrupt_hash_never_matches(self, password_hasher: PasswordHasher) -> None:
        assert not password_hasher.verify("secret123", "not-a-bcrypt-hash")
