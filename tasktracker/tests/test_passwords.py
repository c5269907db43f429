"""Unit tests for password hashing."""

from tasktracker.services.passwords import get_password_hash, verify_password


def test_hash_is_salted():
    """Test that hashing the same password twice gives different hashes."""
    first = get_password_hash("hunter2")
    second = get_password_hash("hunter2")

    assert first != second
    assert "hunter2" not in first


def test_verify_password():
    """Test matching and non-matching candidates."""
    hashed = get_password_hash("hunter2")

    assert verify_password("hunter2", hashed) is True
    assert verify_password("hunter3", hashed) is False


def test_verify_against_corrupt_hash():
    """Test that an unrecognizable stored hash never matches."""
    assert verify_password("hunter2", "not-a-hash") is False
