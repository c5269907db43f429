"""Unit tests for the TokenService."""

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from tasktracker.services.tokens import ALGORITHM, TokenService

SECRET = "unit-test-secret"


def clock_at(moment):
    return lambda: moment


def test_issue_and_verify_roundtrip():
    """Test that a fresh token resolves to the user id it was issued for."""
    tokens = TokenService(SECRET)
    token = tokens.issue(42)

    assert isinstance(token, str)
    assert tokens.verify(token) == 42


def test_token_claims():
    """Test the claims embedded in an issued token."""
    issued = datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc)
    token = TokenService(SECRET, clock=clock_at(issued)).issue(7)

    claims = jwt.get_unverified_claims(token)
    assert claims["sub"] == "7"
    assert claims["id"] == 7
    assert claims["exp"] - claims["iat"] == 24 * 60 * 60


def test_token_valid_just_inside_lifetime():
    """Test that a token issued 23 hours ago still verifies."""
    issued = datetime.now(timezone.utc) - timedelta(hours=23)
    token = TokenService(SECRET, clock=clock_at(issued)).issue(5)

    assert TokenService(SECRET).verify(token) == 5


def test_token_expires_after_24_hours():
    """Test that a token issued 25 hours ago is rejected."""
    issued = datetime.now(timezone.utc) - timedelta(hours=25)
    token = TokenService(SECRET, clock=clock_at(issued)).issue(5)

    assert TokenService(SECRET).verify(token) is None


def test_wrong_secret_rejected():
    """Test that a token signed with another secret is rejected."""
    token = TokenService("other-secret").issue(1)
    assert TokenService(SECRET).verify(token) is None


def test_tampered_token_rejected():
    """Test that changing the payload invalidates the signature."""
    tokens = TokenService(SECRET)
    header, payload, signature = tokens.issue(1).split(".")
    forged_payload = TokenService("x").issue(2).split(".")[1]

    assert tokens.verify(".".join([header, forged_payload, signature])) is None


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
def test_malformed_token_rejected(token):
    """Test that malformed tokens are rejected."""
    assert TokenService(SECRET).verify(token) is None


def test_token_without_integer_subject_rejected():
    """Test that a correctly signed token with a bad subject is rejected."""
    expires = datetime.now(timezone.utc) + timedelta(hours=1)
    token = jwt.encode({"sub": "not-a-number", "exp": expires}, SECRET, algorithm=ALGORITHM)

    assert TokenService(SECRET).verify(token) is None


def test_secret_required():
    """Test that an empty secret is refused."""
    with pytest.raises(ValueError):
        TokenService("")


def test_verifier_clock_decides_expiry():
    """Test that expiry is judged by the verifying service's clock."""
    now = datetime(2030, 1, 1, tzinfo=timezone.utc)
    token = TokenService(SECRET, clock=clock_at(now)).issue(5)

    assert TokenService(SECRET, clock=clock_at(now + timedelta(hours=23))).verify(token) == 5
    assert TokenService(SECRET, clock=clock_at(now + timedelta(hours=24))).verify(token) is None
    assert TokenService(SECRET, clock=clock_at(now + timedelta(hours=25))).verify(token) is None


def test_token_without_expiry_rejected():
    """Test that a signed token with no exp claim is rejected."""
    token = jwt.encode({"sub": "5"}, SECRET, algorithm=ALGORITHM)

    assert TokenService(SECRET).verify(token) is None
