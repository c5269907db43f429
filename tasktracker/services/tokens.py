"""Issuing and verifying signed bearer tokens."""

from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Callable, Optional

from jose import JWTError, jwt

from ..config import get_settings

ALGORITHM = "HS256"
TOKEN_LIFETIME = timedelta(hours=24)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """Issues HS256 JWTs carrying a user id and verifies them.

    Tokens are stateless: nothing is stored server side and a token stays valid
    until it expires.

    Attributes:
        lifetime: How long an issued token stays valid
    """

    def __init__(
        self,
        secret: str,
        lifetime: timedelta = TOKEN_LIFETIME,
        clock: Callable[[], datetime] = _utc_now,
    ):
        if not secret:
            raise ValueError("A signing secret is required")
        self._secret = secret
        self.lifetime = lifetime
        self._clock = clock

    def issue(self, user_id: int) -> str:
        """Create a token for ``user_id`` that expires after ``lifetime``."""
        issued_at = self._clock()
        claims = {
            "sub": str(user_id),
            "id": user_id,
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
        }
        return jwt.encode(claims, self._secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> Optional[int]:
        """Return the user id embedded in ``token``.

        Returns None when the token is expired, malformed, or signed with a
        different secret. Callers are not told which.
        """
        try:
            # expiry is checked below against the service clock
            payload = jwt.decode(
                token, self._secret, algorithms=[ALGORITHM], options={"verify_exp": False}
            )
        except JWTError:
            return None

        expires = payload.get("exp")
        if not isinstance(expires, (int, float)) or expires <= self._clock().timestamp():
            return None

        subject = payload.get("sub")
        try:
            return int(subject)
        except (TypeError, ValueError):
            return None


@lru_cache
def get_token_service() -> TokenService:
    return TokenService(get_settings().jwt_secret)
