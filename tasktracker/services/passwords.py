"""Salted password hashing.

bcrypt with a fixed cost factor; passlib compares digests in constant time.
"""

from passlib.context import CryptContext

BCRYPT_ROUNDS = 12

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # unrecognized or corrupt hash
        return False


def dummy_verify() -> None:
    """Spend the time of a real verify, for lookups that found no user."""
    pwd_context.dummy_verify()
