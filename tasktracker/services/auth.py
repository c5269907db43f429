"""Registration and login."""

import logging
from typing import Optional, Tuple

from email_validator import EmailNotValidError, validate_email
from fastapi import Depends
from sqlmodel import Session

from ..crud import UserStorage
from ..db.session import get_session
from ..errors import AuthError, ConflictError, ValidationError
from ..models import User
from .passwords import dummy_verify, get_password_hash, verify_password
from .tokens import TokenService, get_token_service

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


class AuthService:
    """Creates accounts and exchanges credentials for tokens."""

    def __init__(self, users: UserStorage, tokens: TokenService):
        self.users = users
        self.tokens = tokens

    def register(
        self,
        username: Optional[str],
        email: Optional[str],
        password: Optional[str],
    ) -> Tuple[User, str]:
        """Create a user and issue a token for it.

        Raises:
            ValidationError: A field is missing or the email is malformed
            ConflictError: The email or username is already registered
        """
        missing = {
            "username": not username,
            "email": not email,
            "password": not password,
        }
        if any(missing.values()):
            logger.info(f"Registration rejected, missing fields: {[k for k, v in missing.items() if v]}")
            raise ValidationError("All fields are required", missing=missing)

        try:
            # stored lowercased so lookups are case-insensitive
            email = validate_email(email, check_deliverability=False).normalized.lower()
        except EmailNotValidError:
            raise ValidationError("Invalid email address", field="email")

        if self.users.get_by_email(email):
            logger.info("Registration rejected, email already registered")
            raise ConflictError("User already exists", field="email")
        if self.users.get_by_username(username):
            logger.info("Registration rejected, username already registered")
            raise ConflictError("User already exists", field="username")

        user = self.users.add_user(
            username=username,
            email=email,
            hashed_password=get_password_hash(password),
        )
        logger.info(f"User created: {user.id}")
        return user, self.tokens.issue(user.id)

    def login(self, email: str, password: str) -> Tuple[User, str]:
        """Check credentials and issue a token.

        Unknown email and wrong password raise the same AuthError.
        """
        user = self.users.get_by_email(email.lower())
        if user is None:
            dummy_verify()
            logger.info("Login failed: unknown email")
            raise AuthError(INVALID_CREDENTIALS)

        if not verify_password(password, user.hashed_password):
            logger.info(f"Login failed: wrong password for user {user.id}")
            raise AuthError(INVALID_CREDENTIALS)

        logger.info(f"Login successful: {user.id}")
        return user, self.tokens.issue(user.id)


def get_auth_service(
    session: Session = Depends(get_session),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(UserStorage(session), tokens)
