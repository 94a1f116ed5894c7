"""User application service.

Handles account signup and signin:
- Registering users with Argon2id password hashes
- Verifying credentials and issuing signed access tokens
"""

from dataclasses import dataclass

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.domain.exceptions import InvalidInputError, UserAlreadyExistsError
from catalog_api.infrastructure.models import UserModel
from catalog_api.infrastructure.security import (
    create_access_token,
    hash_password,
    verify_password,
)

logger = structlog.get_logger()


# ============================================================================
# Service Result Types
# ============================================================================


@dataclass
class SignInResult:
    """Result of a successful signin."""

    user_id: str
    email: str
    access_token: str
    token_type: str = "bearer"


# ============================================================================
# User Service
# ============================================================================


def _normalize_email(email: str | None) -> str:
    if email is None or not email.strip():
        raise InvalidInputError("Email and password are required.", field="email")
    return email.strip().lower()


def _require_password(password: str | None) -> str:
    if password is None or not password.strip():
        raise InvalidInputError("Email and password are required.", field="password")
    return password


class UserService:
    """Service for user accounts."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def get_by_email(self, email: str) -> UserModel | None:
        """Get user by (normalized) email."""
        result = await self.session.execute(
            select(UserModel).where(UserModel.email == email)
        )
        return result.scalar_one_or_none()

    async def sign_up(self, email: str | None, password: str | None) -> UserModel:
        """Register a new user.

        Args:
            email: Account email (case-insensitive).
            password: Plain-text password.

        Returns:
            Created user.

        Raises:
            InvalidInputError: If email or password is missing.
            UserAlreadyExistsError: If the email is already registered.
        """
        email = _normalize_email(email)
        password = _require_password(password)

        if await self.get_by_email(email) is not None:
            logger.warning("Signup rejected, email taken", email=email)
            raise UserAlreadyExistsError(email)

        user = UserModel(email=email, password_hash=hash_password(password))
        self.session.add(user)
        try:
            await self.session.flush()
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise UserAlreadyExistsError(email) from e

        logger.info("User signed up", user_id=user.id)
        return user

    async def sign_in(self, email: str | None, password: str | None) -> SignInResult:
        """Verify credentials and issue an access token.

        Args:
            email: Account email.
            password: Plain-text password.

        Returns:
            Signin result with a bearer token.

        Raises:
            InvalidInputError: If a field is missing or credentials are wrong.
        """
        email = _normalize_email(email)
        password = _require_password(password)

        user = await self.get_by_email(email)
        if user is None or not verify_password(user.password_hash, password):
            logger.warning("Signin rejected", email=email)
            raise InvalidInputError("Invalid credentials.")

        token = create_access_token(user.id, user.email)
        logger.info("User signed in", user_id=user.id)
        return SignInResult(user_id=user.id, email=user.email, access_token=token)
