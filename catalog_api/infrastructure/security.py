"""Password hashing and access tokens.

Passwords are hashed with Argon2id. Access tokens are HS256 JWTs
signed with the configured secret.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from catalog_api.infrastructure.config import settings

_password_hasher = PasswordHasher()


class InvalidTokenError(Exception):
    """Raised when an access token cannot be verified."""


@dataclass(frozen=True)
class TokenClaims:
    """Verified access token claims."""

    user_id: str
    email: str
    expires_at: datetime


def hash_password(password: str) -> str:
    """Hash a password with Argon2id.

    Args:
        password: Plain-text password.

    Returns:
        Encoded hash including parameters and salt.
    """
    return _password_hasher.hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    """Check a password against a stored hash.

    Args:
        password_hash: Hash produced by hash_password.
        password: Plain-text candidate.

    Returns:
        True if the password matches.
    """
    try:
        return _password_hasher.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def create_access_token(
    user_id: str,
    email: str,
    expires_in: timedelta | None = None,
) -> str:
    """Issue a signed access token.

    Args:
        user_id: Subject of the token.
        email: User email, carried as a claim.
        expires_in: Lifetime override (defaults to settings).

    Returns:
        Encoded JWT.
    """
    now = datetime.now(timezone.utc)
    lifetime = expires_in or timedelta(minutes=settings.access_token_expire_minutes)
    payload: dict[str, Any] = {
        "sub": user_id,
        "email": email,
        "iat": now,
        "exp": now + lifetime,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> TokenClaims:
    """Verify an access token and extract its claims.

    Args:
        token: Encoded JWT.

    Returns:
        Verified claims.

    Raises:
        InvalidTokenError: If the signature, expiry or claims are invalid.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.InvalidTokenError as e:
        raise InvalidTokenError(str(e)) from e

    return TokenClaims(
        user_id=str(payload["sub"]),
        email=str(payload.get("email", "")),
        expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )
