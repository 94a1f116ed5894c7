"""SQLAlchemy models for database tables.

Provides ORM models for non-catalog tables (users).
"""

from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from sqlalchemy import Column, DateTime, String

from catalog_api.infrastructure.database import Base


# ============================================================================
# User Models
# ============================================================================


class UserModel(Base):
    """User model for database persistence.

    Represents an account that can sign in and call protected endpoints.
    Emails are stored lower-cased so uniqueness is case-insensitive.
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)

    # Timestamps
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<UserModel(id={self.id}, email={self.email})>"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary (never includes the password hash)."""
        return {
            "id": self.id,
            "email": self.email,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
