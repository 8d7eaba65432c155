"""ORM model for application users (identity and role)."""

import secrets
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, String, Text, func

from bettersaas.models.base import Base

ROLE_USER = "user"
ROLE_ADMIN = "admin"
ROLES = (ROLE_USER, ROLE_ADMIN)


def generate_id() -> str:
    """Opaque 32-char hex identifier."""
    return secrets.token_hex(16)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """
    Registered user. Rows come from self-service signup; the operator tools
    only read them and change role.

    role: 'admin' or 'user'
    """

    __tablename__ = "user"

    id = Column(String(64), primary_key=True, default=generate_id)
    name = Column(Text, nullable=False, default="")
    email = Column(String(255), nullable=False, unique=True, index=True)
    email_verified = Column(Boolean, nullable=False, default=False)
    image = Column(Text, nullable=True)
    role = Column(String(32), nullable=False, default=ROLE_USER, server_default=ROLE_USER)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
