"""ORM model for per-user authentication accounts (credentials and OAuth providers)."""

from sqlalchemy import Column, DateTime, ForeignKey, String, Text, func

from bettersaas.models.base import Base
from bettersaas.models.user import generate_id, utcnow


class Account(Base):
    """
    One row per (user, provider). The credentials-provider row holds the
    password hash; OAuth rows hold tokens. provider_id must equal the value
    the login path checks, or password login fails even with a valid hash.
    """

    __tablename__ = "account"

    id = Column(String(64), primary_key=True, default=generate_id)
    account_id = Column(Text, nullable=False)
    provider_id = Column(Text, nullable=False)
    user_id = Column(
        String(64),
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    access_token = Column(Text, nullable=True)
    refresh_token = Column(Text, nullable=True)
    id_token = Column(Text, nullable=True)
    access_token_expires_at = Column(DateTime(timezone=True), nullable=True)
    refresh_token_expires_at = Column(DateTime(timezone=True), nullable=True)
    scope = Column(Text, nullable=True)
    password = Column(Text, nullable=True)
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
