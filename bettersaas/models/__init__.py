"""SQLAlchemy ORM models."""

from bettersaas.models.account import Account
from bettersaas.models.base import Base
from bettersaas.models.user import ROLE_ADMIN, ROLE_USER, User

__all__ = ["Account", "Base", "ROLE_ADMIN", "ROLE_USER", "User"]
