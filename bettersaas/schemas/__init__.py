"""Pydantic result and diagnostic schemas."""

from bettersaas.schemas.admin import (
    AccountDetails,
    AccountRecordResult,
    SetPasswordResult,
    SetupAdminResult,
    UserDetails,
    UserListItem,
)

__all__ = [
    "AccountDetails",
    "AccountRecordResult",
    "SetPasswordResult",
    "SetupAdminResult",
    "UserDetails",
    "UserListItem",
]
