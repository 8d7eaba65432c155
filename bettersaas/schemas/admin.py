"""Result and diagnostic schemas for the admin bootstrap tools. Never carry passwords or hashes."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class SetupAdminResult(BaseModel):
    """Outcome of elevating a user to admin."""

    user_id: str
    email: str
    outcome: Literal["elevated", "already_admin"]
    missing_credential: bool = Field(
        default=False,
        description="True when the user has no credentials-provider account row",
    )
    provider_mismatch: bool = Field(
        default=False,
        description="True when credential rows exist but none has the expected provider_id",
    )


class SetPasswordResult(BaseModel):
    """Outcome of setting or repairing a credentials-provider password."""

    user_id: str
    account_id: str = Field(description="Primary key of the account row that was written")
    created: bool = Field(description="True when a new credentials-provider row was inserted")
    provider_normalized: bool = Field(
        description="True when the row's provider_id was rewritten to the expected value",
    )


class AccountRecordResult(BaseModel):
    """Outcome of creating a passwordless credentials-provider row."""

    user_id: str
    account_id: str
    provider_account_id: str
    provider_id: str


class AccountDetails(BaseModel):
    """Account row as shown by check-user."""

    id: str
    account_id: str
    provider_id: str
    has_password: bool
    hash_scheme: Literal["bcrypt", "unrecognized"] | None = None
    provider_matches: bool


class UserDetails(BaseModel):
    """User row plus its account rows, as shown by check-user."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: str
    role: str
    email_verified: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None
    accounts: list[AccountDetails] = Field(default_factory=list)


class UserListItem(BaseModel):
    """User entry for check-users (no credentials)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    role: str
