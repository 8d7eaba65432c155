"""
Admin credential bootstrap: elevate an allowlisted user to admin, set or repair
the credentials-provider password, and create a missing credential record.

Refusals raise BootstrapRefused; store failures propagate as StoreUnavailable.
Plaintext passwords never appear in logs, results, or exception messages.
"""

import logging
import re
from enum import Enum

from bettersaas.core.security import (
    BCRYPT_ROUNDS,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USER_ID_MAX_LEN,
    USER_ID_MIN_LEN,
    hash_password,
)
from bettersaas.models.user import ROLE_ADMIN
from bettersaas.schemas.admin import AccountRecordResult, SetPasswordResult, SetupAdminResult
from bettersaas.services.allowlist import is_allowed_admin
from bettersaas.services.credential_store import CredentialStore

logger = logging.getLogger(__name__)

# local@domain.tld with no whitespace or extra '@'.
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class RefusalReason(str, Enum):
    INVALID_EMAIL = "InvalidEmail"
    INVALID_ARGUMENT = "InvalidArgument"
    NOT_ALLOWLISTED = "NotAllowlisted"
    USER_NOT_FOUND = "UserNotFound"
    NO_ACCOUNT_RECORD = "NoAccountRecord"
    ACCOUNT_EXISTS = "AccountExists"


class BootstrapRefused(Exception):
    """Raised when a procedure declines to act; not a system error."""

    def __init__(self, reason: RefusalReason, message: str, hint: str | None = None) -> None:
        self.reason = reason
        self.message = message
        self.hint = hint
        super().__init__(message)


def validate_email(email: str) -> None:
    """Refuse anything that is not a single-line local@domain.tld address."""
    if not email or not EMAIL_PATTERN.fullmatch(email):
        raise BootstrapRefused(RefusalReason.INVALID_EMAIL, "Invalid email format.")


def validate_user_id(user_id: str) -> str:
    user_id = (user_id or "").strip()
    if not (USER_ID_MIN_LEN <= len(user_id) <= USER_ID_MAX_LEN):
        raise BootstrapRefused(RefusalReason.INVALID_ARGUMENT, "Invalid user id length.")
    return user_id


def validate_password(password: str) -> None:
    if not (PASSWORD_MIN_LEN <= len(password or "") <= PASSWORD_MAX_LEN):
        raise BootstrapRefused(
            RefusalReason.INVALID_ARGUMENT,
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.",
        )


def setup_admin(
    store: CredentialStore,
    email: str,
    allowlist: frozenset[str],
    provider_id: str,
) -> SetupAdminResult:
    """
    Elevate an already-registered, allowlisted user to admin.

    Steps: validate email shape, check allowlist (no store access before this
    passes), locate user, short-circuit if already admin (no writes), warn when
    no credentials-provider row exists or none carries provider_id, then set
    role to admin.
    """
    validate_email(email)

    if not is_allowed_admin(email, allowlist):
        logger.error("Email is not in the admin list: %s", email)
        logger.info("Current admin emails: %s", sorted(allowlist))
        raise BootstrapRefused(
            RefusalReason.NOT_ALLOWLISTED,
            f"{email} is not in the admin list.",
            hint="Add this email to the ADMIN_EMAILS environment variable.",
        )

    logger.info("Looking up user: %s", email)
    user = store.find_user_by_email(email)
    if user is None:
        raise BootstrapRefused(
            RefusalReason.USER_NOT_FOUND,
            f"No user found with email {email}.",
            hint="Ensure the user has registered an account first.",
        )

    if user.role == ROLE_ADMIN:
        logger.info("User is already an admin: user_id=%s", user.id)
        return SetupAdminResult(user_id=user.id, email=user.email, outcome="already_admin")

    accounts = store.find_accounts_by_user_id(user.id)
    credential_rows = store.credential_accounts(accounts, provider_id)
    missing_credential = not credential_rows
    provider_mismatch = bool(credential_rows) and not any(
        a.provider_id == provider_id for a in credential_rows
    )
    if missing_credential:
        logger.warning(
            "User %s has no credentials-provider account row; password login will not work "
            "until one is created (add-account-record) and a password is set (set-password).",
            user.id,
        )
    elif provider_mismatch:
        logger.warning(
            "User %s has a credential row with provider_id %r instead of %r; password login "
            "will not work until set-password normalizes it.",
            user.id,
            credential_rows[0].provider_id,
            provider_id,
        )

    logger.info("Setting role to admin: user_id=%s", user.id)
    store.set_user_role(user.id, ROLE_ADMIN)
    return SetupAdminResult(
        user_id=user.id,
        email=user.email,
        outcome="elevated",
        missing_credential=missing_credential,
        provider_mismatch=provider_mismatch,
    )


def set_password(
    store: CredentialStore,
    user_id: str,
    password: str,
    provider_id: str,
    rounds: int = BCRYPT_ROUNDS,
) -> SetPasswordResult:
    """
    Set or repair the bcrypt hash on the user's credentials-provider row.

    Refuses when the user has no account rows at all. The row's provider_id is
    normalized to provider_id on every call.
    """
    user_id = validate_user_id(user_id)
    validate_password(password)

    accounts = store.find_accounts_by_user_id(user_id)
    if not accounts:
        raise BootstrapRefused(
            RefusalReason.NO_ACCOUNT_RECORD,
            f"No account record found for user {user_id}.",
            hint="Create a credential record first (add-account-record).",
        )

    previous = {a.id: a.provider_id for a in store.credential_accounts(accounts, provider_id)}
    hashed = hash_password(password, rounds=rounds)
    account, created = store.upsert_account_password(user_id, hashed, provider_id)
    provider_normalized = not created and previous.get(account.id) != provider_id
    if provider_normalized:
        logger.warning(
            "Normalized provider_id on account %s: %r -> %r",
            account.id,
            previous.get(account.id),
            provider_id,
        )
    logger.info("Password set: user_id=%s account=%s created=%s", user_id, account.id, created)
    return SetPasswordResult(
        user_id=user_id,
        account_id=account.id,
        created=created,
        provider_normalized=provider_normalized,
    )


def add_account_record(
    store: CredentialStore,
    user_id: str,
    provider_id: str,
) -> AccountRecordResult:
    """Create a passwordless credentials-provider row for an existing user."""
    user_id = validate_user_id(user_id)

    if store.find_user_by_id(user_id) is None:
        raise BootstrapRefused(
            RefusalReason.USER_NOT_FOUND,
            f"User with id {user_id} does not exist.",
            hint="Ensure the user has registered an account first.",
        )

    existing = store.credential_accounts(store.find_accounts_by_user_id(user_id), provider_id)
    if existing:
        raise BootstrapRefused(
            RefusalReason.ACCOUNT_EXISTS,
            f"Credential account record already exists for user {user_id}.",
            hint="Use set-password to set or repair its password.",
        )

    account = store.create_account_record(user_id, provider_id)
    logger.info("Created account record: user_id=%s account=%s", user_id, account.id)
    return AccountRecordResult(
        user_id=user_id,
        account_id=account.id,
        provider_account_id=account.account_id,
        provider_id=account.provider_id,
    )
