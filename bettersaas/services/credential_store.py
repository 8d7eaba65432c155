"""Parameterized reads and writes against the user and account tables."""

import logging
import secrets
from collections.abc import Iterable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bettersaas.core.database import StoreUnavailable
from bettersaas.models import Account, User
from bettersaas.models.user import ROLES, generate_id, utcnow

logger = logging.getLogger(__name__)


class CredentialStore:
    """
    Store accessor used by the bootstrap procedures.

    Every SQLAlchemy error rolls back the session and surfaces as
    StoreUnavailable; nothing is retried. Writes commit immediately.
    """

    def __init__(self, session: Session, legacy_provider_ids: Iterable[str] = ()) -> None:
        self.session = session
        self.legacy_provider_ids = frozenset(legacy_provider_ids)

    def _fail(self, action: str, exc: SQLAlchemyError) -> StoreUnavailable:
        self.session.rollback()
        logger.error("Store operation failed: action=%s error=%s", action, type(exc).__name__)
        return StoreUnavailable(f"Database error while trying to {action}: {exc}")

    def find_user_by_email(self, email: str) -> User | None:
        try:
            users = (
                self.session.query(User)
                .filter(User.email == email)
                .order_by(User.created_at, User.id)
                .limit(2)
                .all()
            )
        except SQLAlchemyError as exc:
            raise self._fail("look up user by email", exc) from exc
        if len(users) > 1:
            logger.warning(
                "Data integrity: more than one user row has email %s; using id=%s",
                email,
                users[0].id,
            )
        return users[0] if users else None

    def find_user_by_id(self, user_id: str) -> User | None:
        try:
            return self.session.query(User).filter(User.id == user_id).first()
        except SQLAlchemyError as exc:
            raise self._fail("look up user by id", exc) from exc

    def find_accounts_by_user_id(self, user_id: str) -> list[Account]:
        """All account rows for the user, oldest first. Empty list when none."""
        try:
            return (
                self.session.query(Account)
                .filter(Account.user_id == user_id)
                .order_by(Account.created_at, Account.id)
                .all()
            )
        except SQLAlchemyError as exc:
            raise self._fail("list accounts", exc) from exc

    def is_credential_account(self, account: Account, provider_id: str) -> bool:
        return account.provider_id == provider_id or account.provider_id in self.legacy_provider_ids

    def credential_accounts(self, accounts: Iterable[Account], provider_id: str) -> list[Account]:
        """Filter to credentials-provider rows (expected provider id or a legacy alias)."""
        return [a for a in accounts if self.is_credential_account(a, provider_id)]

    def select_credential_account(
        self, accounts: Iterable[Account], provider_id: str
    ) -> Account | None:
        """
        The row password login uses: the oldest row whose provider_id equals
        provider_id, else the oldest legacy-alias row, else None.
        """
        rows = self.credential_accounts(accounts, provider_id)
        exact = [a for a in rows if a.provider_id == provider_id]
        return (exact or rows or [None])[0]

    def upsert_account_password(
        self, user_id: str, password_hash: str, provider_id: str
    ) -> tuple[Account, bool]:
        """
        Store password_hash on the user's credentials-provider row, inserting one if absent.

        A row already carrying provider_id wins over legacy-alias rows, so at
        most one row ends up with provider_id. The chosen row's provider_id is
        always rewritten to the given value. Returns (row, created).
        """
        accounts = self.find_accounts_by_user_id(user_id)
        rows = self.credential_accounts(accounts, provider_id)
        target = self.select_credential_account(accounts, provider_id)
        if len(rows) > 1:
            logger.warning(
                "Data integrity: user %s has %s credentials-provider rows; updating id=%s",
                user_id,
                len(rows),
                target.id,
            )
        try:
            if target is not None:
                account = target
                account.password = password_hash
                account.provider_id = provider_id
                account.updated_at = utcnow()
                created = False
            else:
                now = utcnow()
                account = Account(
                    id=generate_id(),
                    account_id=secrets.token_hex(12),
                    provider_id=provider_id,
                    user_id=user_id,
                    password=password_hash,
                    created_at=now,
                    updated_at=now,
                )
                self.session.add(account)
                created = True
            self.session.commit()
        except SQLAlchemyError as exc:
            raise self._fail("store account password", exc) from exc
        return account, created

    def create_account_record(self, user_id: str, provider_id: str) -> Account:
        """Insert a passwordless credentials-provider row for an existing user."""
        now = utcnow()
        account = Account(
            id=generate_id(),
            account_id=secrets.token_hex(12),
            provider_id=provider_id,
            user_id=user_id,
            password=None,
            created_at=now,
            updated_at=now,
        )
        try:
            self.session.add(account)
            self.session.commit()
        except SQLAlchemyError as exc:
            raise self._fail("create account record", exc) from exc
        return account

    def set_user_role(self, user_id: str, role: str) -> None:
        if role not in ROLES:
            raise ValueError(f"Unknown role: {role!r}")
        try:
            updated = (
                self.session.query(User)
                .filter(User.id == user_id)
                .update({User.role: role, User.updated_at: utcnow()}, synchronize_session="fetch")
            )
            self.session.commit()
        except SQLAlchemyError as exc:
            raise self._fail("update user role", exc) from exc
        if updated == 0:
            logger.warning("Role update matched no rows: user_id=%s", user_id)

    def list_users(self, limit: int = 10) -> list[User]:
        try:
            return self.session.query(User).order_by(User.created_at, User.id).limit(limit).all()
        except SQLAlchemyError as exc:
            raise self._fail("list users", exc) from exc
