"""Read-only user/account dumps for check-user and check-users."""

from bettersaas.core.security import hash_scheme
from bettersaas.schemas.admin import AccountDetails, UserDetails, UserListItem
from bettersaas.services.credential_store import CredentialStore


def describe_user(store: CredentialStore, user_id: str, provider_id: str) -> UserDetails | None:
    """
    User row plus its account rows, or None if the user does not exist.

    provider_matches flags rows whose provider_id differs from what the login
    path expects; hash_scheme flags hashes the login path cannot verify.
    """
    user = store.find_user_by_id(user_id)
    if user is None:
        return None
    accounts = [
        AccountDetails(
            id=a.id,
            account_id=a.account_id,
            provider_id=a.provider_id,
            has_password=bool(a.password),
            hash_scheme=hash_scheme(a.password),
            provider_matches=a.provider_id == provider_id,
        )
        for a in store.find_accounts_by_user_id(user.id)
    ]
    details = UserDetails.model_validate(user)
    details.accounts = accounts
    return details


def list_users(store: CredentialStore, limit: int = 10) -> list[UserListItem]:
    return [UserListItem.model_validate(u) for u in store.list_users(limit=limit)]
