"""
Print a user and their account records (read-only). Run from project root:
  check-user USER_ID
"""
import sys

from bettersaas.scripts.common import EXIT_ERROR, ArgumentParser, run_with_store, start
from bettersaas.services.diagnostics import describe_user


def main(argv: list[str] | None = None) -> int:
    parser = ArgumentParser(prog="check-user", description="Show a user and their account rows.")
    parser.add_argument("user_id", help="User id")
    args = parser.parse_args(argv)

    started = start("check_user")
    if started is None:
        return EXIT_ERROR
    settings, log = started

    code, details = run_with_store(
        settings,
        log,
        lambda store: describe_user(store, args.user_id, settings.CREDENTIAL_PROVIDER_ID),
    )
    if code != 0:
        return code
    if details is None:
        print(f"No user found with ID: {args.user_id}")
        return code

    print("User Details:")
    print(f"  ID: {details.id}")
    print(f"  Email: {details.email}")
    print(f"  Name: {details.name}")
    print(f"  Role: {details.role}")
    print(f"  Email Verified: {details.email_verified}")
    if not details.accounts:
        print("No account records found for this user")
        return code

    print("Account Details:")
    for index, acc in enumerate(details.accounts, start=1):
        print(f"  Account {index}:")
        print(f"    ID: {acc.id}")
        print(f"    Account ID: {acc.account_id}")
        provider_note = "" if acc.provider_matches else f" (expected '{settings.CREDENTIAL_PROVIDER_ID}')"
        print(f"    Provider: {acc.provider_id}{provider_note}")
        print(f"    Has Password: {'Yes' if acc.has_password else 'No'}")
        if acc.hash_scheme:
            print(f"    Hash Scheme: {acc.hash_scheme}")
    return code


if __name__ == "__main__":
    sys.exit(main())
