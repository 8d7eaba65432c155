"""
Create a passwordless credential account record for a registered user. Run from project root:
  add-account-record USER_ID
Follow with set-password to make password login work.
"""
import sys

from bettersaas.scripts.common import EXIT_ERROR, ArgumentParser, run_with_store, start
from bettersaas.services.admin_bootstrap import add_account_record, validate_user_id


def main(argv: list[str] | None = None) -> int:
    parser = ArgumentParser(
        prog="add-account-record",
        description="Create a credential account record (no password) for a user.",
    )
    parser.add_argument("user_id", help="User id")
    args = parser.parse_args(argv)

    started = start("add_account_record")
    if started is None:
        return EXIT_ERROR
    settings, log = started

    code, result = run_with_store(
        settings,
        log,
        lambda store: add_account_record(store, args.user_id, settings.CREDENTIAL_PROVIDER_ID),
        precheck=lambda: validate_user_id(args.user_id),
    )
    if result is None:
        return code

    print(f"Created account record for user {result.user_id}.")
    print(f"  Account ID: {result.provider_account_id}")
    print(f"  Provider: {result.provider_id}")
    return code


if __name__ == "__main__":
    sys.exit(main())
