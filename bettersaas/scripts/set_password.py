"""
Set or repair the password on a user's credential account record. Run from project root:
  set-password USER_ID [PASSWORD]
Example:
  set-password 9acb345a7c48f4f5aabfd1b0f362c3db 'a-long-passphrase'

When PASSWORD is omitted, DEFAULT_RESET_PASSWORD is used (discouraged).
The password is never printed.
"""
import sys

from bettersaas.scripts.common import EXIT_ERROR, ArgumentParser, run_with_store, start
from bettersaas.services.admin_bootstrap import set_password, validate_password, validate_user_id


def main(argv: list[str] | None = None) -> int:
    parser = ArgumentParser(
        prog="set-password",
        description="Set or repair the credentials-provider password for a user.",
    )
    parser.add_argument("user_id", help="User id")
    parser.add_argument("password", nargs="?", default=None, help="New password (6-128 chars)")
    args = parser.parse_args(argv)

    started = start("set_password")
    if started is None:
        return EXIT_ERROR
    settings, log = started

    password = args.password
    if password is None:
        log.warning("No password given; using DEFAULT_RESET_PASSWORD. Change it after first login.")
        password = settings.DEFAULT_RESET_PASSWORD.get_secret_value()

    log.info("Setting password for user %s", args.user_id)
    code, result = run_with_store(
        settings,
        log,
        lambda store: set_password(
            store,
            args.user_id,
            password,
            settings.CREDENTIAL_PROVIDER_ID,
            rounds=settings.BCRYPT_ROUNDS,
        ),
        precheck=lambda: (validate_user_id(args.user_id), validate_password(password)),
    )
    if result is None:
        return code

    print(f"Password set for user {result.user_id} (account {result.account_id}).")
    if result.provider_normalized:
        print(f"Provider normalized to '{settings.CREDENTIAL_PROVIDER_ID}'.")
    return code


if __name__ == "__main__":
    sys.exit(main())
