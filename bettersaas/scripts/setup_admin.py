"""
Elevate an already-registered user to admin. The email must be listed in ADMIN_EMAILS.
Run from project root:
  setup-admin EMAIL
  python -m bettersaas.scripts.setup_admin EMAIL
Example:
  setup-admin admin@example.com
"""
import sys

from bettersaas.scripts.common import EXIT_ERROR, ArgumentParser, run_with_store, start
from bettersaas.services.admin_bootstrap import setup_admin, validate_email


def main(argv: list[str] | None = None) -> int:
    parser = ArgumentParser(
        prog="setup-admin",
        description="Elevate an allowlisted, registered user to admin.",
    )
    parser.add_argument("email", help="Email of the registered user (must be in ADMIN_EMAILS)")
    args = parser.parse_args(argv)

    started = start("setup_admin")
    if started is None:
        return EXIT_ERROR
    settings, log = started

    log.info("Checking admin config")
    code, result = run_with_store(
        settings,
        log,
        lambda store: setup_admin(
            store,
            args.email,
            settings.admin_allowlist,
            settings.CREDENTIAL_PROVIDER_ID,
        ),
        precheck=lambda: validate_email(args.email),
    )
    if result is None:
        return code

    if result.outcome == "already_admin":
        print(f"{result.email} is already an admin.")
    else:
        print(f"{result.email} is now an admin.")
    if result.missing_credential:
        print(
            "Warning: no credential account record; run add-account-record and "
            "set-password before password login.",
            file=sys.stderr,
        )
    elif result.provider_mismatch:
        print(
            "Warning: credential account record does not use provider "
            f"'{settings.CREDENTIAL_PROVIDER_ID}'; "
            "run set-password to repair it before password login.",
            file=sys.stderr,
        )
    return code


if __name__ == "__main__":
    sys.exit(main())
