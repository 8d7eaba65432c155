"""
List users with their roles (read-only). Run from project root:
  check-users [--limit N]
"""
import sys

from bettersaas.scripts.common import EXIT_ERROR, ArgumentParser, run_with_store, start
from bettersaas.services.diagnostics import list_users


def _positive_int(value: str) -> int:
    n = int(value)
    if n < 1:
        raise ValueError(value)
    return n


def main(argv: list[str] | None = None) -> int:
    parser = ArgumentParser(prog="check-users", description="List users and their roles.")
    parser.add_argument("--limit", type=_positive_int, default=10, help="Max users to list (default 10)")
    args = parser.parse_args(argv)

    started = start("check_users")
    if started is None:
        return EXIT_ERROR
    settings, log = started

    code, users = run_with_store(settings, log, lambda store: list_users(store, limit=args.limit))
    if users is None:
        return code

    print(f"Total users found: {len(users)}")
    for u in users:
        print(f"- {u.email} (role: {u.role})")
    return code


if __name__ == "__main__":
    sys.exit(main())
