"""Shared lifecycle for the operator scripts: settings, logging, store scope, exit codes."""

import argparse
import logging
import sys
from collections.abc import Callable
from typing import TypeVar

from dotenv import load_dotenv
from pydantic import ValidationError

from bettersaas.core.config import Settings, get_settings
from bettersaas.core.database import StoreUnavailable, open_store
from bettersaas.core.logging_config import configure_logging
from bettersaas.services.admin_bootstrap import BootstrapRefused
from bettersaas.services.credential_store import CredentialStore

T = TypeVar("T")

EXIT_OK = 0
EXIT_ERROR = 1


class ArgumentParser(argparse.ArgumentParser):
    """argparse parser that exits with status 1 on usage errors."""

    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(EXIT_ERROR, f"{self.prog}: error: {message}\n")


def load_settings() -> Settings | None:
    """Load .env and settings; print the problem and return None when invalid."""
    load_dotenv()
    try:
        return get_settings()
    except ValidationError as exc:
        for err in exc.errors():
            field = ".".join(str(p) for p in err.get("loc", ())) or "settings"
            if err.get("type") == "missing":
                print(f"Error: {field} is not set.", file=sys.stderr)
            else:
                print(f"Error: {field}: {err.get('msg')}", file=sys.stderr)
        return None


def run_with_store(
    settings: Settings,
    log: logging.Logger,
    action: Callable[[CredentialStore], T],
    precheck: Callable[[], object] | None = None,
) -> tuple[int, T | None]:
    """
    Run precheck, then open the store, run action, close the store, and map
    the outcome to an exit code. A precheck refusal never opens the store.

    Returns (exit_code, result); result is None on refusal or failure.
    """
    try:
        if precheck is not None:
            precheck()
        with open_store(settings) as db:
            store = CredentialStore(db, legacy_provider_ids=settings.legacy_provider_ids)
            return EXIT_OK, action(store)
    except BootstrapRefused as exc:
        log.warning("Refused: reason=%s", exc.reason.value)
        print(f"Refused ({exc.reason.value}): {exc.message}", file=sys.stderr)
        if exc.hint:
            print(exc.hint, file=sys.stderr)
        return EXIT_ERROR, None
    except StoreUnavailable as exc:
        log.error("Store unavailable: %s", exc.message)
        print(f"Error: store unavailable: {exc.message}", file=sys.stderr)
        return EXIT_ERROR, None


def start(script_name: str) -> tuple[Settings, logging.Logger] | None:
    """Process entry: settings and logging, configured once. None when settings are invalid."""
    settings = load_settings()
    if settings is None:
        return None
    root = configure_logging(settings)
    return settings, root.getChild(f"scripts.{script_name}")
