"""PostgreSQL connection and scoped session management for the operator tools."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

if TYPE_CHECKING:
    from bettersaas.core.config import Settings


class StoreUnavailable(Exception):
    """Raised when the store cannot be reached or a query fails. Never retried."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def create_store_engine(database_url: str, echo: bool = False) -> Engine:
    """Build an engine for DATABASE_URL; connections are checked before use."""
    try:
        return create_engine(database_url, pool_pre_ping=True, echo=echo)
    except (SQLAlchemyError, ImportError) as exc:
        raise StoreUnavailable(f"Cannot create database engine: {exc}") from exc


@contextmanager
def session_scope(engine: Engine) -> Iterator[Session]:
    """Yield a session bound to engine and close it on every exit path."""
    db = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def open_store(settings: "Settings") -> Iterator[Session]:
    """
    Acquire the store for one tool invocation: one engine, one session.

    The session is closed and the engine's pool disposed when the block exits,
    including on refusals and errors, so repeated invocations never leak
    pooled connections.
    """
    engine = create_store_engine(settings.DATABASE_URL, echo=settings.DEBUG)
    try:
        with session_scope(engine) as db:
            yield db
    finally:
        engine.dispose()
