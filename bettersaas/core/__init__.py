"""Core configuration, database access, hashing and logging setup."""

from bettersaas.core.config import Settings, get_settings
from bettersaas.core.database import StoreUnavailable, open_store

__all__ = ["Settings", "get_settings", "StoreUnavailable", "open_store"]
