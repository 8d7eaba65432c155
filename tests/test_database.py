"""Unit tests for bettersaas.core.database: scoped session and engine lifetime."""

import unittest
from unittest.mock import MagicMock, patch

from sqlalchemy.exc import ArgumentError

from bettersaas.core.database import (
    StoreUnavailable,
    create_store_engine,
    open_store,
)
from tests.support import make_settings


class TestOpenStore(unittest.TestCase):
    """open_store closes the session and disposes the engine on every exit path."""

    def test_disposes_on_success(self) -> None:
        engine = MagicMock()
        with patch("bettersaas.core.database.create_store_engine", return_value=engine), patch(
            "bettersaas.core.database.sessionmaker"
        ) as maker:
            with open_store(make_settings()):
                pass
        maker.return_value.return_value.close.assert_called_once()
        engine.dispose.assert_called_once()

    def test_disposes_on_error(self) -> None:
        engine = MagicMock()
        with patch("bettersaas.core.database.create_store_engine", return_value=engine), patch(
            "bettersaas.core.database.sessionmaker"
        ) as maker:
            with self.assertRaises(RuntimeError):
                with open_store(make_settings()):
                    raise RuntimeError("refused midway")
        maker.return_value.return_value.close.assert_called_once()
        engine.dispose.assert_called_once()


class TestCreateStoreEngine(unittest.TestCase):
    def test_bad_url_is_store_unavailable(self) -> None:
        with patch(
            "bettersaas.core.database.create_engine",
            side_effect=ArgumentError("Could not parse URL"),
        ):
            with self.assertRaises(StoreUnavailable):
                create_store_engine("postgresql://bad")


if __name__ == "__main__":
    unittest.main()
