"""Unit tests for bettersaas.core.config.Settings validation and derived values."""

import os
import unittest
from unittest.mock import patch

from pydantic import ValidationError

from bettersaas.core.config import Settings
from tests.support import make_settings


class TestDatabaseUrl(unittest.TestCase):
    """DATABASE_URL is required and must be a PostgreSQL URL."""

    def test_missing_raises(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(ValidationError) as ctx:
                Settings(_env_file=None)
        self.assertIn("DATABASE_URL", str(ctx.exception))

    def test_non_postgres_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            make_settings(DATABASE_URL="mysql://root@localhost/db")

    def test_blank_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            make_settings(DATABASE_URL="   ")

    def test_strips_whitespace(self) -> None:
        settings = make_settings(DATABASE_URL=" postgresql://u:p@h:5432/d ")
        self.assertEqual(settings.DATABASE_URL, "postgresql://u:p@h:5432/d")

    def test_read_from_environment(self) -> None:
        env = {"DATABASE_URL": "postgres://u:p@h/d", "ADMIN_EMAILS": "a@b.io"}
        with patch.dict(os.environ, env, clear=True):
            settings = Settings(_env_file=None)
        self.assertEqual(settings.DATABASE_URL, "postgres://u:p@h/d")
        self.assertEqual(settings.admin_allowlist, frozenset({"a@b.io"}))


class TestDerivedValues(unittest.TestCase):
    def test_admin_allowlist_parsed(self) -> None:
        settings = make_settings(ADMIN_EMAILS="admin@example.com, ,ops@example.com")
        self.assertEqual(
            settings.admin_allowlist,
            frozenset({"admin@example.com", "ops@example.com"}),
        )

    def test_legacy_provider_ids_exclude_sentinel(self) -> None:
        settings = make_settings(
            CREDENTIAL_PROVIDER_ID="credential",
            LEGACY_CREDENTIAL_PROVIDER_IDS="credentials, credential, email",
        )
        self.assertEqual(settings.legacy_provider_ids, frozenset({"credentials", "email"}))

    def test_defaults(self) -> None:
        settings = make_settings()
        self.assertEqual(settings.CREDENTIAL_PROVIDER_ID, "credential")
        self.assertEqual(settings.DEFAULT_RESET_PASSWORD.get_secret_value(), "changeme123")

    def test_log_level_normalized(self) -> None:
        self.assertEqual(make_settings(LOG_LEVEL="debug").LOG_LEVEL, "DEBUG")


class TestBcryptRounds(unittest.TestCase):
    def test_out_of_range_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            make_settings(BCRYPT_ROUNDS=3)
        with self.assertRaises(ValidationError):
            make_settings(BCRYPT_ROUNDS=17)

    def test_blank_provider_id_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            make_settings(CREDENTIAL_PROVIDER_ID=" ")


if __name__ == "__main__":
    unittest.main()
