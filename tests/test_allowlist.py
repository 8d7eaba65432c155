"""Unit tests for bettersaas.services.allowlist: parsing ADMIN_EMAILS and exact matching."""

import unittest

from bettersaas.services.allowlist import is_allowed_admin, parse_admin_allowlist


class TestParseAdminAllowlist(unittest.TestCase):
    """parse_admin_allowlist trims entries and drops empties."""

    def test_empty_and_none(self) -> None:
        self.assertEqual(parse_admin_allowlist(""), frozenset())
        self.assertEqual(parse_admin_allowlist(None), frozenset())

    def test_trims_and_drops_empties(self) -> None:
        out = parse_admin_allowlist(" admin@example.com, ,ops@example.com,, ")
        self.assertEqual(out, frozenset({"admin@example.com", "ops@example.com"}))

    def test_single_entry(self) -> None:
        self.assertEqual(parse_admin_allowlist("a@b.io"), frozenset({"a@b.io"}))


class TestIsAllowedAdmin(unittest.TestCase):
    """is_allowed_admin is an exact string match."""

    def setUp(self) -> None:
        self.allowlist = parse_admin_allowlist("admin@example.com,ops@example.com")

    def test_listed_email_allowed(self) -> None:
        self.assertTrue(is_allowed_admin("admin@example.com", self.allowlist))

    def test_unlisted_email_refused(self) -> None:
        self.assertFalse(is_allowed_admin("eve@example.com", self.allowlist))

    def test_case_difference_refused(self) -> None:
        self.assertFalse(is_allowed_admin("Admin@example.com", self.allowlist))

    def test_surrounding_whitespace_refused(self) -> None:
        self.assertFalse(is_allowed_admin(" admin@example.com", self.allowlist))

    def test_empty_allowlist_refuses_everything(self) -> None:
        self.assertFalse(is_allowed_admin("admin@example.com", frozenset()))


if __name__ == "__main__":
    unittest.main()
