"""Admin allowlist: which emails may be elevated to the admin role."""


def parse_admin_allowlist(raw: str | None) -> frozenset[str]:
    """Split a comma-separated ADMIN_EMAILS value into a set of emails (trimmed, empties dropped)."""
    if not raw:
        return frozenset()
    return frozenset(part.strip() for part in raw.split(",") if part.strip())


def is_allowed_admin(email: str, allowlist: frozenset[str] | set[str]) -> bool:
    """
    Exact membership test. The candidate is not trimmed or case-folded:
    a near-miss email is refused.
    """
    return email in allowlist
