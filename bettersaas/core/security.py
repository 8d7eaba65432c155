"""Password hashing for credentials-provider account rows."""

import bcrypt

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

# Min/max lengths for user id and password validation.
USER_ID_MIN_LEN = 1
USER_ID_MAX_LEN = 255
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128

# Prefixes of the modular-crypt bcrypt encodings bcrypt.checkpw accepts.
_BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")


def hash_password(plain_password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """
    Hash a plain-text password for storage. Do not store plain passwords.

    The result is self-describing: $2b$<cost>$<22-char salt><31-char digest>.
    A fresh salt is generated on every call.
    """
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str | None) -> bool:
    """Verify a plain password against a stored hash."""
    if not hashed:
        return False
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def hash_scheme(hashed: str | None) -> str | None:
    """Name the scheme of a stored hash: 'bcrypt', 'unrecognized', or None when unset."""
    if not hashed:
        return None
    if hashed.startswith(_BCRYPT_PREFIXES):
        return "bcrypt"
    return "unrecognized"
