"""Password hashing backed by ``werkzeug.security`` (salted scrypt)."""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

PASSWORD_METHOD = "scrypt"


def hash_password(password: str) -> str:
    return generate_password_hash(password, method=PASSWORD_METHOD)


def verify_password(password: str, encoded: str) -> bool:
    """Check ``password`` against a stored hash; malformed hashes never match."""
    try:
        return check_password_hash(encoded, password)
    except ValueError:
        # unknown or garbled method prefix
        return False
