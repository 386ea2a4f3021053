"""
Cryptographic helpers: password hashing and constant-time comparison.

Uses argon2 for passwords (via argon2-cffi).
"""

from __future__ import annotations

import hmac

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

_password_hasher = PasswordHasher()


def hash_password(plain_password: str) -> str:
    """Hash *plain_password* with argon2id.

    Returns:
        Argon2 hash string (includes algorithm parameters and salt).
    """
    return _password_hasher.hash(plain_password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    """Verify *plain_password* against an argon2 *password_hash*.

    Returns:
        ``True`` if the password matches, ``False`` for a wrong password or
        an unreadable hash.
    """
    try:
        return _password_hasher.verify(password_hash, plain_password)
    except (VerificationError, InvalidHashError):
        return False


def codes_match(expected: str, submitted: str) -> bool:
    """Compare two one-time codes as opaque strings in constant time."""
    return hmac.compare_digest(expected.encode("utf-8"), submitted.encode("utf-8"))
