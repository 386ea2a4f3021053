"""
Random code generators: pure, side-effect-free functions.

All generators use the cryptographically secure ``secrets`` module.
"""

from __future__ import annotations

import secrets

OTP_MIN = 100_000
OTP_MAX = 999_999


def generate_otp_code() -> str:
    """Generate a uniformly random 6-digit numeric OTP.

    The value is drawn from ``OTP_MIN``..``OTP_MAX`` inclusive, so it never
    starts with a zero and always has exactly six digits.

    Returns:
        The code as a string; it is stored and compared as an opaque string.
    """
    return str(OTP_MIN + secrets.randbelow(OTP_MAX - OTP_MIN + 1))
