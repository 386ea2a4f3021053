"""
OTP abuse-control primitives.

RateLimitGuard → RequestThrottle → OtpIssuer on issuance; OtpVerifier on
verification. All of them share one TTLStore and one OtpPolicy, both
injected by the caller.
"""

from .guard import RateLimitGuard
from .issuer import TEMPLATE_FORGOT_PASSWORD, TEMPLATE_USER_ACTIVATION, OtpIssuer
from .outcome import ALLOWED, BlockReason, Outcome
from .policy import DEFAULT_POLICY, OtpPolicy
from .throttle import RequestThrottle
from .verifier import OtpVerifier, VerificationResult

__all__ = [
    "ALLOWED",
    "BlockReason",
    "DEFAULT_POLICY",
    "OtpIssuer",
    "OtpPolicy",
    "OtpVerifier",
    "Outcome",
    "RateLimitGuard",
    "RequestThrottle",
    "TEMPLATE_FORGOT_PASSWORD",
    "TEMPLATE_USER_ACTIVATION",
    "VerificationResult",
]
