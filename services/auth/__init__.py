"""Account flows built on the OTP primitives."""

from .password_reset import ForgotPasswordOrchestrator
from .registration import RegistrationService

__all__ = ["ForgotPasswordOrchestrator", "RegistrationService"]
