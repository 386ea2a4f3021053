"""
FastAPI dependency providers.

Collaborators (TTL store, notifier, user repository, OTP policy) are built
once in the app lifespan and stored on app.state; the providers here wire
them into fresh service objects per request.
"""

from __future__ import annotations

from fastapi import Depends, Request

from services.auth import ForgotPasswordOrchestrator, RegistrationService
from services.otp import OtpIssuer, OtpVerifier, RateLimitGuard, RequestThrottle


def get_guard(request: Request) -> RateLimitGuard:
    return RateLimitGuard(request.app.state.ttl_store)


def get_throttle(request: Request) -> RequestThrottle:
    return RequestThrottle(request.app.state.ttl_store, request.app.state.otp_policy)


def get_issuer(request: Request) -> OtpIssuer:
    state = request.app.state
    return OtpIssuer(state.ttl_store, state.notifier, state.otp_policy)


def get_verifier(request: Request) -> OtpVerifier:
    return OtpVerifier(request.app.state.ttl_store, request.app.state.otp_policy)


def get_registration_service(
    request: Request,
    guard: RateLimitGuard = Depends(get_guard),
    throttle: RequestThrottle = Depends(get_throttle),
    issuer: OtpIssuer = Depends(get_issuer),
    verifier: OtpVerifier = Depends(get_verifier),
) -> RegistrationService:
    return RegistrationService(request.app.state.users, guard, throttle, issuer, verifier)


def get_password_reset_service(
    request: Request,
    guard: RateLimitGuard = Depends(get_guard),
    throttle: RequestThrottle = Depends(get_throttle),
    issuer: OtpIssuer = Depends(get_issuer),
    verifier: OtpVerifier = Depends(get_verifier),
) -> ForgotPasswordOrchestrator:
    state = request.app.state
    return ForgotPasswordOrchestrator(
        state.users, guard, throttle, issuer, verifier, state.ttl_store, state.otp_policy
    )
