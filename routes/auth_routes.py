"""
Account registration and password-reset endpoints.

All handlers are thin: they unpack the DTO, call the service, and wrap the
result in MessageResponse. Every failure is an AppError rendered by the
global handler in errors.py.

POST /api/v1/auth/user-registration          - send activation OTP
POST /api/v1/auth/verify-user                - verify OTP and create account
POST /api/v1/auth/forgot-password-user       - send password-reset OTP
POST /api/v1/auth/verify-forgot-password-user - verify password-reset OTP
POST /api/v1/auth/reset-password-user        - store the new password (needs a verified OTP)
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from dependencies import get_password_reset_service, get_registration_service
from schemas.dto.requests.auth import (
    ForgotPasswordRequest,
    RegisterRequest,
    ResetPasswordRequest,
    VerifyForgotPasswordRequest,
    VerifyUserRequest,
)
from schemas.dto.responses.common import ErrorResponse, MessageResponse
from services.auth import ForgotPasswordOrchestrator, RegistrationService

router = APIRouter(
    prefix="/api/v1/auth",
    tags=["auth"],
    responses={
        code: {"model": ErrorResponse} for code in (400, 403, 404, 409, 429, 503)
    },
)


@router.post("/user-registration", response_model=MessageResponse)
async def user_registration(
    body: RegisterRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> MessageResponse:
    message = await service.start(body.name, body.email)
    return MessageResponse(success=True, message=message)


@router.post(
    "/verify-user",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def verify_user(
    body: VerifyUserRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> MessageResponse:
    await service.verify(body.email, body.otp, body.password, body.name)
    return MessageResponse(success=True, message="User registered successfully!")


@router.post("/forgot-password-user", response_model=MessageResponse)
async def forgot_password(
    body: ForgotPasswordRequest,
    service: ForgotPasswordOrchestrator = Depends(get_password_reset_service),
) -> MessageResponse:
    message = await service.initiate(body.email)
    return MessageResponse(success=True, message=message)


@router.post("/verify-forgot-password-user", response_model=MessageResponse)
async def verify_forgot_password(
    body: VerifyForgotPasswordRequest,
    service: ForgotPasswordOrchestrator = Depends(get_password_reset_service),
) -> MessageResponse:
    await service.confirm(body.email, body.otp)
    return MessageResponse(
        success=True, message="OTP verified. You can now reset your password."
    )


@router.post("/reset-password-user", response_model=MessageResponse)
async def reset_password(
    body: ResetPasswordRequest,
    service: ForgotPasswordOrchestrator = Depends(get_password_reset_service),
) -> MessageResponse:
    await service.reset_password(body.email, body.new_password)
    return MessageResponse(success=True, message="Password reset successful!")
