"""
Request DTOs for authentication endpoints.

RegisterRequest             - POST /api/v1/auth/user-registration
VerifyUserRequest           - POST /api/v1/auth/verify-user
ForgotPasswordRequest       - POST /api/v1/auth/forgot-password-user
VerifyForgotPasswordRequest: POST /api/v1/auth/verify-forgot-password-user
ResetPasswordRequest        - POST /api/v1/auth/reset-password-user

Fields are optional at the schema level; the services report missing values
with their own messages.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    email: Optional[str] = None


class VerifyUserRequest(BaseModel):
    """``otp`` is the 6-digit code sent to the user's email address."""

    model_config = ConfigDict(populate_by_name=True)

    email: Optional[str] = None
    otp: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None


class ForgotPasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: Optional[str] = None


class VerifyForgotPasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: Optional[str] = None
    otp: Optional[str] = None


class ResetPasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: Optional[str] = None
    new_password: Optional[str] = Field(default=None, alias="newPassword")
