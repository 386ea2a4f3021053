"""
Common response DTOs shared across endpoints.

ErrorResponse    - standard error shape from AppError.to_dict()
MessageResponse  - generic {success, message} shape
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class ErrorResponse(BaseModel):
    """Standard error JSON body produced by the AppError exception handler."""

    model_config = ConfigDict(populate_by_name=True)

    error: str
    code: str
    field: Optional[str] = None
    details: Optional[Any] = None


class MessageResponse(BaseModel):
    """Generic success/message response returned by the auth endpoints."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    message: Optional[str] = None
