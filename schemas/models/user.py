"""
User document model.

Maps to the `users` MongoDB collection. Accounts are created only after the
registration OTP has been verified, so every stored user has a verified
email and a password hash.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from schemas.models.base import MongoBaseModel


class UserDoc(MongoBaseModel):
    email: str
    name: str
    password_hash: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def display_name(self) -> str:
        return self.name
