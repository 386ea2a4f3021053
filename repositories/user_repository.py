"""
User repository: the identity lookup and user store used by the auth flows.

Wraps the async pymongo `users` collection. Database errors are raised as
TransportError so the boundary reports them as infrastructure failures.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from pymongo.errors import DuplicateKeyError, PyMongoError

from errors import ConflictError, TransportError
from schemas.models.user import UserDoc
from shared.logging import get_logger

log = get_logger(__name__)


class UserRepository:
    def __init__(self, collection: Any) -> None:
        # AsyncCollection from pymongo's async client
        self._col = collection

    async def ensure_indexes(self) -> None:
        await self._col.create_index("email", unique=True)

    async def find_by_email(self, email: str) -> Optional[UserDoc]:
        try:
            doc = await self._col.find_one({"email": email})
        except PyMongoError as e:
            log.error("user_lookup_failed", email=email, error=str(e))
            raise TransportError("User store unavailable. Please try again later.") from e
        return UserDoc.from_mongo(doc)

    async def create(self, email: str, name: str, password_hash: str) -> UserDoc:
        now = datetime.now(timezone.utc)
        user = UserDoc(
            email=email,
            name=name,
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
        )
        try:
            result = await self._col.insert_one(user.to_mongo())
        except DuplicateKeyError as e:
            raise ConflictError("User already exists with this email!", field="email") from e
        except PyMongoError as e:
            log.error("user_create_failed", email=email, error=str(e))
            raise TransportError("User store unavailable. Please try again later.") from e
        user.id = result.inserted_id
        log.info("user_created", email=email, user_id=str(result.inserted_id))
        return user

    async def update_password(self, email: str, password_hash: str) -> None:
        try:
            await self._col.update_one(
                {"email": email},
                {
                    "$set": {
                        "password_hash": password_hash,
                        "updated_at": datetime.now(timezone.utc),
                    }
                },
            )
        except PyMongoError as e:
            log.error("user_password_update_failed", email=email, error=str(e))
            raise TransportError("User store unavailable. Please try again later.") from e
        log.info("user_password_updated", email=email)
