"""User directory populated from the authenticated identity."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from greencredits.schemas.user import UserResponse
from greencredits.services.common import Store
from greencredits.utils.errors import NotFoundError
from greencredits.utils.time import now_utc

USERS_TABLE = "users"


class UserService:
    """Keep a public profile row for every caller the auth layer vouches for."""

    def __init__(self, store: Store) -> None:
        self.store = store

    def upsert_user(self, user_id: str, name: str, email: str | None = None) -> UserResponse:
        """Create the user on first sight and refresh name/email afterwards."""
        row = self.store.get(USERS_TABLE, user_id)
        if row is None:
            user = UserResponse(id=user_id, name=name, email=email, created_at=now_utc())
            return UserResponse.model_validate(
                self.store.put(USERS_TABLE, user.model_dump(mode="json"))
            )

        existing = UserResponse.model_validate(row)
        if existing.name == name and (email is None or existing.email == email):
            return existing

        updated = existing.model_copy(update={"name": name, "email": email or existing.email})
        return UserResponse.model_validate(
            self.store.put(USERS_TABLE, updated.model_dump(mode="json"))
        )

    def get_user(self, user_id: str) -> UserResponse:
        """Return a user or raise NotFoundError."""
        row = self.store.get(USERS_TABLE, user_id)
        if row is None:
            raise NotFoundError("User")
        return UserResponse.model_validate(row)

    def get_users_map(self, user_ids: Iterable[str]) -> dict[str, UserResponse]:
        """Fetch multiple users and return an id-keyed mapping."""
        result: dict[str, UserResponse] = {}
        for user_id in {str(uid) for uid in user_ids}:
            row: dict[str, Any] | None = self.store.get(USERS_TABLE, user_id)
            if row is not None:
                result[user_id] = UserResponse.model_validate(row)
        return result
