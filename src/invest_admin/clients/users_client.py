from __future__ import annotations

from dataclasses import dataclass

from ..envelope import read_rows
from ..exceptions import ApiError
from ..models_stats import UserAccount
from .base import BaseClient


@dataclass
class UsersClient(BaseClient):
    async def list_users(self) -> list[UserAccount]:
        data = await self._get_data("/admin/users")
        return [self._validate(UserAccount, row) for row in read_rows(data, "users")]

    async def get_user(self, user_id: str) -> UserAccount:
        if not user_id or not user_id.strip():
            raise ValueError("user_id is required")
        data = await self._get_data(f"/admin/users/{user_id.strip()}")
        user = data.get("user", data)
        if not isinstance(user, dict):
            raise ApiError(code="MALFORMED_ENVELOPE", message="user must be an object", raw_payload=data)
        return self._validate(UserAccount, user)
