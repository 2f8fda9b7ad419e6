# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from cohort_tools.domain.users.entities import User
from cohort_tools.domain.users.exceptions import UserNotFoundError
from cohort_tools.domain.users.repositories import UserRepository


class GetUserUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    async def execute(self, user_id: str) -> User:
        user = await self._users.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError()
        return user
