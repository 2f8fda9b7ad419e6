# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from cohort_tools.domain.users.entities import User
from cohort_tools.domain.users.exceptions import UserNotFoundError
from cohort_tools.domain.users.repositories import TokenService, UserRepository


class VerifyTokenUseCase:
    """Resolve a bearer token to the account it was issued for."""

    def __init__(self, *, users: UserRepository, tokens: TokenService) -> None:
        self._users = users
        self._tokens = tokens

    async def execute(self, token: str) -> User:
        claims = self._tokens.verify(token)
        user = await self._users.find_by_id(claims.user_id)
        if user is None:
            raise UserNotFoundError()
        return user
