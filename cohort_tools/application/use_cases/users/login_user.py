# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import asyncio
from dataclasses import dataclass

from cohort_tools.application.services.signup_validation import normalize_email
from cohort_tools.domain.users.exceptions import InvalidCredentialsError
from cohort_tools.domain.users.repositories import (
    PasswordHasher,
    RateLimiter,
    TokenService,
    UserRepository,
)
from cohort_tools.shared.errors.base import RateLimitedError
from cohort_tools.shared.logging import logger

LOGIN_RATE_LIMIT_MESSAGE = (
    "Too many login attempts from this IP, please try again after an hour"
)


@dataclass(slots=True, frozen=True)
class LoginResult:
    token: str
    user_id: str


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
        tokens: TokenService,
        rate_limiter: RateLimiter,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._tokens = tokens
        self._rate_limiter = rate_limiter

    async def execute(
        self, email: str | None, password: str | None, client_key: str
    ) -> LoginResult:
        if not self._rate_limiter.check_and_consume(client_key):
            raise RateLimitedError(
                LOGIN_RATE_LIMIT_MESSAGE,
                retry_after=self._rate_limiter.retry_after(client_key),
            )

        if not email or not password:
            raise InvalidCredentialsError()

        user = await self._users.find_by_email(normalize_email(email))
        if user is None or not await asyncio.to_thread(
            self._password_hasher.verify, password, user.password_hash
        ):
            logger.info(f"auth.login: invalid credentials from {client_key}")
            raise InvalidCredentialsError()

        token = self._tokens.issue(user.id)
        logger.info(f"auth.login: ok user_id={user.id}")
        return LoginResult(token=token, user_id=user.id)
