# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any

from cohort_tools.application.services.signup_validation import validate_signup
from cohort_tools.domain.users.entities import NewUser, User
from cohort_tools.domain.users.exceptions import EmailAlreadyInUseError, SignupValidationError
from cohort_tools.domain.users.repositories import PasswordHasher, RateLimiter, UserRepository
from cohort_tools.shared.errors.base import RateLimitedError
from cohort_tools.shared.logging import logger

SIGNUP_RATE_LIMIT_MESSAGE = (
    "Too many accounts created from this IP, please try again after an hour"
)


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
        rate_limiter: RateLimiter,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._rate_limiter = rate_limiter

    async def execute(self, payload: Mapping[str, Any] | None, client_key: str) -> User:
        if not self._rate_limiter.check_and_consume(client_key):
            raise RateLimitedError(
                SIGNUP_RATE_LIMIT_MESSAGE,
                retry_after=self._rate_limiter.retry_after(client_key),
            )

        result = validate_signup(payload)
        if result.form is None:
            logger.info(
                f"auth.signup: rejected fields={[error.field for error in result.errors]}"
            )
            raise SignupValidationError(result.errors)
        form = result.form

        if await self._users.find_by_email(form.email) is not None:
            raise EmailAlreadyInUseError()

        hashed = await asyncio.to_thread(self._password_hasher.hash, form.password)
        # The store's unique index on email rejects a concurrent duplicate.
        user = await self._users.add(
            NewUser(username=form.username, email=form.email, password_hash=hashed)
        )
        logger.info(f"auth.signup: created user_id={user.id}")
        return user
