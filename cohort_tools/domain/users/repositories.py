# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from .entities import NewUser, TokenClaims, User


class UserRepository(Protocol):
    async def find_by_email(self, email: str) -> User | None: ...
    async def find_by_id(self, user_id: str) -> User | None: ...
    async def add(self, user: NewUser) -> User: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class TokenService(Protocol):
    def issue(self, user_id: str, now: datetime | None = None) -> str: ...
    def verify(self, token: str) -> TokenClaims: ...


class RateLimiter(Protocol):
    def check_and_consume(self, client_key: str) -> bool: ...
    def retry_after(self, client_key: str) -> float: ...
