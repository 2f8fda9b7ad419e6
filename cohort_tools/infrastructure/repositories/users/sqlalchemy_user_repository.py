# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import UTC
from typing import TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from cohort_tools.domain.users.entities import NewUser
from cohort_tools.domain.users.entities import User as DomainUser
from cohort_tools.domain.users.exceptions import EmailAlreadyInUseError
from cohort_tools.domain.users.repositories import UserRepository
from cohort_tools.infrastructure.db.models import User
from cohort_tools.infrastructure.db.session import session_scope
from cohort_tools.shared.errors.base import InfrastructureError
from cohort_tools.shared.logging import logger

T = TypeVar("T")


def _to_domain(row: User) -> DomainUser:
    created_at = row.created_at
    if created_at.tzinfo is None:
        # SQLite drops the offset; values are written in UTC.
        created_at = created_at.replace(tzinfo=UTC)
    return DomainUser(
        id=row.id,
        username=row.username,
        email=row.email,
        password_hash=row.password_hash,
        created_at=created_at,
    )


class SqlAlchemyUserRepository(UserRepository):
    """Credential store over SQLAlchemy sessions.

    Each call runs its blocking session work on a worker thread, so callers
    on an event loop only suspend while the database answers.
    """

    def __init__(self, session_factory: Callable = session_scope) -> None:
        self._session_scope = session_factory

    async def find_by_email(self, email: str) -> DomainUser | None:
        return await self._run(self._find_by_email, email)

    async def find_by_id(self, user_id: str) -> DomainUser | None:
        return await self._run(self._find_by_id, user_id)

    async def add(self, user: NewUser) -> DomainUser:
        return await self._run(self._add, user)

    def _find_by_email(self, email: str) -> DomainUser | None:
        with self._session_scope() as session:
            row = session.query(User).filter(User.email == email).first()
            return _to_domain(row) if row else None

    def _find_by_id(self, user_id: str) -> DomainUser | None:
        with self._session_scope() as session:
            row = session.get(User, user_id)
            return _to_domain(row) if row else None

    def _add(self, user: NewUser) -> DomainUser:
        try:
            with self._session_scope() as session:
                row = User(
                    username=user.username,
                    email=user.email,
                    password_hash=user.password_hash,
                )
                session.add(row)
                session.flush()
                session.refresh(row)
                return _to_domain(row)
        except IntegrityError as exc:
            logger.info("users.add: unique constraint rejected duplicate email")
            raise EmailAlreadyInUseError() from exc

    async def _run(self, fn: Callable[..., T], *args: object) -> T:
        try:
            return await asyncio.to_thread(fn, *args)
        except SQLAlchemyError as exc:
            logger.error(f"users.{fn.__name__.lstrip('_')}: store failure {type(exc).__name__}")
            raise InfrastructureError("store_unavailable") from exc
