# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True, frozen=True)
class User:

    id: str
    username: str
    email: str
    password_hash: str
    created_at: datetime


@dataclass(slots=True, frozen=True)
class NewUser:
    """User fields supplied at signup; the store assigns ``id`` and ``created_at``."""

    username: str
    email: str
    password_hash: str


@dataclass(slots=True, frozen=True)
class TokenClaims:

    user_id: str
    issued_at: datetime
    expires_at: datetime
