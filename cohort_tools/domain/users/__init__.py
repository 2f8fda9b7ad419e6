# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import NewUser, TokenClaims, User
from .exceptions import (
    EmailAlreadyInUseError,
    InvalidCredentialsError,
    InvalidTokenError,
    SignupValidationError,
    UserNotFoundError,
)
from .repositories import PasswordHasher, RateLimiter, TokenService, UserRepository

__all__ = [
    "EmailAlreadyInUseError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "NewUser",
    "PasswordHasher",
    "RateLimiter",
    "SignupValidationError",
    "TokenClaims",
    "TokenService",
    "User",
    "UserNotFoundError",
    "UserRepository",
]
