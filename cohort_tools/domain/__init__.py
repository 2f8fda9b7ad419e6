# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .users import (
    EmailAlreadyInUseError,
    InvalidCredentialsError,
    InvalidTokenError,
    NewUser,
    SignupValidationError,
    TokenClaims,
    User,
    UserNotFoundError,
)

__all__ = [
    "EmailAlreadyInUseError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "NewUser",
    "SignupValidationError",
    "TokenClaims",
    "User",
    "UserNotFoundError",
]
