# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from http import HTTPStatus

from cohort_tools.shared.errors.base import (
    DomainError,
    FieldError,
    UnauthorizedError,
    ValidationError,
)


class EmailAlreadyInUseError(DomainError):
    default_code = "email_already_in_use"
    default_message = "Email already in use"


class InvalidCredentialsError(DomainError):
    # Same body for unknown email and wrong password.
    default_code = "invalid_credentials"
    default_status = HTTPStatus.UNAUTHORIZED
    default_message = "Invalid email or password"


class UserNotFoundError(DomainError):
    default_code = "user_not_found"
    default_status = HTTPStatus.NOT_FOUND
    default_message = "User not found"


class InvalidTokenError(UnauthorizedError):
    def __init__(self) -> None:
        super().__init__("Invalid or expired token")


class SignupValidationError(ValidationError):
    def __init__(self, errors: Sequence[FieldError]) -> None:
        super().__init__(errors, code="signup_validation_failed")
