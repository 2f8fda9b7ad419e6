# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from cohort_tools.shared.errors.base import FieldError
from cohort_tools.shared.errors.validation import format_pydantic_errors

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50
PASSWORD_MIN_LENGTH = 8

_USERNAME_RE = re.compile(r"^[a-zA-Z0-9_]+$")
_FIELD_ORDER = ("username", "email", "password")


def normalize_email(value: str) -> str:
    return value.strip().lower()


class SignupForm(BaseModel):
    username: str
    email: str
    password: str

    model_config = ConfigDict(strict=True, frozen=True, extra="ignore")

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        value = value.strip()
        if not USERNAME_MIN_LENGTH <= len(value) <= USERNAME_MAX_LENGTH:
            raise PydanticCustomError(
                "username_length",
                "Username must be between {min_length} and {max_length} characters",
                {"min_length": USERNAME_MIN_LENGTH, "max_length": USERNAME_MAX_LENGTH},
            )
        if not _USERNAME_RE.match(value):
            raise PydanticCustomError(
                "username_invalid_chars",
                "Username can only contain letters, numbers and underscores",
                {"pattern": _USERNAME_RE.pattern},
            )
        return value

    @field_validator("email")
    @classmethod
    def validate_email_address(cls, value: str) -> str:
        try:
            validate_email(value.strip(), check_deliverability=False)
        except EmailNotValidError:
            raise PydanticCustomError(
                "email_invalid",
                "Please provide a valid email address",
                {},
            ) from None
        return normalize_email(value)

    @field_validator("password")
    @classmethod
    def validate_password_strength(cls, value: str) -> str:
        strong = (
            len(value) >= PASSWORD_MIN_LENGTH
            and re.search(r"[a-z]", value)
            and re.search(r"[A-Z]", value)
            and re.search(r"\d", value)
        )
        if not strong:
            raise PydanticCustomError(
                "password_weak",
                "Password must be at least {min_length} characters long and contain "
                "at least one lowercase letter, one uppercase letter and one number",
                {"min_length": PASSWORD_MIN_LENGTH},
            )
        return value


@dataclass(slots=True, frozen=True)
class SignupValidation:
    form: SignupForm | None
    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def validate_signup(payload: Mapping[str, Any] | None) -> SignupValidation:
    """Check a raw signup payload against every field rule.

    Each failing field contributes one error; a failure on one field does not
    hide failures on the others.
    """
    if not isinstance(payload, Mapping):
        payload = {}
    try:
        form = SignupForm.model_validate(dict(payload))
    except ValidationError as exc:
        return SignupValidation(form=None, errors=format_pydantic_errors(exc, field_order=_FIELD_ORDER))
    return SignupValidation(form=form)


__all__ = [
    "SignupForm",
    "SignupValidation",
    "normalize_email",
    "validate_signup",
]
