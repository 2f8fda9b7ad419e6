# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, cast

INTERNAL_ERROR_MESSAGE = "Internal server error"


@dataclass(slots=True)
class AppError(Exception):
    code: str
    status: HTTPStatus
    message: str = ""
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message or self.code)

    def to_dict(self) -> dict[str, Any]:
        return {"errorMessage": self.message or self.code}

    def headers(self) -> dict[str, str]:
        return {}


class DomainError(AppError):
    """Predictable business failure; subclasses set ``code``, ``status``, ``message``."""

    def __init__(
        self,
        *,
        code: str | None = None,
        status: HTTPStatus | None = None,
        message: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        cls = type(self)
        resolved_code = code or cast(str, getattr(cls, "default_code", "domain_error"))
        resolved_status = status or cast(
            HTTPStatus, getattr(cls, "default_status", HTTPStatus.BAD_REQUEST)
        )
        resolved_message = message or cast(str, getattr(cls, "default_message", ""))
        super().__init__(
            code=resolved_code,
            status=resolved_status,
            message=resolved_message,
            context=context,
        )


class InfrastructureError(AppError):
    def __init__(
        self,
        code: str = "infrastructure_error",
        *,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_status = status or HTTPStatus.INTERNAL_SERVER_ERROR
        super().__init__(
            code=code,
            status=resolved_status,
            message=INTERNAL_ERROR_MESSAGE,
            context=context,
        )


@dataclass(slots=True, frozen=True)
class FieldError:
    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


class ValidationError(AppError):
    """Field-level failures; rendered as ``{"errors": [{field, message}, ...]}``."""

    def __init__(
        self,
        errors: Sequence[FieldError],
        code: str = "validation_error",
    ) -> None:
        self.errors = list(errors)
        super().__init__(
            code=code,
            status=HTTPStatus.BAD_REQUEST,
            message="Validation failed",
            context={"fields": [error.field for error in self.errors]},
        )

    def to_dict(self) -> dict[str, Any]:
        return {"errors": [error.to_dict() for error in self.errors]}


class UnauthorizedError(AppError):
    """Missing, malformed, invalid or expired bearer token."""

    def __init__(self, message: str = "Invalid or expired token") -> None:
        super().__init__(code="unauthorized", status=HTTPStatus.UNAUTHORIZED, message=message)

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message}

    def headers(self) -> dict[str, str]:
        return {"WWW-Authenticate": "Bearer"}


class RateLimitedError(AppError):
    def __init__(self, message: str, *, retry_after: float = 0.0) -> None:
        self.retry_after = max(0, math.ceil(retry_after))
        super().__init__(
            code="rate_limited",
            status=HTTPStatus.TOO_MANY_REQUESTS,
            message=message,
            context={"retry_after_seconds": self.retry_after},
        )

    def headers(self) -> dict[str, str]:
        return {"Retry-After": str(self.retry_after)}
