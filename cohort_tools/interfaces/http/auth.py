# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any

from flask import g, request

from cohort_tools.domain.users.repositories import TokenService
from cohort_tools.shared.errors.base import UnauthorizedError
from cohort_tools.shared.logging import logger
from cohort_tools.utils.http import bearer_token


def require_bearer_token() -> str:
    """Bearer token of the current request, or ``UnauthorizedError``."""
    try:
        token = bearer_token(request)
    except ValueError:
        logger.warning(f"Malformed Authorization header on {request.method} {request.path}")
        raise UnauthorizedError("Invalid authorization format") from None
    if token is None:
        logger.warning(f"No Authorization header on {request.method} {request.path}")
        raise UnauthorizedError("Authorization header missing")
    return token


def auth_required(tokens: TokenService) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    def decorator(f: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(f)
        def inner(*a: Any, **kw: Any) -> Any:
            claims = tokens.verify(require_bearer_token())
            g.user_id = claims.user_id
            logger.debug(f"Auth OK: user={claims.user_id} {request.method} {request.path}")
            return f(*a, **kw)

        return inner

    return decorator


__all__ = ["auth_required", "require_bearer_token"]
