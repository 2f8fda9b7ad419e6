# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Signed bearer tokens (HS256 JWT) carrying the ``userId`` claim."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from cohort_tools.domain.users.entities import TokenClaims
from cohort_tools.domain.users.exceptions import InvalidTokenError
from cohort_tools.domain.users.repositories import TokenService
from cohort_tools.shared.config import AuthConfig
from cohort_tools.shared.logging import logger


class JwtTokenService(TokenService):
    """Issue and verify self-contained, expiring tokens.

    Nothing is stored server side: a token stays valid until its ``exp``
    claim unless the signing secret changes, which invalidates every
    outstanding token at once.
    """

    def __init__(self, secret: str, *, ttl_seconds: int = 6 * 60 * 60, algorithm: str = "HS256") -> None:
        if not secret:
            raise ValueError("token signing secret must not be empty")
        self._secret = secret
        self._ttl = timedelta(seconds=ttl_seconds)
        self._algorithm = algorithm

    @classmethod
    def from_config(cls, config: AuthConfig) -> "JwtTokenService":
        return cls(
            config.jwt_secret,
            ttl_seconds=config.token_ttl_seconds,
            algorithm=config.jwt_algorithm,
        )

    def issue(self, user_id: str, now: datetime | None = None) -> str:
        issued_at = now or datetime.now(UTC)
        expires_at = issued_at + self._ttl
        claims = {
            "userId": str(user_id),
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require_exp": True, "require_iat": True},
            )
        except JWTError as exc:
            logger.debug(f"token.verify: rejected ({type(exc).__name__})")
            raise InvalidTokenError() from exc

        user_id = payload.get("userId")
        if not isinstance(user_id, str) or not user_id:
            logger.debug("token.verify: rejected (missing userId claim)")
            raise InvalidTokenError()

        return TokenClaims(
            user_id=user_id,
            issued_at=datetime.fromtimestamp(payload["iat"], tz=UTC),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=UTC),
        )


__all__ = ["JwtTokenService"]
