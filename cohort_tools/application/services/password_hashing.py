"""Password hashing strategies."""

from __future__ import annotations

import bcrypt
from werkzeug.security import check_password_hash, generate_password_hash

from cohort_tools.domain.users.repositories import PasswordHasher
from cohort_tools.shared.config import AuthConfig

# bcrypt only reads the first 72 bytes of its input.
_BCRYPT_MAX_BYTES = 72


class BcryptPasswordHasher(PasswordHasher):
    def __init__(self, rounds: int = 10) -> None:
        self._rounds = rounds

    def hash(self, password: str) -> str:
        secret = password.encode("utf-8")[:_BCRYPT_MAX_BYTES]
        return bcrypt.hashpw(secret, bcrypt.gensalt(rounds=self._rounds)).decode("utf-8")

    def verify(self, password: str, hashed: str) -> bool:
        secret = password.encode("utf-8")[:_BCRYPT_MAX_BYTES]
        try:
            return bcrypt.checkpw(secret, hashed.encode("utf-8"))
        except ValueError:
            # Not a bcrypt hash
            return False


class WerkzeugPasswordHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return str(generate_password_hash(password))

    def verify(self, password: str, hashed: str) -> bool:
        try:
            return bool(check_password_hash(hashed, password))
        except ValueError:
            return False


def build_password_hasher(config: AuthConfig) -> PasswordHasher:
    if config.password_scheme == "werkzeug":
        return WerkzeugPasswordHasher()
    return BcryptPasswordHasher(rounds=config.bcrypt_rounds)


__all__ = ["BcryptPasswordHasher", "WerkzeugPasswordHasher", "build_password_hasher"]
