# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .use_cases.users.get_user import GetUserUseCase
from .use_cases.users.login_user import LoginResult, LoginUserUseCase
from .use_cases.users.register_user import RegisterUserUseCase
from .use_cases.users.verify_token import VerifyTokenUseCase

__all__ = [
    "GetUserUseCase",
    "LoginResult",
    "LoginUserUseCase",
    "RegisterUserUseCase",
    "VerifyTokenUseCase",
]
