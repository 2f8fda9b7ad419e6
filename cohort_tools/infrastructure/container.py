# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from cohort_tools.application.services.password_hashing import build_password_hasher
from cohort_tools.application.services.token_service import JwtTokenService
from cohort_tools.application.use_cases.users.get_user import GetUserUseCase
from cohort_tools.application.use_cases.users.login_user import LoginUserUseCase
from cohort_tools.application.use_cases.users.register_user import RegisterUserUseCase
from cohort_tools.application.use_cases.users.verify_token import VerifyTokenUseCase
from cohort_tools.domain.users.repositories import PasswordHasher, RateLimiter
from cohort_tools.infrastructure.auth.rate_limiter import (
    FixedWindowRateLimiter,
    NoopRateLimiter,
    RateLimitPolicy,
)
from cohort_tools.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from cohort_tools.interfaces.http.controllers.auth_controller import AuthController
from cohort_tools.interfaces.http.controllers.misc_controller import MiscController
from cohort_tools.interfaces.http.controllers.users_controller import UsersController
from cohort_tools.shared.config import AppConfig, load_config


class Container:
    def __init__(self, config: AppConfig | None = None) -> None:
        self.config = config or load_config()

    @cached_property
    def password_hasher(self) -> PasswordHasher:
        return build_password_hasher(self.config.auth)

    @cached_property
    def token_service(self) -> JwtTokenService:
        return JwtTokenService.from_config(self.config.auth)

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository()

    # Rate limiters

    @cached_property
    def signup_rate_limiter(self) -> RateLimiter:
        settings = self.config.rate_limit
        if not settings.enabled:
            return NoopRateLimiter()
        return FixedWindowRateLimiter(
            RateLimitPolicy(settings.signup_window, settings.signup_limit),
            name="signup",
        )

    @cached_property
    def login_rate_limiter(self) -> RateLimiter:
        settings = self.config.rate_limit
        if not settings.enabled:
            return NoopRateLimiter()
        return FixedWindowRateLimiter(
            RateLimitPolicy(settings.login_window, settings.login_limit),
            name="login",
        )

    # Use cases

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
            rate_limiter=self.signup_rate_limiter,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
            tokens=self.token_service,
            rate_limiter=self.login_rate_limiter,
        )

    @cached_property
    def verify_token_use_case(self) -> VerifyTokenUseCase:
        return VerifyTokenUseCase(users=self.user_repository, tokens=self.token_service)

    @cached_property
    def get_user_use_case(self) -> GetUserUseCase:
        return GetUserUseCase(users=self.user_repository)

    # Controllers

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            verify_use_case=self.verify_token_use_case,
            trust_proxy=self.config.rate_limit.trust_proxy,
        )

    @cached_property
    def users_controller(self) -> UsersController:
        return UsersController(
            get_user_use_case=self.get_user_use_case,
            tokens=self.token_service,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController()
