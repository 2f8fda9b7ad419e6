# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request

from cohort_tools.application.use_cases.users.login_user import LoginUserUseCase
from cohort_tools.application.use_cases.users.register_user import RegisterUserUseCase
from cohort_tools.application.use_cases.users.verify_token import VerifyTokenUseCase
from cohort_tools.interfaces.http.auth import require_bearer_token
from cohort_tools.interfaces.http.dto.auth import (
    LoginResponseDTO,
    SignupResponseDTO,
    UserPublicDTO,
    VerifyResponseDTO,
    dump,
)
from cohort_tools.shared.logging import logger
from cohort_tools.utils.asyncio_utils import run_async
from cohort_tools.utils.http import client_ip


def _str_field(payload: object, name: str) -> str | None:
    if not isinstance(payload, dict):
        return None
    value = payload.get(name)
    return value if isinstance(value, str) else None


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        verify_use_case: VerifyTokenUseCase,
        trust_proxy: bool = False,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._verify_use_case = verify_use_case
        self._trust_proxy = trust_proxy

    def _client_key(self) -> str:
        return client_ip(request, trust_proxy=self._trust_proxy)

    def signup(self) -> tuple[Response, int]:
        payload = request.get_json(silent=True)
        user = run_async(self._register_use_case.execute(payload, self._client_key()))

        body = SignupResponseDTO(new_user=UserPublicDTO.from_user(user))
        logger.info(f"auth.signup: ok user_id={user.id}")
        return jsonify(dump(body)), 201

    def login(self) -> tuple[Response, int]:
        payload = request.get_json(silent=True)
        result = run_async(
            self._login_use_case.execute(
                _str_field(payload, "email"),
                _str_field(payload, "password"),
                self._client_key(),
            )
        )

        body = LoginResponseDTO(auth_token=result.token, user_id=result.user_id)
        return jsonify(dump(body)), 200

    def verify(self) -> tuple[Response, int]:
        token = require_bearer_token()
        user = run_async(self._verify_use_case.execute(token))

        body = VerifyResponseDTO(current_logged_user=UserPublicDTO.from_user(user))
        return jsonify(dump(body)), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/auth")
        bp.add_url_rule("/signup", view_func=self.signup, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/verify", view_func=self.verify, methods=["GET"])
        return bp
