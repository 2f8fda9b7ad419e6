# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify

from cohort_tools.application.use_cases.users.get_user import GetUserUseCase
from cohort_tools.domain.users.repositories import TokenService
from cohort_tools.interfaces.http.auth import auth_required
from cohort_tools.interfaces.http.dto.auth import UserProfileResponseDTO, UserPublicDTO, dump
from cohort_tools.utils.asyncio_utils import run_async


class UsersController:
    def __init__(self, *, get_user_use_case: GetUserUseCase, tokens: TokenService) -> None:
        self._get_user_use_case = get_user_use_case
        self._tokens = tokens

    def get_user(self, user_id: str) -> tuple[Response, int]:
        user = run_async(self._get_user_use_case.execute(user_id))
        body = UserProfileResponseDTO(user=UserPublicDTO.from_user(user))
        return jsonify(dump(body)), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("users", __name__, url_prefix="/api/user")
        bp.add_url_rule(
            "/<string:user_id>",
            view_func=auth_required(self._tokens)(self.get_user),
            methods=["GET"],
        )
        return bp
