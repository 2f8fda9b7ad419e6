from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, cast
from unittest.mock import MagicMock

import pytest
from flask import Flask

from cohort_tools.application.use_cases.users.login_user import LoginResult, LoginUserUseCase
from cohort_tools.application.use_cases.users.register_user import RegisterUserUseCase
from cohort_tools.application.use_cases.users.verify_token import VerifyTokenUseCase
from cohort_tools.domain.users.entities import User
from cohort_tools.domain.users.exceptions import (
    InvalidTokenError,
    SignupValidationError,
    UserNotFoundError,
)
from cohort_tools.interfaces.http.controllers.auth_controller import AuthController
from cohort_tools.shared.errors import FieldError, RateLimitedError
from cohort_tools.shared.middleware.error_handler import configure_error_handling

USER = User(
    id="5f0c1e2d3b4a",
    username="ada",
    email="ada@example.com",
    password_hash="$2b$10$secret-hash",
    created_at=datetime(2030, 1, 2, 3, 4, 5, tzinfo=UTC),
)


class StubUseCase:
    def __init__(self, result: Any = None, error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.calls: list[tuple[Any, ...]] = []

    async def execute(self, *args: Any) -> Any:
        self.calls.append(args)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture()
def flask_app() -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    return app


def _mount(
    app: Flask,
    *,
    register: Any = None,
    login: Any = None,
    verify: Any = None,
    trust_proxy: bool = False,
) -> None:
    controller = AuthController(
        register_use_case=cast(RegisterUserUseCase, register or MagicMock()),
        login_use_case=cast(LoginUserUseCase, login or MagicMock()),
        verify_use_case=cast(VerifyTokenUseCase, verify or MagicMock()),
        trust_proxy=trust_proxy,
    )
    app.register_blueprint(controller.as_blueprint())


def test_signup_returns_created_user_without_hash(flask_app: Flask) -> None:
    register = StubUseCase(result=USER)
    _mount(flask_app, register=register)
    payload = {"username": "ada", "email": "Ada@Example.com", "password": "Secretpass1"}

    with flask_app.test_client() as client:
        response = client.post("/auth/signup", json=payload)

    assert response.status_code == 201
    assert response.get_json() == {
        "message": "User created successfully",
        "newUser": {
            "_id": "5f0c1e2d3b4a",
            "username": "ada",
            "email": "ada@example.com",
            "createdAt": "2030-01-02T03:04:05Z",
        },
    }
    assert register.calls == [(payload, "127.0.0.1")]


def test_signup_validation_errors_are_listed(flask_app: Flask) -> None:
    errors = [
        FieldError("username", "Username must be between 3 and 50 characters"),
        FieldError("password", "Password is required"),
    ]
    _mount(flask_app, register=StubUseCase(error=SignupValidationError(errors)))

    with flask_app.test_client() as client:
        response = client.post("/auth/signup", json={"username": "a"})

    assert response.status_code == 400
    assert response.get_json() == {
        "errors": [
            {"field": "username", "message": "Username must be between 3 and 50 characters"},
            {"field": "password", "message": "Password is required"},
        ]
    }


def test_signup_rate_limited_sets_retry_after(flask_app: Flask) -> None:
    error = RateLimitedError("Too many accounts created", retry_after=120.2)
    _mount(flask_app, register=StubUseCase(error=error))

    with flask_app.test_client() as client:
        response = client.post("/auth/signup", json={})

    assert response.status_code == 429
    assert response.headers["Retry-After"] == "121"
    assert response.get_json() == {"errorMessage": "Too many accounts created"}


def test_signup_uses_forwarded_address_behind_proxy(flask_app: Flask) -> None:
    register = StubUseCase(result=USER)
    _mount(flask_app, register=register, trust_proxy=True)

    with flask_app.test_client() as client:
        client.post(
            "/auth/signup",
            json={},
            headers={"X-Forwarded-For": "198.51.100.4, 10.0.0.1"},
        )

    assert register.calls[0][1] == "198.51.100.4"


def test_login_returns_token(flask_app: Flask) -> None:
    login = StubUseCase(result=LoginResult(token="jwt-token", user_id=USER.id))
    _mount(flask_app, login=login)

    with flask_app.test_client() as client:
        response = client.post(
            "/auth/login", json={"email": "ada@example.com", "password": "Secretpass1"}
        )

    assert response.status_code == 200
    assert response.get_json() == {
        "message": "Login successful",
        "authToken": "jwt-token",
        "userId": USER.id,
    }
    assert login.calls == [("ada@example.com", "Secretpass1", "127.0.0.1")]


def test_login_passes_only_string_fields(flask_app: Flask) -> None:
    login = StubUseCase(result=LoginResult(token="t", user_id="u"))
    _mount(flask_app, login=login)

    with flask_app.test_client() as client:
        client.post("/auth/login", json={"email": ["ada@example.com"], "password": 12345678})
        client.post("/auth/login", data="not json")

    assert login.calls == [(None, None, "127.0.0.1"), (None, None, "127.0.0.1")]


def test_verify_returns_current_user(flask_app: Flask) -> None:
    verify = StubUseCase(result=USER)
    _mount(flask_app, verify=verify)

    with flask_app.test_client() as client:
        response = client.get("/auth/verify", headers={"Authorization": "Bearer abc.def.ghi"})

    assert response.status_code == 200
    body = response.get_json()
    assert body["message"] == "Token is valid"
    assert body["currentLoggedUser"]["_id"] == USER.id
    assert "password_hash" not in body["currentLoggedUser"]
    assert verify.calls == [("abc.def.ghi",)]


@pytest.mark.parametrize(
    ("headers", "message"),
    [
        ({}, "Authorization header missing"),
        ({"Authorization": "Token abc"}, "Invalid authorization format"),
        ({"Authorization": "Bearer"}, "Invalid authorization format"),
        ({"Authorization": "Bearer a b"}, "Invalid authorization format"),
    ],
)
def test_verify_rejects_bad_header_before_use_case(
    flask_app: Flask, headers: dict[str, str], message: str
) -> None:
    verify = StubUseCase(result=USER)
    _mount(flask_app, verify=verify)

    with flask_app.test_client() as client:
        response = client.get("/auth/verify", headers=headers)

    assert response.status_code == 401
    assert response.get_json() == {"message": message}
    assert response.headers["WWW-Authenticate"] == "Bearer"
    assert verify.calls == []


def test_verify_invalid_token(flask_app: Flask) -> None:
    _mount(flask_app, verify=StubUseCase(error=InvalidTokenError()))

    with flask_app.test_client() as client:
        response = client.get("/auth/verify", headers={"Authorization": "Bearer nope"})

    assert response.status_code == 401
    assert response.get_json() == {"message": "Invalid or expired token"}


def test_verify_user_gone(flask_app: Flask) -> None:
    _mount(flask_app, verify=StubUseCase(error=UserNotFoundError()))

    with flask_app.test_client() as client:
        response = client.get("/auth/verify", headers={"Authorization": "Bearer abc"})

    assert response.status_code == 404
    assert response.get_json() == {"errorMessage": "User not found"}


def test_unexpected_failure_is_generic_500(flask_app: Flask) -> None:
    _mount(flask_app, login=StubUseCase(error=RuntimeError("db password=hunter2")))

    with flask_app.test_client() as client:
        response = client.post("/auth/login", json={"email": "a@b.co", "password": "x"})

    assert response.status_code == 500
    assert response.get_json() == {"errorMessage": "Internal server error"}
