from __future__ import annotations

import pytest

from cohort_tools.application.services.signup_validation import validate_signup


def _payload(**overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "username": "ada_l",
        "email": "Ada@Example.com",
        "password": "Secretpass1",
    }
    payload.update(overrides)
    return payload


def test_valid_payload_normalizes_email() -> None:
    result = validate_signup(_payload())

    assert result.ok
    assert result.errors == []
    assert result.form is not None
    assert result.form.email == "ada@example.com"
    assert result.form.username == "ada_l"


def test_username_is_trimmed() -> None:
    result = validate_signup(_payload(username="  grace_h  "))

    assert result.form is not None
    assert result.form.username == "grace_h"


@pytest.mark.parametrize(
    "username",
    ["ab", "   ab   ", "x" * 51, "ada lovelace", "ada-l", "ada!"],
)
def test_invalid_usernames_are_rejected(username: str) -> None:
    result = validate_signup(_payload(username=username))

    assert not result.ok
    assert [error.field for error in result.errors] == ["username"]


@pytest.mark.parametrize("username", ["abc", "x" * 50, "Under_Score_9"])
def test_username_boundaries_are_accepted(username: str) -> None:
    assert validate_signup(_payload(username=username)).ok


@pytest.mark.parametrize("email", ["not-an-email", "ada@", "@example.com", ""])
def test_invalid_email_is_rejected(email: str) -> None:
    result = validate_signup(_payload(email=email))

    assert [error.field for error in result.errors] == ["email"]
    assert "valid email" in result.errors[0].message


@pytest.mark.parametrize(
    "password",
    [
        "short1A",  # 7 chars
        "alllowercase1",
        "ALLUPPERCASE1",
        "NoDigitsHere",
    ],
)
def test_weak_password_yields_single_message(password: str) -> None:
    result = validate_signup(_payload(password=password))

    assert len(result.errors) == 1
    assert result.errors[0].field == "password"
    assert "at least 8 characters" in result.errors[0].message


def test_every_failing_field_is_reported_in_order() -> None:
    result = validate_signup({"username": "a", "email": "nope", "password": "short1"})

    assert [error.field for error in result.errors] == ["username", "email", "password"]


def test_missing_and_mistyped_fields() -> None:
    result = validate_signup({"username": 12345, "password": "Secretpass1"})

    errors = {error.field: error.message for error in result.errors}
    assert errors == {
        "username": "Username must be a string",
        "email": "Email is required",
    }


@pytest.mark.parametrize("payload", [None, [], "username=ada"])
def test_non_object_payload_reports_all_fields(payload: object) -> None:
    result = validate_signup(payload)  # type: ignore[arg-type]

    assert [error.field for error in result.errors] == ["username", "email", "password"]
