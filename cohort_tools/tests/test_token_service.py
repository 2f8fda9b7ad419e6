from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt

from cohort_tools.application.services.token_service import JwtTokenService
from cohort_tools.domain.users.exceptions import InvalidTokenError

SECRET = "token-service-test-secret-0123456789"


@pytest.fixture()
def service() -> JwtTokenService:
    return JwtTokenService(SECRET)


def test_issue_then_verify_recovers_user_id(service: JwtTokenService) -> None:
    token = service.issue("64b0c0ffee")

    claims = service.verify(token)

    assert claims.user_id == "64b0c0ffee"
    assert claims.expires_at - claims.issued_at == timedelta(hours=6)


def test_token_embeds_expected_claims(service: JwtTokenService) -> None:
    issued = datetime(2030, 1, 1, 12, 0, tzinfo=UTC)
    token = service.issue("u1", now=issued)

    payload = jwt.get_unverified_claims(token)

    assert payload == {
        "userId": "u1",
        "iat": int(issued.timestamp()),
        "exp": int((issued + timedelta(hours=6)).timestamp()),
    }
    assert jwt.get_unverified_header(token)["alg"] == "HS256"


def test_expired_token_is_invalid(service: JwtTokenService) -> None:
    issued = datetime.now(UTC) - timedelta(hours=6, seconds=1)
    token = service.issue("u1", now=issued)

    with pytest.raises(InvalidTokenError):
        service.verify(token)


def test_token_just_inside_lifetime_is_valid(service: JwtTokenService) -> None:
    issued = datetime.now(UTC) - timedelta(hours=5, minutes=59)
    token = service.issue("u1", now=issued)

    assert service.verify(token).user_id == "u1"


def test_token_signed_with_other_secret_is_invalid(service: JwtTokenService) -> None:
    token = JwtTokenService("rotated-secret-abcdefghijklmnop").issue("u1")

    with pytest.raises(InvalidTokenError):
        service.verify(token)


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c", "eyJhbGciOiJIUzI1NiJ9.e30."])
def test_malformed_tokens_are_invalid(service: JwtTokenService, token: str) -> None:
    with pytest.raises(InvalidTokenError):
        service.verify(token)


def test_tampered_payload_is_invalid(service: JwtTokenService) -> None:
    header, _payload, signature = service.issue("u1").split(".")
    forged_payload = service.issue("admin").split(".")[1]

    with pytest.raises(InvalidTokenError):
        service.verify(".".join([header, forged_payload, signature]))


def test_token_without_user_claim_is_invalid(service: JwtTokenService) -> None:
    now = int(datetime.now(UTC).timestamp())
    token = jwt.encode({"iat": now, "exp": now + 60}, SECRET, algorithm="HS256")

    with pytest.raises(InvalidTokenError):
        service.verify(token)


def test_all_failures_share_one_message(service: JwtTokenService) -> None:
    expired = service.issue("u1", now=datetime.now(UTC) - timedelta(days=1))
    foreign = JwtTokenService("another-secret-abcdefghijklmnop").issue("u1")

    messages = set()
    for token in (expired, foreign, "garbage"):
        with pytest.raises(InvalidTokenError) as excinfo:
            service.verify(token)
        messages.add(excinfo.value.to_dict()["message"])

    assert messages == {"Invalid or expired token"}


def test_empty_secret_is_refused() -> None:
    with pytest.raises(ValueError):
        JwtTokenService("")
