"""Session token tests: issuing, expiry, tampering, claim shape."""

import base64
import json
import uuid
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from inkwell.auth.tokens import (
    TokenExpired,
    TokenInvalid,
    issue_token,
    verify_token,
)
from inkwell.config import settings

USER_ID = uuid.UUID("00000000-0000-0000-0000-000000000001")


def _b64(data: dict) -> str:
    raw = json.dumps(data).encode()
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode()


def test_issue_and_verify_roundtrip_claims():
    token = issue_token(USER_ID, "a@x.com", "Ann")
    claims = verify_token(token)
    assert claims.user_id == USER_ID
    assert claims.email == "a@x.com"
    assert claims.name == "Ann"


def test_default_ttl_is_seven_days():
    now = datetime.now(timezone.utc).replace(microsecond=0)
    claims = verify_token(issue_token(USER_ID, "a@x.com", "Ann", now=now))
    assert claims.exp - claims.iat == timedelta(days=settings.token_ttl_days)
    assert settings.token_ttl_seconds == 7 * 24 * 60 * 60


def test_expired_token_is_reported_as_expired():
    issued = datetime.now(timezone.utc) - timedelta(days=8)
    token = issue_token(USER_ID, "a@x.com", "Ann", now=issued)
    with pytest.raises(TokenExpired) as exc:
        verify_token(token)
    assert exc.value.reason == "expired"


def test_pinned_clock_past_expiry():
    now = datetime.now(timezone.utc)
    token = issue_token(USER_ID, "a@x.com", "Ann", ttl=timedelta(minutes=5), now=now)
    assert verify_token(token, now=now + timedelta(minutes=4)).name == "Ann"
    with pytest.raises(TokenExpired):
        verify_token(token, now=now + timedelta(minutes=6))


def test_tampered_payload_is_invalid():
    header, _, signature = issue_token(USER_ID, "a@x.com", "Ann").split(".")
    forged = _b64(
        {
            "sub": str(uuid.uuid4()),
            "email": "b@x.com",
            "name": "Bob",
            "iat": 1,
            "exp": 4_102_444_800,
        }
    )
    with pytest.raises(TokenInvalid) as exc:
        verify_token(f"{header}.{forged}.{signature}")
    assert exc.value.reason == "invalid"


def test_wrong_secret_is_invalid():
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {
            "sub": str(USER_ID),
            "email": "a@x.com",
            "name": "Ann",
            "iat": now,
            "exp": now + timedelta(days=1),
        },
        "some-other-secret-that-is-long-enough-1234",
        algorithm="HS256",
    )
    with pytest.raises(TokenInvalid):
        verify_token(token)


def test_expired_and_forged_is_invalid_not_expired():
    """A bad signature wins over expiry: nothing is trusted until signed."""
    past = datetime.now(timezone.utc) - timedelta(days=30)
    token = jwt.encode(
        {"sub": str(USER_ID), "email": "a@x.com", "name": "Ann",
         "iat": past, "exp": past + timedelta(days=1)},
        "some-other-secret-that-is-long-enough-1234",
        algorithm="HS256",
    )
    with pytest.raises(TokenInvalid):
        verify_token(token)


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
def test_malformed_tokens_are_invalid(token):
    with pytest.raises(TokenInvalid):
        verify_token(token)


def test_correctly_signed_token_with_wrong_shape_is_invalid():
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"sub": "not-a-uuid", "iat": now, "exp": now + timedelta(days=1)},
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )
    with pytest.raises(TokenInvalid):
        verify_token(token)
