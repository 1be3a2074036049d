"""FastAPI auth dependencies: the Auth Guard.

Learn: These are used as Depends() in route handlers to extract
and validate the current identity from the `token` cookie. Every
authenticated route goes through the same two functions, so the check
order (authentication first, then whatever the handler does) is the
same everywhere.

- get_current_user_optional: public endpoints, never fails
- get_current_user: login-required endpoints, 401 with a reason
"""

import uuid
from dataclasses import dataclass
from typing import Optional

import structlog
from fastapi import Depends, Request

from inkwell.auth.tokens import TokenError, verify_token
from inkwell.constants import SESSION_COOKIE
from inkwell.errors import Unauthenticated

logger = structlog.get_logger()

_MESSAGES = {
    "none": "Authentication required",
    "invalid": "Invalid token",
    "expired": "Token expired",
}


@dataclass(frozen=True)
class CurrentIdentity:
    """The authenticated user making the request, taken from token claims."""

    user_id: uuid.UUID
    email: str
    name: str


@dataclass(frozen=True)
class SessionState:
    """Outcome of reading the session cookie.

    Exactly one of `identity` / `reason` is set.
    """

    identity: Optional[CurrentIdentity] = None
    reason: Optional[str] = None


def authenticate_token(token: Optional[str]) -> SessionState:
    """Turn a raw cookie value into a SessionState. Never raises."""
    if not token:
        return SessionState(reason="none")
    try:
        claims = verify_token(token)
    except TokenError as e:
        logger.info("auth.token_rejected", reason=e.reason)
        return SessionState(reason=e.reason)
    return SessionState(
        identity=CurrentIdentity(
            user_id=claims.user_id,
            email=claims.email,
            name=claims.name,
        )
    )


async def get_session(request: Request) -> SessionState:
    return authenticate_token(request.cookies.get(SESSION_COOKIE))


async def get_current_user_optional(
    session: SessionState = Depends(get_session),
) -> Optional[CurrentIdentity]:
    """Soft auth: a missing or bad token just means anonymous."""
    return session.identity


async def get_current_user(
    session: SessionState = Depends(get_session),
) -> CurrentIdentity:
    """Hard auth: 401 unless the cookie holds a valid, unexpired token."""
    if session.identity is None:
        reason = session.reason or "none"
        raise Unauthenticated(_MESSAGES[reason], reason=reason)
    return session.identity
