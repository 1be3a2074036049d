"""Session token issuing and verification.

Learn: JWT (JSON Web Token) provides stateless authentication.
The token carries the user's id, email and name, and expires after a
fixed TTL (7 days by default). Nothing is stored server-side, so a token
stays valid until it expires or the signing secret changes.

Verification failures come in two flavours that callers must be able
to tell apart: the token is expired, or it is invalid for any other
reason (bad signature, malformed, wrong claim shape).
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as ClaimsShapeError

from inkwell.config import settings


class TokenError(Exception):
    """Raised when token verification fails."""

    reason = "invalid"


class TokenInvalid(TokenError):
    reason = "invalid"


class TokenExpired(TokenError):
    reason = "expired"


class TokenClaims(BaseModel):
    """Typed view of a verified token payload."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    sub: uuid.UUID
    email: str
    name: str
    iat: datetime
    exp: datetime

    @property
    def user_id(self) -> uuid.UUID:
        return self.sub


def issue_token(
    user_id: uuid.UUID | str,
    email: str,
    name: str,
    ttl: Optional[timedelta] = None,
    now: Optional[datetime] = None,
) -> str:
    """Create a signed session token for a user."""
    issued = now or datetime.now(timezone.utc)
    expires = issued + (ttl or timedelta(days=settings.token_ttl_days))
    payload = {
        "sub": str(user_id),
        "email": email,
        "name": name,
        "iat": issued,
        "exp": expires,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, now: Optional[datetime] = None) -> TokenClaims:
    """Verify a session token and return its claims.

    Raises TokenExpired past `exp`, TokenInvalid for everything else.
    `now` lets callers pin the clock; by default PyJWT checks `exp`
    against the current time.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={
                "require": ["sub", "exp", "iat"],
                "verify_exp": now is None,
            },
        )
    except jwt.ExpiredSignatureError:
        raise TokenExpired("Token expired")
    except jwt.InvalidTokenError as e:
        raise TokenInvalid(f"Invalid token: {e}")

    try:
        claims = TokenClaims.model_validate(payload)
    except ClaimsShapeError:
        raise TokenInvalid("Invalid token: unexpected claims")

    if now is not None and claims.exp <= now:
        raise TokenExpired("Token expired")
    return claims
