"""Session transport: the `token` cookie.

The cookie is HTTP-only, SameSite=Strict, path "/", and Secure only in
production so local development over plain HTTP keeps working.
Logout overwrites it with an empty value and Max-Age=0.
"""

from starlette.responses import Response

from inkwell.config import settings
from inkwell.constants import SESSION_COOKIE


def set_session_cookie(response: Response, token: str) -> Response:
    response.set_cookie(
        key=SESSION_COOKIE,
        value=token,
        max_age=settings.token_ttl_seconds,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
    )
    return response


def clear_session_cookie(response: Response) -> Response:
    response.set_cookie(
        key=SESSION_COOKIE,
        value="",
        max_age=0,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
    )
    return response
