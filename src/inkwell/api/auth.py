"""Auth API: registration, login, logout, session check.

Learn: Routes for the cookie session lifecycle:
- POST /auth/register → create account, set session cookie
- POST /auth/login → email/password → set session cookie
- POST /auth/logout → clear session cookie
- GET /auth/verify → who does my cookie say I am?

Logout only clears the cookie in the browser. Tokens are not tracked
server-side, so a copied token keeps working until it expires.
"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from inkwell.auth.cookies import clear_session_cookie, set_session_cookie
from inkwell.auth.dependencies import CurrentIdentity, get_current_user
from inkwell.auth.tokens import issue_token
from inkwell.db.engine import get_db
from inkwell.db.models import User
from inkwell.schemas.user import (
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    UserEnvelope,
    UserRead,
)
from inkwell.services.user_service import UserService

router = APIRouter(prefix="/auth")


def _svc(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


def start_session(response: Response, user: User) -> None:
    """Issue a token for `user` and attach it as the session cookie."""
    token = issue_token(user.id, user.email, user.name)
    set_session_cookie(response, token)


# ─── Register ────────────────────────────────────────────


@router.post("/register", response_model=UserEnvelope, status_code=201)
async def register(
    body: RegisterRequest,
    response: Response,
    svc: UserService = Depends(_svc),
):
    """Create a new user account and log it in."""
    user = await svc.register(body.name, body.email, body.password)
    start_session(response, user)
    return {
        "message": "User registered successfully",
        "user": UserRead.model_validate(user),
    }


# ─── Login / logout ──────────────────────────────────────


@router.post("/login", response_model=UserEnvelope)
async def login(
    body: LoginRequest,
    response: Response,
    svc: UserService = Depends(_svc),
):
    """Login with email and password → session cookie."""
    user = await svc.authenticate(body.email, body.password)
    start_session(response, user)
    return {"message": "Login successful", "user": UserRead.model_validate(user)}


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response):
    clear_session_cookie(response)
    return {"message": "Logout successful"}


# ─── Verify ─────────────────────────────────────────────


@router.get("/verify", response_model=UserEnvelope)
async def verify(
    identity: CurrentIdentity = Depends(get_current_user),
    svc: UserService = Depends(_svc),
):
    """Resolve the session cookie to the current user.

    401 carries reason none/invalid/expired; 404 if the account is gone.
    """
    user = await svc.require_user(identity.user_id)
    return {
        "message": "Token verified successfully",
        "user": UserRead.model_validate(user),
    }
