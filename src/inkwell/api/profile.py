"""Profile API: read and update the logged-in user's account.

Learn: The session token embeds the user's name and email, so a
successful update re-issues the cookie to keep those claims current.
"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from inkwell.api.auth import start_session
from inkwell.auth.dependencies import CurrentIdentity, get_current_user
from inkwell.db.engine import get_db
from inkwell.schemas.user import ProfileUpdate, UserEnvelope, UserRead
from inkwell.services.user_service import UserService

router = APIRouter(prefix="/profile")


def _svc(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


@router.get("", response_model=UserEnvelope)
async def get_profile(
    identity: CurrentIdentity = Depends(get_current_user),
    svc: UserService = Depends(_svc),
):
    user = await svc.require_user(identity.user_id)
    return {
        "message": "Profile fetched successfully",
        "user": UserRead.model_validate(user),
    }


@router.put("", response_model=UserEnvelope)
async def update_profile(
    body: ProfileUpdate,
    response: Response,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: UserService = Depends(_svc),
):
    """Update name/email/avatar, and optionally the password.

    Changing the password requires current_password.
    """
    user = await svc.update_profile(identity.user_id, body)
    start_session(response, user)
    return {
        "message": "Profile updated successfully",
        "user": UserRead.model_validate(user),
    }
