"""User service: registration, login, and profile changes.

Learn: Service layer separates business logic from HTTP routing.
Routes translate HTTP into calls here; everything that can go wrong is
raised as an inkwell.errors exception and mapped to a status code at
the app boundary.
"""

import re
import uuid
from typing import Optional

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from inkwell.auth.password import (
    MAX_PASSWORD_BYTES,
    hash_password,
    verify_password,
)
from inkwell.config import settings
from inkwell.constants import USER_AVATARS
from inkwell.db.models import User
from inkwell.errors import Conflict, NotFound, Unauthenticated, ValidationError
from inkwell.schemas.user import ProfileUpdate

logger = structlog.get_logger()

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MAX_NAME_LENGTH = 50


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _clean(value: Optional[str]) -> str:
    return value.strip() if value else ""


class UserService:
    """Business logic for user accounts."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Lookups ────────────────────────────────────────

    async def get_user(self, user_id: uuid.UUID) -> Optional[User]:
        return await self.db.get(User, user_id)

    async def require_user(self, user_id: uuid.UUID) -> User:
        user = await self.get_user(user_id)
        if not user:
            raise NotFound("User not found")
        return user

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(
            select(User).where(User.email == normalize_email(email))
        )
        return result.scalars().first()

    # ─── Registration / login ───────────────────────────

    async def register(
        self,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str],
    ) -> User:
        name, email = _clean(name), _clean(email)
        if not name or not email or not password:
            raise ValidationError("Name, email, and password are required")
        self._validate_name(name)
        self._validate_email(email)
        self._validate_password(password, "Password")

        if await self.get_by_email(email):
            raise Conflict("User with this email already exists")

        user = User(
            name=name,
            email=normalize_email(email),
            password_hash=hash_password(password),
        )
        self.db.add(user)
        await self._commit("User with this email already exists")
        logger.info("user.registered", user_id=str(user.id))
        return user

    async def authenticate(
        self, email: Optional[str], password: Optional[str]
    ) -> User:
        """Return the user for valid credentials, else raise."""
        email = _clean(email)
        if not email or not password:
            raise ValidationError("Email and password are required")

        user = await self.get_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            logger.info("auth.login_failed", email=normalize_email(email))
            raise Unauthenticated("Invalid email or password", reason="invalid")
        return user

    # ─── Profile ────────────────────────────────────────

    async def update_profile(self, user_id: uuid.UUID, body: ProfileUpdate) -> User:
        name, email = _clean(body.name), _clean(body.email)
        if not name or not email:
            raise ValidationError("Name and email are required")
        self._validate_name(name)
        self._validate_email(email)
        if body.avatar and body.avatar not in USER_AVATARS:
            raise ValidationError("Invalid avatar selection")

        user = await self.require_user(user_id)

        email = normalize_email(email)
        if email != user.email:
            other = await self.get_by_email(email)
            if other and other.id != user.id:
                raise Conflict("Email already in use")

        if body.new_password:
            if not body.current_password:
                raise ValidationError(
                    "Current password is required to change password"
                )
            if not verify_password(body.current_password, user.password_hash):
                raise ValidationError("Current password is incorrect")
            self._validate_password(body.new_password, "New password")
            user.password_hash = hash_password(body.new_password)

        user.name = name
        user.email = email
        if body.avatar:
            user.avatar = body.avatar

        await self._commit("Email already in use")
        logger.info(
            "user.profile_updated",
            user_id=str(user.id),
            password_changed=bool(body.new_password),
        )
        return user

    # ─── Helpers ────────────────────────────────────────

    async def _commit(self, conflict_message: str) -> None:
        """Commit, turning a unique-constraint race into Conflict."""
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise Conflict(conflict_message)

    @staticmethod
    def _validate_name(name: str) -> None:
        if len(name) > MAX_NAME_LENGTH:
            raise ValidationError(
                f"Name cannot exceed {MAX_NAME_LENGTH} characters"
            )

    @staticmethod
    def _validate_email(email: str) -> None:
        if not _EMAIL_RE.match(email):
            raise ValidationError("Please enter a valid email")

    @staticmethod
    def _validate_password(password: str, label: str) -> None:
        if len(password) < settings.password_min_length:
            raise ValidationError(
                f"{label} must be at least "
                f"{settings.password_min_length} characters long"
            )
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError(
                f"{label} cannot exceed {MAX_PASSWORD_BYTES} bytes"
            )
