"""Pydantic schemas for registration, login, and profiles.

Learn: Request schemas are deliberately loose (every field optional) so
the service layer can report missing fields with its own messages and
in its own order. Read schemas never include the password hash.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class RegisterRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class ProfileUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    avatar: Optional[str] = None
    current_password: Optional[str] = None
    new_password: Optional[str] = None


class UserRead(BaseModel):
    id: uuid.UUID
    name: str
    email: str
    avatar: str
    created_at: datetime

    model_config = {"from_attributes": True}


class UserEnvelope(BaseModel):
    message: str
    user: UserRead


class MessageResponse(BaseModel):
    message: str
