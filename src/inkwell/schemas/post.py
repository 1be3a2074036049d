"""Pydantic schemas for posts.

Learn: PostWrite is shared by create and update. It has no author or
slug field: the author comes from the session and the slug is derived
once at creation, so neither can be changed through the API.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class PostWrite(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    image_url: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[list[str]] = None


class AuthorRead(BaseModel):
    id: uuid.UUID
    name: str
    email: str

    model_config = {"from_attributes": True}


class PostRead(BaseModel):
    id: uuid.UUID
    title: str
    slug: str
    content: str
    image_url: str
    category: str
    tags: list[str]
    author: AuthorRead
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PostEnvelope(BaseModel):
    message: str
    post: PostRead
    can_edit: bool = False


class PostListEnvelope(BaseModel):
    message: str
    posts: list[PostRead]
