"""Post API routes.

Learn: Reads are public. Writes depend on get_current_user, so an
anonymous request is rejected with 401 before the handler body runs;
the service then applies existence → ownership → validation.
Write bodies are read raw and parsed by the service, so a malformed
body never outranks a 401, 404 or 403.

/posts/my-posts is declared before /posts/{slug} so it is not
swallowed by the slug route.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from inkwell.auth.dependencies import (
    CurrentIdentity,
    get_current_user,
    get_current_user_optional,
)
from inkwell.auth.ownership import is_owner
from inkwell.db.engine import get_db
from inkwell.schemas.post import (
    PostEnvelope,
    PostListEnvelope,
    PostRead,
    PostWrite,
)
from inkwell.schemas.user import MessageResponse
from inkwell.services.post_service import PostService

router = APIRouter(prefix="/posts")


def _svc(db: AsyncSession = Depends(get_db)) -> PostService:
    return PostService(db)


def _many(posts) -> list[PostRead]:
    return [PostRead.model_validate(p) for p in posts]


# Documents the JSON body the write routes parse themselves.
_WRITE_BODY = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": PostWrite.model_json_schema()}},
    }
}


# ─── Reads ──────────────────────────────────────────────


@router.get("", response_model=PostListEnvelope)
async def list_posts(
    category: Optional[str] = None,
    svc: PostService = Depends(_svc),
):
    posts = await svc.list_posts(category=category)
    return {"message": "Posts fetched successfully", "posts": _many(posts)}


@router.get("/my-posts", response_model=PostListEnvelope)
async def list_my_posts(
    identity: CurrentIdentity = Depends(get_current_user),
    svc: PostService = Depends(_svc),
):
    posts = await svc.list_posts_by_author(identity.user_id)
    return {"message": "User posts fetched successfully", "posts": _many(posts)}


@router.get("/{slug}", response_model=PostEnvelope)
async def get_post(
    slug: str,
    identity: Optional[CurrentIdentity] = Depends(get_current_user_optional),
    svc: PostService = Depends(_svc),
):
    """Public read. `can_edit` tells a logged-in viewer whether they own it."""
    post = await svc.get_post(slug)
    return {
        "message": "Post fetched successfully",
        "post": PostRead.model_validate(post),
        "can_edit": identity is not None and is_owner(identity, post),
    }


# ─── Writes ─────────────────────────────────────────────


@router.post(
    "", response_model=PostEnvelope, status_code=201, openapi_extra=_WRITE_BODY
)
async def create_post(
    request: Request,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: PostService = Depends(_svc),
):
    post = await svc.create_post(identity, await request.body())
    return {"message": "Post created successfully", "post": PostRead.model_validate(post)}


@router.put("/{slug}", response_model=PostEnvelope, openapi_extra=_WRITE_BODY)
async def update_post(
    slug: str,
    request: Request,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: PostService = Depends(_svc),
):
    """Update a post. Author only; slug and author never change."""
    post = await svc.update_post(identity, slug, await request.body())
    return {"message": "Post updated successfully", "post": PostRead.model_validate(post)}


@router.delete("/{slug}", response_model=MessageResponse)
async def delete_post(
    slug: str,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: PostService = Depends(_svc),
):
    await svc.delete_post(identity, slug)
    return {"message": "Post deleted successfully"}
