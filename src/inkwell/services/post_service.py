"""Post service: CRUD over posts with the ownership rule applied.

Learn: Every mutating method follows the same gate order:
the caller is already authenticated (the route requires it), then
existence (404), then ownership (403), then field validation (400),
then slug uniqueness (409, create only). Reads skip ownership.
"""

import uuid
from typing import Optional, Union

import pydantic
import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from inkwell.auth.dependencies import CurrentIdentity
from inkwell.auth.ownership import check_ownership
from inkwell.constants import DEFAULT_CATEGORY, POST_CATEGORIES
from inkwell.db.models import Post, User
from inkwell.errors import Conflict, NotFound, Unauthenticated, ValidationError
from inkwell.schemas.post import PostWrite
from inkwell.services.slugs import make_slug

logger = structlog.get_logger()

MAX_TITLE_LENGTH = 200
MAX_TAGS = 20
MAX_TAG_LENGTH = 50


def normalize_tags(tags: Optional[list[str]]) -> list[str]:
    """Trim, drop blanks, de-duplicate and sort."""
    cleaned = {t.strip() for t in tags or [] if t and t.strip()}
    if len(cleaned) > MAX_TAGS:
        raise ValidationError(f"A post can have at most {MAX_TAGS} tags")
    if any(len(t) > MAX_TAG_LENGTH for t in cleaned):
        raise ValidationError(
            f"Tags cannot exceed {MAX_TAG_LENGTH} characters"
        )
    return sorted(cleaned)


def validate_category(category: Optional[str]) -> None:
    if category not in POST_CATEGORIES:
        raise ValidationError("Invalid category")


def parse_post_body(body: Union[bytes, PostWrite]) -> PostWrite:
    """Parse a raw JSON request body into PostWrite.

    Runs inside the service so malformed input is only reported after
    the existence and ownership gates have passed.
    """
    if isinstance(body, PostWrite):
        return body
    try:
        return PostWrite.model_validate_json(body or b"{}")
    except pydantic.ValidationError as exc:
        errors = [
            {"field": ".".join(str(p) for p in e["loc"]), "error": e["msg"]}
            for e in exc.errors()
        ]
        raise ValidationError("Invalid request body", errors=errors)


class PostService:
    """Business logic for posts."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Reads ──────────────────────────────────────────

    async def list_posts(self, category: Optional[str] = None) -> list[Post]:
        q = select(Post).order_by(Post.created_at.desc())
        if category:
            validate_category(category)
            q = q.where(Post.category == category)
        result = await self.db.execute(q)
        return list(result.scalars().all())

    async def list_posts_by_author(self, author_id: uuid.UUID) -> list[Post]:
        result = await self.db.execute(
            select(Post)
            .where(Post.author_id == author_id)
            .order_by(Post.created_at.desc())
        )
        return list(result.scalars().all())

    async def find_post(self, slug: str) -> Optional[Post]:
        result = await self.db.execute(select(Post).where(Post.slug == slug))
        return result.scalars().first()

    async def get_post(self, slug: str) -> Post:
        post = await self.find_post(slug)
        if not post:
            raise NotFound("Post not found")
        return post

    # ─── Writes ─────────────────────────────────────────

    async def create_post(
        self, identity: CurrentIdentity, body: Union[bytes, PostWrite]
    ) -> Post:
        author = await self.db.get(User, identity.user_id)
        if not author:
            raise Unauthenticated("User not found", reason="invalid")

        body = parse_post_body(body)
        fields = self._validated_fields(body, default_category=DEFAULT_CATEGORY)

        slug = make_slug(fields["title"])
        if await self.find_post(slug):
            raise Conflict("Post with this title already exists")

        post = Post(slug=slug, author=author, **fields)
        self.db.add(post)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise Conflict("Post with this title already exists")

        logger.info("post.created", slug=slug, author_id=str(author.id))
        return post

    async def update_post(
        self, identity: CurrentIdentity, slug: str, body: Union[bytes, PostWrite]
    ) -> Post:
        post = await self.get_post(slug)
        check_ownership(identity, post, action="edit")

        body = parse_post_body(body)

        fields = self._validated_fields(body, default_category=post.category)
        if body.tags is None:
            fields["tags"] = post.tags

        for key, value in fields.items():
            setattr(post, key, value)
        await self.db.commit()

        logger.info("post.updated", slug=slug, author_id=str(post.author_id))
        return post

    async def delete_post(self, identity: CurrentIdentity, slug: str) -> None:
        post = await self.get_post(slug)
        check_ownership(identity, post, action="delete")

        await self.db.delete(post)
        await self.db.commit()
        logger.info("post.deleted", slug=slug, author_id=str(post.author_id))

    # ─── Helpers ────────────────────────────────────────

    @staticmethod
    def _validated_fields(body: PostWrite, default_category: str) -> dict:
        title = (body.title or "").strip()
        content = (body.content or "").strip()
        if not title or not content:
            raise ValidationError("Title and content are required")
        if len(title) > MAX_TITLE_LENGTH:
            raise ValidationError(
                f"Title cannot exceed {MAX_TITLE_LENGTH} characters"
            )

        category = body.category or default_category
        validate_category(category)

        return {
            "title": title,
            "content": content,
            "image_url": (body.image_url or "").strip(),
            "category": category,
            "tags": normalize_tags(body.tags),
        }
