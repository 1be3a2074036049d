"""Ownership policy for post mutations.

Only the recorded author of a post may update or delete it. Callers
must check that the post exists first, so a missing post is reported
as 404 before any 403.
"""

import structlog

from inkwell.auth.dependencies import CurrentIdentity
from inkwell.db.models import Post
from inkwell.errors import Forbidden

logger = structlog.get_logger()


def is_owner(identity: CurrentIdentity, post: Post) -> bool:
    return post.author_id == identity.user_id


def check_ownership(identity: CurrentIdentity, post: Post, action: str = "edit") -> None:
    """Raise Forbidden unless `identity` authored `post`."""
    if not is_owner(identity, post):
        logger.info(
            "post.forbidden",
            action=action,
            slug=post.slug,
            user_id=str(identity.user_id),
        )
        raise Forbidden(f"You can only {action} your own posts")
