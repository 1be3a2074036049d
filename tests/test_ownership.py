"""Ownership policy tests (no HTTP, no database)."""

import uuid

import pytest

from inkwell.auth.dependencies import CurrentIdentity
from inkwell.auth.ownership import check_ownership, is_owner
from inkwell.db.models import Post
from inkwell.errors import Forbidden

AUTHOR = uuid.uuid4()


def _post() -> Post:
    return Post(title="t", slug="t-1", content="c", author_id=AUTHOR)


def _identity(user_id: uuid.UUID) -> CurrentIdentity:
    return CurrentIdentity(user_id=user_id, email="u@x.com", name="U")


def test_author_is_owner():
    assert is_owner(_identity(AUTHOR), _post())
    check_ownership(_identity(AUTHOR), _post())


def test_other_user_is_forbidden():
    with pytest.raises(Forbidden) as exc:
        check_ownership(_identity(uuid.uuid4()), _post(), action="delete")
    assert exc.value.status_code == 403
    assert "delete" in exc.value.message
