"""Full-flow integration test: the whole session + ownership lifecycle.

Learn: Walks the platform end to end through the API only:
register → failed login → anonymous write rejected → create →
cross-user delete rejected → owner delete → post gone.
"""

import pytest
from conftest import as_cookie, register, session_cookie


@pytest.mark.asyncio
async def test_register_post_and_ownership_lifecycle(client):
    # ── Step 1: Ann registers and receives a session cookie ─────
    r = await client.post(
        "/api/auth/register",
        json={"name": "Ann", "email": "a@x.com", "password": "secret1"},
    )
    assert r.status_code == 201
    ann_token = session_cookie(r).value
    assert ann_token
    client.cookies.clear()

    # ── Step 2: wrong password is rejected ──────────────────────
    r = await client.post(
        "/api/auth/login", json={"email": "a@x.com", "password": "wrong"}
    )
    assert r.status_code == 401

    # ── Step 3: anonymous create is rejected ────────────────────
    r = await client.post("/api/posts", json={"title": "Hello World", "content": "hi"})
    assert r.status_code == 401

    # ── Step 4: Ann creates a post ──────────────────────────────
    r = await client.post(
        "/api/posts",
        json={"title": "Hello World", "content": "hi"},
        headers=as_cookie(ann_token),
    )
    assert r.status_code == 201
    slug = r.json()["post"]["slug"]
    assert slug.startswith("hello-world-")

    # ── Step 5: another user cannot delete it ───────────────────
    _, bob_token = await register(client, name="Bob", email="b@x.com")
    r = await client.delete(f"/api/posts/{slug}", headers=as_cookie(bob_token))
    assert r.status_code == 403

    # ── Step 6: the owner can ───────────────────────────────────
    r = await client.delete(f"/api/posts/{slug}", headers=as_cookie(ann_token))
    assert r.status_code == 200

    # ── Step 7: the post is gone ────────────────────────────────
    r = await client.get(f"/api/posts/{slug}")
    assert r.status_code == 404
