"""
Comment endpoint tests — adding comments, listing them oldest first,
author-only deletion, and verifying that post detail responses include
comment data.

Comments cannot be edited, so the test surface is creation, read-through
and deletion.
"""
import pytest
from httpx import AsyncClient


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _register(client: AsyncClient, username: str) -> dict:
    resp = await client.post("/auth/register", json={
        "username": username,
        "email": f"{username}@example.com",
        "display_name": username.title(),
        "password": "correct-horse",
    })
    assert resp.status_code == 201
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


async def _create_post(client: AsyncClient, headers: dict) -> str:
    resp = await client.post("/api/v1/posts", json={"title": "Post", "body": "Body"}, headers=headers)
    assert resp.status_code == 201
    return resp.json()["id"]


# ---------------------------------------------------------------------------
# Add comment
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_add_comment(async_client: AsyncClient):
    """Posting a comment returns 201 with the author attached."""
    headers = await _register(async_client, "commenter")
    post_id = await _create_post(async_client, headers)

    resp = await async_client.post(
        f"/api/v1/posts/{post_id}/comments", json={"body": "Great post!"}, headers=headers
    )
    assert resp.status_code == 201
    data = resp.json()
    assert data["body"] == "Great post!"
    assert data["post_id"] == post_id
    assert data["author"]["username"] == "commenter"


@pytest.mark.asyncio
async def test_add_comment_requires_identity(async_client: AsyncClient):
    headers = await _register(async_client, "author")
    post_id = await _create_post(async_client, headers)

    resp = await async_client.post(f"/api/v1/posts/{post_id}/comments", json={"body": "Anon"})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_add_comment_to_missing_post(async_client: AsyncClient):
    headers = await _register(async_client, "commenter")
    resp = await async_client.post(
        "/api/v1/posts/00000000-0000-0000-0000-000000000000/comments",
        json={"body": "Hello?"},
        headers=headers,
    )
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_add_comment_empty_body(async_client: AsyncClient):
    headers = await _register(async_client, "commenter")
    post_id = await _create_post(async_client, headers)

    resp = await async_client.post(
        f"/api/v1/posts/{post_id}/comments", json={"body": ""}, headers=headers
    )
    assert resp.status_code == 422


# ---------------------------------------------------------------------------
# Read-through
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_comments_listed_oldest_first(async_client: AsyncClient):
    alice = await _register(async_client, "alice")
    bob = await _register(async_client, "bob")
    post_id = await _create_post(async_client, alice)

    for headers, body in [(bob, "first"), (alice, "second"), (bob, "third")]:
        await async_client.post(
            f"/api/v1/posts/{post_id}/comments", json={"body": body}, headers=headers
        )

    resp = await async_client.get(f"/api/v1/posts/{post_id}/comments")
    assert resp.status_code == 200
    comments = resp.json()
    assert [c["body"] for c in comments] == ["first", "second", "third"]
    assert [c["author"]["username"] for c in comments] == ["bob", "alice", "bob"]

    detail = (await async_client.get(f"/api/v1/posts/{post_id}")).json()
    assert detail["comment_count"] == 3
    assert [c["body"] for c in detail["comments"]] == ["first", "second", "third"]


@pytest.mark.asyncio
async def test_list_comments_for_unknown_post_is_empty(async_client: AsyncClient):
    resp = await async_client.get("/api/v1/posts/00000000-0000-0000-0000-000000000000/comments")
    assert resp.status_code == 200
    assert resp.json() == []


# ---------------------------------------------------------------------------
# Delete
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_delete_comment_by_author(async_client: AsyncClient):
    alice = await _register(async_client, "alice")
    bob = await _register(async_client, "bob")
    post_id = await _create_post(async_client, alice)
    comment = (await async_client.post(
        f"/api/v1/posts/{post_id}/comments", json={"body": "mine"}, headers=bob
    )).json()

    # The post author is not the comment author.
    forbidden = await async_client.delete(f"/api/v1/comments/{comment['id']}", headers=alice)
    assert forbidden.status_code == 403
    assert forbidden.json()["error"] == "forbidden"

    deleted = await async_client.delete(f"/api/v1/comments/{comment['id']}", headers=bob)
    assert deleted.status_code == 204

    again = await async_client.delete(f"/api/v1/comments/{comment['id']}", headers=bob)
    assert again.status_code == 404

    remaining = await async_client.get(f"/api/v1/posts/{post_id}/comments")
    assert remaining.json() == []


@pytest.mark.asyncio
async def test_delete_comment_requires_identity(async_client: AsyncClient):
    headers = await _register(async_client, "alice")
    post_id = await _create_post(async_client, headers)
    comment = (await async_client.post(
        f"/api/v1/posts/{post_id}/comments", json={"body": "x"}, headers=headers
    )).json()

    resp = await async_client.delete(f"/api/v1/comments/{comment['id']}")
    assert resp.status_code == 401
