"""Post creation, owner-guarded mutation, likes and comments."""
import uuid

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from social_api.core.errors import ForbiddenError
from social_api.models.post import Post
from social_api.schemas.post import CommentIn, PostCreate
from social_api.services.post_service import (
    LikeOutcome,
    add_comments,
    create_post as create_post_svc,
    toggle_like,
    update_post,
)
from tests.conftest import API, create_post, register_user


def test_create_and_get_post(client) -> None:
    alice = register_user(client, "alice")
    post = create_post(client, alice["id"], title="Hello", description="World")
    assert post["userId"] == alice["id"]
    assert post["likes"] == [] and post["comments"] == []

    r = client.get(f"{API}/posts/{post['id']}")
    assert r.status_code == status.HTTP_200_OK
    assert r.json()["title"] == "Hello"


def test_create_post_requires_title_and_description(client) -> None:
    alice = register_user(client, "alice")
    r = client.post(f"{API}/posts", json={"title": "", "description": "x", "userId": alice["id"]})
    assert r.status_code == status.HTTP_400_BAD_REQUEST
    r = client.post(f"{API}/posts", json={"title": "t", "userId": alice["id"]})
    assert r.status_code == status.HTTP_400_BAD_REQUEST


def test_get_unknown_post_is_404(client) -> None:
    r = client.get(f"{API}/posts/{uuid.uuid4()}")
    assert r.status_code == status.HTTP_404_NOT_FOUND
    assert r.json() == {"message": "Post not found"}


def test_owner_updates_post(client) -> None:
    alice = register_user(client, "alice")
    post = create_post(client, alice["id"])
    r = client.put(f"{API}/posts/{post['id']}", json={"userId": alice["id"], "title": "Edited"})
    assert r.status_code == status.HTTP_200_OK
    assert r.json() == {"message": "Post updated successfully"}
    updated = client.get(f"{API}/posts/{post['id']}").json()
    assert updated["title"] == "Edited"
    assert updated["description"] == post["description"]


def test_non_owner_cannot_update_or_delete(client) -> None:
    alice = register_user(client, "alice")
    bob = register_user(client, "bob")
    post = create_post(client, alice["id"])

    r = client.put(f"{API}/posts/{post['id']}", json={"userId": bob["id"], "title": "Mine now"})
    assert r.status_code == status.HTTP_403_FORBIDDEN
    assert r.json() == {"message": "You can only update your own posts"}

    r = client.request("DELETE", f"{API}/posts/{post['id']}", json={"userId": bob["id"]})
    assert r.status_code == status.HTTP_403_FORBIDDEN
    assert r.json() == {"message": "You can only delete your own posts"}

    assert client.get(f"{API}/posts/{post['id']}").json()["title"] == post["title"]


def test_patch_cannot_reassign_owner(client) -> None:
    alice = register_user(client, "alice")
    bob = register_user(client, "bob")
    post = create_post(client, alice["id"])
    r = client.put(
        f"{API}/posts/{post['id']}",
        json={"userId": alice["id"], "likes": [bob["id"]], "comments": [], "title": "Still mine"},
    )
    assert r.status_code == status.HTTP_200_OK
    updated = client.get(f"{API}/posts/{post['id']}").json()
    assert updated["userId"] == alice["id"]
    assert updated["likes"] == []


def test_owner_deletes_post(client) -> None:
    alice = register_user(client, "alice")
    post = create_post(client, alice["id"])
    r = client.request("DELETE", f"{API}/posts/{post['id']}", json={"userId": alice["id"]})
    assert r.status_code == status.HTTP_200_OK
    assert r.json() == {"message": "Post deleted successfully"}
    assert client.get(f"{API}/posts/{post['id']}").status_code == status.HTTP_404_NOT_FOUND


def test_like_toggles(client) -> None:
    alice = register_user(client, "alice")
    post = create_post(client, alice["id"])
    liker = str(uuid.uuid4())  # likes are not checked against existing users

    r = client.put(f"{API}/posts/{post['id']}/like", json={"userId": liker})
    assert r.json() == {"message": "Post has been liked"}
    assert client.get(f"{API}/posts/{post['id']}").json()["likes"] == [liker]

    r = client.put(f"{API}/posts/{post['id']}/like", json={"userId": liker})
    assert r.json() == {"message": "Post has been disliked"}
    assert client.get(f"{API}/posts/{post['id']}").json()["likes"] == []


def test_like_unknown_post_is_404(client) -> None:
    r = client.put(f"{API}/posts/{uuid.uuid4()}/like", json={"userId": str(uuid.uuid4())})
    assert r.status_code == status.HTTP_404_NOT_FOUND


def test_comments_are_appended_in_order(client) -> None:
    alice = register_user(client, "alice")
    bob = register_user(client, "bob")
    post = create_post(client, alice["id"])

    r = client.put(
        f"{API}/posts/{post['id']}/comments",
        json={"comments": [{"userId": bob["id"], "text": "first"}, {"userId": alice["id"], "text": "second"}]},
    )
    assert r.status_code == status.HTTP_200_OK
    r = client.put(f"{API}/posts/{post['id']}/comments", json={"comments": {"userId": bob["id"], "text": "third"}})
    assert r.status_code == status.HTTP_200_OK
    comments = r.json()["comments"]
    assert [c["text"] for c in comments] == ["first", "second", "third"]
    assert comments[0]["userId"] == bob["id"]


def test_malformed_comment_is_400(client) -> None:
    alice = register_user(client, "alice")
    post = create_post(client, alice["id"])
    r = client.put(f"{API}/posts/{post['id']}/comments", json={"comments": [{"text": "no author"}]})
    assert r.status_code == status.HTTP_400_BAD_REQUEST


def test_post_mutations_send_notifications(app, mailer) -> None:
    with TestClient(app) as client:
        alice = register_user(client, "alice")
        post = create_post(client, alice["id"], title="Trip")
        client.put(f"{API}/posts/{post['id']}", json={"userId": alice["id"], "description": "Updated"})
        client.request("DELETE", f"{API}/posts/{post['id']}", json={"userId": alice["id"]})
    assert mailer.subjects == ["Registration Successful", "New Post Created", "Post Updated", "Post Deleted"]
    assert "Trip" in mailer.sent[1].html


def test_post_by_unknown_owner_skips_email(app, mailer) -> None:
    with TestClient(app) as client:
        create_post(client, str(uuid.uuid4()))
    assert mailer.sent == []


@pytest.mark.asyncio
async def test_toggle_like_round_trip(db_session) -> None:
    post = await create_post_svc(db_session, PostCreate(title="t", description="d", user_id=uuid.uuid4()))
    actor = uuid.uuid4()
    original = list(post.likes)

    assert await toggle_like(db_session, post.id, actor) is LikeOutcome.LIKED
    intermediate = list(post.likes)
    assert await toggle_like(db_session, post.id, actor) is LikeOutcome.DISLIKED

    assert intermediate != original
    assert post.likes == original


@pytest.mark.asyncio
async def test_non_owner_update_leaves_post_unchanged(db_session) -> None:
    owner = uuid.uuid4()
    post = await create_post_svc(db_session, PostCreate(title="t", description="d", user_id=owner))
    with pytest.raises(ForbiddenError):
        await update_post(db_session, post.id, uuid.uuid4(), {"title": "hijacked"})
    assert post.title == "t"
    assert post.user_id == owner


@pytest.mark.asyncio
async def test_interleaved_likes_and_comments_are_all_kept(session_maker, db_session) -> None:
    post = await create_post_svc(db_session, PostCreate(title="t", description="d", user_id=uuid.uuid4()))
    await db_session.commit()
    a, b = uuid.uuid4(), uuid.uuid4()

    async with session_maker() as first, session_maker() as second:
        # Both requests hold a copy of the post before either one writes.
        await first.get(Post, post.id)
        await second.get(Post, post.id)

        await toggle_like(first, post.id, a)
        await add_comments(first, post.id, [CommentIn(user_id=a, text="from a")])
        await first.commit()
        await toggle_like(second, post.id, b)
        await add_comments(second, post.id, [CommentIn(user_id=b, text="from b")])
        await second.commit()

    async with session_maker() as check:
        stored = await check.get(Post, post.id)
        assert sorted(stored.likes) == sorted([str(a), str(b)])
        assert [c["text"] for c in stored.comments] == ["from a", "from b"]
