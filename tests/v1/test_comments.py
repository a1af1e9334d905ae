# tests/v1/test_comments.py
from datetime import UTC, datetime
from unittest.mock import patch

from flodaz_community.core.errors import StoreError
from flodaz_community.repositories import CommentRepository, PostRepository
from tests.conftest import ALICE_ID, BOB_ID, GHOST_ID


def test_create_comment(client, make_post, db_session):
    post = make_post()

    response = client.post(
        "/api/comments", json={"postId": post.id, "content": "Crumb looks perfect", "userId": BOB_ID}
    )

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Comment created successfully"
    assert body["comment"]["content"] == "Crumb looks perfect"
    assert body["comment"]["timestamp"] == "Just now"
    assert body["comment"]["author"] == {"name": "bob.smith", "username": "bob.smith", "avatar": "B"}

    db_session.expire_all()
    assert PostRepository(db_session).get_by_id(post.id).comment_count == 1


def test_comment_count_shows_in_feed(client, make_post):
    post = make_post()
    for text in ("one", "two"):
        client.post("/api/comments", json={"postId": post.id, "content": text, "userId": BOB_ID})

    feed = client.get("/api/posts").json()

    assert feed["posts"][0]["comments"] == 2


def test_comment_created_when_counter_update_fails(client, make_post, db_session):
    post = make_post()

    with patch.object(
        PostRepository,
        "increment_comment_count",
        side_effect=StoreError("Failed to update comment count"),
    ):
        response = client.post(
            "/api/comments", json={"postId": post.id, "content": "Still here", "userId": BOB_ID}
        )

    assert response.status_code == 201
    assert [c.content for c in CommentRepository(db_session).list_for_post(post.id)] == ["Still here"]
    db_session.expire_all()
    assert PostRepository(db_session).get_by_id(post.id).comment_count == 0


def test_create_comment_requires_post_and_content(client):
    response = client.post("/api/comments", json={"content": "orphan", "userId": BOB_ID})
    assert response.status_code == 400
    assert response.json() == {"error": "Post ID and content are required"}

    response = client.post("/api/comments", json={"postId": 1, "userId": BOB_ID})
    assert response.status_code == 400


def test_create_comment_requires_user(client, make_post):
    post = make_post()

    response = client.post("/api/comments", json={"postId": post.id, "content": "Who am I"})

    assert response.status_code == 400
    assert response.json() == {"error": "User ID is required"}


def test_list_comments_newest_first(client, make_post, make_comment):
    post = make_post()
    make_comment(post, content="first", user_id=ALICE_ID, created_at=datetime(2024, 3, 6, 9, 0, tzinfo=UTC))
    make_comment(post, content="second", user_id=GHOST_ID, created_at=datetime(2024, 3, 6, 10, 0, tzinfo=UTC))
    other = make_post()
    make_comment(other, content="elsewhere")

    response = client.get(f"/api/comments/{post.id}")

    assert response.status_code == 200
    comments = response.json()["comments"]
    assert [c["content"] for c in comments] == ["second", "first"]
    assert comments[0]["author"]["name"] == "Anonymous"
    assert comments[0]["timestamp"] == "3/6/2024, 10:00:00 AM"
    assert comments[1]["author"] == {"name": "Alice Baker", "username": "Alice", "avatar": "AB"}


def test_list_comments_for_post_without_comments(client):
    response = client.get("/api/comments/12345")

    assert response.status_code == 200
    assert response.json() == {"comments": []}
