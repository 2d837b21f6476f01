# mypy: ignore-errors
"""Tests for post-related endpoints."""

from fastapi import status


def _create(client, headers, **payload):
    return client.post("/api/v1/posts", json=payload, headers=headers)


def test_create_post(client, alice, alice_auth) -> None:
    res = _create(client, alice_auth, content="Hello board")
    assert res.status_code == status.HTTP_201_CREATED
    body = res.json()
    assert body["content"] == "Hello board"
    assert body["user_id"] == alice.id
    assert body["user"]["username"] == "alice"
    assert body["reply_count"] == 0
    assert body["is_edited"] is False
    assert body["user_vote"] is None


def test_create_post_requires_auth(client) -> None:
    res = _create(client, {}, content="Anonymous")
    assert res.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN)


def test_create_post_rejects_unknown_user(client, auth_for, make_user, db_session) -> None:
    ghost = make_user("ghost")
    headers = auth_for(ghost)
    db_session.delete(ghost)
    db_session.commit()
    res = _create(client, headers, content="Boo")
    assert res.status_code == status.HTTP_401_UNAUTHORIZED


def test_create_post_invalid_token(client) -> None:
    res = _create(client, {"Authorization": "Bearer not-a-jwt"}, content="Hi")
    assert res.status_code == status.HTTP_401_UNAUTHORIZED


def test_create_post_validation_errors(client, alice_auth) -> None:
    assert _create(client, alice_auth, content="   ").status_code == status.HTTP_400_BAD_REQUEST
    too_long = _create(client, alice_auth, content="x" * 1001)
    assert too_long.status_code == status.HTTP_400_BAD_REQUEST
    assert "1000" in too_long.json()["detail"]


def test_create_post_missing_content_is_unprocessable(client, alice_auth) -> None:
    res = client.post("/api/v1/posts", json={}, headers=alice_auth)
    assert res.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_reply_via_parent_id(client, alice_auth, bob_auth) -> None:
    parent = _create(client, alice_auth, content="Hello").json()
    res = _create(client, bob_auth, content="Hi", parent_id=parent["id"])
    assert res.status_code == status.HTTP_201_CREATED
    assert res.json()["parent_id"] == parent["id"]

    thread = client.get(f"/api/v1/posts/{parent['id']}").json()
    assert thread["post"]["reply_count"] == 1
    assert [reply["content"] for reply in thread["replies"]] == ["Hi"]


def test_reply_to_reply_is_bad_request(client, alice_auth, bob_auth) -> None:
    parent = _create(client, alice_auth, content="Hello").json()
    reply = _create(client, bob_auth, content="Hi", parent_id=parent["id"]).json()
    res = _create(client, alice_auth, content="Nested", parent_id=reply["id"])
    assert res.status_code == status.HTTP_400_BAD_REQUEST


def test_reply_to_missing_parent(client, alice_auth) -> None:
    res = _create(client, alice_auth, content="Hi", parent_id="missing")
    assert res.status_code == status.HTTP_404_NOT_FOUND


def test_quote_via_quoted_post_id(client, alice_auth, bob_auth) -> None:
    original = _create(client, alice_auth, content="Quotable").json()
    res = _create(client, bob_auth, content="Indeed", quoted_post_id=original["id"])
    assert res.status_code == status.HTTP_201_CREATED
    body = res.json()
    assert body["quoted_post_id"] == original["id"]
    assert body["quoted_content_snapshot"] == "Quotable"
    assert body["parent_id"] is None


def test_parent_id_wins_over_quoted_post_id(client, alice_auth, bob_auth) -> None:
    parent = _create(client, alice_auth, content="Hello").json()
    other = _create(client, alice_auth, content="Other").json()
    res = _create(
        client, bob_auth, content="Both", parent_id=parent["id"], quoted_post_id=other["id"]
    )
    body = res.json()
    assert body["parent_id"] == parent["id"]
    assert body["quoted_post_id"] is None


def test_quote_missing_post(client, alice_auth) -> None:
    res = _create(client, alice_auth, content="Hmm", quoted_post_id="missing")
    assert res.status_code == status.HTTP_404_NOT_FOUND


def test_edit_post(client, alice_auth, bob_auth) -> None:
    post = _create(client, alice_auth, content="Draft").json()

    res = client.patch(
        "/api/v1/posts", json={"post_id": post["id"], "content": "Final"}, headers=alice_auth
    )
    assert res.status_code == status.HTTP_200_OK
    assert res.json()["content"] == "Final"
    assert res.json()["is_edited"] is True
    assert res.json()["edited_at"] is not None

    forbidden = client.patch(
        "/api/v1/posts", json={"post_id": post["id"], "content": "Mine now"}, headers=bob_auth
    )
    assert forbidden.status_code == status.HTTP_403_FORBIDDEN

    missing = client.patch(
        "/api/v1/posts", json={"post_id": "missing", "content": "x"}, headers=alice_auth
    )
    assert missing.status_code == status.HTTP_404_NOT_FOUND


def test_delete_post(client, alice_auth, bob_auth) -> None:
    post = _create(client, alice_auth, content="Temporary").json()

    forbidden = client.request(
        "DELETE", "/api/v1/posts", json={"post_id": post["id"]}, headers=bob_auth
    )
    assert forbidden.status_code == status.HTTP_403_FORBIDDEN

    res = client.request("DELETE", "/api/v1/posts", json={"post_id": post["id"]}, headers=alice_auth)
    assert res.status_code == status.HTTP_200_OK
    assert res.json() == {"success": True}

    again = client.request(
        "DELETE", "/api/v1/posts", json={"post_id": post["id"]}, headers=alice_auth
    )
    assert again.status_code == status.HTTP_400_BAD_REQUEST

    edit = client.patch(
        "/api/v1/posts", json={"post_id": post["id"], "content": "Revive"}, headers=alice_auth
    )
    assert edit.status_code == status.HTTP_400_BAD_REQUEST

    assert client.get(f"/api/v1/posts/{post['id']}").status_code == status.HTTP_404_NOT_FOUND


def test_feed_anonymous_and_authenticated(client, alice_auth, bob_auth) -> None:
    first = _create(client, alice_auth, content="first").json()
    second = _create(client, alice_auth, content="second").json()
    client.post(
        "/api/v1/votes", json={"post_id": first["id"], "vote_type": "upvote"}, headers=bob_auth
    )

    anonymous = client.get("/api/v1/posts")
    assert anonymous.status_code == status.HTTP_200_OK
    body = anonymous.json()
    assert [post["id"] for post in body["posts"]] == [second["id"], first["id"]]
    assert body["next_cursor"] is not None
    assert all(post["user_vote"] is None for post in body["posts"])

    mine = client.get("/api/v1/posts", headers=bob_auth).json()
    votes = {post["id"]: post["user_vote"] for post in mine["posts"]}
    assert votes == {first["id"]: "upvote", second["id"]: None}


def test_feed_pagination(client, alice_auth) -> None:
    created = [_create(client, alice_auth, content=f"post {i}").json()["id"] for i in range(3)]

    page = client.get("/api/v1/posts", params={"limit": 2}).json()
    assert len(page["posts"]) == 2
    rest = client.get(
        "/api/v1/posts", params={"limit": 2, "cursor": page["next_cursor"]}
    ).json()
    seen = [post["id"] for post in page["posts"] + rest["posts"]]
    assert seen == list(reversed(created))


def test_feed_hot_sort(client, alice_auth) -> None:
    _create(client, alice_auth, content="hot or not")
    res = client.get("/api/v1/posts", params={"sort": "hot"})
    assert res.status_code == status.HTTP_200_OK
    assert res.json()["posts"][0]["hot_score"] is not None


def test_feed_bad_params(client) -> None:
    bad_cursor = client.get("/api/v1/posts", params={"cursor": "garbage"})
    assert bad_cursor.status_code == status.HTTP_400_BAD_REQUEST
    bad_sort = client.get("/api/v1/posts", params={"sort": "random"})
    assert bad_sort.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_get_thread_with_viewer_vote(client, alice_auth, bob_auth) -> None:
    parent = _create(client, alice_auth, content="Hello").json()
    client.post(
        "/api/v1/votes", json={"post_id": parent["id"], "vote_type": "downvote"}, headers=bob_auth
    )
    thread = client.get(f"/api/v1/posts/{parent['id']}", headers=bob_auth).json()
    assert thread["post"]["user_vote"] == "downvote"
    assert thread["post"]["vote_score"] == -1
    assert thread["replies"] == []


def test_get_thread_missing(client) -> None:
    assert client.get("/api/v1/posts/missing").status_code == status.HTTP_404_NOT_FOUND
