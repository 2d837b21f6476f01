# mypy: ignore-errors
"""Tests for the notification inbox endpoints."""

from fastapi import status


def test_inbox_lists_reply_notification(client, services, alice, bob, alice_auth) -> None:
    post = services.posts.create_post(alice.id, "Hello")
    services.posts.reply_to_post(post.id, bob.id, "Hi")

    res = client.get("/api/v1/notifications", headers=alice_auth)
    assert res.status_code == status.HTTP_200_OK
    body = res.json()
    assert body["unread_count"] == 1
    [entry] = body["notifications"]
    assert entry["type"] == "reply"
    assert entry["read"] is False
    assert entry["actor"]["username"] == "bob"
    assert entry["post"]["content"] == "Hi"
    assert entry["post"]["is_visible"] is True


def test_mark_read_and_mark_all(client, services, alice, bob, alice_auth) -> None:
    post = services.posts.create_post(alice.id, "Hello")
    for text in ("one", "two", "three"):
        services.posts.reply_to_post(post.id, bob.id, text)

    inbox = client.get("/api/v1/notifications", headers=alice_auth).json()
    first_id = inbox["notifications"][0]["id"]

    res = client.post(
        "/api/v1/notifications/mark-read", json={"ids": [first_id]}, headers=alice_auth
    )
    assert res.json() == {"success": True, "marked_count": 1}

    unread = client.get(
        "/api/v1/notifications", params={"unread_only": True}, headers=alice_auth
    ).json()
    assert unread["unread_count"] == 2
    assert first_id not in [entry["id"] for entry in unread["notifications"]]

    res = client.post("/api/v1/notifications/mark-all-read", headers=alice_auth)
    assert res.json() == {"success": True, "marked_count": 2}
    assert client.get("/api/v1/notifications", headers=alice_auth).json()["unread_count"] == 0


def test_cannot_mark_someone_elses_notifications(
    client, services, alice, bob, alice_auth, bob_auth
) -> None:
    post = services.posts.create_post(alice.id, "Hello")
    services.posts.reply_to_post(post.id, bob.id, "Hi")
    alice_inbox = client.get("/api/v1/notifications", headers=alice_auth).json()

    res = client.post(
        "/api/v1/notifications/mark-read",
        json={"ids": [alice_inbox["notifications"][0]["id"]]},
        headers=bob_auth,
    )
    assert res.json()["marked_count"] == 0
    assert client.get("/api/v1/notifications", headers=alice_auth).json()["unread_count"] == 1


def test_inbox_requires_auth(client) -> None:
    res = client.get("/api/v1/notifications")
    assert res.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN)
