"""Direct messages, read receipts and bookmarks."""

from conftest import post_video


def send(client, headers, receiver_id, content):
    return client.post("/api/messages", json={"receiver_id": receiver_id, "content": content}, headers=headers)


def test_message_becomes_read_only_after_receiver_fetches(client, employer, seeker):
    employer_user, employer_headers = employer
    seeker_user, seeker_headers = seeker

    first = send(client, employer_headers, seeker_user["id"], "Interview next week?")
    assert first.status_code == 201
    assert first.json()["read"] is False
    send(client, seeker_headers, employer_user["id"], "Yes please")

    # Sender looking at the thread does not mark the receiver's copy read
    client.get(f"/api/messages/{seeker_user['id']}", headers=employer_headers)
    assert client.get("/api/messages/unread-count", headers=seeker_headers).json() == {"unread": 1}

    thread = client.get(f"/api/messages/{employer_user['id']}", headers=seeker_headers).json()
    assert [m["content"] for m in thread] == ["Interview next week?", "Yes please"]
    # The payload shows the state before the fetch marked it
    assert thread[0]["read"] is False

    assert client.get("/api/messages/unread-count", headers=seeker_headers).json() == {"unread": 0}
    again = client.get(f"/api/messages/{employer_user['id']}", headers=seeker_headers).json()
    assert again[0]["read"] is True


def test_conversation_is_the_same_from_both_sides(client, employer, seeker):
    employer_user, employer_headers = employer
    seeker_user, seeker_headers = seeker
    send(client, employer_headers, seeker_user["id"], "One")
    send(client, seeker_headers, employer_user["id"], "Two")

    a = client.get(f"/api/messages/{seeker_user['id']}", headers=employer_headers).json()
    b = client.get(f"/api/messages/{employer_user['id']}", headers=seeker_headers).json()
    assert [m["id"] for m in a] == [m["id"] for m in b]


def test_list_all_messages(client, employer, seeker):
    employer_user, employer_headers = employer
    seeker_user, seeker_headers = seeker
    send(client, employer_headers, seeker_user["id"], "One")
    send(client, seeker_headers, employer_user["id"], "Two")

    listed = client.get("/api/messages", headers=seeker_headers).json()
    assert [m["content"] for m in listed] == ["One", "Two"]


def test_send_validation(client, seeker):
    user, headers = seeker
    assert send(client, headers, user["id"], "Note to self").status_code == 400
    assert send(client, headers, 9999, "Hello?").status_code == 404
    assert send(client, headers, 9999, "").status_code == 400

    client.cookies.clear()
    assert client.get("/api/messages").status_code == 401


def test_bookmarks_are_idempotent(client, employer, seeker):
    _, employer_headers = employer
    _, seeker_headers = seeker
    video = post_video(client, employer_headers)

    first = client.post("/api/bookmarks", json={"video_id": video["id"]}, headers=seeker_headers)
    second = client.post("/api/bookmarks", json={"video_id": video["id"]}, headers=seeker_headers)
    assert first.status_code == 201
    assert second.json()["id"] == first.json()["id"]

    listed = client.get("/api/bookmarks", headers=seeker_headers).json()
    assert [b["video_id"] for b in listed] == [video["id"]]

    status = client.get(f"/api/bookmarks/{video['id']}", headers=seeker_headers)
    assert status.json() == {"is_bookmarked": True}
    other = client.get(f"/api/bookmarks/{video['id']}", headers=employer_headers)
    assert other.json() == {"is_bookmarked": False}


def test_bookmark_delete_always_204(client, employer, seeker):
    _, employer_headers = employer
    _, seeker_headers = seeker
    video = post_video(client, employer_headers)
    client.post("/api/bookmarks", json={"video_id": video["id"]}, headers=seeker_headers)

    assert client.delete(f"/api/bookmarks/{video['id']}", headers=seeker_headers).status_code == 204
    assert client.delete(f"/api/bookmarks/{video['id']}", headers=seeker_headers).status_code == 204
    assert client.delete("/api/bookmarks/9999", headers=seeker_headers).status_code == 204
    assert client.get(f"/api/bookmarks/{video['id']}", headers=seeker_headers).json() == {"is_bookmarked": False}


def test_bookmark_unknown_video(client, seeker):
    _, headers = seeker
    assert client.post("/api/bookmarks", json={"video_id": 9999}, headers=headers).status_code == 404
