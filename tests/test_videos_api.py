"""Video feed, posting, editing and counters."""

from conftest import post_video, register


def test_list_requires_type(client):
    response = client.get("/api/videos")
    assert response.status_code == 400
    assert "type" in response.json()["detail"].lower()


def test_list_limits_are_validated(client):
    assert client.get("/api/videos?type=job&limit=0").status_code == 400
    assert client.get("/api/videos?type=job&limit=51").status_code == 400
    assert client.get("/api/videos?type=job&offset=-1").status_code == 400
    assert client.get("/api/videos?type=banana").status_code == 400


def test_public_listing_newest_first(client, employer, seeker):
    _, employer_headers = employer
    _, seeker_headers = seeker
    first = post_video(client, employer_headers, title="Backend Engineer")
    second = post_video(client, employer_headers, title="Frontend Engineer")
    post_video(client, seeker_headers, title="My resume")

    client.cookies.clear()
    response = client.get("/api/videos?type=job")
    assert response.status_code == 200
    assert [v["id"] for v in response.json()] == [second["id"], first["id"]]

    paged = client.get("/api/videos?type=job&limit=1&offset=1").json()
    assert [v["id"] for v in paged] == [first["id"]]


def test_kind_follows_poster_role(client, employer, seeker):
    _, employer_headers = employer
    _, seeker_headers = seeker

    job = post_video(client, employer_headers, salary="$100k", job_type="Full-time")
    assert job["video_type"] == "job"
    assert job["views"] == 0

    resume = post_video(client, seeker_headers)
    assert resume["video_type"] == "resume"

    wrong = client.post(
        "/api/videos",
        json={"title": "Hiring", "video_url": "https://cdn.example/x.mp4", "video_type": "job"},
        headers=seeker_headers,
    )
    assert wrong.status_code == 400


def test_posting_requires_session(client):
    client.cookies.clear()
    response = client.post("/api/videos", json={"title": "x", "video_url": "https://cdn.example/x.mp4"})
    assert response.status_code == 401


def test_duration_is_capped_at_sixty_seconds(client, seeker):
    _, headers = seeker
    response = client.post(
        "/api/videos",
        json={"title": "Too long", "video_url": "https://cdn.example/x.mp4", "duration": 61},
        headers=headers,
    )
    assert response.status_code == 400
    assert "duration" in response.json()["detail"]


def test_fetch_counts_views(client, employer):
    _, headers = employer
    video = post_video(client, headers)

    assert client.get(f"/api/videos/{video['id']}").json()["views"] == 1
    assert client.get(f"/api/videos/{video['id']}").json()["views"] == 2
    assert client.get("/api/videos/9999").status_code == 404


def test_like_and_share(client, employer, seeker):
    _, employer_headers = employer
    _, seeker_headers = seeker
    video = post_video(client, employer_headers)

    liked = client.post(f"/api/videos/{video['id']}/like", headers=seeker_headers)
    assert liked.status_code == 200
    assert liked.json()["likes"] == 1

    shared = client.post(f"/api/videos/{video['id']}/share", headers=seeker_headers)
    assert shared.json()["shares"] == 1
    assert shared.json()["likes"] == 1

    assert client.post("/api/videos/9999/like", headers=seeker_headers).status_code == 404
    assert client.post("/api/videos/9999/share", headers=seeker_headers).status_code == 404


def test_recommended_feed(client, employer, seeker):
    _, employer_headers = employer
    _, seeker_headers = seeker
    _, other_headers = register(client, "globex", user_type="employer")

    own_job = post_video(client, employer_headers, title="Acme job")
    other_job = post_video(client, other_headers, title="Globex job")
    resume = post_video(client, seeker_headers)

    for_seeker = client.get("/api/videos/recommended", headers=seeker_headers).json()
    assert [v["id"] for v in for_seeker] == [other_job["id"], own_job["id"]]

    for_employer = client.get("/api/videos/recommended", headers=employer_headers).json()
    assert [v["id"] for v in for_employer] == [resume["id"]]

    client.cookies.clear()
    assert client.get("/api/videos/recommended").status_code == 401


def test_owner_can_edit_but_not_change_kind(client, employer, seeker):
    _, employer_headers = employer
    _, seeker_headers = seeker
    video = post_video(client, employer_headers)

    edited = client.patch(f"/api/videos/{video['id']}", json={"title": "Renamed"}, headers=employer_headers)
    assert edited.status_code == 200
    assert edited.json()["title"] == "Renamed"
    assert edited.json()["video_type"] == "job"

    kind = client.patch(f"/api/videos/{video['id']}", json={"video_type": "resume"}, headers=employer_headers)
    assert kind.status_code == 400

    stranger = client.patch(f"/api/videos/{video['id']}", json={"title": "Mine now"}, headers=seeker_headers)
    assert stranger.status_code == 403

    missing = client.patch("/api/videos/9999", json={"title": "x"}, headers=employer_headers)
    assert missing.status_code == 404


def test_user_videos(client, seeker):
    user, headers = seeker
    first = post_video(client, headers, title="Take one")
    second = post_video(client, headers, title="Take two")

    response = client.get(f"/api/users/{user['id']}/videos")
    assert [v["id"] for v in response.json()] == [second["id"], first["id"]]
    assert client.get("/api/users/9999/videos").status_code == 404


def test_comments(client, employer, seeker):
    _, employer_headers = employer
    _, seeker_headers = seeker
    video = post_video(client, employer_headers)

    created = client.post(
        f"/api/videos/{video['id']}/comments", json={"content": "What stack?"}, headers=seeker_headers
    )
    assert created.status_code == 201

    client.cookies.clear()
    listed = client.get(f"/api/videos/{video['id']}/comments").json()
    assert [c["content"] for c in listed] == ["What stack?"]
    assert client.get(f"/api/videos/{video['id']}").json()["comments"] == 1

    missing = client.post("/api/videos/9999/comments", json={"content": "Hi"}, headers=seeker_headers)
    assert missing.status_code == 404

    empty = client.post(f"/api/videos/{video['id']}/comments", json={"content": ""}, headers=seeker_headers)
    assert empty.status_code == 400
