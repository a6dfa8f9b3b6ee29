"""Applying to jobs and the employer's status workflow."""

import pytest

from conftest import post_video, register


@pytest.fixture
def job_and_resume(client, employer, seeker):
    _, employer_headers = employer
    _, seeker_headers = seeker
    job = post_video(client, employer_headers, title="Backend Engineer")
    resume = post_video(client, seeker_headers, title="About me")
    return job, resume


def apply(client, headers, job, resume, **extra):
    return client.post(
        "/api/applications",
        json={"job_video_id": job["id"], "user_video_id": resume["id"], **extra},
        headers=headers,
    )


def test_apply_resolves_employer(client, employer, seeker, job_and_resume):
    employer_user, _ = employer
    seeker_user, seeker_headers = seeker
    job, resume = job_and_resume

    response = apply(client, seeker_headers, job, resume, note="Keen to join")
    assert response.status_code == 201
    body = response.json()
    assert body["employer_id"] == employer_user["id"]
    assert body["user_id"] == seeker_user["id"]
    assert body["status"] == "pending"
    assert body["note"] == "Keen to join"


def test_apply_rejects_wrong_video_kinds(client, seeker, job_and_resume):
    _, seeker_headers = seeker
    job, resume = job_and_resume

    swapped = apply(client, seeker_headers, resume, job)
    assert swapped.status_code == 400

    missing_job = apply(client, seeker_headers, {"id": 9999}, resume)
    assert missing_job.status_code == 400

    missing_resume = apply(client, seeker_headers, job, {"id": 9999})
    assert missing_resume.status_code == 400


def test_apply_with_someone_elses_resume(client, job_and_resume):
    job, resume = job_and_resume
    _, other_headers = register(client, "sam")
    response = apply(client, other_headers, job, resume)
    assert response.status_code == 400


def test_listing_depends_on_role(client, employer, seeker, job_and_resume):
    _, employer_headers = employer
    _, seeker_headers = seeker
    job, resume = job_and_resume
    application = apply(client, seeker_headers, job, resume).json()

    mine = client.get("/api/applications", headers=seeker_headers).json()
    received = client.get("/api/applications", headers=employer_headers).json()
    assert [a["id"] for a in mine] == [application["id"]]
    assert [a["id"] for a in received] == [application["id"]]

    _, other_headers = register(client, "globex", user_type="employer")
    assert client.get("/api/applications", headers=other_headers).json() == []


def status_seen_by(client, headers, application_id):
    listed = client.get("/api/applications", headers=headers).json()
    return next(a["status"] for a in listed if a["id"] == application_id)


def test_status_update_only_by_employer(client, employer, seeker, job_and_resume):
    _, employer_headers = employer
    _, seeker_headers = seeker
    job, resume = job_and_resume
    application = apply(client, seeker_headers, job, resume).json()
    url = f"/api/applications/{application['id']}/status"

    forbidden = client.patch(url, json={"status": "offered"}, headers=seeker_headers)
    assert forbidden.status_code == 403

    _, other_headers = register(client, "globex", user_type="employer")
    assert client.patch(url, json={"status": "offered"}, headers=other_headers).status_code == 403

    # Rejected attempts leave the application untouched
    assert status_seen_by(client, seeker_headers, application["id"]) == "pending"
    assert status_seen_by(client, employer_headers, application["id"]) == "pending"

    for status in ("viewed", "rejected", "pending", "offered"):
        response = client.patch(url, json={"status": status}, headers=employer_headers)
        assert response.status_code == 200
        assert response.json()["status"] == status

    invalid = client.patch(url, json={"status": "hired"}, headers=employer_headers)
    assert invalid.status_code == 400
    assert status_seen_by(client, seeker_headers, application["id"]) == "offered"

    missing = client.patch("/api/applications/9999/status", json={"status": "viewed"}, headers=employer_headers)
    assert missing.status_code == 404


def test_seeker_sees_interview_invite(client, employer, seeker, job_and_resume):
    _, employer_headers = employer
    _, seeker_headers = seeker
    job, resume = job_and_resume
    application = apply(client, seeker_headers, job, resume).json()

    response = client.patch(
        f"/api/applications/{application['id']}/status", json={"status": "interview"}, headers=employer_headers
    )
    assert response.status_code == 200

    mine = client.get("/api/applications", headers=seeker_headers).json()
    assert [(a["id"], a["status"]) for a in mine] == [(application["id"], "interview")]
