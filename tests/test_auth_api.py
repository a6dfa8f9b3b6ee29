"""Registration, login, sessions and profile endpoints."""

from conftest import PASSWORD, register


def test_register_starts_session_and_hides_password(client):
    response = client.post("/api/auth/register", json={
        "username": "pat",
        "password": PASSWORD,
        "email": "pat@example.com",
        "full_name": "Pat Doe",
        "user_type": "job_seeker",
        "skills": ["Python", " python ", "", "SQL"],
    })
    assert response.status_code == 201
    body = response.json()
    assert body["user"]["username"] == "pat"
    assert body["user"]["skills"] == ["Python", "SQL"]
    assert "password" not in body["user"]
    assert body["token_type"] == "bearer"
    assert "session" in response.cookies

    # The cookie alone is enough to act as the new user
    me = client.get("/api/users/me")
    assert me.status_code == 200
    assert me.json()["username"] == "pat"


def test_register_duplicate_username_and_email(client, seeker):
    base = {"password": PASSWORD, "full_name": "X", "user_type": "job_seeker"}

    dup_name = client.post("/api/auth/register", json={**base, "username": "PAT", "email": "new@example.com"})
    assert dup_name.status_code == 400
    assert dup_name.json()["detail"] == "Username already taken"

    dup_email = client.post("/api/auth/register", json={**base, "username": "newbie", "email": "pat@example.com"})
    assert dup_email.status_code == 400
    assert dup_email.json()["detail"] == "Email already in use"


def test_register_validation_error_is_400_with_field_names(client):
    response = client.post("/api/auth/register", json={
        "username": "pat",
        "password": "short",
        "email": "not-an-email",
        "full_name": "Pat",
        "user_type": "astronaut",
    })
    assert response.status_code == 400
    detail = response.json()["detail"]
    assert "password:" in detail
    assert "email:" in detail
    assert "user_type:" in detail


def test_login_and_bad_credentials(client, seeker):
    client.cookies.clear()

    ok = client.post("/api/auth/login", json={"username": "pat", "password": PASSWORD})
    assert ok.status_code == 200
    assert ok.json()["user"]["username"] == "pat"
    assert "session" in ok.cookies

    bad = client.post("/api/auth/login", json={"username": "pat", "password": "wrong-password"})
    assert bad.status_code == 401

    unknown = client.post("/api/auth/login", json={"username": "ghost", "password": PASSWORD})
    assert unknown.status_code == 401


def test_logout_clears_session(client, seeker):
    assert client.get("/api/users/me").status_code == 200

    response = client.post("/api/auth/logout")
    assert response.status_code == 200
    assert response.json()["success"] is True

    client.cookies.clear()
    assert client.get("/api/users/me").status_code == 401


def test_invalid_bearer_token_is_401(client):
    response = client.get("/api/users/me", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


def test_update_profile(client, seeker):
    _, headers = seeker
    response = client.patch("/api/users/me", json={"headline": "Data engineer", "skills": ["Go"]}, headers=headers)
    assert response.status_code == 200
    body = response.json()
    assert body["headline"] == "Data engineer"
    assert body["skills"] == ["Go"]
    assert body["full_name"] == "Pat"


def test_update_profile_rejects_role_and_password(client, seeker):
    _, headers = seeker
    role = client.patch("/api/users/me", json={"user_type": "employer"}, headers=headers)
    assert role.status_code == 400
    password = client.patch("/api/users/me", json={"password": "new-password-123"}, headers=headers)
    assert password.status_code == 400


def test_update_profile_username_taken(client, seeker, employer):
    _, headers = seeker
    response = client.patch("/api/users/me", json={"username": "acme"}, headers=headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Username already taken"


def test_public_profile(client, employer):
    user, _ = employer
    client.cookies.clear()
    response = client.get(f"/api/users/{user['id']}")
    assert response.status_code == 200
    assert response.json()["company_name"] == "Acme"
    assert client.get("/api/users/9999").status_code == 404


def test_second_registration_keeps_first_token_valid(client):
    first, first_headers = register(client, "first")
    register(client, "second")
    response = client.get("/api/users/me", headers=first_headers)
    assert response.json()["id"] == first["id"]
