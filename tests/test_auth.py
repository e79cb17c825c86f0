from portfolio_api.services.auth_service import (
    create_access_token,
    hash_password,
    verify_password,
)


def test_password_hash_round_trip():
    stored = hash_password("s3cret-value")

    assert stored != "s3cret-value"
    assert verify_password("s3cret-value", stored)
    assert not verify_password("wrong", stored)
    assert not verify_password("s3cret-value", "not-a-hash")


def test_login_returns_token_for_valid_credentials(client, admin_user):
    response = client.post(
        "/api/auth/login",
        json={"email": "admin@example.com", "password": "admin-pass-123"},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["token_type"] == "bearer"
    assert data["user"]["role"] == "admin"

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {data['access_token']}"})
    assert me.status_code == 200
    assert me.json()["data"]["email"] == "admin@example.com"


def test_login_rejects_wrong_password(client, admin_user):
    response = client.post(
        "/api/auth/login",
        json={"email": "admin@example.com", "password": "nope"},
    )

    assert response.status_code == 401
    assert response.json()["success"] is False


def test_login_validation_errors(client):
    response = client.post("/api/auth/login", json={"email": "not-an-email"})

    assert response.status_code == 400
    fields = {error["field"] for error in response.json()["errors"]}
    assert {"email", "password"} <= fields


def test_me_requires_token(client):
    response = client.get("/api/auth/me")

    assert response.status_code == 401


def test_invalid_and_expired_tokens_are_rejected(client, admin_user):
    bad = client.get("/api/auth/me", headers={"Authorization": "Bearer garbage"})
    assert bad.status_code == 401

    expired = create_access_token({"sub": str(admin_user.id), "role": "admin"}, expires_minutes=-5)
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {expired}"})
    assert response.status_code == 401


def test_token_for_deleted_user_is_rejected(client):
    token = create_access_token({"sub": "9999", "role": "admin"})

    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


def test_change_password(client, admin_headers):
    wrong = client.put(
        "/api/auth/password",
        json={"current_password": "incorrect", "new_password": "another-pass-1"},
        headers=admin_headers,
    )
    assert wrong.status_code == 401

    response = client.put(
        "/api/auth/password",
        json={"current_password": "admin-pass-123", "new_password": "another-pass-1"},
        headers=admin_headers,
    )
    assert response.status_code == 200

    login = client.post(
        "/api/auth/login",
        json={"email": "admin@example.com", "password": "another-pass-1"},
    )
    assert login.status_code == 200


def test_admin_routes_require_auth_and_admin_role(client, user_headers):
    body = {"name": "Go", "level": 70}

    assert client.post("/api/skills", json=body).status_code == 401
    assert client.post("/api/skills", json=body, headers=user_headers).status_code == 403
    assert client.get("/api/contact/messages").status_code == 401
    assert client.get("/api/contact/stats", headers=user_headers).status_code == 403
    assert client.put("/api/profile", json={}, headers=user_headers).status_code == 403
