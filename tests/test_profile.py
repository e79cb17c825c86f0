def _profile(**overrides):
    body = {"name": "Ada Lovelace", "title": "Engineer", "email": "ada@example.com"}
    body.update(overrides)
    return body


def test_get_profile_when_missing(client):
    response = client.get("/api/profile")

    assert response.status_code == 404
    assert response.json()["success"] is False


def test_put_profile_creates_then_updates(client, admin_headers):
    created = client.put("/api/profile", json=_profile(location="London"), headers=admin_headers)
    assert created.status_code == 200
    assert created.json()["message"] == "Profile created successfully"
    profile_id = created.json()["data"]["id"]

    updated = client.put("/api/profile", json=_profile(title="Mathematician"), headers=admin_headers)
    assert updated.status_code == 200
    assert updated.json()["data"]["id"] == profile_id
    assert updated.json()["data"]["title"] == "Mathematician"

    fetched = client.get("/api/profile").json()["data"]
    assert fetched["title"] == "Mathematician"


def test_put_profile_validates_email(client, admin_headers):
    response = client.put("/api/profile", json=_profile(email="nope"), headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "email"


def test_put_profile_requires_admin(client, user_headers):
    assert client.put("/api/profile", json=_profile()).status_code == 401
    assert client.put("/api/profile", json=_profile(), headers=user_headers).status_code == 403


def test_profile_image_replacement(client, admin_headers, png_upload, stored_file):
    first = client.put(
        "/api/profile",
        data=_profile(),
        files=png_upload("profile_image"),
        headers=admin_headers,
    ).json()["data"]
    first_image = stored_file(first["profile_image"])
    assert first_image.exists()

    # Updating without a file keeps the current image.
    kept = client.put("/api/profile", data=_profile(bio="Hello"), headers=admin_headers).json()["data"]
    assert kept["profile_image"] == first["profile_image"]

    second = client.put(
        "/api/profile",
        data=_profile(),
        files=png_upload("profile_image", filename="new.webp", content_type="image/webp"),
        headers=admin_headers,
    ).json()["data"]
    assert second["profile_image"] != first["profile_image"]
    assert not first_image.exists()
    assert stored_file(second["profile_image"]).exists()
