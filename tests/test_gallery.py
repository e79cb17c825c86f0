from portfolio_api.models.gallery import GalleryItem


def test_gallery_create_requires_image(client, admin_headers, db_session):
    response = client.post("/api/gallery", data={"title": "No image"}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "Image file is required"
    assert db_session.query(GalleryItem).count() == 0


def test_gallery_create_normalizes_tags(client, admin_headers, png_upload, stored_file):
    response = client.post(
        "/api/gallery",
        data={"title": "Sunset", "category": "Nature", "tags": " sky , sea,, "},
        files=png_upload("gallery_image"),
        headers=admin_headers,
    )

    assert response.status_code == 201
    item = response.json()["data"]
    assert item["tags"] == ["sky", "sea"]
    assert item["thumbnail_url"] == item["image_url"]
    assert item["image_url"].startswith("/uploads/gallery_image-")
    assert stored_file(item["image_url"]).exists()


def test_gallery_categories_and_filters(client, admin_headers, png_upload):
    for title, category, featured in (
        ("One", "Travel", "true"),
        ("Two", "Nature", "false"),
        ("Three", "Travel", "false"),
        ("Four", None, "false"),
    ):
        data = {"title": title, "is_featured": featured}
        if category:
            data["category"] = category
        client.post("/api/gallery", data=data, files=png_upload("gallery_image"), headers=admin_headers)

    categories = client.get("/api/gallery/categories").json()["data"]["categories"]
    assert categories == ["Nature", "Travel"]

    travel = client.get("/api/gallery", params={"category": "Travel"}).json()["data"]
    assert travel["count"] == 2

    featured = client.get("/api/gallery", params={"featured": "true"}).json()["data"]
    assert [item["title"] for item in featured["gallery"]] == ["One"]


def test_gallery_update_keeps_image_without_new_file(client, admin_headers, png_upload, stored_file):
    created = client.post(
        "/api/gallery",
        data={"title": "Old"},
        files=png_upload("gallery_image"),
        headers=admin_headers,
    ).json()["data"]

    response = client.put(
        f"/api/gallery/{created['id']}",
        json={"title": "Renamed", "tags": ["a", "b"]},
        headers=admin_headers,
    )

    assert response.status_code == 200
    updated = response.json()["data"]
    assert updated["title"] == "Renamed"
    assert updated["tags"] == ["a", "b"]
    assert updated["image_url"] == created["image_url"]
    assert stored_file(created["image_url"]).exists()


def test_gallery_delete_removes_file(client, admin_headers, png_upload, stored_file):
    created = client.post(
        "/api/gallery",
        data={"title": "Temp"},
        files=png_upload("gallery_image"),
        headers=admin_headers,
    ).json()["data"]
    image_path = stored_file(created["image_url"])

    response = client.delete(f"/api/gallery/{created['id']}", headers=admin_headers)

    assert response.status_code == 200
    assert not image_path.exists()
    assert client.get(f"/api/gallery/{created['id']}").status_code == 404
    assert client.delete(f"/api/gallery/{created['id']}", headers=admin_headers).status_code == 404


def test_gallery_rejects_unexpected_file_field(client, admin_headers, png_upload):
    response = client.post(
        "/api/gallery",
        data={"title": "Wrong"},
        files=png_upload("project_image"),
        headers=admin_headers,
    )

    assert response.status_code == 400
