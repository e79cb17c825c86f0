from portfolio_api.models.testimonial import Testimonial


def _body(**overrides):
    body = {"name": "Jane Doe", "content": "Great work", "rating": 5}
    body.update(overrides)
    return body


def test_create_and_get_testimonial(client, admin_headers):
    response = client.post(
        "/api/testimonials",
        json=_body(position="CTO", company="Acme"),
        headers=admin_headers,
    )

    assert response.status_code == 201
    created = response.json()["data"]
    assert created["is_featured"] is False
    assert created["sort_order"] == 0
    assert created["avatar_url"] is None

    fetched = client.get(f"/api/testimonials/{created['id']}").json()["data"]
    assert fetched["name"] == "Jane Doe"
    assert fetched["position"] == "CTO"
    assert fetched["company"] == "Acme"
    assert fetched["rating"] == 5


def test_rating_out_of_range_writes_nothing(client, admin_headers, db_session):
    for rating in (0, 6):
        response = client.post("/api/testimonials", json=_body(rating=rating), headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "rating"

    assert db_session.query(Testimonial).count() == 0


def test_avatar_upload_replace_and_delete(client, admin_headers, png_upload, stored_file):
    created = client.post(
        "/api/testimonials",
        data={"name": "Jane", "content": "Nice", "rating": "4"},
        files=png_upload("testimonial_avatar"),
        headers=admin_headers,
    ).json()["data"]
    first_avatar = stored_file(created["avatar_url"])
    assert first_avatar.exists()

    updated = client.put(
        f"/api/testimonials/{created['id']}",
        data={"name": "Jane", "content": "Nicer", "rating": "5"},
        files=png_upload("testimonial_avatar", filename="second.jpg", content_type="image/jpeg"),
        headers=admin_headers,
    ).json()["data"]
    assert updated["content"] == "Nicer"
    assert updated["avatar_url"].endswith(".jpg")
    assert not first_avatar.exists()

    second_avatar = stored_file(updated["avatar_url"])
    response = client.delete(f"/api/testimonials/{created['id']}", headers=admin_headers)
    assert response.status_code == 200
    assert not second_avatar.exists()


def test_rejects_non_image_upload(client, admin_headers, png_upload, db_session):
    response = client.post(
        "/api/testimonials",
        data={"name": "Jane", "content": "Nice", "rating": "4"},
        files=png_upload("testimonial_avatar", filename="notes.txt", content=b"hello", content_type="text/plain"),
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert db_session.query(Testimonial).count() == 0


def test_list_featured_testimonials(client, admin_headers):
    client.post("/api/testimonials", json=_body(name="A", is_featured=True), headers=admin_headers)
    client.post("/api/testimonials", json=_body(name="B"), headers=admin_headers)

    featured = client.get("/api/testimonials", params={"featured": "true"}).json()["data"]

    assert featured["count"] == 1
    assert featured["testimonials"][0]["name"] == "A"


def test_update_and_delete_missing_testimonial(client, admin_headers):
    assert client.put("/api/testimonials/999", json=_body(), headers=admin_headers).status_code == 404
    assert client.delete("/api/testimonials/999", headers=admin_headers).status_code == 404
