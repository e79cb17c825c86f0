def test_upload_single_returns_path_and_url(client, user_headers, png_upload, stored_file):
    response = client.post("/api/upload/single", files=png_upload("image"), headers=user_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["originalname"] == "photo.png"
    assert data["mimetype"] == "image/png"
    assert data["path"] == f"/uploads/{data['filename']}"
    assert data["url"].startswith("http://testserver/uploads/")
    assert "?t=" in data["url"]
    assert stored_file(data["path"]).read_bytes().startswith(b"\x89PNG")

    served = client.get(data["path"])
    assert served.status_code == 200


def test_upload_requires_authentication(client, png_upload):
    response = client.post("/api/upload/single", files=png_upload("image"))

    assert response.status_code == 401


def test_upload_without_file(client, user_headers):
    response = client.post("/api/upload/single", data={"note": "nothing"}, headers=user_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "No file uploaded"


def test_upload_rejects_wrong_type(client, user_headers, png_upload, upload_files):
    before = upload_files()
    response = client.post(
        "/api/upload/single",
        files=png_upload("image", filename="doc.pdf", content=b"%PDF-1.4", content_type="application/pdf"),
        headers=user_headers,
    )

    assert response.status_code == 400
    assert upload_files() == before


def test_upload_rejects_oversized_file(client, user_headers, png_upload, upload_files):
    before = upload_files()
    too_big = b"\x89PNG" + b"\x00" * (1024 * 1024 + 1)

    response = client.post(
        "/api/upload/single",
        files=png_upload("image", content=too_big),
        headers=user_headers,
    )

    assert response.status_code == 400
    assert "too large" in response.json()["message"]
    assert upload_files() == before
