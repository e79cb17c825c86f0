def test_create_education_with_dates(client, admin_headers):
    body = {
        "institution": "University of Technology",
        "degree": "BSc",
        "field_of_study": "Computer Science",
        "start_date": "2018-01-01",
        "end_date": "2022-05-31",
        "grade": "3.8 GPA",
    }
    response = client.post("/api/education", json=body, headers=admin_headers)

    assert response.status_code == 201
    created = response.json()["data"]
    assert created["is_current"] is False
    assert created["sort_order"] == 0

    fetched = client.get(f"/api/education/{created['id']}").json()["data"]
    for field, value in body.items():
        assert fetched[field] == value


def test_education_requires_institution_and_degree(client, admin_headers):
    response = client.post("/api/education", json={"field_of_study": "Math"}, headers=admin_headers)

    assert response.status_code == 400
    fields = {error["field"] for error in response.json()["errors"]}
    assert {"institution", "degree"} <= fields


def test_end_date_before_start_date_rejected(client, admin_headers):
    response = client.post(
        "/api/education",
        json={"institution": "U", "degree": "BA", "start_date": "2020-01-01", "end_date": "2019-01-01"},
        headers=admin_headers,
    )

    assert response.status_code == 400


def test_list_education_ordering(client, admin_headers):
    for institution, end_date, sort_order in (
        ("Old", "2010-06-01", 0),
        ("Recent", "2020-06-01", 0),
        ("Pinned", "2000-06-01", -1),
    ):
        client.post(
            "/api/education",
            json={"institution": institution, "degree": "BA", "end_date": end_date, "sort_order": sort_order},
            headers=admin_headers,
        )

    listing = client.get("/api/education").json()["data"]

    assert [item["institution"] for item in listing["education"]] == ["Pinned", "Recent", "Old"]


def test_update_and_delete_education(client, admin_headers):
    created = client.post(
        "/api/education",
        json={"institution": "U", "degree": "BA"},
        headers=admin_headers,
    ).json()["data"]

    updated = client.put(
        f"/api/education/{created['id']}",
        json={"institution": "U", "degree": "MA", "is_current": True},
        headers=admin_headers,
    )
    assert updated.status_code == 200
    assert updated.json()["data"]["degree"] == "MA"
    assert updated.json()["data"]["is_current"] is True

    assert client.delete(f"/api/education/{created['id']}", headers=admin_headers).status_code == 200
    assert client.get(f"/api/education/{created['id']}").status_code == 404
    assert client.put(
        f"/api/education/{created['id']}",
        json={"institution": "U", "degree": "MA"},
        headers=admin_headers,
    ).status_code == 404
