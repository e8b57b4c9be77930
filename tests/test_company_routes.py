from bson import ObjectId
from pymongo.errors import PyMongoError

from app.api.routes.company_routes import strip_api_prefix


def test_create_company(company):
    assert company["name"] == "Acme"
    assert company["userId"] == "owner-1"
    assert company["logo"] == "acme.png"
    assert company["locations"] == ["Gothenburg"]
    assert company["jobs"] == []


def test_create_company_requires_token(client):
    response = client.post("/api/companies", json={"name": "Acme", "email": "jobs@acme.io"})
    assert response.status_code in (401, 403)


def test_create_company_rejects_bad_token(client):
    response = client.post(
        "/api/companies",
        json={"name": "Acme", "email": "jobs@acme.io"},
        headers={"Authorization": "Bearer not-a-jwt"},
    )
    assert response.status_code == 401


def test_second_company_for_same_user_is_rejected(client, company, auth_headers, db):
    response = client.post(
        "/api/companies",
        json={"name": "Other", "email": "hr@other.io"},
        headers=auth_headers("owner-1"),
    )

    assert response.status_code == 400
    assert db["companies"].count_documents({}) == 1


def test_candidate_cannot_create_company(client, auth_headers, db):
    db["candidates"].insert_one({"userId": "cand-1", "name": "Ada"})

    response = client.post(
        "/api/companies",
        json={"name": "Acme", "email": "jobs@acme.io"},
        headers=auth_headers("cand-1"),
    )

    assert response.status_code == 400
    assert db["companies"].count_documents({}) == 0


def test_missing_required_field(client, auth_headers):
    response = client.post("/api/companies", json={"name": "Acme"}, headers=auth_headers())
    assert response.status_code == 422


def test_list_companies_with_links(client, company):
    response = client.get("/api/companies")

    assert response.status_code == 200
    [listed] = response.json()
    assert listed["_id"] == company["_id"]
    assert listed["links"] == [
        {"rel": "self", "href": f"/companies/{company['_id']}"},
        {"rel": "company-jobs", "href": f"/companies/{company['_id']}/jobs"},
    ]


def test_get_company_with_links(client, company):
    response = client.get(f"/api/companies/{company['_id']}")

    assert response.status_code == 200
    assert response.json()["name"] == "Acme"
    assert response.json()["links"][0] == {"rel": "self", "href": f"/companies/{company['_id']}"}


def test_get_missing_company(client):
    assert client.get(f"/api/companies/{ObjectId()}").status_code == 404


def test_put_and_patch_behave_the_same(client, company):
    put = client.put(f"/api/companies/{company['_id']}", json={"description": "Rockets"})
    patch = client.patch(f"/api/companies/{company['_id']}", json={"logo": "new.png"})

    assert put.status_code == patch.status_code == 200
    assert patch.json()["description"] == "Rockets"
    assert patch.json()["logo"] == "new.png"
    assert patch.json()["name"] == "Acme"


def test_update_missing_company_is_404_and_changes_nothing(client, company, db):
    response = client.put(f"/api/companies/{ObjectId()}", json={"name": "Ghost"})

    assert response.status_code == 404
    assert [c["name"] for c in db["companies"].find()] == ["Acme"]


def test_update_rejects_null_for_required_fields(client, company, db):
    for method, field in [("put", "name"), ("patch", "logo"), ("put", "email"), ("patch", "locations")]:
        response = getattr(client, method)(f"/api/companies/{company['_id']}", json={field: None})
        assert response.status_code == 422

    stored = db["companies"].find_one()
    assert stored["name"] == "Acme"
    assert stored["logo"] == "acme.png"
    assert client.get("/api/companies").status_code == 200


def test_update_still_allows_clearing_description(client, company):
    response = client.patch(f"/api/companies/{company['_id']}", json={"description": None})

    assert response.status_code == 200
    assert response.json()["description"] is None


def test_delete_company(client, company, db):
    response = client.delete(f"/api/companies/{company['_id']}")

    assert response.status_code == 200
    assert response.json()["message"] == f"Deleted company with ID: {company['_id']}"
    assert db["companies"].count_documents({}) == 0


def test_delete_missing_company(client):
    assert client.delete(f"/api/companies/{ObjectId()}").status_code == 404


def test_store_failure_includes_stack(client, company, stores, monkeypatch):
    def broken(*args, **kwargs):
        raise PyMongoError("connection reset")

    monkeypatch.setattr(stores.companies, "find", broken)

    response = client.get("/api/companies")

    assert response.status_code == 500
    assert response.json()["message"] == "connection reset"
    assert "PyMongoError" in response.json()["stack"]


def test_strip_api_prefix():
    assert strip_api_prefix("/api/companies", "/api") == "/companies"
    assert strip_api_prefix("/v2/companies", "/api") == "/v2/companies"


def test_unreadable_stored_company_returns_stack(client, db):
    db["companies"].insert_one({"userId": "u", "name": None, "email": "jobs@acme.io", "jobs": []})

    response = client.get("/api/companies")

    assert response.status_code == 500
    assert "name" in response.json()["message"]
    assert "ResponseValidationError" in response.json()["stack"]
