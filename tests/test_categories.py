"""Tests for category CRUD and ownership isolation."""

from datetime import date

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.models.category import Category
from app.models.record import Record

CAFE = {"name": "Café", "icon": "cafe", "color": "#FF6B6B"}


def _create_category(client: TestClient, headers: dict, body: dict | None = None) -> dict:
    response = client.post("/api/categories", json=body or CAFE, headers=headers)
    assert response.status_code == 201
    return response.json()["category"]


class TestCategoryCreate:
    """Tests for creating categories."""

    def test_create_category(self, client: TestClient, test_user: dict):
        response = client.post("/api/categories", json=CAFE, headers=test_user["headers"])
        assert response.status_code == 201
        category = response.json()["category"]
        assert category["name"] == "Café"
        assert category["icon"] == "cafe"
        assert category["color"] == "#FF6B6B"

    def test_create_requires_auth(self, client: TestClient):
        response = client.post("/api/categories", json=CAFE)
        assert response.status_code == 401

    def test_create_missing_field(self, client: TestClient, test_user: dict):
        response = client.post(
            "/api/categories",
            json={"name": "Film", "icon": "film"},
            headers=test_user["headers"],
        )
        assert response.status_code == 400
        assert "color" in response.json()["message"]

    def test_create_blank_name(self, client: TestClient, test_user: dict):
        response = client.post(
            "/api/categories",
            json={"name": "  ", "icon": "film", "color": "#4ECDC4"},
            headers=test_user["headers"],
        )
        assert response.status_code == 400

    def test_create_unknown_icon(self, client: TestClient, test_user: dict):
        response = client.post(
            "/api/categories",
            json={"name": "Film", "icon": "rocket", "color": "#4ECDC4"},
            headers=test_user["headers"],
        )
        assert response.status_code == 400
        assert "icon" in response.json()["message"]

    def test_owner_comes_from_token(self, client: TestClient, test_user: dict, db_session: Session):
        """A user_id in the body is ignored."""
        body = {**CAFE, "user_id": 9999}
        category = _create_category(client, test_user["headers"], body)
        stored = db_session.query(Category).filter(Category.id == category["id"]).one()
        assert stored.user_id == test_user["user_id"]


class TestCategoryListUpdate:
    """Tests for listing and updating categories."""

    def test_list_empty(self, client: TestClient, test_user: dict):
        response = client.get("/api/categories", headers=test_user["headers"])
        assert response.status_code == 200
        assert response.json() == {"categories": []}

    def test_list_oldest_first(self, client: TestClient, test_user: dict):
        _create_category(client, test_user["headers"], CAFE)
        _create_category(client, test_user["headers"], {"name": "Travel", "icon": "airplane", "color": "#95E1D3"})
        response = client.get("/api/categories", headers=test_user["headers"])
        assert [c["name"] for c in response.json()["categories"]] == ["Café", "Travel"]

    def test_update_category(self, client: TestClient, test_user: dict):
        category = _create_category(client, test_user["headers"])
        response = client.put(
            f"/api/categories/{category['id']}",
            json={"name": "Coffee", "icon": "cafe", "color": "#000000"},
            headers=test_user["headers"],
        )
        assert response.status_code == 200
        updated = response.json()["category"]
        assert updated["name"] == "Coffee"
        assert updated["color"] == "#000000"

    def test_update_requires_all_fields(self, client: TestClient, test_user: dict):
        category = _create_category(client, test_user["headers"])
        response = client.put(
            f"/api/categories/{category['id']}",
            json={"name": "Coffee"},
            headers=test_user["headers"],
        )
        assert response.status_code == 400

    def test_update_nonexistent(self, client: TestClient, test_user: dict):
        response = client.put("/api/categories/9999", json=CAFE, headers=test_user["headers"])
        assert response.status_code == 404


class TestCategoryOwnership:
    """Another user's category behaves exactly like a missing one."""

    def test_list_is_owner_scoped(self, client: TestClient, test_user: dict, other_user: dict):
        _create_category(client, test_user["headers"])
        response = client.get("/api/categories", headers=other_user["headers"])
        assert response.json()["categories"] == []

    def test_foreign_update_and_delete_are_404(self, client: TestClient, test_user: dict, other_user: dict):
        category = _create_category(client, test_user["headers"])
        missing_put = client.put("/api/categories/9999", json=CAFE, headers=other_user["headers"])

        foreign_put = client.put(f"/api/categories/{category['id']}", json=CAFE, headers=other_user["headers"])
        foreign_delete = client.delete(f"/api/categories/{category['id']}", headers=other_user["headers"])

        assert foreign_put.status_code == foreign_delete.status_code == 404
        assert foreign_put.content == missing_put.content

        # Untouched for the owner
        response = client.get("/api/categories", headers=test_user["headers"])
        assert response.json()["categories"][0]["name"] == "Café"


class TestCategoryDelete:
    """Tests for hard delete and reference clearing."""

    def test_delete_category(self, client: TestClient, test_user: dict, db_session: Session):
        category = _create_category(client, test_user["headers"])
        response = client.delete(f"/api/categories/{category['id']}", headers=test_user["headers"])
        assert response.status_code == 200
        assert db_session.query(Category).filter(Category.id == category["id"]).first() is None

    def test_delete_clears_record_references(self, client: TestClient, test_user: dict, db_session: Session):
        """Deleting a category used by N records leaves N uncategorized records."""
        category = _create_category(client, test_user["headers"])
        for day in (1, 2, 3):
            response = client.post(
                "/api/records",
                data={"date_logged": f"2024-05-0{day}", "category_id": str(category["id"])},
                headers=test_user["headers"],
            )
            assert response.status_code == 201

        response = client.delete(f"/api/categories/{category['id']}", headers=test_user["headers"])
        assert response.status_code == 200

        db_session.expire_all()
        records = db_session.query(Record).filter(Record.user_id == test_user["user_id"]).all()
        assert len(records) == 3
        assert all(r.category_id is None for r in records)
        assert all(r.invalidation_flag is False for r in records)
        assert {r.date_logged for r in records} == {date(2024, 5, 1), date(2024, 5, 2), date(2024, 5, 3)}

    def test_delete_nonexistent(self, client: TestClient, test_user: dict):
        response = client.delete("/api/categories/9999", headers=test_user["headers"])
        assert response.status_code == 404
