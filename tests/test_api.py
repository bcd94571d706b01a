"""
End-to-end tests of the HTTP API against a temporary database.
"""
import json

import pytest
from fastapi.testclient import TestClient

from service_tracker_api.app.main import create_app
from service_tracker_api.app.utils.formatting import parse_timestamp


@pytest.fixture
def client(tmp_path):
    app = create_app(str(tmp_path / "api.db"))
    with TestClient(app) as test_client:
        yield test_client


def new_service(client, **fields):
    body = {"rawCustomerPhoneInput": "0534 682 22 82", "address": "Moda", "cost": 1000, "expenses": 200}
    body.update(fields)
    response = client.post("/api/v1/services/", json=body)
    assert response.status_code == 201, response.text
    return response.json()


class TestServices:
    def test_create_and_fetch(self, client):
        created = new_service(client, rawCustomerPhoneInput="Ahmet +90 534 682 22 82 ustaya sor")
        assert created["customerPhone"] == "05346822282"
        assert created["color"] == "white"

        fetched = client.get(f"/api/v1/services/{created['id']}")
        assert fetched.status_code == 200
        assert fetched.json()["address"] == "Moda"

    def test_share(self, client):
        created = new_service(client, rawCustomerPhoneInput="0534 682 22 82", address="Moda")
        shared = client.get(f"/api/v1/services/{created['id']}/share").json()
        assert shared["text"] == "Moda\nTelefon: 05346822282"
        assert shared["whatsappUrl"].startswith("https://wa.me/?text=Moda")
        assert created["createdAt"].endswith("Z")

    def test_update_and_delete(self, client):
        created = new_service(client)
        response = client.put(f"/api/v1/services/{created['id']}", json={"status": "completed"})
        assert response.json()["status"] == "completed"

        assert client.delete(f"/api/v1/services/{created['id']}").status_code == 204
        missing = client.get(f"/api/v1/services/{created['id']}")
        assert missing.status_code == 404
        assert missing.json()["detail"] == "Servis kaydı bulunamadı."

    def test_negative_cost_rejected(self, client):
        response = client.post("/api/v1/services/", json={"cost": -1})
        assert response.status_code == 422

    def test_filters_and_reorder(self, client):
        first = new_service(client, status="completed")
        second = new_service(client, status="ongoing")
        listed = client.get("/api/v1/services/", params={"status": "completed"}).json()
        assert [item["id"] for item in listed] == [first["id"]]

        reordered = client.post("/api/v1/services/reorder", json={"fromIndex": 0, "toIndex": 1})
        assert reordered.status_code == 200
        ids = [item["id"] for item in client.get("/api/v1/services/").json()]
        assert ids == [first["id"], second["id"]]

    def test_reorder_out_of_range(self, client):
        new_service(client)
        response = client.post("/api/v1/services/reorder", json={"fromIndex": 0, "toIndex": 4})
        assert response.status_code == 422


class TestStatisticsAndReports:
    def test_dashboard(self, client):
        new_service(client, cost=100, expenses=20)
        new_service(client, cost=50, expenses=10)
        stats = client.get("/api/v1/statistics/dashboard").json()
        assert stats["totalServices"] == 2
        assert stats["totalRevenue"] == 150
        assert stats["monthlyStats"]["profit"] == 120

    def test_monthly_report(self, client):
        created = new_service(client, status="completed")
        created_at = parse_timestamp(created["createdAt"])
        year, month = created_at.year, created_at.month
        report = client.get("/api/v1/reports/monthly", params={"month": month, "year": year}).json()
        assert report["profitShareRate"] == 0.35
        row = report["rows"][0]
        assert row["netProfit"] == 800
        assert row["profitShare"] == pytest.approx(280)
        assert row["remaining"] == pytest.approx(520)

    def test_invalid_month(self, client):
        assert client.get("/api/v1/reports/monthly", params={"month": 13}).status_code == 422


class TestNotesAndParts:
    def test_note_crud(self, client):
        note = client.post("/api/v1/notes/", json={"title": "Vida", "content": "M6"}).json()
        client.put(f"/api/v1/notes/{note['id']}", json={"content": "M8"})
        assert client.get("/api/v1/notes/").json()[0]["content"] == "M8"
        assert client.delete(f"/api/v1/notes/{note['id']}").status_code == 204
        assert client.delete(f"/api/v1/notes/{note['id']}").status_code == 404

    def test_missing_parts(self, client):
        client.post("/api/v1/missing-parts/", json={"name": "Rezistans"})
        assert client.get("/api/v1/missing-parts/").json() == ["Rezistans"]
        assert client.delete("/api/v1/missing-parts/0").json() == []


class TestBackupAndPreferences:
    def test_export_and_import(self, client):
        new_service(client)
        exported = client.get("/api/v1/backup/export")
        assert "boltyedek.json" in exported.headers["content-disposition"]
        document = exported.json()
        assert len(document["services"]) == 1

        client.delete(f"/api/v1/services/{document['services'][0]['id']}")
        result = client.post("/api/v1/backup/import", content=json.dumps(document))
        assert result.status_code == 200
        assert result.json()["services"] == 1
        assert len(client.get("/api/v1/services/").json()) == 1

    def test_import_rejects_bad_file(self, client):
        response = client.post("/api/v1/backup/import", content="nonsense")
        assert response.status_code == 422
        assert response.json()["detail"] == "Dosya formatı geçersiz"

    def test_preferences_follow_navigation(self, client):
        client.put("/api/v1/preferences/", json={"lastPage": "notes"})
        assert client.get("/api/v1/preferences/").json()["lastPage"] == "notes"
        new_service(client)
        assert client.get("/api/v1/preferences/").json()["lastPage"] == "dashboard"

    def test_status_filter_toggle(self, client):
        first = client.post("/api/v1/preferences/status-filter/completed/toggle").json()
        assert first["statusFilter"] == "completed"
        second = client.post("/api/v1/preferences/status-filter/completed/toggle").json()
        assert second["statusFilter"] == "all"

    def test_draft(self, client):
        assert client.put("/api/v1/preferences/draft", json={"address": "// [1] Moda"}).status_code == 204
        assert client.get("/api/v1/preferences/draft").json()["address"] == "Moda"
        client.delete("/api/v1/preferences/draft")
        assert client.get("/api/v1/preferences/draft").json() is None

    def test_phone_normalize(self, client):
        response = client.post("/api/v1/phone/normalize", json={"text": "0534 682 22 82 (kapıcı)"})
        body = response.json()
        assert body["dial_uri"] == "tel:05346822282"
        assert body["storage"] == "05346822282"
        assert [segment["style"] for segment in body["segments"]] == ["phone", "annotation"]
