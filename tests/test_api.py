"""HTTP surface tests."""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from api.main import create_app
from config.settings import Settings


class TestHealthAndStatic:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.text == "OK"

    def test_index_served_at_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert "Content Inventory" in response.text

    def test_static_file_served(self, client, public_dir):
        (public_dir / "notes.txt").write_text("hello", encoding="utf-8")

        response = client.get("/notes.txt")

        assert response.status_code == 200
        assert response.text == "hello"

    def test_unknown_static_path_is_json_404(self, client):
        response = client.get("/nope.html")

        assert response.status_code == 404
        assert "error" in response.json()


class TestListAssessments:
    def test_missing_file_returns_empty_array(self, client):
        response = client.get("/api/assessments")

        assert response.status_code == 200
        assert response.json() == []

    def test_returns_file_contents(self, client, write_entity):
        records = [{"id": "1", "processName": "Alpha", "status": "Draft"}]
        write_entity("assessments", records)

        assert client.get("/api/assessments").json() == records

    def test_corrupt_file_is_500(self, client, data_dir):
        (data_dir / "assessments.json").write_text("{oops", encoding="utf-8")

        response = client.get("/api/assessments")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to read or write records"}

    def test_non_object_element_is_json_500(self, client, write_entity):
        write_entity("assessments", [1, {"id": "2", "processName": "Beta", "status": "Draft"}])

        responses = [
            client.get("/api/assessments"),
            client.get("/api/assessments/2"),
            client.put("/api/assessments/2", json={"processName": "Beta", "status": "In Review"}),
        ]

        for response in responses:
            assert response.status_code == 500
            assert response.headers["content-type"].startswith("application/json")
            assert response.json() == {"error": "Failed to read or write records"}

    def test_unexpected_error_is_json_500(self, data_dir, public_dir):
        store = MagicMock()
        store.list.side_effect = RuntimeError("boom")
        app = create_app(store=store, app_settings=Settings(data_dir=data_dir, public_dir=public_dir))

        with TestClient(app, raise_server_exceptions=False) as test_client:
            response = test_client.get("/api/assessments")

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}


class TestCreateAssessment:
    def test_payroll_export_scenario(self, client):
        response = client.post("/api/assessments", json={"processName": "Payroll Export", "status": "Draft"})

        assert response.status_code == 201
        body = response.json()
        assert isinstance(body["id"], str) and body["id"]
        assert body["createdDate"] == "2024-06-10"
        assert body["lastModified"] == "2024-06-10"
        assert body["status"] == "Draft"

        update = client.put(
            f"/api/assessments/{body['id']}",
            json={"processName": "Payroll Export", "status": "In Review"},
        )

        assert update.status_code == 200
        assert update.json()["status"] == "In Review"
        assert update.json()["id"] == body["id"]

    def test_created_record_is_listed(self, client):
        created = client.post("/api/assessments", json={"processName": "P", "status": "Draft"}).json()

        assert created in client.get("/api/assessments").json()

    def test_round_trip_preserves_client_fields(self, client):
        payload = {
            "processName": "Vendor Contracts",
            "content": "Signed agreements",
            "informationController": "Procurement",
            "medium": "Paper",
            "location": "Red Deer",
            "securityClassification": "Protected A",
            "pib": "No",
            "fctFunction": "Financial Management",
            "fctActivity": "Contracting",
            "status": "Draft",
            "reviewer": "J. Smith",
        }
        created = client.post("/api/assessments", json=payload).json()

        fetched = client.get(f"/api/assessments/{created['id']}").json()

        for key, value in payload.items():
            assert fetched[key] == value

    @pytest.mark.parametrize("payload,missing", [
        ({"status": "Draft"}, "processName"),
        ({"processName": "P"}, "status"),
        ({}, "processName, status"),
    ])
    def test_missing_required_fields_is_400(self, client, payload, missing):
        response = client.post("/api/assessments", json=payload)

        assert response.status_code == 400
        assert missing in response.json()["error"]
        assert client.get("/api/assessments").json() == []

    def test_non_object_body_is_400(self, client):
        response = client.post("/api/assessments", json=["processName", "status"])

        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid request body")

    def test_non_string_field_is_400(self, client):
        response = client.post("/api/assessments", json={"processName": 5, "status": "Draft"})

        assert response.status_code == 400


class TestUpdateAssessment:
    @pytest.fixture
    def created(self, client):
        return client.post(
            "/api/assessments",
            json={"processName": "Payroll Export", "status": "Draft", "location": "Calgary"},
        ).json()

    def test_unknown_id_is_404_and_unchanged(self, client, created):
        before = client.get("/api/assessments").json()

        response = client.put("/api/assessments/does-not-exist", json={"processName": "P", "status": "Draft"})

        assert response.status_code == 404
        assert "does-not-exist" in response.json()["error"]
        assert client.get("/api/assessments").json() == before

    def test_id_and_created_date_are_pinned(self, client, created, clock):
        from datetime import datetime
        clock.now = datetime(2024, 8, 1, 8, 0, 0)

        response = client.put(
            f"/api/assessments/{created['id']}",
            json={"id": "hijack", "createdDate": "1990-01-01", "status": "In Review"},
        )

        body = response.json()
        assert response.status_code == 200
        assert body["id"] == created["id"]
        assert body["createdDate"] == created["createdDate"]
        assert body["lastModified"] == "2024-08-01"
        assert body["location"] == "Calgary"

    def test_identical_put_is_idempotent(self, client, created):
        patch = {"processName": "Payroll Export", "status": "In Review"}

        first = client.put(f"/api/assessments/{created['id']}", json=patch).json()
        second = client.put(f"/api/assessments/{created['id']}", json=patch).json()

        assert first == second

    def test_blank_required_field_is_400(self, client, created):
        response = client.put(f"/api/assessments/{created['id']}", json={"status": ""})

        assert response.status_code == 400
        assert "status" in response.json()["error"]

    def test_get_unknown_id_is_404(self, client):
        assert client.get("/api/assessments/unknown").status_code == 404


class TestRfis:
    def test_lists_rfis(self, client, write_entity):
        rfis = [{"id": "RFI-1", "title": "Retention schedule"}]
        write_entity("rfis", rfis)

        assert client.get("/api/rfis").json() == rfis

    def test_missing_rfis_file_is_empty(self, client):
        assert client.get("/api/rfis").json() == []

    def test_rfis_have_no_write_endpoint(self, client):
        response = client.post("/api/rfis", json={"id": "x"})

        assert response.status_code == 405


class TestTrace:
    def test_records_store_events(self, client):
        client.delete("/api/trace")
        client.post("/api/assessments", json={"processName": "P", "status": "Draft"})

        events = client.get("/api/trace", params={"component": "store"}).json()["events"]

        assert any(e["event_type"] == "create" for e in events)
