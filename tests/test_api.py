"""Tests for the HTTP API."""
import pytest
from fastapi.testclient import TestClient

from deploy_window.config import Settings
from deploy_window.main import create_app

PATCH_X = {
    "title": "Patch X",
    "time": "2026-10-19T20:00:00+07:00",
    "teamIssuer": "Infra",
    "issuerName": "A. Lee",
}


@pytest.fixture
def client(tmp_path, channel, clock):
    settings = Settings(db_path=tmp_path / "api.db", discord_webhook_url=None)
    app = create_app(settings, channel=channel, clock=clock, start_scheduler=False)
    with TestClient(app) as c:
        yield c


class TestDeploymentsApi:
    """Tests for /api/deployments."""

    def test_create_and_list(self, client, channel):
        resp = client.post("/api/deployments", json=PATCH_X)

        assert resp.status_code == 201
        body = resp.json()
        assert body["title"] == "Patch X"
        assert body["issuerName"] == "A. Lee"
        assert body["crq"] is None

        # created today at 09:00 UTC+7 for 20:00 today: one late alert
        assert len(channel.sent) == 1

        listed = client.get("/api/deployments").json()
        assert [d["id"] for d in listed] == [body["id"]]

    def test_list_ordered_by_time(self, client):
        for title, time in [("b", "2026-11-02T10:00"), ("c", "2026-11-03T10:00"), ("a", "2026-11-01T10:00")]:
            client.post("/api/deployments", json={**PATCH_X, "title": title, "time": time})

        titles = [d["title"] for d in client.get("/api/deployments").json()]
        assert titles == ["a", "b", "c"]

    @pytest.mark.parametrize("field", ["title", "time", "teamIssuer", "issuerName"])
    def test_create_blank_field(self, client, field):
        resp = client.post("/api/deployments", json={**PATCH_X, field: "  "})

        assert resp.status_code == 400
        assert "error" in resp.json()
        assert client.get("/api/deployments").json() == []

    def test_create_missing_field(self, client):
        payload = {k: v for k, v in PATCH_X.items() if k != "teamIssuer"}

        assert client.post("/api/deployments", json=payload).status_code == 400

    def test_create_out_of_range_time(self, client):
        resp = client.post("/api/deployments", json={**PATCH_X, "time": "9999-12-31T23:59:00-10:00"})

        assert resp.status_code == 400
        assert "error" in resp.json()

        listed = client.get("/api/deployments")
        assert listed.status_code == 200
        assert listed.json() == []

    def test_create_non_string_field(self, client):
        resp = client.post("/api/deployments", json={**PATCH_X, "time": 1760878800000})

        assert resp.status_code == 400
        assert "time" in resp.json()["error"]
        assert client.get("/api/deployments").json() == []

    def test_create_non_object_body(self, client):
        resp = client.post("/api/deployments", json=["Patch X"])

        assert resp.status_code == 400
        assert set(resp.json()) == {"error"}

    def test_create_form_encoded_body(self, client):
        resp = client.post("/api/deployments", data=PATCH_X)

        assert resp.status_code == 400
        assert set(resp.json()) == {"error"}

    def test_update_non_string_field(self, client):
        created = client.post("/api/deployments", json=PATCH_X).json()

        resp = client.put(f"/api/deployments/{created['id']}", json={**PATCH_X, "title": 42})

        assert resp.status_code == 400
        assert client.get("/api/deployments").json()[0]["title"] == "Patch X"

    def test_update(self, client):
        created = client.post("/api/deployments", json=PATCH_X).json()

        resp = client.put(
            f"/api/deployments/{created['id']}",
            json={**PATCH_X, "title": "Patch Y", "mopLink": "https://mop/y"},
        )

        assert resp.status_code == 200
        assert resp.json()["title"] == "Patch Y"
        assert resp.json()["mopLink"] == "https://mop/y"

    def test_update_not_found(self, client):
        resp = client.put("/api/deployments/999", json=PATCH_X)

        assert resp.status_code == 404
        assert resp.json() == {"error": "Deployment not found"}

    def test_update_blank_field(self, client):
        created = client.post("/api/deployments", json=PATCH_X).json()

        resp = client.put(f"/api/deployments/{created['id']}", json={**PATCH_X, "issuerName": ""})

        assert resp.status_code == 400
        assert client.get("/api/deployments").json()[0]["issuerName"] == "A. Lee"

    def test_delete(self, client):
        created = client.post("/api/deployments", json=PATCH_X).json()

        resp = client.delete(f"/api/deployments/{created['id']}")

        assert resp.status_code == 200
        assert resp.json() == {"message": "Deployment deleted successfully"}
        assert client.get("/api/deployments").json() == []

    def test_delete_not_found(self, client):
        assert client.delete("/api/deployments/999").status_code == 404

    def test_delete_confirm_title_mismatch(self, client):
        created = client.post("/api/deployments", json=PATCH_X).json()

        resp = client.delete(f"/api/deployments/{created['id']}", params={"confirmTitle": "Patch"})

        assert resp.status_code == 400
        assert len(client.get("/api/deployments").json()) == 1


class TestDigestApi:
    """Tests for /api/cron/discord."""

    def test_nothing_to_report(self, client, channel):
        resp = client.get("/api/cron/discord")

        assert resp.status_code == 200
        assert resp.json() == {"message": "No deploy today"}
        assert channel.sent == []

    def test_sends_digest(self, client, channel, clock):
        clock.set(2026, 10, 19, 7, 0)
        client.post("/api/deployments", json=PATCH_X)
        client.post("/api/deployments", json={**PATCH_X, "title": "Patch Z", "time": "2026-10-19T21:00"})
        assert channel.sent == []

        resp = client.post("/api/cron/discord")

        assert resp.status_code == 200
        assert resp.json() == {"message": "Sent successfully"}
        assert len(channel.sent) == 1
        assert "Patch Z" in channel.sent[0].embed.description

    def test_missing_config(self, tmp_path, clock):
        settings = Settings(db_path=tmp_path / "api.db", discord_webhook_url=None)
        app = create_app(settings, clock=clock, start_scheduler=False)

        with TestClient(app) as c:
            resp = c.get("/api/cron/discord")

        assert resp.status_code == 500
        assert resp.json() == {"error": "Missing config"}


class TestHealth:
    def test_health(self, client):
        resp = client.get("/health")

        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"
        assert resp.json()["scheduler_running"] is False

    def test_health_counts_deployments(self, client):
        client.post("/api/deployments", json=PATCH_X)

        assert client.get("/health").json()["deployments"] == 1
