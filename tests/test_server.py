"""Tests for the HTTP surface."""

import asyncio
import time

import pytest
from starlette.testclient import TestClient

from idform import FormEngine, SubmissionLifecycle, TableStore
from idform.server import create_app


class FakeSink:
    def __init__(self, error=None):
        self.error = error
        self.payloads = []

    async def __call__(self, payload):
        self.payloads.append(payload)
        if self.error is not None:
            raise self.error
        return {"ok": True}


@pytest.fixture
def sink():
    return FakeSink()


@pytest.fixture
def app_engine(sink):
    return FormEngine(lifecycle=SubmissionLifecycle(sink, display_duration_ms=60_000))


@pytest.fixture
def client(app_engine, users):
    async def users_source():
        return users

    app = create_app(engine=app_engine, table=TableStore(), users_source=users_source)
    with TestClient(app) as test_client:
        wait_for_users(test_client)
        yield test_client


def wait_for_users(client, timeout=2.0):
    """Block until the startup user load has settled."""
    deadline = time.monotonic() + timeout
    while client.app.state.table.loading:
        assert time.monotonic() < deadline, "user table never finished loading"
        time.sleep(0.01)


def fill(client, values):
    for path, value in values.items():
        response = client.put("/api/form/fields", json={"path": path, "value": value})
        assert response.status_code == 200


class TestForm:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy", "service": "idform"}

    def test_initial_form(self, client):
        body = client.get("/api/form").json()
        assert len(body["fields"]) == 12
        assert body["is_submittable"] is False
        assert body["submit_disabled"] is True
        assert body["submission"]["phase"] == "idle"
        first = body["fields"][0]
        assert first["path"] == "userInfo.firstName"
        assert first["error"] == "Required"

    def test_set_field(self, client):
        response = client.put("/api/form/fields", json={"path": "userInfo.curp", "value": "XXXX"})
        body = response.json()
        assert body["field"]["error"] == "Invalid CURP"
        assert body["field"]["has_error"] is True
        assert body["is_submittable"] is False

    def test_unknown_path(self, client):
        response = client.put("/api/form/fields", json={"path": "userInfo.age", "value": "3"})
        assert response.status_code == 404
        assert "userInfo.age" in response.json()["error"]

    @pytest.mark.parametrize("body", [{"path": "userInfo.curp"}, {"path": 1, "value": "x"}])
    def test_bad_field_body(self, client, body):
        assert client.put("/api/form/fields", json=body).status_code == 400

    def test_malformed_json(self, client):
        response = client.put("/api/form/fields", content=b"{not json",
                              headers={"Content-Type": "application/json"})
        assert response.status_code == 400

    def test_submit_refused(self, client, sink):
        response = client.post("/api/form/submit")
        assert response.status_code == 409
        assert response.json()["accepted"] is False
        assert sink.payloads == []

    def test_submit(self, client, sink, valid_values):
        fill(client, valid_values)
        response = client.post("/api/form/submit")
        assert response.status_code == 200
        body = response.json()
        assert body["submission"]["phase"] == "succeeded"
        assert body["submission"]["message"] == "User submitted successfully!"
        assert sink.payloads[0]["userInfo"]["firstName"] == "Juan"

        dismissed = client.post("/api/form/dismiss").json()
        assert dismissed["submission"]["phase"] == "idle"

    def test_submit_failure(self, client, sink, valid_values):
        sink.error = RuntimeError("sink down")
        fill(client, valid_values)
        body = client.post("/api/form/submit").json()
        assert body["submission"]["phase"] == "failed"
        assert body["submission"]["message"] == "Error sending identification form."

    def test_reset(self, client, valid_values):
        fill(client, valid_values)
        assert client.get("/api/form").json()["is_submittable"] is True
        body = client.post("/api/form/reset").json()
        assert body["is_submittable"] is False
        assert all(field["value"] == "" for field in body["fields"])

    def test_states(self, client):
        states = client.get("/api/states").json()
        assert states[0] == {"code": "CH", "name": "Chihuahua"}
        assert len(states) == 16


class TestUsers:
    def test_loaded_at_startup(self, client):
        body = client.get("/api/users").json()
        assert body["loading"] is False
        assert [row["id"] for row in body["rows"]] == [3, 1, 2]

    def test_sorted(self, client):
        body = client.get("/api/users", params={"sort": "id", "direction": "desc"}).json()
        assert [row["id"] for row in body["rows"]] == [3, 2, 1]
        assert body["sort"] == {"key": "id", "direction": "desc"}

    def test_bad_sort(self, client):
        assert client.get("/api/users", params={"sort": "geo"}).status_code == 400

    def test_edit_and_save(self, client):
        started = client.post("/api/users/1/edit").json()
        assert started["edit_target"] == 1
        assert started["row"]["name"] == "Leanne Graham"

        updated = client.patch("/api/users/1", json={"name": "Leanne G."}).json()
        assert updated["name"] == "Leanne G."
        assert client.get("/api/users").json()["edit_target"] is None

    def test_delete(self, client):
        body = client.delete("/api/users/3").json()
        assert [row["id"] for row in body["rows"]] == [1, 2]

    def test_unknown_user(self, client):
        assert client.patch("/api/users/99", json={"name": "x"}).status_code == 404
        assert client.post("/api/users/99/edit").status_code == 404

    def test_wrong_typed_patch_is_rejected(self, client):
        """A non-string name is refused, so sorting by name still works."""
        response = client.patch("/api/users/1", json={"name": 5})
        assert response.status_code == 400
        assert "Invalid user record" in response.json()["error"]

        response = client.get("/api/users", params={"sort": "name"})
        assert response.status_code == 200
        assert [row["id"] for row in response.json()["rows"]] == [3, 2, 1]


def test_failed_startup_load_leaves_table_empty(app_engine):
    async def users_source():
        raise OSError("unreachable")

    app = create_app(engine=app_engine, users_source=users_source)
    with TestClient(app) as client:
        wait_for_users(client)
        body = client.get("/api/users").json()
    assert body == {"loading": False, "sort": {"key": "id", "direction": "asc"},
                    "edit_target": None, "rows": []}


def test_table_reports_loading_while_startup_load_is_pending(app_engine):
    async def users_source():
        await asyncio.Event().wait()

    app = create_app(engine=app_engine, users_source=users_source)
    with TestClient(app) as client:
        body = client.get("/api/users").json()
        assert body["loading"] is True
        assert body["rows"] == []
        assert client.get("/health").status_code == 200

    assert app.state.users_task.cancelled()
    assert app.state.table.loading is False
