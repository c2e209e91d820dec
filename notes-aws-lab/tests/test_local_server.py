# tests/test_local_server.py
"""Tests for the local HTTP API emulator."""
from unittest.mock import patch, MagicMock

import pytest

from fakes import FakeDynamoTable
from notes_core import local

ALICE = {local.IDENTITY_HEADER: "us-east-1:alice"}
BOB = {local.IDENTITY_HEADER: "us-east-1:bob"}


@pytest.fixture
def fake_table():
    return FakeDynamoTable()


@pytest.fixture
def client(fake_table):
    resource = MagicMock()
    resource.Table.return_value = fake_table
    with patch("boto3.resource", return_value=resource):
        app = local.create_app(identity=None)
    app.config["TESTING"] = True
    return app.test_client()


class TestLoadRoutes:
    def test_default_routes(self):
        routes = local.load_routes()
        assert [(r.method, r.path, r.function) for r in routes] == [
            ("GET", "/notes", "list_notes"),
            ("POST", "/notes", "create_note"),
            ("GET", "/notes/{id}", "get_note"),
            ("PUT", "/notes/{id}", "update_note"),
            ("DELETE", "/notes/{id}", "delete_note"),
        ]

    def test_empty_file_rejected(self, tmp_path):
        path = tmp_path / "routes.yaml"
        path.write_text("routes: []\n")
        with pytest.raises(ValueError, match="No routes"):
            local.load_routes(path)

    def test_malformed_route_rejected(self, tmp_path):
        path = tmp_path / "routes.yaml"
        path.write_text("routes:\n  - route: /notes\n    function: list_notes\n")
        with pytest.raises(ValueError, match="METHOD"):
            local.load_routes(path)


class TestBuildEvent:
    def test_http_api_v2_shape(self):
        route = local.Route("GET", "/notes/{id}", "get_note")
        event = local.build_event(route, "/notes/n1", {"id": "n1"},
                                  headers={"Content-Type": "application/json"}, identity="alice")

        assert event["routeKey"] == "GET /notes/{id}"
        assert event["rawPath"] == "/notes/n1"
        assert event["pathParameters"] == {"id": "n1"}
        assert event["headers"] == {"content-type": "application/json"}
        assert event["requestContext"]["http"]["method"] == "GET"
        assert event["requestContext"]["authorizer"]["iam"]["cognitoIdentity"]["identityId"] == "alice"
        assert event["body"] is None

    def test_no_identity_no_authorizer(self):
        route = local.Route("GET", "/notes", "list_notes")
        event = local.build_event(route, "/notes")
        assert "authorizer" not in event["requestContext"]
        assert event["pathParameters"] is None


class TestServer:
    def test_crud_flow(self, client):
        resp = client.post("/notes", json={"content": "hello"}, headers=ALICE)
        assert resp.status_code == 200
        note = resp.get_json()
        assert note["content"] == "hello"
        assert resp.headers["Access-Control-Allow-Origin"] == "*"
        assert resp.headers["Access-Control-Allow-Credentials"] == "true"

        resp = client.get(f"/notes/{note['itemId']}", headers=ALICE)
        assert resp.get_json() == note

        resp = client.put(f"/notes/{note['itemId']}", json={"content": "bye"}, headers=ALICE)
        assert resp.get_json() == {"status": True}

        resp = client.get("/notes", headers=ALICE)
        assert [n["content"] for n in resp.get_json()] == ["bye"]

        resp = client.delete(f"/notes/{note['itemId']}", headers=ALICE)
        assert resp.get_json() == {"status": True}
        assert client.get("/notes", headers=ALICE).get_json() == []

    def test_owners_are_isolated(self, client):
        client.post("/notes", json={"content": "alice's"}, headers=ALICE)

        assert client.get("/notes", headers=BOB).get_json() == []

    def test_unauthenticated(self, client):
        resp = client.get("/notes")

        assert resp.status_code == 500
        assert resp.get_json() == {"error": "User not authenticated"}

    def test_default_identity(self, fake_table):
        resource = MagicMock()
        resource.Table.return_value = fake_table
        with patch("boto3.resource", return_value=resource):
            app = local.create_app(identity="local-user")

        resp = app.test_client().post("/notes", json={"content": "x"})
        assert resp.get_json()["ownerId"] == "local-user"

    def test_preflight(self, client):
        resp = client.options("/notes/abc")

        assert resp.status_code == 200
        assert resp.headers["Access-Control-Allow-Methods"] == "GET,POST,PUT,DELETE,OPTIONS"

    def test_unrouted_method(self, client):
        assert client.patch("/notes", headers=ALICE).status_code == 405
