"""
Integration tests for the FastAPI server.
Uses the real FastAPI TestClient and a real engine; no subscriber is
connected, so the engine is non-interactive.
"""
import pytest
from fastapi.testclient import TestClient

from core.permissions import DecisionEngine, EventBusApprovalPort, PermissionMode, PermissionSettings
from server import app, get_engine, set_engine
from server.event_bus import get_event_bus


@pytest.fixture
def client():
    """Create a test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture
def engine():
    """Install a default-mode engine for the duration of a test."""
    port = EventBusApprovalPort(get_event_bus())
    engine = DecisionEngine(
        PermissionSettings(mode=PermissionMode.DEFAULT),
        approval_port=port,
        home="/home/tester",
        cwd="/work/project",
    )
    set_engine(engine, port)
    yield engine
    set_engine(None)


class TestHealthEndpoint:
    def test_health_without_engine(self, client):
        set_engine(None)
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["engine_configured"] is False
        assert data["interactive"] is False

    def test_health_with_engine(self, client, engine):
        assert client.get("/health").json()["engine_configured"] is True


class TestCheckEndpoint:
    def test_not_initialized(self, client):
        set_engine(None)
        response = client.post("/permissions/check", json={"toolName": "bash", "input": {"command": "ls"}})
        assert response.status_code == 500

    def test_catastrophic(self, client, engine):
        response = client.post(
            "/permissions/check",
            json={"toolName": "bash", "input": {"command": "sudo rm -rf /"}},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["block"] is True
        assert "recursive delete root" in data["reason"]

    def test_no_subscriber_blocks_prompt(self, client, engine):
        response = client.post(
            "/permissions/check",
            json={"toolName": "write", "input": {"path": "src/app.py"}},
        )
        assert response.json() == {
            "block": True,
            "reason": "Blocked write (no UI for confirmation, mode: default)",
        }

    def test_allow(self, client, engine):
        engine.modes.set(PermissionMode.FULL_AUTO)
        response = client.post(
            "/permissions/check",
            json={"tool_name": "bash", "input": {"command": "echo hi"}},
        )
        assert response.json() == {"block": False, "reason": None}

    def test_ungated_tool(self, client, engine):
        response = client.post("/permissions/check", json={"toolName": "read", "input": {"path": "x"}})
        assert response.json()["block"] is False

    def test_invalid_body(self, client, engine):
        response = client.post("/permissions/check", json={"input": {}})
        assert response.status_code == 422


class TestModeEndpoints:
    def test_status(self, client, engine):
        engine.session_allow.allow_tool("edit")
        data = client.get("/permissions/status").json()
        assert data["mode"] == "default"
        assert data["label"] == "Default"
        assert data["session_tools"] == ["edit"]
        assert data["text"].startswith("Mode: Default (default)")

    def test_set_mode(self, client, engine):
        engine.session_allow.allow_command("ls")
        response = client.put("/permissions/mode", json={"mode": "fullAuto"})
        assert response.status_code == 200
        assert response.json() == {"mode": "fullAuto"}
        assert get_engine().mode == PermissionMode.FULL_AUTO
        assert len(engine.session_allow) == 0

    def test_set_unknown_mode(self, client, engine):
        response = client.put("/permissions/mode", json={"mode": "plan"})
        assert response.status_code == 400
        assert "Unknown mode: plan" in response.json()["detail"]
        assert engine.mode == PermissionMode.DEFAULT

    def test_cycle(self, client, engine):
        assert client.post("/permissions/cycle").json() == {"mode": "acceptEdits"}
        assert client.post("/permissions/cycle").json() == {"mode": "fullAuto"}

    def test_pick_without_subscriber(self, client, engine):
        response = client.post("/permissions/pick")
        assert response.status_code == 200
        assert response.json() == {"mode": None}
        assert engine.mode == PermissionMode.DEFAULT

    def test_modes_completion(self, client):
        data = client.get("/permissions/modes", params={"prefix": "b"}).json()
        assert [m["id"] for m in data] == ["bypassPermissions"]
        assert client.get("/permissions/modes", params={"prefix": "x"}).json() == []


class TestRespondEndpoint:
    def test_unknown_request(self, client, engine):
        response = client.post("/permissions/respond", json={"requestId": "perm_nope", "choice": 0})
        assert response.status_code == 404

    def test_pending_empty(self, client, engine):
        assert client.get("/permissions/pending").json() == []
