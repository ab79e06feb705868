"""Integration tests for scenecraft.api.main: FastAPI REST API endpoints.

All tests use the FastAPI TestClient.  Tests cover every endpoint:

- ``GET /api/config``: Enums, output modes and rule table.
- ``POST /api/scene/validate``: Diagnostics for live feedback.
- ``POST /api/scene/compile``: Prompt compilation.
"""

from __future__ import annotations

from scenecraft.api import main as api_main
from scenecraft.core.errors import RuleExecutionError

# ---------------------------------------------------------------------------
# Configuration endpoint tests.
# ---------------------------------------------------------------------------


class TestGetConfig:
    """Test GET /api/config."""

    def test_config_returns_version(self, test_client):
        resp = test_client.get("/api/config")
        assert resp.status_code == 200
        assert "version" in resp.json()

    def test_config_returns_choices(self, test_client):
        data = test_client.get("/api/config").json()
        assert data["framings"] == ["tight", "medium", "wide"]
        assert data["lenses"] == ["shallow", "deep"]
        assert data["output_modes"] == ["compact", "expanded"]
        assert data["anchor_slots"] == 5
        assert data["required_anchor_slots"] == 3

    def test_config_lists_rules_in_order(self, test_client):
        rules = test_client.get("/api/config").json()["rules"]
        assert rules[0] == {
            "id": "scene_heart_presence",
            "severity": "hard",
            "field": "scene_heart",
            "description": "Scene heart must not be empty.",
        }
        assert [r["id"] for r in rules][:2] == ["scene_heart_presence", "anchor_count"]


# ---------------------------------------------------------------------------
# Validation endpoint tests.
# ---------------------------------------------------------------------------


class TestValidateScene:
    """Test POST /api/scene/validate."""

    def test_empty_scene(self, test_client):
        resp = test_client.post("/api/scene/validate", json={})
        assert resp.status_code == 200
        data = resp.json()
        assert data["can_compile"] is False
        hard = [d["rule_id"] for d in data["diagnostics"] if d["severity"] == "hard"]
        assert hard == ["scene_heart_presence", "anchor_count"]

    def test_rich_scene(self, test_client, rich_scene_input):
        data = test_client.post("/api/scene/validate", json=rich_scene_input).json()
        assert data == {"diagnostics": [], "can_compile": True}

    def test_bad_framing_is_422(self, test_client):
        resp = test_client.post("/api/scene/validate", json={"framing": "extreme"})
        assert resp.status_code == 422
        assert "framing must be one of" in resp.json()["detail"]


# ---------------------------------------------------------------------------
# Compile endpoint tests.
# ---------------------------------------------------------------------------


class TestCompileScene:
    """Test POST /api/scene/compile."""

    def test_blocked_scene_is_200(self, test_client):
        resp = test_client.post("/api/scene/compile", json={"scene": {"sceneHeart": ""}})
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "blocked"
        assert "prompt" not in data
        assert data["errors"][0]["message"] == "Scene Heart is required."

    def test_compiles_minimal_scene(self, test_client, minimal_scene_input):
        resp = test_client.post(
            "/api/scene/compile",
            json={"scene": minimal_scene_input, "outputMode": "compact"},
        )
        data = resp.json()
        assert data["status"] == "ok"
        assert data["prompt"].startswith("SCENE HEART:\nA fox reads by candlelight")
        assert "focus_target_shape" in [w["rule_id"] for w in data["warnings"]]

    def test_expanded_mode(self, test_client, rich_scene_input):
        data = test_client.post(
            "/api/scene/compile",
            json={"scene": rich_scene_input, "output_mode": "expanded"},
        ).json()
        assert data["prompt"].startswith("== SCENE HEART ==")
        assert data["warnings"] == []

    def test_same_request_same_response(self, test_client, rich_scene_input):
        body = {"scene": rich_scene_input}
        first = test_client.post("/api/scene/compile", json=body).json()
        second = test_client.post("/api/scene/compile", json=body).json()
        assert first == second

    def test_invalid_output_mode_is_422(self, test_client):
        resp = test_client.post("/api/scene/compile", json={"output_mode": "verbose"})
        assert resp.status_code == 422

    def test_compiler_defect_is_500(self, test_client, monkeypatch):
        def broken_compile(*args, **kwargs):
            raise RuleExecutionError("broken", "boom")

        monkeypatch.setattr(api_main, "compile_scene", broken_compile)
        resp = test_client.post("/api/scene/compile", json={})

        assert resp.status_code == 500
        assert resp.json() == {"detail": "Internal compiler error"}
