"""Shared pytest fixtures for SceneCraft tests."""

from typing import Any

import pytest
from fastapi.testclient import TestClient

from scenecraft.api.main import app
from scenecraft.core.config import SceneCraftConfig
from scenecraft.core.models import SceneRecord
from scenecraft.core.normalizers import normalize


@pytest.fixture
def test_config(monkeypatch) -> SceneCraftConfig:
    """Create a configuration that ignores the environment and .env files.

    Returns:
        SceneCraftConfig with default values
    """
    for name in ("MIN_MICRO_DETAILS", "MIN_FOCUS_TARGET_WORDS", "DEFAULT_OUTPUT_MODE"):
        monkeypatch.delenv(f"SCENECRAFT_{name}", raising=False)
    return SceneCraftConfig(_env_file=None)


@pytest.fixture
def minimal_scene_input() -> dict[str, Any]:
    """Smallest scene that compiles: a scene heart and three anchors.

    Returns:
        Raw scene input with camelCase keys, as the editor sends it
    """
    return {
        "sceneHeart": "A fox reads by candlelight",
        "environmentAnchors": ["worn armchair", "steaming mug", "rain window"],
    }


@pytest.fixture
def rich_scene_input() -> dict[str, Any]:
    """Fully populated scene that triggers no diagnostics at all.

    Returns:
        Raw scene input with every field set
    """
    return {
        "sceneHeart": "A fox reads by candlelight",
        "framing": "medium",
        "lens": "shallow",
        "cast": [
            {
                "name": "Fennel the fox",
                "description": "rust-red fur, round spectacles",
                "wardrobe": "moss-green cardigan",
            }
        ],
        "environmentAnchors": ["worn armchair", "steaming mug", "rain window", "", ""],
        "microDetails": [
            "dust motes in lamplight",
            "dog-eared pages",
            "wax pooling on the saucer",
        ],
        "mechanicLock": "The draft from the window causes the candle flame to lean sideways.",
        "focusTarget": "Sharp focus on the fox's eyes and the open book; background secondary.",
    }


@pytest.fixture
def rich_record(rich_scene_input: dict[str, Any]) -> SceneRecord:
    """Normalized record for the rich scene."""
    return normalize(rich_scene_input)


@pytest.fixture
def empty_record() -> SceneRecord:
    """Normalized record for an empty scene."""
    return normalize({})


@pytest.fixture
def test_client() -> TestClient:
    """FastAPI test client for the SceneCraft app."""
    return TestClient(app)
