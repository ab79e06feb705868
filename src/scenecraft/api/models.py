"""Pydantic request models for the SceneCraft API.

The editor sends camelCase keys (``sceneHeart``, ``environmentAnchors``...),
so every multi-word field also accepts its camelCase alias.  Values are kept
loose here (plain strings, optional lists); trimming, slot padding and enum
checks belong to :mod:`scenecraft.core.normalizers`, so the API and direct
Python callers get identical behaviour.

Models
------
CastMemberInput
    One cast entry as sent by the cast binder.
SceneInput
    Payload for ``POST /api/scene/validate`` and the ``scene`` member of
    :class:`CompileRequest`.  Every field is optional: a half-filled scene
    is valid input and simply produces diagnostics.
CompileRequest
    Payload for ``POST /api/scene/compile``.
"""

from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class CastMemberInput(BaseModel):
    """A cast member as sent by the editor.

    Attributes:
        name: Character name or identity text.
        description: Optional identity details.
        wardrobe: Optional outfit text bound to this character.
    """

    name: str | None = None
    description: str | None = None
    wardrobe: str | None = None


class SceneInput(BaseModel):
    """Partially populated scene, straight from the editor.

    Attributes:
        scene_heart: Narrative seed (required for a compile to succeed).
        framing: ``tight``, ``medium`` or ``wide``.
        lens: ``shallow`` or ``deep``.
        cast: Cast entries, as names or objects.
        environment_anchors: Up to five anchor slots; extra entries are
            dropped by the normalizer.
        micro_details: Atmospheric phrases.
        mechanic_lock: One cause-and-effect sentence.
        focus_target: What must render sharp.
    """

    model_config = ConfigDict(populate_by_name=True)

    scene_heart: str | None = Field(
        default=None,
        validation_alias=AliasChoices("scene_heart", "sceneHeart"),
        description="Narrative seed of the scene.",
    )
    framing: str | None = Field(
        default=None,
        description="Framing: 'tight', 'medium' or 'wide'.",
    )
    lens: str | None = Field(
        default=None,
        description="Depth of field: 'shallow' or 'deep'.",
    )
    cast: list[str | CastMemberInput] | None = Field(
        default=None,
        description="Cast members, as names or objects.",
    )
    environment_anchors: list[str | None] | None = Field(
        default=None,
        validation_alias=AliasChoices("environment_anchors", "environmentAnchors"),
        description="Environment anchor slots (first three are required).",
    )
    micro_details: list[str] | None = Field(
        default=None,
        validation_alias=AliasChoices("micro_details", "microDetails"),
        description="Atmospheric micro-details.",
    )
    mechanic_lock: str | None = Field(
        default=None,
        validation_alias=AliasChoices("mechanic_lock", "mechanicLock"),
        description="Single cause-and-effect sentence.",
    )
    focus_target: str | None = Field(
        default=None,
        validation_alias=AliasChoices("focus_target", "focusTarget"),
        description="What must render sharp and what may stay secondary.",
    )


class CompileRequest(BaseModel):
    """Request body for the ``POST /api/scene/compile`` endpoint.

    Attributes:
        scene: The scene to compile.
        output_mode: ``"compact"`` or ``"expanded"``.  ``None`` uses the
            configured default.
    """

    model_config = ConfigDict(populate_by_name=True)

    scene: SceneInput = Field(
        default_factory=SceneInput,
        description="Scene fields to compile.",
    )
    output_mode: Literal["compact", "expanded"] | None = Field(
        default=None,
        validation_alias=AliasChoices("output_mode", "outputMode"),
        description="Prompt layout; defaults to the server setting.",
    )
