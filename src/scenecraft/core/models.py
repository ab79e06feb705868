"""Data models for scene compilation.

All models are immutable Pydantic models.  A :class:`SceneRecord` is built
fresh by :func:`~scenecraft.core.normalizers.normalize` on every compile call
and is never cached, so two compiles can run side by side without sharing
any state.

Models
------
CastMember
    One character in the scene (name plus optional description and wardrobe).
SceneRecord
    The normalized scene: scene heart, framing, lens, cast, five anchor
    slots, micro-details, mechanic lock and focus target.
Diagnostic
    A single ``hard`` or ``soft`` finding produced by a rule.
ValidationResult
    Ordered diagnostics plus the compile-eligibility flag.
CompileOk / CompileBlocked
    The two arms of :data:`CompileResult`, discriminated on ``status``.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

Severity = Literal["hard", "soft"]
Framing = Literal["tight", "medium", "wide"]
Lens = Literal["shallow", "deep"]
FieldId = Literal[
    "scene_heart",
    "framing",
    "lens",
    "cast",
    "environment_anchors",
    "micro_details",
    "mechanic_lock",
    "focus_target",
]

FRAMINGS: tuple[str, ...] = ("tight", "medium", "wide")
LENSES: tuple[str, ...] = ("shallow", "deep")

# Exactly five positional slots; index 0-2 are the required ones.
AnchorSlots = tuple[str, str, str, str, str]


class CastMember(BaseModel):
    """A character placed in the scene.

    Attributes:
        name: Name or short identity description (never blank).
        description: Optional identity details rendered after the name.
        wardrobe: Optional outfit text paired with this character.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    description: str = ""
    wardrobe: str = ""


class SceneRecord(BaseModel):
    """A normalized scene, ready for validation and rendering.

    Strings are already trimmed and missing values are empty strings.  The
    anchor tuple always has five entries; blank entries are empty slots.
    """

    model_config = ConfigDict(frozen=True)

    scene_heart: str = ""
    framing: Framing | Literal[""] = ""
    lens: Lens | Literal[""] = ""
    cast: tuple[CastMember, ...] = ()
    environment_anchors: AnchorSlots = ("", "", "", "", "")
    micro_details: tuple[str, ...] = ()
    mechanic_lock: str = ""
    focus_target: str = ""

    @property
    def filled_anchors(self) -> tuple[str, ...]:
        """Non-blank anchor slots in slot order."""
        return tuple(anchor for anchor in self.environment_anchors if anchor.strip())

    @property
    def filled_anchor_count(self) -> int:
        """Number of non-blank anchor slots."""
        return len(self.filled_anchors)


class Diagnostic(BaseModel):
    """One finding emitted by a rule.

    Attributes:
        severity: ``"hard"`` blocks compilation, ``"soft"`` is advisory.
        message: Human-readable text shown to the user.
        field: Scene field the finding refers to.
        rule_id: Identifier of the rule that produced it.
    """

    model_config = ConfigDict(frozen=True)

    severity: Severity
    message: str
    field: FieldId
    rule_id: str


class ValidationResult(BaseModel):
    """Outcome of running the rule set over one scene record."""

    model_config = ConfigDict(frozen=True)

    diagnostics: tuple[Diagnostic, ...] = ()
    can_compile: bool

    @property
    def errors(self) -> tuple[Diagnostic, ...]:
        """Hard diagnostics, in emission order."""
        return tuple(d for d in self.diagnostics if d.severity == "hard")

    @property
    def warnings(self) -> tuple[Diagnostic, ...]:
        """Soft diagnostics, in emission order."""
        return tuple(d for d in self.diagnostics if d.severity == "soft")


class CompileOk(BaseModel):
    """Successful compile: rendered prompt plus advisory warnings."""

    model_config = ConfigDict(frozen=True)

    status: Literal["ok"] = "ok"
    prompt: str
    warnings: tuple[Diagnostic, ...] = ()


class CompileBlocked(BaseModel):
    """Blocked compile: hard errors, plus soft warnings for context."""

    model_config = ConfigDict(frozen=True)

    status: Literal["blocked"] = "blocked"
    errors: tuple[Diagnostic, ...]
    warnings: tuple[Diagnostic, ...] = ()


CompileResult = Annotated[Union[CompileOk, CompileBlocked], Field(discriminator="status")]
