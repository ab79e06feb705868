"""Field normalizers: turn raw scene input into a :class:`SceneRecord`.

Raw input usually arrives as JSON from the editor, with camelCase keys
(``sceneHeart``, ``environmentAnchors``...).  Snake_case keys are accepted
too, so Python callers can pass the same names the models use.

Normalization Rules
-------------------
- Strings are trimmed; absent or ``None`` values become ``""``.
- ``environment_anchors`` is padded with ``""`` or truncated to exactly
  five slots.  Slot order is never changed because slot index decides
  which anchors are "required".
- ``cast`` and ``micro_details`` keep their order; blank entries are dropped.
- ``framing`` and ``lens`` are lower-cased.

Normalizers never produce diagnostics.  Input whose *shape* is wrong (a
number where a list belongs, an unknown framing) raises
:class:`~scenecraft.core.errors.MalformedSceneInput`, because the editor can
never send it and the caller is at fault.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from .config import ANCHOR_SLOTS
from .errors import MalformedSceneInput
from .models import FRAMINGS, LENSES, CastMember, SceneRecord

logger = logging.getLogger(__name__)

# camelCase key used by the editor -> SceneRecord field name
_KEY_ALIASES = {
    "sceneHeart": "scene_heart",
    "environmentAnchors": "environment_anchors",
    "microDetails": "micro_details",
    "mechanicLock": "mechanic_lock",
    "focusTarget": "focus_target",
}


def normalize_text(value: Any, field_name: str) -> str:
    """Trim a string field, mapping ``None`` to ``""``.

    Args:
        value: Raw field value.
        field_name: Name used in the error message.

    Returns:
        The trimmed string.

    Raises:
        MalformedSceneInput: If the value is neither a string nor ``None``.
    """
    if value is None:
        return ""
    if not isinstance(value, str):
        raise MalformedSceneInput(f"{field_name} must be a string or null, got {type(value).__name__}")
    return value.strip()


def _normalize_sequence(value: Any, field_name: str) -> list[Any]:
    if value is None:
        return []
    # A bare string is a sequence too, but never a valid list field.
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, (list, tuple)):
        raise MalformedSceneInput(f"{field_name} must be a list, got {type(value).__name__}")
    return list(value)


def normalize_anchors(value: Any, slots: int = ANCHOR_SLOTS) -> tuple[str, ...]:
    """Pad or truncate environment anchors to a fixed number of slots.

    Args:
        value: Raw anchor list (or ``None``).
        slots: Number of positional slots to produce.

    Returns:
        Tuple of exactly ``slots`` trimmed strings, in input order.

    Examples:
        >>> normalize_anchors(["a", "b"])
        ('a', 'b', '', '', '')
    """
    raw = _normalize_sequence(value, "environment_anchors")
    if len(raw) > slots:
        logger.debug(f"Truncating {len(raw)} environment anchors to {slots} slots")

    anchors = [normalize_text(item, f"environment_anchors[{idx}]") for idx, item in enumerate(raw[:slots])]
    anchors.extend([""] * (slots - len(anchors)))
    return tuple(anchors)


def normalize_micro_details(value: Any) -> tuple[str, ...]:
    """Trim micro-details and drop blank entries, keeping order."""
    details = (
        normalize_text(item, f"micro_details[{idx}]")
        for idx, item in enumerate(_normalize_sequence(value, "micro_details"))
    )
    return tuple(detail for detail in details if detail)


def normalize_cast(value: Any) -> tuple[CastMember, ...]:
    """Build cast members from strings or mappings, dropping blank entries.

    A plain string is taken as the member's name.  A mapping may carry
    ``name``, ``description`` and ``wardrobe`` keys.  Entries whose name is
    blank after trimming are removed.
    """
    members: list[CastMember] = []
    for idx, item in enumerate(_normalize_sequence(value, "cast")):
        if isinstance(item, CastMember):
            item = item.model_dump()

        if item is None or isinstance(item, str):
            name = normalize_text(item, f"cast[{idx}]")
            description = wardrobe = ""
        elif isinstance(item, Mapping):
            name = normalize_text(item.get("name"), f"cast[{idx}].name")
            description = normalize_text(item.get("description"), f"cast[{idx}].description")
            wardrobe = normalize_text(item.get("wardrobe"), f"cast[{idx}].wardrobe")
        else:
            raise MalformedSceneInput(f"cast[{idx}] must be a string or an object, got {type(item).__name__}")

        if name:
            members.append(CastMember(name=name, description=description, wardrobe=wardrobe))
    return tuple(members)


def _normalize_choice(value: Any, field_name: str, allowed: tuple[str, ...]) -> str:
    choice = normalize_text(value, field_name).lower()
    if choice and choice not in allowed:
        raise MalformedSceneInput(f"{field_name} must be one of {', '.join(allowed)}; got '{choice}'")
    return choice


def _as_mapping(raw: Any) -> dict[str, Any]:
    if raw is None:
        return {}
    if isinstance(raw, BaseModel):
        return raw.model_dump()
    if not isinstance(raw, Mapping):
        raise MalformedSceneInput(f"Scene input must be a mapping, got {type(raw).__name__}")

    data: dict[str, Any] = {}
    for key, item in raw.items():
        data[_KEY_ALIASES.get(key, key)] = item
    return data


def normalize(raw: Any) -> SceneRecord:
    """Canonicalize raw scene input into a :class:`SceneRecord`.

    Args:
        raw: Mapping with camelCase or snake_case keys, a Pydantic model with
            the scene fields, or ``None`` for an empty scene.

    Returns:
        A new SceneRecord.  Normalizing an already-normalized record yields
        an equal record.

    Raises:
        MalformedSceneInput: If a field has the wrong shape.
    """
    data = _as_mapping(raw)

    return SceneRecord(
        scene_heart=normalize_text(data.get("scene_heart"), "scene_heart"),
        framing=_normalize_choice(data.get("framing"), "framing", FRAMINGS),
        lens=_normalize_choice(data.get("lens"), "lens", LENSES),
        cast=normalize_cast(data.get("cast")),
        environment_anchors=normalize_anchors(data.get("environment_anchors")),
        micro_details=normalize_micro_details(data.get("micro_details")),
        mechanic_lock=normalize_text(data.get("mechanic_lock"), "mechanic_lock"),
        focus_target=normalize_text(data.get("focus_target"), "focus_target"),
    )
