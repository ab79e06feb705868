"""Deterministic prompt rendering for validated scene records.

The renderer is a pure formatter: it never adds content that is not in the
record, apart from the fixed composition and depth-of-field phrases keyed by
``framing`` and ``lens``.  Identical records always render to byte-identical
text.

Section Order
-------------
Sections are emitted in a fixed order and only when their source field is
non-empty::

    Scene Heart
    Framing / Lens
    Cast
    Environment Anchors   (filled slots only, slot order)
    Micro-Details
    Mechanic Lock
    Focus Target

Output Modes
------------
``compact`` renders each section as ``LABEL:`` followed by its body.
``expanded`` renders each section under an ``== LABEL ==`` banner.  Both
modes share order and bodies; sections are separated by a blank line.

Usage
-----
::

    record = normalize({"sceneHeart": "A fox reads by candlelight", ...})
    text = render(record, output_mode="expanded")
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .config import OutputMode
from .engine import validate
from .errors import RenderPreconditionError
from .models import SceneRecord
from .rules import DEFAULT_RULES, Rule

logger = logging.getLogger(__name__)

OUTPUT_MODES: tuple[str, ...] = ("compact", "expanded")

# ---------------------------------------------------------------------------
# Fixed phrase tables.
# ---------------------------------------------------------------------------

FRAMING_COMPOSITIONS: dict[str, str] = {
    "tight": (
        "Tight close-up; eyes are the sharp focus; keep facial expression fully visible; "
        "simplified background; avoid awkward cropping of chin/forehead"
    ),
    "medium": (
        "Waist-up framing; hands visible if relevant; clear silhouette; "
        "environment present but secondary"
    ),
    "wide": (
        "Wide scene; full bodies plus environment; anchors clearly visible; readable action; "
        "foreground/midground/background separation"
    ),
}

LENS_DEPTHS: dict[str, str] = {
    "shallow": "Shallow depth of field; focus subject crisp, background softly blurred",
    "deep": "Deep depth of field; foreground through background held in sharp focus",
}


def _bullets(items: Sequence[str]) -> str:
    return "\n".join(f"- {item}" for item in items)


def _cast_lines(record: SceneRecord) -> list[str]:
    lines = []
    for idx, member in enumerate(record.cast, start=1):
        line = f"- Character {idx}: {member.name}"
        if member.description:
            line += f", {member.description}"
        if member.wardrobe:
            line += f" [wardrobe: {member.wardrobe}]"
        lines.append(line)
    return lines


def build_sections(record: SceneRecord) -> list[tuple[str, str]]:
    """Collect ``(label, body)`` pairs for every non-empty section.

    Args:
        record: Scene record to serialize.

    Returns:
        Sections in render order.
    """
    sections: list[tuple[str, str]] = []

    if record.scene_heart:
        sections.append(("SCENE HEART", record.scene_heart))

    optics = [
        text
        for text in (FRAMING_COMPOSITIONS.get(record.framing), LENS_DEPTHS.get(record.lens))
        if text
    ]
    if optics:
        sections.append(("FRAMING / LENS", "\n".join(optics)))

    if record.cast:
        sections.append(("CAST", "\n".join(_cast_lines(record))))

    if record.filled_anchors:
        sections.append(("ENVIRONMENT ANCHORS", _bullets(record.filled_anchors)))

    if record.micro_details:
        sections.append(("MICRO-DETAILS", _bullets(record.micro_details)))

    if record.mechanic_lock:
        sections.append(("MECHANIC LOCK", record.mechanic_lock))

    if record.focus_target:
        sections.append(("FOCUS TARGET", record.focus_target))

    return sections


def format_prompt(record: SceneRecord, output_mode: OutputMode = "compact") -> str:
    """Serialize a record into prompt text without checking validity.

    Callers must already know the record passes validation; use
    :func:`render` when that is not established.

    Args:
        record: Scene record to serialize.
        output_mode: ``"compact"`` or ``"expanded"``.

    Returns:
        Prompt text with sections separated by double newlines.

    Raises:
        ValueError: If ``output_mode`` is not a known mode.
    """
    if output_mode == "compact":
        blocks = [f"{label}:\n{body}" for label, body in build_sections(record)]
    elif output_mode == "expanded":
        blocks = [f"== {label} ==\n{body}" for label, body in build_sections(record)]
    else:
        raise ValueError(f"Unknown output mode: {output_mode}")

    return "\n\n".join(blocks)


def render(
    record: SceneRecord,
    *,
    output_mode: OutputMode = "compact",
    rules: Sequence[Rule] = DEFAULT_RULES,
) -> str:
    """Render a scene record that passes validation.

    Args:
        record: Scene record to serialize.
        output_mode: ``"compact"`` or ``"expanded"``.
        rules: Rule table the record must pass.

    Returns:
        The rendered prompt text.

    Raises:
        RenderPreconditionError: If the record has hard diagnostics.
    """
    result = validate(record, rules)
    if not result.can_compile:
        failed = ", ".join(d.rule_id for d in result.errors)
        raise RenderPreconditionError(f"Cannot render a scene that fails validation ({failed})")

    text = format_prompt(record, output_mode)
    logger.debug(f"Rendered {output_mode} prompt ({len(text)} characters)")
    return text
