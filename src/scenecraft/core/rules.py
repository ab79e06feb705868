"""Declarative rule set for scene validation.

Every rule is an entry in an ordered table rather than a branch inside the
validation engine.  An entry carries its identifier, severity, the field it
reports on and a ``check`` callable.  ``check`` takes a
:class:`~scenecraft.core.models.SceneRecord` and returns the messages it
wants to emit (usually zero or one).  The engine turns each message into a
:class:`~scenecraft.core.models.Diagnostic` using the entry's severity and
field.

Rules never look at each other's output, so they can be unit-tested one at
a time.  Table order is the order diagnostics are shown to the user.

Rule Table
----------
=============================  ========  ======================
Rule                           Severity  Field
=============================  ========  ======================
scene_heart_presence           hard      scene_heart
anchor_count                   hard      environment_anchors
anchor_slot_priority           soft      environment_anchors
mechanic_lock_shape            soft      mechanic_lock
focus_target_shape             soft      focus_target
micro_detail_richness          soft      micro_details
scene_heart_single_action      soft      scene_heart
anchor_specificity             soft      environment_anchors
=============================  ========  ======================

Only the two structural rules are hard.  The shape checks are heuristics
and stay soft; a heuristic that cannot decide must not block a compile.

Adding a Rule
-------------
Write a ``_check_*`` function returning a list of messages and append a
:class:`Rule` to the tuple built in :func:`build_rules`.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from functools import partial

from .config import ANCHOR_SLOTS, MIN_ANCHORS, REQUIRED_ANCHOR_SLOTS, SceneCraftConfig, config
from .errors import CompilerDefect
from .models import FieldId, SceneRecord, Severity

RuleCheck = Callable[[SceneRecord], Sequence[str]]


@dataclass(frozen=True)
class Rule:
    """One entry of the rule table."""

    rule_id: str
    severity: Severity
    field: FieldId
    check: RuleCheck
    description: str = ""


@dataclass(frozen=True)
class RuleSettings:
    """Tunable thresholds used by the soft rule checks.

    The anchor minimum is not here: it is the compile gate and stays at
    ``MIN_ANCHORS``.
    """

    min_micro_details: int = 3
    min_focus_target_words: int = 2

    @classmethod
    def from_config(cls, cfg: SceneCraftConfig) -> RuleSettings:
        return cls(
            min_micro_details=cfg.min_micro_details,
            min_focus_target_words=cfg.min_focus_target_words,
        )


# ---------------------------------------------------------------------------
# Heuristic vocabularies.
# ---------------------------------------------------------------------------

# Runs of terminal punctuation; "..." or "?!" count once.
_SENTENCE_END = re.compile(r"[.!?]+")

# Causal connectives and verbs that carry a cause into a visible effect.
_CAUSAL_CONNECTIVE = re.compile(
    r"(->|→|\b(cause[sd]?|causing|because|so that|due to|thanks to|results? in|resulting in"
    r"|sends?|sending|sent|makes?|making|made|forces?|forced|forcing"
    r"|push(es|ed|ing)?|pull(s|ed|ing)?|knocks?|knocked|tips?|tipped|lifts?|lifted"
    r"|drags?|dragged|tugs?|tugged|snaps?|snapped|spills?|spilled|scatters?|scattered"
    r"|splash(es|ed)?|topples?|toppled|shatters?|shattered|sets? off|triggers?|triggered)\b)",
    re.IGNORECASE,
)

_SEQUENCING_WORDS = re.compile(r"\b(then|after|next|before)\b", re.IGNORECASE)

_VAGUE_ANCHOR = re.compile(r"^(stuff|things|items|objects|misc|etc\.?)$", re.IGNORECASE)


def count_sentences(text: str) -> int:
    """Count sentences by runs of terminal punctuation.

    Text with no terminal punctuation at all counts as one sentence.
    """
    stripped = text.strip()
    if not stripped:
        return 0
    ends = _SENTENCE_END.findall(stripped)
    if not ends:
        return 1
    # Trailing text after the last mark is an unterminated sentence
    trailing = _SENTENCE_END.split(stripped)[-1].strip()
    return len(ends) + (1 if trailing else 0)


# ---------------------------------------------------------------------------
# Rule checks.
# ---------------------------------------------------------------------------


def _check_scene_heart_presence(record: SceneRecord) -> list[str]:
    if record.scene_heart:
        return []
    return ["Scene Heart is required."]


def _check_anchor_count(record: SceneRecord) -> list[str]:
    count = record.filled_anchor_count
    if count > ANCHOR_SLOTS:
        raise CompilerDefect(f"{count} filled anchors exceed the {ANCHOR_SLOTS} anchor slots")
    if count >= MIN_ANCHORS:
        return []
    missing = MIN_ANCHORS - count
    return [
        f"At least {MIN_ANCHORS} environment anchors are required "
        f"({count} provided, {missing} more needed)."
    ]


def _check_anchor_slot_priority(record: SceneRecord) -> list[str]:
    slots = record.environment_anchors
    blank_required = [idx + 1 for idx in range(REQUIRED_ANCHOR_SLOTS) if not slots[idx]]
    filled_optional = [
        idx + 1 for idx in range(REQUIRED_ANCHOR_SLOTS, len(slots)) if slots[idx]
    ]
    if not blank_required or not filled_optional:
        return []
    blank = ", ".join(str(n) for n in blank_required)
    filled = ", ".join(str(n) for n in filled_optional)
    return [
        f"Required anchor slot(s) {blank} are empty while optional slot(s) {filled} "
        f"are filled; consider moving anchors into the first {REQUIRED_ANCHOR_SLOTS} slots."
    ]


def _check_mechanic_lock_shape(record: SceneRecord) -> list[str]:
    lock = record.mechanic_lock
    if not lock:
        return [
            "No mechanic lock set; add one sentence describing a cause and its visible effect."
        ]

    messages = []
    if count_sentences(lock) > 1:
        messages.append("Mechanic lock should be a single sentence describing one cause and one effect.")
    elif _SEQUENCING_WORDS.search(lock):
        messages.append("Mechanic lock reads like a sequence of actions; keep it to one frozen moment.")
    if not _CAUSAL_CONNECTIVE.search(lock):
        messages.append("Mechanic lock may be missing a cause-and-effect link (e.g. 'X causes Y').")
    return messages


def _check_focus_target_shape(record: SceneRecord, *, min_words: int) -> list[str]:
    target = record.focus_target
    if not target:
        return ["No focus target set; name what must render sharp and what can stay secondary."]
    if len(target.split()) < min_words:
        return ["Focus target is very short; name the primary subject that must render sharp."]
    return []


def _check_micro_detail_richness(record: SceneRecord, *, min_details: int) -> list[str]:
    count = len(record.micro_details)
    if count >= min_details:
        return []
    return [f"Only {count} micro-detail(s) provided; the scene may read as sparse (aim for {min_details}+)."]


def _check_scene_heart_single_action(record: SceneRecord) -> list[str]:
    if record.scene_heart and _SEQUENCING_WORDS.search(record.scene_heart):
        return ["Scene heart may contain multi-action phrases (then/after/next/before)."]
    return []


def _check_anchor_specificity(record: SceneRecord) -> list[str]:
    if any(_VAGUE_ANCHOR.match(anchor) for anchor in record.filled_anchors):
        return ["Some anchors may be too vague; name concrete, visible objects."]
    return []


# ---------------------------------------------------------------------------
# Rule table.
# ---------------------------------------------------------------------------


def build_rules(settings: RuleSettings | None = None) -> tuple[Rule, ...]:
    """Build the ordered rule table for the given thresholds.

    Args:
        settings: Rule thresholds.  Defaults to values from the global config.

    Returns:
        Tuple of rules in display order.
    """
    settings = settings or RuleSettings.from_config(config)

    return (
        Rule(
            "scene_heart_presence",
            "hard",
            "scene_heart",
            _check_scene_heart_presence,
            "Scene heart must not be empty.",
        ),
        Rule(
            "anchor_count",
            "hard",
            "environment_anchors",
            _check_anchor_count,
            f"At least {MIN_ANCHORS} environment anchor slots must be filled.",
        ),
        Rule(
            "anchor_slot_priority",
            "soft",
            "environment_anchors",
            _check_anchor_slot_priority,
            "Required anchor slots should be filled before optional ones.",
        ),
        Rule(
            "mechanic_lock_shape",
            "soft",
            "mechanic_lock",
            _check_mechanic_lock_shape,
            "Mechanic lock should be one cause-and-effect sentence.",
        ),
        Rule(
            "focus_target_shape",
            "soft",
            "focus_target",
            partial(_check_focus_target_shape, min_words=settings.min_focus_target_words),
            "Focus target should name the sharp subject.",
        ),
        Rule(
            "micro_detail_richness",
            "soft",
            "micro_details",
            partial(_check_micro_detail_richness, min_details=settings.min_micro_details),
            f"At least {settings.min_micro_details} micro-details are recommended.",
        ),
        Rule(
            "scene_heart_single_action",
            "soft",
            "scene_heart",
            _check_scene_heart_single_action,
            "Scene heart should describe a single action.",
        ),
        Rule(
            "anchor_specificity",
            "soft",
            "environment_anchors",
            _check_anchor_specificity,
            "Anchors should be concrete objects.",
        ),
    )


DEFAULT_RULES: tuple[Rule, ...] = build_rules()
