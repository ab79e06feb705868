"""Validation engine: run the rule table over a scene record."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .errors import RuleExecutionError
from .models import Diagnostic, SceneRecord, ValidationResult
from .rules import DEFAULT_RULES, Rule

logger = logging.getLogger(__name__)


def run_rule(rule: Rule, record: SceneRecord) -> list[Diagnostic]:
    """Run a single rule and wrap its messages as diagnostics.

    Args:
        rule: Rule table entry.
        record: Normalized scene record.

    Returns:
        Diagnostics emitted by the rule, in the order the rule returned them.

    Raises:
        RuleExecutionError: If the rule's check raises.  The original
            exception is chained as ``__cause__``.
    """
    try:
        messages = rule.check(record)
    except Exception as e:
        raise RuleExecutionError(rule.rule_id, str(e)) from e

    return [
        Diagnostic(severity=rule.severity, message=message, field=rule.field, rule_id=rule.rule_id)
        for message in messages
    ]


def validate(record: SceneRecord, rules: Sequence[Rule] = DEFAULT_RULES) -> ValidationResult:
    """Validate a scene record against the rule table.

    Diagnostics are concatenated in rule declaration order, never sorted by
    severity, so the same record always yields the same sequence.

    Args:
        record: Normalized scene record.
        rules: Ordered rule table.  Defaults to :data:`DEFAULT_RULES`.

    Returns:
        ValidationResult with ``can_compile`` set when no hard diagnostic
        was emitted.

    Raises:
        RuleExecutionError: If any rule implementation fails.
    """
    diagnostics: list[Diagnostic] = []
    for rule in rules:
        diagnostics.extend(run_rule(rule, record))

    can_compile = not any(d.severity == "hard" for d in diagnostics)
    logger.debug(
        f"Validated scene: {len(diagnostics)} diagnostic(s), can_compile={can_compile}"
    )
    return ValidationResult(diagnostics=tuple(diagnostics), can_compile=can_compile)
