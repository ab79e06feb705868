"""Compiler façade: normalize, validate and render a scene in one call.

::

    result = compile_scene({
        "sceneHeart": "A fox reads by candlelight",
        "environmentAnchors": ["worn armchair", "steaming mug", "rain window"],
    })
    if result.status == "ok":
        print(result.prompt)
    else:
        for error in result.errors:
            print(error.message)

Expected validation failures come back as a :class:`CompileBlocked` value.
Only internal defects (malformed input shape, a broken rule) raise, as
subclasses of :class:`~scenecraft.core.errors.CompilerDefect`.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from .config import OutputMode, config
from .engine import validate
from .models import CompileBlocked, CompileOk, CompileResult, ValidationResult
from .normalizers import normalize
from .renderer import format_prompt
from .rules import DEFAULT_RULES, Rule

logger = logging.getLogger(__name__)


def validate_scene(raw: Any, rules: Sequence[Rule] | None = None) -> ValidationResult:
    """Normalize and validate raw scene input without rendering.

    Used for live editor feedback, where only the diagnostics matter.
    """
    return validate(normalize(raw), rules if rules is not None else DEFAULT_RULES)


def compile_scene(
    raw: Any,
    *,
    output_mode: OutputMode | None = None,
    rules: Sequence[Rule] | None = None,
) -> CompileResult:
    """Compile raw scene input into a prompt or a list of blocking errors.

    Args:
        raw: Raw scene input (see :func:`~scenecraft.core.normalizers.normalize`).
        output_mode: ``"compact"`` or ``"expanded"``.  Defaults to
            ``config.default_output_mode``.
        rules: Rule table.  Defaults to :data:`~scenecraft.core.rules.DEFAULT_RULES`.

    Returns:
        :class:`CompileOk` with the prompt and soft warnings, or
        :class:`CompileBlocked` with hard errors and soft warnings.  The
        renderer is not called for a blocked scene.

    Raises:
        MalformedSceneInput: If the raw input has the wrong shape.
        RuleExecutionError: If a rule implementation fails.
    """
    record = normalize(raw)
    result = validate(record, rules if rules is not None else DEFAULT_RULES)

    if not result.can_compile:
        logger.info(
            f"Scene blocked: {len(result.errors)} error(s), {len(result.warnings)} warning(s)"
        )
        return CompileBlocked(errors=result.errors, warnings=result.warnings)

    prompt = format_prompt(record, output_mode or config.default_output_mode)
    logger.info(f"Scene compiled with {len(result.warnings)} warning(s)")
    return CompileOk(prompt=prompt, warnings=result.warnings)
