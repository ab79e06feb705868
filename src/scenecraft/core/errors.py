"""Internal defect types for the SceneCraft compiler.

Problems with a user's scene are never raised: they come back as
:class:`~scenecraft.core.models.Diagnostic` values.  The exceptions here mean
the compiler itself (or the code calling it) is broken, and callers should
treat them like any other programming error.
"""


class CompilerDefect(Exception):
    """Base class for faults inside the compiler pipeline."""

    pass


class MalformedSceneInput(CompilerDefect, TypeError):
    """Raw scene input has a shape the normalizers cannot interpret.

    Example: ``environmentAnchors`` given as a number, or a framing value
    outside the fixed set offered by the UI.
    """

    pass


class RuleExecutionError(CompilerDefect):
    """A rule implementation raised while inspecting a scene record.

    Attributes:
        rule_id: Identifier of the rule that failed.
    """

    def __init__(self, rule_id: str, message: str):
        super().__init__(f"Rule '{rule_id}' failed: {message}")
        self.rule_id = rule_id


class RenderPreconditionError(CompilerDefect):
    """The renderer was called with a record that does not pass validation."""

    pass


class SuggestionFormatError(ValueError):
    """A suggestion provider payload does not match its category's schema."""

    pass
