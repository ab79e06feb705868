"""Interfaces to the compiler's external collaborators.

The compiler has no network or storage surface of its own.  Two neighbours
feed it or consume its output:

SuggestionProvider
    A language-model backed service that proposes candidate strings for
    one scene field at a time.  Each category returns a fixed number of
    candidates; :func:`parse_suggestions` checks a provider payload against
    those sizes before anything reaches a scene.  Accepted suggestions are
    ordinary text and go through the same rule set as anything a user
    typed.
ProjectStore
    Persists whole project documents.  Callers load a document, run
    :func:`~scenecraft.core.compiler.compile_scene` on the scene inside it,
    and save results themselves.  The compiler never touches the store.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal, Protocol

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import SuggestionFormatError

SuggestionCategory = Literal["focus_target", "anchors", "micro_details", "mechanic_lock"]


class SuggestionSet(BaseModel):
    """Base for fixed-size suggestion payloads (camelCase or snake_case keys)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class FocusTargetSuggestions(SuggestionSet):
    """Three focus target sentences."""

    focus_targets: list[str] = Field(..., alias="focusTargets", min_length=3, max_length=3)


class AnchorSuggestions(SuggestionSet):
    """Ten anchor candidates plus the five the provider recommends."""

    anchor_candidates: list[str] = Field(..., alias="anchorCandidates", min_length=10, max_length=10)
    recommended: list[str] = Field(..., min_length=5, max_length=5)


class MicroDetailSuggestions(SuggestionSet):
    """Twelve atmospheric micro-details."""

    micro_details: list[str] = Field(..., alias="microDetails", min_length=12, max_length=12)


class MechanicLockSuggestions(SuggestionSet):
    """Five single-sentence cause-and-effect locks."""

    mechanic_locks: list[str] = Field(..., alias="mechanicLocks", min_length=5, max_length=5)


SUGGESTION_SCHEMAS: dict[str, type[SuggestionSet]] = {
    "focus_target": FocusTargetSuggestions,
    "anchors": AnchorSuggestions,
    "micro_details": MicroDetailSuggestions,
    "mechanic_lock": MechanicLockSuggestions,
}


def parse_suggestions(category: SuggestionCategory, payload: Mapping[str, Any]) -> SuggestionSet:
    """Validate a suggestion provider payload for one category.

    Args:
        category: Which scene field the suggestions are for.
        payload: Decoded JSON returned by the provider.

    Returns:
        The matching suggestion model.

    Raises:
        SuggestionFormatError: If the category is unknown or the payload
            does not have the expected fields and sizes.
    """
    schema = SUGGESTION_SCHEMAS.get(category)
    if schema is None:
        raise SuggestionFormatError(f"Unknown suggestion category: {category}")
    try:
        return schema.model_validate(payload)
    except ValidationError as e:
        raise SuggestionFormatError(f"Invalid {category} suggestions: {e.error_count()} error(s)") from e


class SuggestionProvider(Protocol):
    """Anything that can propose candidate strings for a scene field."""

    def suggest(self, category: SuggestionCategory, context: Mapping[str, Any]) -> Mapping[str, Any]:
        """Return a raw payload for ``category`` given the current scene fields."""
        ...


class ProjectStore(Protocol):
    """Keyed persistence for project documents that embed scenes."""

    def load(self, project_id: str) -> Mapping[str, Any]: ...

    def save(self, project_id: str, document: Mapping[str, Any]) -> None: ...


def request_suggestions(
    provider: SuggestionProvider,
    category: SuggestionCategory,
    context: Mapping[str, Any],
) -> SuggestionSet:
    """Ask a provider for suggestions and validate the reply.

    Raises:
        SuggestionFormatError: If the reply does not match the category schema.
    """
    return parse_suggestions(category, provider.suggest(category, context))
