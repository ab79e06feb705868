"""Tests for scenecraft.core.renderer: deterministic prompt formatting."""

from __future__ import annotations

import pytest

from scenecraft.core.errors import RenderPreconditionError
from scenecraft.core.normalizers import normalize
from scenecraft.core.renderer import (
    FRAMING_COMPOSITIONS,
    LENS_DEPTHS,
    build_sections,
    format_prompt,
    render,
)

MINIMAL_COMPACT = (
    "SCENE HEART:\n"
    "A fox reads by candlelight\n"
    "\n"
    "ENVIRONMENT ANCHORS:\n"
    "- worn armchair\n"
    "- steaming mug\n"
    "- rain window"
)


class TestRender:
    """Public render entry point."""

    def test_minimal_compact_output(self, minimal_scene_input):
        """Only non-empty sections are rendered."""
        assert render(normalize(minimal_scene_input)) == MINIMAL_COMPACT

    def test_minimal_expanded_output(self, minimal_scene_input):
        text = render(normalize(minimal_scene_input), output_mode="expanded")
        assert text == (
            "== SCENE HEART ==\n"
            "A fox reads by candlelight\n"
            "\n"
            "== ENVIRONMENT ANCHORS ==\n"
            "- worn armchair\n"
            "- steaming mug\n"
            "- rain window"
        )

    def test_byte_identical_across_runs(self, rich_record):
        assert render(rich_record) == render(rich_record)
        assert render(rich_record, output_mode="expanded") == render(rich_record, output_mode="expanded")

    def test_invalid_record_raises(self, empty_record):
        """Rendering a blocked record is a programming error."""
        with pytest.raises(RenderPreconditionError, match="scene_heart_presence"):
            render(empty_record)

    def test_too_few_anchors_raises(self):
        record = normalize({"sceneHeart": "A fox", "environmentAnchors": ["lamp", "mug"]})
        with pytest.raises(RenderPreconditionError):
            render(record)


class TestSections:
    """Section order and content."""

    def test_section_order(self, rich_record):
        labels = [label for label, _ in build_sections(rich_record)]
        assert labels == [
            "SCENE HEART",
            "FRAMING / LENS",
            "CAST",
            "ENVIRONMENT ANCHORS",
            "MICRO-DETAILS",
            "MECHANIC LOCK",
            "FOCUS TARGET",
        ]

    def test_framing_and_lens_phrases(self, rich_record):
        sections = dict(build_sections(rich_record))
        assert sections["FRAMING / LENS"] == f"{FRAMING_COMPOSITIONS['medium']}\n{LENS_DEPTHS['shallow']}"

    def test_lens_without_framing(self, minimal_scene_input):
        record = normalize({**minimal_scene_input, "lens": "deep"})
        assert dict(build_sections(record))["FRAMING / LENS"] == LENS_DEPTHS["deep"]

    def test_cast_line(self, rich_record):
        sections = dict(build_sections(rich_record))
        assert sections["CAST"] == (
            "- Character 1: Fennel the fox, rust-red fur, round spectacles [wardrobe: moss-green cardigan]"
        )

    def test_anchors_keep_slot_order_and_skip_blanks(self):
        record = normalize({"sceneHeart": "A fox", "environmentAnchors": ["lamp", "", "mug", "rug", "chair"]})
        assert dict(build_sections(record))["ENVIRONMENT ANCHORS"] == "- lamp\n- mug\n- rug\n- chair"

    def test_renderer_adds_no_content_for_empty_fields(self, minimal_scene_input):
        text = render(normalize(minimal_scene_input))
        for label in ("CAST", "MICRO-DETAILS", "MECHANIC LOCK", "FOCUS TARGET", "FRAMING"):
            assert label not in text


class TestFormatPrompt:
    def test_unknown_mode_raises(self, rich_record):
        with pytest.raises(ValueError, match="Unknown output mode"):
            format_prompt(rich_record, "verbose")

    def test_modes_share_bodies(self, rich_record):
        compact = format_prompt(rich_record, "compact")
        expanded = format_prompt(rich_record, "expanded")
        for _, body in build_sections(rich_record):
            assert body in compact
            assert body in expanded
