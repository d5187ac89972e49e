"""Unit tests for the Markdown render summary."""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from profilegen.engine.blocks import BlockKind
from profilegen.engine.builders import BlockBuilder
from profilegen.engine.pipeline import RenderOptions, render
from profilegen.engine.results import RenderOutput
from profilegen.models.profile import UserProfile
from profilegen.models.sections import Section, SectionType
from profilegen.models.template import Template
from profilegen.templates import SummaryRenderer, describe_block, format_datetime
from profilegen.templates.renderer import block_outline


@pytest.fixture
def output(template: Template, profile: UserProfile) -> RenderOutput:
    """Successful render of the sample template."""
    result = render(template, profile)
    assert result.output is not None
    return result.output


class TestFormatDatetime:
    """Tests for format_datetime filter."""

    def test_none(self) -> None:
        """None is shown as N/A."""
        assert format_datetime(None) == "N/A"

    def test_iso_string(self) -> None:
        """ISO strings are converted to UTC."""
        assert format_datetime("2026-03-01T12:30:00+02:00") == "2026-03-01 10:30:00 UTC"

    def test_naive_datetime_is_utc(self) -> None:
        """Naive datetimes are treated as UTC."""
        assert format_datetime(datetime(2026, 1, 2, 3, 4, 5)) == "2026-01-02 03:04:05 UTC"

    def test_aware_datetime(self) -> None:
        """Aware datetimes are converted to UTC."""
        value = datetime(2026, 1, 1, 0, 0, 0, tzinfo=timezone(timedelta(hours=-5)))

        assert format_datetime(value) == "2026-01-01 05:00:00 UTC"

    def test_unparsable_string(self) -> None:
        """Strings that are not ISO dates are returned unchanged."""
        assert format_datetime("yesterday") == "yesterday"


class TestDescribeBlock:
    """Tests for block outlines."""

    def test_outline_covers_every_kind(self) -> None:
        """The outline visitor was built with a handler per kind."""
        assert set(block_outline._handlers) == set(BlockKind)

    def test_labels(self) -> None:
        """Labels name the kind and a short detail."""
        b = BlockBuilder()

        assert describe_block(b.heading("Hello", 1)) == "h1 “Hello”"
        assert describe_block(b.badge_group([b.badge("a"), b.badge("b")])) == "badges (2 badges)"
        assert describe_block(b.grid([b.text("x")], columns=2)) == "grid 2 cols (1 child)"
        assert describe_block(b.custom("markdown")) == "custom markdown"

    def test_long_text_is_clipped(self) -> None:
        """Long values are cut to forty characters."""
        label = describe_block(BlockBuilder().text("word " * 20))

        assert label.startswith("text “word word")
        assert label.endswith("…”")
        assert len(label) == len("text “”") + 40


class TestSummaryRenderer:
    """Tests for SummaryRenderer."""

    def test_render_summary(self, output: RenderOutput) -> None:
        """The summary lists identity, counters, sections and outlines."""
        markdown = SummaryRenderer().render(output)

        assert markdown.startswith("# Render summary: Developer Basic")
        assert "| Template | `developer-basic` v1.2.0 |" in markdown
        assert "| Sections rendered | 3 |" in markdown
        assert "### 1. Hello (`hero`)" in markdown
        assert "### 2. stack-1 (`tech-stack`)" in markdown
        assert "- h1 “Hi, I'm Mona Lisa”" in markdown
        assert "## Warnings" not in markdown

    def test_summary_lists_warnings(
        self, make_template, empty_profile: UserProfile
    ) -> None:
        """Warnings appear with their code and section."""
        template = make_template([Section(id="stats", type=SectionType.GITHUB_STATS)])
        result = render(template, empty_profile, RenderOptions(skip_validation=True))

        markdown = SummaryRenderer().render(result.output)

        assert "_No sections rendered._" in markdown
        assert "## Warnings" in markdown
        assert "- **GITHUB_USERNAME_REQUIRED** (`stats`):" in markdown

    def test_missing_template(self, output: RenderOutput) -> None:
        """An unknown template name raises ValueError."""
        with pytest.raises(ValueError, match="Template not found"):
            SummaryRenderer().render(output, template_name="nope.md.j2")

    def test_render_to_file(self, output: RenderOutput, tmp_path: Path) -> None:
        """The summary is written to the given path."""
        path = tmp_path / "reports" / "summary.md"

        written = SummaryRenderer().render_to_file(output, path)

        assert written == path
        assert path.read_text(encoding="utf-8").startswith("# Render summary")
