"""Markdown summary of a render.

Renders a RenderOutput into a short human-readable report with Jinja2: template
identity, counters, one outline per rendered section and the warnings.
"""

import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from jinja2 import Environment, PackageLoader, select_autoescape

from profilegen.engine.blocks import Block, BlockKind
from profilegen.engine.results import RenderOutput
from profilegen.engine.walker import BlockVisitor, count_blocks

logger = logging.getLogger(__name__)

OUTLINE_TEXT_LIMIT = 40


def format_datetime(value: datetime | str | None) -> str:
    """Format a datetime (or ISO string) for display.

    Args:
        value: Datetime object or ISO string

    Returns:
        ``YYYY-MM-DD HH:MM:SS UTC``, the input when it cannot be parsed,
        or ``N/A``
    """
    if value is None:
        return "N/A"

    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return value

    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)

    return value.astimezone(UTC).strftime("%Y-%m-%d %H:%M:%S UTC")


def _clip(text: str) -> str:
    text = " ".join(text.split())
    if len(text) <= OUTLINE_TEXT_LIMIT:
        return text
    return text[: OUTLINE_TEXT_LIMIT - 1] + "…"


def _count(noun: str, items: tuple[Any, ...]) -> str:
    return f"{len(items)} {noun}{'' if len(items) == 1 else 's'}"


# One short label per block kind, used for section outlines
block_outline: BlockVisitor[str] = BlockVisitor(
    {
        BlockKind.TEXT: lambda b: f"text “{_clip(b.value)}”",
        BlockKind.HEADING: lambda b: f"h{b.level} “{_clip(b.value)}”",
        BlockKind.PARAGRAPH: lambda b: f"paragraph ({_count('part', b.content)})",
        BlockKind.CODE: lambda b: f"code ({b.language or 'plain'})",
        BlockKind.QUOTE: lambda b: f"quote “{_clip(b.value)}”",
        BlockKind.IMAGE: lambda b: f"image “{_clip(b.alt)}”",
        BlockKind.LINK: lambda b: f"link “{_clip(b.text)}”",
        BlockKind.BADGE: lambda b: f"badge {b.label}",
        BlockKind.BADGE_GROUP: lambda b: f"badges ({_count('badge', b.badges)})",
        BlockKind.LIST: lambda b: f"{b.list_type} list ({_count('item', b.items)})",
        BlockKind.SPACER: lambda b: f"spacer {b.height}",
        BlockKind.DIVIDER: lambda b: f"divider {b.style}",
        BlockKind.ROW: lambda b: f"row ({_count('child', b.children)})",
        BlockKind.COLUMN: lambda b: f"column ({_count('child', b.children)})",
        BlockKind.GRID: lambda b: f"grid {b.columns} cols ({_count('child', b.children)})",
        BlockKind.STAT: lambda b: f"stat {b.label}={b.value}",
        BlockKind.STAT_GROUP: lambda b: f"stats ({_count('stat', b.stats)})",
        BlockKind.SOCIAL_LINK: lambda b: f"social {b.platform.value}",
        BlockKind.SOCIAL_GROUP: lambda b: f"socials ({_count('link', b.links)})",
        BlockKind.TYPING_ANIMATION: lambda b: f"typing ({_count('line', b.texts)})",
        BlockKind.GITHUB_STATS_CARD: lambda b: f"github {b.card_type} card @{b.username}",
        BlockKind.CONTRIBUTION_GRAPH: lambda b: f"contribution graph @{b.username}",
        BlockKind.CARD: lambda b: f"card “{_clip(b.title)}”",
        BlockKind.PROJECT_CARD: lambda b: f"project {b.name}",
        BlockKind.EXPERIENCE_ITEM: lambda b: f"experience {b.role} @ {b.company}",
        BlockKind.EDUCATION_ITEM: lambda b: f"education {b.degree} @ {b.institution}",
        BlockKind.ACHIEVEMENT_ITEM: lambda b: f"achievement “{_clip(b.title)}”",
        BlockKind.CUSTOM: lambda b: f"custom {b.custom_type}",
    }
)


def describe_block(block: Block) -> str:
    """Short one-line description of a block."""
    return block_outline.visit(block)


class SummaryRenderer:
    """Renders a RenderOutput to a Markdown summary.

    Usage:
        renderer = SummaryRenderer()
        markdown = renderer.render(result.output)
    """

    def __init__(self) -> None:
        """Initialize the Jinja2 environment with package templates."""
        self._env = Environment(
            loader=PackageLoader("profilegen", "templates"),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

        self._env.filters["format_datetime"] = format_datetime
        self._env.filters["describe_block"] = describe_block

    def render(self, output: RenderOutput, template_name: str = "summary.md.j2") -> str:
        """Render a summary of a render output.

        Args:
            output: Successful render output
            template_name: Template file to use

        Returns:
            Rendered Markdown string

        Raises:
            ValueError: If the template is missing or fails to render
        """
        try:
            template = self._env.get_template(template_name)
        except Exception as e:
            logger.error("Failed to load template %s: %s", template_name, e)
            raise ValueError(f"Template not found: {template_name}") from e

        try:
            rendered = template.render(**self._build_context(output))
        except Exception as e:
            logger.error("Summary rendering failed: %s", e)
            raise ValueError(f"Summary rendering failed: {e}") from e

        logger.debug("Rendered summary (%d characters)", len(rendered))
        return rendered

    def _build_context(self, output: RenderOutput) -> dict[str, Any]:
        """Build the template rendering context."""
        metadata = output.metadata
        return {
            "context": output.context,
            "metadata": metadata,
            "sections": [
                {
                    "id": section.id,
                    "type": section.type.value,
                    "title": section.title,
                    "order": section.order,
                    "blocks": section.blocks,
                    "block_count": count_blocks(section.blocks),
                }
                for section in output.sections
            ],
            "total_blocks": sum(count_blocks(section.blocks) for section in output.sections),
            "warnings": metadata.warnings,
        }

    def render_to_file(self, output: RenderOutput, output_path: Path) -> Path:
        """Render a summary and write it to a file.

        Returns:
            Path to written file
        """
        content = self.render(output)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")
        logger.info("Wrote render summary to %s", output_path)

        return output_path
