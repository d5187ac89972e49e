"""Render context and render output records."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from profilegen.engine.blocks import Block
from profilegen.engine.builders import BlockBuilder
from profilegen.engine.errors import RenderError
from profilegen.models.sections import SectionType


@dataclass(frozen=True)
class RenderContext:
    """Read-only snapshot created once per render and passed to every renderer.

    Attributes:
        template_id: Id of the template being rendered
        theme: Color scheme (light, dark, system)
        locale: Locale tag
        timestamp: UTC ISO-8601 render start time
        builder: Block factory bound to this render's id generator
    """

    template_id: str
    theme: str
    locale: str
    timestamp: str
    builder: BlockBuilder = field(default_factory=BlockBuilder, compare=False, repr=False)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "template_id": self.template_id,
            "theme": self.theme,
            "locale": self.locale,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class RenderedSection:
    """A section turned into IR blocks.

    Attributes:
        order: Position of the section among the resolved, ordered sections
    """

    id: str
    type: SectionType
    blocks: tuple[Block, ...]
    visible: bool
    order: int
    title: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "type": self.type.value,
            "title": self.title,
            "blocks": [block.to_dict() for block in self.blocks],
            "visible": self.visible,
            "order": self.order,
        }


@dataclass(frozen=True)
class RenderWarning:
    """Non-fatal problem collected during a render."""

    code: str
    message: str
    section_id: str | None = None
    details: dict[str, Any] | None = None

    @classmethod
    def from_error(cls, error: RenderError, section_id: str | None = None) -> "RenderWarning":
        return cls(
            code=error.code.value,
            message=error.message,
            section_id=section_id,
            details={"recoverable": error.recoverable},
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "section_id": self.section_id,
            "details": self.details,
        }


@dataclass(frozen=True)
class RenderMetadata:
    """Render statistics.

    Attributes:
        template_version: ``major.minor.patch``
        render_time: Elapsed wall time in milliseconds
    """

    template_id: str
    template_name: str
    template_version: str
    sections_rendered: int
    sections_skipped: int
    warnings: tuple[RenderWarning, ...] = ()
    render_time: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "template_id": self.template_id,
            "template_name": self.template_name,
            "template_version": self.template_version,
            "sections_rendered": self.sections_rendered,
            "sections_skipped": self.sections_skipped,
            "warnings": [w.to_dict() for w in self.warnings],
            "render_time": round(self.render_time, 3),
        }


@dataclass(frozen=True)
class RenderOutput:
    context: RenderContext
    sections: tuple[RenderedSection, ...]
    metadata: RenderMetadata

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "context": self.context.to_dict(),
            "sections": [section.to_dict() for section in self.sections],
            "metadata": self.metadata.to_dict(),
        }


@dataclass(frozen=True)
class RenderResult:
    """Either ``success`` with an output, or failure with errors.

    Usage:
        result = render(template, profile)
        if result.success:
            use(result.output)
    """

    success: bool
    output: RenderOutput | None = None
    errors: tuple[RenderError, ...] = ()

    @classmethod
    def succeeded(cls, output: RenderOutput) -> "RenderResult":
        return cls(success=True, output=output)

    @classmethod
    def failed(cls, errors: Sequence[RenderError]) -> "RenderResult":
        return cls(success=False, errors=tuple(errors))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        if self.success and self.output is not None:
            return {"success": True, "output": self.output.to_dict()}
        return {"success": False, "errors": [e.to_dict() for e in self.errors]}
