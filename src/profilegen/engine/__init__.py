"""Profilegen render engine.

Converts a Template plus a UserProfile into an intermediate representation
(IR) of typed blocks:
- Blocks / builders: The IR vocabulary and one factory per block kind
- Errors: Render error values with a recoverable flag
- Validation: Template, section and profile checks gating the render
- Registry: One renderer per section type, checked for completeness
- Pipeline: Orchestrates validation, ordering and section rendering
"""

from profilegen.engine.blocks import BLOCK_CLASSES, Block, BlockKind, SocialPlatformId
from profilegen.engine.builders import (
    BlockBuilder,
    IdGenerator,
    generate_block_id,
    reset_block_ids,
)
from profilegen.engine.errors import (
    ErrorCode,
    IncompleteRegistryError,
    RenderError,
    UnhandledSectionTypeError,
    ValidationIssue,
    is_recoverable,
    is_render_error,
)
from profilegen.engine.pipeline import (
    RenderHooks,
    RenderOptions,
    RenderPipeline,
    TemplateAnalysis,
    analyze_template,
    render,
    render_single_section,
    validate,
)
from profilegen.engine.registry import (
    SectionRendererRegistry,
    get_registry,
    register_default_renderers,
    render_section,
    reset_registry,
    to_rendered_section,
)
from profilegen.engine.results import (
    RenderContext,
    RenderedSection,
    RenderMetadata,
    RenderOutput,
    RenderResult,
    RenderWarning,
)
from profilegen.engine.section_renderers import SectionRenderResult
from profilegen.engine.validation import ValidationResult, validate_all
from profilegen.engine.walker import BlockVisitor, count_blocks, find_blocks, iter_blocks

__all__ = [
    "BLOCK_CLASSES",
    "Block",
    "BlockBuilder",
    "BlockKind",
    "BlockVisitor",
    "ErrorCode",
    "IdGenerator",
    "IncompleteRegistryError",
    "RenderContext",
    "RenderError",
    "RenderHooks",
    "RenderMetadata",
    "RenderOptions",
    "RenderOutput",
    "RenderPipeline",
    "RenderResult",
    "RenderWarning",
    "RenderedSection",
    "SectionRenderResult",
    "SectionRendererRegistry",
    "SocialPlatformId",
    "TemplateAnalysis",
    "UnhandledSectionTypeError",
    "ValidationIssue",
    "ValidationResult",
    "analyze_template",
    "count_blocks",
    "find_blocks",
    "generate_block_id",
    "get_registry",
    "is_recoverable",
    "is_render_error",
    "iter_blocks",
    "register_default_renderers",
    "render",
    "render_section",
    "render_single_section",
    "reset_block_ids",
    "reset_registry",
    "to_rendered_section",
    "validate",
    "validate_all",
]
