"""Render pipeline orchestrator.

Turns ``(Template, UserProfile, RenderOptions)`` into a ``RenderResult``:

1. Build the render context (theme, locale, timestamp, per-render builder)
2. Validate template, sections and profile (unless skipped)
3. Order sections by layout slot
4. Render enabled sections through the registry
5. Collect metadata and warnings

The pipeline never raises to its caller. Failures come back as error values
inside the result; hooks run at fixed points and cannot abort the render.
"""

import logging
import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import Any

from profilegen.engine.builders import BlockBuilder, IdGenerator
from profilegen.engine.errors import RenderError, unknown_error
from profilegen.engine.registry import (
    SectionRendererRegistry,
    get_registry,
    render_section,
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
from profilegen.models.profile import UserProfile
from profilegen.models.sections import Section
from profilegen.models.template import Template

logger = logging.getLogger(__name__)

HOOK_FAILED = "HOOK_FAILED"


@dataclass
class RenderHooks:
    """Optional callbacks invoked at fixed points of a render.

    Attributes:
        on_before_render: Called with the RenderContext before validation
        on_section_rendered: Called with each RenderedSection, in order
        on_error: Called with each section RenderError, in order
        on_after_render: Called with the RenderOutput on success
    """

    on_before_render: Callable[[RenderContext], Any] | None = None
    on_section_rendered: Callable[[RenderedSection], Any] | None = None
    on_error: Callable[[RenderError], Any] | None = None
    on_after_render: Callable[[RenderOutput], Any] | None = None


@dataclass
class RenderOptions:
    """Options for controlling a render.

    Attributes:
        theme: Color scheme placed in the render context
        locale: Locale placed in the render context
        skip_validation: Skip the validation gate
        continue_on_error: Skip failed sections (as warnings) instead of failing
        max_workers: Render sections on a thread pool when greater than 1
        hooks: Lifecycle callbacks
    """

    theme: str = "system"
    locale: str = "en"
    skip_validation: bool = False
    continue_on_error: bool = True
    max_workers: int = 1
    hooks: RenderHooks = field(default_factory=RenderHooks)


@dataclass(frozen=True)
class TemplateAnalysis:
    """Section statistics for a template, computed without rendering."""

    total_sections: int
    enabled_sections: int
    section_types: tuple[str, ...]
    estimated_complexity: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "total_sections": self.total_sections,
            "enabled_sections": self.enabled_sections,
            "section_types": list(self.section_types),
            "estimated_complexity": self.estimated_complexity,
        }


def order_sections(template: Template) -> list[Section]:
    """Sort sections into display order.

    A section's position is the order of the layout slot naming its id, else
    the slot naming its type, else its own ``order``. The sort is stable.
    """
    slot_orders: dict[str, int] = {}
    if template.layout is not None:
        for slot in template.layout.slots:
            slot_orders.setdefault(slot.section_id, slot.order)

    def position(section: Section) -> int:
        if section.id in slot_orders:
            return slot_orders[section.id]
        if section.type.value in slot_orders:
            return slot_orders[section.type.value]
        return section.order

    return sorted(template.sections, key=position)


class RenderPipeline:
    """Renders templates against user profiles.

    Usage:
        pipeline = RenderPipeline()
        result = pipeline.run(template, profile, RenderOptions(theme="dark"))
    """

    def __init__(self, registry: SectionRendererRegistry | None = None) -> None:
        """Initialize the render pipeline.

        Args:
            registry: Section renderer registry (uses the global one if None)
        """
        self._registry = registry or get_registry()

    def run(
        self,
        template: Template,
        profile: UserProfile,
        options: RenderOptions | None = None,
    ) -> RenderResult:
        """Execute the full render.

        Args:
            template: Template to render
            profile: Profile to render against
            options: Render options (defaults if None)

        Returns:
            RenderResult with the output, or the errors that prevented it
        """
        options = options or RenderOptions()
        start = time.perf_counter()
        warnings: list[RenderWarning] = []

        context = RenderContext(
            template_id=template.id,
            theme=options.theme,
            locale=options.locale,
            timestamp=datetime.now(UTC).isoformat(),
            builder=BlockBuilder(IdGenerator()),
        )

        logger.info("Starting render of template %s", context.template_id)

        try:
            self._call_hook(options.hooks.on_before_render, context, "on_before_render", warnings)

            # Stage 1: Validation
            if not options.skip_validation:
                logger.debug("Stage 1: Validating template, sections and profile")
                validation = validate_all(template, template.sections, profile)
                if not validation.valid:
                    logger.warning(
                        "Validation failed: %s",
                        ", ".join(e.code.value for e in validation.errors),
                    )
                    return RenderResult.failed(validation.errors)

            # Stage 2: Ordering
            ordered = order_sections(template)

            # Stage 3: Section rendering
            logger.debug("Stage 3: Rendering %d sections", len(ordered))
            results = self._render_sections(ordered, profile, context, options.max_workers)

            rendered: list[RenderedSection] = []
            errors: list[RenderError] = []
            skipped = 0

            for index, section in enumerate(ordered):
                if not section.enabled:
                    logger.debug("Skipping disabled section %s", section.id)
                    skipped += 1
                    continue

                result = results[index]
                rendered_section = to_rendered_section(section, result, index)
                if rendered_section is not None:
                    rendered.append(rendered_section)
                    self._call_hook(
                        options.hooks.on_section_rendered,
                        rendered_section,
                        "on_section_rendered",
                        warnings,
                    )
                    continue

                error = result.error
                if error is None:
                    error = unknown_error()
                self._call_hook(options.hooks.on_error, error, "on_error", warnings)

                if options.continue_on_error:
                    logger.warning("Section %s skipped: %s", section.id, error.message)
                    warnings.append(RenderWarning.from_error(error, section.id))
                    skipped += 1
                else:
                    errors.append(error)

            if errors and not options.continue_on_error:
                logger.warning("Render failed with %d section error(s)", len(errors))
                return RenderResult.failed(errors)

            # Stage 4: Metadata
            metadata = RenderMetadata(
                template_id=template.id,
                template_name=template.metadata.name if template.metadata else "",
                template_version=str(template.metadata.version) if template.metadata else "",
                sections_rendered=len(rendered),
                sections_skipped=skipped,
                warnings=tuple(warnings),
                render_time=(time.perf_counter() - start) * 1000,
            )
            output = RenderOutput(context=context, sections=tuple(rendered), metadata=metadata)

            self._call_hook(options.hooks.on_after_render, output, "on_after_render", warnings)
            if len(warnings) > len(metadata.warnings):
                output = replace(output, metadata=replace(metadata, warnings=tuple(warnings)))

        except Exception as e:
            logger.error("Render failed: %s", e)
            return RenderResult.failed([unknown_error(e)])

        logger.info(
            "Render complete: %d rendered, %d skipped, %d warnings (%.1f ms)",
            output.metadata.sections_rendered,
            output.metadata.sections_skipped,
            len(output.metadata.warnings),
            output.metadata.render_time,
        )
        return RenderResult.succeeded(output)

    def _render_sections(
        self,
        ordered: list[Section],
        profile: UserProfile,
        context: RenderContext,
        max_workers: int,
    ) -> dict[int, SectionRenderResult]:
        """Render every enabled section, keyed by its position in ``ordered``."""
        enabled = [(index, section) for index, section in enumerate(ordered) if section.enabled]

        def render_one(section: Section) -> SectionRenderResult:
            return render_section(section, profile, context, self._registry)

        if max_workers > 1 and len(enabled) > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                outcomes = list(executor.map(render_one, [section for _, section in enabled]))
        else:
            outcomes = [render_one(section) for _, section in enabled]

        return {index: outcome for (index, _), outcome in zip(enabled, outcomes, strict=True)}

    @staticmethod
    def _call_hook(
        hook: Callable[[Any], Any] | None,
        argument: Any,
        name: str,
        warnings: list[RenderWarning],
    ) -> None:
        """Invoke a hook, turning its failure into a warning."""
        if hook is None:
            return
        try:
            hook(argument)
        except Exception as e:
            logger.warning("Hook %s failed: %s", name, e)
            warnings.append(
                RenderWarning(
                    code=HOOK_FAILED,
                    message=f"Hook {name} failed: {e}",
                    details={"hook": name},
                )
            )


# =============================================================================
# Convenience functions
# =============================================================================


def render(
    template: Template,
    profile: UserProfile,
    options: RenderOptions | None = None,
) -> RenderResult:
    """Render a template with the global registry."""
    return RenderPipeline().run(template, profile, options)


def validate(template: Template, profile: UserProfile) -> ValidationResult:
    """Validate a template and profile without rendering."""
    return validate_all(template, template.sections, profile)


def render_single_section(
    section: Section,
    profile: UserProfile,
    template: Template,
    options: RenderOptions | None = None,
) -> RenderResult:
    """Render one section in the context of a template (for previews)."""
    return render(replace(template, sections=(section,)), profile, options)


def analyze_template(template: Template) -> TemplateAnalysis:
    """Compute section statistics and an estimated complexity.

    Complexity is ``low`` up to 5 enabled sections, ``medium`` up to 10 and
    ``high`` above that.
    """
    enabled = template.enabled_sections()
    section_types = tuple(dict.fromkeys(section.type.value for section in template.sections))

    complexity = "low"
    if len(enabled) > 10:
        complexity = "high"
    elif len(enabled) > 5:
        complexity = "medium"

    return TemplateAnalysis(
        total_sections=len(template.sections),
        enabled_sections=len(enabled),
        section_types=section_types,
        estimated_complexity=complexity,
    )
