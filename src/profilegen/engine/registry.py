"""Section renderer registry.

Maps every section type to exactly one renderer. The default registry is
checked for completeness when it is built, so a section type added without a
renderer fails at startup rather than in the middle of a render.
"""

import logging
from typing import Any

from profilegen.engine.errors import IncompleteRegistryError, UnhandledSectionTypeError
from profilegen.engine.results import RenderContext, RenderedSection
from profilegen.engine.section_renderers import (
    DEFAULT_RENDERERS,
    SectionRenderer,
    SectionRenderResult,
)
from profilegen.models.profile import UserProfile
from profilegen.models.sections import Section, SectionType

logger = logging.getLogger(__name__)


class SectionRendererRegistry:
    """Registry of section renderers keyed by section type.

    Adding a section type:
        1. Add the value to SectionType and its data/config to SECTION_SCHEMAS
        2. Write a renderer in section_renderers and wrap it with ``guarded``
        3. Add it to DEFAULT_RENDERERS
        4. ``get_registry()`` fails loudly until step 3 is done
    """

    def __init__(self) -> None:
        """Initialize empty registry."""
        self._renderers: dict[SectionType, SectionRenderer] = {}

    # =========================================================================
    # Registration
    # =========================================================================

    def register(self, section_type: SectionType, renderer: SectionRenderer) -> None:
        """Register (or replace) the renderer for a section type.

        Args:
            section_type: Section type handled by the renderer
            renderer: Callable ``(section, profile, context) -> SectionRenderResult``
        """
        self._renderers[section_type] = renderer

    # =========================================================================
    # Retrieval
    # =========================================================================

    def get(self, section_type: SectionType) -> SectionRenderer:
        """Get the renderer for a section type.

        Raises:
            UnhandledSectionTypeError: If no renderer is registered
        """
        renderer = self._renderers.get(section_type)
        if renderer is None:
            raise UnhandledSectionTypeError(section_type.value)
        return renderer

    def __contains__(self, section_type: object) -> bool:
        return section_type in self._renderers

    # =========================================================================
    # Introspection
    # =========================================================================

    def missing_types(self) -> list[SectionType]:
        """Section types without a registered renderer, in declaration order."""
        return [t for t in SectionType if t not in self._renderers]

    def assert_complete(self) -> None:
        """Check that every section type has a renderer.

        Raises:
            IncompleteRegistryError: If any section type is missing
        """
        missing = self.missing_types()
        if missing:
            raise IncompleteRegistryError([t.value for t in missing])

    def list_types(self) -> list[str]:
        """Get list of registered section type values."""
        return [t.value for t in self._renderers]

    def get_metadata(self) -> dict[str, Any]:
        """Get registry metadata for logging and debugging."""
        return {
            "registered": self.list_types(),
            "missing": [t.value for t in self.missing_types()],
            "complete": not self.missing_types(),
        }


def register_default_renderers(
    registry: SectionRendererRegistry | None = None,
) -> SectionRendererRegistry:
    """Register the built-in renderer for every section type.

    Args:
        registry: Registry to populate (a new one if None)

    Returns:
        Populated SectionRendererRegistry
    """
    if registry is None:
        registry = SectionRendererRegistry()

    for section_type, renderer in DEFAULT_RENDERERS.items():
        registry.register(section_type, renderer)

    return registry


# Global registry instance
_registry: SectionRendererRegistry | None = None


def get_registry() -> SectionRendererRegistry:
    """Get the global registry, populated with the default renderers.

    Raises:
        IncompleteRegistryError: If a section type has no default renderer
    """
    global _registry
    if _registry is None:
        registry = register_default_renderers(SectionRendererRegistry())
        registry.assert_complete()
        logger.debug("Section renderer registry ready: %d types", len(registry.list_types()))
        _registry = registry
    return _registry


def reset_registry() -> None:
    """Reset the global registry (primarily for testing)."""
    global _registry
    _registry = None


# =============================================================================
# Dispatch
# =============================================================================


def render_section(
    section: Section,
    profile: UserProfile,
    context: RenderContext,
    registry: SectionRendererRegistry | None = None,
) -> SectionRenderResult:
    """Render one section with the renderer registered for its type.

    Raises:
        UnhandledSectionTypeError: If the registry has no renderer for the type
    """
    renderer = (registry or get_registry()).get(section.type)
    return renderer(section, profile, context)


def to_rendered_section(
    section: Section,
    result: SectionRenderResult,
    order: int,
) -> RenderedSection | None:
    """Wrap a successful result as a RenderedSection (None on failure)."""
    if not result.success:
        return None
    return RenderedSection(
        id=section.id,
        type=section.type,
        title=section.title,
        blocks=result.blocks,
        visible=section.enabled,
        order=order,
    )
