"""Template model.

A template is a reusable document definition: metadata, layout ordering,
style defaults, capability flags and its set of sections. ``metadata``,
``layout`` and ``capabilities`` may be missing (None) on templates read from
untrusted documents; validation reports them instead of the loader.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from profilegen.models.loading import from_mapping
from profilegen.models.sections import Section, SectionType


@dataclass
class SemanticVersion:
    major: int = 1
    minor: int = 0
    patch: int = 0

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    @classmethod
    def parse(cls, value: str) -> "SemanticVersion":
        """Parse ``"major.minor.patch"`` (missing parts default to 0).

        Raises:
            ValueError: If a part is not an integer
        """
        parts = [int(part) for part in value.strip().lstrip("v").split(".") if part]
        parts += [0] * (3 - len(parts))
        return cls(major=parts[0], minor=parts[1], patch=parts[2])


@dataclass
class AuthorInfo:
    name: str = ""
    url: str | None = None
    github_username: str | None = None


@dataclass
class TemplateMetadata:
    """Template identity.

    Attributes:
        id: Template identifier
        name: Display name
        version: Semantic version (a ``"1.2.0"`` string is accepted)
        category: minimal, professional, creative, developer, animated,
            data-driven, portfolio or academic
    """

    id: str
    name: str
    description: str = ""
    long_description: str | None = None
    category: str = "developer"
    tags: tuple[str, ...] = ()
    author: AuthorInfo = field(default_factory=AuthorInfo)
    version: SemanticVersion = field(default_factory=SemanticVersion)
    license: str | None = None
    thumbnail: str | None = None
    featured: bool = False
    premium: bool = False
    complexity: str = "beginner"
    estimated_setup_time: int = 5

    def __post_init__(self) -> None:
        if isinstance(self.version, str):
            self.version = SemanticVersion.parse(self.version)


@dataclass
class LayoutSlot:
    """Display position for a section, referenced by section id or type."""

    section_id: str
    required: bool = False
    order: int = 0
    grid_column: int | None = None
    grid_row: int | None = None


@dataclass
class TemplateLayout:
    direction: str = "vertical"
    slots: tuple[LayoutSlot, ...] = ()
    max_width: str = "lg"
    container_style: str = "centered"
    header_position: str = "top"
    footer_enabled: bool = False


@dataclass
class TemplateStyles:
    """Style defaults. Only ``default_theme`` is read by the render engine."""

    default_theme: str = "system"
    fonts: dict[str, Any] = field(default_factory=dict)
    themes: dict[str, Any] = field(default_factory=dict)
    spacing: dict[str, Any] = field(default_factory=dict)
    borders: dict[str, Any] = field(default_factory=dict)
    shadows: dict[str, Any] = field(default_factory=dict)
    animations: dict[str, Any] = field(default_factory=dict)


DEFAULT_SUPPORTED_SECTIONS: tuple[SectionType, ...] = (
    SectionType.HERO,
    SectionType.ABOUT,
    SectionType.TECH_STACK,
    SectionType.GITHUB_STATS,
    SectionType.PROJECTS,
    SectionType.SOCIALS,
    SectionType.CONTACT,
    SectionType.DIVIDER,
    SectionType.SPACER,
)


@dataclass
class TemplateCapabilities:
    """Declared feature and section support, used to gate validation.

    Attributes:
        supported_sections: Section types this template can render
        max_sections: Upper bound on sections (enabled and disabled)
        allow_custom_sections: Whether custom-markdown/html are allowed
    """

    supported_sections: tuple[SectionType, ...] = DEFAULT_SUPPORTED_SECTIONS
    max_sections: int = 20
    allow_custom_sections: bool = False
    allow_section_reordering: bool = True
    supports_animations: bool = True
    supports_gifs: bool = True
    supports_custom_fonts: bool = False
    supports_custom_colors: bool = True
    supports_background_image: bool = False
    supports_background_gradient: bool = False
    supports_github_stats: bool = True
    supports_spotify: bool = False
    supports_wakatime: bool = False
    supports_blog_feed: bool = False
    supports_markdown_export: bool = True
    supports_html_export: bool = True
    supports_pdf_export: bool = False
    supports_image_export: bool = False
    supports_dark_mode: bool = True
    supports_responsive_design: bool = True
    supports_a11y: bool = True
    supports_localization: bool = False


@dataclass
class TemplateDefaults:
    section_order: tuple[SectionType, ...] = ()
    default_enabled_sections: tuple[SectionType, ...] = ()
    section_configs: dict[str, dict[str, Any]] = field(default_factory=dict)


@dataclass
class Template:
    """Template definition plus its sections."""

    metadata: TemplateMetadata | None = None
    layout: TemplateLayout | None = None
    styles: TemplateStyles = field(default_factory=TemplateStyles)
    capabilities: TemplateCapabilities | None = None
    defaults: TemplateDefaults = field(default_factory=TemplateDefaults)
    sections: tuple[Section, ...] = ()

    @property
    def id(self) -> str:
        """Template id, or ``"unknown"`` when metadata is missing."""
        return self.metadata.id if self.metadata is not None else "unknown"

    def enabled_sections(self) -> list[Section]:
        return [section for section in self.sections if section.enabled]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Template":
        """Create a Template from a JSON/YAML mapping (camelCase or snake_case).

        Missing ``metadata``, ``layout`` or ``capabilities`` stay None.

        Raises:
            ValueError: If the mapping is malformed
        """
        return from_mapping(cls, data)
