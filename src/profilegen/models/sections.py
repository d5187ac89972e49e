"""Section model.

A section is a typed, configurable content unit authored into a template.
Every section type pairs one data shape (content) with one config shape
(presentation). ``SECTION_SCHEMAS`` is the single table of those pairs and
``Section`` refuses to hold a mismatched pair.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from profilegen.models.loading import coerce, from_mapping, to_snake_case


class SectionType(Enum):
    """Closed set of section types."""

    HERO = "hero"
    ABOUT = "about"
    TECH_STACK = "tech-stack"
    GITHUB_STATS = "github-stats"
    PROJECTS = "projects"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    ACHIEVEMENTS = "achievements"
    BLOG_POSTS = "blog-posts"
    CONTACT = "contact"
    SOCIALS = "socials"
    QUOTE = "quote"
    DIVIDER = "divider"
    SPACER = "spacer"
    CUSTOM_MARKDOWN = "custom-markdown"
    CUSTOM_HTML = "custom-html"
    SPOTIFY = "spotify"
    WAKATIME = "wakatime"
    CONTRIBUTIONS = "contributions"
    PINNED_REPOS = "pinned-repos"


# =============================================================================
# Shared config
# =============================================================================


@dataclass
class VisibilityCondition:
    show_on_mobile: bool = True
    show_on_tablet: bool = True
    show_on_desktop: bool = True


@dataclass
class SectionSpacing:
    """Spacing tokens above and below a section."""

    top: str = "4"
    bottom: str = "4"


@dataclass
class SectionBaseConfig:
    """Presentation options shared by every section type.

    Attributes:
        visibility: Per-device visibility
        spacing: Spacing tokens above/below the section
        alignment: Text alignment (left, center, right)
        max_width: Width token (sm, md, lg, xl, full)
    """

    visibility: VisibilityCondition = field(default_factory=VisibilityCondition)
    spacing: SectionSpacing = field(default_factory=SectionSpacing)
    alignment: str = "center"
    max_width: str | None = "lg"


# =============================================================================
# Shared content items
# =============================================================================


@dataclass
class TechStackItem:
    """Technology entry.

    Attributes:
        name: Display name (also used to derive the badge logo)
        category: language, frontend, backend, database, devops, cloud,
            mobile, testing, tools or other
        icon: Icon name or asset mapping
    """

    name: str
    category: str = "other"
    icon: Any = None
    proficiency: str | None = None
    years_of_experience: float | None = None
    url: str | None = None
    featured: bool = False


@dataclass
class ProjectItem:
    name: str
    description: str = ""
    url: str | None = None
    repo_url: str | None = None
    demo_url: str | None = None
    image: Any = None
    tech_stack: tuple[str, ...] = ()
    status: str = "active"
    featured: bool = False
    stars: int | None = None
    forks: int | None = None


@dataclass
class ExperienceItem:
    """Job entry. ``end_date`` of None means the role is current."""

    company: str
    role: str
    start_date: str
    end_date: str | None = None
    location: str | None = None
    description: str = ""
    highlights: tuple[str, ...] = ()
    technologies: tuple[str, ...] = ()
    company_logo: Any = None
    company_url: str | None = None


@dataclass
class EducationItem:
    institution: str
    degree: str
    start_date: str
    end_date: str | None = None
    field: str | None = None
    gpa: str | None = None
    honors: tuple[str, ...] = ()
    logo: Any = None
    url: str | None = None


@dataclass
class AchievementItem:
    title: str
    description: str | None = None
    date: str | None = None
    issuer: str | None = None
    icon: Any = None
    url: str | None = None
    featured: bool = False


@dataclass
class BlogPostItem:
    title: str
    url: str
    date: str | None = None
    excerpt: str | None = None
    image: Any = None
    platform: str | None = None
    read_time: int | None = None
    likes: int | None = None


@dataclass
class ContactMethod:
    """Contact channel. ``type`` is email, phone, form, calendly or other."""

    type: str
    value: str
    label: str | None = None
    primary: bool = False


@dataclass
class SocialLink:
    platform: str
    url: str
    username: str | None = None
    label: str | None = None
    icon: Any = None


# =============================================================================
# Per-type data and config
# =============================================================================


@dataclass
class HeroSectionData:
    """Hero content. ``headline`` supports ``{name}`` and ``{username}``."""

    headline: str = ""
    subheadline: str | None = None
    tagline: str | None = None
    typing_texts: tuple[str, ...] = ()
    asset: Any = None
    background_asset: Any = None
    show_wave_animation: bool = False
    show_particles: bool = False


@dataclass
class HeroSectionConfig(SectionBaseConfig):
    layout: str = "centered"
    headline_size: str = "lg"
    animate_on_load: bool = False
    typing_speed: int | None = None
    typing_delete_speed: int | None = None
    typing_pause_time: int | None = None


@dataclass
class AboutSectionData:
    """About content. ``content`` supports the ``{years}`` placeholder."""

    content: str = ""
    highlights: tuple[str, ...] = ()
    current_focus: str | None = None
    fun_fact: str | None = None
    location: str | None = None
    pronouns: str | None = None
    avatar: Any = None


@dataclass
class AboutSectionConfig(SectionBaseConfig):
    show_avatar: bool = False
    avatar_position: str = "top"
    avatar_size: str = "md"
    show_highlights_as_bullets: bool = True
    highlight_icon: str | None = None


@dataclass
class TechStackSectionData:
    items: tuple[TechStackItem, ...] = ()
    group_by_category: bool = False


@dataclass
class TechStackSectionConfig(SectionBaseConfig):
    display_style: str = "badges"
    columns: int = 4
    show_proficiency: bool = False
    show_category_headers: bool = True
    icon_size: str = "md"
    badge_style: str | None = None
    animate_on_hover: bool = False


@dataclass
class GitHubStatsSectionData:
    username: str = ""
    cards: tuple[str, ...] = ("stats",)
    custom_stats: tuple[dict[str, Any], ...] = ()


@dataclass
class GitHubStatsSectionConfig(SectionBaseConfig):
    theme: str = "github"
    show_icons: bool = True
    include_all_commits: bool = True
    count_private_contributions: bool = True
    hide_border: bool = False
    card_layout: str = "row"
    card_size: str = "md"


@dataclass
class ProjectsSectionData:
    items: tuple[ProjectItem, ...] = ()
    show_featured_only: bool = False


@dataclass
class ProjectsSectionConfig(SectionBaseConfig):
    display_style: str = "cards"
    columns: int = 2
    show_tech_stack: bool = True
    show_status: bool = False
    show_stats: bool = True
    show_image: bool = False
    image_position: str = "top"
    max_projects: int | None = None


@dataclass
class ExperienceSectionData:
    items: tuple[ExperienceItem, ...] = ()


@dataclass
class ExperienceSectionConfig(SectionBaseConfig):
    display_style: str = "timeline"
    show_company_logo: bool = False
    show_technologies: bool = True
    date_format: str = "short"


@dataclass
class EducationSectionData:
    items: tuple[EducationItem, ...] = ()


@dataclass
class EducationSectionConfig(SectionBaseConfig):
    display_style: str = "timeline"
    show_logo: bool = False
    show_gpa: bool = False


@dataclass
class AchievementsSectionData:
    items: tuple[AchievementItem, ...] = ()


@dataclass
class AchievementsSectionConfig(SectionBaseConfig):
    display_style: str = "list"
    columns: int = 3
    show_date: bool = True
    show_issuer: bool = True


@dataclass
class BlogPostsSectionData:
    items: tuple[BlogPostItem, ...] = ()
    feed_url: str | None = None
    max_posts: int | None = None


@dataclass
class BlogPostsSectionConfig(SectionBaseConfig):
    display_style: str = "list"
    show_excerpt: bool = True
    show_date: bool = True
    show_image: bool = False
    show_read_time: bool = False
    show_platform_icon: bool = False


@dataclass
class ContactSectionData:
    headline: str | None = None
    description: str | None = None
    methods: tuple[ContactMethod, ...] = ()
    form_endpoint: str | None = None
    calendly_url: str | None = None


@dataclass
class ContactSectionConfig(SectionBaseConfig):
    display_style: str = "card"
    show_form: bool = False
    show_calendly: bool = False
    button_text: str = "Get in touch"
    button_style: str = "primary"


@dataclass
class SocialsSectionData:
    links: tuple[SocialLink, ...] = ()


@dataclass
class SocialsSectionConfig(SectionBaseConfig):
    display_style: str = "badges"
    icon_size: str = "md"
    show_labels: bool = True
    color_mode: str = "brand"
    custom_color: str | None = None
    hover_effect: str = "none"


@dataclass
class QuoteSectionData:
    quote: str = ""
    author: str | None = None
    source: str | None = None


@dataclass
class QuoteSectionConfig(SectionBaseConfig):
    style: str = "simple"
    show_quotation_marks: bool = True
    font_size: str = "md"
    italic: bool = True


@dataclass
class DividerSectionData:
    """Divider style: line, dashed, dotted, gradient, wave or none."""

    style: str = "line"


@dataclass
class DividerSectionConfig(SectionBaseConfig):
    color: str | None = None
    thickness: int = 1
    width: str = "100%"


@dataclass
class SpacerSectionData:
    """Spacer height as a spacing token ("0" through "16")."""

    height: str | int = "4"


@dataclass
class CustomMarkdownSectionData:
    markdown: str = ""
    sanitize: bool = True


@dataclass
class CustomHtmlSectionData:
    html: str = ""
    sanitize: bool = True
    allow_scripts: bool = False


@dataclass
class SpotifySectionData:
    """Spotify widget. ``type`` is now-playing, top-tracks or recently-played."""

    type: str = "now-playing"
    embed_url: str | None = None


@dataclass
class SpotifySectionConfig(SectionBaseConfig):
    theme: str = "dark"
    show_album_art: bool = True
    compact: bool = False


@dataclass
class WakatimeSectionData:
    username: str = ""
    range: str = "last_7_days"


@dataclass
class WakatimeSectionConfig(SectionBaseConfig):
    layout: str = "default"
    hide_title: bool = False
    hide_progress: bool = False
    show_languages: bool = True
    show_editors: bool = False
    show_os: bool = False


@dataclass
class ContributionsSectionData:
    username: str = ""
    show_legend: bool = True


@dataclass
class ContributionsSectionConfig(SectionBaseConfig):
    theme: str = "github"
    show_total: bool = True
    show_streak: bool = True


@dataclass
class PinnedReposSectionData:
    """Pinned repositories. An empty ``repos`` falls back to the profile's pins."""

    username: str = ""
    repos: tuple[str, ...] = ()
    max_repos: int = 6


@dataclass
class PinnedReposSectionConfig(SectionBaseConfig):
    theme: str = "github"
    show_owner: bool = False
    show_description: bool = True
    show_language: bool = True
    show_stars: bool = True
    show_forks: bool = True


SECTION_SCHEMAS: dict[SectionType, tuple[type, type[SectionBaseConfig]]] = {
    SectionType.HERO: (HeroSectionData, HeroSectionConfig),
    SectionType.ABOUT: (AboutSectionData, AboutSectionConfig),
    SectionType.TECH_STACK: (TechStackSectionData, TechStackSectionConfig),
    SectionType.GITHUB_STATS: (GitHubStatsSectionData, GitHubStatsSectionConfig),
    SectionType.PROJECTS: (ProjectsSectionData, ProjectsSectionConfig),
    SectionType.EXPERIENCE: (ExperienceSectionData, ExperienceSectionConfig),
    SectionType.EDUCATION: (EducationSectionData, EducationSectionConfig),
    SectionType.ACHIEVEMENTS: (AchievementsSectionData, AchievementsSectionConfig),
    SectionType.BLOG_POSTS: (BlogPostsSectionData, BlogPostsSectionConfig),
    SectionType.CONTACT: (ContactSectionData, ContactSectionConfig),
    SectionType.SOCIALS: (SocialsSectionData, SocialsSectionConfig),
    SectionType.QUOTE: (QuoteSectionData, QuoteSectionConfig),
    SectionType.DIVIDER: (DividerSectionData, DividerSectionConfig),
    SectionType.SPACER: (SpacerSectionData, SectionBaseConfig),
    SectionType.CUSTOM_MARKDOWN: (CustomMarkdownSectionData, SectionBaseConfig),
    SectionType.CUSTOM_HTML: (CustomHtmlSectionData, SectionBaseConfig),
    SectionType.SPOTIFY: (SpotifySectionData, SpotifySectionConfig),
    SectionType.WAKATIME: (WakatimeSectionData, WakatimeSectionConfig),
    SectionType.CONTRIBUTIONS: (ContributionsSectionData, ContributionsSectionConfig),
    SectionType.PINNED_REPOS: (PinnedReposSectionData, PinnedReposSectionConfig),
}

GITHUB_SECTION_TYPES = frozenset(
    {SectionType.GITHUB_STATS, SectionType.CONTRIBUTIONS, SectionType.PINNED_REPOS}
)


# =============================================================================
# Section
# =============================================================================


@dataclass
class Section:
    """A typed section of a template.

    ``data`` and ``config`` default to the empty shapes for ``type``. Passing a
    data or config object of another section type raises ``ValueError``.

    Attributes:
        id: Section identifier, unique within a template
        type: Section type (a string value is accepted and parsed)
        enabled: Disabled sections are skipped during rendering
        order: Fallback display order when no layout slot matches
        title: Optional display title
        data: Section content
        config: Section presentation options
    """

    id: str
    type: SectionType
    enabled: bool = True
    order: int = 0
    title: str | None = None
    data: Any = None
    config: SectionBaseConfig | None = None

    def __post_init__(self) -> None:
        """Validate the data/config pairing."""
        if not isinstance(self.type, SectionType):
            self.type = SectionType(self.type)

        data_cls, config_cls = SECTION_SCHEMAS[self.type]

        if self.data is None:
            self.data = data_cls()
        if self.config is None:
            self.config = config_cls()

        if type(self.data) is not data_cls:
            raise ValueError(
                f"Section {self.id!r} of type {self.type.value!r} requires "
                f"{data_cls.__name__}, got {type(self.data).__name__}"
            )
        if type(self.config) is not config_cls:
            raise ValueError(
                f"Section {self.id!r} of type {self.type.value!r} requires "
                f"{config_cls.__name__}, got {type(self.config).__name__}"
            )

    @property
    def requires_github_username(self) -> bool:
        return self.type in GITHUB_SECTION_TYPES

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Section":
        """Create a Section from a document mapping.

        Args:
            raw: Mapping with ``id``, ``type`` and optional ``enabled``,
                ``order``, ``title``, ``data`` and ``config``

        Returns:
            Section instance

        Raises:
            ValueError: If the type is unknown or the payloads are malformed
        """
        normalized = {to_snake_case(str(k)): v for k, v in raw.items()}
        if "type" not in normalized or "id" not in normalized:
            raise ValueError("Section requires 'id' and 'type'")

        section_type = SectionType(normalized["type"])
        data_cls, config_cls = SECTION_SCHEMAS[section_type]

        enabled = normalized.get("enabled")
        order = normalized.get("order")

        return cls(
            id=coerce(str, normalized["id"], field="Section.id"),
            type=section_type,
            enabled=True if enabled is None else coerce(bool, enabled, field="Section.enabled"),
            order=0 if order is None else coerce(int, order, field="Section.order"),
            title=coerce(str | None, normalized.get("title"), field="Section.title"),
            data=from_mapping(data_cls, normalized.get("data") or {}),
            config=from_mapping(config_cls, normalized.get("config") or {}),
        )
