"""Section renderers.

One pure function per section type turning ``(section, profile, context)``
into IR blocks. Renderers read their own section data first and fall back to
the equivalent profile data when it is empty. They never perform I/O and
never raise to their caller: the ``guarded`` wrapper converts any exception
into a SECTION_RENDER_FAILED error value.

Blocks are created through ``context.builder`` so that ids come from the
render's own id generator.
"""

import functools
import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from profilegen.engine.blocks import Block, SocialPlatformId
from profilegen.engine.errors import (
    RenderError,
    github_username_required,
    section_render_failed,
)
from profilegen.engine.results import RenderContext
from profilegen.models.profile import UserProfile
from profilegen.models.sections import Section, SectionType

logger = logging.getLogger(__name__)

WAVE_IMAGE_URL = (
    "https://user-images.githubusercontent.com/18350557/"
    "176309783-0785949b-9127-417c-8b55-ab5a4333674e.gif"
)
TECH_BADGE_COLOR = "#0969da"
DEFAULT_MAX_BLOG_POSTS = 5


@dataclass(frozen=True)
class SectionRenderResult:
    """Blocks for a rendered section, or the error that prevented it."""

    success: bool
    blocks: tuple[Block, ...] = ()
    error: RenderError | None = None

    @classmethod
    def ok(cls, blocks: Sequence[Block]) -> "SectionRenderResult":
        return cls(success=True, blocks=tuple(blocks))

    @classmethod
    def fail(cls, error: RenderError) -> "SectionRenderResult":
        return cls(success=False, error=error)


class SectionRenderFailure(Exception):
    """Raised inside a renderer to fail with a specific error value."""

    def __init__(self, error: RenderError) -> None:
        self.error = error
        super().__init__(error.message)


SectionRenderer = Callable[[Section, UserProfile, RenderContext], SectionRenderResult]
BlockProducer = Callable[[Section, UserProfile, RenderContext], list[Block]]


def guarded(fn: BlockProducer) -> SectionRenderer:
    """Wrap a block producer so that it always returns a SectionRenderResult."""

    @functools.wraps(fn)
    def wrapper(
        section: Section, profile: UserProfile, context: RenderContext
    ) -> SectionRenderResult:
        try:
            blocks = fn(section, profile, context)
        except SectionRenderFailure as failure:
            return SectionRenderResult.fail(failure.error)
        except Exception as e:
            logger.debug(
                "Renderer for %s failed on section %s: %s", section.type.value, section.id, e
            )
            return SectionRenderResult.fail(
                section_render_failed(section.id, section.type.value, str(e))
            )
        return SectionRenderResult.ok(blocks)

    return wrapper


def _require_github_username(section: Section, profile: UserProfile) -> str:
    """Resolve the GitHub username from section data, then the profile."""
    username = getattr(section.data, "username", "") or profile.github_username
    if not username:
        raise SectionRenderFailure(github_username_required(section.id, section.type.value))
    return username


def format_category_name(category: str) -> str:
    """Turn ``"dev-ops"`` into ``"Dev Ops"``."""
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), category.replace("-", " "))


def badge_logo(name: str) -> str:
    """Derive a badge logo slug from a technology name."""
    return re.sub(r"\s+", "", name.lower())


# =============================================================================
# Header and introduction
# =============================================================================


@guarded
def render_hero(section: Section, profile: UserProfile, context: RenderContext) -> list[Block]:
    """Render the hero header.

    ``{name}`` in the headline becomes the profile's display name and
    ``{username}`` its GitHub username.

    Args:
        section: Hero section
        profile: Profile supplying the name placeholders
        context: Render context holding the block builder

    Returns:
        Optional wave image, level 1 heading, optional subheadline, typing
        animation and tagline, in that order
    """
    b = context.builder
    data, config = section.data, section.config
    blocks: list[Block] = []

    headline = data.headline.replace("{name}", profile.display_name).replace(
        "{username}", profile.github_username
    )

    if data.show_wave_animation:
        blocks.append(b.image(WAVE_IMAGE_URL, "Wave", align="center", is_animated=True))

    blocks.append(b.heading(headline, 1, align="center"))

    if data.subheadline:
        blocks.append(b.heading(data.subheadline, 3, align="center"))

    if data.typing_texts:
        blocks.append(
            b.typing_animation(
                data.typing_texts,
                speed=config.typing_speed,
                delete_speed=config.typing_delete_speed,
                pause_time=config.typing_pause_time,
            )
        )

    if data.tagline:
        blocks.append(b.text(data.tagline, emphasis="italic", align="center"))

    return blocks


@guarded
def render_about(section: Section, profile: UserProfile, context: RenderContext) -> list[Block]:
    """Render the about text with avatar, highlights, focus and location (section, else profile)."""
    b = context.builder
    data, config = section.data, section.config
    blocks: list[Block] = []

    avatar_url = profile.github.user.avatar_url if profile.github else None
    if config.show_avatar and avatar_url:
        blocks.append(
            b.image(
                avatar_url,
                f"{profile.github_username}'s avatar",
                size=config.avatar_size,
                align="left" if config.avatar_position == "left" else "center",
            )
        )

    years = profile.professional.years_of_experience
    content = data.content.replace("{years}", str(years) if years is not None else "X")
    blocks.append(b.text(content))

    if data.highlights:
        blocks.append(b.spacer("sm"))
        blocks.append(
            b.list_block(
                [b.list_item(h, icon=config.highlight_icon) for h in data.highlights],
                list_type="unordered" if config.show_highlights_as_bullets else "none",
            )
        )

    if data.current_focus:
        blocks.append(b.spacer("sm"))
        blocks.append(b.text(f"🔭 **Currently:** {data.current_focus}"))

    location = data.location or profile.personal.location
    if location:
        blocks.append(b.text(f"📍 {location}"))

    return blocks


# =============================================================================
# Skills and GitHub
# =============================================================================


@guarded
def render_tech_stack(
    section: Section, profile: UserProfile, context: RenderContext
) -> list[Block]:
    """Render technology badges, grouped by category or as one centered group; grid otherwise.

    Items come from the section, else the profile's tech stack.
    """
    b = context.builder
    data, config = section.data, section.config
    items = data.items or profile.tech_stack.items
    blocks: list[Block] = []

    if config.display_style != "badges":
        blocks.append(b.grid([b.text(item.name) for item in items], columns=config.columns))
        return blocks

    if data.group_by_category and config.show_category_headers:
        categories: dict[str, list[Any]] = {}
        for item in items:
            categories.setdefault(item.category, []).append(item)

        for category, category_items in categories.items():
            blocks.append(b.heading(format_category_name(category), 4, align="left"))
            badges = [
                b.badge(
                    item.name,
                    logo=badge_logo(item.name),
                    style=config.badge_style,
                    color=TECH_BADGE_COLOR,
                )
                for item in category_items
            ]
            blocks.append(b.badge_group(badges, align="left", gap="sm"))
            blocks.append(b.spacer("sm"))
    else:
        badges = [
            b.badge(item.name, logo=badge_logo(item.name), style=config.badge_style)
            for item in items
        ]
        blocks.append(b.badge_group(badges, align="center"))

    return blocks


@guarded
def render_github_stats(
    section: Section, profile: UserProfile, context: RenderContext
) -> list[Block]:
    """Render one stats card per requested card type, in a row or a two-column grid."""
    username = _require_github_username(section, profile)
    b = context.builder
    data, config = section.data, section.config

    cards = [
        b.github_stats_card(
            username,
            card_type,
            theme=str(config.theme),
            show_icons=config.show_icons,
            hide_border=config.hide_border,
            include_all_commits=config.include_all_commits,
            count_private=config.count_private_contributions,
        )
        for card_type in data.cards
    ]

    if config.card_layout == "row":
        return [b.row(cards, gap="md", wrap=True)]
    return [b.grid(cards, columns=2)]


@guarded
def render_contributions(
    section: Section, profile: UserProfile, context: RenderContext
) -> list[Block]:
    """Render the contribution graph for the resolved GitHub username."""
    username = _require_github_username(section, profile)
    return [
        context.builder.contribution_graph(
            username,
            theme=str(section.config.theme),
            show_legend=section.data.show_legend,
        )
    ]


@guarded
def render_pinned_repos(
    section: Section, profile: UserProfile, context: RenderContext
) -> list[Block]:
    """Render pinned repositories as project cards in a two-column grid.

    Repository names listed in the section link to GitHub; otherwise the
    profile's pinned repos are used.
    """
    username = _require_github_username(section, profile)
    b = context.builder
    max_repos = section.data.max_repos

    cards: list[Block] = [
        b.project_card(name, "", repo_url=f"https://github.com/{username}/{name}")
        for name in section.data.repos[:max_repos]
    ]

    if not cards and profile.github is not None:
        for repo in profile.github.stats.pinned_repos[:max_repos]:
            cards.append(
                b.project_card(
                    repo.name,
                    repo.description or "",
                    repo_url=repo.html_url,
                    tech_stack=[repo.language] if repo.language else [],
                    stars=repo.stargazers_count,
                    forks=repo.forks_count,
                )
            )

    return [b.grid(cards, columns=2)]


# =============================================================================
# Work and history
# =============================================================================


@guarded
def render_projects(section: Section, profile: UserProfile, context: RenderContext) -> list[Block]:
    """Render project cards from the section, else the profile, as a grid or flat list."""
    b = context.builder
    data, config = section.data, section.config

    if data.items:
        projects = [
            {
                "name": p.name,
                "description": p.description,
                "repo_url": p.repo_url,
                "demo_url": p.demo_url,
                "tech_stack": p.tech_stack,
                "stars": p.stars,
                "forks": p.forks,
                "featured": p.featured,
            }
            for p in data.items
        ]
    else:
        projects = [
            {
                "name": p.name,
                "description": p.description,
                "repo_url": p.repo_url,
                "demo_url": p.demo_url,
                "tech_stack": p.technologies,
                "stars": (p.metrics or {}).get("stars"),
                "forks": (p.metrics or {}).get("forks"),
                "featured": p.featured,
            }
            for p in profile.projects.items
        ]

    if data.show_featured_only:
        projects = [p for p in projects if p["featured"]]
    if config.max_projects:
        projects = projects[: config.max_projects]

    cards = [b.project_card(**project) for project in projects]

    if config.display_style in ("cards", "grid"):
        return [b.grid(cards, columns=config.columns)]
    return list(cards)


@guarded
def render_experience(
    section: Section, profile: UserProfile, context: RenderContext
) -> list[Block]:
    """Render experience items (section, else profile), each followed by a small spacer."""
    b = context.builder
    blocks: list[Block] = []

    for exp in section.data.items or profile.professional.experience:
        blocks.append(
            b.experience_item(
                exp.company,
                exp.role,
                exp.start_date,
                end_date=exp.end_date,
                location=exp.location,
                description=exp.description,
                highlights=exp.highlights,
                technologies=exp.technologies,
            )
        )
        blocks.append(b.spacer("sm"))

    return blocks


@guarded
def render_education(
    section: Section, profile: UserProfile, context: RenderContext
) -> list[Block]:
    """Render education items (section, else profile), each followed by a small spacer."""
    b = context.builder
    blocks: list[Block] = []

    for edu in section.data.items or profile.professional.education:
        blocks.append(
            b.education_item(
                edu.institution,
                edu.degree,
                edu.start_date,
                end_date=edu.end_date,
                field=edu.field,
                gpa=edu.gpa,
                honors=edu.honors,
            )
        )
        blocks.append(b.spacer("sm"))

    return blocks


@guarded
def render_achievements(
    section: Section, profile: UserProfile, context: RenderContext
) -> list[Block]:
    """Render achievements as a grid when the display style is ``grid``, else flat."""
    b = context.builder
    config = section.config

    items = [
        b.achievement_item(
            item.title,
            description=item.description,
            date=item.date,
            issuer=item.issuer,
            icon=item.icon if isinstance(item.icon, str) else None,
            url=item.url,
        )
        for item in section.data.items
    ]

    if config.display_style == "grid":
        return [b.grid(items, columns=config.columns)]
    return list(items)


@guarded
def render_blog_posts(
    section: Section, profile: UserProfile, context: RenderContext
) -> list[Block]:
    """Render up to ``max_posts`` posts as columns of link, excerpt and date."""
    b = context.builder
    data, config = section.data, section.config
    max_posts = data.max_posts if data.max_posts is not None else DEFAULT_MAX_BLOG_POSTS
    blocks: list[Block] = []

    for post in data.items[:max_posts]:
        post_blocks: list[Block] = [b.link(post.url, post.title, external=True)]
        if config.show_excerpt and post.excerpt:
            post_blocks.append(b.text(post.excerpt))
        if config.show_date and post.date:
            post_blocks.append(b.text(post.date, emphasis="italic"))

        blocks.append(b.column(post_blocks))
        blocks.append(b.spacer("sm"))

    return blocks


# =============================================================================
# Contact and social
# =============================================================================


@guarded
def render_contact(section: Section, profile: UserProfile, context: RenderContext) -> list[Block]:
    """Render contact methods as a row of links (``minimal``) or a labelled list."""
    b = context.builder
    data, config = section.data, section.config
    blocks: list[Block] = []

    if data.headline:
        blocks.append(b.heading(data.headline, 3, align="center"))
    if data.description:
        blocks.append(b.text(data.description, align="center"))

    if config.display_style == "minimal":
        links = [
            b.link(method.value, method.label or method.type, external=True)
            for method in data.methods
        ]
        blocks.append(b.row(links, gap="md"))
    else:
        items = [b.list_item(f"**{method.type}:** {method.value}") for method in data.methods]
        blocks.append(b.list_block(items))

    return blocks


PLATFORM_IDS: dict[str, SocialPlatformId] = {
    "github": SocialPlatformId.GITHUB,
    "twitter": SocialPlatformId.TWITTER,
    "linkedin": SocialPlatformId.LINKEDIN,
    "instagram": SocialPlatformId.INSTAGRAM,
    "youtube": SocialPlatformId.YOUTUBE,
    "twitch": SocialPlatformId.TWITCH,
    "discord": SocialPlatformId.DISCORD,
    "email": SocialPlatformId.EMAIL,
    "website": SocialPlatformId.WEBSITE,
}


def map_platform(platform: str) -> SocialPlatformId:
    """Map a free-form platform name onto a known platform (``other`` when unknown)."""
    return PLATFORM_IDS.get(platform.lower(), SocialPlatformId.OTHER)


@guarded
def render_socials(section: Section, profile: UserProfile, context: RenderContext) -> list[Block]:
    """Render social links (section, else profile) as one centered social group."""
    b = context.builder
    config = section.config
    links = section.data.links or profile.social_links.links

    social_links = [
        b.social_link(
            map_platform(link.platform),
            link.url,
            username=link.username,
            label=link.label,
            show_icon=True,
            show_label=config.show_labels,
        )
        for link in links
    ]

    style = config.display_style if config.display_style in ("icons", "buttons") else "badges"
    return [b.social_group(social_links, style=style, align="center")]


# =============================================================================
# Utility sections
# =============================================================================


DIVIDER_STYLES = {
    "line": "solid",
    "dashed": "dashed",
    "dotted": "dotted",
    "gradient": "gradient",
    "wave": "wave",
    "none": "solid",
}

SPACER_HEIGHTS = {
    "0": "xs",
    "1": "xs",
    "2": "sm",
    "3": "sm",
    "4": "md",
    "5": "md",
    "6": "lg",
    "8": "lg",
    "10": "xl",
    "12": "xl",
    "16": "xl",
}


@guarded
def render_quote(section: Section, profile: UserProfile, context: RenderContext) -> list[Block]:
    """Render a single quote block."""
    data = section.data
    return [context.builder.quote(data.quote, author=data.author, source=data.source)]


@guarded
def render_divider(section: Section, profile: UserProfile, context: RenderContext) -> list[Block]:
    """Render a divider, mapping section styles onto divider styles."""
    return [
        context.builder.divider(
            style=DIVIDER_STYLES.get(section.data.style, "solid"),
            width=section.config.width,
        )
    ]


@guarded
def render_spacer(section: Section, profile: UserProfile, context: RenderContext) -> list[Block]:
    """Render a spacer sized from the section's spacing token."""
    return [context.builder.spacer(SPACER_HEIGHTS.get(str(section.data.height), "md"))]


@guarded
def render_custom_markdown(
    section: Section, profile: UserProfile, context: RenderContext
) -> list[Block]:
    """Render raw Markdown as a ``markdown`` custom block."""
    return [
        context.builder.custom(
            "markdown", {"content": section.data.markdown}, prefix="custom-md"
        )
    ]


@guarded
def render_custom_html(
    section: Section, profile: UserProfile, context: RenderContext
) -> list[Block]:
    """Render raw HTML as an ``html`` custom block."""
    data = section.data
    return [
        context.builder.custom(
            "html",
            {"content": data.html, "sanitize": data.sanitize},
            prefix="custom-html",
        )
    ]


# =============================================================================
# Integrations
# =============================================================================


@guarded
def render_spotify(section: Section, profile: UserProfile, context: RenderContext) -> list[Block]:
    """Render a ``spotify-<type>`` custom block for the embed."""
    data, config = section.data, section.config
    return [
        context.builder.custom(
            f"spotify-{data.type}",
            {
                "embed_url": data.embed_url,
                "theme": config.theme,
                "show_album_art": config.show_album_art,
                "compact": config.compact,
            },
            prefix="spotify",
        )
    ]


@guarded
def render_wakatime(section: Section, profile: UserProfile, context: RenderContext) -> list[Block]:
    """Render a ``wakatime-stats`` custom block.

    The username comes from the section, else the profile's Wakatime
    integration. Without one the section fails as recoverable.
    """
    data, config = section.data, section.config

    username = data.username or profile.integrations.wakatime.username
    if not username:
        raise SectionRenderFailure(
            section_render_failed(section.id, section.type.value, "Wakatime username required")
        )

    return [
        context.builder.custom(
            "wakatime-stats",
            {
                "username": username,
                "range": data.range,
                "show_languages": config.show_languages,
                "show_editors": config.show_editors,
                "layout": config.layout,
            },
            prefix="wakatime",
        )
    ]


# =============================================================================
# Default registration
# =============================================================================


DEFAULT_RENDERERS: dict[SectionType, SectionRenderer] = {
    SectionType.HERO: render_hero,
    SectionType.ABOUT: render_about,
    SectionType.TECH_STACK: render_tech_stack,
    SectionType.GITHUB_STATS: render_github_stats,
    SectionType.PROJECTS: render_projects,
    SectionType.EXPERIENCE: render_experience,
    SectionType.EDUCATION: render_education,
    SectionType.ACHIEVEMENTS: render_achievements,
    SectionType.BLOG_POSTS: render_blog_posts,
    SectionType.CONTACT: render_contact,
    SectionType.SOCIALS: render_socials,
    SectionType.QUOTE: render_quote,
    SectionType.DIVIDER: render_divider,
    SectionType.SPACER: render_spacer,
    SectionType.CUSTOM_MARKDOWN: render_custom_markdown,
    SectionType.CUSTOM_HTML: render_custom_html,
    SectionType.SPOTIFY: render_spotify,
    SectionType.WAKATIME: render_wakatime,
    SectionType.CONTRIBUTIONS: render_contributions,
    SectionType.PINNED_REPOS: render_pinned_repos,
}
