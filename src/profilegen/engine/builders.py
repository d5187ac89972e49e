"""Block builders.

One factory per block kind. Semantically required values are positional,
everything else is keyword-only with the documented defaults. Builders never
validate: they only stamp out well-formed block values with a fresh id.

Ids come from an ``IdGenerator``. The render pipeline creates one generator per
render so ids are deterministic and independent across calls. The module-level
functions share a process-wide default generator for ad-hoc use and tests.
"""

import threading
from collections.abc import Iterable, Sequence
from typing import Any

from profilegen.engine.blocks import (
    AchievementItemBlock,
    BadgeBlock,
    BadgeGroupBlock,
    Block,
    CardBlock,
    CodeBlock,
    ColumnBlock,
    ContributionGraphBlock,
    CustomBlock,
    DividerBlock,
    EducationItemBlock,
    ExperienceItemBlock,
    GitHubStatsCardBlock,
    GridBlock,
    HeadingBlock,
    ImageBlock,
    LinkBlock,
    ListBlock,
    ListItem,
    ParagraphBlock,
    ProjectCardBlock,
    QuoteBlock,
    RowBlock,
    SocialGroupBlock,
    SocialLinkBlock,
    SocialPlatformId,
    SpacerBlock,
    StatBlock,
    StatGroupBlock,
    TextBlock,
    TypingAnimationBlock,
)

DEFAULT_BADGE_COLOR = "#0969da"


class IdGenerator:
    """Monotonic, thread-safe block id source.

    Ids have the form ``{prefix}_{n}`` where ``n`` starts at 1.
    """

    def __init__(self) -> None:
        self._counter = 0
        self._lock = threading.Lock()

    def next_id(self, prefix: str = "block") -> str:
        """Return the next id for the given prefix."""
        with self._lock:
            self._counter += 1
            return f"{prefix}_{self._counter}"

    def reset(self) -> None:
        """Restart numbering at 1."""
        with self._lock:
            self._counter = 0

    @property
    def issued(self) -> int:
        """Number of ids handed out since creation or the last reset."""
        return self._counter


class BlockBuilder:
    """Block factories bound to a single ``IdGenerator``.

    Usage:
        builder = BlockBuilder()
        title = builder.heading("Hello", 1, align="center")
    """

    def __init__(self, ids: IdGenerator | None = None) -> None:
        """Initialize the builder.

        Args:
            ids: Id source (a fresh generator when None)
        """
        self.ids = ids or IdGenerator()

    def _id(self, prefix: str) -> str:
        return self.ids.next_id(prefix)

    # =========================================================================
    # Text content
    # =========================================================================

    def text(
        self,
        value: str,
        *,
        emphasis: str = "normal",
        align: str | None = None,
    ) -> TextBlock:
        return TextBlock(id=self._id("text"), value=value, emphasis=emphasis, align=align)

    def heading(
        self,
        value: str,
        level: int = 2,
        *,
        align: str | None = None,
    ) -> HeadingBlock:
        return HeadingBlock(id=self._id("heading"), value=value, level=level, align=align)

    def paragraph(
        self,
        content: Iterable[TextBlock | LinkBlock],
        *,
        align: str | None = None,
    ) -> ParagraphBlock:
        return ParagraphBlock(id=self._id("para"), content=tuple(content), align=align)

    def code(
        self,
        value: str,
        *,
        language: str | None = None,
        inline: bool = False,
    ) -> CodeBlock:
        return CodeBlock(id=self._id("code"), value=value, language=language, inline=inline)

    def quote(
        self,
        value: str,
        *,
        author: str | None = None,
        source: str | None = None,
    ) -> QuoteBlock:
        return QuoteBlock(id=self._id("quote"), value=value, author=author, source=source)

    def link(
        self,
        href: str,
        text: str,
        *,
        title: str | None = None,
        external: bool = True,
    ) -> LinkBlock:
        return LinkBlock(
            id=self._id("link"),
            href=href,
            text=text,
            title=title,
            external=external,
        )

    # =========================================================================
    # Media and badges
    # =========================================================================

    def image(
        self,
        src: str,
        alt: str,
        *,
        width: int | None = None,
        height: int | None = None,
        size: str | None = None,
        align: str | None = None,
        is_animated: bool | None = None,
        asset_id: str | None = None,
    ) -> ImageBlock:
        return ImageBlock(
            id=self._id("img"),
            src=src,
            alt=alt,
            width=width,
            height=height,
            size=size,
            align=align,
            is_animated=is_animated,
            asset_id=asset_id,
        )

    def badge(
        self,
        label: str,
        *,
        message: str | None = None,
        color: str | None = None,
        label_color: str | None = None,
        logo: str | None = None,
        logo_color: str | None = None,
        style: str | None = None,
        link: str | None = None,
    ) -> BadgeBlock:
        """Create a badge.

        ``color`` and ``style`` fall back to their defaults when None so that
        optional section config values can be passed straight through.
        """
        return BadgeBlock(
            id=self._id("badge"),
            label=label,
            message=message,
            color=color or DEFAULT_BADGE_COLOR,
            label_color=label_color,
            logo=logo,
            logo_color=logo_color,
            style=style or "for-the-badge",
            link=link,
        )

    def badge_group(
        self,
        badges: Iterable[BadgeBlock],
        *,
        align: str = "center",
        gap: str = "md",
    ) -> BadgeGroupBlock:
        return BadgeGroupBlock(
            id=self._id("badge-group"),
            badges=tuple(badges),
            align=align,
            gap=gap,
        )

    # =========================================================================
    # Lists and layout
    # =========================================================================

    @staticmethod
    def list_item(
        content: str | Block,
        *,
        icon: str | None = None,
        nested: Iterable[ListItem] = (),
    ) -> ListItem:
        """Create a list entry. List items carry no id."""
        return ListItem(content=content, icon=icon, nested=tuple(nested))

    def list_block(
        self,
        items: Iterable[ListItem],
        *,
        list_type: str = "unordered",
    ) -> ListBlock:
        return ListBlock(id=self._id("list"), items=tuple(items), list_type=list_type)

    def spacer(self, height: str = "md") -> SpacerBlock:
        return SpacerBlock(id=self._id("spacer"), height=height)

    def divider(self, *, style: str = "solid", width: str = "100%") -> DividerBlock:
        return DividerBlock(id=self._id("divider"), style=style, width=width)

    def row(
        self,
        children: Iterable[Block],
        *,
        align: str = "center",
        justify: str = "center",
        gap: str = "md",
        wrap: bool = True,
    ) -> RowBlock:
        return RowBlock(
            id=self._id("row"),
            children=tuple(children),
            align=align,
            justify=justify,
            gap=gap,
            wrap=wrap,
        )

    def column(self, children: Iterable[Block], *, span: int | None = None) -> ColumnBlock:
        return ColumnBlock(id=self._id("col"), children=tuple(children), span=span)

    def grid(
        self,
        children: Iterable[Block],
        *,
        columns: int | None = None,
        gap: str = "md",
    ) -> GridBlock:
        return GridBlock(
            id=self._id("grid"),
            children=tuple(children),
            columns=columns or 3,
            gap=gap,
        )

    # =========================================================================
    # Stats and social
    # =========================================================================

    def stat(
        self,
        label: str,
        value: str | int | float,
        *,
        icon: str | None = None,
        color: str | None = None,
        format: str | None = None,
    ) -> StatBlock:
        return StatBlock(
            id=self._id("stat"),
            label=label,
            value=value,
            icon=icon,
            color=color,
            format=format,
        )

    def stat_group(self, stats: Iterable[StatBlock], *, layout: str = "row") -> StatGroupBlock:
        return StatGroupBlock(id=self._id("stat-group"), stats=tuple(stats), layout=layout)

    def social_link(
        self,
        platform: SocialPlatformId,
        url: str,
        *,
        username: str | None = None,
        label: str | None = None,
        show_icon: bool = True,
        show_label: bool = True,
    ) -> SocialLinkBlock:
        return SocialLinkBlock(
            id=self._id("social"),
            platform=platform,
            url=url,
            username=username,
            label=label,
            show_icon=show_icon,
            show_label=show_label,
        )

    def social_group(
        self,
        links: Iterable[SocialLinkBlock],
        *,
        style: str = "badges",
        align: str = "center",
    ) -> SocialGroupBlock:
        return SocialGroupBlock(
            id=self._id("social-group"),
            links=tuple(links),
            style=style,
            align=align,
        )

    # =========================================================================
    # Asset-backed blocks
    # =========================================================================

    def typing_animation(
        self,
        texts: Sequence[str],
        *,
        speed: int | None = None,
        delete_speed: int | None = None,
        pause_time: int | None = None,
        loop: bool = True,
    ) -> TypingAnimationBlock:
        """Create a typing animation.

        Timing arguments left as None use 100/50/2000 ms.
        """
        return TypingAnimationBlock(
            id=self._id("typing"),
            texts=tuple(texts),
            speed=100 if speed is None else speed,
            delete_speed=50 if delete_speed is None else delete_speed,
            pause_time=2000 if pause_time is None else pause_time,
            loop=loop,
        )

    def github_stats_card(
        self,
        username: str,
        card_type: str,
        *,
        theme: str = "github",
        show_icons: bool = True,
        hide_border: bool = False,
        include_all_commits: bool = True,
        count_private: bool = True,
    ) -> GitHubStatsCardBlock:
        return GitHubStatsCardBlock(
            id=self._id("gh-stats"),
            username=username,
            card_type=card_type,
            theme=theme,
            show_icons=show_icons,
            hide_border=hide_border,
            include_all_commits=include_all_commits,
            count_private=count_private,
        )

    def contribution_graph(
        self,
        username: str,
        *,
        theme: str = "github",
        show_legend: bool = True,
    ) -> ContributionGraphBlock:
        return ContributionGraphBlock(
            id=self._id("contrib"),
            username=username,
            theme=theme,
            show_legend=show_legend,
        )

    # =========================================================================
    # Cards and timeline items
    # =========================================================================

    def card(
        self,
        title: str,
        *,
        subtitle: str | None = None,
        description: str | None = None,
        image: ImageBlock | None = None,
        badges: Iterable[BadgeBlock] = (),
        links: Iterable[LinkBlock] = (),
        footer: Iterable[Block] = (),
    ) -> CardBlock:
        return CardBlock(
            id=self._id("card"),
            title=title,
            subtitle=subtitle,
            description=description,
            image=image,
            badges=tuple(badges),
            links=tuple(links),
            footer=tuple(footer),
        )

    def project_card(
        self,
        name: str,
        description: str = "",
        *,
        repo_url: str | None = None,
        demo_url: str | None = None,
        image: ImageBlock | None = None,
        tech_stack: Iterable[str] = (),
        stars: int | None = None,
        forks: int | None = None,
        featured: bool = False,
    ) -> ProjectCardBlock:
        return ProjectCardBlock(
            id=self._id("project"),
            name=name,
            description=description,
            repo_url=repo_url,
            demo_url=demo_url,
            image=image,
            tech_stack=tuple(tech_stack),
            stats={"stars": stars, "forks": forks},
            featured=featured,
        )

    def experience_item(
        self,
        company: str,
        role: str,
        start_date: str,
        *,
        end_date: str | None = None,
        location: str | None = None,
        description: str | None = None,
        highlights: Iterable[str] | None = None,
        technologies: Iterable[str] | None = None,
        company_logo: ImageBlock | None = None,
    ) -> ExperienceItemBlock:
        """Create an experience entry; ``current`` is True when there is no end date."""
        return ExperienceItemBlock(
            id=self._id("exp"),
            company=company,
            role=role,
            start_date=start_date,
            end_date=end_date,
            current=end_date is None,
            location=location,
            description=description or "",
            highlights=tuple(highlights or ()),
            technologies=tuple(technologies or ()),
            company_logo=company_logo,
        )

    def education_item(
        self,
        institution: str,
        degree: str,
        start_date: str,
        *,
        end_date: str | None = None,
        field: str | None = None,
        gpa: str | None = None,
        honors: Iterable[str] | None = None,
        logo: ImageBlock | None = None,
    ) -> EducationItemBlock:
        return EducationItemBlock(
            id=self._id("edu"),
            institution=institution,
            degree=degree,
            start_date=start_date,
            end_date=end_date,
            field=field,
            gpa=gpa,
            honors=tuple(honors or ()),
            logo=logo,
        )

    def achievement_item(
        self,
        title: str,
        *,
        description: str | None = None,
        date: str | None = None,
        issuer: str | None = None,
        icon: str | None = None,
        url: str | None = None,
    ) -> AchievementItemBlock:
        return AchievementItemBlock(
            id=self._id("achievement"),
            title=title,
            description=description,
            date=date,
            issuer=issuer,
            icon=icon,
            url=url,
        )

    def custom(
        self,
        custom_type: str,
        data: dict[str, Any] | None = None,
        *,
        prefix: str = "custom",
    ) -> CustomBlock:
        return CustomBlock(id=self._id(prefix), custom_type=custom_type, data=dict(data or {}))


# =============================================================================
# Process-wide default builder
# =============================================================================

_default_ids = IdGenerator()
_default_builder = BlockBuilder(_default_ids)


def generate_block_id(prefix: str = "block") -> str:
    """Generate an id from the process-wide default generator."""
    return _default_ids.next_id(prefix)


def reset_block_ids() -> None:
    """Reset the process-wide default generator (primarily for testing)."""
    _default_ids.reset()


text = _default_builder.text
heading = _default_builder.heading
paragraph = _default_builder.paragraph
code = _default_builder.code
quote = _default_builder.quote
link = _default_builder.link
image = _default_builder.image
badge = _default_builder.badge
badge_group = _default_builder.badge_group
list_item = BlockBuilder.list_item
list_block = _default_builder.list_block
spacer = _default_builder.spacer
divider = _default_builder.divider
row = _default_builder.row
column = _default_builder.column
grid = _default_builder.grid
stat = _default_builder.stat
stat_group = _default_builder.stat_group
social_link = _default_builder.social_link
social_group = _default_builder.social_group
typing_animation = _default_builder.typing_animation
github_stats_card = _default_builder.github_stats_card
contribution_graph = _default_builder.contribution_graph
card = _default_builder.card
project_card = _default_builder.project_card
experience_item = _default_builder.experience_item
education_item = _default_builder.education_item
achievement_item = _default_builder.achievement_item
custom = _default_builder.custom
