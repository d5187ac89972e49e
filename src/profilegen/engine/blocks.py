"""Intermediate representation (IR) blocks.

A rendered document is a tree of blocks. Every block shares a flat base record
(id, visible, metadata) and declares its ``kind`` at class level. Containers
(row, column, grid) hold an ordered tuple of child blocks; trees are built
bottom-up so they are always finite and acyclic.

Blocks carry semantic parameters only. Asset kinds (stats cards, contribution
graphs, typing animations) never contain a resolved provider URL.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, ClassVar


class BlockKind(Enum):
    """Closed set of IR block kinds."""

    TEXT = "text"
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    CODE = "code"
    QUOTE = "quote"
    IMAGE = "image"
    LINK = "link"
    BADGE = "badge"
    BADGE_GROUP = "badge-group"
    LIST = "list"
    SPACER = "spacer"
    DIVIDER = "divider"
    ROW = "row"
    COLUMN = "column"
    GRID = "grid"
    STAT = "stat"
    STAT_GROUP = "stat-group"
    SOCIAL_LINK = "social-link"
    SOCIAL_GROUP = "social-group"
    TYPING_ANIMATION = "typing-animation"
    GITHUB_STATS_CARD = "github-stats-card"
    CONTRIBUTION_GRAPH = "contribution-graph"
    CARD = "card"
    PROJECT_CARD = "project-card"
    EXPERIENCE_ITEM = "experience-item"
    EDUCATION_ITEM = "education-item"
    ACHIEVEMENT_ITEM = "achievement-item"
    CUSTOM = "custom"


class SocialPlatformId(Enum):
    """Platforms a social-link block can point at."""

    GITHUB = "github"
    TWITTER = "twitter"
    LINKEDIN = "linkedin"
    INSTAGRAM = "instagram"
    YOUTUBE = "youtube"
    TWITCH = "twitch"
    DISCORD = "discord"
    EMAIL = "email"
    WEBSITE = "website"
    OTHER = "other"


def _serialize(value: Any) -> Any:
    """Convert a block field value into a JSON-ready structure."""
    if isinstance(value, (Block, ListItem)):
        return value.to_dict()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [_serialize(v) for v in value]
    if isinstance(value, dict):
        return {k: _serialize(v) for k, v in value.items()}
    return value


# =============================================================================
# Base record
# =============================================================================


@dataclass(frozen=True, kw_only=True)
class Block:
    """Shared base record of every IR block.

    Attributes:
        id: Identifier unique within a single render
        visible: Whether the block should be painted
        metadata: Free-form annotations for downstream exporters
    """

    kind: ClassVar[BlockKind]

    id: str
    visible: bool = True
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization.

        Fields left as None are omitted so the output mirrors what was set.
        """
        data: dict[str, Any] = {
            "id": self.id,
            "kind": self.kind.value,
            "visible": self.visible,
        }
        for f in fields(self):
            if f.name in ("id", "visible", "metadata"):
                continue
            value = getattr(self, f.name)
            if value is None:
                continue
            data[f.name] = _serialize(value)
        if self.metadata:
            data["metadata"] = _serialize(self.metadata)
        return data


# =============================================================================
# Text content
# =============================================================================


@dataclass(frozen=True, kw_only=True)
class TextBlock(Block):
    kind: ClassVar[BlockKind] = BlockKind.TEXT

    value: str
    emphasis: str = "normal"
    align: str | None = None


@dataclass(frozen=True, kw_only=True)
class HeadingBlock(Block):
    kind: ClassVar[BlockKind] = BlockKind.HEADING

    value: str
    level: int = 2
    align: str | None = None


@dataclass(frozen=True, kw_only=True)
class LinkBlock(Block):
    kind: ClassVar[BlockKind] = BlockKind.LINK

    href: str
    text: str
    title: str | None = None
    external: bool = True


@dataclass(frozen=True, kw_only=True)
class ParagraphBlock(Block):
    """Inline run of text and link blocks."""

    kind: ClassVar[BlockKind] = BlockKind.PARAGRAPH

    content: tuple[TextBlock | LinkBlock, ...] = ()
    align: str | None = None


@dataclass(frozen=True, kw_only=True)
class CodeBlock(Block):
    kind: ClassVar[BlockKind] = BlockKind.CODE

    value: str
    language: str | None = None
    inline: bool = False


@dataclass(frozen=True, kw_only=True)
class QuoteBlock(Block):
    kind: ClassVar[BlockKind] = BlockKind.QUOTE

    value: str
    author: str | None = None
    source: str | None = None


# =============================================================================
# Media and badges
# =============================================================================


@dataclass(frozen=True, kw_only=True)
class ImageBlock(Block):
    """Image reference.

    Attributes:
        src: Image URL
        alt: Alternative text
        size: Size token (xs, sm, md, lg, xl, full, auto)
        is_animated: True for GIFs and other animated media
        asset_id: Identifier of a generated asset, if any
    """

    kind: ClassVar[BlockKind] = BlockKind.IMAGE

    src: str
    alt: str
    width: int | None = None
    height: int | None = None
    size: str | None = None
    align: str | None = None
    is_animated: bool | None = None
    asset_id: str | None = None


@dataclass(frozen=True, kw_only=True)
class BadgeBlock(Block):
    """Shields-style badge. Colors are hex strings including the ``#``."""

    kind: ClassVar[BlockKind] = BlockKind.BADGE

    label: str
    message: str | None = None
    color: str = "#0969da"
    label_color: str | None = None
    logo: str | None = None
    logo_color: str | None = None
    style: str = "for-the-badge"
    link: str | None = None


@dataclass(frozen=True, kw_only=True)
class BadgeGroupBlock(Block):
    kind: ClassVar[BlockKind] = BlockKind.BADGE_GROUP

    badges: tuple[BadgeBlock, ...] = ()
    align: str | None = "center"
    gap: str | None = "md"


# =============================================================================
# Lists and layout
# =============================================================================


@dataclass(frozen=True)
class ListItem:
    """Entry of a list block. Not a block itself: it has no id.

    Attributes:
        content: Plain string or a nested block
        icon: Optional icon/emoji shown before the entry
        nested: Sub-items
    """

    content: "str | Block"
    icon: str | None = None
    nested: tuple["ListItem", ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        data: dict[str, Any] = {"content": _serialize(self.content)}
        if self.icon is not None:
            data["icon"] = self.icon
        if self.nested:
            data["nested"] = [item.to_dict() for item in self.nested]
        return data


@dataclass(frozen=True, kw_only=True)
class ListBlock(Block):
    kind: ClassVar[BlockKind] = BlockKind.LIST

    items: tuple[ListItem, ...] = ()
    list_type: str = "unordered"


@dataclass(frozen=True, kw_only=True)
class SpacerBlock(Block):
    kind: ClassVar[BlockKind] = BlockKind.SPACER

    height: str = "md"


@dataclass(frozen=True, kw_only=True)
class DividerBlock(Block):
    kind: ClassVar[BlockKind] = BlockKind.DIVIDER

    style: str = "solid"
    width: str = "100%"


@dataclass(frozen=True, kw_only=True)
class RowBlock(Block):
    kind: ClassVar[BlockKind] = BlockKind.ROW

    children: tuple[Block, ...] = ()
    align: str | None = "center"
    justify: str | None = "center"
    gap: str | None = "md"
    wrap: bool | None = True


@dataclass(frozen=True, kw_only=True)
class ColumnBlock(Block):
    kind: ClassVar[BlockKind] = BlockKind.COLUMN

    children: tuple[Block, ...] = ()
    span: int | None = None


@dataclass(frozen=True, kw_only=True)
class GridBlock(Block):
    kind: ClassVar[BlockKind] = BlockKind.GRID

    children: tuple[Block, ...] = ()
    columns: int = 3
    gap: str | None = "md"


# =============================================================================
# Stats and social
# =============================================================================


@dataclass(frozen=True, kw_only=True)
class StatBlock(Block):
    kind: ClassVar[BlockKind] = BlockKind.STAT

    label: str
    value: str | int | float
    icon: str | None = None
    color: str | None = None
    format: str | None = None


@dataclass(frozen=True, kw_only=True)
class StatGroupBlock(Block):
    kind: ClassVar[BlockKind] = BlockKind.STAT_GROUP

    stats: tuple[StatBlock, ...] = ()
    layout: str = "row"


@dataclass(frozen=True, kw_only=True)
class SocialLinkBlock(Block):
    kind: ClassVar[BlockKind] = BlockKind.SOCIAL_LINK

    platform: SocialPlatformId
    url: str
    username: str | None = None
    label: str | None = None
    show_icon: bool = True
    show_label: bool = True


@dataclass(frozen=True, kw_only=True)
class SocialGroupBlock(Block):
    kind: ClassVar[BlockKind] = BlockKind.SOCIAL_GROUP

    links: tuple[SocialLinkBlock, ...] = ()
    style: str = "badges"
    align: str | None = "center"


# =============================================================================
# Asset-backed blocks (semantic parameters only)
# =============================================================================


@dataclass(frozen=True, kw_only=True)
class TypingAnimationBlock(Block):
    """Rotating typed text. Timings are in milliseconds."""

    kind: ClassVar[BlockKind] = BlockKind.TYPING_ANIMATION

    texts: tuple[str, ...] = ()
    speed: int = 100
    delete_speed: int = 50
    pause_time: int = 2000
    loop: bool = True


@dataclass(frozen=True, kw_only=True)
class GitHubStatsCardBlock(Block):
    kind: ClassVar[BlockKind] = BlockKind.GITHUB_STATS_CARD

    username: str
    card_type: str
    theme: str = "github"
    show_icons: bool = True
    hide_border: bool = False
    include_all_commits: bool = True
    count_private: bool = True


@dataclass(frozen=True, kw_only=True)
class ContributionGraphBlock(Block):
    kind: ClassVar[BlockKind] = BlockKind.CONTRIBUTION_GRAPH

    username: str
    theme: str = "github"
    show_legend: bool = True


# =============================================================================
# Cards and timeline items
# =============================================================================


@dataclass(frozen=True, kw_only=True)
class CardBlock(Block):
    kind: ClassVar[BlockKind] = BlockKind.CARD

    title: str
    subtitle: str | None = None
    description: str | None = None
    image: ImageBlock | None = None
    badges: tuple[BadgeBlock, ...] = ()
    links: tuple[LinkBlock, ...] = ()
    footer: tuple[Block, ...] = ()


@dataclass(frozen=True, kw_only=True)
class ProjectCardBlock(Block):
    """Project summary card.

    Attributes:
        stats: Mapping with optional ``stars`` and ``forks`` counts
    """

    kind: ClassVar[BlockKind] = BlockKind.PROJECT_CARD

    name: str
    description: str = ""
    repo_url: str | None = None
    demo_url: str | None = None
    image: ImageBlock | None = None
    tech_stack: tuple[str, ...] = ()
    stats: dict[str, int | None] = field(default_factory=dict)
    featured: bool = False


@dataclass(frozen=True, kw_only=True)
class ExperienceItemBlock(Block):
    kind: ClassVar[BlockKind] = BlockKind.EXPERIENCE_ITEM

    company: str
    role: str
    start_date: str
    end_date: str | None = None
    current: bool = True
    location: str | None = None
    description: str = ""
    highlights: tuple[str, ...] = ()
    technologies: tuple[str, ...] = ()
    company_logo: ImageBlock | None = None


@dataclass(frozen=True, kw_only=True)
class EducationItemBlock(Block):
    kind: ClassVar[BlockKind] = BlockKind.EDUCATION_ITEM

    institution: str
    degree: str
    start_date: str
    end_date: str | None = None
    field: str | None = None
    gpa: str | None = None
    honors: tuple[str, ...] = ()
    logo: ImageBlock | None = None


@dataclass(frozen=True, kw_only=True)
class AchievementItemBlock(Block):
    kind: ClassVar[BlockKind] = BlockKind.ACHIEVEMENT_ITEM

    title: str
    description: str | None = None
    date: str | None = None
    issuer: str | None = None
    icon: str | None = None
    url: str | None = None


@dataclass(frozen=True, kw_only=True)
class CustomBlock(Block):
    """Opaque payload handed to the exporter as-is (raw markdown, embeds)."""

    kind: ClassVar[BlockKind] = BlockKind.CUSTOM

    custom_type: str
    data: dict[str, Any] = field(default_factory=dict)


BLOCK_CLASSES: dict[BlockKind, type[Block]] = {
    cls.kind: cls
    for cls in (
        TextBlock,
        HeadingBlock,
        ParagraphBlock,
        CodeBlock,
        QuoteBlock,
        ImageBlock,
        LinkBlock,
        BadgeBlock,
        BadgeGroupBlock,
        ListBlock,
        SpacerBlock,
        DividerBlock,
        RowBlock,
        ColumnBlock,
        GridBlock,
        StatBlock,
        StatGroupBlock,
        SocialLinkBlock,
        SocialGroupBlock,
        TypingAnimationBlock,
        GitHubStatsCardBlock,
        ContributionGraphBlock,
        CardBlock,
        ProjectCardBlock,
        ExperienceItemBlock,
        EducationItemBlock,
        AchievementItemBlock,
        CustomBlock,
    )
}
