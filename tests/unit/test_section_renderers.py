"""Unit tests for the per-type section renderers."""

import pytest

from profilegen.engine.blocks import (
    BadgeGroupBlock,
    BlockKind,
    ContributionGraphBlock,
    CustomBlock,
    GridBlock,
    HeadingBlock,
    ListBlock,
    ProjectCardBlock,
    RowBlock,
    SocialGroupBlock,
    SocialPlatformId,
)
from profilegen.engine.errors import ErrorCode
from profilegen.engine.results import RenderContext
from profilegen.engine.section_renderers import (
    DEFAULT_RENDERERS,
    SectionRenderResult,
    badge_logo,
    format_category_name,
    guarded,
    map_platform,
    render_about,
    render_blog_posts,
    render_contact,
    render_contributions,
    render_custom_html,
    render_custom_markdown,
    render_divider,
    render_experience,
    render_github_stats,
    render_hero,
    render_pinned_repos,
    render_projects,
    render_quote,
    render_socials,
    render_spacer,
    render_spotify,
    render_tech_stack,
    render_wakatime,
)
from profilegen.models.profile import UserProfile
from profilegen.models.sections import (
    AboutSectionData,
    BlogPostItem,
    BlogPostsSectionData,
    ContactMethod,
    ContactSectionConfig,
    ContactSectionData,
    CustomHtmlSectionData,
    CustomMarkdownSectionData,
    DividerSectionData,
    GitHubStatsSectionConfig,
    GitHubStatsSectionData,
    HeroSectionConfig,
    HeroSectionData,
    PinnedReposSectionData,
    ProjectItem,
    ProjectsSectionData,
    QuoteSectionData,
    Section,
    SectionType,
    SocialsSectionConfig,
    SpacerSectionData,
    SpotifySectionData,
    TechStackSectionConfig,
    TechStackSectionData,
    WakatimeSectionData,
)


def kinds(result: SectionRenderResult) -> list[BlockKind]:
    return [block.kind for block in result.blocks]


class TestHelpers:
    """Tests for renderer helper functions."""

    @pytest.mark.parametrize(
        ("category", "expected"),
        [
            ("language", "Language"),
            ("dev-ops", "Dev Ops"),
            ("machine learning", "Machine Learning"),
            ("iOS", "IOS"),
        ],
    )
    def test_format_category_name(self, category: str, expected: str) -> None:
        """Hyphens become spaces and each word starts upper-case."""
        assert format_category_name(category) == expected

    def test_badge_logo_strips_whitespace(self) -> None:
        """Logos are lower-case without spaces."""
        assert badge_logo("Type Script") == "typescript"
        assert badge_logo("Node JS ") == "nodejs"

    def test_map_platform(self) -> None:
        """Known platforms map directly, everything else is other."""
        assert map_platform("GitHub") is SocialPlatformId.GITHUB
        assert map_platform("dev.to") is SocialPlatformId.OTHER

    def test_guarded_converts_exceptions(self, context: RenderContext) -> None:
        """An exception inside a renderer becomes SECTION_RENDER_FAILED."""

        def explode(section, profile, ctx):
            raise KeyError("missing")

        section = Section(id="q", type=SectionType.QUOTE)

        result = guarded(explode)(section, UserProfile(), context)

        assert not result.success
        assert result.error.code is ErrorCode.SECTION_RENDER_FAILED
        assert result.error.recoverable is True
        assert result.error.section_id == "q"

    def test_every_section_type_has_a_renderer(self) -> None:
        """The default table covers every section type."""
        assert set(DEFAULT_RENDERERS) == set(SectionType)

    def test_renderers_are_documented(self) -> None:
        """Every registered renderer keeps its docstring through the guard."""
        undocumented = [t.value for t, fn in DEFAULT_RENDERERS.items() if not fn.__doc__]

        assert undocumented == []


class TestHeroRenderer:
    """Tests for render_hero."""

    def test_full_hero(self, profile: UserProfile, context: RenderContext) -> None:
        """Wave, headline, subheadline, typing and tagline in that order."""
        section = Section(
            id="hero",
            type=SectionType.HERO,
            data=HeroSectionData(
                headline="Hi, I'm {name} ({username}). {name}!",
                subheadline="Engineer",
                typing_texts=("Python", "Go"),
                tagline="Shipping",
                show_wave_animation=True,
            ),
            config=HeroSectionConfig(typing_speed=80),
        )

        result = render_hero(section, profile, context)

        assert result.success
        assert kinds(result) == [
            BlockKind.IMAGE,
            BlockKind.HEADING,
            BlockKind.HEADING,
            BlockKind.TYPING_ANIMATION,
            BlockKind.TEXT,
        ]
        headline = result.blocks[1]
        assert headline.value == "Hi, I'm Mona Lisa (octocat). Mona Lisa!"
        assert headline.level == 1
        assert result.blocks[2].level == 3
        assert result.blocks[3].speed == 80
        assert result.blocks[4].emphasis == "italic"

    def test_minimal_hero(self, empty_profile: UserProfile, context: RenderContext) -> None:
        """Only the headline is emitted when nothing else is set."""
        section = Section(id="hero", type=SectionType.HERO, data=HeroSectionData(headline="Hi"))

        result = render_hero(section, empty_profile, context)

        assert kinds(result) == [BlockKind.HEADING]


class TestAboutRenderer:
    """Tests for render_about."""

    def test_years_placeholder_and_location_fallback(
        self, profile: UserProfile, context: RenderContext
    ) -> None:
        """{years} uses the profile, location falls back to the profile."""
        section = Section(
            id="about",
            type=SectionType.ABOUT,
            data=AboutSectionData(
                content="{years} years in",
                highlights=("one", "two"),
                current_focus="IR",
            ),
        )

        result = render_about(section, profile, context)

        assert result.blocks[0].value == "8 years in"
        assert kinds(result) == [
            BlockKind.TEXT,
            BlockKind.SPACER,
            BlockKind.LIST,
            BlockKind.SPACER,
            BlockKind.TEXT,
            BlockKind.TEXT,
        ]
        assert result.blocks[-1].value == "📍 San Francisco"

    def test_unknown_years(self, empty_profile: UserProfile, context: RenderContext) -> None:
        """Missing years of experience render as X."""
        section = Section(
            id="about", type=SectionType.ABOUT, data=AboutSectionData(content="{years}+")
        )

        result = render_about(section, empty_profile, context)

        assert result.blocks[0].value == "X+"


class TestTechStackRenderer:
    """Tests for render_tech_stack."""

    def test_grouped_by_category(self, profile: UserProfile, context: RenderContext) -> None:
        """Grouped stacks emit heading, badges and spacer per category."""
        section = Section(
            id="stack",
            type=SectionType.TECH_STACK,
            data=TechStackSectionData(group_by_category=True),
        )

        result = render_tech_stack(section, profile, context)

        assert kinds(result) == [
            BlockKind.HEADING,
            BlockKind.BADGE_GROUP,
            BlockKind.SPACER,
            BlockKind.HEADING,
            BlockKind.BADGE_GROUP,
            BlockKind.SPACER,
        ]
        assert [b.value for b in result.blocks if isinstance(b, HeadingBlock)] == [
            "Language",
            "Devops",
        ]
        first_group = result.blocks[1]
        assert [badge.logo for badge in first_group.badges] == ["python", "typescript"]
        assert first_group.align == "left"

    def test_flat_badges(self, profile: UserProfile, context: RenderContext) -> None:
        """Ungrouped stacks emit one centered badge group."""
        section = Section(id="stack", type=SectionType.TECH_STACK)

        result = render_tech_stack(section, profile, context)

        assert len(result.blocks) == 1
        group = result.blocks[0]
        assert isinstance(group, BadgeGroupBlock)
        assert len(group.badges) == 3
        assert group.align == "center"

    def test_grid_style(self, profile: UserProfile, context: RenderContext) -> None:
        """Non-badge styles emit a grid of names."""
        section = Section(
            id="stack",
            type=SectionType.TECH_STACK,
            config=TechStackSectionConfig(display_style="grid", columns=2),
        )

        result = render_tech_stack(section, profile, context)

        grid = result.blocks[0]
        assert isinstance(grid, GridBlock)
        assert grid.columns == 2
        assert [child.value for child in grid.children] == ["Python", "Type Script", "Docker"]


class TestGitHubRenderers:
    """Tests for GitHub-backed renderers."""

    def test_stats_without_username_fails_unrecoverably(
        self, empty_profile: UserProfile, context: RenderContext
    ) -> None:
        """No username anywhere yields GITHUB_USERNAME_REQUIRED."""
        section = Section(id="stats", type=SectionType.GITHUB_STATS)

        result = render_github_stats(section, empty_profile, context)

        assert not result.success
        assert result.error.code is ErrorCode.GITHUB_USERNAME_REQUIRED
        assert result.error.recoverable is False

    def test_section_username_wins(self, profile: UserProfile, context: RenderContext) -> None:
        """The section's own username overrides the profile's."""
        section = Section(
            id="stats",
            type=SectionType.GITHUB_STATS,
            data=GitHubStatsSectionData(username="hubot", cards=("stats", "top-langs")),
        )

        result = render_github_stats(section, profile, context)

        row = result.blocks[0]
        assert isinstance(row, RowBlock)
        assert [card.username for card in row.children] == ["hubot", "hubot"]
        assert [card.card_type for card in row.children] == ["stats", "top-langs"]

    def test_stats_grid_layout(self, profile: UserProfile, context: RenderContext) -> None:
        """Non-row layouts put the cards in a two-column grid."""
        section = Section(
            id="stats",
            type=SectionType.GITHUB_STATS,
            config=GitHubStatsSectionConfig(card_layout="grid", hide_border=True),
        )

        result = render_github_stats(section, profile, context)

        grid = result.blocks[0]
        assert isinstance(grid, GridBlock)
        assert grid.columns == 2
        assert grid.children[0].hide_border is True

    def test_contributions(self, profile: UserProfile, context: RenderContext) -> None:
        """Contributions render one graph for the profile's username."""
        section = Section(id="graph", type=SectionType.CONTRIBUTIONS)

        result = render_contributions(section, profile, context)

        graph = result.blocks[0]
        assert isinstance(graph, ContributionGraphBlock)
        assert graph.username == "octocat"

    def test_pinned_repos_explicit(self, profile: UserProfile, context: RenderContext) -> None:
        """Named repos become cards linking to the user's repositories."""
        section = Section(
            id="pins",
            type=SectionType.PINNED_REPOS,
            data=PinnedReposSectionData(repos=("a", "b", "c"), max_repos=2),
        )

        result = render_pinned_repos(section, profile, context)

        cards = result.blocks[0].children
        assert [card.repo_url for card in cards] == [
            "https://github.com/octocat/a",
            "https://github.com/octocat/b",
        ]

    def test_pinned_repos_fall_back_to_profile(
        self, profile: UserProfile, context: RenderContext
    ) -> None:
        """Without named repos the profile's pins are used."""
        section = Section(id="pins", type=SectionType.PINNED_REPOS)

        result = render_pinned_repos(section, profile, context)

        cards = result.blocks[0].children
        assert [card.name for card in cards] == ["hello-world", "spoon-knife"]
        assert cards[0].tech_stack == ("Python",)
        assert cards[0].stats == {"stars": 42, "forks": 7}
        assert cards[1].tech_stack == ()


class TestWorkRenderers:
    """Tests for projects, experience and education."""

    def test_projects_fall_back_to_profile(
        self, profile: UserProfile, context: RenderContext
    ) -> None:
        """Profile projects map technologies and metrics onto cards."""
        section = Section(id="projects", type=SectionType.PROJECTS)

        result = render_projects(section, profile, context)

        grid = result.blocks[0]
        assert isinstance(grid, GridBlock)
        first = grid.children[0]
        assert isinstance(first, ProjectCardBlock)
        assert first.tech_stack == ("Python",)
        assert first.stats == {"stars": 10, "forks": 2}
        assert grid.children[1].stats == {"stars": None, "forks": None}

    def test_projects_featured_only_and_limit(
        self, profile: UserProfile, context: RenderContext
    ) -> None:
        """Featured filtering runs before the max_projects limit."""
        section = Section(
            id="projects",
            type=SectionType.PROJECTS,
            data=ProjectsSectionData(
                items=(
                    ProjectItem(name="a"),
                    ProjectItem(name="b", featured=True),
                    ProjectItem(name="c", featured=True),
                ),
                show_featured_only=True,
            ),
        )
        section.config.max_projects = 1
        section.config.display_style = "list"

        result = render_projects(section, profile, context)

        assert [card.name for card in result.blocks] == ["b"]

    def test_experience_from_profile(self, profile: UserProfile, context: RenderContext) -> None:
        """Each experience entry is followed by a small spacer."""
        section = Section(id="exp", type=SectionType.EXPERIENCE)

        result = render_experience(section, profile, context)

        assert kinds(result) == [BlockKind.EXPERIENCE_ITEM, BlockKind.SPACER]
        item = result.blocks[0]
        assert item.current is True
        assert item.technologies == ("Ruby", "Go")


class TestContentRenderers:
    """Tests for blog posts, contact, socials and utility sections."""

    def test_blog_posts_default_limit(
        self, empty_profile: UserProfile, context: RenderContext
    ) -> None:
        """At most five posts are shown when max_posts is unset."""
        posts = tuple(
            BlogPostItem(title=f"Post {i}", url=f"https://blog.example/{i}") for i in range(7)
        )
        section = Section(
            id="blog", type=SectionType.BLOG_POSTS, data=BlogPostsSectionData(items=posts)
        )

        result = render_blog_posts(section, empty_profile, context)

        assert kinds(result).count(BlockKind.COLUMN) == 5

    def test_blog_post_column_contents(
        self, empty_profile: UserProfile, context: RenderContext
    ) -> None:
        """A post shows its link, excerpt and date."""
        post = BlogPostItem(
            title="IR", url="https://blog.example/ir", excerpt="Why blocks", date="2026-01-01"
        )
        section = Section(
            id="blog", type=SectionType.BLOG_POSTS, data=BlogPostsSectionData(items=(post,))
        )

        result = render_blog_posts(section, empty_profile, context)

        column = result.blocks[0]
        assert [child.kind for child in column.children] == [
            BlockKind.LINK,
            BlockKind.TEXT,
            BlockKind.TEXT,
        ]

    def test_contact_minimal_and_card(
        self, empty_profile: UserProfile, context: RenderContext
    ) -> None:
        """Minimal style renders a row of links, other styles a list."""
        data = ContactSectionData(
            headline="Say hi",
            methods=(ContactMethod(type="email", value="mailto:me@example.com"),),
        )
        minimal = Section(
            id="c1",
            type=SectionType.CONTACT,
            data=data,
            config=ContactSectionConfig(display_style="minimal"),
        )
        card = Section(id="c2", type=SectionType.CONTACT, data=data)

        minimal_result = render_contact(minimal, empty_profile, context)
        card_result = render_contact(card, empty_profile, context)

        assert kinds(minimal_result) == [BlockKind.HEADING, BlockKind.ROW]
        assert minimal_result.blocks[1].children[0].text == "email"
        list_block = card_result.blocks[1]
        assert isinstance(list_block, ListBlock)
        assert list_block.items[0].content == "**email:** mailto:me@example.com"

    def test_socials_fall_back_to_profile(
        self, profile: UserProfile, context: RenderContext
    ) -> None:
        """Profile links are used and unknown platforms map to other."""
        section = Section(
            id="socials",
            type=SectionType.SOCIALS,
            config=SocialsSectionConfig(display_style="icons", show_labels=False),
        )

        result = render_socials(section, profile, context)

        group = result.blocks[0]
        assert isinstance(group, SocialGroupBlock)
        assert group.style == "icons"
        assert [link.platform for link in group.links] == [
            SocialPlatformId.GITHUB,
            SocialPlatformId.OTHER,
        ]
        assert all(link.show_label is False for link in group.links)

    def test_socials_unknown_style_is_badges(
        self, profile: UserProfile, context: RenderContext
    ) -> None:
        """Styles other than icons/buttons render as badges."""
        section = Section(
            id="socials",
            type=SectionType.SOCIALS,
            config=SocialsSectionConfig(display_style="cards"),
        )

        assert render_socials(section, profile, context).blocks[0].style == "badges"

    def test_quote(self, empty_profile: UserProfile, context: RenderContext) -> None:
        """Quotes carry their author."""
        section = Section(
            id="q",
            type=SectionType.QUOTE,
            data=QuoteSectionData(quote="Talk is cheap", author="Linus"),
        )

        block = render_quote(section, empty_profile, context).blocks[0]

        assert (block.value, block.author) == ("Talk is cheap", "Linus")

    @pytest.mark.parametrize(
        ("style", "expected"),
        [("line", "solid"), ("dashed", "dashed"), ("wave", "wave"), ("none", "solid")],
    )
    def test_divider_styles(
        self, style: str, expected: str, empty_profile: UserProfile, context: RenderContext
    ) -> None:
        """Divider styles map onto block styles."""
        section = Section(id="d", type=SectionType.DIVIDER, data=DividerSectionData(style=style))

        assert render_divider(section, empty_profile, context).blocks[0].style == expected

    @pytest.mark.parametrize(
        ("height", "expected"),
        [("0", "xs"), ("2", "sm"), ("4", "md"), ("8", "lg"), ("16", "xl"), (6, "lg"), ("7", "md")],
    )
    def test_spacer_heights(
        self, height: str | int, expected: str, empty_profile: UserProfile, context: RenderContext
    ) -> None:
        """Spacing tokens map onto spacer sizes, unknown tokens use md."""
        section = Section(id="s", type=SectionType.SPACER, data=SpacerSectionData(height=height))

        assert render_spacer(section, empty_profile, context).blocks[0].height == expected


class TestCustomAndIntegrationRenderers:
    """Tests for custom content and integration widgets."""

    def test_custom_markdown(self, empty_profile: UserProfile, context: RenderContext) -> None:
        """Markdown is passed through in a custom block."""
        section = Section(
            id="md",
            type=SectionType.CUSTOM_MARKDOWN,
            data=CustomMarkdownSectionData(markdown="**hi**"),
        )

        block = render_custom_markdown(section, empty_profile, context).blocks[0]

        assert isinstance(block, CustomBlock)
        assert block.custom_type == "markdown"
        assert block.data == {"content": "**hi**"}
        assert block.id.startswith("custom-md_")

    def test_custom_html(self, empty_profile: UserProfile, context: RenderContext) -> None:
        """HTML keeps its sanitize flag."""
        section = Section(
            id="html",
            type=SectionType.CUSTOM_HTML,
            data=CustomHtmlSectionData(html="<b>hi</b>", sanitize=False),
        )

        block = render_custom_html(section, empty_profile, context).blocks[0]

        assert block.custom_type == "html"
        assert block.data == {"content": "<b>hi</b>", "sanitize": False}

    def test_spotify(self, empty_profile: UserProfile, context: RenderContext) -> None:
        """The widget type is part of the custom type."""
        section = Section(
            id="spotify",
            type=SectionType.SPOTIFY,
            data=SpotifySectionData(type="top-tracks"),
        )

        block = render_spotify(section, empty_profile, context).blocks[0]

        assert block.custom_type == "spotify-top-tracks"
        assert block.data["theme"] == "dark"

    def test_wakatime_profile_fallback(
        self, profile: UserProfile, context: RenderContext
    ) -> None:
        """The WakaTime username falls back to the profile integration."""
        section = Section(id="waka", type=SectionType.WAKATIME)

        block = render_wakatime(section, profile, context).blocks[0]

        assert block.custom_type == "wakatime-stats"
        assert block.data["username"] == "octo-waka"
        assert block.data["range"] == "last_7_days"

    def test_wakatime_without_username(
        self, empty_profile: UserProfile, context: RenderContext
    ) -> None:
        """No WakaTime username is a recoverable render failure."""
        section = Section(
            id="waka", type=SectionType.WAKATIME, data=WakatimeSectionData(range="all_time")
        )

        result = render_wakatime(section, empty_profile, context)

        assert not result.success
        assert result.error.code is ErrorCode.SECTION_RENDER_FAILED
        assert result.error.recoverable is True
        assert "Wakatime username required" in result.error.message
