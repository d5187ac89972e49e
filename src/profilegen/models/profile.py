"""User profile model.

The profile is the concrete data a template is rendered against: GitHub
identity (plus an optional snapshot of fetched GitHub data), personal and
professional info, tech stack, social links, projects and integrations.
Profiles are produced elsewhere (editor, GitHub fetcher); here they are only
read.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from profilegen.models.loading import from_mapping
from profilegen.models.sections import SocialLink, TechStackItem

# =============================================================================
# GitHub snapshot
# =============================================================================


@dataclass
class GitHubUser:
    login: str = ""
    avatar_url: str | None = None
    html_url: str | None = None
    name: str | None = None
    company: str | None = None
    blog: str | None = None
    location: str | None = None
    email: str | None = None
    bio: str | None = None
    twitter_username: str | None = None
    public_repos: int = 0
    followers: int = 0
    following: int = 0


@dataclass
class GitHubRepository:
    name: str
    full_name: str = ""
    html_url: str = ""
    description: str | None = None
    language: str | None = None
    stargazers_count: int = 0
    forks_count: int = 0
    topics: tuple[str, ...] = ()
    fork: bool = False
    archived: bool = False


@dataclass
class GitHubStats:
    total_stars: int = 0
    total_forks: int = 0
    total_commits: int = 0
    total_contributions: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    top_languages: dict[str, Any] = field(default_factory=dict)
    pinned_repos: tuple[GitHubRepository, ...] = ()


@dataclass
class GitHubProfile:
    """Data fetched from the GitHub API ahead of rendering."""

    user: GitHubUser = field(default_factory=GitHubUser)
    stats: GitHubStats = field(default_factory=GitHubStats)
    repositories: tuple[GitHubRepository, ...] = ()
    last_fetched: str | None = None


# =============================================================================
# Personal and professional info
# =============================================================================


@dataclass
class DisplayNameConfig:
    """How the user's name is shown.

    Attributes:
        use_name: Prefer the GitHub account's display name
        use_login: Prefer the GitHub login
        custom_name: Explicit name, overrides both
    """

    use_name: bool = True
    use_login: bool = False
    custom_name: str | None = None
    show_pronouns: bool = False
    pronouns: str | None = None


@dataclass
class AvatarConfig:
    use_github_avatar: bool = True
    custom_avatar_url: str | None = None
    show_border: bool = False
    border_color: str | None = None
    shape: str = "circle"


@dataclass
class PersonalInfo:
    display_name: DisplayNameConfig = field(default_factory=DisplayNameConfig)
    avatar: AvatarConfig = field(default_factory=AvatarConfig)
    headline: str | None = None
    bio: str | None = None
    location: str | None = None
    timezone: str | None = None
    current_role: str | None = None
    company: str | None = None
    website: str | None = None
    email: str | None = None
    is_available_for_hire: bool = False
    is_open_to_collaboration: bool = False


@dataclass
class WorkExperience:
    company: str
    role: str
    start_date: str
    id: str = ""
    type: str = "full-time"
    location: str | None = None
    remote: bool = False
    end_date: str | None = None
    description: str | None = None
    highlights: tuple[str, ...] = ()
    technologies: tuple[str, ...] = ()
    company_url: str | None = None
    company_logo: str | None = None


@dataclass
class Education:
    institution: str
    degree: str
    start_date: str
    id: str = ""
    field: str | None = None
    end_date: str | None = None
    gpa: str | None = None
    honors: tuple[str, ...] = ()
    coursework: tuple[str, ...] = ()
    institution_url: str | None = None
    institution_logo: str | None = None


@dataclass
class Certification:
    name: str
    issuer: str
    issue_date: str
    id: str = ""
    expiry_date: str | None = None
    credential_id: str | None = None
    credential_url: str | None = None
    skills: tuple[str, ...] = ()


@dataclass
class ProfessionalInfo:
    experience: tuple[WorkExperience, ...] = ()
    education: tuple[Education, ...] = ()
    certifications: tuple[Certification, ...] = ()
    years_of_experience: int | None = None
    specializations: tuple[str, ...] = ()


@dataclass
class UserTechStack:
    items: tuple[TechStackItem, ...] = ()
    featured: tuple[str, ...] = ()
    show_proficiency: bool = False
    group_by_category: bool = False


@dataclass
class UserSocialLinks:
    links: tuple[SocialLink, ...] = ()
    primary_platform: str | None = None
    show_follower_count: bool = False


@dataclass
class UserProject:
    name: str
    description: str = ""
    id: str = ""
    long_description: str | None = None
    status: str = "active"
    visibility: str = "public"
    featured: bool = False
    repo_url: str | None = None
    demo_url: str | None = None
    docs_url: str | None = None
    image: str | None = None
    technologies: tuple[str, ...] = ()
    categories: tuple[str, ...] = ()
    highlights: tuple[str, ...] = ()
    metrics: dict[str, int] | None = None


@dataclass
class UserProjects:
    items: tuple[UserProject, ...] = ()
    show_featured_only: bool = False
    max_display: int = 6


@dataclass
class CustomField:
    id: str
    label: str
    type: str = "text"
    value: Any = None
    visible: bool = True
    order: int = 0
    icon: str | None = None
    section: str | None = None


@dataclass
class CustomFields:
    fields: tuple[CustomField, ...] = ()


# =============================================================================
# Integrations
# =============================================================================


@dataclass
class BlogConfig:
    enabled: bool = False
    platform: str | None = None
    feed_url: str | None = None
    profile_url: str | None = None
    max_posts: int = 5
    show_excerpts: bool = True


@dataclass
class SpotifyConfig:
    enabled: bool = False
    show_now_playing: bool = True
    show_top_tracks: bool = False
    show_recently_played: bool = False


@dataclass
class WakatimeConfig:
    enabled: bool = False
    username: str | None = None
    range: str = "last_7_days"
    show_languages: bool = True
    show_editors: bool = False


@dataclass
class IntegrationConfigs:
    blog: BlogConfig = field(default_factory=BlogConfig)
    spotify: SpotifyConfig = field(default_factory=SpotifyConfig)
    wakatime: WakatimeConfig = field(default_factory=WakatimeConfig)


# =============================================================================
# UserProfile
# =============================================================================


@dataclass
class UserProfile:
    """Profile a template is rendered against.

    Attributes:
        github_username: GitHub login (required by GitHub-backed sections)
        id: Profile identifier
        github: Pre-fetched GitHub data, if any
        personal: Display name, avatar, location and similar
        professional: Experience, education, certifications
        tech_stack: Technologies used as the tech-stack fallback
        social_links: Links used as the socials fallback
        projects: Projects used as the projects fallback
        custom_fields: Free-form user fields
        integrations: Blog, Spotify and WakaTime settings
    """

    github_username: str = ""
    id: str = ""
    github: GitHubProfile | None = None
    personal: PersonalInfo = field(default_factory=PersonalInfo)
    professional: ProfessionalInfo = field(default_factory=ProfessionalInfo)
    tech_stack: UserTechStack = field(default_factory=UserTechStack)
    social_links: UserSocialLinks = field(default_factory=UserSocialLinks)
    projects: UserProjects = field(default_factory=UserProjects)
    custom_fields: CustomFields = field(default_factory=CustomFields)
    integrations: IntegrationConfigs = field(default_factory=IntegrationConfigs)

    @property
    def display_name(self) -> str:
        """Resolve the name to show: custom name, GitHub name, then login."""
        config = self.personal.display_name
        if config.custom_name:
            return config.custom_name
        if config.use_name and not config.use_login and self.github and self.github.user.name:
            return self.github.user.name
        return self.github_username

    @property
    def avatar_url(self) -> str | None:
        if not self.personal.avatar.use_github_avatar and self.personal.avatar.custom_avatar_url:
            return self.personal.avatar.custom_avatar_url
        if self.github is not None:
            return self.github.user.avatar_url
        return None

    def has_github_profile(self) -> bool:
        return self.github is not None

    def has_work_experience(self) -> bool:
        return len(self.professional.experience) > 0

    def has_featured_projects(self) -> bool:
        return any(project.featured for project in self.projects.items)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UserProfile":
        """Create a UserProfile from a JSON/YAML mapping (camelCase or snake_case).

        Raises:
            ValueError: If the mapping is malformed
        """
        return from_mapping(cls, data)
