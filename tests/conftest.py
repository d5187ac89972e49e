"""Shared pytest fixtures for profilegen tests.

Fixtures are organized by category:
- Document fixtures: Raw template/profile mappings as the web editor exports them
- Model fixtures: Parsed Template and UserProfile instances
- Engine fixtures: Render contexts with a fresh id generator
"""

import logging
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

import pytest
import yaml

from profilegen.engine.builders import BlockBuilder, IdGenerator
from profilegen.engine.registry import reset_registry
from profilegen.engine.results import RenderContext
from profilegen.models.profile import UserProfile
from profilegen.models.sections import Section, SectionType
from profilegen.models.template import (
    LayoutSlot,
    Template,
    TemplateCapabilities,
    TemplateLayout,
    TemplateMetadata,
)


@pytest.fixture(autouse=True)
def _fresh_registry() -> Iterable[None]:
    """Rebuild the global renderer registry for every test."""
    reset_registry()
    yield
    reset_registry()


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterable[None]:
    """Undo CLI logging setup so later tests log through the root logger."""
    yield
    logger = logging.getLogger("profilegen")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


# =============================================================================
# Document Fixtures
# =============================================================================


@pytest.fixture
def profile_data() -> dict[str, Any]:
    """Return a camelCase profile document."""
    return {
        "id": "profile-1",
        "githubUsername": "octocat",
        "github": {
            "user": {
                "login": "octocat",
                "name": "The Octocat",
                "avatarUrl": "https://avatars.githubusercontent.com/u/583231",
            },
            "stats": {
                "pinnedRepos": [
                    {
                        "name": "hello-world",
                        "htmlUrl": "https://github.com/octocat/hello-world",
                        "description": "My first repository",
                        "language": "Python",
                        "stargazersCount": 42,
                        "forksCount": 7,
                    },
                    {
                        "name": "spoon-knife",
                        "htmlUrl": "https://github.com/octocat/spoon-knife",
                        "stargazersCount": 12,
                        "forksCount": 30,
                    },
                ]
            },
        },
        "personal": {
            "displayName": {"customName": "Mona Lisa"},
            "location": "San Francisco",
        },
        "professional": {
            "yearsOfExperience": 8,
            "experience": [
                {
                    "company": "GitHub",
                    "role": "Engineer",
                    "startDate": "2019-01",
                    "highlights": ["Shipped Actions"],
                    "technologies": ["Ruby", "Go"],
                }
            ],
            "education": [
                {
                    "institution": "State University",
                    "degree": "BSc",
                    "startDate": "2010-09",
                    "endDate": "2014-06",
                    "field": "Computer Science",
                }
            ],
        },
        "techStack": {
            "items": [
                {"name": "Python", "category": "language"},
                {"name": "Type Script", "category": "language"},
                {"name": "Docker", "category": "devops"},
            ]
        },
        "socialLinks": {
            "links": [
                {"platform": "github", "url": "https://github.com/octocat"},
                {"platform": "dev.to", "url": "https://dev.to/octocat"},
            ]
        },
        "projects": {
            "items": [
                {
                    "name": "profilegen",
                    "description": "Profile renderer",
                    "featured": True,
                    "technologies": ["Python"],
                    "metrics": {"stars": 10, "forks": 2},
                },
                {"name": "side-project", "description": "Weekend hack"},
            ]
        },
        "integrations": {"wakatime": {"username": "octo-waka"}},
    }


@pytest.fixture
def template_data() -> dict[str, Any]:
    """Return a camelCase template document with three sections."""
    return {
        "metadata": {
            "id": "developer-basic",
            "name": "Developer Basic",
            "version": "1.2.0",
        },
        "layout": {
            "slots": [
                {"sectionId": "hero", "order": 0},
                {"sectionId": "tech-stack", "order": 1},
                {"sectionId": "socials", "order": 2},
            ]
        },
        "capabilities": {
            "supportedSections": ["hero", "tech-stack", "socials", "divider"],
            "maxSections": 10,
        },
        "sections": [
            {
                "id": "socials-1",
                "type": "socials",
                "config": {"displayStyle": "icons"},
            },
            {
                "id": "hero-1",
                "type": "hero",
                "title": "Hello",
                "data": {"headline": "Hi, I'm {name}", "tagline": "Building things"},
            },
            {"id": "stack-1", "type": "tech-stack"},
        ],
    }


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def profile(profile_data: dict[str, Any]) -> UserProfile:
    """Return the parsed sample profile."""
    return UserProfile.from_dict(profile_data)


@pytest.fixture
def empty_profile() -> UserProfile:
    """Return a profile without GitHub username or content."""
    return UserProfile()


@pytest.fixture
def template(template_data: dict[str, Any]) -> Template:
    """Return the parsed sample template."""
    return Template.from_dict(template_data)


@pytest.fixture
def make_template() -> Callable[..., Template]:
    """Return a factory building a valid template around the given sections."""

    def factory(
        sections: Iterable[Section],
        supported: Iterable[SectionType] | None = None,
        slots: Iterable[LayoutSlot] = (),
        max_sections: int = 20,
    ) -> Template:
        sections = tuple(sections)
        if supported is None:
            supported = tuple(SectionType)
        return Template(
            metadata=TemplateMetadata(id="test-template", name="Test Template", version="2.1.0"),
            layout=TemplateLayout(slots=tuple(slots)),
            capabilities=TemplateCapabilities(
                supported_sections=tuple(supported),
                max_sections=max_sections,
            ),
            sections=sections,
        )

    return factory


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def context() -> RenderContext:
    """Return a render context with a fresh id generator."""
    return RenderContext(
        template_id="test-template",
        theme="system",
        locale="en",
        timestamp="2026-01-01T00:00:00+00:00",
        builder=BlockBuilder(IdGenerator()),
    )


# =============================================================================
# File Fixtures
# =============================================================================


@pytest.fixture
def write_yaml(tmp_path: Path) -> Callable[[str, dict[str, Any]], Path]:
    """Return a helper that writes a mapping to a YAML file under tmp_path."""

    def write(name: str, data: dict[str, Any]) -> Path:
        path = tmp_path / name
        path.write_text(yaml.safe_dump(data, sort_keys=False, allow_unicode=True))
        return path

    return write
