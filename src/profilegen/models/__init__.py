"""Profilegen data models.

This module exports the inputs of the render engine:
- Template: Document definition (metadata, layout, capabilities, sections)
- Section / SectionType: Typed content units and their data/config shapes
- UserProfile: Concrete user data a template is rendered against
"""

from profilegen.models.profile import (
    DisplayNameConfig,
    GitHubProfile,
    GitHubRepository,
    GitHubUser,
    PersonalInfo,
    ProfessionalInfo,
    UserProfile,
    UserTechStack,
)
from profilegen.models.sections import (
    SECTION_SCHEMAS,
    Section,
    SectionBaseConfig,
    SectionType,
)
from profilegen.models.template import (
    LayoutSlot,
    SemanticVersion,
    Template,
    TemplateCapabilities,
    TemplateLayout,
    TemplateMetadata,
)

__all__ = [
    "DisplayNameConfig",
    "GitHubProfile",
    "GitHubRepository",
    "GitHubUser",
    "LayoutSlot",
    "PersonalInfo",
    "ProfessionalInfo",
    "SECTION_SCHEMAS",
    "Section",
    "SectionBaseConfig",
    "SectionType",
    "SemanticVersion",
    "Template",
    "TemplateCapabilities",
    "TemplateLayout",
    "TemplateMetadata",
    "UserProfile",
    "UserTechStack",
]
