"""Pre-render validation.

Three checks gate rendering, run in order by ``validate_all`` which stops at
the first failing phase:

1. Template structure (metadata, layout and capabilities present)
2. Section/template compatibility (supported types, section count)
3. Profile completeness for enabled sections with required profile fields

Validation never raises and never mutates its inputs; every failure is
returned inside a ``ValidationResult``.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from profilegen.engine.errors import (
    RenderError,
    ValidationIssue,
    profile_incomplete,
    section_limit_exceeded,
    section_unsupported,
    validation_failed,
)
from profilegen.models.profile import UserProfile
from profilegen.models.sections import Section, SectionType
from profilegen.models.template import Template, TemplateCapabilities

logger = logging.getLogger(__name__)

# Profile paths that must be non-empty for an enabled section of the given type
SECTION_REQUIRED_FIELDS: dict[SectionType, tuple[str, ...]] = {
    SectionType.GITHUB_STATS: ("github_username",),
    SectionType.CONTRIBUTIONS: ("github_username",),
    SectionType.PINNED_REPOS: ("github_username",),
}


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a validation phase.

    Attributes:
        valid: True when no problem was found
        errors: Errors found (empty when valid)
    """

    valid: bool
    errors: tuple[RenderError, ...] = ()

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def failed(cls, errors: Sequence[RenderError]) -> "ValidationResult":
        return cls(valid=False, errors=tuple(errors))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"valid": self.valid, "errors": [e.to_dict() for e in self.errors]}


# =============================================================================
# Template validation
# =============================================================================


def validate_template(template: Template) -> ValidationResult:
    """Check that required structural fields are present.

    All missing fields are aggregated into a single VALIDATION_FAILED error.
    """
    issues: list[ValidationIssue] = []

    if template.metadata is None:
        issues.append(ValidationIssue("template.metadata", "Template metadata is required"))
    if template.layout is None:
        issues.append(ValidationIssue("template.layout", "Template layout is required"))
    if template.capabilities is None:
        issues.append(
            ValidationIssue("template.capabilities", "Template capabilities are required")
        )

    if issues:
        logger.debug("Template structure invalid: %d issue(s)", len(issues))
        return ValidationResult.failed([validation_failed(issues)])
    return ValidationResult.ok()


# =============================================================================
# Section validation
# =============================================================================


def is_section_supported(section_type: SectionType, capabilities: TemplateCapabilities) -> bool:
    return section_type in capabilities.supported_sections


def validate_sections(sections: Sequence[Section], template: Template) -> ValidationResult:
    """Check every section against the template's capabilities.

    Each violation is reported as its own error. Requires a template that
    passed ``validate_template``.
    """
    if template.capabilities is None:
        return validate_template(template)

    capabilities = template.capabilities
    errors: list[RenderError] = []

    if len(sections) > capabilities.max_sections:
        errors.append(
            section_limit_exceeded(template.id, capabilities.max_sections, len(sections))
        )

    supported = [section_type.value for section_type in capabilities.supported_sections]
    for section in sections:
        if not is_section_supported(section.type, capabilities):
            errors.append(
                section_unsupported(section.id, section.type.value, template.id, supported)
            )

    if errors:
        logger.debug("Section validation failed: %d error(s)", len(errors))
        return ValidationResult.failed(errors)
    return ValidationResult.ok()


# =============================================================================
# Profile validation
# =============================================================================


def _resolve_path(obj: Any, path: str) -> Any:
    """Resolve a dotted attribute/key path, returning None when any hop is missing."""
    current = obj
    for part in path.split("."):
        if current is None:
            return None
        if isinstance(current, dict):
            current = current.get(part)
        else:
            current = getattr(current, part, None)
    return current


def validate_profile(profile: UserProfile, sections: Sequence[Section]) -> ValidationResult:
    """Check required profile fields for every enabled section.

    Distinct missing paths are aggregated into one PROFILE_INCOMPLETE error,
    in first-seen order.
    """
    missing: list[str] = []

    for section in sections:
        if not section.enabled:
            continue
        for path in SECTION_REQUIRED_FIELDS.get(section.type, ()):
            value = _resolve_path(profile, path)
            if value is None or value == "":
                if path not in missing:
                    missing.append(path)

    if missing:
        logger.debug("Profile incomplete: %s", ", ".join(missing))
        return ValidationResult.failed([profile_incomplete(missing)])
    return ValidationResult.ok()


# =============================================================================
# Capability checks
# =============================================================================


def supports_animations(capabilities: TemplateCapabilities) -> bool:
    return capabilities.supports_animations


def supports_github_stats(capabilities: TemplateCapabilities) -> bool:
    return capabilities.supports_github_stats


def supports_dark_mode(capabilities: TemplateCapabilities) -> bool:
    return capabilities.supports_dark_mode


def supports_custom_sections(capabilities: TemplateCapabilities) -> bool:
    return capabilities.allow_custom_sections


# =============================================================================
# Full validation
# =============================================================================


def validate_all(
    template: Template,
    sections: Sequence[Section],
    profile: UserProfile,
) -> ValidationResult:
    """Run template, section and profile validation, stopping at the first failure."""
    result = validate_template(template)
    if not result.valid:
        return result

    result = validate_sections(sections, template)
    if not result.valid:
        return result

    return validate_profile(profile, sections)
