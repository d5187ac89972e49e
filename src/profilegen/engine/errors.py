"""Render error taxonomy.

Errors produced while validating or rendering are plain values, not
exceptions: each carries a closed ``ErrorCode``, a human-readable message and a
``recoverable`` flag that decides whether the render can skip past it.

Two exception classes exist for programming errors that must fail loudly
(a section type without a renderer, an incomplete registry).
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Closed set of render error codes."""

    # Template
    TEMPLATE_NOT_FOUND = "TEMPLATE_NOT_FOUND"
    TEMPLATE_INVALID = "TEMPLATE_INVALID"
    TEMPLATE_VERSION_MISMATCH = "TEMPLATE_VERSION_MISMATCH"

    # Section
    SECTION_UNSUPPORTED = "SECTION_UNSUPPORTED"
    SECTION_DISABLED = "SECTION_DISABLED"
    SECTION_RENDER_FAILED = "SECTION_RENDER_FAILED"
    SECTION_DATA_INVALID = "SECTION_DATA_INVALID"
    SECTION_CONFIG_INVALID = "SECTION_CONFIG_INVALID"

    # Profile
    PROFILE_MISSING = "PROFILE_MISSING"
    PROFILE_INCOMPLETE = "PROFILE_INCOMPLETE"
    GITHUB_USERNAME_REQUIRED = "GITHUB_USERNAME_REQUIRED"
    PROFILE_DATA_INVALID = "PROFILE_DATA_INVALID"

    # Asset
    ASSET_NOT_FOUND = "ASSET_NOT_FOUND"
    ASSET_INVALID = "ASSET_INVALID"
    ASSET_PARAMS_MISSING = "ASSET_PARAMS_MISSING"
    ASSET_URL_GENERATION_FAILED = "ASSET_URL_GENERATION_FAILED"

    # Capability
    CAPABILITY_NOT_SUPPORTED = "CAPABILITY_NOT_SUPPORTED"
    SECTION_LIMIT_EXCEEDED = "SECTION_LIMIT_EXCEEDED"

    # General
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    VALIDATION_FAILED = "VALIDATION_FAILED"


TEMPLATE_ERROR_CODES = frozenset(
    {
        ErrorCode.TEMPLATE_NOT_FOUND,
        ErrorCode.TEMPLATE_INVALID,
        ErrorCode.TEMPLATE_VERSION_MISMATCH,
    }
)

SECTION_ERROR_CODES = frozenset(
    {
        ErrorCode.SECTION_UNSUPPORTED,
        ErrorCode.SECTION_RENDER_FAILED,
        ErrorCode.SECTION_DATA_INVALID,
    }
)

PROFILE_ERROR_CODES = frozenset(
    {
        ErrorCode.PROFILE_MISSING,
        ErrorCode.PROFILE_INCOMPLETE,
        ErrorCode.GITHUB_USERNAME_REQUIRED,
    }
)

ASSET_ERROR_CODES = frozenset(
    {
        ErrorCode.ASSET_NOT_FOUND,
        ErrorCode.ASSET_INVALID,
        ErrorCode.ASSET_PARAMS_MISSING,
        ErrorCode.ASSET_URL_GENERATION_FAILED,
    }
)

CAPABILITY_ERROR_CODES = frozenset(
    {
        ErrorCode.CAPABILITY_NOT_SUPPORTED,
        ErrorCode.SECTION_LIMIT_EXCEEDED,
    }
)


def _now() -> str:
    return datetime.now(UTC).isoformat()


# =============================================================================
# Error values
# =============================================================================


@dataclass(frozen=True, kw_only=True)
class RenderError:
    """Error value produced by validation or rendering.

    Attributes:
        code: Error code
        message: Human-readable description
        recoverable: Whether the render may skip past this error
        timestamp: UTC ISO-8601 creation time
    """

    code: ErrorCode
    message: str
    recoverable: bool
    timestamp: str = field(default_factory=_now)

    def details(self) -> dict[str, Any]:
        """Variant-specific fields (empty for the base error)."""
        return {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        data: dict[str, Any] = {
            "code": self.code.value,
            "message": self.message,
            "recoverable": self.recoverable,
            "timestamp": self.timestamp,
        }
        data.update({k: v for k, v in self.details().items() if v is not None})
        return data


@dataclass(frozen=True, kw_only=True)
class TemplateError(RenderError):
    template_id: str | None = None
    reason: str | None = None

    def details(self) -> dict[str, Any]:
        return {"template_id": self.template_id, "reason": self.reason}


@dataclass(frozen=True, kw_only=True)
class SectionError(RenderError):
    section_id: str
    section_type: str
    cause: str | None = None

    def details(self) -> dict[str, Any]:
        return {
            "section_id": self.section_id,
            "section_type": self.section_type,
            "cause": self.cause,
        }


@dataclass(frozen=True, kw_only=True)
class ProfileError(RenderError):
    missing_fields: tuple[str, ...] = ()
    section_id: str | None = None
    section_type: str | None = None

    def details(self) -> dict[str, Any]:
        return {
            "missing_fields": list(self.missing_fields) or None,
            "section_id": self.section_id,
            "section_type": self.section_type,
        }


@dataclass(frozen=True, kw_only=True)
class AssetError(RenderError):
    asset_id: str | None = None
    asset_type: str | None = None
    missing_params: tuple[str, ...] = ()

    def details(self) -> dict[str, Any]:
        return {
            "asset_id": self.asset_id,
            "asset_type": self.asset_type,
            "missing_params": list(self.missing_params) or None,
        }


@dataclass(frozen=True, kw_only=True)
class CapabilityError(RenderError):
    template_id: str
    capability: str | None = None
    section_type: str | None = None
    max_sections: int | None = None
    actual_sections: int | None = None

    def details(self) -> dict[str, Any]:
        return {
            "template_id": self.template_id,
            "capability": self.capability,
            "section_type": self.section_type,
            "max_sections": self.max_sections,
            "actual_sections": self.actual_sections,
        }


@dataclass(frozen=True)
class ValidationIssue:
    """Single problem found by validation.

    Attributes:
        path: Dotted path of the offending field
        message: Description of the problem
        value: Offending value, if any
    """

    path: str
    message: str
    value: Any = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"path": self.path, "message": self.message, "value": self.value}


@dataclass(frozen=True, kw_only=True)
class ValidationError(RenderError):
    issues: tuple[ValidationIssue, ...] = ()

    def details(self) -> dict[str, Any]:
        return {"issues": [issue.to_dict() for issue in self.issues]}


@dataclass(frozen=True, kw_only=True)
class UnknownError(RenderError):
    original: str | None = None

    def details(self) -> dict[str, Any]:
        return {"original": self.original}


# =============================================================================
# Factories
# =============================================================================


def template_not_found(template_id: str) -> TemplateError:
    return TemplateError(
        code=ErrorCode.TEMPLATE_NOT_FOUND,
        message=f'Template "{template_id}" not found',
        recoverable=False,
        template_id=template_id,
    )


def template_invalid(template_id: str, reason: str) -> TemplateError:
    return TemplateError(
        code=ErrorCode.TEMPLATE_INVALID,
        message=f'Template "{template_id}" is invalid: {reason}',
        recoverable=False,
        template_id=template_id,
        reason=reason,
    )


def section_unsupported(
    section_id: str,
    section_type: str,
    template_id: str,
    supported_sections: list[str],
) -> SectionError:
    """Section type missing from the template's supported list (recoverable)."""
    supported = ", ".join(supported_sections)
    return SectionError(
        code=ErrorCode.SECTION_UNSUPPORTED,
        message=(
            f'Section type "{section_type}" is not supported by template '
            f'"{template_id}". Supported sections: {supported}'
        ),
        recoverable=True,
        section_id=section_id,
        section_type=section_type,
    )


def section_render_failed(section_id: str, section_type: str, cause: str) -> SectionError:
    """A renderer could not produce blocks (recoverable)."""
    return SectionError(
        code=ErrorCode.SECTION_RENDER_FAILED,
        message=f'Failed to render section "{section_id}" of type "{section_type}": {cause}',
        recoverable=True,
        section_id=section_id,
        section_type=section_type,
        cause=cause,
    )


def section_data_invalid(section_id: str, section_type: str, reason: str) -> SectionError:
    return SectionError(
        code=ErrorCode.SECTION_DATA_INVALID,
        message=f'Section "{section_id}" of type "{section_type}" has invalid data: {reason}',
        recoverable=True,
        section_id=section_id,
        section_type=section_type,
        cause=reason,
    )


def profile_missing() -> ProfileError:
    return ProfileError(
        code=ErrorCode.PROFILE_MISSING,
        message="User profile is required for rendering",
        recoverable=False,
    )


def profile_incomplete(missing_fields: list[str]) -> ProfileError:
    """Aggregate of every required profile path that is empty."""
    return ProfileError(
        code=ErrorCode.PROFILE_INCOMPLETE,
        message=f"Profile is missing required fields: {', '.join(missing_fields)}",
        recoverable=False,
        missing_fields=tuple(missing_fields),
    )


def github_username_required(section_id: str, section_type: str) -> ProfileError:
    """A GitHub-backed section has no username to work with (non-recoverable)."""
    return ProfileError(
        code=ErrorCode.GITHUB_USERNAME_REQUIRED,
        message=f'GitHub username is required for section "{section_id}" of type "{section_type}"',
        recoverable=False,
        missing_fields=("github_username",),
        section_id=section_id,
        section_type=section_type,
    )


def asset_not_found(asset_id: str) -> AssetError:
    return AssetError(
        code=ErrorCode.ASSET_NOT_FOUND,
        message=f'Asset "{asset_id}" not found',
        recoverable=True,
        asset_id=asset_id,
    )


def asset_params_missing(asset_type: str, missing_params: list[str]) -> AssetError:
    return AssetError(
        code=ErrorCode.ASSET_PARAMS_MISSING,
        message=f'Asset of type "{asset_type}" is missing parameters: {", ".join(missing_params)}',
        recoverable=True,
        asset_type=asset_type,
        missing_params=tuple(missing_params),
    )


def capability_not_supported(template_id: str, capability: str) -> CapabilityError:
    return CapabilityError(
        code=ErrorCode.CAPABILITY_NOT_SUPPORTED,
        message=f'Template "{template_id}" does not support capability "{capability}"',
        recoverable=True,
        template_id=template_id,
        capability=capability,
    )


def section_limit_exceeded(
    template_id: str,
    max_sections: int,
    actual_sections: int,
) -> CapabilityError:
    return CapabilityError(
        code=ErrorCode.SECTION_LIMIT_EXCEEDED,
        message=(
            f'Section limit exceeded: template "{template_id}" allows {max_sections} '
            f"sections, but {actual_sections} were provided"
        ),
        recoverable=True,
        template_id=template_id,
        max_sections=max_sections,
        actual_sections=actual_sections,
    )


def validation_failed(issues: list[ValidationIssue]) -> ValidationError:
    """Aggregate every validation issue into one error."""
    summary = "; ".join(issue.message for issue in issues)
    return ValidationError(
        code=ErrorCode.VALIDATION_FAILED,
        message=f"Validation failed with {len(issues)} issue(s): {summary}",
        recoverable=False,
        issues=tuple(issues),
    )


def unknown_error(error: BaseException | None = None) -> UnknownError:
    message = str(error) if error is not None and str(error) else "An unknown error occurred"
    return UnknownError(
        code=ErrorCode.UNKNOWN_ERROR,
        message=message,
        recoverable=False,
        original=repr(error) if error is not None else None,
    )


# =============================================================================
# Guards
# =============================================================================


def is_render_error(value: Any) -> bool:
    """Return True if value is a well-formed render error."""
    return isinstance(value, RenderError) and isinstance(value.code, ErrorCode)


def is_recoverable(error: RenderError) -> bool:
    return error.recoverable


def is_template_error(error: RenderError) -> bool:
    return error.code in TEMPLATE_ERROR_CODES


def is_section_error(error: RenderError) -> bool:
    return error.code in SECTION_ERROR_CODES


def is_profile_error(error: RenderError) -> bool:
    return error.code in PROFILE_ERROR_CODES


def is_asset_error(error: RenderError) -> bool:
    return error.code in ASSET_ERROR_CODES


def is_capability_error(error: RenderError) -> bool:
    return error.code in CAPABILITY_ERROR_CODES


# =============================================================================
# Exceptions (programming errors)
# =============================================================================


class UnhandledSectionTypeError(Exception):
    """Raised when a section type has no registered renderer."""

    def __init__(self, section_type: str, message: str | None = None) -> None:
        self.section_type = section_type
        self.message = message or f"No renderer registered for section type: {section_type}"
        super().__init__(self.message)


class IncompleteRegistryError(Exception):
    """Raised when a registry does not cover every section type."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        self.message = f"Section renderer registry is missing: {', '.join(missing)}"
        super().__init__(self.message)
