"""Unit tests for render error values and guards."""

from profilegen.engine import errors
from profilegen.engine.errors import (
    ErrorCode,
    IncompleteRegistryError,
    UnhandledSectionTypeError,
    ValidationIssue,
)


class TestErrorFactories:
    """Tests for the error factory functions."""

    def test_section_render_failed_is_recoverable(self) -> None:
        """Render failures can be skipped."""
        error = errors.section_render_failed("hero-1", "hero", "boom")

        assert error.code is ErrorCode.SECTION_RENDER_FAILED
        assert error.recoverable is True
        assert "hero-1" in error.message
        assert "boom" in error.message

    def test_github_username_required_is_not_recoverable(self) -> None:
        """A missing GitHub username aborts the section for good."""
        error = errors.github_username_required("stats-1", "github-stats")

        assert error.code is ErrorCode.GITHUB_USERNAME_REQUIRED
        assert error.recoverable is False
        assert error.missing_fields == ("github_username",)
        assert error.section_type == "github-stats"

    def test_section_unsupported_lists_supported(self) -> None:
        """The message names the template and every supported type."""
        error = errors.section_unsupported("q-1", "quote", "basic", ["hero", "about"])

        assert error.code is ErrorCode.SECTION_UNSUPPORTED
        assert error.recoverable is True
        assert '"basic"' in error.message
        assert "hero, about" in error.message

    def test_section_limit_exceeded(self) -> None:
        """Limit errors carry the allowed and actual counts."""
        error = errors.section_limit_exceeded("basic", 2, 3)

        assert error.code is ErrorCode.SECTION_LIMIT_EXCEEDED
        assert (error.max_sections, error.actual_sections) == (2, 3)

    def test_validation_failed_aggregates_issues(self) -> None:
        """All issues end up in one error."""
        issues = [
            ValidationIssue("template.metadata", "Template metadata is required"),
            ValidationIssue("template.layout", "Template layout is required"),
        ]

        error = errors.validation_failed(issues)

        assert error.code is ErrorCode.VALIDATION_FAILED
        assert error.recoverable is False
        assert error.issues == tuple(issues)
        assert "2 issue(s)" in error.message

    def test_unknown_error_wraps_exception(self) -> None:
        """The exception text becomes the message."""
        error = errors.unknown_error(RuntimeError("kaboom"))

        assert error.code is ErrorCode.UNKNOWN_ERROR
        assert error.message == "kaboom"
        assert error.original == "RuntimeError('kaboom')"

    def test_unknown_error_without_exception(self) -> None:
        """A generic message is used when there is nothing to wrap."""
        assert errors.unknown_error().message == "An unknown error occurred"

    def test_timestamp_is_utc_iso(self) -> None:
        """Errors are stamped with a UTC ISO-8601 time."""
        error = errors.profile_missing()

        assert error.timestamp.endswith("+00:00")


class TestErrorSerialization:
    """Tests for RenderError.to_dict."""

    def test_to_dict_merges_details_without_none(self) -> None:
        """Variant fields are included, unset ones are dropped."""
        error = errors.section_render_failed("hero-1", "hero", "boom")

        data = error.to_dict()

        assert data["code"] == "SECTION_RENDER_FAILED"
        assert data["recoverable"] is True
        assert data["section_id"] == "hero-1"
        assert data["cause"] == "boom"
        assert "timestamp" in data

    def test_profile_incomplete_lists_missing_fields(self) -> None:
        """Missing fields serialize as a list."""
        data = errors.profile_incomplete(["github_username"]).to_dict()

        assert data["missing_fields"] == ["github_username"]
        assert "section_id" not in data


class TestErrorGuards:
    """Tests for error classification helpers."""

    def test_is_render_error(self) -> None:
        """Only RenderError values pass."""
        assert errors.is_render_error(errors.profile_missing())
        assert not errors.is_render_error(ValueError("x"))
        assert not errors.is_render_error({"code": "UNKNOWN_ERROR"})

    def test_family_guards(self) -> None:
        """Each guard recognizes its own family of codes."""
        assert errors.is_template_error(errors.template_not_found("t"))
        assert errors.is_section_error(errors.section_data_invalid("s", "hero", "bad"))
        assert errors.is_profile_error(errors.profile_missing())
        assert errors.is_asset_error(errors.asset_not_found("a"))
        assert errors.is_capability_error(errors.capability_not_supported("t", "gifs"))
        assert not errors.is_section_error(errors.profile_missing())

    def test_is_recoverable(self) -> None:
        """The recoverable flag is reported as is."""
        assert errors.is_recoverable(errors.asset_params_missing("typing", ["lines"]))
        assert not errors.is_recoverable(errors.template_invalid("t", "broken"))


class TestExceptions:
    """Tests for programming-error exceptions."""

    def test_unhandled_section_type_error(self) -> None:
        """The default message names the section type."""
        exc = UnhandledSectionTypeError("hero")

        assert exc.section_type == "hero"
        assert str(exc) == "No renderer registered for section type: hero"

    def test_incomplete_registry_error(self) -> None:
        """The message lists every missing type."""
        exc = IncompleteRegistryError(["hero", "quote"])

        assert exc.missing == ["hero", "quote"]
        assert "hero, quote" in str(exc)
