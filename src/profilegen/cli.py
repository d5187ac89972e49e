"""Profilegen CLI interface.

Commands:
- render: Render a template against a profile (JSON IR or Markdown summary)
- validate: Check a template and profile without rendering
- analyze: Show section statistics for a template
- init: Initialize profilegen configuration

Global options:
- --config: Path to configuration file
- --verbose: Enable verbose output with timestamps
- --quiet: Suppress info messages
- --ci: JSON log lines for CI/CD
- --version: Show version and exit
"""

import json
import logging
from pathlib import Path
from typing import Annotated, Any

import typer
import yaml

from profilegen import __version__
from profilegen.config import VALID_FORMATS, VALID_THEMES, ProfilegenConfig, load_config
from profilegen.models import Template, UserProfile
from profilegen.models.loading import load_document
from profilegen.utils.logging import configure_from_cli, get_logger

app = typer.Typer(
    name="profilegen",
    help="Render profile templates into a typed block document",
    add_completion=False,
    no_args_is_help=True,
)

# Global state
_config: ProfilegenConfig | None = None
_logger = get_logger()

TemplateArg = Annotated[
    Path,
    typer.Argument(help="Template document (JSON or YAML)", exists=True, dir_okay=False),
]
ProfileArg = Annotated[
    Path,
    typer.Argument(help="User profile document (JSON or YAML)", exists=True, dir_okay=False),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"profilegen {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output with timestamps",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress info messages (warnings and errors only)",
        ),
    ] = False,
    ci: Annotated[
        bool,
        typer.Option(
            "--ci",
            help="Enable CI mode with JSON log lines",
        ),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """Profilegen - profile template rendering engine.

    Turns a template and a user profile into an ordered list of sections made
    of typed content blocks.
    """
    global _config

    configure_from_cli(verbose=verbose, quiet=quiet, ci=ci)

    try:
        _config = load_config(config_path=config)
        if _config.config_path:
            _logger.debug("Loaded config from: %s", _config.config_path)
    except FileNotFoundError as e:
        _logger.error(str(e))
        raise typer.Exit(1)
    except (ValueError, yaml.YAMLError) as e:
        _logger.error("Failed to load config: %s", e)
        raise typer.Exit(1)


def _load(model: type[Template] | type[UserProfile], path: Path) -> Any:
    """Load a template or profile document, exiting with 1 on failure."""
    try:
        return model.from_dict(load_document(path))
    except FileNotFoundError as e:
        _logger.error(str(e))
        raise typer.Exit(1)
    except (ValueError, yaml.YAMLError) as e:
        _logger.error("Invalid %s document %s: %s", model.__name__, path, e)
        raise typer.Exit(1)


# =============================================================================
# render command
# =============================================================================


@app.command()
def render(
    template_path: TemplateArg,
    profile_path: ProfileArg,
    theme: Annotated[
        str | None,
        typer.Option(
            "--theme",
            "-t",
            help="Color scheme: light, dark, system (overrides config)",
        ),
    ] = None,
    locale: Annotated[
        str | None,
        typer.Option(
            "--locale",
            help="Locale tag (overrides config)",
        ),
    ] = None,
    skip_validation: Annotated[
        bool,
        typer.Option(
            "--skip-validation",
            help="Render without the validation gate",
        ),
    ] = False,
    strict: Annotated[
        bool,
        typer.Option(
            "--strict",
            help="Fail on any section error instead of skipping it",
        ),
    ] = False,
    format: Annotated[
        str | None,
        typer.Option(
            "--format",
            "-f",
            help="Output format: json, summary (overrides config)",
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output file path (stdout when omitted)",
        ),
    ] = None,
) -> None:
    """Render a template against a user profile.

    Exit codes:
        0: Rendered successfully
        1: Invalid input or render failure
        2: Rendered with warnings (only with ci.fail_on_warning)
    """
    from profilegen.engine import RenderPipeline
    from profilegen.templates import SummaryRenderer

    config = _config or ProfilegenConfig()
    options = config.render.to_options()
    if theme is not None:
        if theme not in VALID_THEMES:
            _logger.error("Invalid theme: %s. Valid: %s", theme, ", ".join(sorted(VALID_THEMES)))
            raise typer.Exit(1)
        options.theme = theme
    if locale is not None:
        options.locale = locale
    if skip_validation:
        options.skip_validation = True
    if strict:
        options.continue_on_error = False

    output_format = format or config.output.format
    if output_format not in VALID_FORMATS:
        _logger.error("Invalid format: %s. Use 'json' or 'summary'", output_format)
        raise typer.Exit(1)
    output_path = output or (Path(config.output.path) if config.output.path else None)

    template: Template = _load(Template, template_path)
    profile: UserProfile = _load(UserProfile, profile_path)

    _logger.info("Rendering template %s", template.id)
    result = RenderPipeline().run(template, profile, options)

    if not result.success or result.output is None:
        _logger.error("Render failed with %d error(s)", len(result.errors))
        for error in result.errors:
            _logger.error("  [%s] %s", error.code.value, error.message)
        if output_format == "json":
            typer.echo(json.dumps(result.to_dict(), indent=2))
        raise typer.Exit(1)

    metadata = result.output.metadata
    _logger.structured(
        logging.INFO,
        "Render complete",
        template=metadata.template_id,
        sections_rendered=metadata.sections_rendered,
        sections_skipped=metadata.sections_skipped,
        warnings=len(metadata.warnings),
    )
    for warning in metadata.warnings:
        _logger.warning("  [%s] %s", warning.code, warning.message)

    if output_format == "summary":
        content = SummaryRenderer().render(result.output)
    else:
        content = json.dumps(result.to_dict(), indent=2, ensure_ascii=False) + "\n"

    if output_path is not None:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")
        typer.echo(f"📄 Render output written to: {output_path}")
    else:
        typer.echo(content, nl=False)

    if metadata.warnings and config.ci.fail_on_warning:
        raise typer.Exit(2)


# =============================================================================
# validate command
# =============================================================================


@app.command()
def validate(
    template_path: TemplateArg,
    profile_path: ProfileArg,
) -> None:
    """Validate a template and profile without rendering.

    Exit codes:
        0: Valid
        1: Invalid input or validation errors
    """
    from profilegen.engine import validate as validate_inputs

    template: Template = _load(Template, template_path)
    profile: UserProfile = _load(UserProfile, profile_path)

    result = validate_inputs(template, profile)

    if result.valid:
        typer.echo(f"✅ Template is valid: {template.id}")
        raise typer.Exit(0)

    typer.echo(f"❌ Validation failed: {template.id}")
    for error in result.errors:
        typer.echo(f"   • [{error.code.value}] {error.message}")
    raise typer.Exit(1)


# =============================================================================
# analyze command
# =============================================================================


@app.command()
def analyze(
    template_path: TemplateArg,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output results as JSON",
        ),
    ] = False,
) -> None:
    """Show section statistics for a template."""
    from profilegen.engine import analyze_template

    template: Template = _load(Template, template_path)
    analysis = analyze_template(template)

    if json_output:
        typer.echo(json.dumps(analysis.to_dict(), indent=2))
        return

    typer.echo(f"\n📊 Template: {template.id}\n")
    typer.echo(f"  Sections:   {analysis.total_sections} ({analysis.enabled_sections} enabled)")
    typer.echo(f"  Types:      {', '.join(analysis.section_types) or '-'}")
    typer.echo(f"  Complexity: {analysis.estimated_complexity}")


# =============================================================================
# init command
# =============================================================================


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            help="Overwrite existing config",
        ),
    ] = False,
) -> None:
    """Initialize profilegen configuration in .profilegen/config.yaml."""
    from profilegen.config import create_default_config

    config_dir = Path(".profilegen")
    config_file = config_dir / "config.yaml"

    if config_file.exists() and not force:
        _logger.error("Config already exists: %s", config_file)
        _logger.info("Use --force to overwrite")
        raise typer.Exit(1)

    config_dir.mkdir(exist_ok=True)
    config_file.write_text(create_default_config())
    _logger.info("Created config: %s", config_file)

    typer.echo("\n✅ Profilegen configuration initialized")
    typer.echo(f"   Config: {config_file}")


if __name__ == "__main__":
    app()
