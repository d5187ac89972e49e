"""Profilegen configuration system.

Configuration is YAML-based with per-run CLI overrides (--theme, --format,
--output, --strict). Supports environment variable substitution (${VAR}).

Configuration file discovery (in priority order):
1. CLI --config argument
2. ./.profilegen/config.yaml
3. ./profilegen.yaml
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

if TYPE_CHECKING:
    from profilegen.engine.pipeline import RenderOptions

VALID_THEMES = {"light", "dark", "system"}
VALID_FORMATS = {"json", "summary"}

# =============================================================================
# Configuration Dataclasses
# =============================================================================


@dataclass
class RenderConfig:
    """Render defaults.

    Attributes:
        theme: Color scheme placed in the render context (light, dark, system)
        locale: Locale tag placed in the render context
        skip_validation: Skip the validation gate
        continue_on_error: Skip failed sections instead of failing the render
        max_workers: Sections rendered concurrently (1 renders sequentially)
    """

    theme: str = "system"
    locale: str = "en"
    skip_validation: bool = False
    continue_on_error: bool = True
    max_workers: int = 1

    def __post_init__(self) -> None:
        """Validate render configuration."""
        if self.theme not in VALID_THEMES:
            raise ValueError(f"Invalid theme: {self.theme}. Valid: {VALID_THEMES}")
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be at least 1 (got {self.max_workers})")

    def to_options(self) -> "RenderOptions":
        """Build pipeline options from this configuration."""
        from profilegen.engine.pipeline import RenderOptions

        return RenderOptions(
            theme=self.theme,
            locale=self.locale,
            skip_validation=self.skip_validation,
            continue_on_error=self.continue_on_error,
            max_workers=self.max_workers,
        )


@dataclass
class OutputConfig:
    """Output configuration.

    Attributes:
        path: Output file path (stdout when None)
        format: Output format (json, summary)
    """

    path: str | None = None
    format: str = "json"

    def __post_init__(self) -> None:
        """Validate output configuration."""
        if self.format not in VALID_FORMATS:
            raise ValueError(f"Invalid output format: {self.format}. Valid: {VALID_FORMATS}")


@dataclass
class CIConfig:
    """CI/CD-specific configuration.

    Attributes:
        fail_on_warning: Exit with error if the render produced warnings
    """

    fail_on_warning: bool = False


@dataclass
class ProfilegenConfig:
    """Top-level profilegen configuration.

    Attributes:
        render: Render defaults
        output: Output path and format
        ci: CI/CD settings
    """

    render: RenderConfig = field(default_factory=RenderConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    ci: CIConfig = field(default_factory=CIConfig)

    # Set by load_config
    _config_path: Path | None = field(default=None, repr=False)

    @property
    def config_path(self) -> Path | None:
        """Get the path to the config file that was loaded."""
        return self._config_path


# =============================================================================
# Environment Variable Substitution
# =============================================================================

_ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


def substitute_env_vars(value: Any) -> Any:
    """Substitute ``${VAR}`` references in config values.

    Args:
        value: Config value (string, dict, list, or other)

    Returns:
        Value with environment variables substituted

    Raises:
        ValueError: If a referenced variable is not set
    """
    if isinstance(value, str):

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                raise ValueError(f"Environment variable not set: {var_name}")
            return env_value

        return _ENV_VAR_PATTERN.sub(replace_var, value)

    elif isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [substitute_env_vars(v) for v in value]

    return value


# =============================================================================
# Config File Discovery
# =============================================================================


def find_config_file(start_path: Path | None = None) -> Path | None:
    """Find the configuration file in standard locations.

    Args:
        start_path: Starting directory for search (defaults to cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_path is None:
        start_path = Path.cwd()

    start_path = start_path.resolve()

    candidates = [
        start_path / ".profilegen" / "config.yaml",
        start_path / "profilegen.yaml",
    ]

    for candidate in candidates:
        if candidate.exists():
            return candidate

    return None


# =============================================================================
# Config Loading
# =============================================================================


def load_config_from_dict(data: dict[str, Any]) -> ProfilegenConfig:
    """Load configuration from a dictionary.

    Args:
        data: Configuration dictionary

    Returns:
        ProfilegenConfig instance

    Raises:
        ValueError: If a value is invalid or a referenced variable is unset
    """
    data = substitute_env_vars(data)

    config = ProfilegenConfig()

    if "render" in data:
        render_data = data["render"] or {}
        defaults = config.render
        config.render = RenderConfig(
            theme=render_data.get("theme", defaults.theme),
            locale=render_data.get("locale", defaults.locale),
            skip_validation=render_data.get("skip_validation", defaults.skip_validation),
            continue_on_error=render_data.get("continue_on_error", defaults.continue_on_error),
            max_workers=int(render_data.get("max_workers", defaults.max_workers)),
        )

    if "output" in data:
        output_data = data["output"] or {}
        config.output = OutputConfig(
            path=output_data.get("path", config.output.path),
            format=output_data.get("format", config.output.format),
        )

    if "ci" in data:
        ci_data = data["ci"] or {}
        config.ci = CIConfig(fail_on_warning=ci_data.get("fail_on_warning", False))

    return config


def load_config(
    config_path: Path | None = None,
    auto_discover: bool = True,
) -> ProfilegenConfig:
    """Load configuration from file.

    Args:
        config_path: Explicit path to config file
        auto_discover: Whether to search for config file if not specified

    Returns:
        ProfilegenConfig instance

    Raises:
        FileNotFoundError: If config_path specified but doesn't exist
        ValueError: If the file contents are invalid
    """
    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        found_path = config_path
    elif auto_discover:
        found_path = find_config_file()
    else:
        found_path = None

    if found_path is None:
        return ProfilegenConfig()

    with open(found_path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {found_path}")

    config = load_config_from_dict(data)
    config._config_path = found_path
    return config


def create_default_config() -> str:
    """Create default configuration YAML content.

    Returns:
        YAML string with default configuration and comments
    """
    return """# Profilegen Configuration

# Render defaults (CLI flags override per run)
render:
  theme: "system"            # light, dark, system
  locale: "en"
  skip_validation: false
  continue_on_error: true    # false: any section failure fails the render
  max_workers: 1             # >1 renders sections on a thread pool

# Output settings
output:
  # path: "build/profile.json"  # stdout when unset
  format: "json"             # json, summary

# CI/CD settings
ci:
  fail_on_warning: false
"""
