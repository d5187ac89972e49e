"""Build model dataclasses from JSON/YAML documents.

Documents may use camelCase (as exported by the web editor) or snake_case
keys. Nested mappings are turned into the dataclass named by the field's type
hint; sequences become tuples; enum-typed fields are parsed by value; scalars
are checked against their hint. Unknown keys are ignored.
"""

import json
import logging
import re
import types
from collections.abc import Mapping
from dataclasses import fields, is_dataclass
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any, TypeVar, Union, get_args, get_origin, get_type_hints

import yaml

logger = logging.getLogger(__name__)

T = TypeVar("T")

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")
_BOOLEAN_STRINGS = {"true": True, "false": False}


def to_snake_case(name: str) -> str:
    """Convert a camelCase or kebab-case key to snake_case.

    Example: ``githubUsername`` -> ``github_username``,
    ``supportsGitHubStats`` -> ``supports_github_stats``
    """
    snake = _CAMEL_BOUNDARY.sub("_", name).replace("-", "_").lower()
    return snake.replace("git_hub", "github")


def allows_none(type_hint: Any) -> bool:
    """Whether ``None`` is a valid value for a field with this type hint."""
    if type_hint is Any:
        return True
    if get_origin(type_hint) in (Union, types.UnionType):
        return type(None) in get_args(type_hint)
    return False


def coerce_scalar(type_hint: type, value: Any, *, field: str = "value") -> Any:
    """Check a scalar against ``bool``, ``int``, ``float`` or ``str``.

    Numeric strings are accepted for numbers and ``"true"``/``"false"`` for
    booleans. Numbers and dates are accepted for strings.

    Raises:
        ValueError: If the value has an incompatible type
    """
    if type_hint is bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in _BOOLEAN_STRINGS:
            return _BOOLEAN_STRINGS[value.strip().lower()]
        raise ValueError(f"{field} must be a boolean, got {value!r}")

    if type_hint is int:
        if isinstance(value, bool):
            raise ValueError(f"{field} must be an integer, got {value!r}")
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                pass
        raise ValueError(f"{field} must be an integer, got {value!r}")

    if type_hint is float:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
        if isinstance(value, str):
            try:
                return float(value.strip())
            except ValueError:
                pass
        raise ValueError(f"{field} must be a number, got {value!r}")

    if type_hint is str:
        if isinstance(value, str):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        if isinstance(value, date):
            return value.isoformat()
        raise ValueError(f"{field} must be a string, got {type(value).__name__}")

    return value


def coerce(type_hint: Any, value: Any, *, field: str = "value") -> Any:
    """Convert a raw document value to the shape described by a type hint.

    Args:
        type_hint: Resolved annotation of the target field
        value: Raw value from the parsed document
        field: Name used in error messages

    Returns:
        Converted value

    Raises:
        ValueError: If the value cannot take the required shape
    """
    if type_hint is Any:
        return value
    if value is None:
        if allows_none(type_hint):
            return None
        raise ValueError(f"{field} must not be null")

    origin = get_origin(type_hint)

    if origin in (Union, types.UnionType):
        options = [arg for arg in get_args(type_hint) if arg is not type(None)]
        if len(options) == 1:
            return coerce(options[0], value, field=field)
        if isinstance(value, Mapping):
            for option in options:
                if is_dataclass(option):
                    return coerce(option, value, field=field)
        return value

    if origin in (tuple, list):
        args = [arg for arg in get_args(type_hint) if arg is not Ellipsis]
        item_type = args[0] if args else Any
        if isinstance(value, (str, bytes, Mapping)):
            raise ValueError(f"Expected a list, got {type(value).__name__}")
        items = [coerce(item_type, item, field=f"{field}[{i}]") for i, item in enumerate(value)]
        return tuple(items) if origin is tuple else items

    if origin is dict:
        args = get_args(type_hint)
        value_type = args[1] if len(args) == 2 else Any
        if not isinstance(value, Mapping):
            raise ValueError(f"Expected a mapping, got {type(value).__name__}")
        return {
            key: coerce(value_type, item, field=f"{field}.{key}") for key, item in value.items()
        }

    if is_dataclass(type_hint) and isinstance(type_hint, type):
        if not isinstance(value, Mapping):
            return value
        builder = getattr(type_hint, "from_dict", None)
        if builder is not None:
            return builder(value)
        return from_mapping(type_hint, value)

    if isinstance(type_hint, type) and issubclass(type_hint, Enum):
        if isinstance(value, type_hint):
            return value
        return type_hint(value)

    return coerce_scalar(type_hint, value, field=field)


def from_mapping(cls: type[T], data: Mapping[str, Any]) -> T:
    """Instantiate a dataclass from a (possibly camelCase) mapping.

    ``null`` on a field that does not accept ``None`` falls back to the
    field's default.

    Args:
        cls: Target dataclass
        data: Raw mapping

    Returns:
        Instance of ``cls``

    Raises:
        ValueError: If the mapping is malformed or required fields are missing
    """
    if not isinstance(data, Mapping):
        raise ValueError(f"Expected a mapping for {cls.__name__}, got {type(data).__name__}")

    normalized = {to_snake_case(str(key)): value for key, value in data.items()}
    hints = get_type_hints(cls)
    kwargs: dict[str, Any] = {}

    for f in fields(cls):  # type: ignore[arg-type]
        if not f.init or f.name not in normalized:
            continue
        value = normalized[f.name]
        if value is None and not allows_none(hints[f.name]):
            continue
        kwargs[f.name] = coerce(hints[f.name], value, field=f"{cls.__name__}.{f.name}")

    try:
        return cls(**kwargs)
    except TypeError as e:
        raise ValueError(f"Invalid {cls.__name__}: {e}") from e


# =============================================================================
# Document files
# =============================================================================


def load_document(path: Path) -> dict[str, Any]:
    """Read a JSON or YAML document.

    ``.json`` files are parsed as JSON; everything else goes through
    ``yaml.safe_load`` (which also accepts JSON).

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the document is not a mapping
    """
    if not path.exists():
        raise FileNotFoundError(f"Document not found: {path}")

    with open(path, encoding="utf-8") as f:
        if path.suffix.lower() == ".json":
            data = json.load(f)
        else:
            data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top of {path}")

    logger.debug("Loaded document %s (%d top-level keys)", path, len(data))
    return data
