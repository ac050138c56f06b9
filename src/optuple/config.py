"""Configuration for optuple issue reporting.

Handles configuration loading from multiple sources with precedence:
explicit overrides > environment variables > .optuplerc > pyproject.toml > defaults
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

# tomllib is only available in Python 3.11+
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found]


@dataclass
class OptupleConfig:
    """Configuration for rendering validation issues.

    Attributes:
        path_separator: Separator used to join path segments (default: ".")
        max_rendered_issues: Maximum number of issues rendered in one report
            (default: 50)
        show_details: Whether kind-specific issue fields are rendered
            (default: True)
    """

    path_separator: str = "."
    max_rendered_issues: int = 50
    show_details: bool = True

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If any configuration value is invalid.
        """
        if not self.path_separator or not isinstance(self.path_separator, str):
            raise ValueError("path_separator must be a non-empty string")

        if isinstance(self.max_rendered_issues, bool) or not isinstance(
            self.max_rendered_issues, int
        ):
            raise ValueError("max_rendered_issues must be an integer")
        if self.max_rendered_issues < 1:
            raise ValueError("max_rendered_issues must be at least 1")

        if not isinstance(self.show_details, bool):
            raise ValueError("show_details must be a boolean")


_ENV_MAPPING = {
    "OPTUPLE_PATH_SEPARATOR": "path_separator",
    "OPTUPLE_MAX_RENDERED_ISSUES": "max_rendered_issues",
    "OPTUPLE_SHOW_DETAILS": "show_details",
}

_TRUE_STRINGS = frozenset({"1", "true", "yes", "on"})
_FALSE_STRINGS = frozenset({"0", "false", "no", "off"})


def _get_config_field_names() -> set[str]:
    """Get the set of valid configuration field names.

    Returns:
        Set of field names from OptupleConfig.
    """
    return {f.name for f in fields(OptupleConfig)}


def find_config_file(filename: str = ".optuplerc", start_dir: Path | None = None) -> Path | None:
    """Find a configuration file by traversing up the directory tree.

    Args:
        filename: Name of the config file to find.
        start_dir: Directory to start searching from. Defaults to current directory.

    Returns:
        Path to the config file if found, None otherwise.
    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        config_path = current / filename
        if config_path.is_file():
            return config_path

        parent = current.parent
        if parent == current:
            return None
        current = parent


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Load a TOML file and return its contents.

    Raises:
        OSError: If the file cannot be read.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    with open(path, "rb") as f:
        result: dict[str, Any] = tomllib.load(f)
        return result


def _filter_fields(data: dict[str, Any]) -> dict[str, Any]:
    valid_fields = _get_config_field_names()
    return {k: v for k, v in data.items() if k in valid_fields}


def _load_from_rc(start_dir: Path | None = None) -> dict[str, Any]:
    """Load configuration from the nearest .optuplerc file.

    Returns:
        Configuration values, or an empty dict if no usable file is found.
    """
    config_path = find_config_file(".optuplerc", start_dir)
    if config_path is None:
        return {}

    try:
        return _filter_fields(_load_toml_file(config_path))
    except (tomllib.TOMLDecodeError, OSError):
        return {}


def _load_from_pyproject(start_dir: Path | None = None) -> dict[str, Any]:
    """Load configuration from the pyproject.toml [tool.optuple] section.

    Returns:
        Configuration values, or an empty dict if none are found.
    """
    config_path = find_config_file("pyproject.toml", start_dir)
    if config_path is None:
        return {}

    try:
        data = _load_toml_file(config_path)
    except (tomllib.TOMLDecodeError, OSError):
        return {}

    section = data.get("tool", {}).get("optuple", {})
    if not isinstance(section, dict):
        return {}
    return _filter_fields(section)


def _coerce_env_value(key: str, raw: str) -> Any:
    """Convert an environment variable string to the field's type.

    Raises:
        ValueError: If the string cannot be converted.
    """
    if key == "max_rendered_issues":
        try:
            return int(raw)
        except ValueError:
            raise ValueError(f"max_rendered_issues must be an integer, got {raw!r}") from None
    if key == "show_details":
        lowered = raw.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
        raise ValueError(f"show_details must be a boolean, got {raw!r}")
    return raw


def _load_from_env() -> dict[str, Any]:
    """Load configuration from OPTUPLE_* environment variables.

    Returns:
        Configuration values found in the environment.
    """
    result: dict[str, Any] = {}
    for env_var, config_key in _ENV_MAPPING.items():
        value = os.environ.get(env_var)
        if value is not None:
            result[config_key] = _coerce_env_value(config_key, value)
    return result


def _merge_configs(*configs: dict[str, Any]) -> dict[str, Any]:
    """Merge configuration dictionaries; later ones take precedence."""
    result: dict[str, Any] = {}
    for config in configs:
        for key, value in config.items():
            if value is not None:
                result[key] = value
    return result


def load_config(
    overrides: dict[str, Any] | None = None,
    start_dir: Path | None = None,
) -> OptupleConfig:
    """Load configuration with full precedence chain.

    Precedence (highest to lowest):
    1. Explicit overrides
    2. Environment variables (OPTUPLE_*)
    3. .optuplerc file
    4. pyproject.toml [tool.optuple] section
    5. Default values

    Args:
        overrides: Explicit configuration values.
        start_dir: Directory to start searching for config files.

    Returns:
        Fully resolved OptupleConfig instance.

    Raises:
        ValueError: If the resulting configuration is invalid.
    """
    merged = _merge_configs(
        _load_from_pyproject(start_dir),
        _load_from_rc(start_dir),
        _load_from_env(),
        _filter_fields(overrides or {}),
    )
    return OptupleConfig(**merged)
