"""Configuration loader service."""

from __future__ import annotations

import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import (
    DEFAULT_OVERRIDE_DIR,
    DEFAULT_SUITES_DIR,
    ConformanceSettings,
)

_KNOWN_KEYS = frozenset(
    {
        "suites_dir",
        "suite_pattern",
        "test_spec_filename",
        "override_dir",
        "determinism_test_id",
        "badge_dir",
    }
)


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str | None = None) -> ConformanceSettings:
    """Load and validate the configuration file.

    Without a path the defaults apply, resolved against the working directory.
    """
    if config_path is None:
        return ConformanceSettings()

    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    try:
        parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    unknown = sorted(str(key) for key in parsed if key not in _KNOWN_KEYS)
    if unknown:
        raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}")

    base_path = path.parent
    badge_dir = _optional_string(parsed.get("badge_dir"), "badge_dir")
    return ConformanceSettings(
        path=path,
        suites_dir=_resolve_path(
            base_path, _string_or_default(parsed, "suites_dir", DEFAULT_SUITES_DIR)
        ),
        suite_pattern=_parse_pattern(parsed.get("suite_pattern")),
        test_spec_filename=_string_or_default(
            parsed, "test_spec_filename", ConformanceSettings.test_spec_filename
        ),
        override_dir=_resolve_path(
            base_path, _string_or_default(parsed, "override_dir", DEFAULT_OVERRIDE_DIR)
        ),
        determinism_test_id=_string_or_default(
            parsed, "determinism_test_id", ConformanceSettings.determinism_test_id
        ),
        badge_dir=_resolve_path(base_path, badge_dir) if badge_dir else None,
    )


def _parse_pattern(value: Any) -> str:
    if value is None:
        return ConformanceSettings.suite_pattern
    pattern = _require_non_empty_string(value, "suite_pattern")
    try:
        re.compile(pattern)
    except re.error as exc:
        raise ConfigurationError(f"suite_pattern is not a valid regular expression: {exc}") from exc
    return pattern


def _string_or_default(section: Mapping[str, Any], field_name: str, default: str) -> str:
    value = section.get(field_name)
    if value is None:
        return default
    return _require_non_empty_string(value, field_name)


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None
