"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from resolver_conformance.contract_validation.observation_harness import (
    DEFAULT_DETERMINISM_TEST_ID,
)
from resolver_conformance.suite_loading.suite_reader import (
    DEFAULT_SUITE_PATTERN,
    DEFAULT_TEST_SPEC_FILENAME,
)

DEFAULT_SUITES_DIR = "resolver-tests"
DEFAULT_OVERRIDE_DIR = "fixture-overrides"


@dataclass(frozen=True)
class ConformanceSettings:
    """Normalized settings for one conformance run."""

    path: Path | None = None
    suites_dir: Path = Path(DEFAULT_SUITES_DIR)
    suite_pattern: str = DEFAULT_SUITE_PATTERN
    test_spec_filename: str = DEFAULT_TEST_SPEC_FILENAME
    override_dir: Path = Path(DEFAULT_OVERRIDE_DIR)
    determinism_test_id: str = DEFAULT_DETERMINISM_TEST_ID
    badge_dir: Path | None = None
