"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "conformance.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Conformance configuration template for resolver-conformance.
# Every key is optional; remove a key to keep its default.
# Relative paths are resolved against the directory of this file.

# Directory holding one sub-directory per suite (R-001, R-002, ...).
suites_dir: "resolver-tests"

# Regular expression a suite directory name must match.
suite_pattern: "^R-\\\\d+"

# Test spec file name inside each suite directory.
test_spec_filename: "test.json"

# Local fixture overrides: <override_dir>/<suite>.json replaces the suite's first fixture.
override_dir: "fixture-overrides"

# Suite whose resolver invocation is repeated to check for deterministic output.
determinism_test_id: "R-008"

# Directory for the certification badge (badges/<resolver>-badge.svg).
# badge_dir: "<OPTIONAL>"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML conformance configuration template with inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the conformance configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
