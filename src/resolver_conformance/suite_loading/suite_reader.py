"""Suite discovery and test spec reading service."""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from resolver_conformance.contract_validation.assertion_outcomes import (
    DEFAULT_SEVERITY,
    Assertion,
)
from resolver_conformance.contract_validation.suite_spec_models import (
    Fixture,
    SuiteCategory,
    SuiteSpec,
)

DEFAULT_SUITE_PATTERN = r"^R-\d+"
DEFAULT_TEST_SPEC_FILENAME = "test.json"
_FIXTURE_OVERRIDE_SUFFIX = ".json"


class SuiteLoadError(Exception):
    """Raised when a suite directory or test spec cannot be loaded."""


def discover_suites(suites_dir: Path | str, pattern: str = DEFAULT_SUITE_PATTERN) -> list[str]:
    """Return suite directory names matching ``pattern`` in stable sorted order."""
    root = Path(suites_dir)
    if not root.is_dir():
        raise SuiteLoadError(f"Suites directory not found: {root}")
    matcher = re.compile(pattern)
    return sorted(
        entry.name for entry in root.iterdir() if entry.is_dir() and matcher.match(entry.name)
    )


def read_suite_spec(spec_path: Path | str) -> SuiteSpec:
    """Read and validate one suite's JSON test spec."""
    path = Path(spec_path)
    if not path.exists():
        raise SuiteLoadError(f"Test spec not found: {path}")
    try:
        parsed = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise SuiteLoadError(f"Failed to parse test spec {path}: {exc}") from exc
    return parse_suite_spec(parsed, default_test_id=path.parent.name)


def parse_suite_spec(document: Any, *, default_test_id: str = "") -> SuiteSpec:
    """Build a suite spec from a parsed test spec document."""
    if not isinstance(document, Mapping):
        raise SuiteLoadError("Test spec root must be an object.")

    test_id = document.get("test_id", default_test_id)
    if not isinstance(test_id, str) or not test_id.strip():
        raise SuiteLoadError("test_id must be a non-empty string.")

    assertions = tuple(
        _parse_assertion(entry, index)
        for index, entry in enumerate(_optional_list(document.get("assertions"), "assertions"))
    )
    fixtures_section = document.get("fixtures")
    if fixtures_section is None:
        fixtures_section = {}
    if not isinstance(fixtures_section, Mapping):
        raise SuiteLoadError("fixtures must be an object.")
    fixtures = tuple(
        parse_fixture(entry)
        for entry in _optional_list(fixtures_section.get("inputs"), "fixtures.inputs")
    )

    return SuiteSpec(
        test_id=test_id.strip(),
        category=_parse_category(document.get("category"), fixtures),
        assertions=assertions,
        fixtures=fixtures,
    )


def parse_fixture(document: Any) -> Fixture:
    """Build a fixture from one ``fixtures.inputs`` entry or an override document."""
    if not isinstance(document, Mapping):
        raise SuiteLoadError("Fixture entries must be objects.")
    resolver_contract = document.get("resolver_contract")
    if resolver_contract is not None and not isinstance(resolver_contract, str):
        raise SuiteLoadError("resolver_contract must be a string path.")
    return Fixture(resolver_contract=resolver_contract, invoke=document.get("invoke"))


def select_fixture(
    suite_spec: SuiteSpec,
    suite_name: str,
    override_dir: Path | str | None = None,
) -> Fixture | None:
    """Return the suite's first fixture, replaced by a local override file when present."""
    if override_dir is not None:
        override_path = Path(override_dir) / f"{suite_name}{_FIXTURE_OVERRIDE_SUFFIX}"
        if override_path.exists():
            try:
                override = json.loads(override_path.read_text(encoding="utf-8"))
            except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
                raise SuiteLoadError(
                    f"Failed to parse fixture override {override_path}: {exc}"
                ) from exc
            return parse_fixture(override)
    return suite_spec.fixtures[0] if suite_spec.fixtures else None


def _parse_assertion(entry: Any, index: int) -> Assertion:
    if not isinstance(entry, Mapping):
        raise SuiteLoadError(f"assertions[{index}] must be an object.")
    assertion_id = entry.get("id")
    assertion_type = entry.get("type")
    if not isinstance(assertion_id, str) or not assertion_id:
        raise SuiteLoadError(f"assertions[{index}].id must be a non-empty string.")
    if not isinstance(assertion_type, str) or not assertion_type:
        raise SuiteLoadError(f"assertions[{index}].type must be a non-empty string.")
    severity = entry.get("severity") or DEFAULT_SEVERITY
    description = entry.get("description") or entry.get("message")
    field = entry.get("field")
    return Assertion(
        id=assertion_id,
        type=assertion_type,
        severity=str(severity),
        description=description if isinstance(description, str) else None,
        field=field if isinstance(field, str) else None,
        expected=entry.get("expected"),
    )


def _parse_category(value: Any, fixtures: tuple[Fixture, ...]) -> SuiteCategory | None:
    if value is not None:
        try:
            return SuiteCategory(value)
        except ValueError as exc:
            raise SuiteLoadError(f"Unsupported suite category: {value}") from exc
    if fixtures and fixtures[0].resolver_contract is not None:
        return SuiteCategory.STATIC_CONTRACT
    return None


def _optional_list(value: Any, field_name: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise SuiteLoadError(f"{field_name} must be a list.")
    return value
