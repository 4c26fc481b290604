"""Suite execution use-case tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from resolver_conformance.configuration.runtime_settings import ConformanceSettings
from resolver_conformance.suite_execution.run_contracts import ConformanceRunRequest, SuiteStatus
from resolver_conformance.suite_execution.suite_executor import (
    ConformanceRunError,
    execute_conformance_run,
)
from resolver_conformance.suite_loading.resolver_loader import ResolverFailure, ResolverUnderTest

DECLARATION = {
    "resolverName": "bank-balance",
    "inputs": [{"name": "amount", "type": "number", "required": True}],
    "outputs": [{"name": "balance", "type": "number"}],
    "failures": [{"code": "NOT_FOUND", "retries": 2}],
    "exampleAction": {"amount": 7},
}


def _write_suite(suites_dir: Path, name: str, spec: object, **files: str) -> Path:
    suite_dir = suites_dir / name
    suite_dir.mkdir(parents=True)
    (suite_dir / "test.json").write_text(
        spec if isinstance(spec, str) else json.dumps(spec), encoding="utf-8"
    )
    for filename, contents in files.items():
        (suite_dir / filename).write_text(contents, encoding="utf-8")
    return suite_dir


def _settings(tmp_path: Path) -> ConformanceSettings:
    return ConformanceSettings(
        suites_dir=tmp_path / "resolver-tests",
        override_dir=tmp_path / "overrides",
    )


def _resolver(function=None, declaration=DECLARATION) -> ResolverUnderTest:
    return ResolverUnderTest(
        function=function or (lambda action: {"balance": action.get("amount", 0)}),
        declaration=declaration,
    )


def _runtime_spec(test_id: str, *assertion_types: str, invoke: object = None) -> dict:
    fixture = {} if invoke is None else {"invoke": invoke}
    return {
        "test_id": test_id,
        "category": "resolver-runtime",
        "assertions": [
            {"id": f"{test_id}-{index}", "type": assertion_type}
            for index, assertion_type in enumerate(assertion_types, start=1)
        ],
        "fixtures": {"inputs": [fixture]},
    }


def _run(tmp_path: Path, resolver: ResolverUnderTest | None = None):
    return execute_conformance_run(
        ConformanceRunRequest(settings=_settings(tmp_path), resolver=resolver)
    )


def test_static_contract_suite_passes(tmp_path: Path) -> None:
    _write_suite(
        tmp_path / "resolver-tests",
        "R-001",
        {
            "test_id": "R-001",
            "assertions": [
                {"id": "R-001-1", "type": "inputs_valid"},
                {"id": "R-001-2", "type": "failures_valid"},
            ],
            "fixtures": {"inputs": [{"resolver_contract": "contract.json"}]},
        },
        **{"contract.json": json.dumps(DECLARATION)},
    )

    summary = _run(tmp_path)

    assert summary.failed == 0
    assert summary.ok is True
    assert summary.outcomes[0].status == SuiteStatus.PASSED


def test_runtime_suites_run_in_sorted_order_and_failures_are_counted(tmp_path: Path) -> None:
    suites_dir = tmp_path / "resolver-tests"
    _write_suite(
        suites_dir,
        "R-005",
        _runtime_spec("R-005", "rejects_missing_required_input", invoke={}),
    )
    _write_suite(
        suites_dir,
        "R-004",
        _runtime_spec("R-004", "output_fields_match_contract", invoke="__USE_EXAMPLE__"),
    )

    summary = _run(tmp_path, _resolver())

    assert [outcome.suite_name for outcome in summary.outcomes] == ["R-004", "R-005"]
    assert summary.outcomes[0].status == SuiteStatus.PASSED
    assert summary.outcomes[1].status == SuiteStatus.FAILED
    assert summary.failed == 1


def test_determinism_suite_uses_configured_test_id(tmp_path: Path) -> None:
    calls: list[object] = []

    def resolver(action: object) -> dict[str, int]:
        calls.append(action)
        return {"balance": len(calls)}

    _write_suite(
        tmp_path / "resolver-tests",
        "R-008",
        _runtime_spec("R-008", "deterministic_output", invoke={"amount": 1}),
    )

    summary = _run(tmp_path, _resolver(resolver))

    assert len(calls) == 3
    assert summary.outcomes[0].status == SuiteStatus.FAILED


def test_suite_failures_are_isolated(tmp_path: Path) -> None:
    suites_dir = tmp_path / "resolver-tests"
    _write_suite(suites_dir, "R-001", "{broken")
    _write_suite(
        suites_dir,
        "R-002",
        {"test_id": "R-002", "fixtures": {"inputs": [{"resolver_contract": "missing.json"}]}},
    )
    _write_suite(suites_dir, "R-003", {"test_id": "R-003", "fixtures": {"inputs": [{"x": 1}]}})
    _write_suite(
        suites_dir,
        "R-004",
        _runtime_spec("R-004", "output_is_object", invoke="__USE_EXAMPLE__"),
    )
    _write_suite(suites_dir, "R-005", _runtime_spec("R-005", "output_is_object", invoke={}))

    declaration = {key: value for key, value in DECLARATION.items() if key != "exampleAction"}
    summary = _run(tmp_path, _resolver(declaration=declaration))

    assert [outcome.status for outcome in summary.outcomes] == [
        SuiteStatus.LOAD_ERROR,
        SuiteStatus.LOAD_ERROR,
        SuiteStatus.UNRECOGNIZED_FIXTURE,
        SuiteStatus.CONFIGURATION_ERROR,
        SuiteStatus.PASSED,
    ]
    assert summary.failed == 4


def test_undecodable_suite_files_fail_only_their_own_suite(tmp_path: Path) -> None:
    suites_dir = tmp_path / "resolver-tests"
    broken_spec_dir = _write_suite(suites_dir, "R-001", "{}")
    (broken_spec_dir / "test.json").write_bytes(b'{"test_id": "\xff\xfe"}')
    broken_contract_dir = _write_suite(
        suites_dir,
        "R-002",
        {"test_id": "R-002", "fixtures": {"inputs": [{"resolver_contract": "c.yaml"}]}},
    )
    (broken_contract_dir / "c.yaml").write_bytes(b"resolverName: \xff\n")
    _write_suite(suites_dir, "R-003", _runtime_spec("R-003", "output_is_object", invoke={}))
    _write_suite(suites_dir, "R-004", _runtime_spec("R-004", "output_is_object", invoke={}))
    overrides = tmp_path / "overrides"
    overrides.mkdir()
    (overrides / "R-004.json").write_bytes(b'{"invoke": "\xff"}')

    summary = _run(tmp_path, _resolver())

    assert [outcome.status for outcome in summary.outcomes] == [
        SuiteStatus.LOAD_ERROR,
        SuiteStatus.LOAD_ERROR,
        SuiteStatus.PASSED,
        SuiteStatus.LOAD_ERROR,
    ]
    assert "Failed to parse test spec" in summary.outcomes[0].message
    assert "Failed to parse resolver contract" in summary.outcomes[1].message
    assert "Failed to parse fixture override" in summary.outcomes[3].message


def test_declared_resolver_failure_is_a_validation_outcome_not_a_crash(tmp_path: Path) -> None:
    def resolver(_: object) -> object:
        raise ResolverFailure("NOT_FOUND", "account missing")

    _write_suite(
        tmp_path / "resolver-tests",
        "R-006",
        _runtime_spec(
            "R-006",
            "resolver_failure_declared",
            "retry_count_within_declared_limit",
            invoke={},
        ),
    )

    summary = _run(tmp_path, _resolver(resolver))

    assert summary.outcomes[0].status == SuiteStatus.PASSED


def test_runtime_suite_without_resolver_is_configuration_error(tmp_path: Path) -> None:
    _write_suite(tmp_path / "resolver-tests", "R-004", _runtime_spec("R-004", "output_is_object"))

    summary = _run(tmp_path)

    assert summary.outcomes[0].status == SuiteStatus.CONFIGURATION_ERROR


def test_fixture_override_replaces_first_fixture(tmp_path: Path) -> None:
    calls: list[object] = []
    _write_suite(
        tmp_path / "resolver-tests",
        "R-004",
        _runtime_spec("R-004", "output_is_object", invoke={"amount": 1}),
    )
    overrides = tmp_path / "overrides"
    overrides.mkdir()
    (overrides / "R-004.json").write_text(json.dumps({"invoke": {"amount": 42}}), encoding="utf-8")

    _run(tmp_path, _resolver(lambda action: calls.append(action) or {"balance": 1}))

    assert calls == [{"amount": 42}]


def test_missing_or_empty_suites_directory_aborts_run(tmp_path: Path) -> None:
    with pytest.raises(ConformanceRunError, match="Suites directory not found"):
        _run(tmp_path)

    (tmp_path / "resolver-tests").mkdir()
    with pytest.raises(ConformanceRunError, match="No resolver test suites found"):
        _run(tmp_path)
