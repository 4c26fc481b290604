"""Suite execution use-case service."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from resolver_conformance.configuration.runtime_settings import ConformanceSettings
from resolver_conformance.contract_validation import (
    AssertionStatus,
    Fixture,
    InvocationConfigurationError,
    SuiteCategory,
    SuiteSpec,
    observe,
    run_assertions,
)
from resolver_conformance.contract_validation.assertion_outcomes import AssertionReport
from resolver_conformance.suite_loading import (
    ContractLoadError,
    ResolverUnderTest,
    SuiteLoadError,
    discover_suites,
    load_contract,
    read_suite_spec,
    select_fixture,
)

from .run_contracts import (
    ConformanceRunRequest,
    ConformanceRunSummary,
    SuiteOutcome,
    SuiteStatus,
)

_LOGGER = logging.getLogger(__name__)
_LOGGER.addHandler(logging.NullHandler())


class ConformanceRunError(Exception):
    """Raised when a conformance run cannot start."""


def execute_conformance_run(request: ConformanceRunRequest) -> ConformanceRunSummary:
    """Run every suite of ``request`` to completion and return the summary."""
    return asyncio.run(run_all_suites(request))


async def run_all_suites(request: ConformanceRunRequest) -> ConformanceRunSummary:
    """Run suites one after another; a failing suite never stops the run.

    Raises:
      ConformanceRunError: No suites were found to run.
    """
    settings = request.settings
    suite_names = _resolve_suite_names(request)
    if not suite_names:
        raise ConformanceRunError(f"No resolver test suites found in {settings.suites_dir}")

    outcomes: list[SuiteOutcome] = []
    for suite_name in suite_names:
        outcome = await _run_suite(suite_name, settings, request.resolver)
        _LOGGER.debug("suite %s finished with %s", suite_name, outcome.status.value)
        outcomes.append(outcome)
    return ConformanceRunSummary(outcomes=tuple(outcomes))


def _resolve_suite_names(request: ConformanceRunRequest) -> list[str]:
    if request.suites is not None:
        return sorted(request.suites)
    try:
        return discover_suites(request.settings.suites_dir, request.settings.suite_pattern)
    except SuiteLoadError as exc:
        raise ConformanceRunError(str(exc)) from exc


async def _run_suite(
    suite_name: str,
    settings: ConformanceSettings,
    resolver: ResolverUnderTest | None,
) -> SuiteOutcome:
    suite_dir = settings.suites_dir / suite_name
    try:
        suite_spec = read_suite_spec(suite_dir / settings.test_spec_filename)
        fixture = select_fixture(suite_spec, suite_name, settings.override_dir)
    except SuiteLoadError as exc:
        _LOGGER.warning("failed to load suite %s: %s", suite_name, exc)
        return SuiteOutcome(suite_name, SuiteStatus.LOAD_ERROR, str(exc))

    if fixture is not None and fixture.resolver_contract is not None:
        return _run_static_suite(suite_name, suite_spec, suite_dir / fixture.resolver_contract)
    if fixture is not None and suite_spec.category == SuiteCategory.RESOLVER_RUNTIME:
        return await _run_runtime_suite(suite_name, suite_spec, fixture, settings, resolver)
    return SuiteOutcome(
        suite_name,
        SuiteStatus.UNRECOGNIZED_FIXTURE,
        "Fixture names neither a resolver_contract nor a resolver-runtime invocation.",
    )


def _run_static_suite(suite_name: str, suite_spec: SuiteSpec, contract_path: Path) -> SuiteOutcome:
    try:
        declaration = load_contract(contract_path)
    except ContractLoadError as exc:
        _LOGGER.warning("failed to load contract for suite %s: %s", suite_name, exc)
        return SuiteOutcome(suite_name, SuiteStatus.LOAD_ERROR, str(exc))
    try:
        report = run_assertions(suite_spec, declaration)
    except Exception as exc:  # pylint: disable=broad-exception-caught
        _LOGGER.exception("suite %s crashed", suite_name)
        return SuiteOutcome(suite_name, SuiteStatus.CRASHED, f"Suite crashed: {exc}")
    return _outcome_from_report(suite_name, report)


async def _run_runtime_suite(
    suite_name: str,
    suite_spec: SuiteSpec,
    fixture: Fixture,
    settings: ConformanceSettings,
    resolver: ResolverUnderTest | None,
) -> SuiteOutcome:
    if resolver is None:
        return SuiteOutcome(
            suite_name,
            SuiteStatus.CONFIGURATION_ERROR,
            "Runtime suite requires a resolver but none was supplied.",
        )
    try:
        context = await observe(
            resolver.function,
            resolver.declaration,
            suite_spec,
            fixture,
            determinism_test_id=settings.determinism_test_id,
        )
        report = run_assertions(
            suite_spec,
            context,
            AssertionStatus(resolver_meta=resolver.declaration),
        )
    except InvocationConfigurationError as exc:
        _LOGGER.warning("suite %s is misconfigured: %s", suite_name, exc)
        return SuiteOutcome(suite_name, SuiteStatus.CONFIGURATION_ERROR, str(exc))
    except Exception as exc:  # pylint: disable=broad-exception-caught
        _LOGGER.exception("suite %s crashed", suite_name)
        return SuiteOutcome(suite_name, SuiteStatus.CRASHED, f"Suite crashed: {exc}")
    return _outcome_from_report(suite_name, report)


def _outcome_from_report(suite_name: str, report: AssertionReport) -> SuiteOutcome:
    status = SuiteStatus.PASSED if report.ok else SuiteStatus.FAILED
    return SuiteOutcome(suite_name, status, report.message, report)
