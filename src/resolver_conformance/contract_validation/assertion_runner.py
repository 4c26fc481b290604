"""Run a suite spec's assertions against a declaration or an invocation context."""

from __future__ import annotations

from collections.abc import Mapping

from .assertion_outcomes import (
    Assertion,
    AssertionFailure,
    AssertionReport,
    AssertionResult,
    AssertionStatus,
)
from .assertion_registry import AssertionTarget, HandlerResult, resolve_handler
from .guidance import guide
from .invocation_models import InvocationContext, ResolverDeclaration
from .suite_spec_models import SuiteSpec


def run_assertions(
    suite_spec: SuiteSpec,
    target: AssertionTarget,
    status: AssertionStatus | None = None,
) -> AssertionReport:
    """Evaluate every assertion of ``suite_spec`` and collect all failures."""
    if not suite_spec.assertions:
        return AssertionReport(ok=True, message="No assertions defined")

    resolved_status = status or AssertionStatus()
    failures = [
        failure
        for failure in (
            _evaluate(assertion, target, resolved_status) for assertion in suite_spec.assertions
        )
        if failure is not None
    ]

    return AssertionReport(
        ok=not failures,
        message=(
            "All assertions passed"
            if not failures
            else "\n".join(f"{failure.id}: {failure.message}" for failure in failures)
        ),
        failures=tuple(failures),
    )


def _evaluate(
    assertion: Assertion, target: AssertionTarget, status: AssertionStatus
) -> AssertionFailure | None:
    handler = resolve_handler(assertion.type)
    if handler is None:
        return AssertionFailure(
            id=assertion.id,
            severity=assertion.severity,
            message=f"Unknown assertion type: {assertion.type}",
        )

    try:
        passed, details = _normalize(handler(target, assertion, status))
        if passed:
            return None
        message = _failure_message(assertion, details, _declaration_for_guidance(target, status))
    except Exception as exc:  # pylint: disable=broad-exception-caught
        message = f"Assertion raised: {type(exc).__name__}: {exc}"
    return AssertionFailure(id=assertion.id, severity=assertion.severity, message=message)


def _normalize(result: HandlerResult) -> tuple[bool, Mapping[str, object] | None]:
    if isinstance(result, AssertionResult):
        return result.passed, result.details
    return bool(result), None


def _failure_message(
    assertion: Assertion,
    details: Mapping[str, object] | None,
    declaration: ResolverDeclaration | None,
) -> str:
    if details:
        return guide(assertion.type, details, declaration)
    if assertion.description:
        return assertion.description
    return f"Assertion failed: {assertion.type}"


def _declaration_for_guidance(
    target: AssertionTarget, status: AssertionStatus
) -> ResolverDeclaration | None:
    if status.resolver_meta is not None:
        return status.resolver_meta
    if isinstance(target, InvocationContext):
        return target.resolver_meta
    return target
