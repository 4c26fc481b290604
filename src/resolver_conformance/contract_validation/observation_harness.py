"""Resolver invocation harness producing an invocation context."""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from typing import Any

from .invocation_models import (
    InvocationContext,
    InvocationError,
    ResolverCallable,
    ResolverDeclaration,
    declared_failure,
    is_number,
)
from .suite_spec_models import Fixture, SuiteSpec

USE_EXAMPLE_MARKER = "__USE_EXAMPLE__"
DEFAULT_DETERMINISM_TEST_ID = "R-008"
DETERMINISM_TRIAL_COUNT = 3


class InvocationConfigurationError(Exception):
    """Raised when a runtime suite cannot build the resolver input."""


async def observe(
    resolver: ResolverCallable | None,
    declaration: ResolverDeclaration | None,
    suite_spec: SuiteSpec,
    fixture: Fixture,
    *,
    determinism_test_id: str = DEFAULT_DETERMINISM_TEST_ID,
) -> InvocationContext:
    """Invoke the resolver for one runtime suite and record what happened.

    The determinism suite runs DETERMINISM_TRIAL_COUNT trials, every other
    suite runs one. Trials run one after another and the first raised error
    stops the remaining trials. Errors raised by the resolver are recorded on
    the context; only a missing example action raises.

    Raises:
      InvocationConfigurationError: The fixture asks for the declared example
        action but the declaration has none.
    """
    resolver_input = build_resolver_input(declaration, fixture)
    context = InvocationContext(resolver=resolver, resolver_meta=declaration)
    trials = DETERMINISM_TRIAL_COUNT if suite_spec.test_id == determinism_test_id else 1

    for _ in range(trials):
        try:
            result = await _invoke(resolver, resolver_input)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            _record_error(context, exc, declaration)
            break
        context.outputs.append(result)
        context.output = result
    return context


def build_resolver_input(declaration: ResolverDeclaration | None, fixture: Fixture) -> Any:
    """Return the value the resolver is invoked with for ``fixture``."""
    if fixture.invoke == USE_EXAMPLE_MARKER:
        if not isinstance(declaration, Mapping) or declaration.get("exampleAction") is None:
            raise InvocationConfigurationError(
                "Fixture requests the declared example action but the resolver declares "
                "no exampleAction."
            )
        return declaration["exampleAction"]
    if fixture.invoke is None:
        return {}
    return fixture.invoke


async def _invoke(resolver: ResolverCallable | None, resolver_input: Any) -> Any:
    if resolver is None:
        raise TypeError("No resolver callable was supplied.")
    result = resolver(resolver_input)
    if inspect.isawaitable(result):
        result = await result
    return result


def _record_error(
    context: InvocationContext, exc: Exception, declaration: ResolverDeclaration | None
) -> None:
    code = getattr(exc, "code", None)
    context.threw = True
    context.error = InvocationError(
        message=str(exc),
        code=code if isinstance(code, str) else None,
    )
    failure = declared_failure(declaration, context.error.code)
    if failure is not None and is_number(failure.get("retries")):
        context.retry_count = failure["retries"]
