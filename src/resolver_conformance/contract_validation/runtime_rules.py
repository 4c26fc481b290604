"""Runtime checks over an invocation context and the resolver declaration."""

from __future__ import annotations

import json
from collections.abc import Mapping

from .assertion_outcomes import AssertionResult
from .invocation_models import (
    InvocationContext,
    OutputShape,
    ResolverDeclaration,
    declared_failure,
    is_number,
)

NO_OUTPUT = "no_output"
INVALID_OUTPUT_SHAPE = "invalid_output_shape"
MISSING_FIELDS = "missing_fields"


def resolver_is_callable(context: InvocationContext) -> bool:
    """Return True when the resolver under test can be called."""
    return callable(context.resolver)


def resolver_failure_declared(
    context: InvocationContext, declaration: ResolverDeclaration | None
) -> bool:
    """Return True when no error occurred or the error code is a declared failure code."""
    if context.error is None:
        return True
    return declared_failure(declaration, context.error.code) is not None


def rejects_missing_required_input(context: InvocationContext) -> bool:
    """Return True when invalid input was signalled by raising or by a returned ``error`` key."""
    if context.threw:
        return True
    return isinstance(context.output, Mapping) and "error" in context.output


def retry_count_within_declared_limit(
    context: InvocationContext, declaration: ResolverDeclaration | None
) -> bool:
    """Return True unless a declared failure's retry limit was exceeded."""
    code = context.error.code if context.error is not None else None
    failure = declared_failure(declaration, code)
    if failure is None:
        return True
    retries = failure.get("retries")
    if not is_number(retries):
        return False
    return context.retry_count <= retries


def output_is_object(context: InvocationContext) -> bool:
    """Return True when the output, wrapped or direct, is an object."""
    shape = context.output_shape
    return shape is not None and shape.is_object


def output_fields_match_contract(
    context: InvocationContext, declaration: ResolverDeclaration | None
) -> bool | AssertionResult:
    """Check that every declared output field is present in the returned output object."""
    shape = context.output_shape
    if shape is None:
        return AssertionResult(
            passed=False,
            details={"reason": NO_OUTPUT, "actualOutput": context.output},
        )
    if not shape.is_object:
        return AssertionResult(
            passed=False,
            details={"reason": INVALID_OUTPUT_SHAPE, "actualOutput": context.output},
        )

    expected_fields = _declared_output_names(declaration)
    missing_fields = _missing_fields(shape, expected_fields)
    if missing_fields:
        return AssertionResult(
            passed=False,
            details={
                "reason": MISSING_FIELDS,
                "missingFields": missing_fields,
                "actualOutput": context.output,
                "expectedFields": expected_fields,
            },
        )
    return True


def deterministic_output(context: InvocationContext) -> bool:
    """Return True when every recorded trial output equals the first one."""
    if len(context.outputs) < 2:
        return True
    first, *rest = (render_json(output, compact=True) for output in context.outputs)
    return all(candidate == first for candidate in rest)


def no_global_state_mutation(context: InvocationContext) -> bool:  # pylint: disable=unused-argument
    """Always pass.

    Global-state mutation is not checked yet; this handler exists so suites
    can declare the assertion.
    """
    return True


def _declared_output_names(declaration: ResolverDeclaration | None) -> list[str]:
    if not isinstance(declaration, Mapping):
        return []
    outputs = declaration.get("outputs")
    if not isinstance(outputs, list):
        return []
    return [
        item["name"]
        for item in outputs
        if isinstance(item, Mapping) and isinstance(item.get("name"), str)
    ]


def _missing_fields(shape: OutputShape, expected_fields: list[str]) -> list[str]:
    present = shape.value if isinstance(shape.value, Mapping) else {}
    return [name for name in expected_fields if name not in present]


def render_json(value: object, *, compact: bool = False) -> str:
    """Serialize ``value`` as JSON, keeping key order.

    Keys JSON cannot hold are replaced by their ``repr``. Objects without a
    custom ``repr`` are rendered from their type name and attributes, so equal
    objects render identically.
    """
    return json.dumps(
        _json_ready(value),
        ensure_ascii=False,
        separators=(",", ":") if compact else None,
        default=_describe_unserializable,
    )


def _json_ready(value: object) -> object:
    if isinstance(value, Mapping):
        return {_json_key(key): _json_ready(item) for key, item in value.items()}
    if isinstance(value, list | tuple):
        return [_json_ready(item) for item in value]
    return value


def _json_key(key: object) -> object:
    if key is None or isinstance(key, str | int | float | bool):
        return key
    return repr(key)


def _describe_unserializable(value: object) -> object:
    if type(value).__repr__ is not object.__repr__:
        return repr(value)
    attributes = getattr(value, "__dict__", None)
    if isinstance(attributes, dict):
        described: dict[object, object] = {"__type__": type(value).__qualname__}
        described.update((_json_key(key), _json_ready(item)) for key, item in attributes.items())
        return described
    return type(value).__qualname__
