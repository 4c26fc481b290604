"""Runtime rule tests."""

from __future__ import annotations

import pytest
from resolver_conformance.contract_validation.assertion_outcomes import AssertionResult
from resolver_conformance.contract_validation.invocation_models import (
    InvocationContext,
    InvocationError,
    OutputMode,
    classify_output,
)
from resolver_conformance.contract_validation.runtime_rules import (
    deterministic_output,
    no_global_state_mutation,
    output_fields_match_contract,
    output_is_object,
    rejects_missing_required_input,
    resolver_failure_declared,
    resolver_is_callable,
    render_json,
    retry_count_within_declared_limit,
)

DECLARATION = {
    "resolverName": "bank-balance",
    "inputs": [{"name": "amount", "type": "number", "required": True}],
    "outputs": [{"name": "balance", "type": "number"}],
    "failures": [{"code": "NOT_FOUND", "retries": 2}],
}


def _context(**fields: object) -> InvocationContext:
    context = InvocationContext(resolver=lambda _: None, resolver_meta=DECLARATION)
    for name, value in fields.items():
        setattr(context, name, value)
    return context


def test_classify_output_distinguishes_wrapped_and_direct_values() -> None:
    wrapped = classify_output({"output": {"a": 1}})
    direct = classify_output({"a": 1})

    assert wrapped is not None and wrapped.mode == OutputMode.WRAPPED
    assert wrapped.value == {"a": 1}
    assert direct is not None and direct.mode == OutputMode.DIRECT
    assert classify_output(None) is None


def test_resolver_is_callable_is_structural() -> None:
    assert resolver_is_callable(_context())
    assert not resolver_is_callable(_context(resolver="not callable"))
    assert not resolver_is_callable(_context(resolver=None))


def test_failure_declared_passes_without_error_and_checks_code_otherwise() -> None:
    assert resolver_failure_declared(_context(), DECLARATION)
    assert resolver_failure_declared(
        _context(error=InvocationError(message="missing", code="NOT_FOUND"), threw=True),
        DECLARATION,
    )
    assert not resolver_failure_declared(
        _context(error=InvocationError(message="x", code="TIMEOUT"), threw=True), DECLARATION
    )
    assert not resolver_failure_declared(
        _context(error=InvocationError(message="boom"), threw=True), DECLARATION
    )


def test_rejects_missing_required_input_accepts_raise_or_error_object() -> None:
    assert rejects_missing_required_input(_context(threw=True))
    assert rejects_missing_required_input(_context(output={"error": "INVALID_INPUT"}))
    assert not rejects_missing_required_input(_context(output={"balance": 10}))
    assert not rejects_missing_required_input(_context(output=["error"]))


@pytest.mark.parametrize("retry_count", [0, 5, 100])
def test_retry_limit_passes_for_undeclared_codes(retry_count: int) -> None:
    context = _context(
        error=InvocationError(message="x", code="TIMEOUT"), threw=True, retry_count=retry_count
    )

    assert retry_count_within_declared_limit(context, DECLARATION)


def test_retry_limit_compares_declared_retries() -> None:
    error = InvocationError(message="missing", code="NOT_FOUND")

    assert retry_count_within_declared_limit(_context(error=error, retry_count=2), DECLARATION)
    assert not retry_count_within_declared_limit(_context(error=error, retry_count=3), DECLARATION)


@pytest.mark.parametrize("output", [{"output": {"a": 1}}, {"a": 1}])
def test_output_is_object_accepts_wrapped_and_direct_objects(output: object) -> None:
    assert output_is_object(_context(output=output))


@pytest.mark.parametrize("output", [None, [], "string", {"output": None}, {"output": [1]}])
def test_output_is_object_rejects_non_objects(output: object) -> None:
    assert not output_is_object(_context(output=output))


def test_output_fields_match_contract_passes_for_direct_output() -> None:
    assert output_fields_match_contract(_context(output={"balance": 10}), DECLARATION) is True


def test_output_fields_match_contract_reports_missing_fields() -> None:
    result = output_fields_match_contract(_context(output={"output": {}}), DECLARATION)

    assert isinstance(result, AssertionResult)
    assert result.passed is False
    assert result.details is not None
    assert result.details["reason"] == "missing_fields"
    assert result.details["missingFields"] == ["balance"]
    assert result.details["expectedFields"] == ["balance"]
    assert result.details["actualOutput"] == {"output": {}}


def test_output_fields_match_contract_reports_shape_failures() -> None:
    no_output = output_fields_match_contract(_context(), DECLARATION)
    invalid = output_fields_match_contract(_context(output={"output": "text"}), DECLARATION)

    assert isinstance(no_output, AssertionResult)
    assert no_output.details == {"reason": "no_output", "actualOutput": None}
    assert isinstance(invalid, AssertionResult)
    assert invalid.details == {
        "reason": "invalid_output_shape",
        "actualOutput": {"output": "text"},
    }


def test_deterministic_output_trivially_passes_below_two_outputs() -> None:
    assert deterministic_output(_context(outputs=[]))
    assert deterministic_output(_context(outputs=[{"a": 1}]))


def test_deterministic_output_compares_every_output_to_the_first() -> None:
    assert deterministic_output(_context(outputs=[{"a": [1, 2]}, {"a": [1, 2]}, {"a": [1, 2]}]))
    assert not deterministic_output(_context(outputs=[{"a": 1}, {"a": 1}, {"a": 2}]))
    assert not deterministic_output(_context(outputs=[{"a": [1, 2]}, {"a": [2, 1]}]))


def test_no_global_state_mutation_always_passes() -> None:
    assert no_global_state_mutation(_context())
    assert no_global_state_mutation(_context(threw=True, outputs=[1, 2]))


class _Point:
    def __init__(self, x: int) -> None:
        self.x = x


def test_deterministic_output_compares_plain_objects_by_attributes() -> None:
    assert deterministic_output(_context(outputs=[{"p": _Point(1)}, {"p": _Point(1)}]))
    assert not deterministic_output(_context(outputs=[{"p": _Point(1)}, {"p": _Point(2)}]))


def test_deterministic_output_tolerates_non_string_keys() -> None:
    assert deterministic_output(_context(outputs=[{(1, 2): "x"}, {(1, 2): "x"}]))
    assert not deterministic_output(_context(outputs=[{(1, 2): "x"}, {(2, 1): "x"}]))


def test_render_json_keeps_key_order_and_replaces_unsupported_keys() -> None:
    assert render_json({"b": 1, "a": 2}, compact=True) == '{"b":1,"a":2}'
    assert render_json({(1, 2): "x"}) == '{"(1, 2)": "x"}'
    assert render_json({"p": _Point(3)}, compact=True) == '{"p":{"__type__":"_Point","x":3}}'


def test_retry_limit_accepts_float_declared_retries() -> None:
    declaration = {**DECLARATION, "failures": [{"code": "NOT_FOUND", "retries": 2.0}]}
    context = _context(error=InvocationError(message="x", code="NOT_FOUND"), retry_count=2.0)

    assert retry_count_within_declared_limit(context, declaration)
