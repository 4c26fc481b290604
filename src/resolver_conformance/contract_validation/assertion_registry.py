"""Dispatch table from assertion kind to handler."""

from __future__ import annotations

from collections.abc import Callable, Mapping

from . import metadata_rules, runtime_rules
from .assertion_outcomes import Assertion, AssertionKind, AssertionResult, AssertionStatus
from .invocation_models import InvocationContext, ResolverDeclaration

AssertionTarget = ResolverDeclaration | InvocationContext
HandlerResult = bool | AssertionResult
AssertionHandler = Callable[[AssertionTarget, Assertion, AssertionStatus], HandlerResult]


def _declaration_of(
    target: AssertionTarget, status: AssertionStatus
) -> ResolverDeclaration | None:
    if isinstance(target, InvocationContext):
        return status.resolver_meta if status.resolver_meta is not None else target.resolver_meta
    return target


def _metadata_handler(
    rule: Callable[[ResolverDeclaration, Assertion], bool],
) -> AssertionHandler:
    def handler(target: AssertionTarget, assertion: Assertion, status: AssertionStatus) -> bool:
        declaration = _declaration_of(target, status)
        if declaration is None:
            return False
        return rule(declaration, assertion)

    return handler


def _runtime_handler(
    rule: Callable[[InvocationContext, ResolverDeclaration | None], HandlerResult],
) -> AssertionHandler:
    def handler(  # pylint: disable=unused-argument
        target: AssertionTarget, assertion: Assertion, status: AssertionStatus
    ) -> HandlerResult:
        # Runtime rules have nothing to observe on a bare declaration.
        if not isinstance(target, InvocationContext):
            return False
        return rule(target, _declaration_of(target, status))

    return handler


ASSERTION_HANDLERS: Mapping[AssertionKind, AssertionHandler] = {
    AssertionKind.FIELD_EQUALS: _metadata_handler(metadata_rules.field_equals),
    AssertionKind.INPUTS_VALID: _metadata_handler(
        lambda declaration, _: metadata_rules.inputs_valid(declaration)
    ),
    AssertionKind.OUTPUTS_VALID: _metadata_handler(
        lambda declaration, _: metadata_rules.outputs_valid(declaration)
    ),
    AssertionKind.FIELD_NAMES_NORMALIZED: _metadata_handler(metadata_rules.field_names_normalized),
    AssertionKind.FAILURES_VALID: _metadata_handler(
        lambda declaration, _: metadata_rules.failures_valid(declaration)
    ),
    AssertionKind.RESOLVER_IS_CALLABLE: _runtime_handler(
        lambda context, _: runtime_rules.resolver_is_callable(context)
    ),
    AssertionKind.RESOLVER_FAILURE_DECLARED: _runtime_handler(
        runtime_rules.resolver_failure_declared
    ),
    AssertionKind.REJECTS_MISSING_REQUIRED_INPUT: _runtime_handler(
        lambda context, _: runtime_rules.rejects_missing_required_input(context)
    ),
    AssertionKind.RETRY_COUNT_WITHIN_DECLARED_LIMIT: _runtime_handler(
        runtime_rules.retry_count_within_declared_limit
    ),
    AssertionKind.OUTPUT_IS_OBJECT: _runtime_handler(
        lambda context, _: runtime_rules.output_is_object(context)
    ),
    AssertionKind.OUTPUT_FIELDS_MATCH_CONTRACT: _runtime_handler(
        runtime_rules.output_fields_match_contract
    ),
    AssertionKind.DETERMINISTIC_OUTPUT: _runtime_handler(
        lambda context, _: runtime_rules.deterministic_output(context)
    ),
    AssertionKind.NO_GLOBAL_STATE_MUTATION: _runtime_handler(
        lambda context, _: runtime_rules.no_global_state_mutation(context)
    ),
}


def resolve_handler(type_name: object) -> AssertionHandler | None:
    """Return the handler registered for ``type_name`` or None when the type is unknown."""
    kind = AssertionKind.parse(type_name)
    if kind is None:
        return None
    return ASSERTION_HANDLERS.get(kind)
