"""Remediation text for failed assertions."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence

from .assertion_outcomes import AssertionKind
from .invocation_models import ResolverDeclaration
from .runtime_rules import INVALID_OUTPUT_SHAPE, MISSING_FIELDS, NO_OUTPUT, render_json

# Evaluated in order, first match against resolverName wins.
RESOLVER_FAMILY_TIPS: tuple[tuple[re.Pattern[str], str], ...] = (
    (
        re.compile(r"bank|account|balance", re.IGNORECASE),
        "Banking resolvers usually return the account balance as a number, "
        'e.g. {"balance": 1250.5, "currency": "USD"}.',
    ),
    (
        re.compile(r"pay|invoice|billing", re.IGNORECASE),
        "Payment resolvers should echo a transaction identifier and status, "
        'e.g. {"transactionId": "tx_123", "status": "settled"}.',
    ),
    (
        re.compile(r"weather|forecast", re.IGNORECASE),
        "Weather resolvers should return measured values with units, "
        'e.g. {"temperature": 21.4, "unit": "C"}.',
    ),
    (
        re.compile(r"llm|chat|completion|prompt", re.IGNORECASE),
        "Language-model resolvers should return the generated text under the "
        'declared field name, e.g. {"response": "..."}.',
    ),
)

DEFAULT_TIP = "Return a plain object whose keys are exactly the declared output names."

_REMEDIATION_STEPS = (
    "1. Return an object (or {\"output\": {...}}) from the resolver on success.",
    "2. Include every field listed in the declaration's outputs.",
    "3. Keep field names identical to the declared names, including case.",
)


def guide(
    assertion_type: str,
    details: Mapping[str, object] | None,
    declaration: ResolverDeclaration | None,
) -> str:
    """Build a human diagnostic for one failed assertion."""
    details = details or {}
    kind = AssertionKind.parse(assertion_type)
    if kind == AssertionKind.OUTPUT_FIELDS_MATCH_CONTRACT:
        return _guide_output_fields(details, declaration)
    if kind == AssertionKind.REJECTS_MISSING_REQUIRED_INPUT:
        return (
            "Resolver accepted input that is missing required fields. Either raise an "
            'error or return an object with an "error" key when a required input is absent.'
        )
    if kind == AssertionKind.OUTPUT_IS_OBJECT:
        return (
            "Resolver output must be an object, either returned directly or wrapped as "
            '{"output": {...}}. Got: ' + render_json(details.get("actualOutput"))
        )
    return f"Assertion failed: {assertion_type}"


def tip_for_resolver(resolver_name: object) -> str:
    """Return the first family tip whose pattern matches ``resolver_name``."""
    if isinstance(resolver_name, str):
        for pattern, tip in RESOLVER_FAMILY_TIPS:
            if pattern.search(resolver_name):
                return tip
    return DEFAULT_TIP


def _guide_output_fields(
    details: Mapping[str, object], declaration: ResolverDeclaration | None
) -> str:
    reason = details.get("reason")
    actual = render_json(details.get("actualOutput"))
    if reason == NO_OUTPUT:
        return f"Resolver returned no output. Got: {actual}"
    if reason == INVALID_OUTPUT_SHAPE:
        return (
            "Resolver output is not an object. Return the output fields directly or wrap "
            f'them as {{"output": {{...}}}}. Got: {actual}'
        )
    if reason != MISSING_FIELDS:
        return "Assertion failed: output_fields_match_contract"

    resolver_name = declaration.get("resolverName") if isinstance(declaration, Mapping) else None
    lines = [
        f"Output is missing declared fields: {_join(details.get('missingFields'))}.",
        f"Resolver returned: {actual}",
        f"Declared outputs: {_join(details.get('expectedFields'))}",
        "How to fix:",
        *_REMEDIATION_STEPS,
        f"Tip: {tip_for_resolver(resolver_name)}",
    ]
    return "\n".join(lines)


def _join(values: object) -> str:
    if isinstance(values, Sequence) and not isinstance(values, str):
        return ", ".join(str(value) for value in values) or "(none)"
    return "(none)"
