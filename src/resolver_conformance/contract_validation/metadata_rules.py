"""Static checks over a resolver declaration."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence

from .assertion_outcomes import Assertion
from .invocation_models import ResolverDeclaration, is_number

IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")
_NORMALIZED_FIELDS_DEFAULT = ("inputs", "outputs")


def field_equals(declaration: ResolverDeclaration, assertion: Assertion) -> bool:
    """Return True when the declaration field named by the assertion equals its expected value."""
    if not isinstance(declaration, Mapping) or assertion.field is None:
        return False
    if assertion.field not in declaration:
        return False
    return bool(declaration[assertion.field] == assertion.expected)


def inputs_valid(declaration: ResolverDeclaration) -> bool:
    """Return True when every declared input has a string name and type and a bool required flag."""
    inputs = _field_list(declaration, "inputs")
    if inputs is None:
        return False
    return all(
        _has_string_name_and_type(item)
        and isinstance(item, Mapping)
        and isinstance(item.get("required"), bool)
        for item in inputs
    )


def outputs_valid(declaration: ResolverDeclaration) -> bool:
    """Return True when every declared output has a string name and type."""
    outputs = _field_list(declaration, "outputs")
    if outputs is None:
        return False
    return all(_has_string_name_and_type(item) for item in outputs)


def field_names_normalized(declaration: ResolverDeclaration, assertion: Assertion) -> bool:
    """Return True when every name in the checked fields is a plain identifier."""
    field_names = (assertion.field,) if assertion.field else _NORMALIZED_FIELDS_DEFAULT
    for field_name in field_names:
        entries = _field_list(declaration, field_name)
        if entries is None:
            return False
        for entry in entries:
            name = entry.get("name") if isinstance(entry, Mapping) else None
            if not isinstance(name, str) or not IDENTIFIER_PATTERN.fullmatch(name):
                return False
    return True


def failures_valid(declaration: ResolverDeclaration) -> bool:
    """Return True when at least one failure mode is declared and all are well formed.

    A resolver without a ``failures`` field fails this check.
    """
    failures = _field_list(declaration, "failures")
    if not failures:
        return False
    return all(
        isinstance(item, Mapping)
        and isinstance(item.get("code"), str)
        and is_number(item.get("retries"))
        for item in failures
    )


def _field_list(declaration: object, field_name: str) -> Sequence[object] | None:
    if not isinstance(declaration, Mapping):
        return None
    value = declaration.get(field_name)
    if not isinstance(value, list):
        return None
    return value


def _has_string_name_and_type(item: object) -> bool:
    return (
        isinstance(item, Mapping)
        and isinstance(item.get("name"), str)
        and isinstance(item.get("type"), str)
    )
