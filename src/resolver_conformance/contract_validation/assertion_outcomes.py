"""Assertion and assertion-report domain entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

DEFAULT_SEVERITY = "fatal"


class AssertionKind(str, Enum):
    """Assertion types known to the handler registry."""

    FIELD_EQUALS = "field_equals"
    INPUTS_VALID = "inputs_valid"
    OUTPUTS_VALID = "outputs_valid"
    FIELD_NAMES_NORMALIZED = "field_names_normalized"
    FAILURES_VALID = "failures_valid"
    RESOLVER_IS_CALLABLE = "resolver_is_callable"
    RESOLVER_FAILURE_DECLARED = "resolver_failure_declared"
    REJECTS_MISSING_REQUIRED_INPUT = "rejects_missing_required_input"
    RETRY_COUNT_WITHIN_DECLARED_LIMIT = "retry_count_within_declared_limit"
    OUTPUT_IS_OBJECT = "output_is_object"
    OUTPUT_FIELDS_MATCH_CONTRACT = "output_fields_match_contract"
    DETERMINISTIC_OUTPUT = "deterministic_output"
    NO_GLOBAL_STATE_MUTATION = "no_global_state_mutation"

    @classmethod
    def parse(cls, type_name: object) -> AssertionKind | None:
        """Return the kind for ``type_name`` or None when it is not recognized."""
        if not isinstance(type_name, str):
            return None
        try:
            return cls(type_name)
        except ValueError:
            return None


@dataclass(frozen=True)
class Assertion:
    """One declared assertion of a suite spec."""

    id: str
    type: str
    severity: str = DEFAULT_SEVERITY
    description: str | None = None
    field: str | None = None
    expected: object | None = None


@dataclass(frozen=True)
class AssertionResult:
    """Rich handler result carrying machine-readable failure cause data."""

    passed: bool
    details: Mapping[str, object] | None = None


@dataclass(frozen=True)
class AssertionStatus:
    """Auxiliary data passed to every handler next to the target."""

    resolver_meta: Mapping[str, object] | None = None


@dataclass(frozen=True)
class AssertionFailure:
    """One failed assertion as rendered into a report."""

    id: str
    severity: str
    message: str


@dataclass(frozen=True)
class AssertionReport:
    """Aggregated outcome of running every assertion of one suite spec."""

    ok: bool
    message: str
    failures: tuple[AssertionFailure, ...] = field(default_factory=tuple)

