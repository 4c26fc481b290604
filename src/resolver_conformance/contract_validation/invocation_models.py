"""Runtime invocation entities observed while exercising a resolver."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

ResolverDeclaration = Mapping[str, Any]
ResolverCallable = Callable[[Any], Any]

WRAPPED_OUTPUT_KEY = "output"


class OutputMode(str, Enum):
    """How a resolver shaped its successful return value."""

    DIRECT = "direct"
    WRAPPED = "wrapped"


@dataclass(frozen=True)
class OutputShape:
    """Classified resolver output: the value that is expected to be the output object."""

    mode: OutputMode
    value: object

    @property
    def is_object(self) -> bool:
        """Return True when the classified value is a mapping."""
        return isinstance(self.value, Mapping)


def classify_output(returned: object) -> OutputShape | None:
    """Classify a returned value as wrapped (``{"output": ...}``) or direct output.

    Returns None when nothing was returned.
    """
    if returned is None:
        return None
    if isinstance(returned, Mapping) and WRAPPED_OUTPUT_KEY in returned:
        return OutputShape(mode=OutputMode.WRAPPED, value=returned[WRAPPED_OUTPUT_KEY])
    return OutputShape(mode=OutputMode.DIRECT, value=returned)


@dataclass(frozen=True)
class InvocationError:
    """Error raised by a resolver call, reduced to its code and message."""

    message: str
    code: str | None = None


@dataclass
class InvocationContext:  # pylint: disable=too-many-instance-attributes
    """Mutable record of one runtime suite's resolver invocations."""

    resolver: ResolverCallable | None
    resolver_meta: ResolverDeclaration | None
    output: object | None = None
    outputs: list[object] = field(default_factory=list)
    error: InvocationError | None = None
    threw: bool = False
    retry_count: int | float = 0

    @property
    def output_shape(self) -> OutputShape | None:
        """Return the classified shape of the latest output."""
        return classify_output(self.output)


def declared_failure(
    declaration: ResolverDeclaration | None, code: str | None
) -> Mapping[str, Any] | None:
    """Return the declared failure entry for ``code``, if any."""
    if code is None or not isinstance(declaration, Mapping):
        return None
    failures = declaration.get("failures")
    if not isinstance(failures, list):
        return None
    for failure in failures:
        if isinstance(failure, Mapping) and failure.get("code") == code:
            return failure
    return None


def is_number(value: object) -> bool:
    """Return True for int or float values; bool is excluded."""
    return isinstance(value, int | float) and not isinstance(value, bool)
