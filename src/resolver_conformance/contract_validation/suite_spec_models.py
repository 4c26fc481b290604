"""Suite spec and fixture entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .assertion_outcomes import Assertion


class SuiteCategory(str, Enum):
    """Mode a suite is executed in."""

    STATIC_CONTRACT = "static-contract"
    RESOLVER_RUNTIME = "resolver-runtime"


@dataclass(frozen=True)
class Fixture:
    """Concrete suite input: a contract file reference or a resolver invocation value."""

    resolver_contract: str | None = None
    invoke: object | None = None


@dataclass(frozen=True)
class SuiteSpec:
    """One suite's declared assertions and fixtures."""

    test_id: str
    category: SuiteCategory | None
    assertions: tuple[Assertion, ...]
    fixtures: tuple[Fixture, ...]
