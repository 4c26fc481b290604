"""Suite execution entities."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from resolver_conformance.configuration.runtime_settings import ConformanceSettings
from resolver_conformance.contract_validation.assertion_outcomes import AssertionReport
from resolver_conformance.suite_loading.resolver_loader import ResolverUnderTest


class SuiteStatus(str, Enum):
    """Verdict of one suite."""

    PASSED = "PASSED"
    FAILED = "FAILED"
    LOAD_ERROR = "LOAD_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    CRASHED = "CRASHED"
    UNRECOGNIZED_FIXTURE = "UNRECOGNIZED_FIXTURE"


@dataclass(frozen=True)
class ConformanceRunRequest:
    """Input contract for one conformance run."""

    settings: ConformanceSettings
    resolver: ResolverUnderTest | None = None
    suites: Sequence[str] | None = None


@dataclass(frozen=True)
class SuiteOutcome:
    """Verdict and diagnostics for one suite."""

    suite_name: str
    status: SuiteStatus
    message: str
    report: AssertionReport | None = None

    @property
    def passed(self) -> bool:
        """Return True when the suite passed."""
        return self.status == SuiteStatus.PASSED


@dataclass(frozen=True)
class ConformanceRunSummary:
    """Output contract for one completed run."""

    outcomes: tuple[SuiteOutcome, ...] = field(default_factory=tuple)

    @property
    def failed(self) -> int:
        """Return the number of suites that did not pass."""
        return sum(1 for outcome in self.outcomes if not outcome.passed)

    @property
    def ok(self) -> bool:
        """Return True when every suite passed."""
        return self.failed == 0
