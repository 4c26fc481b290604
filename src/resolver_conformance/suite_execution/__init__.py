"""Suite execution domain exports."""

from .run_contracts import ConformanceRunRequest, ConformanceRunSummary, SuiteOutcome, SuiteStatus
from .suite_executor import ConformanceRunError, execute_conformance_run, run_all_suites

__all__ = [
    "ConformanceRunRequest",
    "ConformanceRunSummary",
    "SuiteOutcome",
    "SuiteStatus",
    "ConformanceRunError",
    "execute_conformance_run",
    "run_all_suites",
]
