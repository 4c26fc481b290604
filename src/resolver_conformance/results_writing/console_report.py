"""Text rendering of conformance run summaries."""

from __future__ import annotations

from dataclasses import dataclass

from resolver_conformance.suite_execution.run_contracts import (
    ConformanceRunSummary,
    SuiteOutcome,
    SuiteStatus,
)

PASS_MARK = "✔"
FAIL_MARK = "✖"

_STATUS_LABELS = {
    SuiteStatus.FAILED: "",
    SuiteStatus.LOAD_ERROR: "load error: ",
    SuiteStatus.CONFIGURATION_ERROR: "configuration error: ",
    SuiteStatus.CRASHED: "crashed: ",
    SuiteStatus.UNRECOGNIZED_FIXTURE: "unrecognized fixture: ",
}


@dataclass(frozen=True)
class RenderedLine:
    """One line of console output and the stream it belongs on."""

    text: str
    is_error: bool = False


def render_run_summary(summary: ConformanceRunSummary) -> list[RenderedLine]:
    """Render every suite outcome followed by the overall verdict."""
    lines = [render_suite_outcome(outcome) for outcome in summary.outcomes]
    if summary.ok:
        lines.append(RenderedLine(f"\nResolver PASSED all {len(summary.outcomes)} suites!"))
    else:
        lines.append(
            RenderedLine(
                f"\nResolver FAILED {summary.failed} of {len(summary.outcomes)} suites",
                is_error=True,
            )
        )
    return lines


def render_suite_outcome(outcome: SuiteOutcome) -> RenderedLine:
    """Render one suite outcome as a single (possibly multi-line) entry."""
    if outcome.passed:
        return RenderedLine(f"{PASS_MARK} {outcome.suite_name}")
    label = _STATUS_LABELS.get(outcome.status, "")
    return RenderedLine(
        f"{FAIL_MARK} {outcome.suite_name}: {label}{outcome.message}",
        is_error=True,
    )
