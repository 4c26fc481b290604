"""Results writing domain exports."""

from .badge_writer import write_certification_badge
from .console_report import RenderedLine, render_run_summary, render_suite_outcome

__all__ = [
    "RenderedLine",
    "render_run_summary",
    "render_suite_outcome",
    "write_certification_badge",
]
