"""Conformance engine exports."""

from .assertion_outcomes import (
    Assertion,
    AssertionFailure,
    AssertionKind,
    AssertionReport,
    AssertionResult,
    AssertionStatus,
)
from .assertion_registry import ASSERTION_HANDLERS, resolve_handler
from .assertion_runner import run_assertions
from .guidance import guide
from .invocation_models import (
    InvocationContext,
    InvocationError,
    OutputMode,
    OutputShape,
    classify_output,
)
from .observation_harness import (
    DEFAULT_DETERMINISM_TEST_ID,
    USE_EXAMPLE_MARKER,
    InvocationConfigurationError,
    observe,
)
from .suite_spec_models import Fixture, SuiteCategory, SuiteSpec

__all__ = [
    "Assertion",
    "AssertionFailure",
    "AssertionKind",
    "AssertionReport",
    "AssertionResult",
    "AssertionStatus",
    "ASSERTION_HANDLERS",
    "resolve_handler",
    "run_assertions",
    "guide",
    "InvocationContext",
    "InvocationError",
    "OutputMode",
    "OutputShape",
    "classify_output",
    "DEFAULT_DETERMINISM_TEST_ID",
    "USE_EXAMPLE_MARKER",
    "InvocationConfigurationError",
    "observe",
    "Fixture",
    "SuiteCategory",
    "SuiteSpec",
]
