"""Suite, contract and resolver loading exports."""

from .contract_loader import ContractLoadError, load_contract
from .resolver_loader import ResolverFailure, ResolverLoadError, ResolverUnderTest, load_resolver
from .suite_reader import (
    DEFAULT_SUITE_PATTERN,
    DEFAULT_TEST_SPEC_FILENAME,
    SuiteLoadError,
    discover_suites,
    parse_suite_spec,
    read_suite_spec,
    select_fixture,
)

__all__ = [
    "ContractLoadError",
    "load_contract",
    "ResolverFailure",
    "ResolverLoadError",
    "ResolverUnderTest",
    "load_resolver",
    "DEFAULT_SUITE_PATTERN",
    "DEFAULT_TEST_SPEC_FILENAME",
    "SuiteLoadError",
    "discover_suites",
    "parse_suite_spec",
    "read_suite_spec",
    "select_fixture",
]
