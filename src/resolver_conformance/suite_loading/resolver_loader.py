"""Loading of the resolver callable under test."""

from __future__ import annotations

import importlib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from resolver_conformance.contract_validation.invocation_models import (
    ResolverCallable,
    ResolverDeclaration,
)

from .contract_loader import (
    CONTRACT_ATTRIBUTE,
    ContractLoadError,
    import_module_from_path,
    load_contract,
    unwrap_declaration,
)


class ResolverLoadError(Exception):
    """Raised when the resolver under test cannot be loaded."""


class ResolverFailure(Exception):
    """Coded error a resolver can raise to signal a declared failure mode."""

    def __init__(self, code: str, message: str = "") -> None:
        super().__init__(message or code)
        self.code = code


@dataclass(frozen=True)
class ResolverUnderTest:
    """Resolver callable together with its declaration."""

    function: ResolverCallable
    declaration: ResolverDeclaration | None


def load_resolver(reference: str, contract_path: Path | str | None = None) -> ResolverUnderTest:
    """Load ``module:attribute`` or ``path/to/file.py:attribute`` as the resolver under test.

    The declaration is taken from ``contract_path`` when given, otherwise from
    the callable's ``resolver_declaration`` attribute, otherwise from the
    module's ``resolver_declaration``.
    """
    module_ref, separator, attribute = reference.rpartition(":")
    if not separator or not module_ref or not attribute:
        raise ResolverLoadError(
            "Resolver reference must look like 'module:function' or 'file.py:function': "
            f"{reference}"
        )

    try:
        module = _import_module(module_ref)
    except (ImportError, ContractLoadError) as exc:
        raise ResolverLoadError(f"Failed to import resolver module {module_ref}: {exc}") from exc

    function = getattr(module, attribute, None)
    if function is None:
        raise ResolverLoadError(f"Resolver module {module_ref} has no attribute {attribute}.")
    if not callable(function):
        raise ResolverLoadError(f"Resolver {reference} is not callable.")

    try:
        declaration = _resolve_declaration(module, function, contract_path)
    except ContractLoadError as exc:
        raise ResolverLoadError(str(exc)) from exc
    return ResolverUnderTest(function=function, declaration=declaration)


def _import_module(module_ref: str) -> Any:
    if module_ref.endswith(".py"):
        path = Path(module_ref)
        if not path.exists():
            raise ImportError(f"Resolver file not found: {path}")
        return import_module_from_path(path)
    return importlib.import_module(module_ref)


def _resolve_declaration(
    module: Any, function: Any, contract_path: Path | str | None
) -> Mapping[str, Any] | None:
    if contract_path is not None:
        return load_contract(contract_path)
    for owner in (function, module):
        candidate = getattr(owner, CONTRACT_ATTRIBUTE, None)
        if candidate is not None:
            return unwrap_declaration(candidate, source=repr(owner))
    return None
