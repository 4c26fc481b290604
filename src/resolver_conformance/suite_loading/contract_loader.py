"""Resolver contract file loading."""

from __future__ import annotations

import importlib.util
import sys
from collections.abc import Mapping
from pathlib import Path
from types import ModuleType
from typing import Any

import yaml

CONTRACT_ATTRIBUTE = "resolver_declaration"
_WRAPPER_KEYS = ("resolverDeclaration", "resolver_declaration")
_DOCUMENT_SUFFIXES = (".json", ".yaml", ".yml")


class ContractLoadError(Exception):
    """Raised when a resolver contract cannot be loaded."""


def load_contract(contract_path: Path | str) -> Mapping[str, Any]:
    """Load a resolver declaration from a JSON/YAML document or a Python module.

    A Python module must expose ``resolver_declaration``. A declaration nested
    under ``resolverDeclaration`` (or ``resolver_declaration``) is unwrapped.

    Raises:
      ContractLoadError: The file is missing, cannot be parsed or imported, or
        does not contain a declaration object.
    """
    path = Path(contract_path)
    if not path.exists():
        raise ContractLoadError(f"Resolver contract not found: {path}")

    if path.suffix == ".py":
        module = import_module_from_path(path)
        if not hasattr(module, CONTRACT_ATTRIBUTE):
            raise ContractLoadError(
                f"Resolver contract module {path} has no {CONTRACT_ATTRIBUTE}."
            )
        loaded: Any = getattr(module, CONTRACT_ATTRIBUTE)
    elif path.suffix in _DOCUMENT_SUFFIXES:
        try:
            loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
            raise ContractLoadError(f"Failed to parse resolver contract {path}: {exc}") from exc
    else:
        raise ContractLoadError(f"Unsupported resolver contract file type: {path.suffix}")

    return unwrap_declaration(loaded, source=str(path))


def unwrap_declaration(loaded: Any, *, source: str) -> Mapping[str, Any]:
    """Return the declaration itself, unwrapping a ``resolverDeclaration`` holder."""
    if not isinstance(loaded, Mapping):
        raise ContractLoadError(f"Resolver contract {source} must define an object.")
    for key in _WRAPPER_KEYS:
        wrapped = loaded.get(key)
        if isinstance(wrapped, Mapping):
            return wrapped
    return loaded


def import_module_from_path(path: Path) -> ModuleType:
    """Import a Python source file as a module, wrapping import failures."""
    module_name = f"_resolver_conformance_contract_{path.stem}_{abs(hash(path.resolve()))}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ContractLoadError(f"Cannot import module from {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as exc:  # pylint: disable=broad-exception-caught
        sys.modules.pop(module_name, None)
        raise ContractLoadError(f"Failed to import {path}: {exc}") from exc
    return module
