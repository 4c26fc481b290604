"""Module entry point for `python -m resolver_conformance`."""

from .cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
