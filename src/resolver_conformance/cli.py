"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from dataclasses import replace
from pathlib import Path

import click

from resolver_conformance.configuration import (
    DEFAULT_CONFIG_FILENAME,
    ConfigurationError,
    load_configuration,
    write_placeholder_configuration,
)
from resolver_conformance.results_writing import render_run_summary, write_certification_badge
from resolver_conformance.suite_execution import (
    ConformanceRunError,
    ConformanceRunRequest,
    ConformanceRunSummary,
    execute_conformance_run,
)
from resolver_conformance.suite_loading import ResolverLoadError, ResolverUnderTest, load_resolver


class CliError(Exception):
    """Custom CLI error."""


class SuitesFailedError(CliError):
    """Raised after rendering a run in which at least one suite failed."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="resolver-conformance")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log debug output to stderr.")
def cli(verbose: bool) -> None:
    """Resolver conformance tester."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML conformance configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a conformance configuration template with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="run")
@click.option(
    "--resolver",
    "resolver_ref",
    required=True,
    help="Resolver under test as 'module:function' or 'path/to/file.py:function'",
)
@click.option(
    "--contract",
    "contract_path",
    required=False,
    type=click.Path(path_type=str),
    help="Resolver contract file to use instead of the module's resolver_declaration",
)
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON conformance configuration file",
)
@click.option(
    "--suites-dir",
    "suites_dir",
    required=False,
    type=click.Path(path_type=str),
    help="Directory containing the resolver test suites",
)
@click.option(
    "--badge-dir",
    "badge_dir",
    required=False,
    type=click.Path(path_type=str),
    help="Directory to write the certification badge into",
)
def run_suites(
    resolver_ref: str,
    contract_path: str | None,
    config_path: str | None,
    suites_dir: str | None,
    badge_dir: str | None,
) -> None:
    """Run every resolver test suite against the resolver under test."""
    try:
        settings = load_configuration(config_path)
        if suites_dir is not None:
            settings = replace(settings, suites_dir=Path(suites_dir))
        resolver = load_resolver(resolver_ref, contract_path)
        summary = execute_conformance_run(
            ConformanceRunRequest(settings=settings, resolver=resolver)
        )
    except (ConfigurationError, ResolverLoadError, ConformanceRunError) as exc:
        raise CliError(str(exc)) from exc

    for line in render_run_summary(summary):
        click.echo(line.text, err=line.is_error)

    resolved_badge_dir = Path(badge_dir) if badge_dir is not None else settings.badge_dir
    if resolved_badge_dir is not None:
        badge_path = _write_badge(resolver, summary, resolved_badge_dir)
        click.echo(f"Badge written to {badge_path}")

    if not summary.ok:
        raise SuitesFailedError(f"{summary.failed} suite(s) failed")


def _write_badge(
    resolver: ResolverUnderTest, summary: ConformanceRunSummary, badge_dir: Path
) -> Path:
    declaration = resolver.declaration if isinstance(resolver.declaration, Mapping) else {}
    try:
        return write_certification_badge(
            str(declaration.get("resolverName") or getattr(resolver.function, "__name__", "")),
            summary.ok,
            badge_dir,
            version=str(declaration.get("version") or ""),
        )
    except OSError as exc:
        raise CliError(f"Failed to write badge: {exc}") from exc


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except SuitesFailedError:
        return 1
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
