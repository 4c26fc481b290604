"""CLI error-handling tests."""

from __future__ import annotations

from pathlib import Path

from resolver_conformance.cli import main


def test_missing_required_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["run", "--suites-dir", "/tmp/suites"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "Missing option" in captured.err
    assert "--resolver" in captured.err
    assert "Traceback" not in captured.err


def test_unknown_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["run", "--bogus"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "No such option: --bogus" in captured.err
    assert "Traceback" not in captured.err


def test_invalid_resolver_reference_returns_clean_error(capsys, tmp_path: Path) -> None:
    exit_code = main(["run", "--resolver", "no-separator", "--suites-dir", str(tmp_path)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "must look like" in captured.err
    assert "Traceback" not in captured.err
