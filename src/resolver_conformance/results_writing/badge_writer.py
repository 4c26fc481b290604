"""Certification badge writer service."""

from __future__ import annotations

import re
from datetime import UTC, date, datetime
from pathlib import Path
from xml.sax.saxutils import escape

BADGES_DIRNAME = "badges"
_UNSAFE_NAME_CHARS = re.compile(r"[^a-zA-Z0-9_-]")


def build_badge_text(
    resolver_name: str, passed: bool, *, version: str = "", issued_on: date
) -> str:
    """Return the badge caption."""
    status_text = "Certified" if passed else "Failed"
    version_text = f" v{version}" if version else ""
    return f"O-lang | {resolver_name}{version_text} — {status_text} ({issued_on.isoformat()})"


def build_badge_svg(text: str, passed: bool) -> str:
    """Return a single-segment SVG badge sized to ``text``."""
    color = "green" if passed else "red"
    width = 20 + len(text) * 7
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="20">\n'
        f'  <rect width="{width}" height="20" fill="{color}" rx="3" ry="3"/>\n'
        f'  <text x="{width / 2}" y="14"\n'
        '        fill="#fff"\n'
        '        font-family="Verdana"\n'
        '        font-size="12"\n'
        '        text-anchor="middle">\n'
        f"    {escape(text)}\n"
        "  </text>\n"
        "</svg>"
    )


def write_certification_badge(
    resolver_name: str | None,
    passed: bool,
    output_dir: Path | str,
    *,
    version: str = "",
    issued_on: date | None = None,
) -> Path:
    """Write ``badges/<resolver>-badge.svg`` under ``output_dir`` and return its path."""
    name = resolver_name or "Unknown"
    text = build_badge_text(
        name,
        passed,
        version=version,
        issued_on=issued_on or datetime.now(UTC).date(),
    )
    badges_dir = Path(output_dir) / BADGES_DIRNAME
    badges_dir.mkdir(parents=True, exist_ok=True)
    badge_path = badges_dir / f"{_UNSAFE_NAME_CHARS.sub('_', name)}-badge.svg"
    badge_path.write_text(build_badge_svg(text, passed), encoding="utf-8")
    return badge_path.resolve()
