"""
Rendering of lint reports and listing previews.

Listing previews use a Jinja2 template for HTML and plain line building for
Markdown. Lint reports are written as Markdown or JSON.
"""

from __future__ import annotations

import json
from collections import defaultdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..core.types import LintIssue, LintReport, ListingEntry


UNDATED = "Undated"


def _group_by_year(entries: list[ListingEntry]) -> list[tuple[str, list[ListingEntry]]]:
    """Group listing entries by publication year, newest year first.

    Entries keep their listing order inside a group. Undated entries form a
    final group.
    """
    grouped: dict[str, list[ListingEntry]] = defaultdict(list)
    for entry in entries:
        key = str(entry.date.year) if entry.date is not None else UNDATED
        grouped[key].append(entry)

    years = sorted((key for key in grouped if key != UNDATED), reverse=True)
    ordered = [(year, grouped[year]) for year in years]
    if UNDATED in grouped:
        ordered.append((UNDATED, grouped[UNDATED]))
    return ordered


def render_listing_html(
    entries: list[ListingEntry],
    output_path: Path,
    title: str,
    generated_at: datetime | None = None,
) -> None:
    """Render the listing preview as an HTML page using a Jinja2 template.

    Args:
        entries: Listing entries in display order
        output_path: Path where the HTML file will be written
        title: Page title
        generated_at: Timestamp shown in the footer; defaults to now (UTC)
    """
    env = Environment(
        loader=FileSystemLoader(str(Path(__file__).parent / "templates")),
        autoescape=select_autoescape(["html"]),
    )
    template = env.get_template("listing.html")
    generated_at = generated_at or datetime.now(timezone.utc)

    html = template.render(
        title=title,
        generated_at=generated_at.strftime("%Y-%m-%d %H:%M %Z").strip(),
        groups=[
            {"id": f"year-{name.lower()}", "name": name, "entries": items, "count": len(items)}
            for name, items in _group_by_year(entries)
        ],
        total=len(entries),
    )
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(html, encoding="utf-8")


def render_listing_markdown(entries: list[ListingEntry], output_path: Path, title: str) -> None:
    lines = [f"# {title}", "", f"Total: {len(entries)}", ""]
    for group, items in _group_by_year(entries):
        lines.append(f"## {group}")
        lines.append("")
        for entry in items:
            date_text = entry.date.date().isoformat() if entry.date is not None else "undated"
            lines.append(f"### {entry.title}")
            lines.append(f"- Date: {date_text}")
            lines.append(f"- Path: {entry.path}")
            if entry.authors:
                lines.append(f"- Author: {', '.join(entry.authors)}")
            if entry.tags:
                lines.append(f"- Tags: {', '.join(entry.tags)}")
            if entry.series:
                lines.append(f"- Series: {', '.join(entry.series)}")
            if entry.summary:
                lines.append(f"- Summary: {entry.summary}")
            lines.append("")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text("\n".join(lines), encoding="utf-8")


def _issue_location(issue: LintIssue) -> str:
    if issue.line is None:
        return str(issue.path)
    return f"{issue.path}:{issue.line}"


def render_report_markdown(report: LintReport, output_path: Path) -> None:
    """Write a lint report as Markdown, one section per file."""
    counts = report.counts()
    lines = [
        "# Content lint report",
        "",
        f"Documents: {report.documents}",
        f"Errors: {counts['error']} | Warnings: {counts['warning']} | Info: {counts['info']}",
        "",
    ]
    by_path: dict[str, list[LintIssue]] = defaultdict(list)
    for issue in report.issues:
        by_path[str(issue.path)].append(issue)

    if not by_path:
        lines.append("No issues found.")
    for path, issues in by_path.items():
        lines.append(f"## {path}")
        lines.append("")
        for issue in issues:
            where = f"line {issue.line}" if issue.line is not None else "file"
            lines.append(f"- **{issue.severity}** `{issue.rule}` ({where}): {issue.message}")
        lines.append("")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text("\n".join(lines), encoding="utf-8")


def report_to_dict(report: LintReport) -> dict[str, Any]:
    return {
        "documents": report.documents,
        "counts": report.counts(),
        "issues": [
            {
                "path": str(issue.path),
                "line": issue.line,
                "rule": issue.rule,
                "severity": issue.severity,
                "message": issue.message,
            }
            for issue in report.issues
        ],
    }


def render_report_json(report: LintReport, output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        f"{json.dumps(report_to_dict(report), ensure_ascii=False, indent=2)}\n", encoding="utf-8"
    )


def render_report(report: LintReport, output_path: Path) -> None:
    """Write a lint report, choosing JSON for ``.json`` paths and Markdown otherwise."""
    if output_path.suffix.lower() == ".json":
        render_report_json(report, output_path)
    else:
        render_report_markdown(report, output_path)
