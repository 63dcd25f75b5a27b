import json
from datetime import datetime, timezone
from pathlib import Path

from postkit.core.types import LintIssue, LintReport, ListingEntry
from postkit.output.renderer import (
    render_listing_html,
    render_listing_markdown,
    render_report,
)


def _entry(slug: str, title: str, date: datetime | None, **kwargs) -> ListingEntry:
    return ListingEntry(slug=slug, title=title, date=date, path=f"posts/{slug}.md", state="published", **kwargs)


def _entries() -> list[ListingEntry]:
    return [
        _entry(
            "any-vs-unknown",
            "TypeScript any vs unknown",
            datetime(2024, 3, 12, 9, 0, tzinfo=timezone.utc),
            summary="unknown makes you <prove> it",
            authors=["Kim Nguyen"],
            tags=["typescript"],
            series=["TypeScript Types"],
        ),
        _entry("older", "Older <b>post</b>", datetime(2023, 1, 5, tzinfo=timezone.utc)),
        _entry("undated", "Undated post", None),
    ]


def test_render_listing_html_groups_by_year_and_escapes(tmp_path: Path):
    output_path = tmp_path / "preview" / "index.html"

    render_listing_html(
        _entries(),
        output_path,
        title="Posts",
        generated_at=datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc),
    )
    html = output_path.read_text(encoding="utf-8")

    assert "<h1>Posts</h1>" in html
    assert "<h2>2024</h2>" in html
    assert "<h2>2023</h2>" in html
    assert "<h2>Undated</h2>" in html
    assert html.index("<h2>2024</h2>") < html.index("<h2>2023</h2>") < html.index("<h2>Undated</h2>")
    assert "Older &lt;b&gt;post&lt;/b&gt;" in html
    assert "unknown makes you &lt;prove&gt; it" in html
    assert '<a href="posts/any-vs-unknown.md">' in html
    assert "2026-10-19 12:00" in html


def test_render_listing_html_without_entries(tmp_path: Path):
    output_path = tmp_path / "empty.html"

    render_listing_html([], output_path, title="Posts")

    assert "No published posts." in output_path.read_text(encoding="utf-8")


def test_render_listing_markdown_outputs_sections(tmp_path: Path):
    output_path = tmp_path / "listing.md"

    render_listing_markdown(_entries(), output_path, title="Posts")
    text = output_path.read_text(encoding="utf-8")

    assert text.startswith("# Posts\n")
    assert "Total: 3" in text
    assert "## 2024" in text
    assert "### TypeScript any vs unknown" in text
    assert "- Date: 2024-03-12" in text
    assert "- Series: TypeScript Types" in text
    assert "- Date: undated" in text


def _report() -> LintReport:
    return LintReport(
        documents=2,
        issues=[
            LintIssue(Path("posts/a.md"), "title-required", "error", "Title is empty or missing", 2),
            LintIssue(Path("posts/b.md"), "near-duplicate", "warning", "Near-duplicate of a.md"),
        ],
    )


def test_render_report_markdown(tmp_path: Path):
    output_path = tmp_path / "report.md"

    render_report(_report(), output_path)
    text = output_path.read_text(encoding="utf-8")

    assert "Errors: 1 | Warnings: 1 | Info: 0" in text
    assert "## posts/a.md" in text
    assert "- **error** `title-required` (line 2): Title is empty or missing" in text
    assert "- **warning** `near-duplicate` (file): Near-duplicate of a.md" in text


def test_render_report_json(tmp_path: Path):
    output_path = tmp_path / "report.json"

    render_report(_report(), output_path)
    data = json.loads(output_path.read_text(encoding="utf-8"))

    assert data["documents"] == 2
    assert data["counts"] == {"error": 1, "warning": 1, "info": 0}
    assert data["issues"][0] == {
        "path": "posts/a.md",
        "line": 2,
        "rule": "title-required",
        "severity": "error",
        "message": "Title is empty or missing",
    }


def test_render_report_without_issues(tmp_path: Path):
    output_path = tmp_path / "clean.md"

    render_report(LintReport(documents=3), output_path)

    assert "No issues found." in output_path.read_text(encoding="utf-8")
