"""Tests for publication state and the published listing."""

from datetime import datetime, timezone, tzinfo
from pathlib import Path

from postkit.core.publish import (
    DRAFT,
    PUBLISHED,
    SCHEDULED,
    all_entries,
    publication_state,
    published_listing,
    resolve_timezone,
)
from postkit.core.types import Document, FrontMatter

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def _doc(name: str, date: datetime | None = None, draft: bool = False, title: str | None = None) -> Document:
    return Document(
        path=Path(f"content/posts/{name}.md"),
        format="yaml",
        raw={},
        front_matter=FrontMatter(title=title or name.title(), date=date, draft=draft),
        body="Body",
    )


def test_past_post_is_published():
    assert publication_state(_doc("a", datetime(2024, 1, 1, tzinfo=timezone.utc)), NOW) == PUBLISHED


def test_future_post_is_scheduled():
    assert publication_state(_doc("a", datetime(2027, 1, 1, tzinfo=timezone.utc)), NOW) == SCHEDULED


def test_draft_wins_over_future_date():
    doc = _doc("a", datetime(2027, 1, 1, tzinfo=timezone.utc), draft=True)

    assert publication_state(doc, NOW) == DRAFT


def test_undated_post_is_published():
    assert publication_state(_doc("a"), NOW) == PUBLISHED


def test_post_dated_exactly_now_is_published():
    assert publication_state(_doc("a", NOW), NOW) == PUBLISHED


def test_build_flags_include_drafts_and_future():
    draft = _doc("d", datetime(2024, 1, 1, tzinfo=timezone.utc), draft=True)
    future = _doc("f", datetime(2027, 1, 1, tzinfo=timezone.utc))

    assert publication_state(draft, NOW, build_drafts=True) == PUBLISHED
    assert publication_state(future, NOW, build_future=True) == PUBLISHED


def test_published_listing_excludes_suppressed_and_orders_newest_first():
    docs = [
        _doc("old", datetime(2023, 5, 1, tzinfo=timezone.utc)),
        _doc("undated"),
        _doc("draft", datetime(2025, 1, 1, tzinfo=timezone.utc), draft=True),
        _doc("future", datetime(2026, 12, 1, tzinfo=timezone.utc)),
        _doc("new-b", datetime(2025, 6, 1, tzinfo=timezone.utc), title="B"),
        _doc("new-a", datetime(2025, 6, 1, tzinfo=timezone.utc), title="A"),
    ]

    listing = published_listing(docs, NOW)

    assert [entry.slug for entry in listing] == ["new-a", "new-b", "old", "undated"]
    assert all(entry.state == PUBLISHED for entry in listing)


def test_listing_paths_are_relative_to_root():
    listing = published_listing([_doc("a")], NOW, root=Path("content"))

    assert listing[0].path == "posts/a.md"


def test_all_entries_reports_each_state():
    docs = [
        _doc("live", datetime(2024, 1, 1, tzinfo=timezone.utc)),
        _doc("draft", draft=True),
        _doc("future", datetime(2027, 1, 1, tzinfo=timezone.utc)),
    ]

    states = {entry.slug: entry.state for entry in all_entries(docs, NOW)}

    assert states == {"live": PUBLISHED, "draft": DRAFT, "future": SCHEDULED}


def test_resolve_timezone_by_name_and_local():
    assert getattr(resolve_timezone("Europe/Berlin"), "key", None) == "Europe/Berlin"
    assert isinstance(resolve_timezone("local"), tzinfo)
