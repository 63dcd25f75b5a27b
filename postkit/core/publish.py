"""Publication state of posts as the external renderer decides it.

A post is listed when it is not a draft and its date is not in the future.
Drafts and scheduled posts are suppressed unless the corresponding build
flag is set, mirroring the renderer's ``--buildDrafts`` / ``--buildFuture``.
"""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from pathlib import Path
from typing import Iterable

from zoneinfo import ZoneInfo

from .entry import relative_path
from .types import Document, ListingEntry


PUBLISHED = "published"
DRAFT = "draft"
SCHEDULED = "scheduled"


def resolve_timezone(timezone_name: str | None) -> tzinfo:
    """Resolve local/system timezone or a specific IANA timezone name."""
    if timezone_name and timezone_name != "local":
        return ZoneInfo(timezone_name)

    local = datetime.now().astimezone().tzinfo
    if local is None:
        return timezone.utc
    return local


def now_in(tz: tzinfo) -> datetime:
    return datetime.now(tz)


def publication_state(
    doc: Document,
    now: datetime,
    build_drafts: bool = False,
    build_future: bool = False,
) -> str:
    """Return the state a document has for the renderer at ``now``.

    Drafts report DRAFT even when also future-dated. With a build flag set,
    the matching state counts as PUBLISHED. Undated documents are published.
    """
    fm = doc.front_matter
    if fm.draft and not build_drafts:
        return DRAFT
    if fm.date is not None and fm.date > now and not build_future:
        return SCHEDULED
    return PUBLISHED


def is_published(doc: Document, now: datetime) -> bool:
    return publication_state(doc, now) == PUBLISHED


def listing_entry(doc: Document, state: str, root: Path | None = None) -> ListingEntry:
    fm = doc.front_matter
    return ListingEntry(
        slug=doc.slug,
        title=fm.title,
        date=fm.date,
        path=relative_path(doc.path, root) if root is not None else doc.path.as_posix(),
        state=state,
        summary=fm.summary or fm.description,
        authors=list(fm.author),
        tags=list(fm.tags),
        categories=list(fm.categories),
        series=list(fm.series),
    )


def published_listing(
    documents: Iterable[Document],
    now: datetime,
    build_drafts: bool = False,
    build_future: bool = False,
    root: Path | None = None,
) -> list[ListingEntry]:
    """Build the listing the renderer would publish at ``now``.

    Returns:
        Entries newest first; ties and undated posts ordered by title.
        Undated posts come last.
    """
    entries = [
        listing_entry(doc, PUBLISHED, root)
        for doc in documents
        if publication_state(doc, now, build_drafts, build_future) == PUBLISHED
    ]
    return sort_listing(entries)


def all_entries(
    documents: Iterable[Document], now: datetime, root: Path | None = None
) -> list[ListingEntry]:
    """Every document with its state, in listing order."""
    return sort_listing(
        [listing_entry(doc, publication_state(doc, now), root) for doc in documents]
    )


def sort_listing(entries: list[ListingEntry]) -> list[ListingEntry]:
    dated = [entry for entry in entries if entry.date is not None]
    undated = [entry for entry in entries if entry.date is None]
    dated.sort(key=lambda entry: entry.title.lower())
    dated.sort(key=lambda entry: entry.date, reverse=True)
    undated.sort(key=lambda entry: entry.title.lower())
    return dated + undated
