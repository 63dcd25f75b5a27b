"""
Sync of the published listing into a JSON index file.

The index is a JSON list of post records, newest first, consumed by tooling
next to the site (search, feeds, link previews). A missing or malformed
previous index is treated as empty so the sync always leaves a clean file.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..core.types import ListingEntry


@dataclass
class IndexChange:
    """Result of an index sync.

    Attributes:
        path: Index file written
        added: Slugs present now but not in the previous index
        removed: Slugs present before but no longer listed
    """

    path: Path
    added: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.added or self.removed)


def entry_to_record(entry: ListingEntry) -> dict[str, Any]:
    return {
        "slug": entry.slug,
        "title": entry.title,
        "date": entry.date.isoformat() if entry.date is not None else None,
        "path": entry.path,
        "summary": entry.summary,
        "authors": list(entry.authors),
        "tags": list(entry.tags),
        "categories": list(entry.categories),
        "series": list(entry.series),
    }


def write_listing_index(entries: list[ListingEntry], index_path: Path) -> IndexChange:
    """Write the listing to ``index_path`` and report what changed.

    Returns:
        IndexChange with slugs added and removed relative to the previous file
    """
    previous = {record["slug"] for record in load_index(index_path)}
    records = [entry_to_record(entry) for entry in entries]
    current = [record["slug"] for record in records]

    index_path.parent.mkdir(parents=True, exist_ok=True)
    index_path.write_text(f"{json.dumps(records, ensure_ascii=False, indent=2)}\n", encoding="utf-8")

    return IndexChange(
        path=index_path,
        added=[slug for slug in current if slug not in previous],
        removed=sorted(previous - set(current)),
    )


def load_index(index_path: Path) -> list[dict[str, Any]]:
    if not index_path.exists():
        return []

    try:
        raw = json.loads(index_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError:
        return []

    if not isinstance(raw, list):
        return []

    records: list[dict[str, Any]] = []
    for item in raw:
        normalized = _normalize_record(item)
        if normalized is not None:
            records.append(normalized)
    return records


def _normalize_record(item: Any) -> dict[str, Any] | None:
    if not isinstance(item, dict):
        return None

    slug = item.get("slug")
    title = item.get("title")
    if not isinstance(slug, str) or not slug or not isinstance(title, str):
        return None

    date = item.get("date")
    return {
        "slug": slug,
        "title": title,
        "date": date if isinstance(date, str) else None,
        "path": item.get("path") if isinstance(item.get("path"), str) else "",
    }
