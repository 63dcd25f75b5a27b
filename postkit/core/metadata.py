"""
Coercion of raw front matter mappings into FrontMatter records.

Parsers hand back whatever the notation produced (YAML dates, TOML datetimes,
JSON strings). This module maps recognized keys onto typed fields and records
a FieldProblem for each value of the wrong shape instead of raising, so a
single lint run can report every problem in a file.
"""

from __future__ import annotations

from datetime import date, datetime, time, timezone, tzinfo
from typing import Any

from .types import FieldProblem, FrontMatter


# Front matter key (lowercased) -> FrontMatter attribute
RECOGNIZED_KEYS = {
    "author": "author",
    "title": "title",
    "date": "date",
    "description": "description",
    "summary": "summary",
    "tags": "tags",
    "categories": "categories",
    "series": "series",
    "showtoc": "show_toc",
    "tocopen": "toc_open",
    "draft": "draft",
}

# Canonical spelling used when writing new documents
CANONICAL_KEYS = {
    "author": "author",
    "title": "title",
    "date": "date",
    "description": "description",
    "summary": "summary",
    "tags": "tags",
    "categories": "categories",
    "series": "series",
    "show_toc": "ShowToc",
    "toc_open": "TocOpen",
    "draft": "draft",
}

_LIST_FIELDS = {"author", "tags", "categories", "series"}
_TEXT_FIELDS = {"title", "description", "summary"}
_BOOL_FIELDS = {"show_toc", "toc_open", "draft"}


def parse_date(value: Any, tz: tzinfo = timezone.utc) -> datetime:
    """Parse a front matter date into a timezone-aware datetime.

    Accepts date and datetime objects (as produced by YAML and TOML) and ISO
    8601 strings, including date-only values and a trailing ``Z``. Values
    without an offset are taken to be in ``tz``.

    Raises:
        ValueError: If the value is not a recognizable date
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time())
    elif isinstance(value, str):
        raw = value.strip()
        if not raw:
            raise ValueError("empty date")
        if raw.endswith(("Z", "z")):
            raw = f"{raw[:-1]}+00:00"
        parsed = datetime.fromisoformat(raw)
    else:
        raise ValueError(f"expected a date, got {type(value).__name__}")

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=tz)
    return parsed


def canonical_key(key: str) -> str | None:
    """Return the FrontMatter attribute for a front matter key, if recognized."""
    return RECOGNIZED_KEYS.get(str(key).lower())


def coerce_front_matter(
    raw: dict[str, Any], tz: tzinfo = timezone.utc
) -> tuple[FrontMatter, list[FieldProblem]]:
    """Build a FrontMatter from a parsed mapping.

    Args:
        raw: Mapping returned by the front matter parser
        tz: Timezone for dates written without an offset

    Returns:
        A tuple of (front_matter, problems). Fields with bad values keep
        their defaults and get one FieldProblem each.
    """
    front_matter = FrontMatter()
    problems: list[FieldProblem] = []
    seen: dict[str, str] = {}

    for key, value in raw.items():
        attr = canonical_key(key)
        if attr is None:
            front_matter.extra[str(key)] = value
            continue
        if attr in seen:
            problems.append(
                FieldProblem(str(key), f"'{key}' repeats '{seen[attr]}' with different case")
            )
            continue
        seen[attr] = str(key)

        if attr == "date":
            if value is None:
                continue
            try:
                front_matter.date = parse_date(value, tz)
            except (TypeError, ValueError) as exc:
                problems.append(FieldProblem(str(key), f"invalid date {value!r}: {exc}"))
        elif attr in _LIST_FIELDS:
            terms = _coerce_terms(value)
            if terms is None:
                problems.append(
                    FieldProblem(str(key), f"expected a list of strings, got {_describe(value)}")
                )
            else:
                setattr(front_matter, attr, terms)
        elif attr in _TEXT_FIELDS:
            if value is None:
                continue
            if isinstance(value, (str, int, float)) and not isinstance(value, bool):
                setattr(front_matter, attr, str(value))
            else:
                problems.append(FieldProblem(str(key), f"expected a string, got {_describe(value)}"))
        elif attr in _BOOL_FIELDS:
            if value is None:
                continue
            if isinstance(value, bool):
                setattr(front_matter, attr, value)
            else:
                problems.append(FieldProblem(str(key), f"expected true or false, got {_describe(value)}"))

    return front_matter, problems


def _coerce_terms(value: Any) -> list[str] | None:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if isinstance(value, (list, tuple)):
        terms = []
        for item in value:
            if not isinstance(item, (str, int, float)) or isinstance(item, bool):
                return None
            terms.append(str(item))
        return terms
    return None


def _describe(value: Any) -> str:
    if isinstance(value, bool):
        return f"boolean {value!r}"
    if isinstance(value, (dict, list)):
        return type(value).__name__
    return f"{type(value).__name__} {value!r}"
