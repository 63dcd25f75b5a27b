"""
Authoring lifecycle: scaffold a draft, then publish it.

Publishing only edits the front matter lines it changes (``draft`` and,
optionally, ``date``); the rest of the file stays byte-for-byte as written.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from pathlib import Path

from .config import AuthoringConfig
from .core.entry import post_path
from .core.metadata import CANONICAL_KEYS
from .core.publish import publication_state
from .input.frontmatter import dump_front_matter, set_front_matter_values
from .input.loader import load_document


@dataclass
class PublishResult:
    """Outcome of publishing a post.

    Attributes:
        path: File that was updated
        state: Publication state after the edit ("published" or "scheduled")
        date: Post date after the edit
    """

    path: Path
    state: str
    date: datetime | None


def new_post(
    content_dir: Path,
    title: str,
    cfg: AuthoringConfig,
    now: datetime,
    author: list[str] | None = None,
    tags: list[str] | None = None,
    categories: list[str] | None = None,
    series: list[str] | None = None,
    section: str | None = None,
) -> Path:
    """Create a draft post with the full front matter key set.

    Args:
        content_dir: Root of the content tree
        title: Post title; also the source of the file slug
        cfg: Authoring defaults
        now: Creation time, written as the post date
        author: Authors, defaults to cfg.author
        tags, categories, series: Initial terms
        section: Subdirectory, defaults to cfg.section

    Returns:
        Path of the created file

    Raises:
        ValueError: If the title is blank
        FileExistsError: If a post with the same slug already exists
    """
    if not title.strip():
        raise ValueError("A post needs a non-empty title")

    path = post_path(content_dir, section or cfg.section, title)
    if path.exists():
        raise FileExistsError(f"{path} already exists")

    fields = {
        "author": list(author) if author else list(cfg.author),
        "title": title.strip(),
        "date": now.replace(microsecond=0),
        "description": "",
        "summary": "",
        "tags": list(tags or []),
        "categories": list(categories or []),
        "series": list(series or []),
        "show_toc": cfg.show_toc,
        "toc_open": cfg.toc_open,
        "draft": True,
    }
    mapping = {CANONICAL_KEYS[attr]: value for attr, value in fields.items()}

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_front_matter(mapping) + "\n", encoding="utf-8")
    return path


def publish_post(
    path: Path,
    now: datetime,
    date: datetime | None = None,
    tz: tzinfo = timezone.utc,
    encoding: str = "utf-8",
) -> PublishResult:
    """Clear a post's draft flag, optionally setting its date.

    A post whose date is still ahead of ``now`` ends up "scheduled": the
    renderer keeps suppressing it until that date passes.

    Raises:
        FrontMatterError: If the file has no readable front matter
    """
    updates: dict[str, object] = {"draft": False}
    if date is not None:
        updates["date"] = date
    # newline="" keeps CRLF files as they are
    with open(path, "r", encoding=encoding, newline="") as f:
        text = f.read()
    updated = set_front_matter_values(text, updates)
    with open(path, "w", encoding=encoding, newline="") as f:
        f.write(updated)

    doc = load_document(path, tz, encoding)
    return PublishResult(path=path, state=publication_state(doc, now), date=doc.front_matter.date)
