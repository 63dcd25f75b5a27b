"""Slugs and file locations for content entries.

Each post lives at ``<content_dir>/<section>/<slug>.md`` where the slug is
derived from the title when the post is created.
"""

from __future__ import annotations

import re
import unicodedata
from pathlib import Path


def slugify(text: str) -> str:
    """Convert text to URL-safe slug.

    Args:
        text: The text to slugify

    Returns:
        A lowercase, hyphenated slug limited to 50 characters
    """
    # Fold accented characters onto their ASCII base letters
    slug = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    slug = slug.lower()
    slug = re.sub(r"[^a-z0-9]+", "-", slug)
    slug = slug.strip("-")
    if not slug:
        slug = "untitled"
    return slug[:50].rstrip("-")


def post_path(content_dir: Path, section: str, title: str, suffix: str = ".md") -> Path:
    """Return the file path a new post with this title would be written to."""
    return content_dir / section / f"{slugify(title)}{suffix}"


def relative_path(path: Path, root: Path) -> str:
    """Return path relative to root in POSIX form, or the path itself outside root."""
    try:
        return path.resolve().relative_to(root.resolve()).as_posix()
    except ValueError:
        return path.as_posix()
