"""
Discovery and loading of content records from a content directory.
"""

from __future__ import annotations

import fnmatch
from datetime import timezone, tzinfo
from pathlib import Path
from typing import Iterable

from ..core.metadata import coerce_front_matter
from ..core.types import Document, LoadFailure, LoadResult
from .frontmatter import FrontMatterError, key_lines, parse_front_matter


DEFAULT_EXTENSIONS = (".md", ".markdown")


def discover_documents(
    content_dir: Path,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    exclude: Iterable[str] = (),
) -> list[Path]:
    """List content files under a directory, recursively and sorted.

    Args:
        content_dir: Root of the content tree
        extensions: File suffixes to include (case-insensitive)
        exclude: Glob patterns matched against the POSIX path relative to
                 content_dir (e.g. "drafts/*", "*/_index.md")

    Returns:
        Matching file paths in sorted order
    """
    suffixes = {ext.lower() for ext in extensions}
    patterns = list(exclude)
    found = []
    for path in content_dir.rglob("*"):
        if not path.is_file() or path.suffix.lower() not in suffixes:
            continue
        rel = path.relative_to(content_dir).as_posix()
        if any(fnmatch.fnmatch(rel, pattern) for pattern in patterns):
            continue
        found.append(path)
    return sorted(found)


def load_document(path: Path, tz: tzinfo = timezone.utc, encoding: str = "utf-8") -> Document:
    """Read and parse a single content file.

    Raises:
        FrontMatterError: If the front matter block is missing or malformed
        UnicodeDecodeError: If the file is not valid in the given encoding
    """
    text = path.read_text(encoding=encoding)
    fmt, raw, body, body_line = parse_front_matter(text)
    front_matter, problems = coerce_front_matter(raw, tz)
    return Document(
        path=path,
        format=fmt,
        raw=raw,
        front_matter=front_matter,
        body=body,
        body_line=body_line,
        problems=problems,
        key_lines=key_lines(text),
    )


def load_documents(
    paths: Iterable[Path], tz: tzinfo = timezone.utc, encoding: str = "utf-8"
) -> LoadResult:
    """Load many content files, collecting failures instead of stopping.

    Returns:
        A LoadResult with the parsed documents and one LoadFailure per file
        that could not be read
    """
    result = LoadResult()
    for path in paths:
        try:
            result.documents.append(load_document(path, tz, encoding))
        except FrontMatterError as exc:
            result.failures.append(LoadFailure(path, exc.code, exc.message, exc.line))
        except UnicodeDecodeError as exc:
            result.failures.append(
                LoadFailure(path, "encoding", f"File is not valid {encoding}: {exc.reason}")
            )
    return result
