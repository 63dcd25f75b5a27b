"""
Core data types for postkit.

This module defines the records passed between the loading, linting and
listing stages:
- FrontMatter: Typed view of a document's metadata block
- Document: One Markdown file with its parsed front matter and body
- LoadFailure: A file that could not be turned into a Document
- LintIssue / LintReport: Findings of the content checks
- ListingEntry: A row of the published listing preview
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any


SEVERITIES = ("error", "warning", "info")


@dataclass
class FrontMatter:
    """Typed metadata of a post.

    Attributes:
        title: Post headline
        author: Author names, in display order
        date: Publication date (timezone-aware), or None when absent
        description: Meta description, may be empty
        summary: Listing summary, may be empty
        tags: Tag terms
        categories: Category terms
        series: Series the post belongs to
        show_toc: Whether the renderer shows a table of contents (ShowToc)
        toc_open: Whether the table of contents starts expanded (TocOpen)
        draft: Draft flag; absence means published
        extra: Unrecognized keys, kept verbatim
    """

    title: str = ""
    author: list[str] = field(default_factory=list)
    date: datetime | None = None
    description: str = ""
    summary: str = ""
    tags: list[str] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)
    series: list[str] = field(default_factory=list)
    show_toc: bool = False
    toc_open: bool = False
    draft: bool = False
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass
class CodeBlock:
    """A fenced code block found in a document body.

    Line numbers refer to the whole file, not to the body.
    """

    language: str | None
    code: str
    start_line: int
    end_line: int | None = None
    closed: bool = True


@dataclass
class FieldProblem:
    """A recognized metadata key whose value has the wrong shape."""

    key: str
    message: str


@dataclass
class Document:
    """A Markdown content record.

    Attributes:
        path: Source file
        format: Front matter notation ("yaml", "toml" or "json")
        raw: Front matter mapping exactly as parsed
        front_matter: Typed metadata built from raw
        body: Everything after the front matter block
        body_line: 1-based file line where the body starts
        problems: Metadata values that could not be coerced
        key_lines: Lowercased top-level key -> 1-based file line
    """

    path: Path
    format: str
    raw: dict[str, Any]
    front_matter: FrontMatter
    body: str
    body_line: int = 1
    problems: list[FieldProblem] = field(default_factory=list)
    key_lines: dict[str, int] = field(default_factory=dict)

    def line_of(self, key: str) -> int | None:
        return self.key_lines.get(key.lower())

    @property
    def slug(self) -> str:
        explicit = self.front_matter.extra.get("slug")
        if isinstance(explicit, str) and explicit.strip():
            return explicit.strip()
        return self.path.stem

    @property
    def code_blocks(self) -> list[CodeBlock]:
        from ..input.codeblocks import extract_code_blocks

        return extract_code_blocks(self.body, first_line=self.body_line)


@dataclass
class LoadFailure:
    """A file that could not be loaded as a Document.

    Attributes:
        path: Source file
        code: Failure kind, reused as the lint rule id
        message: Human-readable reason
        line: 1-based line of the problem, when known
    """

    path: Path
    code: str
    message: str
    line: int | None = None


@dataclass
class LoadResult:
    """Documents loaded from a content tree plus the files that failed."""

    documents: list[Document] = field(default_factory=list)
    failures: list[LoadFailure] = field(default_factory=list)


@dataclass
class LintIssue:
    path: Path
    rule: str
    severity: str
    message: str
    line: int | None = None


@dataclass
class LintReport:
    """Outcome of a lint run.

    Attributes:
        documents: Number of files examined, including ones that failed to load
        issues: Findings, sorted by path, line and rule
    """

    documents: int = 0
    issues: list[LintIssue] = field(default_factory=list)

    def counts(self) -> dict[str, int]:
        totals = {severity: 0 for severity in SEVERITIES}
        for issue in self.issues:
            totals[issue.severity] = totals.get(issue.severity, 0) + 1
        return totals

    def has_failures(self, fail_on: str = "error") -> bool:
        """Return whether the report should fail a check run.

        Args:
            fail_on: "error" fails on errors only, "warning" also on warnings

        Returns:
            True if any issue reaches the requested severity
        """
        if fail_on not in ("error", "warning"):
            raise ValueError(f"Unsupported fail_on level: {fail_on}")
        failing = {"error"} if fail_on == "error" else {"error", "warning"}
        return any(issue.severity in failing for issue in self.issues)


@dataclass
class ListingEntry:
    """A post as it would appear in the renderer's listing."""

    slug: str
    title: str
    date: datetime | None
    path: str
    state: str
    summary: str = ""
    authors: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)
    series: list[str] = field(default_factory=list)
