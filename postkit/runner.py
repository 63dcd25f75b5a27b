"""
Orchestration of the content workflows.

This module coordinates:
1. Discover content files under the content directory
2. Load and coerce their front matter
3. Lint them, or build the published listing
4. Write reports, the listing index and the HTML preview

The CLI is a thin layer over these functions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from pathlib import Path

from .config import AppConfig
from .core.publish import all_entries, now_in, published_listing, resolve_timezone
from .core.types import LintReport, ListingEntry, LoadResult
from .input.loader import discover_documents, load_documents
from .lint import lint_documents
from .output.index_sync import IndexChange, write_listing_index
from .output.renderer import render_listing_html, render_listing_markdown, render_report
from .utils.logging import get_logger, log_event


@dataclass
class ContentSet:
    """A loaded content tree.

    Attributes:
        root: Content directory
        tz: Site timezone used for naive dates
        loaded: Documents and load failures
    """

    root: Path
    tz: tzinfo
    loaded: LoadResult = field(default_factory=LoadResult)


@dataclass
class IndexResult:
    listing: list[ListingEntry]
    change: IndexChange
    html_path: Path | None = None


def load_content(cfg: AppConfig, content_dir: Path | None = None) -> ContentSet:
    """Discover and load every content record.

    Raises:
        FileNotFoundError: If the content directory does not exist
    """
    logger = get_logger("runner")
    root = content_dir or Path(cfg.content.content_dir)
    if not root.is_dir():
        raise FileNotFoundError(f"Content directory not found: {root}")

    tz = resolve_timezone(cfg.site.timezone)
    paths = discover_documents(root, cfg.content.extensions, cfg.content.exclude)
    log_event(logger, f"Found {len(paths)} content file(s) in {root}", event="discovered", count=len(paths))

    loaded = load_documents(paths, tz, cfg.content.encoding)
    log_event(
        logger,
        "Content loaded",
        event="content_loaded",
        documents=len(loaded.documents),
        failures=len(loaded.failures),
    )
    return ContentSet(root=root, tz=tz, loaded=loaded)


def reference_time(content: ContentSet, now: datetime | None) -> datetime:
    """Return ``now`` in the site timezone, defaulting to the current time."""
    if now is None:
        return now_in(content.tz)
    if now.tzinfo is None:
        return now.replace(tzinfo=content.tz)
    return now


def run_lint(
    cfg: AppConfig,
    content_dir: Path | None = None,
    now: datetime | None = None,
    report_path: Path | None = None,
) -> LintReport:
    """Lint the content tree and optionally write a report file."""
    content = load_content(cfg, content_dir)
    report = lint_documents(
        content.loaded,
        cfg.lint,
        reference_time(content, now),
        dedup=cfg.dedup,
        logger=get_logger("lint"),
    )
    target = report_path or (Path(cfg.output.report_path) if cfg.output.report_path else None)
    if target is not None:
        render_report(report, target)
        log_event(get_logger("runner"), f"Report written to {target}", event="report_written", target=str(target))
    return report


def list_content(
    cfg: AppConfig,
    content_dir: Path | None = None,
    now: datetime | None = None,
    include_unpublished: bool = False,
) -> tuple[list[ListingEntry], ContentSet]:
    """Return listing entries; with include_unpublished, drafts and scheduled posts too."""
    content = load_content(cfg, content_dir)
    moment = reference_time(content, now)
    if include_unpublished:
        entries = all_entries(content.loaded.documents, moment, root=content.root)
    else:
        entries = published_listing(
            content.loaded.documents,
            moment,
            build_drafts=cfg.site.build_drafts,
            build_future=cfg.site.build_future,
            root=content.root,
        )
    return entries, content


def build_index(
    cfg: AppConfig,
    content_dir: Path | None = None,
    now: datetime | None = None,
    index_path: Path | None = None,
    html_path: Path | None = None,
) -> IndexResult:
    """Write the published listing index and, if requested, a preview page.

    A preview path ending in ``.md`` is rendered as Markdown, anything else
    as HTML.
    """
    logger = get_logger("runner")
    listing, content = list_content(cfg, content_dir, now)
    target = index_path or Path(cfg.output.index_path)
    change = write_listing_index(listing, target)
    log_event(
        logger,
        f"Index written to {target}",
        event="index_written",
        entries=len(listing),
        added=change.added,
        removed=change.removed,
    )

    preview = html_path or (Path(cfg.output.html_path) if cfg.output.html_path else None)
    if preview is not None:
        if preview.suffix.lower() == ".md":
            render_listing_markdown(listing, preview, cfg.site.title)
        else:
            render_listing_html(listing, preview, cfg.site.title, reference_time(content, now))
        log_event(logger, f"Preview written to {preview}", event="preview_written", target=str(preview))

    return IndexResult(listing=listing, change=change, html_path=preview)
