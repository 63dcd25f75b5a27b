"""Report rendering and listing index helpers."""

from .index_sync import IndexChange, load_index, write_listing_index
from .renderer import (
    render_listing_html,
    render_listing_markdown,
    render_report,
    render_report_json,
    render_report_markdown,
)

__all__ = [
    "IndexChange",
    "load_index",
    "write_listing_index",
    "render_listing_html",
    "render_listing_markdown",
    "render_report",
    "render_report_json",
    "render_report_markdown",
]
