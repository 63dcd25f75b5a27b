"""
postkit - tooling for a Markdown blog content repository.

This package loads Markdown posts with front matter, checks them for the
mistakes the external site generator would trip over (malformed metadata,
missing titles, unclosed code fences, accidental future-dating), previews
the published listing and handles the draft/publish lifecycle.

Main entry point is the CLI via `postkit` command.

Example:
    $ postkit lint content/
    $ postkit list --all
"""

__all__ = ["__version__", "load_document", "load_documents", "parse_front_matter", "slugify"]
__version__ = "0.1.0"

from .core.entry import slugify
from .input.frontmatter import parse_front_matter
from .input.loader import load_document, load_documents
