"""
Input parsing utilities.

This package contains code for reading content records: front matter,
fenced code blocks and directory discovery.
"""

from .codeblocks import extract_code_blocks
from .frontmatter import FrontMatterError, parse_front_matter, split_front_matter
from .loader import discover_documents, load_document, load_documents

__all__ = [
    "extract_code_blocks",
    "FrontMatterError",
    "parse_front_matter",
    "split_front_matter",
    "discover_documents",
    "load_document",
    "load_documents",
]
