"""
Core domain models and content logic.

This package contains data types and rules that are independent of how
content is read from disk or reported.
"""

from .types import (
    CodeBlock,
    Document,
    FieldProblem,
    FrontMatter,
    LintIssue,
    LintReport,
    ListingEntry,
    LoadFailure,
    LoadResult,
)
from .entry import slugify
from .metadata import coerce_front_matter, parse_date
from .publish import publication_state, published_listing
from .dedup import find_near_duplicates

__all__ = [
    "CodeBlock",
    "Document",
    "FieldProblem",
    "FrontMatter",
    "LintIssue",
    "LintReport",
    "ListingEntry",
    "LoadFailure",
    "LoadResult",
    "slugify",
    "coerce_front_matter",
    "parse_date",
    "publication_state",
    "published_listing",
    "find_near_duplicates",
]
