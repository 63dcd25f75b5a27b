"""
Content checks.

Rules live in ``rules``; ``checker.lint_documents`` runs them over a
loaded content tree and adds the cross-document near-duplicate check.
"""

from .checker import lint_documents
from .rules import RULES, LintContext

__all__ = ["lint_documents", "RULES", "LintContext"]
