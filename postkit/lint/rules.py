"""
Per-document content checks.

Each rule is a function taking a Document and a LintContext and returning
the issues it finds. Rules are registered in RULES under their id; the id is
also what ``lint.disabled_rules`` refers to.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable

from ..config import LintConfig
from ..core.metadata import RECOGNIZED_KEYS
from ..core.types import Document, LintIssue


@dataclass
class LintContext:
    """Shared inputs for rule functions.

    Attributes:
        cfg: Lint configuration
        now: Reference time for future-date checks
    """

    cfg: LintConfig
    now: datetime
    allowed_keys: set[str] = field(init=False)

    def __post_init__(self) -> None:
        self.allowed_keys = {key.lower() for key in self.cfg.allowed_keys}


Rule = Callable[[Document, LintContext], list[LintIssue]]


def _issue(doc: Document, rule: str, severity: str, message: str, line: int | None = None) -> LintIssue:
    return LintIssue(path=doc.path, rule=rule, severity=severity, message=message, line=line)


def check_title(doc: Document, ctx: LintContext) -> list[LintIssue]:
    if doc.front_matter.title.strip():
        return []
    if any(problem.key.lower() == "title" for problem in doc.problems):
        # Already reported as field-type
        return []
    return [_issue(doc, "title-required", "error", "Title is empty or missing", doc.line_of("title"))]


def check_field_types(doc: Document, ctx: LintContext) -> list[LintIssue]:
    issues = []
    for problem in doc.problems:
        rule = "invalid-date" if problem.key.lower() == "date" else "field-type"
        issues.append(
            _issue(doc, rule, "error", f"{problem.key}: {problem.message}", doc.line_of(problem.key))
        )
    return issues


def check_date_missing(doc: Document, ctx: LintContext) -> list[LintIssue]:
    if doc.front_matter.date is not None:
        return []
    if any(problem.key.lower() == "date" for problem in doc.problems):
        # Already reported as invalid-date
        return []
    return [
        _issue(doc, "date-missing", "warning", "No publication date; the post will sort last", doc.line_of("date"))
    ]


def check_future_date(doc: Document, ctx: LintContext) -> list[LintIssue]:
    fm = doc.front_matter
    if fm.draft or fm.date is None or fm.date <= ctx.now:
        return []
    return [
        _issue(
            doc,
            "future-date",
            ctx.cfg.future_date_severity,
            f"Date {fm.date.isoformat()} is in the future; the post is hidden from listings until then",
            doc.line_of("date"),
        )
    ]


def check_unknown_keys(doc: Document, ctx: LintContext) -> list[LintIssue]:
    issues = []
    for key in doc.front_matter.extra:
        if key.lower() in RECOGNIZED_KEYS or key.lower() in ctx.allowed_keys:
            continue
        issues.append(
            _issue(doc, "unknown-key", "info", f"Unrecognized front matter key '{key}'", doc.line_of(key))
        )
    return issues


def check_description(doc: Document, ctx: LintContext) -> list[LintIssue]:
    fm = doc.front_matter
    if fm.description.strip() or fm.summary.strip():
        return []
    return [
        _issue(
            doc,
            "empty-description",
            "info",
            "Description and summary are both empty; listings fall back to the body excerpt",
            doc.line_of("description"),
        )
    ]


def check_body(doc: Document, ctx: LintContext) -> list[LintIssue]:
    if doc.body.strip():
        return []
    return [_issue(doc, "empty-body", "warning", "Document body is empty", doc.body_line)]


def check_code_fences(doc: Document, ctx: LintContext) -> list[LintIssue]:
    issues = []
    for block in doc.code_blocks:
        if not block.closed:
            issues.append(
                _issue(
                    doc,
                    "unclosed-code-fence",
                    "error",
                    "Code fence is never closed; the rest of the document renders as code",
                    block.start_line,
                )
            )
        elif block.language is None and ctx.cfg.require_code_language:
            issues.append(
                _issue(
                    doc,
                    "code-language-missing",
                    "info",
                    "Code fence has no language; it renders without highlighting",
                    block.start_line,
                )
            )
    return issues


def check_duplicate_terms(doc: Document, ctx: LintContext) -> list[LintIssue]:
    fm = doc.front_matter
    issues = []
    for key, terms in (("tags", fm.tags), ("categories", fm.categories), ("series", fm.series)):
        seen: dict[str, str] = {}
        for term in terms:
            folded = term.strip().casefold()
            if folded in seen:
                issues.append(
                    _issue(
                        doc,
                        "duplicate-term",
                        "warning",
                        f"{key}: '{term}' repeats '{seen[folded]}'",
                        doc.line_of(key),
                    )
                )
                continue
            seen[folded] = term
    return issues


RULES: dict[str, Rule] = {
    "title-required": check_title,
    "field-type": check_field_types,
    "date-missing": check_date_missing,
    "future-date": check_future_date,
    "unknown-key": check_unknown_keys,
    "empty-description": check_description,
    "empty-body": check_body,
    "unclosed-code-fence": check_code_fences,
    "duplicate-term": check_duplicate_terms,
}
