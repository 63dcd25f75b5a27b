"""Run content checks over a loaded content tree."""

from __future__ import annotations

import logging
from datetime import datetime

from ..config import DedupConfig, LintConfig
from ..core.dedup import find_near_duplicates
from ..core.types import LintIssue, LintReport, LoadResult
from ..utils.logging import get_logger, log_event
from .rules import RULES, LintContext


def lint_documents(
    loaded: LoadResult,
    cfg: LintConfig,
    now: datetime,
    dedup: DedupConfig | None = None,
    logger: logging.Logger | None = None,
) -> LintReport:
    """Check every loaded document and every load failure.

    Args:
        loaded: Output of load_documents
        cfg: Lint configuration
        now: Reference time for the future-date rule
        dedup: Near-duplicate settings; None or disabled skips the comparison
        logger: Optional logger for per-rule events

    Returns:
        A LintReport with issues sorted by path, line and rule
    """
    logger = logger or get_logger("lint")
    ctx = LintContext(cfg=cfg, now=now)
    disabled = set(cfg.disabled_rules)
    issues: list[LintIssue] = []

    for failure in loaded.failures:
        issues.append(
            LintIssue(
                path=failure.path,
                rule=failure.code,
                severity="error",
                message=failure.message,
                line=failure.line,
            )
        )
        log_event(logger, "Document failed to load", event="load_failed", path=str(failure.path), code=failure.code)

    for doc in loaded.documents:
        for rule_id, rule in RULES.items():
            if rule_id in disabled:
                continue
            found = rule(doc, ctx)
            if found:
                log_event(
                    logger,
                    f"{rule_id}: {len(found)} issue(s) in {doc.path}",
                    level=logging.DEBUG,
                    event="rule_matched",
                    rule=rule_id,
                    path=str(doc.path),
                    count=len(found),
                )
            issues.extend(found)

    if dedup is not None and dedup.enabled and "near-duplicate" not in disabled:
        pairs = find_near_duplicates(
            loaded.documents,
            title_threshold=dedup.title_similarity_threshold,
            body_threshold=dedup.body_similarity_threshold,
        )
        for pair in pairs:
            issues.append(
                LintIssue(
                    path=pair.second.path,
                    rule="near-duplicate",
                    severity="warning",
                    message=(
                        f"Near-duplicate of {pair.first.path.name} "
                        f"(title {pair.title_score:.0f}%, body {pair.body_score:.0f}%)"
                    ),
                )
            )

    issues = [issue for issue in issues if issue.rule not in disabled]
    issues.sort(key=lambda issue: (str(issue.path), issue.line or 0, issue.rule))
    report = LintReport(documents=len(loaded.documents) + len(loaded.failures), issues=issues)
    log_event(logger, "Lint finished", event="lint_finished", documents=report.documents, **report.counts())
    return report
