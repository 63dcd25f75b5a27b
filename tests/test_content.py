"""Checks against the sample posts shipped in content/."""

from datetime import datetime, timezone
from pathlib import Path

from postkit.config import DedupConfig, LintConfig
from postkit.core.entry import post_path, slugify
from postkit.core.publish import DRAFT, published_listing, publication_state
from postkit.input.loader import discover_documents, load_documents
from postkit.lint import lint_documents

CONTENT_DIR = Path(__file__).resolve().parent.parent / "content"
NOW = datetime(2026, 10, 19, tzinfo=timezone.utc)


def _load():
    return load_documents(discover_documents(CONTENT_DIR))


def test_sample_posts_load_cleanly():
    loaded = _load()

    assert loaded.failures == []
    assert len(loaded.documents) == 2
    for doc in loaded.documents:
        assert doc.front_matter.title
        assert doc.problems == []
        assert len(doc.code_blocks) >= 5


def test_only_the_published_sample_is_listed():
    docs = _load().documents

    listing = published_listing(docs, NOW, root=CONTENT_DIR)
    draft = next(doc for doc in docs if doc.front_matter.draft)

    assert [entry.slug for entry in listing] == ["typescript-any-vs-unknown"]
    assert listing[0].path == "posts/typescript-any-vs-unknown.md"
    assert publication_state(draft, NOW) == DRAFT


def test_sample_posts_lint_without_errors_but_flag_duplicate():
    report = lint_documents(_load(), LintConfig(), NOW, dedup=DedupConfig())

    assert report.counts()["error"] == 0
    assert [issue.rule for issue in report.issues if issue.severity == "warning"] == ["near-duplicate"]


def test_slugify_matches_sample_file_name():
    assert slugify("TypeScript any vs unknown") == "typescript-any-vs-unknown"
    assert post_path(CONTENT_DIR, "posts", "TypeScript any vs unknown") == (
        CONTENT_DIR / "posts" / "typescript-any-vs-unknown.md"
    )


def test_slugify_edge_cases():
    assert slugify("Café & Crème!") == "cafe-creme"
    assert slugify("   ") == "untitled"
    assert len(slugify("word " * 40)) <= 50
    assert not slugify("word " * 40).endswith("-")
