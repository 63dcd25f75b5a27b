"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- ContentConfig: Where content records live and which files count
- SiteConfig: Listing title, timezone and renderer build flags
- LintConfig: Content check behavior
- DedupConfig: Near-duplicate detection thresholds
- AuthoringConfig: Defaults for newly created posts
- OutputConfig: Report and index output locations
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Any

import yaml

from .core.types import SEVERITIES


CONTENT_DIR_ENV = "POSTKIT_CONTENT_DIR"


@dataclass
class ContentConfig:
    """Configuration for content discovery.

    Attributes:
        content_dir: Root directory of the content records
        extensions: File suffixes treated as content records
        exclude: Glob patterns (relative to content_dir) to skip
        encoding: Text encoding of content files
    """

    content_dir: str = "content"
    extensions: list[str] = field(default_factory=lambda: [".md", ".markdown"])
    exclude: list[str] = field(default_factory=list)
    encoding: str = "utf-8"


@dataclass
class SiteConfig:
    """Configuration mirroring the external renderer's publication rules.

    Attributes:
        title: Title used for listing previews
        timezone: IANA timezone name for dates without an offset, or "local"
        build_drafts: Whether the renderer lists drafts
        build_future: Whether the renderer lists future-dated posts
    """

    title: str = "Posts"
    timezone: str = "UTC"
    build_drafts: bool = False
    build_future: bool = False


@dataclass
class LintConfig:
    """Configuration for content checks.

    Attributes:
        disabled_rules: Rule ids that are not run
        allowed_keys: Extra front matter keys that are not reported as unknown
        require_code_language: Whether fences without a language are reported
        future_date_severity: Severity of the future-date rule
        fail_on: Lowest severity that fails a run ("error" or "warning")
    """

    disabled_rules: list[str] = field(default_factory=list)
    allowed_keys: list[str] = field(default_factory=lambda: ["slug", "aliases", "weight", "cover"])
    require_code_language: bool = True
    future_date_severity: str = "warning"
    fail_on: str = "error"


@dataclass
class DedupConfig:
    """Configuration for near-duplicate detection.

    Attributes:
        enabled: Whether to compare documents pairwise
        title_similarity_threshold: Fuzzy match threshold (0-100) for titles
        body_similarity_threshold: Fuzzy match threshold (0-100) for bodies
    """

    enabled: bool = True
    title_similarity_threshold: int = 92
    body_similarity_threshold: int = 90


@dataclass
class AuthoringConfig:
    """Defaults for posts created with ``postkit new``.

    Attributes:
        section: Subdirectory of content_dir for new posts
        author: Default author list
        show_toc: Default ShowToc value
        toc_open: Default TocOpen value
    """

    section: str = "posts"
    author: list[str] = field(default_factory=list)
    show_toc: bool = True
    toc_open: bool = False


@dataclass
class OutputConfig:
    """Configuration for generated files.

    Attributes:
        index_path: JSON listing index written by ``postkit index``
        html_path: Optional HTML listing preview
        report_path: Optional lint report (.md or .json)
    """

    index_path: str = "public/posts.json"
    html_path: str | None = None
    report_path: str | None = None


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Path of the log file
    """

    level: str = "WARNING"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "postkit.jsonl"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    content: ContentConfig = field(default_factory=ContentConfig)
    site: SiteConfig = field(default_factory=SiteConfig)
    lint: LintConfig = field(default_factory=LintConfig)
    dedup: DedupConfig = field(default_factory=DedupConfig)
    authoring: AuthoringConfig = field(default_factory=AuthoringConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults.

    The content directory can be overridden with POSTKIT_CONTENT_DIR.
    """
    if not path:
        cfg = AppConfig()
    else:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
        if not isinstance(raw, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        cfg = _merge_config(AppConfig(), raw)
        _validate(cfg, path)

    env_dir = os.getenv(CONTENT_DIR_ENV)
    if env_dir:
        cfg.content.content_dir = env_dir
    return cfg


def _validate(cfg: AppConfig, path: str) -> None:
    """Reject values that would silently change how lint results are counted."""
    if cfg.lint.future_date_severity not in SEVERITIES:
        raise ValueError(
            f"Config file {path}: lint.future_date_severity must be one of "
            f"{', '.join(SEVERITIES)}, got {cfg.lint.future_date_severity!r}"
        )
    if cfg.lint.fail_on not in ("error", "warning"):
        raise ValueError(
            f"Config file {path}: lint.fail_on must be 'error' or 'warning', got {cfg.lint.fail_on!r}"
        )


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "content": {
            "content_dir": cfg.content.content_dir,
            "extensions": list(cfg.content.extensions),
            "exclude": list(cfg.content.exclude),
            "encoding": cfg.content.encoding,
        },
        "site": {
            "title": cfg.site.title,
            "timezone": cfg.site.timezone,
            "build_drafts": cfg.site.build_drafts,
            "build_future": cfg.site.build_future,
        },
        "lint": {
            "disabled_rules": list(cfg.lint.disabled_rules),
            "allowed_keys": list(cfg.lint.allowed_keys),
            "require_code_language": cfg.lint.require_code_language,
            "future_date_severity": cfg.lint.future_date_severity,
            "fail_on": cfg.lint.fail_on,
        },
        "dedup": {
            "enabled": cfg.dedup.enabled,
            "title_similarity_threshold": cfg.dedup.title_similarity_threshold,
            "body_similarity_threshold": cfg.dedup.body_similarity_threshold,
        },
        "authoring": {
            "section": cfg.authoring.section,
            "author": list(cfg.authoring.author),
            "show_toc": cfg.authoring.show_toc,
            "toc_open": cfg.authoring.toc_open,
        },
        "output": {
            "index_path": cfg.output.index_path,
            "html_path": cfg.output.html_path,
            "report_path": cfg.output.report_path,
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
        },
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        content=ContentConfig(**data["content"]),
        site=SiteConfig(**data["site"]),
        lint=LintConfig(**data["lint"]),
        dedup=DedupConfig(**data["dedup"]),
        authoring=AuthoringConfig(**data["authoring"]),
        output=OutputConfig(**data["output"]),
        logging=LoggingConfig(**data["logging"]),
    )
