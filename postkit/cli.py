"""
Command-line interface for postkit.

Uses Typer to provide commands for checking content records, previewing
the published listing, writing the listing index, and the draft/publish
lifecycle. Supports loading .env files for environment overrides.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .authoring import new_post, publish_post
from .config import AppConfig, load_config
from .core.metadata import parse_date
from .core.publish import DRAFT, SCHEDULED, now_in, resolve_timezone
from .input.frontmatter import FrontMatterError
from .runner import build_index, list_content, run_lint
from .utils.logging import setup_logging

try:
    from dotenv import load_dotenv
except Exception:  # noqa: BLE001
    load_dotenv = None

DEFAULT_CONFIG_FILE = Path("postkit.yaml")

app = typer.Typer(add_completion=False, help="Check and manage Markdown blog content.")
console = Console()

_SEVERITY_STYLES = {"error": "bold red", "warning": "yellow", "info": "cyan"}
_STATE_STYLES = {"published": "green", DRAFT: "magenta", SCHEDULED: "yellow"}


def _prepare(config: Path | None, log_level: str | None) -> AppConfig:
    """Load .env, configuration and logging shared by every command."""
    if load_dotenv is not None:
        load_dotenv()

    if config is None and DEFAULT_CONFIG_FILE.exists():
        config = DEFAULT_CONFIG_FILE
    try:
        cfg = load_config(str(config) if config else None)
    except (OSError, TypeError, ValueError) as exc:
        _fail(f"Cannot load config: {exc}")

    if log_level:
        cfg.logging.level = log_level
    setup_logging(cfg.logging, console=console)
    return cfg


def _fail(message: str) -> None:
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")
    raise typer.Exit(code=1)


def _parse_when(value: str | None, cfg: AppConfig) -> datetime | None:
    if value is None:
        return None
    try:
        return parse_date(value, resolve_timezone(cfg.site.timezone))
    except ValueError as exc:
        _fail(f"Invalid date {value!r}: {exc}")


def _format_date(value: datetime | None) -> str:
    return value.strftime("%Y-%m-%d %H:%M") if value is not None else "-"


ConfigOption = typer.Option(None, "--config", "-c", exists=True, dir_okay=False, help="YAML config file.")
LogLevelOption = typer.Option(None, "--log-level", help="Logging level.")
NowOption = typer.Option(None, "--now", help="Evaluate dates as of this ISO 8601 time.")


@app.command()
def lint(
    content_dir: Path | None = typer.Argument(None, help="Content directory (defaults to config)."),
    report: Path | None = typer.Option(None, "--report", "-r", help="Write a .md or .json report."),
    fail_on: str | None = typer.Option(None, "--fail-on", help="Fail on 'error' or 'warning'."),
    now: str | None = NowOption,
    config: Path | None = ConfigOption,
    log_level: str | None = LogLevelOption,
):
    """Check front matter, dates and code fences of every content record."""
    cfg = _prepare(config, log_level)
    if fail_on:
        cfg.lint.fail_on = fail_on
    if cfg.lint.fail_on not in ("error", "warning"):
        _fail(f"--fail-on must be 'error' or 'warning', got {cfg.lint.fail_on!r}")

    try:
        result = run_lint(cfg, content_dir, _parse_when(now, cfg), report)
    except FileNotFoundError as exc:
        _fail(str(exc))

    if result.issues:
        table = Table(title="Content issues")
        table.add_column("Location")
        table.add_column("Severity")
        table.add_column("Rule")
        table.add_column("Message")
        for issue in result.issues:
            where = f"{issue.path}:{issue.line}" if issue.line is not None else str(issue.path)
            style = _SEVERITY_STYLES.get(issue.severity, "")
            table.add_row(escape(where), f"[{style}]{issue.severity}[/{style}]", issue.rule, escape(issue.message))
        console.print(table)

    counts = result.counts()
    console.print(
        f"{result.documents} document(s): "
        f"{counts['error']} error(s), {counts['warning']} warning(s), {counts['info']} info"
    )
    if report:
        console.print(f"Report written: {report}")
    if result.has_failures(cfg.lint.fail_on):
        raise typer.Exit(code=1)


@app.command("list")
def list_posts(
    content_dir: Path | None = typer.Argument(None, help="Content directory (defaults to config)."),
    show_all: bool = typer.Option(False, "--all", "-a", help="Include drafts and scheduled posts."),
    now: str | None = NowOption,
    config: Path | None = ConfigOption,
    log_level: str | None = LogLevelOption,
):
    """Show the posts the renderer would list, newest first."""
    cfg = _prepare(config, log_level)
    try:
        entries, content = list_content(cfg, content_dir, _parse_when(now, cfg), include_unpublished=show_all)
    except FileNotFoundError as exc:
        _fail(str(exc))

    table = Table(title=cfg.site.title)
    table.add_column("Date")
    table.add_column("Title")
    table.add_column("State")
    table.add_column("Path")
    for entry in entries:
        style = _STATE_STYLES.get(entry.state, "")
        table.add_row(_format_date(entry.date), escape(entry.title), f"[{style}]{entry.state}[/{style}]", escape(entry.path))
    console.print(table)

    skipped = len(content.loaded.failures)
    if skipped:
        console.print(f"[yellow]{skipped} file(s) skipped; run 'postkit lint' for details[/yellow]")


@app.command()
def index(
    content_dir: Path | None = typer.Argument(None, help="Content directory (defaults to config)."),
    output: Path | None = typer.Option(None, "--output", "-o", help="JSON index path."),
    html: Path | None = typer.Option(None, "--html", help="Also write a listing preview (.html or .md)."),
    now: str | None = NowOption,
    config: Path | None = ConfigOption,
    log_level: str | None = LogLevelOption,
):
    """Write the published listing to a JSON index."""
    cfg = _prepare(config, log_level)
    try:
        result = build_index(cfg, content_dir, _parse_when(now, cfg), output, html)
    except FileNotFoundError as exc:
        _fail(str(exc))

    console.print(f"Index generated: {result.change.path} ({len(result.listing)} post(s))")
    for slug in result.change.added:
        console.print(f"  [green]+ {slug}[/green]")
    for slug in result.change.removed:
        console.print(f"  [red]- {slug}[/red]")
    if result.html_path is not None:
        console.print(f"Preview generated: {result.html_path}")


@app.command()
def new(
    title: str = typer.Argument(..., help="Post title."),
    content_dir: Path | None = typer.Option(None, "--content-dir", help="Content directory."),
    section: str | None = typer.Option(None, "--section", "-s", help="Subdirectory for the post."),
    author: list[str] = typer.Option([], "--author", help="Author (repeatable)."),
    tag: list[str] = typer.Option([], "--tag", "-t", help="Tag (repeatable)."),
    category: list[str] = typer.Option([], "--category", help="Category (repeatable)."),
    series: list[str] = typer.Option([], "--series", help="Series (repeatable)."),
    config: Path | None = ConfigOption,
    log_level: str | None = LogLevelOption,
):
    """Create a new draft post."""
    cfg = _prepare(config, log_level)
    root = content_dir or Path(cfg.content.content_dir)
    try:
        path = new_post(
            root,
            title,
            cfg.authoring,
            now_in(resolve_timezone(cfg.site.timezone)),
            author=author or None,
            tags=tag,
            categories=category,
            series=series,
            section=section,
        )
    except (FileExistsError, ValueError) as exc:
        _fail(str(exc))
    console.print(f"Draft created: {path}")


@app.command()
def publish(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Post file."),
    date: str | None = typer.Option(None, "--date", help="Set the publication date (ISO 8601)."),
    now: str | None = NowOption,
    config: Path | None = ConfigOption,
    log_level: str | None = LogLevelOption,
):
    """Clear a post's draft flag, optionally setting its date."""
    cfg = _prepare(config, log_level)
    tz = resolve_timezone(cfg.site.timezone)
    moment = _parse_when(now, cfg) or now_in(tz)
    try:
        result = publish_post(path, moment, _parse_when(date, cfg), tz, cfg.content.encoding)
    except FrontMatterError as exc:
        _fail(f"{path}: {exc.message}")
    except UnicodeDecodeError as exc:
        _fail(f"{path}: file is not valid {cfg.content.encoding}: {exc.reason}")

    if result.state == SCHEDULED:
        console.print(
            f"[yellow]Published {path}, but its date {_format_date(result.date)} is in the future; "
            "it stays hidden from listings until then.[/yellow]"
        )
    else:
        console.print(f"Published: {path}")


if __name__ == "__main__":
    app()
