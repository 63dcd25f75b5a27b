"""
Front matter splitting, parsing and in-place editing.

A content record starts with a metadata block in one of three notations:
- YAML between ``---`` lines
- TOML between ``+++`` lines
- a JSON object starting on the first line

Everything after the block is the document body.
"""

from __future__ import annotations

import json
import re
import tomllib
from datetime import date, datetime
from typing import Any

import yaml


YAML_DELIMITER = "---"
TOML_DELIMITER = "+++"
BOM = "\ufeff"

_TOP_LEVEL_KEY_RE = re.compile(r"""^("[^"]+"|'[^']+'|[A-Za-z_][\w.-]*)\s*[:=]""")


class FrontMatterError(ValueError):
    """Raised when a document's front matter block cannot be read.

    Attributes:
        code: Failure kind ("missing-front-matter", "unterminated-front-matter",
              "front-matter-syntax" or "front-matter-not-mapping")
        line: 1-based line of the problem, when known
    """

    def __init__(self, code: str, message: str, line: int | None = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.line = line


def split_front_matter(text: str) -> tuple[str, str, str, int]:
    """Split a document into its front matter block and body.

    Args:
        text: Full file content

    Returns:
        A tuple of (format, block, body, body_line) where body_line is the
        1-based line of the file on which the body starts

    Raises:
        FrontMatterError: If there is no block or it is never closed
    """
    text = _normalize(text)
    lines = text.split("\n")
    first = lines[0].rstrip()

    if first in (YAML_DELIMITER, TOML_DELIMITER):
        fmt = "yaml" if first == YAML_DELIMITER else "toml"
        close = _closing_index(lines, first)
        if close is None:
            raise FrontMatterError(
                "unterminated-front-matter",
                f"{fmt.upper()} front matter opened with '{first}' is never closed",
                line=1,
            )
        block = "\n".join(lines[1:close])
        body = "\n".join(lines[close + 1:])
        return fmt, block, body, close + 2

    if first.startswith("{"):
        try:
            _, end = json.JSONDecoder().raw_decode(text)
        except json.JSONDecodeError as exc:
            raise FrontMatterError(
                "front-matter-syntax",
                f"JSON front matter does not parse: {exc.msg}",
                line=exc.lineno,
            ) from exc
        block = text[:end]
        start = end + 1 if text[end:end + 1] == "\n" else end
        return "json", block, text[start:], text[:start].count("\n") + 1

    raise FrontMatterError(
        "missing-front-matter",
        "Document does not start with a front matter block",
        line=1,
    )


def parse_front_matter(text: str) -> tuple[str, dict[str, Any], str, int]:
    """Parse a document's front matter into a mapping.

    Returns:
        A tuple of (format, mapping, body, body_line)

    Raises:
        FrontMatterError: If the block is missing, malformed or not a mapping
    """
    fmt, block, body, body_line = split_front_matter(text)
    if fmt == "yaml":
        raw = _load_yaml(block)
    elif fmt == "toml":
        raw = _load_toml(block)
    else:
        raw = json.loads(block)

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise FrontMatterError(
            "front-matter-not-mapping",
            f"Front matter must be a key/value mapping, got {type(raw).__name__}",
            line=1,
        )
    return fmt, raw, body, body_line


def set_front_matter_values(text: str, updates: dict[str, Any]) -> str:
    """Rewrite top-level front matter keys, leaving everything else as written.

    YAML and TOML blocks are edited line by line so comments, key order and
    quoting of untouched keys survive. JSON blocks are re-serialized. Keys are
    matched case-insensitively; keys that do not exist yet are appended at the
    end of the block.

    Args:
        text: Full file content
        updates: Key/value pairs to set (scalars, dates and string lists)

    Returns:
        The updated file content
    """
    had_bom = text.startswith(BOM)
    crlf = "\r\n" in text
    fmt, block, body, _ = split_front_matter(text)
    normalized = _normalize(text)

    if fmt == "json":
        raw = json.loads(block)
        for key, value in updates.items():
            existing = _find_key(raw.keys(), key)
            raw[existing or key] = _jsonable(value)
        updated = json.dumps(raw, indent=2, ensure_ascii=False) + "\n" + body
    else:
        lines = normalized.split("\n")
        delimiter = lines[0].rstrip()
        close = _closing_index(lines, delimiter)
        block_lines = lines[1:close]
        for key, value in updates.items():
            block_lines = _replace_line(block_lines, key, value, fmt)
        updated = "\n".join([lines[0], *block_lines, *lines[close:]])

    if crlf:
        updated = updated.replace("\n", "\r\n")
    if had_bom:
        updated = BOM + updated
    return updated


def key_lines(text: str) -> dict[str, int]:
    """Map each top-level YAML/TOML front matter key (lowercased) to its file line.

    JSON blocks and unreadable blocks yield an empty mapping.
    """
    lines = _normalize(text).split("\n")
    delimiter = lines[0].rstrip()
    if delimiter not in (YAML_DELIMITER, TOML_DELIMITER):
        return {}
    close = _closing_index(lines, delimiter)
    if close is None:
        return {}

    found: dict[str, int] = {}
    for idx in range(1, close):
        line = lines[idx]
        if delimiter == TOML_DELIMITER and line.lstrip().startswith("["):
            break
        match = _TOP_LEVEL_KEY_RE.match(line)
        if match:
            key = match.group(1).strip("\"'").lower()
            found.setdefault(key, idx + 1)
    return found


def dump_front_matter(mapping: dict[str, Any]) -> str:
    """Serialize a mapping as a YAML front matter block, keys in given order."""
    data = {key: _jsonable(value) for key, value in mapping.items()}
    dumped = yaml.safe_dump(data, sort_keys=False, allow_unicode=True, default_flow_style=False)
    return f"{YAML_DELIMITER}\n{dumped}{YAML_DELIMITER}\n"


def _normalize(text: str) -> str:
    if text.startswith(BOM):
        text = text[len(BOM):]
    return text.replace("\r\n", "\n")


def _closing_index(lines: list[str], delimiter: str) -> int | None:
    for idx in range(1, len(lines)):
        if lines[idx].rstrip() == delimiter:
            return idx
    return None


def _load_yaml(block: str) -> Any:
    try:
        return yaml.safe_load(block)
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        line = mark.line + 2 if mark is not None else None
        problem = getattr(exc, "problem", None) or str(exc)
        raise FrontMatterError(
            "front-matter-syntax", f"YAML front matter does not parse: {problem}", line=line
        ) from exc
    except ValueError as exc:
        # Raised by PyYAML constructors, e.g. for an impossible timestamp like 2024-02-30
        raise FrontMatterError(
            "front-matter-syntax", f"YAML front matter has an invalid value: {exc}"
        ) from exc


def _load_toml(block: str) -> dict[str, Any]:
    try:
        return tomllib.loads(block)
    except tomllib.TOMLDecodeError as exc:
        lineno = getattr(exc, "lineno", None)
        line = lineno + 1 if lineno else None
        raise FrontMatterError(
            "front-matter-syntax", f"TOML front matter does not parse: {exc}", line=line
        ) from exc


def _find_key(keys, wanted: str) -> str | None:
    for key in keys:
        if str(key).lower() == wanted.lower():
            return key
    return None


def _replace_line(block_lines: list[str], key: str, value: Any, fmt: str) -> list[str]:
    separator = ":" if fmt == "yaml" else "="
    pattern = re.compile(rf"^({re.escape(key)})\s*{re.escape(separator)}", re.IGNORECASE)
    rendered = _render_scalar(value, fmt)

    # TOML top-level keys must precede the first table header
    limit = len(block_lines)
    if fmt == "toml":
        for idx, line in enumerate(block_lines):
            if line.lstrip().startswith("["):
                limit = idx
                break

    for idx in range(limit):
        match = pattern.match(block_lines[idx])
        if not match:
            continue
        end = idx + 1
        if fmt == "yaml":
            # Drop an indented or dash-list value continuing on following lines
            while end < len(block_lines) and (
                block_lines[end].startswith((" ", "\t", "- ")) or block_lines[end] == "-"
            ):
                end += 1
        replacement = f"{match.group(1)}{separator} {rendered}" if fmt == "yaml" else (
            f"{match.group(1)} {separator} {rendered}"
        )
        return [*block_lines[:idx], replacement, *block_lines[end:]]

    new_line = f"{key}: {rendered}" if fmt == "yaml" else f"{key} = {rendered}"
    return [*block_lines[:limit], new_line, *block_lines[limit:]]


def _render_scalar(value: Any, fmt: str) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return json.dumps([str(item) for item in value], ensure_ascii=False)
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(str(value), ensure_ascii=False)


def _jsonable(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, tuple):
        return list(value)
    return value
