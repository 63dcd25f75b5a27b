"""
Fenced code block extraction.

Follows the CommonMark fence rules the external renderer uses:
- an opening fence is a run of at least three backticks or tildes,
  indented by at most three spaces, optionally followed by an info string
- a backtick fence's info string may not contain backticks
- the closing fence uses the same character, is at least as long as the
  opening one and carries nothing but whitespace after it
"""

from __future__ import annotations

import re

from ..core.types import CodeBlock


FENCE_RE = re.compile(r"^( {0,3})(`{3,}|~{3,})(.*)$")


def extract_code_blocks(body: str, first_line: int = 1) -> list[CodeBlock]:
    """Find fenced code blocks in a Markdown body.

    Args:
        body: Markdown text
        first_line: File line number of the body's first line

    Returns:
        Blocks in document order. A fence still open at the end of the body
        is returned with closed=False.
    """
    blocks: list[CodeBlock] = []
    lines = body.split("\n")
    opening: tuple[str, int, str | None, int] | None = None  # (char, length, language, line)
    content: list[str] = []

    for offset, line in enumerate(lines):
        line_no = first_line + offset
        if opening is None:
            match = FENCE_RE.match(line)
            if not match:
                continue
            fence, info = match.group(2), match.group(3).strip()
            if fence[0] == "`" and "`" in info:
                continue
            language = info.split()[0] if info else None
            opening = (fence[0], len(fence), language, line_no)
            content = []
            continue

        char, length, language, start = opening
        stripped = line.strip()
        if (
            len(line) - len(line.lstrip(" ")) <= 3
            and stripped
            and set(stripped) == {char}
            and len(stripped) >= length
        ):
            blocks.append(CodeBlock(language, "\n".join(content), start, line_no, closed=True))
            opening = None
            continue
        content.append(line)

    if opening is not None:
        _, _, language, start = opening
        blocks.append(CodeBlock(language, "\n".join(content), start, None, closed=False))
    return blocks
