from __future__ import annotations

import re
from dataclasses import dataclass

from rapidfuzz import fuzz

from .types import Document


_WHITESPACE_RE = re.compile(r"\s+")


@dataclass
class DuplicatePair:
    first: Document
    second: Document
    title_score: float
    body_score: float


def find_near_duplicates(
    documents: list[Document],
    title_threshold: int = 92,
    body_threshold: int = 90,
) -> list[DuplicatePair]:
    pairs: list[DuplicatePair] = []
    normalized = [(_normalize(doc.front_matter.title), _normalize(doc.body)) for doc in documents]

    for i, first in enumerate(documents):
        title_a, body_a = normalized[i]
        for j in range(i + 1, len(documents)):
            title_b, body_b = normalized[j]
            title_score = fuzz.ratio(title_a, title_b) if title_a and title_b else 0.0
            body_score = fuzz.ratio(body_a, body_b) if body_a and body_b else 0.0
            if title_score >= title_threshold or body_score >= body_threshold:
                pairs.append(DuplicatePair(first, documents[j], title_score, body_score))

    return pairs


def _normalize(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip().lower()
