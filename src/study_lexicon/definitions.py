"""Sentence-level definition extraction with confidence scores."""

from __future__ import annotations

import re
from typing import Iterable, List

from .logging import get_logger
from .models import Definition
from .patterns import QUALITY_INDICATORS, SENTENCE_DEFINITION_PATTERNS

LOGGER = get_logger(__name__)

_EDGE_PUNCTUATION_RE = re.compile(r"^[,;:\s]+|[,;:\s]+$")
_NON_WORD_RE = re.compile(r"[^\w\s]")
_SENTENCE_RE = re.compile(r"[.!?]+")


def definition_context(text: str, position: int, radius: int = 100) -> str:
    return text[max(0, position - radius) : position + radius].strip()


def context_words(text: str, term: str) -> List[str]:
    """Up to ten words from the first sentence mentioning ``term``."""
    term_lower = term.lower()
    for sentence in _SENTENCE_RE.split(text):
        lower = sentence.lower()
        if term_lower in lower:
            words = _NON_WORD_RE.sub(" ", lower).split()
            return [word for word in words if len(word) > 2 and word != term_lower][:10]
    return []


def definition_quality(term: str, definition: str, text: str) -> float:
    """Score a definition in ``[0, 1]`` from its length, wording and context overlap."""
    score = 0.5
    if 20 < len(definition) < 200:
        score += 0.2
    score += 0.1 * sum(1 for pattern in QUALITY_INDICATORS if pattern.search(definition))

    term_words = term.lower().split()
    definition_words = definition.lower().split()
    overlap = sum(1 for word in term_words if len(word) > 2 and word in definition_words)
    if overlap > 0 and overlap <= len(term_words) / 2:
        score += 0.2

    surrounding = context_words(text, term)
    relevance = sum(1 for word in surrounding if word in definition_words) / max(len(surrounding), 1)
    score += relevance * 0.2
    return min(1.0, score)


def extract_definitions(text: object) -> List[Definition]:
    """Find definition sentences in ``text``.

    Every pattern in :data:`~study_lexicon.patterns.SENTENCE_DEFINITION_PATTERNS`
    is applied in order; the first definition found for a term (case
    insensitive) wins and the result is sorted by confidence.
    """
    if not isinstance(text, str) or not text:
        return []
    found: List[Definition] = []
    for pattern in SENTENCE_DEFINITION_PATTERNS:
        for match in pattern.regex.finditer(text):
            term = (match.group(pattern.term_group) or "").strip()
            body = (match.group(pattern.definition_group) or "").strip()
            if len(term) <= 2 or len(body) <= 10:
                continue
            body = _EDGE_PUNCTUATION_RE.sub("", body)
            found.append(
                Definition(
                    term=term,
                    definition=body,
                    confidence=definition_quality(term, body, text),
                    pattern=pattern.name,
                    context=definition_context(text, match.start()),
                )
            )

    seen = set()
    unique: List[Definition] = []
    for definition in found:
        key = definition.term.lower()
        if key not in seen:
            seen.add(key)
            unique.append(definition)
    unique.sort(key=lambda item: item.confidence, reverse=True)
    LOGGER.debug("Extracted %d definitions (%d raw matches)", len(unique), len(found))
    return unique


def find_definitions_for_concepts(text: object, concepts: Iterable[str]) -> List[Definition]:
    """Definitions whose term contains, or is contained in, one of ``concepts``."""
    if not isinstance(text, str) or not text or concepts is None:
        return []
    wanted = [concept.lower() for concept in concepts if isinstance(concept, str)]
    if not wanted:
        return []
    return [
        definition
        for definition in extract_definitions(text)
        if any(concept in definition.term.lower() or definition.term.lower() in concept for concept in wanted)
    ]


__all__ = [
    "context_words",
    "definition_quality",
    "extract_definitions",
    "find_definitions_for_concepts",
]
