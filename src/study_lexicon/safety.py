"""Guards against definitions and responses that talk about themselves."""

from __future__ import annotations

import itertools
import re

from .logging import get_logger
from .patterns import (
    META_AWARENESS_PATTERNS,
    META_CONFUSION_PATTERNS,
    META_SANITIZE_PATTERNS,
    SELF_TEACHING_PATTERNS,
)

LOGGER = get_logger(__name__)

_QUERY_CUES = ("what", "explain", "tell me about")


def is_self_referential(term: str, definition: str) -> bool:
    """Return ``True`` when ``definition`` mostly repeats ``term`` or reads as AI introspection."""
    term_words = [word for word in term.lower().split() if len(word) > 3]
    definition_lower = definition.lower()
    definition_words = definition_lower.split()
    repeats = sum(1 for word in term_words if word in definition_words and len(word) > 4)
    if term_words and repeats > len(term_words) * 0.9 and len(definition_words) < len(term_words) * 2:
        LOGGER.debug("Definition of %r repeats the term", term)
        return True
    if any(pattern.search(definition_lower) for pattern in META_AWARENESS_PATTERNS):
        LOGGER.debug("Definition of %r contains a meta-awareness phrase", term)
        return True
    return False


def sanitize_self_referential(term: str, definition: str) -> str:
    """Replace repeated occurrences of the term and introspective phrases."""
    sanitized = definition
    for word in (word for word in term.lower().split() if len(word) > 3):
        pattern = re.compile(rf"\b{re.escape(word)}\b", re.IGNORECASE)
        if len(pattern.findall(sanitized)) > 2:
            occurrences = itertools.count(1)
            sanitized = pattern.sub(
                lambda match: match.group(0) if next(occurrences) == 1 else "[concept]",
                sanitized,
            )
    for pattern in META_SANITIZE_PATTERNS:
        sanitized = pattern.sub("[educational context]", sanitized)
    return sanitized


def scrub_response(response: str, query: str = "") -> str:
    """Remove self-teaching and meta-confusion phrasing from rendered text."""
    sanitized = response
    for pattern in SELF_TEACHING_PATTERNS:
        if pattern.search(sanitized):
            LOGGER.debug("Scrubbing self-referential response phrase")
            sanitized = pattern.sub("[educational approach]", sanitized)

    query_lower = query.lower()
    if any(cue in query_lower for cue in _QUERY_CUES):
        for pattern in META_CONFUSION_PATTERNS:
            sanitized = pattern.sub("[educational context]", sanitized)

    lower = sanitized.lower()
    if "learning about" in lower and "ai" in lower:
        sanitized = re.sub(r"learning about ai", "focused on educational content", sanitized, flags=re.IGNORECASE)
        sanitized = re.sub(r"ai learning", "educational technology", sanitized, flags=re.IGNORECASE)
    return sanitized


__all__ = ["is_self_referential", "sanitize_self_referential", "scrub_response"]
