"""Text processing helpers used throughout the Study Lexicon package."""

from __future__ import annotations

import hashlib
import re
from typing import Iterable, List

_SENTENCE_RE = re.compile(r"[.!?]+")
_WHITESPACE_RE = re.compile(r"\s+")


def normalise_text(value: str) -> str:
    """Normalise text by lowercasing and collapsing whitespace."""
    collapsed = " ".join(value.strip().split())
    return collapsed.lower()


def collapse_whitespace(value: str) -> str:
    return _WHITESPACE_RE.sub(" ", value).strip()


def split_sentences(text: str, *, min_length: int = 0) -> List[str]:
    """Split ``text`` on terminal punctuation, keeping pieces longer than ``min_length``."""
    return [piece for piece in _SENTENCE_RE.split(text) if len(piece.strip()) > min_length]


def capitalise_first(value: str) -> str:
    """Upper-case the first character and lower-case the rest."""
    if not value:
        return value
    return value[0].upper() + value[1:].lower()


def ensure_sentence_ending(text: str) -> str:
    """Ensure the text ends with terminal punctuation for readability."""
    if not text:
        return text
    return text if text.endswith((".", "!", "?")) else f"{text}."


def content_hash(parts: Iterable[str]) -> str:
    """Return a stable digest for an ordered sequence of strings."""
    digest = hashlib.sha256()
    for part in parts:
        digest.update(part.encode("utf-8"))
        digest.update(b"\x1f")
    return digest.hexdigest()
