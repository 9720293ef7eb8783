"""Utility helpers shared across the Study Lexicon package."""

from .io import is_yaml_path, load_yaml_or_json, save_json, save_yaml
from .text import (
    capitalise_first,
    collapse_whitespace,
    content_hash,
    ensure_sentence_ending,
    normalise_text,
    split_sentences,
)

__all__ = [
    "capitalise_first",
    "collapse_whitespace",
    "content_hash",
    "ensure_sentence_ending",
    "is_yaml_path",
    "load_yaml_or_json",
    "normalise_text",
    "save_json",
    "save_yaml",
    "split_sentences",
]
