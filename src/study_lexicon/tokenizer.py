"""Configurable word tokenizer.

The tokenizer is a straight pipeline over a single string::

    contractions -> case fold -> hyphen protection -> punctuation strip
    -> split -> hyphen restore -> numeric filter -> length filter
    -> stopword filter -> stemming

Every step is controlled by a field on :class:`~study_lexicon.config.TokenizerConfig`.
Invalid input (``None``, non-strings, empty strings) yields an empty list.
"""

from __future__ import annotations

import dataclasses
import re
from dataclasses import dataclass
from typing import Any, List, Optional

from .config import TokenizerConfig

STOPWORDS = frozenset(
    {
        "a", "an", "and", "are", "as", "at", "be", "by", "for", "from", "has", "he",
        "in", "is", "it", "its", "of", "on", "that", "the", "to", "was", "will", "with",
        "this", "but", "they", "have", "had", "what", "when", "where", "who", "which",
        "why", "how", "or", "can", "do", "does", "did", "if", "then", "than", "so",
        "very", "just", "there", "their", "them", "these", "those", "some", "any", "all",
        "over",
    }
)

CONTRACTIONS = {
    "can't": "cannot",
    "won't": "will not",
    "don't": "do not",
    "doesn't": "does not",
    "didn't": "did not",
    "isn't": "is not",
    "aren't": "are not",
    "wasn't": "was not",
    "weren't": "were not",
    "hasn't": "has not",
    "haven't": "have not",
    "hadn't": "had not",
    "i'm": "i am",
    "you're": "you are",
    "he's": "he is",
    "she's": "she is",
    "it's": "it is",
    "we're": "we are",
    "they're": "they are",
    "i've": "i have",
    "you've": "you have",
    "we've": "we have",
    "they've": "they have",
    "i'll": "i will",
    "you'll": "you will",
    "he'll": "he will",
    "she'll": "she will",
    "we'll": "we will",
    "they'll": "they will",
}

# Irregular forms the suffix rules get wrong.
STEM_OVERRIDES = {"running": "run", "jumped": "jump", "playing": "play"}

# (suffix, minimum word length) checked in order; first match wins.
STEM_RULES = (
    ("ing", 4),
    ("ed", 3),
    ("er", 3),
    ("est", 4),
    ("ly", 3),
    ("s", 3),
)

DETERMINERS = frozenset({"the", "a", "an"})
COMMON_VERBS = frozenset({"run", "jump", "skip", "walk", "talk", "eat", "drink", "sleep", "play", "work"})
PROPER_NOUNS = frozenset({"john", "mary", "paris", "london", "dna", "rna", "mitosis", "photosynthesis"})
TECHNICAL_TERMS = frozenset(
    {"dna", "rna", "mitochondria", "photosynthesis", "mitosis", "diffusion", "osmosis", "replication"}
)

_CONTRACTION_RE = re.compile(
    r"\b(" + "|".join(re.escape(form) for form in CONTRACTIONS) + r")\b",
    re.IGNORECASE,
)
_HYPHEN_RE = re.compile(r"(?<=[a-zA-Z])-(?=[a-zA-Z])")
_PROTECTED_PATTERNS = (
    re.compile(r"\b[\w.-]+@[\w.-]+\.[a-zA-Z]{2,}\b"),
    re.compile(r"\b[\w.-]+\.[a-zA-Z]{2,}\b"),
)
_PUNCTUATION_RE = re.compile(r"[^\w\s\-'/°]")
_NUMBER_RE = re.compile(r"^\d+(\.\d+)?$")
_NUMBER_WITH_UNIT_RE = re.compile(r"^\d+(\.\d+)?°?[a-zA-Z]+(/[a-zA-Z]+)?$")
_ACRONYM_RE = re.compile(r"^[A-Z]{2,}")


@dataclass(frozen=True)
class PosToken:
    """A token annotated with a coarse part-of-speech tag."""

    word: str
    pos: str
    is_technical: bool
    length: int


def expand_contractions(text: str) -> str:
    return _CONTRACTION_RE.sub(lambda match: CONTRACTIONS[match.group(0).lower()], text)


def _strip_punctuation(text: str) -> str:
    """Replace punctuation with spaces while keeping emails and domains intact."""
    preserved: List[str] = []

    def _protect(match: re.Match[str]) -> str:
        preserved.append(match.group(0))
        return f"__PRESERVE_{len(preserved) - 1}__"

    for pattern in _PROTECTED_PATTERNS:
        text = pattern.sub(_protect, text)
    text = _PUNCTUATION_RE.sub(" ", text)
    for index, original in enumerate(preserved):
        text = text.replace(f"__PRESERVE_{index}__", original, 1)
    return text


def _keep_numeric(token: str, include_numbers: bool) -> bool:
    if not include_numbers:
        return not _NUMBER_RE.match(token)
    return bool(_NUMBER_RE.match(token) or _NUMBER_WITH_UNIT_RE.match(token)) or not token[:1].isdigit()


def stem(word: str) -> str:
    """Strip a common English suffix from ``word``."""
    lower = word.lower()
    if lower in STEM_OVERRIDES:
        return STEM_OVERRIDES[lower]
    for suffix, min_length in STEM_RULES:
        if lower.endswith(suffix) and len(lower) > min_length:
            return lower[: -len(suffix)]
    return lower


def tokenize(text: Any, config: Optional[TokenizerConfig] = None, **options: Any) -> List[str]:
    """Split ``text`` into normalised word tokens.

    ``options`` override individual fields of ``config`` (or of the default
    configuration), e.g. ``tokenize(text, handle_contractions=True)``.
    """
    if not text or not isinstance(text, str):
        return []
    config = config or TokenizerConfig()
    if options:
        config = dataclasses.replace(config, **options)

    processed = text
    if config.handle_contractions:
        processed = expand_contractions(processed)
    if not config.preserve_case:
        processed = processed.lower()
    if config.include_hyphenated:
        processed = _HYPHEN_RE.sub("_", processed)
    if config.remove_punctuation:
        processed = _strip_punctuation(processed)

    tokens = processed.split()
    if config.include_hyphenated:
        tokens = [token.replace("_", "-") for token in tokens]

    tokens = [token for token in tokens if _keep_numeric(token, config.include_numbers)]

    max_length = config.max_length
    tokens = [
        token
        for token in tokens
        if len(token) >= config.min_length and (max_length is None or len(token) <= max_length)
    ]

    # Expanded contractions reintroduce function words on purpose.
    if config.remove_stopwords and not config.handle_contractions:
        tokens = [token for token in tokens if token.lower() not in STOPWORDS]

    if config.stem_words:
        tokens = [stem(token) for token in tokens]
    return tokens


def _tag(token: str) -> str:
    lower = token.lower()
    if lower in DETERMINERS:
        return "determiner"
    if lower in COMMON_VERBS:
        return "verb"
    if lower in PROPER_NOUNS or (token[:1].isupper() and len(token) > 3):
        return "proper_noun"
    if any(char.isdigit() for char in token):
        return "number"
    if len(token) <= 3:
        return "particle"
    return "noun"


def tokenize_with_pos(text: Any) -> List[PosToken]:
    """Tokenize ``text`` keeping stopwords and tag each token.

    Classification sees the original casing; the emitted ``word`` is lower-cased.
    """
    tokens = tokenize(text, remove_stopwords=False, preserve_case=True)
    tagged: List[PosToken] = []
    for token in tokens:
        lower = token.lower()
        is_technical = bool(_ACRONYM_RE.match(token)) or lower in TECHNICAL_TERMS
        tagged.append(PosToken(word=lower, pos=_tag(token), is_technical=is_technical, length=len(token)))
    return tagged


__all__ = [
    "CONTRACTIONS",
    "PosToken",
    "STOPWORDS",
    "expand_contractions",
    "stem",
    "tokenize",
    "tokenize_with_pos",
]
