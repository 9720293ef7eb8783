"""Token-set similarity combining Jaccard, weighted overlap and fuzzy matching."""

from __future__ import annotations

import re
from typing import Dict, Iterable, List, Optional, Sequence, Set

import numpy as np

from .config import SimilarityWeights
from .tokenizer import tokenize

MATCHER_STOPWORDS = frozenset(
    {
        "the", "a", "an", "is", "are", "was", "were", "be", "been", "being", "have", "has",
        "had", "do", "does", "did", "will", "would", "could", "should", "may", "might", "can",
        "shall", "and", "or", "but", "if", "then", "else", "when", "where", "what", "how",
        "why", "who", "which", "that", "this", "these", "those", "i", "you", "he", "she", "it",
        "we", "they", "me", "him", "her", "us", "them",
    }
)

IMPORTANT_TERMS = frozenset(
    {
        "nucleus", "ion", "velocity", "osmosis", "diffusion", "voltage", "potential", "energy",
        "force", "mass", "charge", "atom", "molecule", "cell", "organelle", "mitosis", "meiosis",
        "dna", "rna", "protein", "enzyme", "photosynthesis", "respiration",
    }
)

SYNONYMS: Dict[str, List[str]] = {
    "osmosis": ["water diffusion", "osmotic movement"],
    "voltage": ["electrical potential", "potential difference"],
    "diffusion": ["passive transport"],
    "mitosis": ["cell division"],
    "photosynthesis": ["light reaction", "dark reaction"],
}

_SUFFIXES = (re.compile(r"s$"), re.compile(r"ing$"), re.compile(r"ed$"), re.compile(r"ly$"))


def normalize_token(token: str) -> str:
    """Lower-case ``token`` and strip ``s``, ``ing``, ``ed`` and ``ly`` in turn."""
    normalized = token.lower()
    for suffix in _SUFFIXES:
        normalized = suffix.sub("", normalized)
    return normalized


# Lookups are keyed by normalised form because processed tokens are normalised.
_SYNONYM_INDEX = {normalize_token(key): value for key, value in SYNONYMS.items()}
_IMPORTANT_INDEX = frozenset(normalize_token(term) for term in IMPORTANT_TERMS)


def _bigrams(value: str) -> Set[str]:
    return {value[index : index + 2] for index in range(len(value) - 1)}


def dice_coefficient(first: str, second: str) -> float:
    """Bigram Dice coefficient; identical strings score 1."""
    if first == second:
        return 1.0
    left, right = _bigrams(first), _bigrams(second)
    total = len(left) + len(right)
    if total == 0:
        return 0.0
    return 2.0 * len(left & right) / total


def expand_synonyms(tokens: Iterable[str]) -> List[str]:
    """Return ``tokens`` plus the tokenized synonyms of each, without duplicates."""
    items = list(tokens)
    expanded = list(dict.fromkeys(items))
    seen = set(expanded)
    for token in items:
        for synonym in _SYNONYM_INDEX.get(normalize_token(token), ()):
            for part in tokenize(synonym):
                if part not in seen:
                    seen.add(part)
                    expanded.append(part)
    return expanded


def _process(tokens: Sequence[str]) -> List[str]:
    kept = [token for token in tokens if isinstance(token, str) and token.lower() not in MATCHER_STOPWORDS]
    return expand_synonyms(normalize_token(token) for token in kept)


def _fuzzy_bonus(left: Sequence[str], right: Sequence[str], weights: SimilarityWeights) -> float:
    left = [token for token in left if len(token) > weights.fuzzy_min_length]
    right = [token for token in right if len(token) > weights.fuzzy_min_length]
    if not left or not right:
        return 0.0
    grid = np.array([[dice_coefficient(a, b) for b in right] for a in left], dtype=float)
    bonus = float(grid[grid > weights.fuzzy_threshold].sum()) * weights.fuzzy_pair_weight
    return min(bonus, weights.fuzzy_cap)


def calculate_similarity(
    tokens_a: Sequence[str],
    tokens_b: Sequence[str],
    weights: Optional[SimilarityWeights] = None,
) -> float:
    """Similarity of two token lists in ``[0, 1]``.

    Both sides drop stopwords, are suffix-normalised and synonym-expanded.
    Identical processed sets score 1; otherwise the result is the weighted
    sum of Jaccard overlap, importance-weighted overlap and a capped fuzzy
    Dice bonus.
    """
    if not tokens_a or not tokens_b:
        return 0.0
    weights = weights or SimilarityWeights()
    processed_a = _process(tokens_a)
    processed_b = _process(tokens_b)
    if not processed_a or not processed_b:
        return 0.0

    set_a, set_b = set(processed_a), set(processed_b)
    # The capped fuzzy term keeps the weighted sum below 1 even for identical sets.
    if set_a == set_b:
        return 1.0

    jaccard = len(set_a & set_b) / len(set_a | set_b)

    total_weight = 0.0
    matched_weight = 0.0
    for token in processed_a:
        weight = weights.important_term_weight if token in _IMPORTANT_INDEX else 1.0
        total_weight += weight
        if token in set_b:
            matched_weight += weight
    weighted = matched_weight / total_weight if total_weight else 0.0

    fuzzy = _fuzzy_bonus(processed_a, processed_b, weights)
    score = weights.jaccard * jaccard + weights.weighted * weighted + weights.fuzzy * fuzzy
    return min(1.0, max(0.0, score))


__all__ = [
    "IMPORTANT_TERMS",
    "MATCHER_STOPWORDS",
    "SYNONYMS",
    "calculate_similarity",
    "dice_coefficient",
    "expand_synonyms",
    "normalize_token",
]
