"""Pick the single best concept inside an already matched topic."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from .config import ResolverWeights
from .logging import get_logger
from .models import Concept, ConceptMatch
from .patterns import QUERY_PREFIX_RE
from .rules import ResolverRule, all_resolver_rules

LOGGER = get_logger(__name__)

_LEADING_ARTICLE_RE = re.compile(r"^(?:the|a|an)\s+", re.IGNORECASE)


def query_subject(query: str) -> str:
    """Strip question phrasing: ``"What is the nucleus?"`` becomes ``"nucleus"``."""
    subject = QUERY_PREFIX_RE.sub("", query).strip(" ?!.\t\n")
    return _LEADING_ARTICLE_RE.sub("", subject).strip()


def _significant(words: Sequence[str]) -> List[str]:
    return [word for word in words if len(word) > 2]


def _number_variants(word: str) -> Tuple[str, str]:
    """The word without a trailing ``s`` (unchanged if it has none) and with one added."""
    return (word[:-1] if word.endswith("s") else word), word + "s"


def _as_concept(item: Any) -> Optional[Concept]:
    if isinstance(item, Concept):
        return item
    if isinstance(item, Mapping):
        return Concept.from_mapping(item)
    if isinstance(item, str):
        return Concept(term=item, definition="")
    return None


class ConceptResolver:
    """Score concept terms against a short factual query.

    The scoring is tuned for precision: exact and containment matches dominate,
    a single-word query is steered away from longer, more specific terms that
    merely contain it, and domain rules can demote or promote named concepts.
    """

    def __init__(
        self,
        weights: Optional[ResolverWeights] = None,
        rules: Optional[Sequence[ResolverRule]] = None,
    ) -> None:
        self.weights = weights or ResolverWeights.precise()
        self.rules = list(all_resolver_rules() if rules is None else rules)

    def score(self, query: str, term: str) -> float:
        w = self.weights
        query = query.lower().strip()
        term = term.lower().strip()
        if not query or not term:
            return 0.0

        # Words of two letters or fewer take no part in word-level scoring.
        significant_query = _significant(query.split())
        significant_term = _significant(term.split())
        active_rules = [rule for rule in self.rules if rule.applies_to(query)]

        score = 0.0
        if term == query:
            score = w.exact
        elif term in query or query in term:
            score = w.containment

        if len(significant_query) > 1 and len(significant_term) > 1:
            common = sum(1 for word in significant_query if word in significant_term)
            score += common / max(len(significant_query), len(significant_term)) * w.specificity
            if query in term and len(significant_term) >= len(significant_query):
                score += w.ordered_phrase

        if len(significant_query) == 1 and len(significant_term) > 1 and query in term and term != query:
            score -= w.specificity_penalty

        for rule in active_rules:
            if any(demoted in term for demoted in rule.demoted):
                score -= rule.penalty

        if term in _number_variants(query):
            score = max(score, w.plural_floor)

        for query_word in significant_query:
            for term_word in significant_term:
                if query_word == term_word:
                    score += w.word_exact
                elif len(query_word) > 3 and query_word in term_word:
                    score += w.word_partial
                # A word without a trailing "s" also counts as its own singular.
                if term_word in _number_variants(query_word):
                    score += w.word_plural

        score += max(0.0, w.length_bonus - abs(len(term) - len(query)) / w.length_scale)

        for rule in active_rules:
            if term == rule.preferred:
                score += rule.bonus
        return score

    def resolve(self, query: Any, concepts: Iterable[Any]) -> Optional[ConceptMatch]:
        """Best concept for ``query``, or ``None`` when nothing clears the activation threshold."""
        if not isinstance(query, str) or not query.strip() or concepts is None:
            return None
        best: Optional[ConceptMatch] = None
        for item in concepts:
            concept = _as_concept(item)
            if concept is None or not concept.term:
                continue
            value = self.score(query, concept.term)
            if best is None or value > best.score:
                best = ConceptMatch(concept=concept, score=value)
        if best is None or best.score <= self.weights.activation_threshold:
            LOGGER.debug("No concept match for %r", query)
            return None
        LOGGER.debug("Resolved %r to %s (%.2f)", query, best.concept.term, best.score)
        return best


def resolve_concept(
    query: Any,
    concepts: Iterable[Any],
    weights: Optional[ResolverWeights] = None,
) -> Optional[ConceptMatch]:
    return ConceptResolver(weights).resolve(query, concepts)


__all__ = ["ConceptResolver", "query_subject", "resolve_concept"]
