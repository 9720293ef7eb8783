"""Heuristic concept and keyword extraction.

Concepts are harvested from definition-shaped lines (see
:data:`~study_lexicon.patterns.CONCEPT_PATTERNS`), cleaned, validated, scored
against the document's semantic context and ranked by a composite importance
score. When no pattern produces a usable concept the extractor falls back to
sentence-initial noun phrases and finally to keyword pseudo-concepts.
"""

from __future__ import annotations

import dataclasses
import re
from typing import Dict, Iterator, List, Optional, Tuple

import numpy as np

from .config import ExtractionConfig, TokenizerConfig
from .logging import get_logger
from .models import Concept, Relationship
from .patterns import (
    ACRONYM_RE,
    CELL_THEORY_PRINCIPLES_RE,
    CELL_THEORY_RE,
    CELLS_SENTENCE_RE,
    CONCEPT_PATTERNS,
    FALLBACK_IS_RE,
    INCOMPLETE_DEFINITION_RE,
    MALFORMED_TERM_PATTERNS,
    NUMBERED_ITEM_RE,
    TISSUES_SENTENCE_RE,
    VALID_TERM_RE,
    DefinitionPattern,
)
from .rules import SPECIAL_TERMS, all_anchors, get_rules
from .safety import is_self_referential, sanitize_self_referential
from .semantics import (
    SemanticContext,
    analyze_concept_relationships,
    analyze_semantic_context,
    appears_in_heading,
    detect_hierarchy_level,
    estimate_difficulty,
)
from .tokenizer import tokenize
from .utils.text import capitalise_first, collapse_whitespace, ensure_sentence_ending

LOGGER = get_logger(__name__)

KEYWORD_DOMAIN_TERMS = (
    "acid", "base", "cell", "atom", "force", "energy", "system", "process", "structure",
    "function", "theory", "law", "principle",
)
KEYWORD_COMMON_WORDS = frozenset(
    {
        "that", "with", "have", "this", "will", "from", "they", "know", "want", "need", "make",
        "many", "some", "time", "said", "each", "which", "their", "what", "there", "when",
        "then", "than",
    }
)

BAD_DEFINITION_STARTS = ("ions to", "found on", "atoms of", "charged particles", "an organized")
GENERIC_TERMS = frozenset({"this", "these", "those", "it", "they", "them", "and", "or", "but", "for", "with"})
IMPORTANT_TERMS = frozenset({"cell", "cells", "tissue", "organ", "organism", "nucleus", "membrane", "cytoplasm"})
DANGLING_WORDS = frozenset({"are", "is", "the", "and", "or", "but", "with"})
FALLBACK_SKIP_WORDS = frozenset(
    {
        "this", "that", "these", "those", "they", "there", "and", "or", "but", "so", "because",
        "the", "a", "an", "is", "are", "was", "were", "has", "have", "can", "will", "would",
        "could", "should", "may", "might",
    }
)

_LEADING_THE_RE = re.compile(r"^the\s+", re.IGNORECASE)
_TRAILING_DASH_RE = re.compile(r"\s+-\s*$")
_LEADING_DASH_RE = re.compile(r"^\s*-\s*")
_FALLBACK_SPLIT_RE = re.compile(r"[.!?\n]+")
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")


# Keywords ----------------------------------------------------------------------
def extract_keywords(text: object, top_n: int = 20, config: Optional[TokenizerConfig] = None) -> List[str]:
    """Return the ``top_n`` highest scoring tokens of ``text``.

    Score is the token frequency plus bonuses for technical-looking,
    capitalised and domain-flavoured tokens, minus a penalty for common
    filler words. Ties keep first-seen order.
    """
    tokens = tokenize(text, config)
    if not tokens:
        return []
    frequency: Dict[str, int] = {}
    for token in tokens:
        frequency[token] = frequency.get(token, 0) + 1

    scored: List[Tuple[str, float]] = []
    for word, count in frequency.items():
        score = float(count)
        lower = word.lower()
        if any(char.isdigit() for char in word) or re.search(r"[^a-zA-Z]", word) or len(word) > 8:
            score += 2
        if word[0] == word[0].upper() and len(word) > 3:
            score += 1
        if any(term in lower for term in KEYWORD_DOMAIN_TERMS):
            score += 1
        if lower in KEYWORD_COMMON_WORDS:
            score -= 2
        scored.append((word, score))
    scored.sort(key=lambda item: item[1], reverse=True)
    return [word for word, _ in scored[: max(top_n, 0)]]


# Cleaning and validation -------------------------------------------------------
def clean_term(term: str) -> str:
    cleaned = _LEADING_THE_RE.sub("", term.strip())
    cleaned = capitalise_first(cleaned)
    cleaned = _TRAILING_DASH_RE.sub("", cleaned)
    cleaned = _LEADING_DASH_RE.sub("", cleaned)
    return collapse_whitespace(cleaned)


def is_malformed_term(term: str) -> bool:
    """Shape checks on a cleaned term: length, character set, list and markdown artefacts."""
    lower = term.lower()
    word_count = len(term.split(" "))
    return (
        len(term) > 60
        or word_count > 8
        or not VALID_TERM_RE.match(term)
        or "\n" in term
        or "**" in term
        or " - " in term
        or ("description" in lower and word_count < 3)
        or bool(NUMBERED_ITEM_RE.match(term))
        or lower.startswith("these ")
        or lower.startswith("some ")
        or (lower.endswith(" are") and len(term) < 10)
        or (lower.endswith(" is") and len(term) < 10)
    )


def is_fragment(normalized: str) -> bool:
    """Detect sentence fragments: dangling words, unbalanced parentheses, citations."""
    words = normalized.split()
    if not words:
        return True
    return (
        ("(" in normalized and ")" not in normalized and len(normalized) < 25)
        or normalized.count("(") > 1
        or words[-1] in DANGLING_WORDS
        or len(normalized) < 4
        or len(normalized) > 40
        or any(pattern.search(normalized) for pattern in MALFORMED_TERM_PATTERNS)
    )


def is_generic(normalized: str, term: str) -> bool:
    if normalized in GENERIC_TERMS:
        return True
    has_generic_word = any(word in GENERIC_TERMS for word in normalized.split())
    return has_generic_word and len(term) < 10 and normalized not in IMPORTANT_TERMS


def is_duplicate(term: str, concepts: List[Concept]) -> bool:
    normalized = term.lower().strip()
    for concept in concepts:
        existing = concept.term.lower().strip()
        close_length = abs(len(concept.term) - len(term)) < 5
        if existing == normalized or ((normalized in existing or existing in normalized) and close_length):
            return True
    return False


def is_good_definition(definition: str) -> bool:
    return (
        10 < len(definition) < 1000
        and len(definition.split(" ")) > 1
        and not INCOMPLETE_DEFINITION_RE.match(definition)
    )


def satisfies_invariant(term: str, definition: str) -> bool:
    """Check the shape every returned concept must have."""
    return (
        3 < len(term) < 60
        and bool(VALID_TERM_RE.match(term))
        and "\n" not in term
        and 10 < len(definition) < 1000
    )


# Special-term windows ----------------------------------------------------------
def _window_definition(term: str, text: str) -> str:
    lower = text.lower()
    term_lower = term.lower()
    index = lower.find(term_lower)
    if index == -1:
        return ""
    window = text[max(0, index - 200) : index + len(term) + 300]
    sentences = [
        piece.strip()
        for piece in _SENTENCE_SPLIT_RE.split(window)
        if term_lower in piece.lower() and len(piece.strip()) > 15
    ]
    if sentences:
        definition = sentences[0]
        if len(sentences) > 1 and len(definition) < 100:
            definition = f"{definition}. {sentences[1]}"
    else:
        definition = window[:300]
    return collapse_whitespace(definition)


def special_term_definition(term: str, text: str) -> str:
    """Pull a definition for a known domain term from a wider slice of ``text``."""
    term_lower = term.lower()
    definition = ""
    if term_lower == "cell theory":
        match = CELL_THEORY_RE.search(text)
        if match:
            definition = match.group(0).strip()
            principles = CELL_THEORY_PRINCIPLES_RE.search(text)
            if principles:
                definition = f"{definition} {principles.group(0).strip()}"
    elif term_lower == "nucleus":
        start = text.lower().find("the nucleus")
        if start != -1:
            end = text.find("\n\n", start)
            if end == -1 or end - start > 500:
                end = start + 400
            lines = [line.strip() for line in text[start:end].split("\n") if len(line.strip()) > 10]
            definition = " ".join(lines).strip()
    elif term_lower == "cells":
        match = CELLS_SENTENCE_RE.search(text)
        definition = match.group(0).strip() if match else ""
    elif term_lower in {"tissue", "tissues"}:
        match = TISSUES_SENTENCE_RE.search(text)
        definition = match.group(0).strip() if match else ""
    return collapse_whitespace(definition) if definition else _window_definition(term, text)


# Extraction --------------------------------------------------------------------
class ConceptExtractor:
    """Extract ranked :class:`~study_lexicon.models.Concept` records from text."""

    def __init__(
        self,
        config: Optional[ExtractionConfig] = None,
        tokenizer: Optional[TokenizerConfig] = None,
    ) -> None:
        self.config = config or ExtractionConfig()
        self.tokenizer = tokenizer or TokenizerConfig()

    # Candidates ----------------------------------------------------------------
    def _resolve(self, pattern: DefinitionPattern, match: re.Match[str], text: str) -> Tuple[str, str]:
        term = (match.group(pattern.term_group) or "").strip()
        if term.lower() in SPECIAL_TERMS:
            return term, special_term_definition(term, text)
        if pattern.definition_group == 0:
            return term, match.group(0).strip()
        return term, (match.group(pattern.definition_group) or "").strip()

    def candidates(self, text: str) -> Iterator[Tuple[str, str, str]]:
        """Yield ``(term, definition, pattern name)`` for every pattern hit, in priority order."""
        lines = [line for line in text.split("\n") if line.strip()]
        line_patterns = [pattern for pattern in CONCEPT_PATTERNS if pattern.scope == "line"]
        for line in lines:
            for pattern in line_patterns:
                for match in pattern.regex.finditer(line):
                    term, definition = self._resolve(pattern, match, text)
                    yield term, definition, pattern.name
        for pattern in CONCEPT_PATTERNS:
            if pattern.scope != "document":
                continue
            for match in pattern.regex.finditer(text):
                term, definition = self._resolve(pattern, match, text)
                yield term, definition, pattern.name

    # Validation ----------------------------------------------------------------
    def _accept(
        self,
        raw_term: str,
        definition: str,
        text: str,
        context: SemanticContext,
        relationships: Dict[str, List[Relationship]],
        accepted: List[Concept],
    ) -> Optional[Concept]:
        if not raw_term:
            return None
        if definition.lower().startswith(BAD_DEFINITION_STARTS):
            LOGGER.debug("Rejected %r: definition starts with a known fragment", raw_term)
            return None
        term = clean_term(raw_term)
        if is_malformed_term(term):
            LOGGER.debug("Rejected malformed term %r", term)
            return None
        normalized = term.lower().strip()
        if is_duplicate(term, accepted) or is_generic(normalized, term) or is_fragment(normalized):
            LOGGER.debug("Rejected duplicate or fragment term %r", term)
            return None
        if not (3 < len(term) < 50) or not is_good_definition(definition):
            LOGGER.debug("Rejected %r: definition failed sanity checks", term)
            return None
        if is_self_referential(term, definition):
            definition = sanitize_self_referential(term, definition)
            if not is_good_definition(definition):
                return None

        rules = get_rules(context.domain)
        semantic = 0.0
        if rules.anchor_substring and rules.anchor_substring in normalized:
            semantic += 2
        concept_relationships = list(relationships.get(normalized, []))
        relationship_score = 0.5 * len(concept_relationships)
        definition_lower = definition.lower()
        if any(indicator in definition_lower for indicator in context.relationship_indicators):
            semantic += 1
        if any(theme in normalized for theme in context.key_themes):
            semantic += 1.5
        if context.technical_density > 0.3 and ACRONYM_RE.search(term):
            semantic += 0.5
        hierarchy = detect_hierarchy_level(term, text)
        semantic += hierarchy * 0.3
        total = semantic + relationship_score

        return Concept(
            term=term,
            definition=definition,
            difficulty=estimate_difficulty(definition),
            domain=context.domain,
            hierarchy_level=hierarchy,
            relationships=concept_relationships,
            semantic_score=total,
            relationship_score=relationship_score,
            confidence=min(1.0, 0.5 + total * 0.1),
        )

    # Fallbacks -----------------------------------------------------------------
    def _sentence_fallback(self, text: str) -> List[Concept]:
        found: List[Concept] = []
        sentences = [piece for piece in _FALLBACK_SPLIT_RE.split(text) if len(piece.strip()) > 10]
        for index, sentence in enumerate(sentences):
            stripped = sentence.strip()
            words = stripped.split()
            if len(words) < 3:
                continue
            first = words[0].lower()
            if len(first) <= 2 or first in FALLBACK_SKIP_WORDS:
                continue
            match = FALLBACK_IS_RE.match(ensure_sentence_ending(stripped))
            name = match.group(1) if match else " ".join(words[:4])
            term = clean_term(name)
            lower = term.lower()
            if any(lower in item.term.lower() or item.term.lower() in lower for item in found):
                continue
            if not satisfies_invariant(term, stripped):
                continue
            found.append(Concept(term=term, definition=stripped, difficulty=min(5, index // 3 + 1)))
            if len(found) >= self.config.fallback_sentence_limit:
                break
        return found

    def _keyword_fallback(self, text: str) -> List[Concept]:
        found: List[Concept] = []
        keywords = extract_keywords(text, self.config.fallback_keyword_count, self.tokenizer)
        for index, keyword in enumerate(keywords):
            term = keyword[:1].upper() + keyword[1:]
            definition = f"Key concept related to {keyword}"
            if satisfies_invariant(term, definition):
                found.append(Concept(term=term, definition=definition, difficulty=min(5, index // 2 + 1)))
        return found

    # Ranking -------------------------------------------------------------------
    def _importance(self, concept: Concept, text: str, context: SemanticContext) -> float:
        lower = text.lower()
        term_lower = concept.term.lower()
        importance = 0.0
        position = lower.find(term_lower)
        if position != -1:
            importance += max(0.0, 100 - position / 100)
        importance += min(len(concept.definition) / 10, 50)
        importance += lower.count(term_lower) * 10
        if appears_in_heading(concept.term, text):
            importance += 30
        importance += concept.semantic_score * 15
        importance += concept.relationship_score * 10
        importance += concept.confidence * 20
        if concept.domain == context.domain:
            importance += 25
        definition_lower = concept.definition.lower()
        if any(indicator in definition_lower for indicator in context.relationship_indicators):
            importance += 15
        if context.technical_density > 0.3 and concept.difficulty > 3:
            importance += 10
        importance += concept.hierarchy_level * 8
        if len(concept.relationships) > 2:
            importance += len(concept.relationships) * 5
        if context.domain != "general" and concept.domain != context.domain:
            importance -= 10
        return importance

    def _apply_anchors(self, concepts: List[Concept], text: str) -> List[Concept]:
        lower = text.lower()
        for domain, anchor in all_anchors():
            if anchor.trigger not in lower:
                continue
            existing = next((item for item in concepts if item.term.lower() == anchor.term.lower()), None)
            if existing is not None:
                existing.importance = max(existing.importance, anchor.importance)
            else:
                concepts.insert(
                    0,
                    Concept(
                        term=anchor.term,
                        definition=anchor.definition,
                        difficulty=anchor.difficulty,
                        importance=anchor.importance,
                        domain=domain,
                    ),
                )
            LOGGER.debug("Anchored concept %r at importance %.0f", anchor.term, anchor.importance)
        return concepts

    # Public API ----------------------------------------------------------------
    def extract(self, text: object) -> List[Concept]:
        if not isinstance(text, str) or not text.strip():
            return []
        text = text[: self.config.max_process_length]
        context = analyze_semantic_context(text)
        relationships = analyze_concept_relationships(text)

        concepts: List[Concept] = []
        matched = 0
        for term, definition, _pattern in self.candidates(text):
            matched += 1
            concept = self._accept(term, definition, text, context, relationships, concepts)
            if concept is not None:
                concepts.append(concept)

        if not concepts:
            concepts = self._sentence_fallback(text) or self._keyword_fallback(text)
            LOGGER.debug("No definition patterns matched; %d fallback concepts", len(concepts))

        ranked = [
            dataclasses.replace(concept, importance=self._importance(concept, text, context))
            for concept in concepts
        ]
        ranked = self._apply_anchors(ranked, text)
        ranked.sort(key=lambda concept: concept.importance, reverse=True)
        ranked = ranked[: self.config.max_concepts]

        mean_length = float(np.mean([len(item.definition) for item in ranked])) if ranked else 0.0
        LOGGER.info(
            "Extracted %d concepts | input=%d chars | matches=%d | domain=%s | mean definition=%.1f",
            len(ranked),
            len(text),
            matched,
            context.domain,
            mean_length,
        )
        return ranked


def extract_concepts(text: object, config: Optional[ExtractionConfig] = None) -> List[Concept]:
    """Extract up to ``config.max_concepts`` concepts from ``text`` sorted by importance."""
    return ConceptExtractor(config).extract(text)


__all__ = [
    "ConceptExtractor",
    "clean_term",
    "extract_concepts",
    "extract_keywords",
    "is_malformed_term",
    "satisfies_invariant",
    "special_term_definition",
]
