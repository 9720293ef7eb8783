"""Document-level semantic heuristics feeding concept scoring."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from .logging import get_logger
from .models import Relationship
from .patterns import ACRONYM_RE, RELATIONSHIP_PATTERNS, THEME_PATTERNS
from .rules import DOMAIN_RULES, get_rules
from .utils.text import split_sentences

LOGGER = get_logger(__name__)

# (level, cue words) looked up in a window around a term.
HIERARCHY_LEVELS: Tuple[Tuple[int, Tuple[str, ...]], ...] = (
    (0, ("fundamental", "basic", "foundation", "building block", "essential")),
    (1, ("intermediate", "moderate", "standard", "typical")),
    (2, ("advanced", "complex", "sophisticated", "specialized")),
    (3, ("expert", "cutting-edge", "theoretical", "research-level")),
)

RELATIONSHIP_WORDS = (
    "causes", "leads to", "results in", "depends on", "requires", "part of", "component of",
    "interacts with", "connects to", "relates to", "influences", "affects", "controls",
    "regulates", "governs", "determines", "produces", "generates", "transforms",
)

COMPLEX_WORDS = ("therefore", "consequently", "furthermore", "moreover", "however")
PRONOUNS = frozenset({"this", "that", "these", "those", "they", "them"})


@dataclass
class SemanticContext:
    """Summary of a document used to weight its concepts."""

    domain: str = "general"
    key_themes: List[str] = field(default_factory=list)
    technical_density: float = 0.0
    relationship_indicators: List[str] = field(default_factory=list)


def detect_domain(text: str) -> str:
    """Vote for a domain by counting whole-word keyword hits; long keywords count double."""
    scores: Dict[str, int] = {}
    for name, rules in DOMAIN_RULES.items():
        score = 0
        for keyword in rules.keywords:
            hits = len(re.findall(rf"\b{re.escape(keyword)}\b", text, re.IGNORECASE))
            score += hits * (2 if len(keyword) > 6 else 1)
        scores[name] = score
    best = max(scores.values(), default=0)
    if best <= 0:
        return "general"
    return next(name for name, score in scores.items() if score == best)


def analyze_semantic_context(text: str) -> SemanticContext:
    """Compute the domain, themes, technical density and relationship cues for ``text``."""
    context = SemanticContext()
    if not text:
        return context
    lower = text.lower()
    context.domain = detect_domain(text)

    themes: List[str] = []
    for pattern in THEME_PATTERNS:
        for match in pattern.findall(text):
            theme = match.lower()
            if theme not in themes:
                themes.append(theme)
    context.key_themes = themes

    technical = get_rules(context.domain).technical_terms
    context.technical_density = sum(1 for term in technical if term in lower) / max(len(technical), 1)
    context.relationship_indicators = [word for word in RELATIONSHIP_WORDS if word in lower]
    return context


def analyze_concept_relationships(text: str) -> Dict[str, List[Relationship]]:
    """Find word pairs joined by relationship verbs.

    Returns a mapping from source word to its relationships, restricted to
    words that take part in at least two relationships.
    """
    if not text:
        return {}
    found: Dict[str, Dict[Tuple[str, str], int]] = {}
    frequency: Dict[str, int] = {}
    for sentence in split_sentences(text, min_length=10):
        lower = sentence.lower()
        for rel_pattern in RELATIONSHIP_PATTERNS:
            for match in rel_pattern.regex.finditer(lower):
                source, target = match.group(1).strip(), match.group(2).strip()
                if len(source) <= 3 or len(target) <= 3 or source in PRONOUNS or target in PRONOUNS:
                    continue
                frequency[source] = frequency.get(source, 0) + 1
                frequency[target] = frequency.get(target, 0) + 1
                edges = found.setdefault(source, {})
                key = (target, rel_pattern.type)
                edges[key] = edges.get(key, 0) + 1

    relationships: Dict[str, List[Relationship]] = {}
    for source, edges in found.items():
        if frequency.get(source, 0) < 2 or not edges:
            continue
        relationships[source] = [
            Relationship(target=target, type=kind, strength=strength) for (target, kind), strength in edges.items()
        ]
    LOGGER.debug("Detected relationships for %d concepts", len(relationships))
    return relationships


def _heading_lines(text: str) -> List[str]:
    headings = []
    for line in text.split("\n"):
        stripped = line.strip()
        if stripped and (stripped == stripped.upper() or stripped.endswith(":")):
            headings.append(stripped.lower())
    return headings


def appears_in_heading(term: str, text: str) -> bool:
    lower = term.lower()
    return any(lower in heading for heading in _heading_lines(text))


def detect_hierarchy_level(term: str, text: str) -> float:
    """Estimate how advanced ``term`` is from nearby cue words and headings (0-4)."""
    level = 0.0
    term_lower = term.lower()
    text_lower = text.lower()
    index = text_lower.find(term_lower)
    if index != -1:
        window = text_lower[max(0, index - 200) : index + len(term) + 200]
        for value, cues in HIERARCHY_LEVELS:
            if any(cue in window for cue in cues):
                level = max(level, float(value))
    if appears_in_heading(term, text):
        level += 1
    if ACRONYM_RE.search(term):
        level += 0.5
    return min(level, 4.0)


def estimate_difficulty(text: str) -> int:
    difficulty = 1
    if len(text) > 200:
        difficulty += 1
    if sum(1 for word in text.split() if len(word) > 10) > 3:
        difficulty += 1
    if len(ACRONYM_RE.findall(text)) > 2:
        difficulty += 1
    lower = text.lower()
    if any(word in lower for word in COMPLEX_WORDS):
        difficulty += 1
    return min(5, difficulty)


__all__ = [
    "SemanticContext",
    "analyze_concept_relationships",
    "analyze_semantic_context",
    "appears_in_heading",
    "detect_domain",
    "detect_hierarchy_level",
    "estimate_difficulty",
]
