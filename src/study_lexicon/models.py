"""Record types shared by the extraction and matching pipeline."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Relationship:
    target: str
    type: str
    strength: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return {"target": self.target, "type": self.type, "strength": self.strength}


@dataclass
class Concept:
    """An extracted (term, definition) pair with ranking metadata."""

    term: str
    definition: str
    difficulty: int = 1
    importance: float = 0.0
    domain: str = "general"
    hierarchy_level: float = 0.0
    relationships: List[Relationship] = field(default_factory=list)
    semantic_score: float = 0.0
    relationship_score: float = 0.0
    confidence: float = 0.5

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Concept:
        """Build a concept from a stored record.

        Stored corpora name the term either ``term`` or ``concept``.
        """
        term = data.get("term") or data.get("concept") or ""
        relationships = [
            Relationship(
                target=str(item.get("target", "")),
                type=str(item.get("type", "")),
                strength=int(item.get("strength", 1)),
            )
            for item in data.get("relationships") or []
            if isinstance(item, Mapping)
        ]
        return cls(
            term=str(term),
            definition=str(data.get("definition") or ""),
            difficulty=int(data.get("difficulty", 1)),
            importance=float(data.get("importance", 0.0)),
            domain=str(data.get("domain", "general")),
            hierarchy_level=float(data.get("hierarchy_level", data.get("hierarchyLevel", 0.0))),
            relationships=relationships,
            semantic_score=float(data.get("semantic_score", 0.0)),
            relationship_score=float(data.get("relationship_score", 0.0)),
            confidence=float(data.get("confidence", 0.5)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "term": self.term,
            "concept": self.term,
            "definition": self.definition,
            "difficulty": self.difficulty,
            "importance": self.importance,
            "domain": self.domain,
            "hierarchy_level": self.hierarchy_level,
            "relationships": [relationship.to_dict() for relationship in self.relationships],
            "semantic_score": self.semantic_score,
            "relationship_score": self.relationship_score,
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class Topic:
    """A named document with its keywords, concepts, and (truncated) raw text."""

    name: str
    keywords: List[str] = field(default_factory=list)
    concepts: List[Concept] = field(default_factory=list)
    raw: str = ""

    @classmethod
    def from_mapping(cls, name: str, data: Any) -> Topic:
        if isinstance(data, Topic):
            return data
        if not isinstance(data, Mapping):
            return cls(name=name)
        concepts = []
        for item in data.get("concepts") or []:
            if isinstance(item, Concept):
                concepts.append(item)
            elif isinstance(item, Mapping):
                concepts.append(Concept.from_mapping(item))
            elif isinstance(item, str) and item.strip():
                concepts.append(Concept(term=item.strip(), definition=""))
        keywords = [str(keyword) for keyword in data.get("keywords") or []]
        return cls(
            name=str(data.get("name") or data.get("topic") or name),
            keywords=keywords,
            concepts=concepts,
            raw=str(data.get("raw") or ""),
        )

    def concept_terms(self) -> List[str]:
        return [concept.term for concept in self.concepts]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "keywords": list(self.keywords),
            "concepts": [concept.to_dict() for concept in self.concepts],
            "raw": self.raw,
        }


@dataclass(frozen=True)
class Definition:
    term: str
    definition: str
    confidence: float
    pattern: str
    context: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "term": self.term,
            "definition": self.definition,
            "confidence": self.confidence,
            "pattern": self.pattern,
            "context": self.context,
        }


@dataclass
class MatchResult:
    """Best topic for a query; ``topic`` is ``None`` when nothing matched."""

    topic: Optional[Topic] = None
    score: float = 0.0
    topic_name: Optional[str] = None
    definitions: List[Definition] = field(default_factory=list)
    definition_count: int = 0

    @classmethod
    def empty(cls) -> MatchResult:
        return cls()

    @property
    def found(self) -> bool:
        return self.topic is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "topic_name": self.topic_name,
            "score": self.score,
            "definitions": [definition.to_dict() for definition in self.definitions],
            "definition_count": self.definition_count,
        }


@dataclass(frozen=True)
class RankedTopic:
    topic_name: str
    score: float
    topic: Topic


@dataclass(frozen=True)
class ConceptMatch:
    concept: Concept
    score: float
