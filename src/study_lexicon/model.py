"""Top-level study assistant orchestration."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .cache import SignatureCache
from .config import StudyLexiconConfig
from .logging import get_logger
from .matcher import TopicMatcher
from .models import ConceptMatch, MatchResult, RankedTopic, Topic
from .resolver import ConceptResolver, query_subject
from .topics import TopicLibrary, build_topic

LOGGER = get_logger(__name__)


@dataclass
class Answer:
    """Structured result of a query; rendering it as prose is up to the caller."""

    query: str
    match: MatchResult
    concept: Optional[ConceptMatch] = None

    @property
    def needs_clarification(self) -> bool:
        return self.match.topic is None or (self.concept is None and not self.match.definitions)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"query": self.query, **self.match.to_dict()}
        if self.concept is not None:
            payload["concept"] = self.concept.concept.to_dict()
            payload["concept_score"] = self.concept.score
        else:
            payload["concept"] = None
        return payload


@dataclass
class StudyLexicon:
    """Facade tying topic construction, matching and concept resolution together."""

    config: StudyLexiconConfig = field(default_factory=StudyLexiconConfig)
    library: TopicLibrary = field(default_factory=TopicLibrary)

    def __post_init__(self) -> None:
        self.cache = SignatureCache(self.config.matcher.cache_size)
        self.matcher = TopicMatcher(
            config=self.config.matcher,
            similarity=self.config.similarity,
            cache=self.cache,
            tokenizer=self.config.tokenizer,
        )
        self.resolver = ConceptResolver(self.config.resolver)

    # Persistence ---------------------------------------------------------------
    @classmethod
    def from_library(cls, path: Path, config: Optional[StudyLexiconConfig] = None) -> StudyLexicon:
        library = TopicLibrary.load(Path(path), missing_ok=True)
        return cls(config=config or StudyLexiconConfig(), library=library)

    def save(self, path: Path) -> None:
        self.library.save(Path(path))

    # Topics --------------------------------------------------------------------
    def import_text(self, name: str, text: Any) -> Topic:
        topic = build_topic(name, text, self.config)
        self.library.add(topic)
        return topic

    # Queries -------------------------------------------------------------------
    def ask(self, query: str) -> Answer:
        match = self.matcher.find_best_match_with_definitions(query, self.library.as_mapping())
        concept: Optional[ConceptMatch] = None
        if match.topic is not None and self.matcher.is_good_match(match.score):
            concept = self.resolver.resolve(query_subject(query), match.topic.concepts)
        else:
            LOGGER.info("No confident topic for %r (score %.3f)", query, match.score)
        return Answer(query=query, match=match, concept=concept)

    def rank(self, query: str, limit: Optional[int] = None) -> List[RankedTopic]:
        return self.matcher.get_ranked_topics(query, self.library.as_mapping(), limit)


__all__ = ["Answer", "StudyLexicon"]
