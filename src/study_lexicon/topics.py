"""Topic construction and the on-disk topic library."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, TypeVar, Union

from .config import StudyLexiconConfig
from .extraction import ConceptExtractor, extract_keywords
from .logging import get_logger
from .models import Concept, Topic
from .rules import FORCED_TERMS, keyword_rules_for_topic, topic_rules_for_name
from .utils.io import load_yaml_or_json, save_json

LOGGER = get_logger(__name__)

ConceptLike = TypeVar("ConceptLike", Concept, str)


def _term_of(item: Union[Concept, str]) -> str:
    return item.term if isinstance(item, Concept) else str(item)


def filter_concepts_for_topic(concepts: Iterable[ConceptLike], topic_name: str) -> List[ConceptLike]:
    """Drop forced terms (``acid``, ``ion``, ...) that do not belong to the topic's domain.

    Accepts concept records or plain term strings and returns the same kind.
    Terms that are not forced terms are always kept.
    """
    allowed = topic_rules_for_name(topic_name).forced_term_allowances
    kept: List[ConceptLike] = []
    for item in concepts:
        term = _term_of(item).lower().strip()
        if term in FORCED_TERMS and term not in allowed:
            LOGGER.debug("Dropped forced term %r from topic %r", term, topic_name)
            continue
        kept.append(item)
    return kept


def build_topic(name: str, content: Any, config: Optional[StudyLexiconConfig] = None) -> Topic:
    """Build a :class:`Topic` from raw text or a ``{"content": ...}`` mapping."""
    if isinstance(content, Mapping):
        content = content.get("content")
    if not isinstance(content, str):
        raise TypeError("Topic content must be a string or a mapping with a 'content' string")
    config = config or StudyLexiconConfig()
    extraction = config.extraction
    text = content[: extraction.max_process_length]

    keywords = extract_keywords(text, extraction.keyword_count, config.tokenizer)
    keywords = keyword_rules_for_topic(name).filter_keywords(keywords)
    concepts = ConceptExtractor(extraction, config.tokenizer).extract(text)
    concepts = filter_concepts_for_topic(concepts, name)
    LOGGER.info("Built topic %r with %d keywords and %d concepts", name, len(keywords), len(concepts))
    return Topic(name=name, keywords=keywords, concepts=concepts, raw=content[: extraction.max_raw_length])


class TopicLibrary:
    """Insertion-ordered collection of topics persisted as a JSON corpus file.

    The file holds a mapping ``{topic name: {"keywords", "concepts", "raw"}}``,
    the same shape the matcher accepts.
    """

    def __init__(self, topics: Optional[Iterable[Topic]] = None) -> None:
        self._topics: Dict[str, Topic] = {}
        for topic in topics or []:
            self.add(topic)

    def __len__(self) -> int:
        return len(self._topics)

    def __contains__(self, name: object) -> bool:
        return name in self._topics

    def __iter__(self) -> Iterator[Topic]:
        return iter(self._topics.values())

    def add(self, topic: Topic) -> None:
        """Add or replace ``topic``; a replaced topic keeps its position."""
        self._topics[topic.name] = topic

    def get(self, name: str) -> Optional[Topic]:
        return self._topics.get(name)

    def names(self) -> List[str]:
        return list(self._topics)

    def as_mapping(self) -> Dict[str, Topic]:
        return dict(self._topics)

    def to_dict(self) -> Dict[str, Any]:
        return {name: topic.to_dict() for name, topic in self._topics.items()}

    # Persistence ---------------------------------------------------------------
    def save(self, path: Path) -> None:
        path = Path(path)
        save_json(path, self.to_dict())
        LOGGER.debug("Saved %d topics to %s", len(self), path)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TopicLibrary:
        return cls(Topic.from_mapping(str(name), record) for name, record in data.items())

    @classmethod
    def load(cls, path: Path, *, missing_ok: bool = False) -> TopicLibrary:
        path = Path(path)
        if missing_ok and not path.exists():
            return cls()
        library = cls.from_dict(load_yaml_or_json(path))
        LOGGER.debug("Loaded %d topics from %s", len(library), path)
        return library


__all__ = ["TopicLibrary", "build_topic", "filter_concepts_for_topic"]
