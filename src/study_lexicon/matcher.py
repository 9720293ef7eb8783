"""Match free-text queries against a corpus of topics."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, List, Optional, Tuple

from .cache import SignatureCache
from .config import MatcherConfig, SimilarityWeights, TokenizerConfig
from .definitions import extract_definitions
from .logging import get_logger
from .models import MatchResult, RankedTopic, Topic
from .patterns import QUERY_PREFIX_RE
from .similarity import calculate_similarity, dice_coefficient, normalize_token
from .tokenizer import tokenize
from .utils.text import content_hash

LOGGER = get_logger(__name__)


class TopicMatcher:
    """Score queries against topic token signatures.

    ``topics`` arguments are mappings of topic name to either a
    :class:`~study_lexicon.models.Topic` or a corpus record
    ``{"keywords": [...], "concepts": [...], "raw": "..."}``; iteration order
    is the tie-break order.
    """

    def __init__(
        self,
        config: Optional[MatcherConfig] = None,
        similarity: Optional[SimilarityWeights] = None,
        cache: Optional[SignatureCache] = None,
        tokenizer: Optional[TokenizerConfig] = None,
    ) -> None:
        self.config = config or MatcherConfig()
        self.similarity = similarity or SimilarityWeights()
        self.cache = cache if cache is not None else SignatureCache(self.config.cache_size)
        self.tokenizer = tokenizer or TokenizerConfig()

    # Signatures ----------------------------------------------------------------
    def signature(self, name: str, topic: Topic) -> List[str]:
        """Tokens of the topic name, its keywords and its tokenized concept terms."""
        terms = topic.concept_terms()
        key = content_hash([name, *topic.keywords, "\x1e", *terms])

        def _build() -> List[str]:
            tokens = list(tokenize(name, self.tokenizer))
            tokens.extend(topic.keywords)
            for term in terms:
                tokens.extend(tokenize(term, self.tokenizer))
            return tokens

        return self.cache.get_or_compute(key, _build)

    @staticmethod
    def _iter_topics(topics: Any) -> List[Tuple[str, Topic]]:
        if not isinstance(topics, Mapping):
            return []
        return [(str(name), Topic.from_mapping(str(name), data)) for name, data in topics.items()]

    def _query_tokens(self, query: Any) -> List[str]:
        if not isinstance(query, str) or not query:
            return []
        return tokenize(query, self.tokenizer)

    # Scoring -------------------------------------------------------------------
    def _matches_any(self, tokens: List[str], candidates: List[str]) -> bool:
        threshold = self.config.token_dice_threshold
        for candidate in candidates:
            target = normalize_token(candidate)
            for token in tokens:
                normalized = normalize_token(token)
                if normalized == target or dice_coefficient(normalized, target) > threshold:
                    return True
        return False

    def _residual_match(self, query_lower: str, terms: List[str]) -> bool:
        residual = normalize_token(QUERY_PREFIX_RE.sub("", query_lower).strip())
        if not residual:
            return False
        threshold = self.config.residual_dice_threshold
        for term in terms:
            target = normalize_token(term)
            if not target:
                continue
            if residual in target or target in residual or dice_coefficient(residual, target) > threshold:
                return True
        return False

    def adjusted_score(self, query: str, query_tokens: List[str], name: str, topic: Topic) -> Tuple[float, float]:
        """Return ``(base similarity, adjusted score)`` for one topic."""
        base = calculate_similarity(query_tokens, self.signature(name, topic), self.similarity)
        score = base
        query_lower = query.lower()
        name_lower = name.lower()
        terms = topic.concept_terms()

        if name_lower and (name_lower in query_lower or query_lower in name_lower):
            score = min(1.0, score + self.config.name_boost)
        if self._matches_any(query_tokens, terms):
            score = min(1.0, score + self.config.concept_boost)
        if self._matches_any(query_tokens, topic.keywords):
            score = min(1.0, score + self.config.keyword_boost)
        raw = topic.raw.lower()
        if raw and any(normalize_token(token) in raw for token in query_tokens):
            score = min(1.0, score + self.config.content_boost)
        if self._residual_match(query_lower, terms):
            score = min(1.0, score + self.config.residual_boost)
        return base, score

    # Public API ----------------------------------------------------------------
    def find_best_match(self, query: Any, topics: Any) -> MatchResult:
        entries = self._iter_topics(topics)
        tokens = self._query_tokens(query)
        if not entries or not tokens:
            return MatchResult.empty()
        best = MatchResult.empty()
        for name, topic in entries:
            _, score = self.adjusted_score(query, tokens, name, topic)
            if score > best.score:
                best = MatchResult(topic=topic, score=score, topic_name=name)
        LOGGER.debug("Best topic for %r: %s (%.3f)", query, best.topic_name, best.score)
        return best

    def get_ranked_topics(self, query: Any, topics: Any, limit: Optional[int] = None) -> List[RankedTopic]:
        """Topics ordered by base similarity (no boosts), highest first."""
        entries = self._iter_topics(topics)
        tokens = self._query_tokens(query)
        if not entries or not tokens:
            return []
        limit = self.config.rank_limit if limit is None else limit
        ranked = [
            RankedTopic(
                topic_name=name,
                score=calculate_similarity(tokens, self.signature(name, topic), self.similarity),
                topic=topic,
            )
            for name, topic in entries
        ]
        ranked.sort(key=lambda item: item.score, reverse=True)
        return ranked[: max(limit, 0)]

    def is_good_match(self, score: float) -> bool:
        return score >= self.config.good_match_threshold

    def find_best_match_with_definitions(self, query: Any, topics: Any) -> MatchResult:
        """Best match plus the matched topic's definitions that mention a query token."""
        result = self.find_best_match(query, topics)
        if result.topic is None or not result.topic.raw:
            return result
        definitions = extract_definitions(result.topic.raw)
        tokens = self._query_tokens(query)
        relevant = [
            definition
            for definition in definitions
            if any(token in definition.term.lower() or token in definition.definition.lower() for token in tokens)
        ]
        result.definitions = relevant[: self.config.definition_limit]
        result.definition_count = len(definitions)
        return result


_DEFAULT_MATCHER = TopicMatcher()


def find_best_match(query: Any, topics: Any) -> MatchResult:
    return _DEFAULT_MATCHER.find_best_match(query, topics)


def get_ranked_topics(query: Any, topics: Any, limit: int = 5) -> List[RankedTopic]:
    return _DEFAULT_MATCHER.get_ranked_topics(query, topics, limit)


def is_good_match(score: float) -> bool:
    return _DEFAULT_MATCHER.is_good_match(score)


def find_best_match_with_definitions(query: Any, topics: Any) -> MatchResult:
    return _DEFAULT_MATCHER.find_best_match_with_definitions(query, topics)


__all__ = [
    "TopicMatcher",
    "find_best_match",
    "find_best_match_with_definitions",
    "get_ranked_topics",
    "is_good_match",
]
