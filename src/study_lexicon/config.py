"""Configuration helpers for Study Lexicon."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Optional, cast

from .utils.io import is_yaml_path, load_yaml_or_json, save_json, save_yaml


def _require_non_negative(section: Any) -> None:
    for item in fields(section):
        value = getattr(section, item.name)
        if isinstance(value, (int, float)) and not isinstance(value, bool) and value < 0:
            raise ValueError(f"{type(section).__name__}.{item.name} must be non-negative")


@dataclass
class TokenizerConfig:
    """Options for :func:`study_lexicon.tokenizer.tokenize`.

    ``technical_terms`` is accepted for compatibility with callers that pass
    it, but tokens are already preserved as-is.
    """

    handle_contractions: bool = False
    preserve_case: bool = False
    include_hyphenated: bool = False
    remove_punctuation: bool = True
    include_numbers: bool = False
    min_length: int = 1
    max_length: Optional[int] = 50
    remove_stopwords: bool = True
    stem_words: bool = False
    technical_terms: bool = False

    def __post_init__(self) -> None:
        if self.min_length < 0:
            raise ValueError("min_length must be non-negative")
        if self.max_length is not None and self.max_length < self.min_length:
            raise ValueError("max_length must be greater than or equal to min_length")


@dataclass
class ExtractionConfig:
    """Limits applied while extracting concepts from a document."""

    max_concepts: int = 50
    max_process_length: int = 50000
    max_raw_length: int = 10000
    keyword_count: int = 20
    fallback_sentence_limit: int = 20
    fallback_keyword_count: int = 10


@dataclass
class SimilarityWeights:
    """Weights combining the three similarity signals."""

    jaccard: float = 0.3
    weighted: float = 0.4
    fuzzy: float = 0.3
    important_term_weight: float = 3.0
    fuzzy_min_length: int = 3
    fuzzy_threshold: float = 0.6
    fuzzy_pair_weight: float = 0.1
    fuzzy_cap: float = 0.3

    def __post_init__(self) -> None:
        _require_non_negative(self)


@dataclass
class MatcherConfig:
    """Score adjustments applied by the topic matcher."""

    name_boost: float = 0.3
    concept_boost: float = 0.2
    keyword_boost: float = 0.1
    content_boost: float = 0.4
    residual_boost: float = 0.3
    token_dice_threshold: float = 0.8
    residual_dice_threshold: float = 0.9
    good_match_threshold: float = 0.1
    rank_limit: int = 5
    cache_size: int = 256
    definition_limit: int = 3

    def __post_init__(self) -> None:
        _require_non_negative(self)
        if self.cache_size <= 0:
            raise ValueError("cache_size must be positive")


@dataclass
class ResolverWeights:
    """Weighting profile for the concept resolver.

    A single scoring routine reads these values, so alternative tunings are
    expressed as different profiles rather than different code paths.
    """

    exact: float = 15.0
    containment: float = 10.0
    specificity: float = 5.0
    ordered_phrase: float = 3.0
    plural_floor: float = 9.0
    word_exact: float = 3.0
    word_partial: float = 1.0
    word_plural: float = 2.0
    length_bonus: float = 3.0
    length_scale: float = 10.0
    specificity_penalty: float = 5.0
    activation_threshold: float = 2.0

    def __post_init__(self) -> None:
        _require_non_negative(self)

    @classmethod
    def precise(cls) -> ResolverWeights:
        return cls()

    @classmethod
    def lenient(cls) -> ResolverWeights:
        """Looser profile for browsing-style queries."""
        return cls(specificity_penalty=2.0, word_partial=2.0, activation_threshold=1.0)


@dataclass
class StudyLexiconConfig:
    """Top-level configuration for the study lexicon pipeline."""

    tokenizer: TokenizerConfig = field(default_factory=TokenizerConfig)
    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)
    similarity: SimilarityWeights = field(default_factory=SimilarityWeights)
    matcher: MatcherConfig = field(default_factory=MatcherConfig)
    resolver: ResolverWeights = field(default_factory=ResolverWeights)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StudyLexiconConfig:
        return cls(
            tokenizer=TokenizerConfig(**data.get("tokenizer", {})),
            extraction=ExtractionConfig(**data.get("extraction", {})),
            similarity=SimilarityWeights(**data.get("similarity", {})),
            matcher=MatcherConfig(**data.get("matcher", {})),
            resolver=ResolverWeights(**data.get("resolver", {})),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def save(self, path: Path) -> None:
        """Write the configuration as YAML or JSON depending on the suffix."""
        if is_yaml_path(path):
            save_yaml(path, self.to_dict())
        else:
            save_json(path, self.to_dict())


def _merge_dict(base: dict[str, Any], overrides: Iterable[dict[str, Any]]) -> dict[str, Any]:
    result: dict[str, Any] = dict(base)
    for override in overrides:
        for key, value in override.items():
            existing = result.get(key)
            if isinstance(value, dict) and isinstance(existing, dict):
                nested = _merge_dict(cast(dict[str, Any], existing), [value])
                result[key] = nested
            else:
                result[key] = value
    return result


def load_config(
    path: Optional[Path] = None,
    overrides: Optional[Iterable[dict[str, Any]]] = None,
) -> StudyLexiconConfig:
    """Load configuration from disk and merge overrides."""

    overrides = list(overrides or [])
    if path is None:
        base: dict[str, Any] = {}
    else:
        base = load_yaml_or_json(Path(path))

    merged = _merge_dict(base, overrides)
    return StudyLexiconConfig.from_dict(merged)
