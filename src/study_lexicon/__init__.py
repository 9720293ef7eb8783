"""Study Lexicon package."""

from .cache import SignatureCache
from .config import (
    ExtractionConfig,
    MatcherConfig,
    ResolverWeights,
    SimilarityWeights,
    StudyLexiconConfig,
    TokenizerConfig,
    load_config,
)
from .definitions import extract_definitions, find_definitions_for_concepts
from .extraction import ConceptExtractor, extract_concepts, extract_keywords
from .matcher import (
    TopicMatcher,
    find_best_match,
    find_best_match_with_definitions,
    get_ranked_topics,
    is_good_match,
)
from .model import Answer, StudyLexicon
from .models import Concept, ConceptMatch, Definition, MatchResult, RankedTopic, Relationship, Topic
from .resolver import ConceptResolver, resolve_concept
from .similarity import calculate_similarity, dice_coefficient
from .tokenizer import tokenize, tokenize_with_pos
from .topics import TopicLibrary, build_topic, filter_concepts_for_topic

__all__ = [
    "Answer",
    "Concept",
    "ConceptExtractor",
    "ConceptMatch",
    "ConceptResolver",
    "Definition",
    "ExtractionConfig",
    "MatchResult",
    "MatcherConfig",
    "RankedTopic",
    "Relationship",
    "ResolverWeights",
    "SignatureCache",
    "SimilarityWeights",
    "StudyLexicon",
    "StudyLexiconConfig",
    "TokenizerConfig",
    "Topic",
    "TopicLibrary",
    "TopicMatcher",
    "build_topic",
    "calculate_similarity",
    "dice_coefficient",
    "extract_concepts",
    "extract_definitions",
    "extract_keywords",
    "filter_concepts_for_topic",
    "find_best_match",
    "find_best_match_with_definitions",
    "find_definitions_for_concepts",
    "get_ranked_topics",
    "is_good_match",
    "load_config",
    "resolve_concept",
    "tokenize",
    "tokenize_with_pos",
]

__version__ = "0.1.0"
