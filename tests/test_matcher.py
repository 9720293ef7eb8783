from typing import Any, Dict

from study_lexicon.cache import SignatureCache
from study_lexicon.matcher import (
    TopicMatcher,
    find_best_match,
    find_best_match_with_definitions,
    get_ranked_topics,
    is_good_match,
)
from study_lexicon.models import Topic


def test_nucleus_query_matches_cell_biology(topic_corpus: Dict[str, Dict[str, Any]]) -> None:
    result = find_best_match("what is the nucleus", topic_corpus)
    assert result.topic_name == "Cell Biology"
    assert result.score >= 0.1
    assert 0.0 <= result.score <= 1.0
    assert isinstance(result.topic, Topic)


def test_single_topic_corpus() -> None:
    corpus = {
        "Cell Biology": {
            "keywords": ["nucleus", "mitochondria"],
            "concepts": [{"concept": "nucleus", "definition": "Control center of the cell"}],
            "raw": "The nucleus is the control center of the cell.",
        }
    }
    result = find_best_match("what is the nucleus", corpus)
    assert result.topic_name == "Cell Biology"
    assert is_good_match(result.score)


def test_empty_inputs_return_sentinel(topic_corpus: Dict[str, Dict[str, Any]]) -> None:
    for result in (
        find_best_match("", topic_corpus),
        find_best_match(None, topic_corpus),
        find_best_match("nucleus", {}),
        find_best_match("the is", topic_corpus),
    ):
        assert result.topic is None
        assert result.topic_name is None
        assert result.score == 0.0


def test_ties_keep_first_seen_topic() -> None:
    record = {"keywords": ["enzyme"], "concepts": [], "raw": "Enzymes speed up reactions."}
    result = find_best_match("enzyme", {"Topic Two": record, "Topic One": dict(record)})
    assert result.topic_name == "Topic Two"


def test_ranked_topics_use_base_similarity(topic_corpus: Dict[str, Dict[str, Any]]) -> None:
    ranked = get_ranked_topics("velocity force", topic_corpus)
    assert ranked[0].topic_name == "Forces and Motion"
    assert [item.score for item in ranked] == sorted((item.score for item in ranked), reverse=True)
    assert len(get_ranked_topics("velocity force", topic_corpus, limit=1)) == 1
    assert get_ranked_topics("", topic_corpus) == []


def test_good_match_threshold() -> None:
    assert is_good_match(0.1)
    assert not is_good_match(0.09)


def test_match_with_definitions(topic_corpus: Dict[str, Dict[str, Any]]) -> None:
    result = find_best_match_with_definitions("what is the nucleus", topic_corpus)
    assert result.topic_name == "Cell Biology"
    assert 1 <= len(result.definitions) <= 3
    assert result.definition_count >= len(result.definitions)
    assert "nucleus" in result.definitions[0].term.lower()


def test_signatures_are_cached(topic_corpus: Dict[str, Dict[str, Any]]) -> None:
    cache = SignatureCache(max_size=8)
    matcher = TopicMatcher(cache=cache)
    matcher.find_best_match("nucleus", topic_corpus)
    matcher.find_best_match("velocity", topic_corpus)
    assert len(cache) == 2
    assert cache.hits == 2


def test_signature_includes_name_keywords_and_concepts(topic_corpus: Dict[str, Dict[str, Any]]) -> None:
    topic = Topic.from_mapping("Cell Biology", topic_corpus["Cell Biology"])
    signature = TopicMatcher().signature("Cell Biology", topic)
    assert signature == ["cell", "biology", "nucleus", "mitochondria", "nucleus"]


def test_string_concepts_count_as_concepts() -> None:
    topic = Topic.from_mapping("Bio", {"concepts": ["Osmosis", "  "]})
    assert topic.concept_terms() == ["Osmosis"]

    corpus = {"Bio": {"concepts": ["Osmosis"]}, "Other": {"concepts": [{"concept": "Osmosis"}]}}
    result = find_best_match("osmosis", corpus)
    assert result.topic_name == "Bio"
    assert result.score == 1.0
