import itertools
import re

from study_lexicon.config import ExtractionConfig
from study_lexicon.extraction import (
    ConceptExtractor,
    clean_term,
    extract_concepts,
    extract_keywords,
    is_malformed_term,
    satisfies_invariant,
)

TERM_SHAPE = re.compile(r"^[A-Z][a-zA-Z0-9\s-]*$")


def _assert_valid(concepts) -> None:
    for concept in concepts:
        assert 3 < len(concept.term) < 60
        assert 10 < len(concept.definition) < 1000
        assert TERM_SHAPE.match(concept.term)


def test_extracts_definitions_from_sentences() -> None:
    text = "Photosynthesis is the process by which plants make food. Mitosis is cell division."
    concepts = extract_concepts(text)
    terms = [concept.term for concept in concepts]
    assert len(concepts) >= 2
    assert any("Photosynthesis" in term for term in terms)
    assert any("Mitosis" in term for term in terms)
    _assert_valid(concepts)


def test_empty_input_returns_no_concepts() -> None:
    assert extract_concepts("") == []
    assert extract_concepts("   \n ") == []
    assert extract_concepts(None) == []


def test_extraction_is_deterministic(biology_text: str) -> None:
    assert extract_concepts(biology_text) == extract_concepts(biology_text)


def test_concepts_satisfy_shape_invariant(biology_text: str) -> None:
    concepts = extract_concepts(biology_text)
    assert concepts
    _assert_valid(concepts)
    assert all(concept.domain == "biology" for concept in concepts if concept.term == "Osmosis")


def test_anchor_concept_leads_biology_text(biology_text: str) -> None:
    concepts = extract_concepts(biology_text)
    assert concepts[0].term == "Cells"
    assert concepts[0].importance >= 1000


def test_max_concepts_limit(biology_text: str) -> None:
    extractor = ConceptExtractor(ExtractionConfig(max_concepts=2))
    assert len(extractor.extract(biology_text)) <= 2


def test_sentence_fallback_when_no_pattern_matches() -> None:
    text = (
        "Plants grow towards sunlight every spring season. "
        "Gardeners water their plants during hot summer days."
    )
    concepts = extract_concepts(text)
    assert "Plants grow towards sunlight" in [concept.term for concept in concepts]
    assert all(concept.domain == "general" and concept.confidence == 0.5 for concept in concepts)
    _assert_valid(concepts)


def test_keywords_rank_frequent_domain_terms(biology_text: str) -> None:
    keywords = extract_keywords(biology_text, 5)
    assert len(keywords) == 5
    assert keywords[0] == "cell"
    assert extract_keywords("", 5) == []


def test_term_helpers() -> None:
    assert clean_term("the  nucleus ") == "Nucleus"
    assert is_malformed_term("1. Cells")
    assert is_malformed_term("cells")
    assert not is_malformed_term("Cell membrane")
    assert not satisfies_invariant("Cells", "too short")
    assert satisfies_invariant("Cells", "Units of life in every organism")


def test_keyword_fallback_when_no_sentence_qualifies() -> None:
    text = "This garden grows tomatoes. These rabbits eat lettuce daily. It rains."
    concepts = extract_concepts(text)
    definitions = {concept.term: concept.definition for concept in concepts}
    assert definitions["Garden"] == "Key concept related to garden"
    assert "Lettuce" in definitions
    assert "Eat" not in definitions
    assert all(value.startswith("Key concept related to ") for value in definitions.values())
    _assert_valid(concepts)


def test_default_concept_cap() -> None:
    suffixes = ["".join(letters) for letters in itertools.product("bcdfg", "hjklm", "npqrs")][:60]
    text = "\n".join(f"Gadget {suffix} is a useful device for testing extraction limits." for suffix in suffixes)
    concepts = extract_concepts(text)
    assert len(concepts) == ExtractionConfig().max_concepts == 50
    _assert_valid(concepts)
