import pytest

from study_lexicon.config import ResolverWeights
from study_lexicon.models import Concept
from study_lexicon.resolver import ConceptResolver, query_subject, resolve_concept
from study_lexicon.rules import ResolverRule


def test_general_query_prefers_general_concept() -> None:
    match = resolve_concept("cells", ["Animal cells", "Cells", "Plant cells"])
    assert match is not None
    assert match.concept.term == "Cells"


def test_specificity_penalty_without_domain_rules() -> None:
    resolver = ConceptResolver(rules=[])
    assert resolver.score("cells", "Cells") > resolver.score("cells", "Animal cells")


def test_domain_rule_penalty_and_bonus() -> None:
    rule = ResolverRule(query_marker="cell", max_query_length=8, demoted=("animal cells",), preferred="cells")
    with_rule = ConceptResolver(rules=[rule])
    without_rule = ConceptResolver(rules=[])
    assert with_rule.score("cells", "Animal cells") == pytest.approx(without_rule.score("cells", "Animal cells") - 15)
    assert with_rule.score("cells", "Cells") == pytest.approx(without_rule.score("cells", "Cells") + 20)
    assert with_rule.score("cell structure", "Cells") == without_rule.score("cell structure", "Cells")


def test_multi_word_query_favours_specific_concept() -> None:
    match = resolve_concept("animal cells", ["Cells", "Animal cells", "Plant cells"])
    assert match is not None
    assert match.concept.term == "Animal cells"


def test_accepts_records_and_mappings() -> None:
    concepts = [
        Concept(term="Diffusion", definition="Net movement of particles"),
        {"concept": "Osmosis", "definition": "Movement of water across a membrane"},
    ]
    match = resolve_concept("osmosis", concepts)
    assert match is not None
    assert match.concept.term == "Osmosis"
    assert match.concept.definition.startswith("Movement of water")


def test_no_match_below_activation_threshold() -> None:
    assert resolve_concept("quantum", ["Cellular respiration"]) is None
    assert resolve_concept("", ["Cells"]) is None
    assert resolve_concept("cells", []) is None


def test_lenient_profile() -> None:
    weights = ResolverWeights.lenient()
    assert weights.activation_threshold < ResolverWeights.precise().activation_threshold
    match = resolve_concept("cells", ["Animal cells", "Cells"], weights)
    assert match is not None and match.concept.term == "Cells"


def test_query_subject() -> None:
    assert query_subject("What is the nucleus?") == "nucleus"
    assert query_subject("Define osmosis") == "osmosis"


def test_identical_word_without_plural_s_scores_number_bonus() -> None:
    resolver = ConceptResolver(rules=[])
    # exact 15 + word 3 + number variant 2 + length 3
    assert resolver.score("enzyme", "Enzyme") == pytest.approx(23.0)
    # exact 15 + word 3 + length 3; "cells" is not its own singular
    assert resolver.score("cells", "Cells") == pytest.approx(21.0)


def test_single_word_concept_gets_no_phrase_bonus() -> None:
    match = resolve_concept("red blood cells", ["Cells", "Blood"])
    assert match is not None
    assert match.concept.term == "Blood"
