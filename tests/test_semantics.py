from dataclasses import fields

from study_lexicon.rules import BIOLOGY, GENERAL, get_rules, keyword_rules_for_topic
from study_lexicon.safety import is_self_referential, sanitize_self_referential, scrub_response
from study_lexicon.semantics import (
    SemanticContext,
    analyze_concept_relationships,
    analyze_semantic_context,
    detect_domain,
    detect_hierarchy_level,
    estimate_difficulty,
)


def test_domain_detection(biology_text: str) -> None:
    assert detect_domain(biology_text) == "biology"
    assert detect_domain("An acid reacts with a base to form a compound and water.") == "chemistry"
    assert detect_domain("Nothing technical here at all.") == "general"


def test_semantic_context(biology_text: str) -> None:
    context = analyze_semantic_context(biology_text)
    assert context.domain == "biology"
    assert "cell" in context.key_themes
    assert context.technical_density > 0
    assert analyze_semantic_context("").domain == "general"


def test_semantic_context_relationship_cues() -> None:
    context = analyze_semantic_context("Insulin regulates glucose and affects cells.")
    assert context.relationship_indicators == ["affects", "regulates"]
    assert [item.name for item in fields(SemanticContext)] == [
        "domain",
        "key_themes",
        "technical_density",
        "relationship_indicators",
    ]


def test_relationships_need_two_occurrences() -> None:
    text = "Insulin regulates glucose in blood. Insulin controls uptake in muscle tissue."
    relationships = analyze_concept_relationships(text)
    assert {item.target for item in relationships["insulin"]} == {"glucose", "uptake"}
    assert all(item.type == "control" for item in relationships["insulin"])
    assert analyze_concept_relationships("Insulin regulates glucose in blood.") == {}


def test_hierarchy_and_difficulty() -> None:
    text = "DNA REPLICATION\nDNA replication is an advanced process in the nucleus."
    assert detect_hierarchy_level("DNA replication", text) == 3.5
    assert estimate_difficulty("A short definition.") == 1
    assert estimate_difficulty("However, ATP, DNA and RNA interact. " * 8) == 4


def test_self_reference_guard() -> None:
    assert is_self_referential("Topic", "I am teaching myself about topics")
    assert not is_self_referential("Osmosis", "Movement of water across a membrane")
    sanitized = sanitize_self_referential("Energy", "Energy stores energy as energy in energy form")
    assert sanitized.count("[concept]") == 3
    assert sanitized.startswith("Energy")
    assert scrub_response("I am teaching myself about cells.") == "[educational approach] about cells."
    assert scrub_response("Cells divide by mitosis.") == "Cells divide by mitosis."


def test_rules_table() -> None:
    assert get_rules("biology") is BIOLOGY
    assert get_rules("astronomy") is GENERAL
    assert keyword_rules_for_topic("Cell Organization") is BIOLOGY
    assert BIOLOGY.filter_keywords(["cell", "force", "water"]) == ["cell", "water"]
