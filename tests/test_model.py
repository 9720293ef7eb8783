from pathlib import Path

from study_lexicon import StudyLexicon


def test_ask_resolves_topic_and_concept(biology_text: str) -> None:
    lexicon = StudyLexicon()
    lexicon.import_text("Cell Biology", biology_text)
    answer = lexicon.ask("What is osmosis?")
    assert answer.match.topic_name == "Cell Biology"
    assert answer.concept is not None
    assert answer.concept.concept.term == "Osmosis"
    assert not answer.needs_clarification
    payload = answer.to_dict()
    assert payload["topic_name"] == "Cell Biology"
    assert payload["concept"]["term"] == "Osmosis"


def test_ask_without_topics_needs_clarification() -> None:
    answer = StudyLexicon().ask("What is osmosis?")
    assert answer.match.topic is None
    assert answer.concept is None
    assert answer.needs_clarification


def test_rank_and_persistence(tmp_path: Path, biology_text: str) -> None:
    lexicon = StudyLexicon()
    lexicon.import_text("Cell Biology", biology_text)
    lexicon.import_text("Forces", "Force is a push or pull acting on an object. Velocity is speed in a direction.")
    ranked = lexicon.rank("membrane osmosis water")
    assert ranked[0].topic_name == "Cell Biology"

    path = tmp_path / "library.json"
    lexicon.save(path)
    restored = StudyLexicon.from_library(path)
    assert restored.library.names() == ["Cell Biology", "Forces"]
