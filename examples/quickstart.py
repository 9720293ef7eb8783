"""Minimal quickstart script for Study Lexicon.

The script imports two short study notes as topics, prints the extracted
concepts and then answers a few questions against the resulting library.
"""

from study_lexicon import StudyLexicon
from study_lexicon.logging import configure_logging

NOTES = {
    "Cell Biology": (
        "Cells are the basic building blocks of all living organisms.\n"
        "The nucleus is the control center of the cell.\n"
        "Osmosis is the movement of water across a partially permeable membrane.\n"
    ),
    "Forces and Motion": (
        "Force is a push or pull acting on an object.\n"
        "Velocity is the speed of an object in a given direction.\n"
    ),
}

QUESTIONS = ["What is osmosis?", "cells", "define velocity", "Who won the 1998 world cup?"]


def main() -> None:
    configure_logging("INFO")
    lexicon = StudyLexicon()
    for name, text in NOTES.items():
        topic = lexicon.import_text(name, text)
        print(f"{name}: {', '.join(topic.concept_terms())}")

    for question in QUESTIONS:
        answer = lexicon.ask(question)
        if answer.needs_clarification:
            print(f"\n{question}\n  -> no confident match (score {answer.match.score:.2f})")
            continue
        print(f"\n{question}\n  -> topic {answer.match.topic_name} (score {answer.match.score:.2f})")
        if answer.concept is not None:
            concept = answer.concept.concept
            print(f"  -> {concept.term}: {concept.definition}")


if __name__ == "__main__":
    main()
