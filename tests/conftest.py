from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from study_lexicon.config import StudyLexiconConfig

BIOLOGY_TEXT = """CELL BIOLOGY
Cells are the basic building blocks of all living organisms.
The nucleus is the control center of the cell and contains the genetic material.
Osmosis is the movement of water across a partially permeable membrane.
Mitochondria are the site of aerobic respiration in the cell.
Diffusion is the net movement of particles from high to low concentration.
"""


@pytest.fixture
def config() -> StudyLexiconConfig:
    return StudyLexiconConfig()


@pytest.fixture
def biology_text() -> str:
    return BIOLOGY_TEXT


@pytest.fixture
def topic_corpus() -> Dict[str, Dict[str, Any]]:
    return {
        "Cell Biology": {
            "keywords": ["nucleus", "mitochondria"],
            "concepts": [{"concept": "nucleus", "definition": "Control center of the cell"}],
            "raw": "The nucleus is the control center of the cell.",
        },
        "Forces and Motion": {
            "keywords": ["force", "velocity", "acceleration"],
            "concepts": [{"concept": "Velocity", "definition": "Speed in a given direction"}],
            "raw": "Velocity is speed in a given direction. A force changes the motion of an object.",
        },
    }
