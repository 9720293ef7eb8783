import pytest

from study_lexicon.config import SimilarityWeights
from study_lexicon.similarity import calculate_similarity, dice_coefficient, expand_synonyms, normalize_token


def test_identical_sets_score_one() -> None:
    tokens = ["photosynthesis", "chlorophyll", "light"]
    assert calculate_similarity(tokens, tokens) == pytest.approx(1.0)
    assert calculate_similarity(["cells", "nucleus"], ["nucleus", "cell"]) >= 0.9


def test_scores_are_bounded() -> None:
    pairs = [
        (["osmosis"], ["water", "diffusion", "membrane"]),
        (["velocity", "force"], ["nucleus"]),
        (["mitosis", "meiosis"], ["mitosis", "cell", "division"]),
        (["voltage"], ["electrical", "potential", "voltage", "current"]),
    ]
    for left, right in pairs:
        assert 0.0 <= calculate_similarity(left, right) <= 1.0


def test_empty_or_stopword_only_inputs() -> None:
    assert calculate_similarity([], ["cell"]) == 0.0
    assert calculate_similarity(["the", "is"], ["the", "is"]) == 0.0


def test_unrelated_tokens_score_zero() -> None:
    assert calculate_similarity(["osmosis"], ["velocity"]) == 0.0


def test_synonyms_bridge_vocabulary() -> None:
    assert expand_synonyms(["osmosis"]) == ["osmosis", "water", "diffusion", "osmotic", "movement"]
    assert calculate_similarity(["osmosis"], ["water", "diffusion"]) > 0.0


def test_important_terms_outweigh_plain_ones() -> None:
    weights = SimilarityWeights()
    important = calculate_similarity(["nucleus", "shape"], ["nucleus"], weights)
    plain = calculate_similarity(["nucleus", "shape"], ["shape"], weights)
    assert important > plain


def test_dice_and_normalisation() -> None:
    assert dice_coefficient("night", "nacht") == pytest.approx(0.25)
    assert dice_coefficient("cell", "cell") == 1.0
    assert dice_coefficient("a", "b") == 0.0
    assert normalize_token("Cells") == "cell"
    assert normalize_token("quickly") == "quick"
