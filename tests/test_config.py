from pathlib import Path

import pytest

from study_lexicon.config import MatcherConfig, ResolverWeights, StudyLexiconConfig, TokenizerConfig, load_config


def test_defaults(config: StudyLexiconConfig) -> None:
    assert config.extraction.max_concepts == 50
    assert config.matcher.good_match_threshold == 0.1
    assert config.similarity.jaccard + config.similarity.weighted + config.similarity.fuzzy == pytest.approx(1.0)
    assert config.resolver.activation_threshold == 2.0


@pytest.mark.parametrize("suffix", [".yaml", ".json"])
def test_round_trip(tmp_path: Path, suffix: str) -> None:
    config = StudyLexiconConfig(matcher=MatcherConfig(rank_limit=3))
    path = tmp_path / f"config{suffix}"
    config.save(path)
    assert load_config(path) == config


def test_overrides_are_merged(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("tokenizer:\n  stem_words: true\nmatcher:\n  rank_limit: 2\n", encoding="utf8")
    config = load_config(path, overrides=[{"matcher": {"content_boost": 0.5}}])
    assert config.tokenizer.stem_words is True
    assert config.matcher.rank_limit == 2
    assert config.matcher.content_boost == 0.5
    assert config.matcher.name_boost == 0.3


def test_invalid_configuration(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("- not\n- a mapping\n", encoding="utf8")
    with pytest.raises(TypeError):
        load_config(path)
    with pytest.raises(ValueError):
        MatcherConfig(cache_size=0)
    with pytest.raises(ValueError):
        TokenizerConfig(min_length=5, max_length=2)


@pytest.mark.parametrize(
    "section, key",
    [("similarity", "fuzzy_threshold"), ("resolver", "activation_threshold"), ("matcher", "content_boost")],
)
def test_negative_weights_rejected(section: str, key: str) -> None:
    with pytest.raises(ValueError, match=key):
        StudyLexiconConfig.from_dict({section: {key: -0.5}})
    assert ResolverWeights.lenient().activation_threshold == 1.0
