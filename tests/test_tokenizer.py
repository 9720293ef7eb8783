from study_lexicon.config import TokenizerConfig
from study_lexicon.tokenizer import expand_contractions, stem, tokenize, tokenize_with_pos


def test_empty_input_yields_no_tokens() -> None:
    assert tokenize("") == []
    assert tokenize(None) == []
    assert tokenize(42) == []


def test_stopwords_are_removed() -> None:
    tokens = tokenize("the quick brown fox jumps over the lazy dog")
    assert {"quick", "brown", "fox"} <= set(tokens)
    assert "the" not in tokens
    assert "over" not in tokens


def test_contractions_are_expanded() -> None:
    tokens = tokenize("I can't believe it's working", handle_contractions=True)
    assert "cannot" in tokens
    assert expand_contractions("Won't stop") == "will not stop"


def test_tokenize_is_deterministic() -> None:
    text = "Mitochondria produce ATP; the cell-membrane regulates transport."
    config = TokenizerConfig(include_hyphenated=True, stem_words=True)
    assert tokenize(text, config) == tokenize(text, config)


def test_hyphenated_words_survive_when_requested() -> None:
    assert tokenize("The cell-membrane", include_hyphenated=True) == ["cell-membrane"]


def test_numbers_and_units() -> None:
    assert tokenize("Heat to 100 degrees") == ["heat", "degrees"]
    tokens = tokenize("Heat to 100 degrees at 5kg", include_numbers=True)
    assert "100" in tokens
    assert "5kg" in tokens


def test_emails_and_domains_are_preserved() -> None:
    tokens = tokenize("Contact tutor@example.com or visit example.org today")
    assert "tutor@example.com" in tokens
    assert "example.org" in tokens


def test_length_limits_and_case() -> None:
    tokens = tokenize("Ribosomes build Proteins", preserve_case=True, min_length=9)
    assert tokens == ["Ribosomes"]


def test_stemming() -> None:
    assert stem("running") == "run"
    assert stem("cells") == "cell"
    assert stem("quickly") == "quick"
    assert tokenize("jumped playing", stem_words=True) == ["jump", "play"]


def test_pos_tagging() -> None:
    tagged = {token.word: token for token in tokenize_with_pos("The DNA helix")}
    assert tagged["the"].pos == "determiner"
    assert tagged["dna"].is_technical
    assert tagged["helix"].pos == "noun"


def test_units_are_kept_whole() -> None:
    tokens = tokenize("Water boils at 100°C and moves at 5 m/s", include_numbers=True)
    assert tokens == ["water", "boils", "100°c", "moves", "5", "m/s"]


def test_punctuation_kept_when_not_removed() -> None:
    assert tokenize("Cells divide, grow!", remove_punctuation=False) == ["cells", "divide,", "grow!"]


def test_protected_email_is_restored_exactly() -> None:
    tokens = tokenize("Email tutor@example.com, please.")
    assert tokens == ["email", "tutor@example.com", "please"]
    assert not any("preserve" in token for token in tokens)
