"""Tests for the keyword tokenizer."""

from __future__ import annotations

from resumefit.analysis.tokenize import MAX_TOKENS, STOP_WORDS, tokenize


def test_keeps_symbol_terms() -> None:
    """Terms like c++, node.js and c# must survive normalisation."""
    assert tokenize("C++, Node.js and C# developers") == ["c++", "node.js", "c#", "developers"]


def test_none_and_empty_input() -> None:
    assert tokenize(None) == []
    assert tokenize("") == []
    assert tokenize("   \n\t ") == []


def test_drops_short_tokens_and_stop_words() -> None:
    tokens = tokenize("I am a developer with the best of intentions, x y z")
    assert tokens == ["am", "developer", "best", "intentions"]
    assert not any(len(t) <= 1 for t in tokens)
    assert not STOP_WORDS.intersection(tokens)


def test_first_seen_order_without_duplicates() -> None:
    assert tokenize("Python python PYTHON django Python flask") == ["python", "django", "flask"]


def test_cap_on_long_input() -> None:
    text = " ".join(f"word{i}" for i in range(500))
    tokens = tokenize(text)
    assert len(tokens) == MAX_TOKENS
    assert tokens[0] == "word0"
    assert tokens[-1] == "word199"


def test_cap_applies_before_folding_duplicates() -> None:
    """The cap counts the surviving token stream, repeats included."""
    text = "alpha " * 150 + " ".join(f"t{i}" for i in range(100))
    tokens = tokenize(text)
    assert tokens[0] == "alpha"
    assert "t49" in tokens
    assert "t50" not in tokens
    assert len(tokens) == 51


def test_idempotent_over_rejoined_output() -> None:
    text = "Senior Python/Django engineer. Experience with AWS, c++ & k8s; the best!"
    tokens = tokenize(text)
    assert tokenize(" ".join(tokens)) == tokens
