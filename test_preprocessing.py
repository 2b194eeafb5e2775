#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Test tokenization and the preprocessing pipeline
"""

import pytest

from TextSearchEngine.config import DEFAULT_CONFIG
from TextSearchEngine.errors import UnsupportedLanguageError
from TextSearchEngine.preprocessing.normalizer import TextNormalizer, create_pipeline
from TextSearchEngine.preprocessing.preprocess import (
    NonsenseTokenPreprocessor,
    RemoveDiacriticsPreprocessor,
    StopWordsPreprocessor,
)
from TextSearchEngine.preprocessing.stem_preprocessor import StemPreprocessor
from TextSearchEngine.preprocessing.tokenizer import RegexMatchTokenizer, TokenType


def test_tokenizer_types_and_positions():
    tokens = RegexMatchTokenizer().tokenize("Visit https://example.com on 2024-05-01, twice!")
    kinds = [(t.value, t.token_type) for t in tokens]

    assert ("Visit", TokenType.WORD) in kinds
    assert ("https://example.com", TokenType.URL) in kinds
    assert ("2024-05-01", TokenType.DATE) in kinds
    assert (",", TokenType.PUNCT) in kinds
    assert ("!", TokenType.PUNCT) in kinds
    assert tokens[0].position == 0
    assert tokens[1].position == len("Visit ")


def test_tokenizer_empty_text():
    assert RegexMatchTokenizer().tokenize("") == []


def test_tokenizer_markup_tags():
    tokens = RegexMatchTokenizer().tokenize('<p class="x">cat</p> <br/>')
    kinds = [(t.value, t.token_type) for t in tokens]

    assert ('<p class="x">', TokenType.TAG) in kinds
    assert ("</p>", TokenType.TAG) in kinds
    assert ("<br/>", TokenType.TAG) in kinds
    assert ("cat", TokenType.WORD) in kinds


def test_comparison_signs_are_not_tags(normalizer):
    text = "prices < 10 dollars\nthe cat sat on the mat\nscore > 5"
    tokens = RegexMatchTokenizer().tokenize(text)
    terms = normalizer.normalize(text)

    assert not any(t.token_type == TokenType.TAG for t in tokens)
    for term in ("cat", "sat", "mat", "dollar", "10", "5"):
        assert term in terms
    assert normalizer.normalize("a < b and c > d") == normalizer.normalize("a b and c d")


def test_tokenizer_keeps_accented_letters_in_words():
    tokens = RegexMatchTokenizer().tokenize("l'été")
    assert [t.value for t in tokens] == ["l", "'", "été"]
    assert tokens[2].token_type == TokenType.WORD


def test_normalize_removes_stop_words_and_keeps_order(normalizer):
    assert normalizer.normalize("the cat sat") == ["cat", "sat"]
    assert normalizer.normalize("The cat ran, ran!") == ["cat", "ran", "ran"]


def test_normalize_stems_words(normalizer):
    assert normalizer.normalize("cats") == normalizer.normalize("cat")
    assert normalizer.normalize("running") == ["run"]


def test_normalize_empty_and_stop_words_only(normalizer):
    assert normalizer.normalize("") == []
    assert normalizer.normalize("the and of, to...") == []


def test_normalize_is_deterministic(normalizer):
    text = "Search engines rank documents; ranking documents is what engines do."
    assert normalizer.normalize(text) == normalizer.normalize(text)


def test_french_default_pipeline(french_normalizer):
    terms = french_normalizer.normalize("Le chat et la souris")
    assert len(terms) == 2
    assert terms[0] == "chat"
    assert french_normalizer.normalize("chats") == french_normalizer.normalize("chat")


def test_french_stop_words_match_without_accents(french_normalizer):
    assert french_normalizer.normalize("Été au jardin") == french_normalizer.normalize("jardin")


def test_stop_words_checked_on_surface_form_and_stem():
    preprocessor = StopWordsPreprocessor(language="en")
    assert preprocessor.is_stop_word("THE")
    assert not preprocessor.is_stop_word("cat")


def test_nonsense_filter_min_length():
    tokens = RegexMatchTokenizer().tokenize("a bb ccc")
    NonsenseTokenPreprocessor(min_word_length=2).preprocess_all(tokens, "a bb ccc")
    assert [t.processed_form for t in tokens] == ["", "bb", "ccc"]


def test_remove_diacritics_only_touches_words():
    tokens = RegexMatchTokenizer().tokenize("Crème 12")
    RemoveDiacriticsPreprocessor().preprocess_all(tokens, "Crème 12")
    assert [t.processed_form for t in tokens] == ["Creme", "12"]


def test_pipeline_follows_configured_order():
    pipeline = create_pipeline(DEFAULT_CONFIG)
    names = [repr(p) for p in pipeline.preprocessors]
    assert names == [
        "LowercasePreprocessor",
        "RemoveDiacriticsPreprocessor",
        "NonsenseFilter(min=1)",
        "Stemming(fr)",
        "StopWords(fr)",
    ]


def test_pipeline_skips_disabled_steps(english_config):
    english_config["preprocessing"]["stop_words"]["use"] = False
    normalizer = TextNormalizer.from_config(english_config)
    assert normalizer.normalize("the cat") == ["the", "cat"]


def test_numbers_are_terms(normalizer):
    assert normalizer.normalize("cat 42") == ["cat", "42"]


def test_unsupported_language():
    with pytest.raises(UnsupportedLanguageError):
        StemPreprocessor(language="xx")
    with pytest.raises(UnsupportedLanguageError):
        StopWordsPreprocessor(language="xx")
