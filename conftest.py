import pytest

from TextSearchEngine.config import DEFAULT_CONFIG, with_language
from TextSearchEngine.corpus import Corpus
from TextSearchEngine.preprocessing.normalizer import TextNormalizer


@pytest.fixture
def english_config():
    return with_language(DEFAULT_CONFIG, "en")


@pytest.fixture
def normalizer(english_config):
    """English pipeline: tokenize, lowercase, strip accents, stem, drop stop words"""
    return TextNormalizer.from_config(english_config)


@pytest.fixture
def french_normalizer():
    return TextNormalizer.from_config(DEFAULT_CONFIG)


@pytest.fixture
def cat_corpus():
    return Corpus.from_mapping({
        "a.txt": "the cat sat",
        "b.txt": "the cat ran ran",
    })
