from abc import ABC, abstractmethod
from .tokenizer import Token, TokenType
from ..errors import UnsupportedLanguageError
import json
import logging
import os
import unicodedata

logger = logging.getLogger(__name__)

DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data")


def strip_diacritics(text: str) -> str:
    """Remove accents by decomposing to NFD and dropping combining marks."""
    normalized = unicodedata.normalize('NFD', text)
    return ''.join([c for c in normalized if not unicodedata.combining(c)])


def available_stop_word_languages(stop_words_dir=DATA_DIR):
    """Language codes for which a ``stopwords-<code>.json`` file exists."""
    if not os.path.isdir(stop_words_dir):
        return set()
    return {
        name[len("stopwords-"):-len(".json")]
        for name in os.listdir(stop_words_dir)
        if name.startswith("stopwords-") and name.endswith(".json")
    }


class TokenPreprocessor(ABC):
    @abstractmethod
    def preprocess(self, token: Token, document: str) -> Token:
        raise NotImplementedError()

    def preprocess_all(self, tokens: list[Token], document: str) -> list[Token]:
        return [self.preprocess(token, document) for token in tokens]

    def __repr__(self):
        return self.__class__.__name__


class LowercasePreprocessor(TokenPreprocessor):
    def preprocess(self, token: Token, document: str) -> Token:
        token.processed_form = token.processed_form.lower()
        return token


class StopWordsPreprocessor(TokenPreprocessor):
    """Preprocessor for removing stop words."""

    def __init__(self, language="fr", stop_words_dir=DATA_DIR):
        """
        Initialize preprocessor for removing stop words.

        The list is lowercased and stripped of diacritics when loaded, so it
        matches tokens regardless of where this step sits in the pipeline.

        Args:
            language: Language code of the stop word list ('fr' or 'en')
            stop_words_dir: Directory containing stopwords-<language>.json files

        Raises:
            UnsupportedLanguageError: If no list exists for the language
        """
        self.language = language
        path = os.path.join(stop_words_dir, f"stopwords-{language}.json")
        if not os.path.exists(path):
            raise UnsupportedLanguageError(language, available_stop_word_languages(stop_words_dir))

        with open(path, 'r', encoding='utf-8') as f:
            self.stop_words = {strip_diacritics(word.lower()) for word in json.load(f)}
        logger.debug("Loaded %d stop words for '%s'", len(self.stop_words), language)

    def is_stop_word(self, word: str) -> bool:
        return strip_diacritics(word.lower()) in self.stop_words

    def preprocess(self, token: Token, document: str) -> Token:
        """
        If token is a stop word, replace its processed_form with empty string.

        Both the current processed form (usually the stem) and the surface
        form of the token are checked.

        Args:
            token: Token to process
            document: Original document

        Returns:
            Processed token
        """
        # Process only words, not numbers, punctuation, etc.
        if token.token_type != TokenType.WORD or not token.processed_form:
            return token
        if self.is_stop_word(token.processed_form) or self.is_stop_word(token.value):
            token.processed_form = ""
        return token

    def __repr__(self):
        return f"StopWords({self.language})"


class NonsenseTokenPreprocessor(TokenPreprocessor):
    """Preprocessor for removing nonsense tokens."""

    def __init__(self, min_word_length=1, remove_types=None, preserve_types=None):
        """
        Initialize preprocessor for removing nonsense tokens.

        Args:
            min_word_length: Minimum word length (shorter will be removed)
            remove_types: List of token types to remove
            preserve_types: List of token types to preserve (takes precedence over remove_types)
        """
        self.min_word_length = min_word_length

        # Default token types to remove (if not specified otherwise)
        self.remove_types = remove_types or [
            TokenType.PUNCT,
            TokenType.TAG
        ]

        # Token types to preserve regardless of their length
        self.preserve_types = preserve_types or [
            TokenType.URL,
            TokenType.DATE
        ]

    def preprocess(self, token: Token, document: str) -> Token:
        if token.token_type in self.preserve_types:
            return token

        if token.token_type in self.remove_types:
            token.processed_form = ""
            return token

        if token.token_type == TokenType.WORD and len(token.processed_form) < self.min_word_length:
            token.processed_form = ""

        return token

    def __repr__(self):
        return f"NonsenseFilter(min={self.min_word_length})"


class RemoveDiacriticsPreprocessor(TokenPreprocessor):
    """Preprocessor for removing diacritics."""

    def preprocess(self, token: Token, document: str) -> Token:
        # Skip non-word tokens
        if token.token_type != TokenType.WORD:
            return token

        token.processed_form = strip_diacritics(token.processed_form)
        return token


class PreprocessingPipeline:
    """Pipeline of token preprocessors."""

    def __init__(self, preprocessors, name=None):
        """
        Initialize a preprocessing pipeline.

        Args:
            preprocessors: List of preprocessor objects, applied in order
            name: Name of the pipeline (derived from the preprocessors if omitted)
        """
        self.preprocessors = list(preprocessors)
        self.name = name or "+".join(repr(p) for p in self.preprocessors)

    def preprocess(self, tokens: list[Token], document: str) -> list[Token]:
        """
        Apply all preprocessors to the tokens.

        Args:
            tokens: List of tokens to preprocess
            document: Original document text

        Returns:
            List of preprocessed tokens
        """
        for preprocessor in self.preprocessors:
            preprocessor.preprocess_all(tokens, document)

        return tokens

    def __repr__(self):
        return f"PreprocessingPipeline({self.name})"
