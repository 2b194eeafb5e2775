from nltk.stem.snowball import SnowballStemmer

from .preprocess import TokenPreprocessor
from .tokenizer import Token, TokenType
from ..errors import UnsupportedLanguageError

# Language codes used in config.json -> nltk Snowball language names
STEMMER_LANGUAGES = {
    "fr": "french",
    "en": "english",
}


class StemPreprocessor(TokenPreprocessor):
    """Reduces word tokens to their Snowball stem."""

    def __init__(self, language="fr"):
        """
        Args:
            language: Language code from STEMMER_LANGUAGES

        Raises:
            UnsupportedLanguageError: If no Snowball stemmer is mapped for the language
        """
        if language not in STEMMER_LANGUAGES:
            raise UnsupportedLanguageError(language, STEMMER_LANGUAGES)
        self.language = language
        self.stemmer = SnowballStemmer(STEMMER_LANGUAGES[language])

    def preprocess(self, token: Token, document: str) -> Token:
        if token.token_type == TokenType.WORD and token.processed_form:
            token.processed_form = self.stemmer.stem(token.processed_form)
        return token

    def __repr__(self):
        return f"Stemming({self.language})"
