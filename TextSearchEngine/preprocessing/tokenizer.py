import re
from abc import ABC, abstractmethod
from enum import Enum
from typing import List


class TokenType(Enum):
    """Lexical category assigned by the tokenizer."""
    WORD = "word"
    NUMBER = "number"
    URL = "url"
    DATE = "date"
    TAG = "tag"
    PUNCT = "punct"


class Token:
    """
    A single token produced by a tokenizer.

    ``value`` keeps the text exactly as it appeared in the document, while
    ``processed_form`` is rewritten by the preprocessors. An empty
    ``processed_form`` means the token was removed.
    """

    def __init__(self, value: str, token_type: TokenType, position: int):
        self.value = value
        self.processed_form = value
        self.token_type = token_type
        self.position = position

    def __repr__(self):
        return f"Token({self.value!r}, {self.token_type.name}, {self.position}, processed={self.processed_form!r})"


class Tokenizer(ABC):
    @abstractmethod
    def tokenize(self, document: str) -> List[Token]:
        raise NotImplementedError()


class RegexMatchTokenizer(Tokenizer):
    """
    Tokenizer that scans the text with one alternation of typed patterns.

    Patterns are tried in order, so URLs and dates win over the numbers and
    words they contain.
    """

    PATTERNS = [
        (TokenType.URL, r"https?://[^\s<>\"]+|www\.[^\s<>\"]+"),
        (TokenType.DATE, r"\d{4}-\d{2}-\d{2}|\d{1,2}[./]\d{1,2}[./]\d{2,4}"),
        (TokenType.TAG, r"</?[A-Za-z][\w:-]*(?:[ \t][^<>\n]*)?/?>"),
        (TokenType.NUMBER, r"\d+(?:[.,]\d+)*"),
        (TokenType.WORD, r"[^\W\d_]+"),
        (TokenType.PUNCT, r"[^\w\s]"),
    ]

    def __init__(self):
        self._regex = re.compile(
            "|".join(f"(?P<{token_type.name}>{pattern})" for token_type, pattern in self.PATTERNS)
        )

    def tokenize(self, document: str) -> List[Token]:
        """
        Split a document into typed tokens.

        Args:
            document: Raw text, may be empty

        Returns:
            List of tokens in document order
        """
        if not document:
            return []

        return [
            Token(match.group(), TokenType[match.lastgroup], match.start())
            for match in self._regex.finditer(document)
        ]
