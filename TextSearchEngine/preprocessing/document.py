from typing import List


class Document:
    """
    Represents an uploaded text document.

    A document is identified by its name (usually the file name) and is
    immutable once created.
    """

    __slots__ = ("_name", "_content")

    def __init__(self, name: str, content: str = ""):
        """
        Initialize a document.

        Args:
            name: Unique name of the document within a corpus
            content: Raw document text
        """
        if not isinstance(name, str) or not name:
            raise ValueError("Document name must be a non-empty string")
        self._name = name
        self._content = content or ""

    @property
    def name(self) -> str:
        return self._name

    @property
    def content(self) -> str:
        return self._content

    def get_preprocessed_terms(self, normalizer) -> List[str]:
        """
        Get the normalized terms of the document.

        Args:
            normalizer: Object with a ``normalize(text) -> list[str]`` method

        Returns:
            List of terms in document order
        """
        return normalizer.normalize(self._content)

    def snippet(self, length: int = 150) -> str:
        text = self._content[:length].replace('\n', ' ')
        return text + "..." if len(self._content) > length else text

    def __eq__(self, other):
        if not isinstance(other, Document):
            return NotImplemented
        return self._name == other._name and self._content == other._content

    def __hash__(self):
        return hash((self._name, self._content))

    def __repr__(self):
        return f"Document({self._name!r}, {len(self._content)} chars)"
