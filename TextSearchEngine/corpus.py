"""Ordered collection of uploaded documents."""
import logging
import os
from typing import Dict, Iterable, Iterator, List, Mapping

from .errors import DuplicateDocumentError
from .preprocessing.document import Document

logger = logging.getLogger(__name__)


class Corpus:
    """
    Ordered mapping from document name to Document.

    Insertion order is the column order of every matrix built from the corpus.
    The corpus is append-only and names are unique.
    """

    def __init__(self, documents: Iterable[Document] = ()):
        self._documents: Dict[str, Document] = {}
        for document in documents:
            self.add(document)

    @classmethod
    def from_mapping(cls, texts: Mapping[str, str]) -> "Corpus":
        """Build a corpus from an ordered ``{name: text}`` mapping."""
        return cls(Document(name, text) for name, text in texts.items())

    def add(self, document: Document) -> Document:
        """
        Append a document.

        Raises:
            DuplicateDocumentError: If a document with the same name exists
        """
        if document.name in self._documents:
            raise DuplicateDocumentError(document.name)
        self._documents[document.name] = document
        return document

    def add_text(self, name: str, text: str) -> Document:
        return self.add(Document(name, text))

    def add_file(self, path: str, encoding: str = "utf-8") -> Document:
        """
        Read a text file and add it under its base name.

        Args:
            path: Path to the file
            encoding: Text encoding, undecodable bytes are replaced

        Returns:
            The added Document
        """
        name = os.path.basename(path)
        if name in self._documents:
            raise DuplicateDocumentError(name)
        with open(path, "r", encoding=encoding, errors="replace") as f:
            text = f.read()
        logger.debug("Read %s (%d chars)", path, len(text))
        return self.add(Document(name, text))

    def copy(self) -> "Corpus":
        return Corpus(self._documents.values())

    @property
    def names(self) -> List[str]:
        return list(self._documents)

    @property
    def documents(self) -> List[Document]:
        return list(self._documents.values())

    def __getitem__(self, name: str) -> Document:
        return self._documents[name]

    def __contains__(self, name) -> bool:
        return name in self._documents

    def __iter__(self) -> Iterator[Document]:
        return iter(list(self._documents.values()))

    def __len__(self) -> int:
        return len(self._documents)

    def __repr__(self):
        return f"Corpus({self.names!r})"
