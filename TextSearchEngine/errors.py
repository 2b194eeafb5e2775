"""
Exceptions raised by the TextSearchEngine core.

Every error is recoverable: callers re-supply documents, re-index or re-query.
"""


class SearchEngineError(Exception):
    """Base class for all TextSearchEngine errors."""


class UnindexedSearchError(SearchEngineError):
    """Search attempted before indexing, or after the corpus changed without re-indexing."""


class DuplicateDocumentError(SearchEngineError):
    """A document with the same name is already part of the corpus."""

    def __init__(self, name: str):
        super().__init__(f"Document '{name}' is already in the corpus")
        self.name = name


class IndexingCancelledError(SearchEngineError):
    """An index build was cancelled before its matrices were published."""


class UnknownMetricError(SearchEngineError, ValueError):
    """Similarity metric other than 'dot' or 'cosine'."""

    def __init__(self, metric):
        super().__init__(f"Unknown similarity metric: {metric!r} (expected 'dot' or 'cosine')")
        self.metric = metric


class UnsupportedLanguageError(SearchEngineError, ValueError):
    """No stemmer or stop-word list available for the configured language."""

    def __init__(self, language, supported=()):
        message = f"Unsupported language: {language!r}"
        if supported:
            message += f" (supported: {', '.join(sorted(supported))})"
        super().__init__(message)
        self.language = language


class ConfigError(SearchEngineError):
    """Configuration file could not be read or parsed."""
