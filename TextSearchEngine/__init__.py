"""Text Search Engine - TF-IDF indexing and ranked retrieval over uploaded text documents."""

from TextSearchEngine.config import DEFAULT_CONFIG, load_config, with_language
from TextSearchEngine.corpus import Corpus
from TextSearchEngine.errors import (
    SearchEngineError,
    UnindexedSearchError,
    DuplicateDocumentError,
    IndexingCancelledError,
    UnknownMetricError,
    UnsupportedLanguageError,
    ConfigError,
)
from TextSearchEngine.preprocessing.document import Document
from TextSearchEngine.preprocessing.normalizer import TextNormalizer, create_pipeline
from TextSearchEngine.session import SearchSession, SessionState
from TextSearchEngine.tfidf_search.matrix import TermMatrix
from TextSearchEngine.tfidf_search.query import vectorize_query
from TextSearchEngine.tfidf_search.similarity import (
    METRICS,
    compute_cosine_similarity,
    dot_product,
    score,
)
from TextSearchEngine.tfidf_search.tfidf_search import IndexResult, build_index, build_index_result

__all__ = [
    "DEFAULT_CONFIG",
    "load_config",
    "with_language",
    "Corpus",
    "SearchEngineError",
    "UnindexedSearchError",
    "DuplicateDocumentError",
    "IndexingCancelledError",
    "UnknownMetricError",
    "UnsupportedLanguageError",
    "ConfigError",
    "Document",
    "TextNormalizer",
    "create_pipeline",
    "SearchSession",
    "SessionState",
    "TermMatrix",
    "vectorize_query",
    "METRICS",
    "compute_cosine_similarity",
    "dot_product",
    "score",
    "IndexResult",
    "build_index",
    "build_index_result",
]
