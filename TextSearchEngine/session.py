"""
In-memory search session.

The session owns the uploaded documents, the matrices of the last indexing
run and the last search results. It moves through the states

    EMPTY -> DOCUMENTS_LOADED -> INDEXED -> SEARCHED

and adding a document always returns it to DOCUMENTS_LOADED, discarding the
index. Indexing and searching are serialized by one lock, so a search issued
during a rebuild waits for the new matrices.
"""
import logging
import os
import threading
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from .corpus import Corpus
from .errors import SearchEngineError, UnindexedSearchError
from .preprocessing.document import Document
from .preprocessing.normalizer import TextNormalizer
from .tfidf_search.matrix import TermMatrix
from .tfidf_search.query import vectorize_query
from .tfidf_search.similarity import METRIC_DOT, score
from .tfidf_search.tfidf_search import IndexResult, build_index_result

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = (".txt",)


class SessionState(Enum):
    EMPTY = "empty"
    DOCUMENTS_LOADED = "documents_loaded"
    INDEXED = "indexed"
    SEARCHED = "searched"


def collect_files(paths: Iterable[str], extensions=DEFAULT_EXTENSIONS) -> List[str]:
    """
    Expand directories into the files they contain.

    Files named explicitly are kept whatever their extension; files found
    inside directories are filtered by extension and sorted by path.
    """
    extensions = tuple(ext.lower() for ext in extensions or ())
    files = []
    for path in paths:
        if os.path.isdir(path):
            found = []
            for root, dirs, names in os.walk(path):
                # Skip hidden directories
                dirs[:] = [d for d in dirs if not d.startswith(".")]
                for name in names:
                    if not extensions or os.path.splitext(name)[1].lower() in extensions:
                        found.append(os.path.join(root, name))
            files.extend(sorted(found))
        else:
            files.append(path)
    return files


class SearchSession:
    """Single-owner model of uploaded documents, index and results."""

    def __init__(self, normalizer=None, config: Optional[dict] = None):
        """
        Args:
            normalizer: Object with ``normalize(text) -> list[str]``; built from
                config when omitted
            config: Preprocessing configuration (see config.DEFAULT_CONFIG)
        """
        self.normalizer = normalizer or TextNormalizer.from_config(config)
        self._corpus = Corpus()
        self._index: Optional[IndexResult] = None
        self._state = SessionState.EMPTY
        self._last_results: List[Tuple[str, float]] = []
        self._last_query: Optional[str] = None
        self._last_metric: Optional[str] = None
        self._last_query_vector: Dict[str, float] = {}
        self._lock = threading.RLock()
        self._indexing = False

    # Documents

    def add_document(self, name: str, text: str) -> Document:
        """
        Upload one document.

        Raises:
            DuplicateDocumentError: If the name is already used
        """
        with self._lock:
            document = self._corpus.add_text(name, text)
            self._invalidate()
            logger.info("Added document '%s' (%d chars)", name, len(document.content))
            return document

    def add_documents(self, texts: Mapping[str, str]) -> List[Document]:
        """Upload several documents from an ordered {name: text} mapping."""
        return [self.add_document(name, text) for name, text in texts.items()]

    def load_files(self, paths: Iterable[str], extensions=DEFAULT_EXTENSIONS,
                   encoding: str = "utf-8") -> Tuple[List[Document], List[Tuple[str, Exception]]]:
        """
        Upload text files, named after their base name.

        Args:
            paths: Files or directories
            extensions: Extensions accepted inside directories
            encoding: File encoding

        Returns:
            (added documents, [(path, error), ...] for files that were skipped)
        """
        added, failed = [], []
        for path in collect_files(paths, extensions):
            try:
                with self._lock:
                    document = self._corpus.add_file(path, encoding=encoding)
                    self._invalidate()
            except (SearchEngineError, OSError) as e:
                logger.warning("Skipping %s: %s", path, e)
                failed.append((path, e))
                continue
            logger.info("Loaded %s", path)
            added.append(document)
        return added, failed

    def _invalidate(self):
        # A changed corpus makes the previous index unsearchable
        if self._index is not None:
            logger.info("Corpus changed, index discarded until re-indexing")
        self._index = None
        self._last_results = []
        self._last_query = None
        self._last_metric = None
        self._last_query_vector = {}
        self._state = SessionState.DOCUMENTS_LOADED

    # Indexing

    def index(self, progress=None, workers: Optional[int] = None, cancel_event=None) -> IndexResult:
        """
        (Re)build the TF and TF-IDF matrices from the whole corpus.

        With no documents this is a no-op that returns an empty result and
        leaves the session EMPTY. A cancelled build publishes nothing.

        Args:
            progress: Optional callback ``progress(percent, stage_description)``
            workers: Threads for per-document tokenization
            cancel_event: Optional threading.Event to abort the build

        Returns:
            The published IndexResult

        Raises:
            IndexingCancelledError: If cancel_event was set
        """
        with self._lock:
            if not len(self._corpus):
                logger.warning("No documents to index")
                return build_index_result(self._corpus, self.normalizer, progress=progress)

            self._indexing = True
            try:
                result = build_index_result(self._corpus.copy(), self.normalizer, progress=progress,
                                            workers=workers, cancel_event=cancel_event)
            finally:
                self._indexing = False

            self._index = result
            self._last_results = []
            self._last_query = None
            self._last_metric = None
            self._last_query_vector = {}
            self._state = SessionState.INDEXED
            return result

    # Searching

    def search(self, query: str, metric: str = METRIC_DOT) -> List[Tuple[str, float]]:
        """
        Rank every indexed document against a free-text query.

        Args:
            query: Query string; an empty or all-stop-word query scores 0 everywhere
            metric: 'dot' or 'cosine'

        Returns:
            List of (document_name, score) tuples, best first

        Raises:
            UnindexedSearchError: If the current corpus has not been indexed
            UnknownMetricError: If metric is not supported
        """
        with self._lock:
            if self._state not in (SessionState.INDEXED, SessionState.SEARCHED) or self._index is None:
                raise UnindexedSearchError("Index the current documents before searching")

            query_vector = vectorize_query(query, self.normalizer)
            if not query_vector:
                logger.info("Query '%s' has no indexable terms", query)

            results = score(query_vector, self._index.tf, metric)

            self._last_query = query
            self._last_metric = metric
            self._last_query_vector = query_vector
            self._last_results = results
            self._state = SessionState.SEARCHED
            logger.debug("Searched '%s' with %s metric: %d results", query, metric, len(results))
            return list(results)

    # State

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_indexing(self) -> bool:
        return self._indexing

    @property
    def can_index(self) -> bool:
        return len(self._corpus) > 0

    @property
    def can_search(self) -> bool:
        return self._state in (SessionState.INDEXED, SessionState.SEARCHED)

    @property
    def corpus(self) -> Corpus:
        """Snapshot of the uploaded documents."""
        with self._lock:
            return self._corpus.copy()

    @property
    def index_result(self) -> Optional[IndexResult]:
        return self._index

    @property
    def tf_matrix(self) -> Optional[TermMatrix]:
        return self._index.tf if self._index else None

    @property
    def tfidf_matrix(self) -> Optional[TermMatrix]:
        return self._index.tfidf if self._index else None

    @property
    def last_results(self) -> List[Tuple[str, float]]:
        return list(self._last_results)

    @property
    def last_query(self) -> Optional[str]:
        return self._last_query

    @property
    def last_metric(self) -> Optional[str]:
        return self._last_metric

    @property
    def last_query_vector(self) -> Dict[str, float]:
        return dict(self._last_query_vector)
