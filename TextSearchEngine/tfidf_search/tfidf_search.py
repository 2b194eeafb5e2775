import logging
import math
import time
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, List, Optional, Tuple

from .matrix import TermMatrix
from ..corpus import Corpus
from ..errors import IndexingCancelledError

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, str], None]

# Percentages reported to the progress callback when each stage starts
STAGE_TOKENIZE = (20, "Tokenizing documents")
STAGE_VOCABULARY = (40, "Building vocabulary")
STAGE_COUNTS = (60, "Counting terms")
STAGE_NORMALIZE = (70, "Normalizing term frequencies")
STAGE_IDF = (90, "Weighting by inverse document frequency")
STAGE_DONE = (100, "Done")


def compute_tf(word_freq: Dict[str, int]) -> Dict[str, float]:
    """
    Compute max-normalized term frequency (TF) for each word.
    TF(t,d) = f(t,d) / max_t' f(t',d)

    Args:
        word_freq: Dictionary mapping words to their raw counts

    Returns:
        Dictionary mapping words to TF scores in [0, 1]; empty when every
        count is zero
    """
    max_freq = max(word_freq.values(), default=0)
    if max_freq <= 0:
        return {}
    return {word: freq / max_freq for word, freq in word_freq.items() if freq > 0}


def compute_idf(document_count: int, document_frequency: int) -> Optional[float]:
    """
    Inverse document frequency, floored at zero.
    IDF(t) = max(0, log2(N / DF(t)))

    Returns:
        The weight, or None when the term occurs in no document
    """
    if document_frequency <= 0 or document_count <= 0:
        return None
    # DF <= N, so log2 is never negative here
    return max(0.0, math.log2(document_count / document_frequency))


def tokenize_corpus(corpus: Corpus, normalizer, workers: Optional[int] = None) -> List[List[str]]:
    """
    Normalize every document independently.

    Args:
        corpus: Documents to tokenize
        normalizer: Object with a ``normalize(text) -> list[str]`` method
        workers: Thread count; documents are processed in parallel when > 1

    Returns:
        One term list per document, in corpus order
    """
    documents = list(corpus)
    if workers and workers > 1 and len(documents) > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            # map() keeps input order
            return list(executor.map(lambda document: document.get_preprocessed_terms(normalizer), documents))
    return [document.get_preprocessed_terms(normalizer) for document in documents]


class IndexResult:
    """Everything produced by one indexing run over a corpus snapshot."""

    def __init__(self, document_names: List[str], vocabulary: List[str], counts: TermMatrix,
                 tf: TermMatrix, tfidf: TermMatrix, idf: Dict[str, float], build_time: float = 0.0):
        self.document_names = document_names
        self.vocabulary = vocabulary
        self.counts = counts
        self.tf = tf
        self.tfidf = tfidf
        self.idf = idf
        self.build_time = build_time

    @property
    def document_count(self) -> int:
        return len(self.document_names)

    @property
    def is_empty(self) -> bool:
        return not self.document_names

    def to_dict(self) -> dict:
        return {
            "documents": list(self.document_names),
            "vocabulary": list(self.vocabulary),
            "idf": dict(self.idf),
            "tf": self.tf.to_dict(),
            "tfidf": self.tfidf.to_dict(),
        }

    def __repr__(self):
        return f"IndexResult({len(self.vocabulary)} terms, {len(self.document_names)} documents)"


def build_index_result(corpus: Corpus, normalizer, progress: Optional[ProgressCallback] = None,
                       workers: Optional[int] = None, cancel_event=None) -> IndexResult:
    """
    Build raw count, TF and TF-IDF matrices for a corpus.

    Args:
        corpus: Documents to index; its order defines the matrix columns
        normalizer: Object with a ``normalize(text) -> list[str]`` method
        progress: Optional callback ``progress(percent, stage_description)``
        workers: Threads used for per-document tokenization
        cancel_event: Optional threading.Event checked between stages

    Returns:
        IndexResult with matrices sharing one sorted vocabulary

    Raises:
        IndexingCancelledError: If cancel_event is set during the build
    """
    def stage(step):
        if cancel_event is not None and cancel_event.is_set():
            raise IndexingCancelledError("Index build cancelled during: " + step[1].lower())
        if progress is not None:
            progress(*step)

    start_time = time.time()
    document_names = corpus.names

    stage(STAGE_TOKENIZE)
    token_lists = tokenize_corpus(corpus, normalizer, workers=workers)

    stage(STAGE_VOCABULARY)
    word_freqs = [Counter(tokens) for tokens in token_lists]
    vocabulary = sorted(set().union(*word_freqs))

    stage(STAGE_COUNTS)
    count_rows = [[word_freq.get(term, 0) for word_freq in word_freqs] for term in vocabulary]

    stage(STAGE_NORMALIZE)
    tf_columns = [compute_tf(word_freq) for word_freq in word_freqs]
    tf_rows = [[column.get(term, 0.0) for column in tf_columns] for term in vocabulary]

    stage(STAGE_IDF)
    idf_weights = {}
    tfidf_rows = []
    for term, row in zip(vocabulary, tf_rows):
        document_frequency = sum(1 for value in row if value > 0)
        idf = compute_idf(len(document_names), document_frequency)
        if idf is None:
            tfidf_rows.append([0.0] * len(row))
            continue
        idf_weights[term] = idf
        tfidf_rows.append([value * idf for value in row])

    result = IndexResult(
        document_names=document_names,
        vocabulary=vocabulary,
        counts=TermMatrix(vocabulary, document_names, count_rows),
        tf=TermMatrix(vocabulary, document_names, tf_rows),
        tfidf=TermMatrix(vocabulary, document_names, tfidf_rows),
        idf=idf_weights,
        build_time=time.time() - start_time,
    )

    stage(STAGE_DONE)
    logger.info("Indexed %d documents (%d terms) in %.3f seconds",
                len(document_names), len(vocabulary), result.build_time)
    return result


def build_index(corpus: Corpus, normalizer, **kwargs) -> Tuple[TermMatrix, TermMatrix]:
    """
    Build the (TF, TF-IDF) matrix pair for a corpus.

    Accepts the same keyword arguments as build_index_result. An empty corpus
    yields two empty matrices.
    """
    result = build_index_result(corpus, normalizer, **kwargs)
    return result.tf, result.tfidf
