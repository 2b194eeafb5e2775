from collections import Counter
from typing import Dict

from .tfidf_search import compute_tf


def vectorize_query(query: str, normalizer) -> Dict[str, float]:
    """
    Turn a free-text query into a sparse TF vector.

    The query goes through the same normalization as the documents and its
    counts are divided by the largest in-query count, like a document column.

    Args:
        query: Query string
        normalizer: Object with a ``normalize(text) -> list[str]`` method

    Returns:
        Dictionary {term: tf}; empty for an empty or all-stop-word query
    """
    return compute_tf(Counter(normalizer.normalize(query)))
