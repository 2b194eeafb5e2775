import math
from typing import Dict, List, Tuple

from .matrix import TermMatrix
from ..errors import UnknownMetricError

METRIC_DOT = "dot"
METRIC_COSINE = "cosine"
METRICS = (METRIC_DOT, METRIC_COSINE)


def dot_product(vec1: Dict[str, float], vec2: Dict[str, float]) -> float:
    """Dot product of two sparse vectors; missing terms count as zero."""
    # Iterate over the smaller vector
    if len(vec2) < len(vec1):
        vec1, vec2 = vec2, vec1
    return sum(weight * vec2[word] for word, weight in vec1.items() if word in vec2)


def vector_magnitude(vec: Dict[str, float]) -> float:
    """Euclidean norm over every entry of a sparse vector."""
    return math.sqrt(sum(score ** 2 for score in vec.values()))


def compute_cosine_similarity(vec1: Dict[str, float], vec2: Dict[str, float]) -> float:
    """
    Compute cosine similarity between two vectors.

    Args:
        vec1: First vector as a dictionary {word: weight}
        vec2: Second vector as a dictionary {word: weight}

    Returns:
        Cosine similarity score, 0.0 if either vector has zero magnitude
    """
    magnitude1 = vector_magnitude(vec1)
    magnitude2 = vector_magnitude(vec2)

    # Avoid division by zero
    if magnitude1 == 0 or magnitude2 == 0:
        return 0.0

    # Weights are non-negative, so only rounding can leave [0, 1]
    return min(1.0, max(0.0, dot_product(vec1, vec2) / (magnitude1 * magnitude2)))


def score(query_vector: Dict[str, float], tf_matrix: TermMatrix, metric: str = METRIC_DOT) -> List[Tuple[str, float]]:
    """
    Rank every document of a TF matrix against a query vector.

    Args:
        query_vector: Sparse query TF vector {term: tf}
        tf_matrix: Document TF matrix
        metric: 'dot' or 'cosine'

    Returns:
        List of (document_name, score) tuples sorted by score descending;
        equal scores keep corpus order

    Raises:
        UnknownMetricError: If metric is not one of METRICS
    """
    if metric == METRIC_DOT:
        similarity = dot_product
    elif metric == METRIC_COSINE:
        similarity = compute_cosine_similarity
    else:
        raise UnknownMetricError(metric)

    similarities = [
        (name, float(similarity(query_vector, tf_matrix.column(name))))
        for name in tf_matrix.document_names
    ]

    # sort() is stable, also with reverse=True
    similarities.sort(key=lambda x: x[1], reverse=True)
    return similarities
