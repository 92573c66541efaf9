"""K-Nearest Neighbors (KNN) classification.

KNN is a simple, supervised machine learning algorithm. It assigns a query point
the majority label of the k training points closest to it under Euclidean
distance. The algorithm is non-parametric and lazy: it makes no assumptions
about the underlying data distribution and learns nothing ahead of time. All
the work happens at prediction time, as a linear scan over the training set.

Both ambiguities of the algorithm are resolved deterministically:

- Distance ties. Neighbors are ordered by ascending distance, then by ascending
  position in the training set. NaN distances rank after every finite one.
- Vote ties. Among labels sharing the highest count, the label whose nearest
  representative ranks first in that neighbor ordering wins.

References:
- Cover, T., & Hart, P. (1967). Nearest neighbor pattern classification. IEEE
  Transactions on Information Theory, 13(1), 21-27.
  Available at: https://ieeexplore.ieee.org/document/1053964

"""

import heapq
import math
import numbers
from collections import Counter
from collections.abc import Hashable, Iterable, Sequence

import jax.numpy as jnp
import numpy as np
from jaxtyping import Array, Float

from knn_scratch.errors import DimensionMismatchError, InvalidArgumentError
from knn_scratch.point import Candidate, Point
from knn_scratch.supervised.distance import float64, pairwise_distances
from knn_scratch.utils.logging import logger


def default_k(n: int) -> int:
    """The square root heuristic for k, rounded up.

    Args:
        n: The number of training points.

    Returns:
        ceil(sqrt(n)).
    """
    if n < 1:
        raise InvalidArgumentError(f"Cannot pick k for {n} training points")
    return math.ceil(math.sqrt(n))


def check_k(k: int):
    """Reject anything that is not a positive integer."""
    if isinstance(k, bool) or not isinstance(k, numbers.Integral):
        raise InvalidArgumentError(f"k must be an integer, got {type(k).__name__}")
    if k < 1:
        raise InvalidArgumentError(f"k must be a positive integer, got {k}")


def _training_matrix(
    training: Sequence[Point], dim: int
) -> Float[Array, "n_train dim"]:
    if len(training) == 0:
        raise InvalidArgumentError("The training set is empty")
    for index, point in enumerate(training):
        if point.dim != dim:
            raise DimensionMismatchError(expected=dim, actual=point.dim, index=index)
    return jnp.asarray([point.features for point in training], dtype=jnp.float64)


def _rank(candidate: Candidate) -> tuple[bool, float, int]:
    is_nan = math.isnan(candidate.distance)
    return (is_nan, 0.0 if is_nan else candidate.distance, candidate.index)


@float64
def nearest_neighbors(
    training: Sequence[Point], query: Point, k: int
) -> list[Candidate]:
    """Select the k training points closest to the query.

    If k exceeds the size of the training set every point is returned.

    Args:
        training: The labeled training points.
        query: The point to classify. Its label is ignored.
        k: The number of neighbors to select.

    Returns:
        The selected candidates, nearest first.

    Raises:
        InvalidArgumentError: If k is not a positive integer or the training set
            is empty.
        DimensionMismatchError: If a training point and the query have different
            numbers of features.
    """
    check_k(k)
    features = _training_matrix(training, query.dim)
    queries = jnp.asarray([query.features], dtype=jnp.float64)
    distances = np.asarray(pairwise_distances(features, queries)[:, 0]).tolist()

    candidates = (
        Candidate(distance=distance, label=point.label, index=index)
        for index, (distance, point) in enumerate(zip(distances, training, strict=True))
    )
    neighbors = heapq.nsmallest(k, candidates, key=_rank)
    logger.debug(
        f"Selected {len(neighbors)} of {len(training)} training points for k={k}"
    )
    return neighbors


def majority_vote(labels: Iterable[Hashable]) -> Hashable:
    """Return the most frequent label.

    Labels must be given nearest first: on a tie the label seen first wins.

    Args:
        labels: The neighbor labels, nearest first.

    Returns:
        The winning label.

    Raises:
        InvalidArgumentError: If there are no labels to vote on.
    """
    # Counter keeps first-insertion order, which is the tie-break order.
    counts = Counter(labels)
    if not counts:
        raise InvalidArgumentError("Cannot take a majority vote over zero neighbors")
    top = max(counts.values())
    winner = next(label for label, count in counts.items() if count == top)
    logger.debug(f"Vote tally {dict(counts)} -> {winner!r}")
    return winner


def classify(training: Sequence[Point], query: Point, k: int) -> Hashable:
    """Predict the label of a query point by majority vote of its k neighbors.

    Args:
        training: The labeled training points.
        query: The point to classify. Its label is ignored.
        k: The number of neighbors that vote.

    Returns:
        The predicted label, always one of the selected neighbors' labels.
    """
    neighbors = nearest_neighbors(training, query, k)
    return majority_vote(neighbor.label for neighbor in neighbors)


@float64
def knn(X_train: jnp.ndarray, y_train, X_test: jnp.ndarray, k: int = 3) -> np.ndarray:
    """K-Nearest Neighbors (KNN) over arrays of queries.

    Every query is classified independently against the same training data,
    with the same ordering and tie-break rules as `classify`. None of the
    inputs are modified.

    Args:
        X_train: An array representing the features of the training data.
        y_train: An array representing the labels of the training data.
        X_test: An array representing the features of the test data.
        k: An integer representing the number of neighbors to consider.

    Returns:
        An array of predicted labels for the test data.
    """
    check_k(k)
    X_train = jnp.asarray(X_train, dtype=jnp.float64)
    X_test = jnp.atleast_2d(jnp.asarray(X_test, dtype=jnp.float64))
    labels = np.asarray(y_train)

    if X_train.ndim != 2:
        raise InvalidArgumentError(
            f"X_train must be a 2-d (n_samples, n_features) array, got shape "
            f"{X_train.shape}"
        )
    if X_train.shape[0] == 0:
        raise InvalidArgumentError("The training set is empty")
    if labels.shape[0] != X_train.shape[0]:
        raise InvalidArgumentError(
            f"Got {X_train.shape[0]} training rows but {labels.shape[0]} labels"
        )

    # Compute the pairwise Euclidean distances between the training and test data
    distances = pairwise_distances(X_train, X_test)

    # A stable sort keeps equal distances in training order; NaN sorts last
    nearest_indices = np.asarray(jnp.argsort(distances, axis=0, stable=True)[:k])

    # Get the labels of the k nearest neighbors, one column per test point
    nearest_labels = labels[nearest_indices]

    y_pred = [
        majority_vote(nearest_labels[:, i].tolist()) for i in range(X_test.shape[0])
    ]
    return np.asarray(y_pred)
