"""Euclidean distance between feature vectors.

The distance between two points is

        d(a, b) = sqrt(sum_i (a_i - b_i) ** 2)

It is symmetric, non-negative and zero exactly when the vectors are equal. NaN
features propagate to a NaN distance. Vectors of different lengths are rejected
rather than compared over their common prefix.

Points hold Python floats, so distances are computed in 64-bit precision. The
differences are divided by their largest magnitude before squaring, which keeps
the result finite for every pair of finite inputs:

        d(a, b) = s * sqrt(sum_i ((a_i - b_i) / s) ** 2),  s = max_i |a_i - b_i|
"""

import jax
import jax.numpy as jnp
from jaxtyping import Array, Float

from knn_scratch.errors import DimensionMismatchError
from knn_scratch.point import Point

float64 = jax.enable_x64(True)


def euclidean_norm(diff: Float[Array, "... dim"]) -> Float[Array, "..."]:
    """Overflow-safe L2 norm over the last axis."""
    scale = jnp.max(jnp.abs(diff), axis=-1, keepdims=True, initial=0.0)
    safe_scale = jnp.where(scale > 0, scale, 1.0)
    norm = safe_scale * jnp.sqrt(
        jnp.sum((diff / safe_scale) ** 2, axis=-1, keepdims=True)
    )
    # An infinite difference makes the ratio NaN; the distance is infinite.
    norm = jnp.where(jnp.isinf(scale), jnp.inf, norm)
    return jnp.squeeze(norm, axis=-1)


@float64
def euclidean_distance(a: Point, b: Point) -> float:
    """Compute the Euclidean distance between two points.

    Args:
        a: The first point.
        b: The second point.

    Returns:
        The distance as a Python float.

    Raises:
        DimensionMismatchError: If the points have different numbers of features.
    """
    if a.dim != b.dim:
        raise DimensionMismatchError(expected=a.dim, actual=b.dim)
    x = jnp.asarray(a.features, dtype=jnp.float64)
    y = jnp.asarray(b.features, dtype=jnp.float64)
    return float(euclidean_norm(x - y))


@float64
def pairwise_distances(
    features: Float[Array, "n_train dim"], queries: Float[Array, "n_queries dim"]
) -> Float[Array, "n_train n_queries"]:
    """Compute the distances between every training row and every query row.

    Args:
        features: The training feature matrix.
        queries: The query feature matrix.

    Returns:
        A matrix whose entry (i, j) is the distance from training row i to
        query row j.

    Raises:
        DimensionMismatchError: If the feature widths differ.
    """
    features = jnp.asarray(features, dtype=jnp.float64)
    queries = jnp.asarray(queries, dtype=jnp.float64)
    if features.shape[-1] != queries.shape[-1]:
        raise DimensionMismatchError(
            expected=features.shape[-1], actual=queries.shape[-1]
        )
    return euclidean_norm(features[:, None, :] - queries[None, :, :])
