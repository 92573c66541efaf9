"""Load labeled points from delimited text files.

Each record holds two or more numeric feature columns followed by a single label
column, for example::

    x,y,label
    1.0,2.0,A
    8.0,8.0,C

Labels are kept as strings. Any record that does not fit this shape is rejected
with a `MalformedInputError` before a single point reaches the classifier.
"""

import os
from collections.abc import Sequence

import jax.numpy as jnp
import numpy as np
import pandas as pd
from jaxtyping import Array, Float

from knn_scratch.errors import MalformedInputError
from knn_scratch.point import Point
from knn_scratch.supervised.distance import float64
from knn_scratch.utils.logging import logger

MIN_FEATURES = 2


def load_points(
    path: str | os.PathLike, *, has_header: bool = True, delimiter: str = ","
) -> list[Point]:
    """Read a training set from a delimited file.

    Args:
        path: Path to the file.
        has_header: Whether the first line names the columns.
        delimiter: The field separator.

    Returns:
        The points in file order.

    Raises:
        MalformedInputError: If the file cannot be read or a record is malformed.
    """
    # The header is read as data so that every line, header included, must have
    # the same number of fields. Otherwise pandas would take a surplus leading
    # field on the data lines as an index column.
    try:
        frame = pd.read_csv(
            path,
            sep=delimiter,
            header=None,
            index_col=False,
            dtype=str,
            keep_default_na=False,
            skipinitialspace=True,
        )
    except UnicodeDecodeError as e:
        raise MalformedInputError(f"{path} is not valid UTF-8 text: {e}") from e
    except pd.errors.EmptyDataError as e:
        raise MalformedInputError(f"{path} is empty") from e
    except pd.errors.ParserError as e:
        raise MalformedInputError(f"Could not parse {path}: {e}") from e
    except OSError as e:
        raise MalformedInputError(f"Cannot read {path}: {e}") from e

    first_line = 1
    if has_header:
        frame = frame.iloc[1:]
        first_line = 2

    if frame.shape[1] < MIN_FEATURES + 1:
        raise MalformedInputError(
            f"{path}: expected at least {MIN_FEATURES} feature columns and a label, "
            f"got {frame.shape[1]} columns"
        )

    features = frame.iloc[:, :-1].apply(
        lambda column: pd.to_numeric(column.str.strip(), errors="coerce")
    )
    labels = frame.iloc[:, -1].str.strip()

    bad_rows = features.isna().any(axis=1) | (labels.fillna("") == "")
    if bad_rows.any():
        row = int(np.flatnonzero(bad_rows.to_numpy())[0])
        line = row + first_line
        raise MalformedInputError(
            f"{path}, line {line}: cannot parse record {frame.iloc[row].tolist()}"
        )

    points = [
        Point(tuple(values), label)
        for values, label in zip(
            features.to_numpy(dtype=float).tolist(), labels.tolist(), strict=True
        )
    ]
    logger.debug(f"Loaded {len(points)} points with {features.shape[1]} features")
    return points


@float64
def points_to_arrays(
    points: Sequence[Point],
) -> tuple[Float[Array, "n dim"], np.ndarray]:
    """Split points into a feature matrix and a label array."""
    features = jnp.asarray([point.features for point in points], dtype=jnp.float64)
    labels = np.asarray([point.label for point in points])
    return features, labels
