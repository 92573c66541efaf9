"""K-nearest neighbors classification from scratch."""

from knn_scratch.errors import (
    DimensionMismatchError as DimensionMismatchError,
)
from knn_scratch.errors import InvalidArgumentError as InvalidArgumentError
from knn_scratch.errors import KNNError as KNNError
from knn_scratch.errors import MalformedInputError as MalformedInputError
from knn_scratch.point import Point as Point
from knn_scratch.supervised.distance import euclidean_distance as euclidean_distance
from knn_scratch.supervised.k_nearest_neighbors import classify as classify
from knn_scratch.supervised.k_nearest_neighbors import knn as knn

__version__ = "0.1.0"
