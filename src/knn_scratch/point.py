"""Value types shared by the distance function and the classifier."""

from collections.abc import Hashable, Iterable
from dataclasses import dataclass

UNKNOWN_LABEL = "unknown"


@dataclass(frozen=True)
class Point:
    """A labeled observation in feature space.

    Query points built with `Point.query` carry a placeholder label that the
    classifier never reads.
    """

    features: tuple[float, ...]
    label: Hashable

    def __post_init__(self):
        """Coerce the features to an immutable tuple of floats."""
        object.__setattr__(self, "features", tuple(float(x) for x in self.features))

    @classmethod
    def query(cls, features: Iterable[float]) -> "Point":
        """Build an unlabeled query point."""
        return cls(tuple(features), UNKNOWN_LABEL)

    @property
    def dim(self) -> int:
        """The number of features."""
        return len(self.features)


@dataclass(frozen=True)
class Candidate:
    """A training point's distance to the query, kept only during one call."""

    distance: float
    label: Hashable
    index: int
