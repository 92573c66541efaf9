"""Configuration for a classification run."""

from dataclasses import dataclass, field

from knn_scratch.supervised.k_nearest_neighbors import check_k, default_k


@dataclass(frozen=True)
class ClassifierConfig:
    """Configuration for classifying one query against a CSV training set.

    When `k` is None it is derived from the training set size with `default_k`.
    """

    data_path: str
    query: tuple[float, ...]
    k: int | None = None
    has_header: bool = True
    delimiter: str = field(default=",")

    def resolve_k(self, n: int) -> int:
        """The number of voting neighbors for a training set of n points."""
        if self.k is None:
            return default_k(n)
        check_k(self.k)
        return self.k
