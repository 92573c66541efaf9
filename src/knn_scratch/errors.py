"""Errors raised by the classifier and its data loaders.

Every error is local to a single call and recoverable by the caller. Nothing is
retried and no partial result is ever returned.
"""


class KNNError(Exception):
    """Base class for all errors raised by knn_scratch."""


class InvalidArgumentError(KNNError, ValueError):
    """Raised when K is not a positive integer or the training set is empty."""


class DimensionMismatchError(KNNError, ValueError):
    """Raised when two feature vectors that are compared differ in length."""

    def __init__(self, expected: int, actual: int, index: int | None = None):
        """Create the error.

        Args:
            expected: The feature-vector length that was expected.
            actual: The feature-vector length that was found.
            index: Position of the offending training point, if known.
        """
        self.expected = expected
        self.actual = actual
        self.index = index
        where = f" at training index {index}" if index is not None else ""
        super().__init__(
            f"Feature dimension mismatch{where}: expected {expected}, got {actual}"
        )


class MalformedInputError(KNNError, ValueError):
    """Raised by loaders when a record cannot be parsed into a point."""
