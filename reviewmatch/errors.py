"""
Exception hierarchy for reviewmatch.

Input problems and pipeline bugs are kept apart so the CLI can report
them differently.
"""


class ReviewmatchError(Exception):
    """Base class for all reviewmatch errors."""


class ReviewValidationError(ReviewmatchError, ValueError):
    """
    A source record is malformed or is not a review.

    Fatal for the run: the corpus is never partially aggregated.
    """

    def __init__(self, message: str, source: str = None, line_number: int = None):
        self.source = source
        self.line_number = line_number
        if source is not None and line_number is not None:
            message = f"{source}:{line_number}: {message}"
        super().__init__(message)


class PipelineInvariantError(ReviewmatchError, AssertionError):
    """An internal invariant between pipeline stages does not hold."""
