"""
Review data models.

Represents raw review records from the source and the canonical,
deduplicated review table built from them.
"""

import math
from dataclasses import dataclass
from numbers import Real

from reviewmatch.errors import ReviewValidationError


@dataclass
class ReviewRecord:
    """
    One raw review from the corpus.
    Only the fields needed for matching are kept; review text is discarded.
    """
    business_id: str
    user_id: str
    stars: float  # Usually 1-5, not range-checked

    def __post_init__(self):
        for name in ("business_id", "user_id"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value:
                raise ReviewValidationError(
                    f"Invalid {name}: {value!r}. Must be a non-empty string"
                )

        # bool is a subclass of int, but never a rating
        if isinstance(self.stars, bool) or not isinstance(self.stars, Real):
            raise ReviewValidationError(
                f"Invalid stars: {self.stars!r}. Must be a number"
            )
        try:
            stars = float(self.stars)
        except OverflowError:
            stars = math.inf
        if not math.isfinite(stars):
            raise ReviewValidationError(
                f"Invalid stars: {self.stars!r}. Must be a finite number"
            )
        self.stars = stars


@dataclass(frozen=True, order=True)
class ReviewKey:
    """
    Unique key of the review table.
    Ordered by business_id, then user_id (for deterministic iteration only).
    """
    business_id: str
    user_id: str


@dataclass
class AggregatedReview:
    """
    All reviews one user wrote for one business, merged.

    While the aggregator is running, average_stars holds the running sum;
    it is only an average once the aggregator has finalized the table.
    """
    average_stars: float = 0.0
    count: int = 0
