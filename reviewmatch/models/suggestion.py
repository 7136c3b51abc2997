"""
Suggestion data models.

Common reviewers (scored against one target user) and the per-business
suggestion aggregates built from them.
"""

from dataclasses import dataclass
from typing import Optional

# Every match score is computed as if the two users also shared this many
# extra reviews with this much total error. Penalizes matches backed by
# only a few shared businesses.
MATCH_SMOOTHING_REVIEWS = 2
MATCH_SMOOTHING_ERROR = 2.0


@dataclass
class CommonReviewer:
    """
    A user who reviewed at least one business the target user reviewed.
    """
    total_error: float = 0.0  # Sum of absolute star differences
    reviews_in_common: int = 0

    def match_score(self) -> float:
        """
        Smoothed inverse of the average absolute star difference, shifted
        so that a neutral match scores 0.0. Not clamped: strong matches with
        many shared reviews can exceed 1.0.
        """
        return (
            (self.reviews_in_common + MATCH_SMOOTHING_REVIEWS)
            / (self.total_error + MATCH_SMOOTHING_ERROR)
            - 1.0
        )

    def average_error(self) -> float:
        """Average absolute star difference over the shared businesses."""
        return self.total_error / self.reviews_in_common


@dataclass
class Reference:
    """One reviewer's evidence for or against a business."""
    reviewer_id: str
    reviewer_stars: float
    contrib: float


@dataclass
class BusinessSuggestion:
    """
    Accumulated evidence from common reviewers about one business.
    """
    total_delta: float = 0.0
    total_match_scores: float = 0.0
    num_references: int = 0
    remove: bool = False  # Target user already reviewed this business
    positive_ref: Optional[Reference] = None  # Strongest endorsement
    negative_ref: Optional[Reference] = None  # Strongest disapproval

    def add_reference(self, reviewer_id: str, reviewer_stars: float,
                      contrib: float, match_score: float) -> None:
        """Fold one reviewer's weighted contribution into the aggregate."""
        self.total_delta += contrib
        self.total_match_scores += match_score
        self.num_references += 1

        # Strict comparisons: on ties the first reviewer seen is kept
        best = self.positive_ref.contrib if self.positive_ref else 0.0
        if contrib > best:
            self.positive_ref = Reference(reviewer_id, reviewer_stars, contrib)

        worst = self.negative_ref.contrib if self.negative_ref else 0.0
        if contrib < worst:
            self.negative_ref = Reference(reviewer_id, reviewer_stars, contrib)

    def predicted_stars(self, business_average: float) -> float:
        """Business average shifted by the match-weighted mean delta."""
        return business_average + self.total_delta / self.total_match_scores

    def best_reference(self) -> Optional[Reference]:
        """
        Evidence that explains the suggestion: the strongest booster for an
        underrated business, the strongest detractor for an overrated one.
        """
        if self.total_delta >= 0:
            return self.positive_ref
        return self.negative_ref
