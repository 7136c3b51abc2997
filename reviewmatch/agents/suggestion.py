"""
Business Suggestion Engine.

Folds the opinions of well-matched common reviewers into per-business
suggestions for the target user.
"""

import logging
from typing import Dict, Iterator, Mapping, Tuple

from reviewmatch.errors import PipelineInvariantError
from reviewmatch.models.review import AggregatedReview, ReviewKey
from reviewmatch.models.stats import BusinessStats
from reviewmatch.models.suggestion import BusinessSuggestion, CommonReviewer

logger = logging.getLogger(__name__)


class BusinessSuggestionEngine:
    """
    Builds business suggestions from common reviewers.

    Each reviewer with a positive match score contributes
    (their stars - business average) * match score to every business they
    reviewed. Reviewers with a match score <= 0 carry no useful signal and
    are skipped. Businesses the target already reviewed are kept in the
    result but flagged with remove=True.
    """

    def suggest(
        self,
        user_id: str,
        common_reviewers: Mapping[str, CommonReviewer],
        businesses: Mapping[str, BusinessStats],
        reviews: Mapping[ReviewKey, AggregatedReview]
    ) -> Dict[str, BusinessSuggestion]:
        """
        Args:
            user_id: Target user
            common_reviewers: Output of CommonReviewerFinder for user_id
            businesses: Output of BusinessStatsBuilder
            reviews: Aggregated review table

        Returns:
            business_id -> BusinessSuggestion

        Raises:
            PipelineInvariantError: If a reviewed business has no stats
        """
        suggestions: Dict[str, BusinessSuggestion] = {}
        skipped_reviewers = set()

        for key, review in reviews.items():
            if key.user_id == user_id:
                self._get_or_create(suggestions, key.business_id).remove = True
                continue

            reviewer = common_reviewers.get(key.user_id)
            if reviewer is None:
                continue

            match_score = reviewer.match_score()
            if match_score <= 0.0:
                skipped_reviewers.add(key.user_id)
                continue

            stats = businesses.get(key.business_id)
            if stats is None:
                raise PipelineInvariantError(
                    f"No stats for business {key.business_id}"
                )

            reviewer_delta = review.average_stars - stats.average_stars
            self._get_or_create(suggestions, key.business_id).add_reference(
                reviewer_id=key.user_id,
                reviewer_stars=review.average_stars,
                contrib=reviewer_delta * match_score,
                match_score=match_score,
            )

        logger.info(
            f"Built {len(suggestions)} business suggestions for {user_id} "
            f"({len(skipped_reviewers)} poorly-matching reviewers skipped)"
        )
        return suggestions

    @staticmethod
    def _get_or_create(
        suggestions: Dict[str, BusinessSuggestion],
        business_id: str
    ) -> BusinessSuggestion:
        suggestion = suggestions.get(business_id)
        if suggestion is None:
            suggestion = suggestions[business_id] = BusinessSuggestion()
        return suggestion


def visible(
    suggestions: Mapping[str, BusinessSuggestion]
) -> Iterator[Tuple[str, BusinessSuggestion]]:
    """Yield suggestions for businesses the target has not reviewed yet."""
    for business_id, suggestion in suggestions.items():
        if not suggestion.remove:
            yield business_id, suggestion
