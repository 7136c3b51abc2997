"""
Common Reviewer Finder.

Scores every user who shares at least one reviewed business with the
target user.
"""

import logging
from typing import Dict, Mapping

from reviewmatch.errors import PipelineInvariantError
from reviewmatch.models.review import AggregatedReview, ReviewKey
from reviewmatch.models.suggestion import CommonReviewer

logger = logging.getLogger(__name__)


class CommonReviewerFinder:
    """
    Finds users whose reviews overlap the target user's.

    The result is scoped to one target and rebuilt for every query.
    Users with no shared business are absent, which means "no signal"
    rather than "neutral signal".
    """

    def find(
        self,
        user_id: str,
        reviews: Mapping[ReviewKey, AggregatedReview]
    ) -> Dict[str, CommonReviewer]:
        """
        Compute a CommonReviewer entry for every overlapping user.

        Args:
            user_id: Target user
            reviews: Aggregated review table

        Returns:
            other user_id -> CommonReviewer (never contains user_id itself)
        """
        target_stars = self._reviewed_businesses(user_id, reviews)
        if not target_stars:
            logger.info(f"User {user_id} has no reviews, no common reviewers")
            return {}

        common_reviewers: Dict[str, CommonReviewer] = {}
        for key, review in reviews.items():
            if key.user_id == user_id:
                continue
            stars = target_stars.get(key.business_id)
            if stars is None:
                continue

            reviewer = common_reviewers.get(key.user_id)
            if reviewer is None:
                reviewer = common_reviewers[key.user_id] = CommonReviewer()
            reviewer.total_error += abs(stars - review.average_stars)
            reviewer.reviews_in_common += 1

        logger.info(
            f"Found {len(common_reviewers)} common reviewers for {user_id} "
            f"across {len(target_stars)} businesses"
        )
        return common_reviewers

    @staticmethod
    def _reviewed_businesses(
        user_id: str,
        reviews: Mapping[ReviewKey, AggregatedReview]
    ) -> Dict[str, float]:
        """Map business_id -> the target's stars for each business they reviewed."""
        reviewed: Dict[str, float] = {}
        for key, review in reviews.items():
            if key.user_id != user_id:
                continue
            # The aggregator already merged repeated reviews
            if key.business_id in reviewed:
                raise PipelineInvariantError(
                    f"Duplicate review of {key.business_id} by {user_id}"
                )
            reviewed[key.business_id] = review.average_stars
        return reviewed
