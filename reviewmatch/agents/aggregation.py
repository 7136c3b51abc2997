"""
Review Aggregator, Business Stats Builder and User Delta Builder.

Turns raw review records into the canonical review table and derives
per-business and per-user baselines from it. Every stage accumulates
sums first and divides once at the end.
"""

import logging
from typing import Dict, Iterable, Mapping

from reviewmatch.errors import PipelineInvariantError
from reviewmatch.models.review import AggregatedReview, ReviewKey, ReviewRecord
from reviewmatch.models.stats import BusinessStats, UserDelta

logger = logging.getLogger(__name__)


class ReviewAggregator:
    """
    Merges repeated reviews of the same business by the same user.
    """

    def aggregate(
        self,
        records: Iterable[ReviewRecord]
    ) -> Dict[ReviewKey, AggregatedReview]:
        """
        Build the review table: one AggregatedReview per (business, user).

        Args:
            records: Raw review records, in any order, possibly repeated

        Returns:
            Review table ordered by ReviewKey
        """
        table: Dict[ReviewKey, AggregatedReview] = {}
        total_records = 0

        for record in records:
            key = ReviewKey(record.business_id, record.user_id)
            review = table.get(key)
            if review is None:
                review = table[key] = AggregatedReview()
            # Temporarily a sum
            review.average_stars += record.stars
            review.count += 1
            total_records += 1

        for review in table.values():
            review.average_stars /= review.count

        logger.info(
            f"Aggregated {total_records} reviews into {len(table)} "
            f"business/user pairs"
        )

        return dict(sorted(table.items()))


class BusinessStatsBuilder:
    """
    Computes each business's average rating over its distinct reviewers.
    """

    def build(
        self,
        reviews: Mapping[ReviewKey, AggregatedReview]
    ) -> Dict[str, BusinessStats]:
        """
        Args:
            reviews: Aggregated review table

        Returns:
            business_id -> BusinessStats
        """
        businesses: Dict[str, BusinessStats] = {}

        for key, review in reviews.items():
            stats = businesses.get(key.business_id)
            if stats is None:
                stats = businesses[key.business_id] = BusinessStats()
            stats.average_stars += review.average_stars
            stats.count += 1

        for stats in businesses.values():
            stats.average_stars /= stats.count

        logger.info(f"Computed stats for {len(businesses)} businesses")
        return businesses


class UserDeltaBuilder:
    """
    Computes each user's average deviation from business averages.
    """

    def build(
        self,
        businesses: Mapping[str, BusinessStats],
        reviews: Mapping[ReviewKey, AggregatedReview]
    ) -> Dict[str, UserDelta]:
        """
        Args:
            businesses: Output of BusinessStatsBuilder for the same table
            reviews: Aggregated review table

        Returns:
            user_id -> UserDelta

        Raises:
            PipelineInvariantError: If a reviewed business has no stats
        """
        users: Dict[str, UserDelta] = {}

        for key, review in reviews.items():
            stats = businesses.get(key.business_id)
            if stats is None:
                raise PipelineInvariantError(
                    f"No stats for business {key.business_id}"
                )

            delta = users.get(key.user_id)
            if delta is None:
                delta = users[key.user_id] = UserDelta()
            delta.average_delta += review.average_stars - stats.average_stars
            delta.count += 1

        for delta in users.values():
            delta.average_delta /= delta.count

        logger.info(f"Computed rating deltas for {len(users)} users")
        return users
