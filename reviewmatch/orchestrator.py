"""
Pipeline Orchestrator.

Runs every stage once per invocation, from raw reviews to a report table.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping

import pandas as pd

from reviewmatch.agents.aggregation import (
    BusinessStatsBuilder,
    ReviewAggregator,
    UserDeltaBuilder,
)
from reviewmatch.agents.ingestion import ReviewSource
from reviewmatch.agents.matching import CommonReviewerFinder
from reviewmatch.agents.suggestion import BusinessSuggestionEngine
from reviewmatch.models.review import AggregatedReview, ReviewKey, ReviewRecord
from reviewmatch.models.stats import BusinessStats, UserDelta
from reviewmatch.utils.report import ReportWriter
import config.settings as settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineSnapshot:
    """
    Read-only tables shared by the per-user stages of one run.
    """
    reviews: Mapping[ReviewKey, AggregatedReview]
    businesses: Mapping[str, BusinessStats]
    users: Mapping[str, UserDelta]


class PipelineOrchestrator:
    """
    Orchestrates the matching pipeline.

    Coordinates:
    1. Aggregation → 2. Business Stats → 3. User Deltas
    → 4. Common Reviewers → 5. Business Suggestions → Report

    Nothing is cached between runs; every call to run() rereads the corpus.
    """

    def __init__(self, reviews_path: str, report_writer: ReportWriter = None):
        """
        Initialize pipeline orchestrator.

        Args:
            reviews_path: Path to the review dump (.json or .json.gz)
            report_writer: Table builder, defaults to a ReportWriter
        """
        self.source = ReviewSource(reviews_path)
        self.report_writer = report_writer or ReportWriter(
            float_format=settings.FLOAT_FORMAT
        )

        self.aggregator = ReviewAggregator()
        self.business_stats_builder = BusinessStatsBuilder()
        self.user_delta_builder = UserDeltaBuilder()
        self.common_reviewer_finder = CommonReviewerFinder()
        self.suggestion_engine = BusinessSuggestionEngine()

    def build_snapshot(self, records: Iterable[ReviewRecord]) -> PipelineSnapshot:
        """
        Run the user-independent stages over a stream of records.
        """
        reviews = self.aggregator.aggregate(records)
        businesses = self.business_stats_builder.build(reviews)
        users = self.user_delta_builder.build(businesses, reviews)

        return PipelineSnapshot(
            reviews=MappingProxyType(reviews),
            businesses=MappingProxyType(businesses),
            users=MappingProxyType(users),
        )

    def run(self, user_id: str, action: str) -> pd.DataFrame:
        """
        Compute the requested suggestions for one user.

        Args:
            user_id: Target user
            action: "suggest_friends" or "suggest_businesses"

        Returns:
            Report table, possibly empty

        Raises:
            ValueError: If action is unknown (checked before any input is read)
        """
        self._check_action(action)

        logger.info(f"Starting pipeline for user {user_id}: {action}")
        snapshot = self.build_snapshot(self.source.iter_records())
        return self.suggest(snapshot, user_id, action)

    def suggest(
        self,
        snapshot: PipelineSnapshot,
        user_id: str,
        action: str
    ) -> pd.DataFrame:
        """Run the per-user stages against an existing snapshot."""
        self._check_action(action)

        common_reviewers = self.common_reviewer_finder.find(
            user_id, snapshot.reviews
        )

        if action == settings.ACTION_SUGGEST_FRIENDS:
            return self.report_writer.friend_table(
                user_id, common_reviewers, snapshot.users
            )

        suggestions = self.suggestion_engine.suggest(
            user_id,
            MappingProxyType(common_reviewers),
            snapshot.businesses,
            snapshot.reviews,
        )
        return self.report_writer.business_table(
            user_id, suggestions, snapshot.businesses
        )

    @staticmethod
    def _check_action(action: str) -> None:
        if action not in settings.ACTIONS:
            raise ValueError(
                f"Unknown action: {action}. "
                f"Must be one of {', '.join(settings.ACTIONS)}"
            )
