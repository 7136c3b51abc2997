"""
Report writer.

Renders friend and business suggestions as CSV tables.
"""

import logging
import os
import sys
from typing import Mapping, Optional

import pandas as pd

from reviewmatch.agents.suggestion import visible
from reviewmatch.models.stats import BusinessStats, UserDelta
from reviewmatch.models.suggestion import (
    BusinessSuggestion,
    CommonReviewer,
    Reference,
)

logger = logging.getLogger(__name__)

# Shown when no reviewer pushed the business in the suggested direction
EMPTY_REFERENCE = Reference(reviewer_id="", reviewer_stars=0.0, contrib=0.0)

FRIEND_COLUMNS = [
    "user_id",
    "friend_id",
    "Match score",
    "Number of reviews",
    "Number of reviews in common",
    "Average absolute stars difference",
    "Average stars delta",
]

BUSINESS_COLUMNS = [
    "user_id",
    "business_id",
    "Suggestion relevance",
    "Number of references",
    "Total match scores",
    "Business number of reviews",
    "Business average stars",
    "Predicted business average stars",
    "reviewer_id",
    "Reviewer stars",
    "Reviewer relevance",
]


class ReportWriter:
    """
    Builds suggestion tables and writes them as CSV.
    """

    def __init__(self, float_format: str = "%f"):
        """
        Args:
            float_format: printf-style format for float columns
        """
        self.float_format = float_format

    def friend_table(
        self,
        user_id: str,
        common_reviewers: Mapping[str, CommonReviewer],
        users: Mapping[str, UserDelta]
    ) -> pd.DataFrame:
        """
        One row per common reviewer, best match first.

        Args:
            user_id: Target user
            common_reviewers: Output of CommonReviewerFinder
            users: Output of UserDeltaBuilder
        """
        rows = []
        for friend_id, reviewer in common_reviewers.items():
            # Every common reviewer has at least one review in the table
            delta = users[friend_id]
            rows.append({
                "user_id": user_id,
                "friend_id": friend_id,
                "Match score": reviewer.match_score(),
                "Number of reviews": delta.count,
                "Number of reviews in common": reviewer.reviews_in_common,
                "Average absolute stars difference": reviewer.average_error(),
                "Average stars delta": delta.average_delta,
            })

        df = pd.DataFrame(rows, columns=FRIEND_COLUMNS)
        if not df.empty:
            df = df.sort_values(
                ["Match score", "friend_id"], ascending=[False, True]
            ).reset_index(drop=True)
        return df

    def business_table(
        self,
        user_id: str,
        suggestions: Mapping[str, BusinessSuggestion],
        businesses: Mapping[str, BusinessStats]
    ) -> pd.DataFrame:
        """
        One row per business the target has not reviewed, most relevant first.

        Args:
            user_id: Target user
            suggestions: Output of BusinessSuggestionEngine
            businesses: Output of BusinessStatsBuilder
        """
        rows = []
        for business_id, suggestion in visible(suggestions):
            stats = businesses[business_id]
            ref = suggestion.best_reference() or EMPTY_REFERENCE
            rows.append({
                "user_id": user_id,
                "business_id": business_id,
                "Suggestion relevance": suggestion.total_delta,
                "Number of references": suggestion.num_references,
                "Total match scores": suggestion.total_match_scores,
                "Business number of reviews": stats.count,
                "Business average stars": stats.average_stars,
                "Predicted business average stars":
                    suggestion.predicted_stars(stats.average_stars),
                "reviewer_id": ref.reviewer_id,
                # One decimal, like the star ratings in the source data
                "Reviewer stars": f"{ref.reviewer_stars:.1f}",
                "Reviewer relevance": ref.contrib,
            })

        df = pd.DataFrame(rows, columns=BUSINESS_COLUMNS)
        if not df.empty:
            df = df.sort_values(
                ["Suggestion relevance", "business_id"], ascending=[False, True]
            ).reset_index(drop=True)
        return df

    def write(self, df: pd.DataFrame, output_path: Optional[str] = None) -> None:
        """
        Write a table as CSV to output_path, or to stdout when not given.
        """
        if output_path is None:
            df.to_csv(sys.stdout, index=False, float_format=self.float_format)
            return

        output_dir = os.path.dirname(output_path)
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)
        df.to_csv(output_path, index=False, float_format=self.float_format)
        logger.info(f"Report saved to {output_path} ({len(df)} rows)")
