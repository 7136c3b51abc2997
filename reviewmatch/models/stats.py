"""
Statistical baselines derived from the review table.
"""

from dataclasses import dataclass


@dataclass
class BusinessStats:
    """Average rating of a business across its distinct reviewers."""
    average_stars: float = 0.0
    count: int = 0


@dataclass
class UserDelta:
    """
    How far a user's ratings sit from business averages, on average.
    Positive means the user rates above consensus.
    """
    average_delta: float = 0.0
    count: int = 0
