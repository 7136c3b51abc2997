"""
Unit tests for Common Reviewer Finder.
"""

import pytest
from reviewmatch.agents.aggregation import ReviewAggregator
from reviewmatch.agents.matching import CommonReviewerFinder
from reviewmatch.models.review import ReviewRecord


def _table(rows):
    return ReviewAggregator().aggregate(ReviewRecord(*row) for row in rows)


@pytest.fixture
def scenario_a():
    """Three users reviewed one business."""
    return _table([
        ("B1", "U1", 5),
        ("B1", "U2", 3),
        ("B1", "U3", 4),
    ])


def test_scenario_a(scenario_a):
    """Test errors and match scores for a single shared business."""
    common = CommonReviewerFinder().find("U1", scenario_a)

    assert set(common) == {"U2", "U3"}
    assert common["U2"].total_error == 2.0
    assert common["U2"].reviews_in_common == 1
    assert common["U2"].match_score() == pytest.approx(-0.25)
    assert common["U3"].total_error == 1.0
    assert common["U3"].match_score() == pytest.approx(0.0)


def test_target_never_matches_itself(scenario_a):
    """Test that the target is excluded from its own common reviewers."""
    for user_id in ("U1", "U2", "U3"):
        common = CommonReviewerFinder().find(user_id, scenario_a)
        assert user_id not in common
        assert len(common) == 2


def test_only_overlapping_users_appear():
    """Test that users without a shared business are absent."""
    reviews = _table([
        ("B1", "U1", 5),
        ("B1", "U2", 5),
        ("B2", "U2", 1),
        ("B2", "U3", 1),
        ("B3", "U4", 2),
    ])

    common = CommonReviewerFinder().find("U1", reviews)

    assert set(common) == {"U2"}
    # B2 is not shared with U1, so it adds no error
    assert common["U2"].total_error == 0.0
    assert common["U2"].reviews_in_common == 1


def test_error_accumulates_over_shared_businesses():
    """Test total_error and reviews_in_common over several businesses."""
    reviews = _table([
        ("B1", "U1", 5),
        ("B2", "U1", 2),
        ("B3", "U1", 4),
        ("B1", "U2", 4),
        ("B2", "U2", 4),
        ("B3", "U2", 4),
    ])

    common = CommonReviewerFinder().find("U1", reviews)

    assert common["U2"].total_error == 3.0
    assert common["U2"].reviews_in_common == 3
    assert common["U2"].average_error() == 1.0


def test_repeated_reviews_use_averaged_stars():
    """Test that merged reviews compare on their average."""
    reviews = _table([
        ("B1", "U1", 4),
        ("B1", "U2", 5),
        ("B1", "U2", 3),
    ])

    common = CommonReviewerFinder().find("U1", reviews)

    assert common["U2"].total_error == 0.0
    assert common["U2"].reviews_in_common == 1


def test_zero_review_target(scenario_a):
    """Test that an unknown target gives an empty result."""
    assert CommonReviewerFinder().find("nobody", scenario_a) == {}


def test_empty_table():
    """Test that an empty table gives an empty result."""
    assert CommonReviewerFinder().find("U1", {}) == {}


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
