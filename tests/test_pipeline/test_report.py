"""
Unit tests for the Report Writer.
"""

import os
import tempfile

import pytest
from reviewmatch.models.stats import BusinessStats, UserDelta
from reviewmatch.models.suggestion import BusinessSuggestion, CommonReviewer
from reviewmatch.utils.report import (
    BUSINESS_COLUMNS,
    FRIEND_COLUMNS,
    ReportWriter,
)


@pytest.fixture
def writer():
    return ReportWriter(float_format="%f")


@pytest.fixture
def suggestions():
    """One reviewed business, one boosted, one sunk."""
    reviewed = BusinessSuggestion(remove=True)
    reviewed.add_reference("U1", 5.0, contrib=2.0, match_score=1.0)

    boosted = BusinessSuggestion()
    boosted.add_reference("U3", 5.0, contrib=0.5, match_score=1.0)

    sunk = BusinessSuggestion()
    sunk.add_reference("U4", 4.0, contrib=0.25, match_score=0.5)
    sunk.add_reference("U5", 1.0, contrib=-1.5, match_score=1.0)

    return {"B1": reviewed, "B2": boosted, "B3": sunk}


@pytest.fixture
def businesses():
    return {
        "B1": BusinessStats(4.0, 3),
        "B2": BusinessStats(4.5, 2),
        "B3": BusinessStats(3.0, 4),
    }


def _read(writer, df):
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "out", "report.csv")
        writer.write(df, path)
        with open(path) as f:
            return f.read().splitlines()


def test_friend_table(writer):
    """Test friend rows, columns and ordering."""
    common = {
        "U2": CommonReviewer(total_error=2.0, reviews_in_common=1),
        "U3": CommonReviewer(total_error=1.0, reviews_in_common=2),
    }
    users = {
        "U2": UserDelta(-1.0, 1),
        "U3": UserDelta(0.5, 3),
    }

    df = writer.friend_table("U1", common, users)

    assert list(df.columns) == FRIEND_COLUMNS
    assert list(df["friend_id"]) == ["U3", "U2"]
    assert df.loc[0, "Match score"] == pytest.approx(1.0 / 3.0)
    assert df.loc[0, "Number of reviews"] == 3
    assert df.loc[0, "Average absolute stars difference"] == 0.5
    assert df.loc[1, "Average stars delta"] == -1.0


def test_business_table_skips_reviewed(writer, suggestions, businesses):
    """Test that businesses the user reviewed never appear."""
    df = writer.business_table("U1", suggestions, businesses)

    assert list(df.columns) == BUSINESS_COLUMNS
    assert "B1" not in set(df["business_id"])
    assert list(df["business_id"]) == ["B2", "B3"]


def test_business_table_reference_choice(writer, suggestions, businesses):
    """Test positive reference for boosted, negative for sunk businesses."""
    df = writer.business_table("U1", suggestions, businesses).set_index("business_id")

    assert df.loc["B2", "reviewer_id"] == "U3"
    assert df.loc["B2", "Predicted business average stars"] == pytest.approx(5.0)
    assert df.loc["B3", "reviewer_id"] == "U5"
    assert df.loc["B3", "Reviewer stars"] == "1.0"
    assert df.loc["B3", "Number of references"] == 2
    # 3.0 + (-1.25 / 1.5)
    assert df.loc["B3", "Predicted business average stars"] == pytest.approx(
        3.0 - 1.25 / 1.5
    )


def test_business_table_without_reference(writer):
    """Test that a suggestion with no evidence renders blank evidence."""
    neutral = BusinessSuggestion()
    neutral.add_reference("U3", 4.0, contrib=0.0, match_score=0.5)

    df = writer.business_table("U1", {"B1": neutral}, {"B1": BusinessStats(4.0, 2)})

    assert df.loc[0, "reviewer_id"] == ""
    assert df.loc[0, "Reviewer stars"] == "0.0"
    assert df.loc[0, "Reviewer relevance"] == 0.0


def test_write_csv(writer, suggestions, businesses):
    """Test CSV formatting of a business report."""
    df = writer.business_table("U1", suggestions, businesses)
    lines = _read(writer, df)

    assert lines[0] == ",".join(BUSINESS_COLUMNS)
    assert lines[1] == (
        "U1,B2,0.500000,1,1.000000,2,4.500000,5.000000,U3,5.0,0.500000"
    )
    assert len(lines) == 3


def test_write_empty_report(writer):
    """Test that an empty report still has a header."""
    df = writer.friend_table("U1", {}, {})
    lines = _read(writer, df)

    assert lines == [",".join(FRIEND_COLUMNS)]


def test_write_to_stdout(writer, capsys):
    """Test writing to stdout when no path is given."""
    df = writer.friend_table("U1", {}, {})
    writer.write(df)

    assert capsys.readouterr().out.startswith("user_id,friend_id,Match score")


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
