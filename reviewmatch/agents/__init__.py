"""
Pipeline stages for reviewmatch.

Contains every stage that turns raw reviews into suggestions:
- Review Source (ingestion)
- Review Aggregator, Business Stats Builder, User Delta Builder (aggregation)
- Common Reviewer Finder (matching)
- Business Suggestion Engine (suggestion)
"""
