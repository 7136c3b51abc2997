"""
Data models for reviewmatch.

- review: raw records and the aggregated review table
- stats: per-business and per-user baselines
- suggestion: common reviewers and business suggestions
"""
