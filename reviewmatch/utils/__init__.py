"""
Utility modules for reviewmatch.

Cross-cutting concerns:
- Report: CSV rendering of suggestion tables
"""
