"""
reviewmatch - common reviewer matching over a static review corpus.

Finds users whose rating history overlaps a target user's and turns them
into friend suggestions and business suggestions.
"""

__version__ = "1.0.0"
