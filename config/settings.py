"""
Configuration settings for reviewmatch.

Centralized configuration for input locations, CLI actions and logging.
"""

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
DATA_ROOT = Path(os.getenv(
    "REVIEWMATCH_DATA_ROOT",
    str(PROJECT_ROOT.parent / "yelp_dataset_challenge_academic_dataset")
))

# Input corpus (Yelp academic dataset review dump, JSON lines)
REVIEWS_FILENAME = "yelp_academic_dataset_review.json.gz"
REVIEWS_PATH = DATA_ROOT / REVIEWS_FILENAME

# CLI actions
ACTION_SUGGEST_FRIENDS = "suggest_friends"
ACTION_SUGGEST_BUSINESSES = "suggest_businesses"
ACTIONS = (ACTION_SUGGEST_FRIENDS, ACTION_SUGGEST_BUSINESSES)

# Report
FLOAT_FORMAT = "%f"  # 6 decimals

# Logging
LOG_LEVEL = os.getenv("REVIEWMATCH_LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = "reviewmatch.log"


# Design Rationale and Trade-offs:
#
# 1. Match-score smoothing constants live in models/suggestion.py, not here.
#    - They are part of the scoring formula, not a deployment setting
#    - Trade-off: tuning them means a code change
#
# 2. Environment overrides cover only the data root and log level.
#    - The corpus location differs per machine; nothing else does
#    - Trade-off: the CLI flags in main.py take precedence over both
#
# 3. REVIEWS_PATH defaults to the gzip-compressed dump.
#    - The review source also reads uncompressed .json files
