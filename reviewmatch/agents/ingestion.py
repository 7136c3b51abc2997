"""
Review Source.

Streams review records out of a Yelp-style JSON-lines dump
(optionally gzip-compressed) and validates each one.
"""

import gzip
import json
import logging
import os
from typing import Dict, Iterable, Iterator

from reviewmatch.errors import ReviewValidationError
from reviewmatch.models.review import ReviewRecord

logger = logging.getLogger(__name__)

REVIEW_TYPE = "review"
REQUIRED_FIELDS = ("business_id", "user_id", "stars")


def record_from_dict(data: Dict) -> ReviewRecord:
    """
    Validate one decoded JSON object and convert it to a ReviewRecord.

    Raises:
        ReviewValidationError: If the object is not a review or a field
            is missing or mistyped
    """
    if not isinstance(data, dict):
        raise ReviewValidationError(
            f"Expected a JSON object, got {type(data).__name__}"
        )

    record_type = data.get("type")
    if record_type != REVIEW_TYPE:
        raise ReviewValidationError(
            f"Unexpected record type: {record_type!r}. Must be '{REVIEW_TYPE}'"
        )

    missing = [name for name in REQUIRED_FIELDS if name not in data]
    if missing:
        raise ReviewValidationError(f"Missing field(s): {', '.join(missing)}")

    return ReviewRecord(
        business_id=data["business_id"],
        user_id=data["user_id"],
        stars=data["stars"],
    )


def records_from_dicts(rows: Iterable[Dict]) -> Iterator[ReviewRecord]:
    """Validate an in-memory sequence of decoded review objects."""
    for row in rows:
        yield record_from_dict(row)


class ReviewSource:
    """
    Lazily reads ReviewRecords from a JSON-lines file.

    Files ending in .gz are decompressed on the fly. The whole corpus is
    never held in memory as raw records; downstream aggregation consumes
    the iterator directly.
    """

    def __init__(self, path: str):
        """
        Initialize review source.

        Args:
            path: Path to the review dump (.json or .json.gz)
        """
        self.path = str(path)
        logger.info(f"Initialized ReviewSource with path={self.path}")

    def _open(self):
        if self.path.endswith(".gz"):
            return gzip.open(self.path, "rb")
        return open(self.path, "rb")

    def iter_records(self) -> Iterator[ReviewRecord]:
        """
        Yield every review in the file, in file order.

        Raises:
            FileNotFoundError: If the file does not exist
            ReviewValidationError: On the first malformed line
        """
        if not os.path.exists(self.path):
            raise FileNotFoundError(f"Review file not found: {self.path}")

        count = 0
        with self._open() as f:
            for line_number, raw_line in enumerate(f, start=1):
                # Decoded per line so a bad byte is reported with its line
                try:
                    line = raw_line.decode("utf-8")
                except UnicodeDecodeError as e:
                    raise ReviewValidationError(
                        f"Invalid UTF-8 at byte {e.start}",
                        source=self.path,
                        line_number=line_number,
                    ) from e

                if not line.strip():
                    continue

                try:
                    data = json.loads(line)
                except json.JSONDecodeError as e:
                    raise ReviewValidationError(
                        f"Invalid JSON: {e.msg}",
                        source=self.path,
                        line_number=line_number,
                    ) from e

                try:
                    record = record_from_dict(data)
                except ReviewValidationError as e:
                    raise ReviewValidationError(
                        str(e), source=self.path, line_number=line_number
                    ) from e

                count += 1
                yield record

        logger.info(f"Read {count} reviews from {self.path}")

    def __iter__(self) -> Iterator[ReviewRecord]:
        return self.iter_records()
