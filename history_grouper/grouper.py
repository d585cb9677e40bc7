"""HistoryGrouper: regroups history records by project and session."""

import json
import logging
import math
from typing import Iterable

from history_grouper.filters import EXCLUDED_FIELDS, filter_fields
from history_grouper.parser import (
    PREVIEW_LENGTH,
    RecordParseError,
    is_blank,
    parse_record,
    preview,
)

logger = logging.getLogger(__name__)

UNKNOWN_PROJECT = "unknown"
NO_SESSION = "no-session"

GroupedHistory = dict[str, dict[str, list[dict]]]


def bucket_key(value, fallback: str) -> str:
    """Bucket name for a project or session value; falsy values use *fallback*."""
    if not value:
        return fallback
    if isinstance(value, str):
        return value
    return json.dumps(value)


def _numeric_timestamp(value) -> float | None:
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            # ints past float range keep their sign
            number = math.inf if value > 0 else -math.inf
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number):
        return None
    return number


def timestamp_key(record: dict) -> tuple:
    """Sort key ordering records by ascending numeric timestamp.

    Numbers and numeric strings compare by value; integers too large for a
    float order as +inf or -inf by sign. Records whose timestamp is
    missing or not numeric sort after every numeric one and keep their input
    order among themselves.
    """
    number = _numeric_timestamp(record.get("timestamp"))
    if number is None:
        return (1, 0.0)
    return (0, number)


class HistoryGrouper:
    """Builds a GroupedHistory from raw JSONL lines."""

    def __init__(
        self,
        exclude_fields: Iterable[str] = EXCLUDED_FIELDS,
        preview_length: int = PREVIEW_LENGTH,
    ):
        self._exclude = tuple(exclude_fields)
        self._preview_length = preview_length
        self.parse_errors = 0

    def group(self, lines: Iterable[str]) -> GroupedHistory:
        """Parse each line and place its cleaned record in a project/session bucket.

        Blank lines are skipped silently. Lines that fail to parse are logged,
        counted in ``parse_errors`` and skipped.
        """
        self.parse_errors = 0
        grouped: GroupedHistory = {}

        for line in lines:
            if is_blank(line):
                continue
            try:
                record = parse_record(line)
            except RecordParseError as e:
                self.parse_errors += 1
                logger.warning(
                    "Error parsing line: %s (%s)",
                    preview(e.line, self._preview_length), e.reason,
                )
                continue

            project = bucket_key(record.get("project"), UNKNOWN_PROJECT)
            session_id = bucket_key(record.get("sessionId"), NO_SESSION)
            cleaned = filter_fields(record, exclude=self._exclude)

            grouped.setdefault(project, {}).setdefault(session_id, []).append(cleaned)

        return grouped

    def sort_sessions(self, grouped: GroupedHistory) -> GroupedHistory:
        """Sort every session's records by timestamp, in place."""
        non_numeric = 0
        for sessions in grouped.values():
            for records in sessions.values():
                records.sort(key=timestamp_key)
                non_numeric += sum(1 for r in records if timestamp_key(r)[0])

        if non_numeric:
            logger.debug("%d record(s) without a numeric timestamp sorted last", non_numeric)
        return grouped

    def group_and_sort(self, lines: Iterable[str]) -> GroupedHistory:
        return self.sort_sessions(self.group(lines))
