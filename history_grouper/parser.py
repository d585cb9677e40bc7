"""JSONL record parser: one line in, one decoded object out."""

import json
import math

PREVIEW_LENGTH = 50


class RecordParseError(ValueError):
    """A line that is not a JSON object."""

    def __init__(self, line: str, reason: str):
        super().__init__(reason)
        self.line = line
        self.reason = reason


def is_blank(line: str) -> bool:
    return not line.strip()


def preview(line: str, length: int = PREVIEW_LENGTH) -> str:
    """Truncated form of *line* used in diagnostics."""
    return f"{line[:length]}..."


def _reject_constant(name: str):
    raise ValueError(f"non-standard JSON constant {name}")


def _parse_float(text: str) -> float:
    number = float(text)
    if math.isinf(number):
        raise ValueError(f"number out of range: {text[:20]}")
    return number


def parse_record(line: str) -> dict:
    """Decode a single JSONL line into a record.

    Raises RecordParseError when the line is not valid JSON or does not hold
    a JSON object (arrays, scalars and null are not records). The literals
    NaN and Infinity, floats that overflow, integers past the interpreter's
    digit limit and nesting too deep to decode are rejected the same way.
    """
    stripped = line.strip()
    try:
        data = json.loads(
            stripped, parse_constant=_reject_constant, parse_float=_parse_float
        )
    except (ValueError, RecursionError) as e:
        raise RecordParseError(stripped, str(e)) from e

    if not isinstance(data, dict):
        raise RecordParseError(
            stripped, f"expected a JSON object, got {type(data).__name__}"
        )
    return data
