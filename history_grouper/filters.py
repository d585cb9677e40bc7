"""Field filter for history records: allow-list and deny-list over a mapping."""

from typing import Iterable, Mapping

EXCLUDED_FIELDS = ("project", "pastedContents")


def filter_fields(
    record: Mapping,
    exclude: Iterable[str] = EXCLUDED_FIELDS,
    include: Iterable[str] | None = None,
) -> dict:
    """Return a new dict with the selected keys of *record*, in their original order.

    Keys in *exclude* are always dropped. When *include* is given, only those
    keys are kept; a key named in both lists is dropped. Keys named in either
    list but missing from the record are ignored. *record* is never mutated.
    """
    denied = set(exclude)
    allowed = set(include) if include is not None else None

    cleaned = {}
    for key, value in record.items():
        if key in denied:
            continue
        if allowed is not None and key not in allowed:
            continue
        cleaned[key] = value
    return cleaned
