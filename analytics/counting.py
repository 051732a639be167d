"""
analytics/counting.py

Group-and-count primitives shared by every categorical view.

All counts preserve first-seen insertion order so that ties later resolve
deterministically without a secondary alphabetic sort.
"""

from __future__ import annotations

from typing import Callable, Iterable, Mapping, Sequence

from app.domain.failure_record import UNKNOWN_LABEL, FailureRecord

KeyFn = Callable[[FailureRecord], "str | None"]


def bucket(value: str | None) -> str:
    """
    Return the grouping label for a possibly-missing field value.
    """

    if value is None:
        return UNKNOWN_LABEL
    text = str(value).strip()
    return text or UNKNOWN_LABEL


def count_by(records: Iterable[FailureRecord], key: KeyFn) -> dict[str, int]:
    """
    Count *records* per ``bucket(key(record))`` in first-seen order.
    """

    counts: dict[str, int] = {}
    for record in records:
        label = bucket(key(record))
        counts[label] = counts.get(label, 0) + 1
    return counts


def cross_tabulate(
    records: Iterable[FailureRecord],
    row_key: KeyFn,
    col_key: KeyFn,
) -> dict[str, dict[str, int]]:
    """
    Count *records* per (row label, column label) pair.

    Rows and the columns within each row appear in first-seen order.
    """

    table: dict[str, dict[str, int]] = {}
    for record in records:
        row = table.setdefault(bucket(row_key(record)), {})
        col = bucket(col_key(record))
        row[col] = row.get(col, 0) + 1
    return table


def top_n(counts: Mapping[str, int], n: int) -> list[tuple[str, int]]:
    """
    Return at most *n* ``(label, count)`` pairs by descending count.

    ``sorted`` is stable, so equal counts keep the order of *counts*.
    """

    if n <= 0:
        return []
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return ranked[:n]


def ordered_levels(counts: Mapping[str, int], levels: Sequence[str]) -> list[tuple[str, int]]:
    """
    Return every level in *levels* order (zero when absent), followed by any
    other labels present in *counts* in first-seen order.
    """

    known = set(levels)
    ordered = [(level, counts.get(level, 0)) for level in levels]
    ordered.extend((label, count) for label, count in counts.items() if label not in known)
    return ordered

