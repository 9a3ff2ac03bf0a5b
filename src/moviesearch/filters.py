"""Filtering and sorting over resolved detail records."""

from __future__ import annotations

from typing import Iterable, Optional

from moviesearch.models import DetailRecord, FilterCriteria, SortKey


def matches(record: DetailRecord, criteria: FilterCriteria) -> bool:
    """True when the record passes every set criterion."""
    if criteria.title and criteria.title.lower() not in record.title.lower():
        return False
    # Substring match on the raw string, so "Sci" matches "Sci-Fi"
    if criteria.genre and criteria.genre not in (record.genre_raw or ""):
        return False
    # A missing rating parses to 0 and fails any positive minimum
    if criteria.min_rating is not None and record.rating < criteria.min_rating:
        return False
    # A missing runtime parses to 0 and passes any maximum
    if criteria.max_runtime is not None and record.runtime > criteria.max_runtime:
        return False
    return True


def filter_records(
    records: Iterable[DetailRecord],
    criteria: Optional[FilterCriteria] = None,
) -> list[DetailRecord]:
    """Return the records matching ``criteria`` in their input order."""
    if criteria is None or criteria.is_empty():
        return list(records)
    return [r for r in records if matches(r, criteria)]


def sort_records(
    records: Iterable[DetailRecord],
    sort_key: SortKey = SortKey.NONE,
) -> list[DetailRecord]:
    """Return a new, stably sorted list; the input is left untouched."""
    sort_key = SortKey(sort_key)
    if sort_key is SortKey.RATING_DESC:
        return sorted(records, key=lambda r: r.rating, reverse=True)
    if sort_key is SortKey.YEAR_DESC:
        return sorted(records, key=lambda r: r.year_number, reverse=True)
    return list(records)
