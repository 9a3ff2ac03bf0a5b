"""Summary statistics over a record set."""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from moviesearch.models import DetailRecord, Statistics


def aggregate(records: Iterable[DetailRecord]) -> Statistics:
    """Count, average rating and genre histogram.

    Missing ratings count as 0 toward the average.  Records without a genre
    field add nothing to the histogram.  An empty set has no average.
    """
    records = list(records)
    count = len(records)

    histogram: Counter[str] = Counter()
    for record in records:
        histogram.update(record.genres)

    average = sum(r.rating for r in records) / count if count else None

    return Statistics(
        count=count,
        average_rating=average,
        genre_histogram=dict(histogram),
    )
