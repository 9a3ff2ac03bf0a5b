"""Concurrent fan-out stages: search, de-duplication and detail resolution.

Both async stages issue one task per unit of work and wait for every task
to settle before returning.  A failing unit is folded into a ``Failure``
value instead of aborting its siblings.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Iterable, Optional, Protocol, TypeVar

from moviesearch.models import DetailRecord, Failure, Outcome, SearchHit, Success

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SearchProvider(Protocol):
    async def search(self, term: str) -> list[SearchHit]: ...


class DetailProvider(Protocol):
    async def fetch_detail(self, imdb_id: str) -> Optional[DetailRecord]: ...


async def gather_settled(
    units: Iterable[str],
    call: Callable[[str], Awaitable[T]],
) -> list[Outcome]:
    """Run ``call(unit)`` for every unit concurrently and join on all of them.

    Returns one ``Success`` or ``Failure`` per unit, in unit order.
    """
    units = list(units)
    if not units:
        return []

    results = await asyncio.gather(*(call(u) for u in units), return_exceptions=True)

    outcomes: list[Outcome] = []
    for unit, result in zip(units, results):
        # CancelledError and other BaseExceptions are not per-unit failures
        if isinstance(result, BaseException) and not isinstance(result, Exception):
            raise result
        if isinstance(result, Exception):
            logger.warning("Recoverable failure for %r: %s", unit, result)
            outcomes.append(Failure(unit=unit, reason=result))
        else:
            outcomes.append(Success(unit=unit, value=result))
    return outcomes


async def search_all(
    terms: Iterable[str],
    provider: SearchProvider,
) -> tuple[list[SearchHit], list[Failure]]:
    """Search every term concurrently.

    Hits are concatenated in term order, keeping each term's own order.
    A failing term contributes no hits.
    """
    outcomes = await gather_settled(terms, provider.search)

    hits: list[SearchHit] = []
    failures: list[Failure] = []
    for outcome in outcomes:
        if isinstance(outcome, Failure):
            failures.append(outcome)
        else:
            hits.extend(outcome.value or [])

    logger.debug("Search fan-out: %d hits, %d failed terms", len(hits), len(failures))
    return hits, failures


def dedupe_hits(hits: Iterable[SearchHit]) -> list[SearchHit]:
    """Keep the first occurrence of each id, in first-seen order."""
    seen: set[str] = set()
    unique: list[SearchHit] = []
    for hit in hits:
        if hit.id in seen:
            continue
        seen.add(hit.id)
        unique.append(hit)
    return unique


async def resolve_details(
    hits: Iterable[SearchHit],
    provider: DetailProvider,
) -> tuple[list[DetailRecord], list[Failure]]:
    """Fetch a detail record for every hit concurrently.

    Failed lookups and "not found" answers are left out of the records.
    Providers may answer a legacy id with the canonical record, so two hits
    can resolve to the same record id; only the first one is kept.
    """
    outcomes = await gather_settled((h.id for h in hits), provider.fetch_detail)

    records: list[DetailRecord] = []
    failures: list[Failure] = []
    resolved_ids: set[str] = set()
    for outcome in outcomes:
        if isinstance(outcome, Failure):
            failures.append(outcome)
        elif outcome.value is None:
            logger.info("No detail record for %s", outcome.unit)
        elif outcome.value.id in resolved_ids:
            logger.info("%s resolved to already seen record %s", outcome.unit, outcome.value.id)
        else:
            resolved_ids.add(outcome.value.id)
            records.append(outcome.value)

    logger.debug("Detail fan-out: %d resolved, %d failed", len(records), len(failures))
    return records, failures
