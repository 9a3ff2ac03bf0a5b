"""Pipeline entry point.

    pipeline = Pipeline.from_env()
    result = await pipeline.run(["batman", "superman"])
    view = pipeline.view(FilterCriteria(min_rating=7), SortKey.RATING_DESC)

``run`` does the network work (search fan-out, de-duplication, detail
fan-out).  ``view`` is pure and can be called again with new criteria
without refetching.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import AsyncExitStack
from typing import Iterable, Optional

from moviesearch.backends.omdb import OmdbClient
from moviesearch.config import get_omdb_key
from moviesearch.errors import ConfigurationError, EmptyResultError
from moviesearch.fanout import (
    DetailProvider,
    SearchProvider,
    dedupe_hits,
    resolve_details,
    search_all,
)
from moviesearch.filters import filter_records, sort_records
from moviesearch.models import FilterCriteria, PipelineResult, PipelineView, SortKey
from moviesearch.stats import aggregate

logger = logging.getLogger(__name__)


class Pipeline:
    """Search, resolve, then filter/sort/summarize.

    Each ``run`` gets a generation number.  A run that finishes after a newer
    run has started is marked ``superseded`` and never replaces ``latest``.
    """

    def __init__(
        self,
        api_key: Optional[str],
        *,
        search_provider: Optional[SearchProvider] = None,
        detail_provider: Optional[DetailProvider] = None,
        timeout: Optional[float] = None,
    ):
        if not api_key:
            raise ConfigurationError(
                "An OMDb API key is required. "
                "Run `movies env set OMDB_API_KEY <your-key>` to configure it."
            )
        self.api_key = api_key
        self.timeout = timeout
        self._search_provider = search_provider
        self._detail_provider = detail_provider
        self._generation = 0
        self.latest: Optional[PipelineResult] = None

    @classmethod
    def from_env(cls, **kwargs) -> "Pipeline":
        return cls(get_omdb_key(), **kwargs)

    @property
    def generation(self) -> int:
        return self._generation

    async def run(self, terms: Iterable[str]) -> PipelineResult:
        self._generation += 1
        generation = self._generation
        terms = [t.strip() for t in terms if t and t.strip()]
        logger.info("Run %d: searching %d terms", generation, len(terms))

        async with AsyncExitStack() as stack:
            search_provider = self._search_provider
            detail_provider = self._detail_provider
            if search_provider is None or detail_provider is None:
                client = await stack.enter_async_context(
                    OmdbClient(self.api_key, timeout=self.timeout)
                )
                search_provider = search_provider or client
                detail_provider = detail_provider or client

            result = PipelineResult(terms=terms, generation=generation)
            raw_hits, result.search_failures = await search_all(terms, search_provider)
            result.hits = dedupe_hits(raw_hits)
            logger.info(
                "Run %d: %d hits, %d unique", generation, len(raw_hits), len(result.hits)
            )

            if result.hits:
                result.records, result.detail_failures = await resolve_details(
                    result.hits, detail_provider
                )

        if not result.hits:
            result.empty = EmptyResultError("No search results for the given terms")
        elif not result.records:
            result.empty = EmptyResultError("No detail records could be resolved")
        if result.empty is not None:
            logger.info("Run %d: %s", generation, result.empty)

        if generation != self._generation:
            logger.info(
                "Run %d superseded by run %d; result discarded",
                generation, self._generation,
            )
            result.superseded = True
        else:
            self.latest = result
        return result

    def run_sync(self, terms: Iterable[str]) -> PipelineResult:
        return asyncio.run(self.run(terms))

    def view(
        self,
        criteria: Optional[FilterCriteria] = None,
        sort_key: SortKey = SortKey.NONE,
        result: Optional[PipelineResult] = None,
    ) -> PipelineView:
        """Filter, sort and summarize ``result`` (default: the latest run)."""
        result = result or self.latest
        criteria = criteria or FilterCriteria()
        sort_key = SortKey(sort_key)
        records = result.records if result is not None else []

        filtered = filter_records(records, criteria)
        ordered = sort_records(filtered, sort_key)
        return PipelineView(
            records=ordered,
            statistics=aggregate(ordered),
            criteria=criteria,
            sort_key=sort_key,
        )
