"""OMDb API wrapper.

``OmdbClient`` serves as both the search provider (``search``) and the
detail provider (``fetch_detail``) for the pipeline.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx
from tenacity import retry, retry_if_result, stop_after_attempt, wait_exponential

from moviesearch.config import get_base_url, get_timeout
from moviesearch.errors import ConfigurationError, TransportError
from moviesearch.models import DetailRecord, SearchHit
from moviesearch.parsing import clean_placeholder

logger = logging.getLogger(__name__)

# Response=False errors that just mean "nothing here"
_NOT_FOUND_ERRORS = (
    "movie not found",
    "too many results",
    "incorrect imdb id",
    "error getting data",
)


def _return_last_response(retry_state) -> httpx.Response:
    return retry_state.outcome.result()


@retry(
    retry=retry_if_result(lambda r: r.status_code == 429),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=8),
    retry_error_callback=_return_last_response,
)
async def _get(client: httpx.AsyncClient, params: dict) -> httpx.Response:
    return await client.get("", params=params)


def _is_not_found(data: dict) -> bool:
    error = str(data.get("Error", "")).lower()
    return any(marker in error for marker in _NOT_FOUND_ERRORS)


def _hit_from_item(item: dict) -> Optional[SearchHit]:
    imdb_id = item.get("imdbID")
    if not imdb_id:
        return None
    return SearchHit(id=str(imdb_id), title=str(item.get("Title", "")))


def _record_from_payload(data: dict) -> DetailRecord:
    return DetailRecord(
        id=str(data.get("imdbID", "")),
        title=str(data.get("Title", "")),
        year=clean_placeholder(data.get("Year")) or "",
        genre_raw=clean_placeholder(data.get("Genre")),
        rating_raw=clean_placeholder(data.get("imdbRating")),
        runtime_raw=clean_placeholder(data.get("Runtime")),
        actors=clean_placeholder(data.get("Actors")) or "",
        plot=clean_placeholder(data.get("Plot")) or "",
        poster_url=clean_placeholder(data.get("Poster")) or "",
        awards=clean_placeholder(data.get("Awards")) or "",
    )


class OmdbClient:
    """Async OMDb client.  Use as ``async with OmdbClient(key) as client``."""

    def __init__(
        self,
        api_key: str,
        *,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not api_key:
            raise ConfigurationError("OmdbClient requires an API key")
        self.api_key = api_key
        self._http = httpx.AsyncClient(
            base_url=base_url or get_base_url(),
            timeout=timeout if timeout is not None else get_timeout(),
            transport=transport,
        )

    async def __aenter__(self) -> "OmdbClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        await self._http.aclose()

    async def _request(self, unit: str, params: dict) -> dict:
        params = {**params, "apikey": self.api_key}
        try:
            resp = await _get(self._http, params)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPError as e:
            raise TransportError(unit, str(e) or type(e).__name__) from e
        except ValueError as e:
            raise TransportError(unit, f"invalid JSON response: {e}") from e
        if not isinstance(data, dict):
            raise TransportError(unit, "unexpected response shape")
        return data

    async def search(self, term: str) -> list[SearchHit]:
        """Keyword search; returns an empty list when OMDb finds nothing."""
        data = await self._request(term, {"s": term, "type": "movie"})
        if data.get("Response") != "True":
            if _is_not_found(data):
                logger.debug("No search hits for %r: %s", term, data.get("Error"))
                return []
            raise TransportError(term, str(data.get("Error") or "request rejected"))

        hits = []
        for item in data.get("Search") or []:
            hit = _hit_from_item(item)
            if hit is not None:
                hits.append(hit)
        return hits

    async def fetch_detail(self, imdb_id: str) -> Optional[DetailRecord]:
        """Full record for one IMDb id, or ``None`` when OMDb has no such title."""
        data = await self._request(imdb_id, {"i": imdb_id, "plot": "short"})
        if data.get("Response") != "True":
            if _is_not_found(data):
                return None
            raise TransportError(imdb_id, str(data.get("Error") or "request rejected"))
        record = _record_from_payload(data)
        if not record.id:
            return None
        return record
