"""Shared fakes for the pipeline tests."""

import asyncio

import pytest

from moviesearch.errors import TransportError
from moviesearch.models import DetailRecord, SearchHit


class FakeSearch:
    """In-memory search provider.  Terms mapped to an exception raise it."""

    def __init__(self, results):
        self.results = results
        self.calls = []

    async def search(self, term):
        self.calls.append(term)
        await asyncio.sleep(0)
        outcome = self.results.get(term, [])
        if isinstance(outcome, Exception):
            raise outcome
        return [SearchHit(id=i, title=t) for i, t in outcome]


class FakeDetails:
    """In-memory detail provider.  Unknown ids resolve to ``None``."""

    def __init__(self, records, failing=()):
        self.records = {r.id: r for r in records}
        self.failing = set(failing)
        self.calls = []

    async def fetch_detail(self, imdb_id):
        self.calls.append(imdb_id)
        await asyncio.sleep(0)
        if imdb_id in self.failing:
            raise TransportError(imdb_id, "connection reset")
        return self.records.get(imdb_id)


@pytest.fixture
def fake_search():
    return FakeSearch


@pytest.fixture
def fake_details():
    return FakeDetails


@pytest.fixture
def sample_records():
    return [
        DetailRecord(
            id="tt0372784", title="Batman Begins", year="2005",
            genre_raw="Action, Crime, Drama", rating_raw="8.2", runtime_raw="140 min",
        ),
        DetailRecord(
            id="tt0468569", title="The Dark Knight", year="2008",
            genre_raw="Action, Crime, Drama", rating_raw="9.0", runtime_raw="152 min",
        ),
        DetailRecord(
            id="tt0103776", title="Batman Returns", year="1992",
            genre_raw="Action, Fantasy", rating_raw="7.1", runtime_raw="126 min",
        ),
        DetailRecord(
            id="tt9999999", title="Batman: Fan Cut", year="N/A",
            genre_raw=None, rating_raw=None, runtime_raw=None,
        ),
    ]
