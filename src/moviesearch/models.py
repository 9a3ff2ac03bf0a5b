"""Data models for search hits, detail records and pipeline results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Optional, TypeVar, Union

from moviesearch.errors import EmptyResultError
from moviesearch.parsing import parse_rating, parse_runtime, parse_year, split_genres

T = TypeVar("T")


@dataclass(frozen=True)
class SearchHit:
    """A minimal search result; ``id`` is the provider's stable identifier."""

    id: str
    title: str


@dataclass(frozen=True)
class DetailRecord:
    """A fully resolved record for one identifier.

    Numeric-looking fields are kept as the provider's text and parsed on
    access, so a malformed value never fails record construction.
    """

    id: str
    title: str
    year: str = ""
    genre_raw: Optional[str] = None
    rating_raw: Optional[str] = None
    runtime_raw: Optional[str] = None
    actors: str = ""
    plot: str = ""
    poster_url: str = ""
    awards: str = ""

    @property
    def genres(self) -> list[str]:
        return split_genres(self.genre_raw)

    @property
    def rating(self) -> float:
        return parse_rating(self.rating_raw)

    @property
    def runtime(self) -> int:
        return parse_runtime(self.runtime_raw)

    @property
    def year_number(self) -> int:
        return parse_year(self.year)


@dataclass(frozen=True)
class FilterCriteria:
    """Active filter constraints.  Empty strings and ``None`` mean "no constraint"."""

    title: str = ""
    genre: str = ""
    min_rating: Optional[float] = None
    max_runtime: Optional[float] = None

    def is_empty(self) -> bool:
        return (
            not self.title
            and not self.genre
            and self.min_rating is None
            and self.max_runtime is None
        )


class SortKey(str, Enum):
    NONE = "none"
    RATING_DESC = "rating"
    YEAR_DESC = "year"


@dataclass(frozen=True)
class Statistics:
    """Summary over a record set.  ``average_rating`` is ``None`` for an empty set."""

    count: int
    average_rating: Optional[float]
    genre_histogram: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class Success(Generic[T]):
    unit: str
    value: T


@dataclass(frozen=True)
class Failure:
    """A unit of fan-out work (a term or an id) that did not produce a value."""

    unit: str
    reason: BaseException

    def describe(self) -> str:
        return str(self.reason) or type(self.reason).__name__


Outcome = Union[Success[Any], Failure]


@dataclass
class PipelineResult:
    """Everything one fan-out run produced."""

    terms: list[str]
    hits: list[SearchHit] = field(default_factory=list)
    records: list[DetailRecord] = field(default_factory=list)
    search_failures: list[Failure] = field(default_factory=list)
    detail_failures: list[Failure] = field(default_factory=list)
    empty: Optional[EmptyResultError] = None
    generation: int = 0
    superseded: bool = False

    @property
    def failures(self) -> list[Failure]:
        return self.search_failures + self.detail_failures


@dataclass(frozen=True)
class PipelineView:
    """Filtered, sorted records plus their statistics."""

    records: list[DetailRecord]
    statistics: Statistics
    criteria: FilterCriteria
    sort_key: SortKey
