"""Error taxonomy for the search pipeline."""

from __future__ import annotations


class MovieSearchError(Exception):
    """Base class for all pipeline errors."""


class ConfigurationError(MovieSearchError, ValueError):
    """A required setting (the API key) is missing.

    Raised before any network call is made.
    """


class TransportError(MovieSearchError):
    """A single provider call failed (one search term or one detail id)."""

    def __init__(self, unit: str, message: str):
        super().__init__(f"{unit}: {message}")
        self.unit = unit


class EmptyResultError(MovieSearchError):
    """The run completed but produced nothing to show.

    Not raised by the pipeline; attached to the result as a notice.
    """
