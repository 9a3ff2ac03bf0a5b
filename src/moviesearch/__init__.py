"""moviesearch - Fan-out movie search, detail resolution and summary statistics."""

__version__ = "0.1.0"
