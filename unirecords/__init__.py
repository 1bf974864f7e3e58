"""Terminal front-end for a university records database kept in SQLite."""

__version__ = "0.1.0"