"""Top submitter and commenter reporting from monthly pivot tables."""

__version__ = "0.1.0"
