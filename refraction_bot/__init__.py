"""Building blocks for a launcher community chat bot: log analysis, tags, welcome layouts, API helpers and a Redis cache."""

__version__ = "0.1.0"