"""Provider Ranker — weighted multi-criteria ranking of supplier records."""

__version__ = "0.1.0"
