"""Job tracker: remote job aggregation and per-user job storage."""

__version__ = "0.1.0"
