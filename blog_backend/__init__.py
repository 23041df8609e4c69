"""Backend service for a static blog: click counters, comments, snapshots and backups."""

__version__ = "0.1.0"