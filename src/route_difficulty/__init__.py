"""Route Difficulty - elevation difficulty breakdowns for running routes."""

__version_date__ = "2025-02-14"
