from __future__ import annotations


class GraphViewError(Exception):
    """Base error for the graphview package."""


class SeriesDataError(GraphViewError, ValueError):
    """Raised when series input cannot be normalized into x/y arrays."""


class InvalidStateError(GraphViewError):
    """Raised when an operation is not allowed in the chart's current state."""


class MissingBackupState(InvalidStateError):
    """Raised when leaving log scale mode without a backup of the linear data."""
