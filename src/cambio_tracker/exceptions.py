"""
Exception types raised by the Cambio Score Tracker.
"""

from typing import Optional


class TrackerError(Exception):
    """Base class for all tracker errors."""


class InvalidRoundIndexError(TrackerError, IndexError):
    """A round index outside the current bounds was given."""

    def __init__(self, index, size: int):
        self.index = index
        self.size = size
        super().__init__(f"Invalid round index: {index} (have {size} rounds)")


class InvalidScoreError(TrackerError, ValueError):
    """A score that is not an integer was given."""


class CSVParseError(TrackerError, ValueError):
    """CSV content could not be turned into rounds."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.line_number = line_number
        super().__init__(message)


class StorageError(TrackerError):
    """Saved state could not be written or removed."""


class EmptyLedgerError(TrackerError):
    """An operation needs at least one recorded round."""
