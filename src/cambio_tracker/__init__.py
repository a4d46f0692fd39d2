"""
Cambio Score Tracker - Running scores for two-player Cambio games.

Records rounds, keeps per-session and all-time totals for two players,
and saves the history locally with CSV import and export.
"""

__version__ = "0.1.0"

from .core import CambioTrackerCore
from .tracker import CambioTracker
from .config import (
    AppConfig,
    AngerThresholds,
    PlayerNames,
    DEFAULT_ANNOYED_THRESHOLD,
    DEFAULT_ANGRY_THRESHOLD
)
from .config_manager import ConfigManager
from .models import (
    Round,
    LedgerState,
    SessionTotals,
    OverallTotals,
    AngerLevel,
    AngerLevels
)
from .csv_codec import CSV_HEADERS, export_to_csv, parse_csv, generate_csv_filename
from .storage import StorageAdapter, JSONFileStorage, MemoryStorage
from .exceptions import (
    TrackerError,
    InvalidRoundIndexError,
    InvalidScoreError,
    CSVParseError,
    StorageError,
    EmptyLedgerError
)

__all__ = [
    'CambioTrackerCore',
    'CambioTracker',
    'AppConfig',
    'AngerThresholds',
    'PlayerNames',
    'DEFAULT_ANNOYED_THRESHOLD',
    'DEFAULT_ANGRY_THRESHOLD',
    'ConfigManager',
    'Round',
    'LedgerState',
    'SessionTotals',
    'OverallTotals',
    'AngerLevel',
    'AngerLevels',
    'CSV_HEADERS',
    'export_to_csv',
    'parse_csv',
    'generate_csv_filename',
    'StorageAdapter',
    'JSONFileStorage',
    'MemoryStorage',
    'TrackerError',
    'InvalidRoundIndexError',
    'InvalidScoreError',
    'CSVParseError',
    'StorageError',
    'EmptyLedgerError',
]
