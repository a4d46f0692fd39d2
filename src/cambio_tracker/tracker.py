"""
Main Cambio Tracker class that integrates configuration, storage and the ledger.

This module provides the high-level API used by the CLI and the web API.
"""

import logging
from datetime import date
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from .config import AppConfig
from .config_manager import ConfigManager
from .core import CambioTrackerCore
from .csv_codec import export_to_csv, generate_csv_filename, parse_csv
from .exceptions import CSVParseError, EmptyLedgerError, StorageError
from .models import AngerLevels, LedgerState, OverallTotals, Round, SessionTotals
from .storage import JSONFileStorage, StorageAdapter

logger = logging.getLogger(__name__)


class CambioTracker:
    """
    Main application class for the Cambio Score Tracker.

    Owns one ledger, the storage adapter it is saved to and the
    configuration. Every mutation is saved immediately. A mutation that
    fails, including one whose save fails, leaves both the ledger and the
    saved state as they were.
    """

    def __init__(
        self,
        config_path: Optional[Path] = None,
        storage: Optional[StorageAdapter] = None,
        config: Optional[AppConfig] = None
    ):
        """
        Initialize the tracker.

        Args:
            config_path: Path to configuration file. If None, uses default.
            storage: Where the ledger is saved. Defaults to the JSON file
                named in the configuration.
            config: Configuration to use instead of loading one.
        """
        self.config_manager = ConfigManager(config_path)

        if config is None:
            try:
                config = self.config_manager.load()
            except FileNotFoundError:
                # No config file yet, run with defaults
                config = self.config_manager.create_default()
        self.config: AppConfig = config

        self.storage = storage or JSONFileStorage(
            self.config.data_file,
            key=self.config.storage_key
        )
        self.core = CambioTrackerCore(
            thresholds=self.config.anger_thresholds,
            players=self.config.players
        )

        state = self.storage.load()
        if state is not None:
            self.core.load_state(state)
            logger.info(
                "Loaded %d rounds, current session %d",
                len(self.core.rounds), self.core.current_session
            )

    def save(self) -> None:
        """Persist the current ledger."""
        self.storage.save(self.core.get_state())

    def _save_or_rollback(self, snapshot: LedgerState) -> None:
        try:
            self.save()
        except StorageError:
            self.core.load_state(snapshot)
            raise

    # -- mutations ----------------------------------------------------------

    def add_round(self, mike_score: int, preeta_score: int) -> Round:
        snapshot = self.core.get_state()
        new_round = self.core.add_round(mike_score, preeta_score)
        self._save_or_rollback(snapshot)
        return new_round

    def edit_round(self, index: int, mike_score: int, preeta_score: int) -> Round:
        snapshot = self.core.get_state()
        self.core.edit_round(index, mike_score, preeta_score)
        self._save_or_rollback(snapshot)
        return self.core.rounds[index]

    def delete_round(self, index: int) -> None:
        snapshot = self.core.get_state()
        self.core.delete_round(index)
        self._save_or_rollback(snapshot)

    def start_new_session(self) -> int:
        """
        Start a new session.

        Returns:
            The new session number
        """
        snapshot = self.core.get_state()
        self.core.start_new_session()
        self._save_or_rollback(snapshot)
        return self.core.current_session

    def clear_all_data(self) -> None:
        snapshot = self.core.get_state()
        self.core.clear_all_data()
        self._save_or_rollback(snapshot)
        logger.info("Cleared all scores")

    def import_rounds(self, rounds: Iterable[Union[Round, Mapping[str, Any]]]) -> int:
        snapshot = self.core.get_state()
        self.core.import_rounds(rounds)
        self._save_or_rollback(snapshot)
        return len(self.core.rounds)

    # -- CSV ------------------------------------------------------------------

    def export_csv_text(self) -> Optional[str]:
        """CSV content of the ledger, or None if it is empty."""
        return export_to_csv(self.core.rounds)

    def export_csv(
        self,
        directory: Optional[Path] = None,
        today: Optional[date] = None
    ) -> Path:
        """
        Write the ledger to a dated CSV file.

        Args:
            directory: Output directory. Defaults to the configured one.
            today: Date used in the filename. Defaults to today (UTC).

        Returns:
            Path of the written file

        Raises:
            EmptyLedgerError: If there are no rounds to export
        """
        content = self.export_csv_text()
        if content is None:
            raise EmptyLedgerError("No data to export")

        output_dir = Path(directory) if directory else self.config.export_directory
        output_dir.mkdir(parents=True, exist_ok=True)

        output_path = output_dir / generate_csv_filename(today)
        output_path.write_text(content, encoding='utf-8')

        logger.info("Exported %d rounds to %s", len(self.core.rounds), output_path)
        return output_path

    def import_csv_text(self, content: str) -> int:
        """
        Replace the ledger with rounds parsed from CSV text.

        Returns:
            Number of rounds imported
        """
        rounds = parse_csv(content)
        return self.import_rounds(rounds)

    def import_csv(self, path: Path) -> int:
        """
        Replace the ledger with rounds from a CSV file.

        Returns:
            Number of rounds imported
        """
        try:
            content = Path(path).read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise CSVParseError(f"Could not read {path}: {e}") from e

        count = self.import_csv_text(content)
        logger.info("Imported %d rounds from %s", count, path)
        return count

    # -- queries --------------------------------------------------------------

    @property
    def rounds(self) -> List[Round]:
        return self.core.rounds

    @property
    def current_session(self) -> int:
        return self.core.current_session

    def get_rounds_reversed(self) -> List[Round]:
        return self.core.get_rounds_reversed()

    def get_session_totals(self) -> SessionTotals:
        return self.core.get_session_totals()

    def get_overall_totals(self) -> OverallTotals:
        return self.core.get_overall_totals()

    def get_session_delta(self) -> int:
        return self.core.get_session_delta()

    def get_overall_delta(self) -> int:
        return self.core.get_overall_delta()

    def format_delta(self, delta: int) -> str:
        return self.core.format_delta(delta)

    def get_anger_levels(self) -> AngerLevels:
        return self.core.get_anger_levels()

    def get_stats(self) -> Dict:
        """
        Get the statistics shown alongside the score history.

        Returns:
            Dictionary with totals, deltas and anger levels
        """
        session_delta = self.core.get_session_delta()
        overall_delta = self.core.get_overall_delta()

        return {
            'currentSession': self.core.current_session,
            'totalRounds': len(self.core.rounds),
            'sessionTotals': self.core.get_session_totals().model_dump(by_alias=True),
            'overallTotals': self.core.get_overall_totals().model_dump(by_alias=True),
            'sessionDelta': session_delta,
            'overallDelta': overall_delta,
            'sessionDeltaText': self.core.format_delta(session_delta),
            'overallDeltaText': self.core.format_delta(overall_delta),
            'angerLevels': self.core.get_anger_levels().model_dump(mode='json', by_alias=True),
        }
