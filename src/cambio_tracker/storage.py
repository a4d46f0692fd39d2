"""
Persistence adapters for the ledger state.

An adapter stores one ``LedgerState`` blob. Loading never fails: a missing or
corrupt blob reads as None. Saving and clearing raise ``StorageError``.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Union

from pydantic import ValidationError

from .exceptions import StorageError
from .models import LedgerState

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "cambioScores"


class StorageAdapter(ABC):
    """Contract between the application and wherever the ledger is kept."""

    @abstractmethod
    def load(self) -> Optional[LedgerState]:
        """Return the saved state, or None if nothing usable is saved."""

    @abstractmethod
    def save(self, state: LedgerState) -> None:
        """Store ``state``, replacing whatever was saved before."""

    @abstractmethod
    def clear(self) -> None:
        """Remove the saved state."""


class MemoryStorage(StorageAdapter):
    """Keeps the serialized state in memory."""

    def __init__(self):
        self._data: Optional[str] = None

    def load(self) -> Optional[LedgerState]:
        if self._data is None:
            return None
        return LedgerState.model_validate_json(self._data)

    def save(self, state: LedgerState) -> None:
        self._data = state.model_dump_json(by_alias=True)

    def clear(self) -> None:
        self._data = None


class JSONFileStorage(StorageAdapter):
    """
    Keeps the state in a JSON document on disk.

    The document maps ``key`` to the camelCase state blob, so a file can hold
    other keys alongside it.
    """

    def __init__(self, path: Union[str, Path], key: str = DEFAULT_STORAGE_KEY):
        """
        Args:
            path: JSON file to read and write
            key: Entry in the document that holds the ledger
        """
        self.path = Path(path)
        self.key = key

    def load(self) -> Optional[LedgerState]:
        if not self.path.exists():
            return None

        try:
            document = json.loads(self.path.read_text(encoding='utf-8'))
        except (OSError, ValueError) as e:
            logger.warning("Could not read saved scores from %s: %s", self.path, e)
            return None

        if not isinstance(document, dict) or document.get(self.key) is None:
            return None

        try:
            return LedgerState.model_validate(document[self.key])
        except ValidationError as e:
            logger.warning("Saved scores in %s are corrupt: %s", self.path, e)
            return None

    def save(self, state: LedgerState) -> None:
        document = self._read_document()
        document[self.key] = state.model_dump(mode='json', by_alias=True)
        self._write_document(document)
        logger.debug("Saved %d rounds to %s", len(state.rounds), self.path)

    def clear(self) -> None:
        if not self.path.exists():
            return
        document = self._read_document()
        document.pop(self.key, None)
        self._write_document(document)

    def _read_document(self) -> Dict:
        # Other keys are kept; an unreadable document is replaced
        if not self.path.exists():
            return {}
        try:
            document = json.loads(self.path.read_text(encoding='utf-8'))
        except (OSError, ValueError):
            return {}
        return document if isinstance(document, dict) else {}

    def _write_document(self, document: Dict) -> None:
        tmp_path = self.path.with_name(self.path.name + '.tmp')
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(document, indent=2), encoding='utf-8')
            tmp_path.replace(self.path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            raise StorageError(f"Could not save scores to {self.path}: {e}") from e
