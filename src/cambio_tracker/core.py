"""
Ledger core: the ordered list of rounds and everything derived from it.

No I/O happens here. Callers persist ``get_state()`` after each mutation.
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional, Union

from .config import AngerThresholds, PlayerNames
from .exceptions import InvalidRoundIndexError, InvalidScoreError
from .models import (
    AngerLevel,
    AngerLevels,
    LedgerState,
    OverallTotals,
    Round,
    SessionTotals,
)

logger = logging.getLogger(__name__)


def _check_score(name: str, value: Any) -> int:
    # bool is an int subclass but never a score
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidScoreError(f"Invalid score value for {name}: {value!r}")
    return value


class CambioTrackerCore:
    """
    Running score ledger for two players.

    Holds the chronological list of rounds and the current session counter.
    Every mutation except ``import_rounds`` leaves each round's cached session
    and overall totals consistent with the raw scores before it.
    """

    def __init__(
        self,
        initial_state: Union[LedgerState, Mapping[str, Any], None] = None,
        thresholds: Optional[AngerThresholds] = None,
        players: Optional[PlayerNames] = None
    ):
        """
        Initialize the ledger.

        Args:
            initial_state: Saved state to start from. Empty ledger if None.
            thresholds: Anger level thresholds. Uses defaults if None.
            players: Player display names. Uses defaults if None.
        """
        self.rounds: List[Round] = []
        self.current_session: int = 1
        self.thresholds = thresholds or AngerThresholds()
        self.players = players or PlayerNames()

        self.load_state(initial_state)

    # -- persistence round-tripping ---------------------------------------

    def get_state(self) -> LedgerState:
        """Return a copy of the ledger suitable for saving."""
        return LedgerState(
            rounds=[r.model_copy() for r in self.rounds],
            current_session=self.current_session
        )

    def load_state(self, data: Union[LedgerState, Mapping[str, Any], None]) -> None:
        """
        Replace the ledger with saved state.

        Args:
            data: A LedgerState or a mapping with ``rounds`` and
                ``currentSession``. Missing fields default to an empty list
                and session 1. None leaves the ledger unchanged.
        """
        if data is None:
            return

        if isinstance(data, LedgerState):
            state = data.model_copy(deep=True)
        else:
            state = LedgerState.model_validate(data)

        self.rounds = list(state.rounds)
        self.current_session = state.current_session

    # -- mutations -------------------------------------------------------

    def add_round(self, mike_score: int, preeta_score: int) -> Round:
        """
        Append a round to the current session.

        Returns:
            The newly created round
        """
        _check_score('mike_score', mike_score)
        _check_score('preeta_score', preeta_score)

        mike_session = preeta_session = 0
        mike_overall = preeta_overall = 0

        last_in_session = self._last_round_of(self.current_session)
        if last_in_session is not None:
            mike_session = last_in_session.mike_session_total
            preeta_session = last_in_session.preeta_session_total
            mike_overall = last_in_session.mike_overall_total
            preeta_overall = last_in_session.preeta_overall_total
        elif self.rounds:
            # Fresh session: carry overall totals, restart session totals
            mike_overall = self.rounds[-1].mike_overall_total
            preeta_overall = self.rounds[-1].preeta_overall_total

        new_round = Round(
            session=self.current_session,
            mike_score=mike_score,
            preeta_score=preeta_score,
            mike_session_total=mike_session + mike_score,
            preeta_session_total=preeta_session + preeta_score,
            mike_overall_total=mike_overall + mike_score,
            preeta_overall_total=preeta_overall + preeta_score
        )
        self.rounds.append(new_round)
        return new_round

    def start_new_session(self) -> None:
        """Move new rounds into the next session."""
        self.current_session += 1

    def delete_round(self, index: int) -> None:
        """
        Delete the round at ``index`` and recompute totals.

        The current session becomes one past the session of the last
        remaining round, or 1 when the ledger is empty.

        Raises:
            InvalidRoundIndexError: If index is out of range
        """
        self._check_index(index)

        del self.rounds[index]
        self.recalculate_all_totals()

        if self.rounds:
            self.current_session = self.rounds[-1].session + 1
        else:
            self.current_session = 1

        logger.debug("Deleted round %d, current session now %d", index, self.current_session)

    def edit_round(self, index: int, new_mike_score: int, new_preeta_score: int) -> None:
        """
        Overwrite a round's raw scores and recompute totals.

        Raises:
            InvalidRoundIndexError: If index is out of range
            InvalidScoreError: If either score is not an integer
        """
        self._check_index(index)
        _check_score('mike_score', new_mike_score)
        _check_score('preeta_score', new_preeta_score)

        target = self.rounds[index]
        target.mike_score = new_mike_score
        target.preeta_score = new_preeta_score
        self.recalculate_all_totals()

        logger.debug("Edited round %d to (%d, %d)", index, new_mike_score, new_preeta_score)

    def recalculate_all_totals(self) -> None:
        """Rebuild every round's cached totals from the raw scores."""
        session = 1
        mike_session = preeta_session = 0
        mike_overall = preeta_overall = 0

        for r in self.rounds:
            if r.session != session:
                session = r.session
                mike_session = preeta_session = 0

            mike_session += r.mike_score
            preeta_session += r.preeta_score
            mike_overall += r.mike_score
            preeta_overall += r.preeta_score

            r.mike_session_total = mike_session
            r.preeta_session_total = preeta_session
            r.mike_overall_total = mike_overall
            r.preeta_overall_total = preeta_overall

    def clear_all_data(self) -> None:
        """Drop every round and restart at session 1."""
        self.rounds = []
        self.current_session = 1

    def import_rounds(self, rounds: Iterable[Union[Round, Mapping[str, Any]]]) -> None:
        """
        Replace the ledger with imported rounds.

        Cached totals are taken as given and not recalculated. The current
        session becomes one past the last imported round's session.
        """
        imported = [
            r.model_copy() if isinstance(r, Round) else Round.model_validate(r)
            for r in rounds
        ]

        self.rounds = imported
        if self.rounds:
            self.current_session = self.rounds[-1].session + 1
        else:
            self.current_session = 1

        logger.debug("Imported %d rounds", len(imported))

    # -- derived values ----------------------------------------------------

    def get_session_totals(self) -> SessionTotals:
        """Totals for the current session, zero if it has no rounds yet."""
        last = self._last_round_of(self.current_session)
        if last is None:
            return SessionTotals()
        return SessionTotals(
            mike_session_total=last.mike_session_total,
            preeta_session_total=last.preeta_session_total
        )

    def get_overall_totals(self) -> OverallTotals:
        """All-time totals, zero for an empty ledger."""
        if not self.rounds:
            return OverallTotals()
        last = self.rounds[-1]
        return OverallTotals(
            mike_overall_total=last.mike_overall_total,
            preeta_overall_total=last.preeta_overall_total
        )

    def get_session_delta(self) -> int:
        """Mike minus Preeta for the current session. Positive means Mike is losing."""
        totals = self.get_session_totals()
        return totals.mike_session_total - totals.preeta_session_total

    def get_overall_delta(self) -> int:
        totals = self.get_overall_totals()
        return totals.mike_overall_total - totals.preeta_overall_total

    def format_delta(self, delta: int) -> str:
        """Render a delta as a positive margin with the leading player named."""
        if delta > 0:
            return f"+{delta} ({self.players.player_one})"
        elif delta < 0:
            return f"+{abs(delta)} ({self.players.player_two})"
        return "0 (Tied)"

    def get_anger_levels(self) -> AngerLevels:
        """Mood of each player based on the current session delta."""
        delta = self.get_session_delta()
        level = self._anger_for(abs(delta))

        if delta > 0:
            return AngerLevels(mike_anger=level)
        elif delta < 0:
            return AngerLevels(preeta_anger=level)
        return AngerLevels()

    def get_rounds_reversed(self) -> List[Round]:
        """Rounds newest first, as a new list."""
        return list(reversed(self.rounds))

    # -- helpers -------------------------------------------------------------

    def _anger_for(self, magnitude: int) -> AngerLevel:
        if magnitude >= self.thresholds.angry:
            return AngerLevel.ANGRY
        elif magnitude >= self.thresholds.annoyed:
            return AngerLevel.ANNOYED
        return AngerLevel.NEUTRAL

    def _last_round_of(self, session: int) -> Optional[Round]:
        for r in reversed(self.rounds):
            if r.session == session:
                return r
        return None

    def _check_index(self, index: Any) -> None:
        if isinstance(index, bool) or not isinstance(index, int) \
                or not 0 <= index < len(self.rounds):
            raise InvalidRoundIndexError(index, len(self.rounds))
