"""
Tests for the ledger core.
"""

import pytest
from pydantic import ValidationError

from cambio_tracker.config import AngerThresholds, PlayerNames
from cambio_tracker.core import CambioTrackerCore
from cambio_tracker.exceptions import InvalidRoundIndexError, InvalidScoreError
from cambio_tracker.models import AngerLevel, LedgerState, Round


def assert_totals_consistent(rounds):
    """Every cached total equals the running fold over raw scores."""
    prev = None
    for r in rounds:
        prev_mike_overall = prev.mike_overall_total if prev else 0
        prev_preeta_overall = prev.preeta_overall_total if prev else 0
        assert r.mike_overall_total == prev_mike_overall + r.mike_score
        assert r.preeta_overall_total == prev_preeta_overall + r.preeta_score

        if prev is not None and prev.session == r.session:
            assert r.mike_session_total == prev.mike_session_total + r.mike_score
            assert r.preeta_session_total == prev.preeta_session_total + r.preeta_score
        else:
            assert r.mike_session_total == r.mike_score
            assert r.preeta_session_total == r.preeta_score
        prev = r


def totals(r):
    return (r.mike_session_total, r.preeta_session_total,
            r.mike_overall_total, r.preeta_overall_total)


@pytest.fixture
def core():
    return CambioTrackerCore()


@pytest.fixture
def three_rounds(core):
    core.add_round(5, 3)
    core.add_round(2, 7)
    core.add_round(1, 1)
    return core


class TestAddRound:
    """Test recording rounds."""

    def test_empty_ledger(self, core):
        """Test a fresh ledger."""
        assert core.rounds == []
        assert core.current_session == 1

    def test_basic_accumulation(self, core):
        """Test totals accumulate within a session."""
        core.add_round(5, 3)
        second = core.add_round(2, 7)

        assert second.session == 1
        assert totals(second) == (7, 10, 7, 10)
        assert core.rounds[-1] is second

    def test_new_session_resets_session_totals(self, core):
        """Test a new session keeps overall totals only."""
        core.add_round(5, 3)
        core.add_round(2, 7)
        core.start_new_session()
        new_round = core.add_round(1, 1)

        assert new_round.session == 2
        assert totals(new_round) == (1, 1, 8, 11)

    def test_negative_scores(self, core):
        """Test negative scores are allowed."""
        r = core.add_round(-3, 4)
        assert totals(r) == (-3, 4, -3, 4)

    @pytest.mark.parametrize("bad", ["5", 2.5, None, True, float("nan")])
    def test_rejects_non_integer_scores(self, core, bad):
        """Test invalid scores fail before anything is stored."""
        with pytest.raises(InvalidScoreError):
            core.add_round(bad, 1)
        with pytest.raises(InvalidScoreError):
            core.add_round(1, bad)
        assert core.rounds == []

    def test_skipped_sessions(self, core):
        """Test sessions with no rounds in between."""
        core.add_round(4, 4)
        core.start_new_session()
        core.start_new_session()
        r = core.add_round(1, 2)
        assert r.session == 3
        assert totals(r) == (1, 2, 5, 6)


class TestEditAndDelete:
    """Test editing and deleting rounds."""

    def test_edit_recomputes_downstream(self, three_rounds):
        """Test editing the first round cascades to later rounds."""
        three_rounds.edit_round(0, 0, 0)

        rounds = three_rounds.rounds
        assert totals(rounds[0]) == (0, 0, 0, 0)
        assert totals(rounds[1]) == (2, 7, 2, 7)
        assert totals(rounds[2]) == (3, 8, 3, 8)
        assert_totals_consistent(rounds)

    def test_edit_keeps_session(self, core):
        """Test editing never moves a round between sessions."""
        core.add_round(1, 1)
        core.start_new_session()
        core.add_round(2, 2)

        core.edit_round(1, 10, 0)
        assert core.rounds[1].session == 2
        assert totals(core.rounds[1]) == (10, 0, 11, 1)
        assert core.current_session == 2

    @pytest.mark.parametrize("index", [-1, 3, 100])
    def test_edit_invalid_index(self, three_rounds, index):
        """Test editing outside the ledger fails without changes."""
        before = three_rounds.get_state()
        with pytest.raises(InvalidRoundIndexError):
            three_rounds.edit_round(index, 1, 1)
        assert three_rounds.get_state() == before

    def test_edit_invalid_score(self, three_rounds):
        """Test a bad score leaves the round untouched."""
        before = three_rounds.get_state()
        with pytest.raises(InvalidScoreError):
            three_rounds.edit_round(0, 4, "x")
        assert three_rounds.get_state() == before

    def test_delete_recomputes(self, three_rounds):
        """Test deleting a round rebuilds totals."""
        three_rounds.delete_round(0)

        rounds = three_rounds.rounds
        assert len(rounds) == 2
        assert totals(rounds[0]) == (2, 7, 2, 7)
        assert totals(rounds[1]) == (3, 8, 3, 8)
        assert_totals_consistent(rounds)

    def test_delete_advances_session(self, three_rounds):
        """Test deleting moves the current session past the last round."""
        # Deleting inside the current session still opens a new one
        three_rounds.delete_round(2)
        assert three_rounds.current_session == 2

    def test_delete_only_round_of_latest_session(self, core):
        """Test removing session 2's only round."""
        core.add_round(5, 3)
        core.add_round(2, 7)
        core.start_new_session()
        core.add_round(1, 1)

        core.delete_round(2)
        assert core.current_session == core.rounds[-1].session + 1 == 2
        assert core.get_session_totals().mike_session_total == 0

    def test_delete_last_round_resets_session(self, core):
        """Test deleting everything restarts at session 1."""
        core.add_round(1, 2)
        core.start_new_session()
        core.start_new_session()
        core.delete_round(0)
        assert core.rounds == []
        assert core.current_session == 1

    @pytest.mark.parametrize("index", [-1, 3, True, "0"])
    def test_delete_invalid_index(self, three_rounds, index):
        """Test deleting outside the ledger fails without changes."""
        with pytest.raises(InvalidRoundIndexError):
            three_rounds.delete_round(index)
        assert len(three_rounds.rounds) == 3
        assert three_rounds.current_session == 1

    def test_invalid_index_is_index_error(self, core):
        """Test the error can be caught as a builtin IndexError."""
        with pytest.raises(IndexError):
            core.delete_round(0)


class TestRecalculate:
    """Test full total recomputation."""

    def test_idempotent(self, three_rounds):
        """Test recalculating twice gives identical totals."""
        three_rounds.start_new_session()
        three_rounds.add_round(4, -2)

        three_rounds.recalculate_all_totals()
        first = three_rounds.get_state()
        three_rounds.recalculate_all_totals()
        assert three_rounds.get_state() == first

    def test_rebuilds_session_boundaries(self, core):
        """Test session boundaries come from each round's session field."""
        core.import_rounds([
            Round(session=2, mike_score=3, preeta_score=1, mike_session_total=0,
                  preeta_session_total=0, mike_overall_total=0, preeta_overall_total=0),
            Round(session=2, mike_score=1, preeta_score=1, mike_session_total=0,
                  preeta_session_total=0, mike_overall_total=0, preeta_overall_total=0),
            Round(session=4, mike_score=2, preeta_score=5, mike_session_total=0,
                  preeta_session_total=0, mike_overall_total=0, preeta_overall_total=0),
        ])
        core.recalculate_all_totals()

        assert [totals(r) for r in core.rounds] == [
            (3, 1, 3, 1),
            (4, 2, 4, 2),
            (2, 5, 6, 7),
        ]
        assert_totals_consistent(core.rounds)

    def test_invariant_after_mixed_mutations(self, core):
        """Test totals stay consistent through a sequence of mutations."""
        core.add_round(3, 9)
        core.add_round(-1, 4)
        core.start_new_session()
        core.add_round(7, 0)
        core.add_round(2, 2)
        core.edit_round(1, 6, 6)
        core.start_new_session()
        core.add_round(0, 12)
        core.delete_round(2)
        core.add_round(5, 5)

        assert_totals_consistent(core.rounds)


class TestDerivedValues:
    """Test totals, deltas, formatting and anger levels."""

    def test_totals_empty(self, core):
        """Test totals on an empty ledger."""
        assert core.get_session_totals().mike_session_total == 0
        assert core.get_overall_totals().preeta_overall_total == 0
        assert core.get_session_delta() == 0
        assert core.get_overall_delta() == 0

    def test_session_totals_after_new_session(self, three_rounds):
        """Test an empty current session has zero totals."""
        three_rounds.start_new_session()
        session = three_rounds.get_session_totals()
        overall = three_rounds.get_overall_totals()

        assert (session.mike_session_total, session.preeta_session_total) == (0, 0)
        assert (overall.mike_overall_total, overall.preeta_overall_total) == (8, 11)

    def test_deltas(self, three_rounds):
        """Test delta is Mike minus Preeta."""
        assert three_rounds.get_session_delta() == 8 - 11
        assert three_rounds.get_overall_delta() == -3

    @pytest.mark.parametrize("delta,expected", [
        (7, "+7 (Mike)"),
        (-4, "+4 (Preeta)"),
        (0, "0 (Tied)"),
    ])
    def test_format_delta(self, core, delta, expected):
        """Test delta text always leads with a plus and the player."""
        assert core.format_delta(delta) == expected

    def test_format_delta_custom_names(self):
        """Test delta text uses configured player names."""
        core = CambioTrackerCore(players=PlayerNames(player_one="Ana", player_two="Ben"))
        assert core.format_delta(3) == "+3 (Ana)"
        assert core.format_delta(-3) == "+3 (Ben)"

    @pytest.mark.parametrize("delta,expected", [
        (0, (AngerLevel.NEUTRAL, AngerLevel.NEUTRAL)),
        (9, (AngerLevel.NEUTRAL, AngerLevel.NEUTRAL)),
        (10, (AngerLevel.ANNOYED, AngerLevel.NEUTRAL)),
        (19, (AngerLevel.ANNOYED, AngerLevel.NEUTRAL)),
        (20, (AngerLevel.ANGRY, AngerLevel.NEUTRAL)),
        (-9, (AngerLevel.NEUTRAL, AngerLevel.NEUTRAL)),
        (-10, (AngerLevel.NEUTRAL, AngerLevel.ANNOYED)),
        (-25, (AngerLevel.NEUTRAL, AngerLevel.ANGRY)),
    ])
    def test_anger_levels(self, core, delta, expected):
        """Test the losing player's mood follows the session delta."""
        if delta >= 0:
            core.add_round(delta, 0)
        else:
            core.add_round(0, -delta)

        levels = core.get_anger_levels()
        assert (levels.mike_anger, levels.preeta_anger) == expected

    def test_anger_uses_session_not_overall(self, core):
        """Test a new session calms everyone down."""
        core.add_round(30, 0)
        assert core.get_anger_levels().mike_anger == AngerLevel.ANGRY

        core.start_new_session()
        levels = core.get_anger_levels()
        assert levels.mike_anger == AngerLevel.NEUTRAL
        assert levels.preeta_anger == AngerLevel.NEUTRAL

    def test_anger_custom_thresholds(self):
        """Test configured thresholds."""
        core = CambioTrackerCore(thresholds=AngerThresholds(annoyed=2, angry=4))
        core.add_round(0, 3)
        assert core.get_anger_levels().preeta_anger == AngerLevel.ANNOYED

    def test_rounds_reversed(self, three_rounds):
        """Test newest-first view leaves the ledger alone."""
        original = list(three_rounds.rounds)
        reversed_rounds = three_rounds.get_rounds_reversed()

        assert [r.mike_score for r in reversed_rounds] == [1, 2, 5]
        assert three_rounds.rounds == original
        assert list(reversed(reversed_rounds)) == original
        assert three_rounds.get_rounds_reversed() == reversed_rounds


class TestStateAndImport:
    """Test state round-tripping, import and clearing."""

    def test_clear_all_data(self, three_rounds):
        """Test clearing resets to an empty ledger."""
        three_rounds.start_new_session()
        three_rounds.clear_all_data()
        assert three_rounds.rounds == []
        assert three_rounds.current_session == 1

    def test_get_state_is_a_copy(self, three_rounds):
        """Test mutating a state copy doesn't touch the ledger."""
        state = three_rounds.get_state()
        state.rounds[0].mike_score = 99
        state.rounds.clear()

        assert three_rounds.rounds[0].mike_score == 5
        assert len(three_rounds.rounds) == 3

    def test_load_state_round_trip(self, three_rounds):
        """Test a saved state restores an identical ledger."""
        three_rounds.start_new_session()
        restored = CambioTrackerCore(three_rounds.get_state())

        assert restored.rounds == three_rounds.rounds
        assert restored.current_session == 2

    def test_load_state_from_camel_case_blob(self, core):
        """Test loading the stored JSON shape."""
        core.load_state({
            'rounds': [{
                'session': 1, 'mikeScore': 4, 'preetaScore': 2,
                'mikeSessionTotal': 4, 'preetaSessionTotal': 2,
                'mikeOverallTotal': 4, 'preetaOverallTotal': 2,
            }],
            'currentSession': 3,
        })
        assert core.rounds[0].mike_score == 4
        assert core.current_session == 3

    @pytest.mark.parametrize("data", [{}, {'rounds': None, 'currentSession': None},
                                      {'currentSession': 0}])
    def test_load_state_defaults(self, three_rounds, data):
        """Test absent fields default to an empty first session."""
        three_rounds.load_state(data)
        assert three_rounds.rounds == []
        assert three_rounds.current_session == 1

    def test_load_state_none_is_noop(self, three_rounds):
        """Test loading nothing keeps the ledger."""
        three_rounds.load_state(None)
        assert len(three_rounds.rounds) == 3

    def test_load_state_invalid(self, three_rounds):
        """Test a malformed state is rejected without changes."""
        with pytest.raises(ValidationError):
            three_rounds.load_state({'rounds': [{'session': 1}], 'currentSession': 1})
        assert len(three_rounds.rounds) == 3

    def test_import_trusts_cached_totals(self, core):
        """Test import keeps totals as given."""
        inconsistent = Round(session=3, mike_score=1, preeta_score=1,
                             mike_session_total=50, preeta_session_total=60,
                             mike_overall_total=70, preeta_overall_total=80)
        core.import_rounds([inconsistent])

        assert totals(core.rounds[0]) == (50, 60, 70, 80)
        assert core.current_session == 4
        assert core.get_session_totals().mike_session_total == 0
        assert core.get_overall_totals().preeta_overall_total == 80

    def test_import_empty(self, three_rounds):
        """Test importing nothing empties the ledger."""
        three_rounds.import_rounds([])
        assert three_rounds.rounds == []
        assert three_rounds.current_session == 1

    def test_import_invalid_round_leaves_state(self, three_rounds):
        """Test a bad imported record aborts the whole import."""
        with pytest.raises(ValidationError):
            three_rounds.import_rounds([{'session': 0, 'mikeScore': 1}])
        assert len(three_rounds.rounds) == 3

    def test_instances_are_independent(self):
        """Test two ledgers share no state."""
        first = CambioTrackerCore()
        second = CambioTrackerCore()
        first.add_round(1, 1)
        assert second.rounds == []
