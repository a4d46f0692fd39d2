"""
Command-line interface for Cambio Score Tracker.

Provides commands for recording rounds, reviewing totals and moving score
history in and out as CSV.
"""

import sys
import logging
import argparse
from pathlib import Path
from typing import Optional

from .tracker import CambioTracker
from .config_manager import ConfigManager
from .exceptions import TrackerError


def _add_common_arguments(parser: argparse.ArgumentParser, confirm: bool = False) -> None:
    parser.add_argument(
        '--config',
        '-c',
        help='Path to config file (default: config/cambio_config.yaml)'
    )
    if confirm:
        parser.add_argument(
            '--yes',
            '-y',
            action='store_true',
            help="Don't ask for confirmation"
        )


def _load_tracker(config_path: Optional[str]) -> CambioTracker:
    tracker = CambioTracker(Path(config_path) if config_path else None)
    logging.basicConfig(
        level=tracker.config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    return tracker


def _confirm(message: str, assume_yes: bool) -> bool:
    if assume_yes:
        return True
    answer = input(f"{message} [y/N] ")
    return answer.strip().lower() in ('y', 'yes')


def _fail(message: str) -> None:
    print(f"Error: {message}")
    sys.exit(1)


def _print_totals(tracker: CambioTracker) -> None:
    session = tracker.get_session_totals()
    overall = tracker.get_overall_totals()
    players = tracker.config.players

    print(f"Session {tracker.current_session}")
    print(f"  {players.player_one}: {session.mike_session_total} "
          f"(overall {overall.mike_overall_total})")
    print(f"  {players.player_two}: {session.preeta_session_total} "
          f"(overall {overall.preeta_overall_total})")
    print(f"  Session delta: {tracker.format_delta(tracker.get_session_delta())}")


def init_project() -> None:
    """Initialize a new tracker project."""
    parser = argparse.ArgumentParser(
        description="Initialize a new Cambio Score Tracker project"
    )
    parser.add_argument(
        '--directory',
        '-d',
        default='.',
        help='Project directory (default: current directory)'
    )

    args = parser.parse_args(sys.argv[2:])

    project_dir = Path(args.directory).resolve()
    print(f"Initializing Cambio Score Tracker in {project_dir}...")

    manager = ConfigManager.initialize_project(project_dir)

    print(f"✓ Created project structure")
    print(f"✓ Saved configuration to {manager.config_path}")
    print(f"\nNext steps:")
    print(f"  1. Record a round: cambio add <mike> <preeta> -c {manager.config_path}")
    print(f"  2. Show totals: cambio stats -c {manager.config_path}")


def add_round() -> None:
    """Record a round in the current session."""
    parser = argparse.ArgumentParser(description="Record a round")
    parser.add_argument('mike_score', type=int, help="Mike's score this round")
    parser.add_argument('preeta_score', type=int, help="Preeta's score this round")
    _add_common_arguments(parser)

    args = parser.parse_args(sys.argv[2:])
    tracker = _load_tracker(args.config)

    try:
        tracker.add_round(args.mike_score, args.preeta_score)
    except TrackerError as e:
        _fail(str(e))

    print(f"✓ Recorded round {len(tracker.rounds)}")
    _print_totals(tracker)


def edit_round() -> None:
    """Change the scores of a recorded round."""
    parser = argparse.ArgumentParser(description="Edit a recorded round")
    parser.add_argument('round_number', type=int, help='Round number as shown by history')
    parser.add_argument('mike_score', type=int, help="Mike's corrected score")
    parser.add_argument('preeta_score', type=int, help="Preeta's corrected score")
    _add_common_arguments(parser)

    args = parser.parse_args(sys.argv[2:])
    tracker = _load_tracker(args.config)

    try:
        tracker.edit_round(args.round_number - 1, args.mike_score, args.preeta_score)
    except TrackerError as e:
        _fail(str(e))

    print(f"✓ Updated round {args.round_number}")
    _print_totals(tracker)


def delete_round() -> None:
    """Delete a recorded round."""
    parser = argparse.ArgumentParser(description="Delete a recorded round")
    parser.add_argument('round_number', type=int, help='Round number as shown by history')
    _add_common_arguments(parser, confirm=True)

    args = parser.parse_args(sys.argv[2:])
    tracker = _load_tracker(args.config)

    if not _confirm(f"Delete round {args.round_number}?", args.yes):
        print("Cancelled")
        return

    try:
        tracker.delete_round(args.round_number - 1)
    except TrackerError as e:
        _fail(str(e))

    print(f"✓ Deleted round {args.round_number}")
    _print_totals(tracker)


def new_session() -> None:
    """Start a new session."""
    parser = argparse.ArgumentParser(description="Start a new session")
    _add_common_arguments(parser, confirm=True)

    args = parser.parse_args(sys.argv[2:])
    tracker = _load_tracker(args.config)

    if not _confirm("Are you sure you want to start a new session?", args.yes):
        print("Cancelled")
        return

    try:
        session = tracker.start_new_session()
    except TrackerError as e:
        _fail(str(e))
    print(f"✓ Started session {session}")


def show_stats() -> None:
    """Show totals, deltas and moods."""
    parser = argparse.ArgumentParser(description="Show game statistics")
    _add_common_arguments(parser)

    args = parser.parse_args(sys.argv[2:])
    tracker = _load_tracker(args.config)

    stats = tracker.get_stats()
    players = tracker.config.players
    anger = tracker.get_anger_levels()

    print("\nCambio Statistics")
    print("=" * 60)
    print(f"Current session: {stats['currentSession']}")
    print(f"Rounds recorded: {stats['totalRounds']}")
    print(f"\nSession delta: {stats['sessionDeltaText']}")
    print(f"Total delta:   {stats['overallDeltaText']}")
    print(f"\n{players.player_one}:")
    print(f"  Session: {stats['sessionTotals']['mikeSessionTotal']}")
    print(f"  Overall: {stats['overallTotals']['mikeOverallTotal']}")
    print(f"  Mood: {anger.mike_anger.value}")
    print(f"\n{players.player_two}:")
    print(f"  Session: {stats['sessionTotals']['preetaSessionTotal']}")
    print(f"  Overall: {stats['overallTotals']['preetaOverallTotal']}")
    print(f"  Mood: {anger.preeta_anger.value}")


def show_history() -> None:
    """List recorded rounds, newest first."""
    parser = argparse.ArgumentParser(description="List recorded rounds")
    parser.add_argument(
        '--limit',
        '-n',
        type=int,
        help='Only show the most recent N rounds'
    )
    _add_common_arguments(parser)

    args = parser.parse_args(sys.argv[2:])
    tracker = _load_tracker(args.config)

    if not tracker.rounds:
        print("No rounds yet. Add your first round with 'cambio add'.")
        return

    players = tracker.config.players
    rounds = tracker.get_rounds_reversed()
    if args.limit is not None:
        rounds = rounds[:args.limit]

    header = (f"{'Round':>5} {'Session':>7} | "
              f"{players.player_one:^20} | {players.player_two:^20}")
    print(header)
    print(f"{'':>5} {'':>7} | {'Rnd':>6}{'Sess':>7}{'Total':>7} | {'Rnd':>6}{'Sess':>7}{'Total':>7}")
    print("-" * len(header))

    total = len(tracker.rounds)
    for offset, r in enumerate(rounds):
        number = total - offset
        print(f"{number:>5} {r.session:>7} | "
              f"{r.mike_score:>6}{r.mike_session_total:>7}{r.mike_overall_total:>7} | "
              f"{r.preeta_score:>6}{r.preeta_session_total:>7}{r.preeta_overall_total:>7}")


def export_scores() -> None:
    """Export the score history as CSV."""
    parser = argparse.ArgumentParser(description="Export scores to CSV")
    parser.add_argument(
        '--output-dir',
        '-o',
        help='Directory for the CSV file (default: configured export directory)'
    )
    _add_common_arguments(parser)

    args = parser.parse_args(sys.argv[2:])
    tracker = _load_tracker(args.config)

    try:
        path = tracker.export_csv(Path(args.output_dir) if args.output_dir else None)
    except TrackerError as e:
        _fail(str(e))

    print(f"✓ Exported {len(tracker.rounds)} rounds to {path}")


def import_scores() -> None:
    """Replace the score history with a CSV file."""
    parser = argparse.ArgumentParser(description="Import scores from CSV")
    parser.add_argument('csv_file', help='CSV file to import')
    _add_common_arguments(parser, confirm=True)

    args = parser.parse_args(sys.argv[2:])
    tracker = _load_tracker(args.config)

    csv_path = Path(args.csv_file)
    if not csv_path.exists():
        _fail(f"File not found: {csv_path}")

    if not _confirm("This will replace all current data. Continue?", args.yes):
        print("Cancelled")
        return

    try:
        count = tracker.import_csv(csv_path)
    except TrackerError as e:
        _fail(f"Failed to import CSV: {e}")

    print(f"✓ Imported {count} rounds")
    print(f"  Next rounds go to session {tracker.current_session}")


def clear_scores() -> None:
    """Delete every recorded round."""
    parser = argparse.ArgumentParser(description="Clear all data")
    _add_common_arguments(parser, confirm=True)

    args = parser.parse_args(sys.argv[2:])
    tracker = _load_tracker(args.config)

    if not _confirm("Are you sure you want to clear ALL data? This cannot be undone!", args.yes):
        print("Cancelled")
        return

    try:
        tracker.clear_all_data()
    except TrackerError as e:
        _fail(str(e))
    print("✓ All data cleared!")


def main() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Cambio Score Tracker - running scores for two players",
        usage="""cambio <command> [<args>]

Available commands:
   init         Initialize a new tracker project
   add          Record a round
   edit         Edit a recorded round
   delete       Delete a recorded round
   new-session  Start a new session
   stats        Show totals, deltas and moods
   history      List recorded rounds
   export       Export scores to CSV
   import       Import scores from CSV
   clear        Clear all data
"""
    )
    parser.add_argument('command', help='Command to run')

    # Parse just the command
    args = parser.parse_args(sys.argv[1:2])

    commands = {
        'init': init_project,
        'add': add_round,
        'edit': edit_round,
        'delete': delete_round,
        'new-session': new_session,
        'stats': show_stats,
        'history': show_history,
        'export': export_scores,
        'import': import_scores,
        'clear': clear_scores,
    }

    if args.command not in commands:
        print(f"Error: Unknown command '{args.command}'")
        parser.print_help()
        sys.exit(1)

    commands[args.command]()


if __name__ == '__main__':
    main()
