"""
CSV export and import of rounds.

The format is fixed: a header row followed by one comma-separated row of
integers per round, oldest first, joined with newlines and no quoting.
"""

import re
from datetime import date, datetime, timezone
from typing import List, Optional, Sequence

from pydantic import ValidationError

from .exceptions import CSVParseError
from .models import Round


CSV_HEADERS = [
    'Session',
    'Mike_Score',
    'Preeta_Score',
    'Mike_Session_Total',
    'Preeta_Session_Total',
    'Mike_Overall_Total',
    'Preeta_Overall_Total',
]

_FIELDS = [
    'session',
    'mike_score',
    'preeta_score',
    'mike_session_total',
    'preeta_session_total',
    'mike_overall_total',
    'preeta_overall_total',
]

_INTEGER = re.compile(r'-?[0-9]+', re.ASCII)


def export_to_csv(rounds: Sequence[Round]) -> Optional[str]:
    """
    Encode rounds as CSV text.

    Returns:
        The CSV content, or None if there are no rounds
    """
    if not rounds:
        return None

    lines = [','.join(CSV_HEADERS)]
    lines.extend(','.join(str(v) for v in r.as_row()) for r in rounds)
    return '\n'.join(lines)


def _parse_int(text: str) -> int:
    # ASCII digits with an optional leading minus only
    text = text.strip()
    if not _INTEGER.fullmatch(text):
        raise ValueError(f"not an integer: {text!r}")
    return int(text)


def parse_csv(content: str) -> List[Round]:
    """
    Decode CSV text into rounds.

    The first line is taken as the header and skipped. Blank lines are
    ignored. Either every data line parses or nothing is returned.

    Raises:
        CSVParseError: If the content is empty, has no data lines, or a data
            line does not hold exactly seven integers
    """
    if not content or not isinstance(content, str):
        raise CSVParseError("Invalid CSV content")

    data_lines = [line for line in content.split('\n')[1:] if line.strip()]
    if not data_lines:
        raise CSVParseError("No data found in CSV")

    rounds = []
    for index, line in enumerate(data_lines):
        line_number = index + 2
        try:
            values = [_parse_int(v) for v in line.split(',')]
            if len(values) != len(_FIELDS):
                raise ValueError(f"expected {len(_FIELDS)} values, got {len(values)}")
            rounds.append(Round(**dict(zip(_FIELDS, values))))
        except (ValueError, ValidationError) as e:
            raise CSVParseError(f"Invalid data at line {line_number}", line_number) from e

    return rounds


def generate_csv_filename(today: Optional[date] = None) -> str:
    """
    Build the export filename for a date.

    Args:
        today: Date to stamp. Defaults to the current UTC date.
    """
    if today is None:
        today = datetime.now(timezone.utc).date()
    return f"cambio_scores_{today.isoformat()}.csv"
