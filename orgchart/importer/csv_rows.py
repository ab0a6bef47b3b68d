"""
OrgChart Interchange - CSV Row Parsing
======================================
Splits a spreadsheet extract into CsvRow records.

Expected columns:
    Portfolio, Group, TeamName, Role, Location, Vendor, Name

Team names are free text and may contain the delimiter
(e.g. "Inbound, Tax & Control"), so a line is read from both ends: the
first 2 fields and the last 4 fields are fixed, and everything in between
is rejoined into the team name.
"""

import logging
from typing import List, Tuple

from orgchart.importer.report import CsvRow, MalformedLine

logger = logging.getLogger(__name__)

MIN_FIELDS = 7
LEADING_FIELDS = 2
TRAILING_FIELDS = 4


def split_csv_line(line: str, delimiter: str = ',') -> List[str]:
    """
    Split one line into exactly 7 trimmed fields.

    Raises:
        ValueError: If the line has fewer than 7 fields
    """
    parts = line.split(delimiter)
    if len(parts) < MIN_FIELDS:
        raise ValueError(f"expected at least {MIN_FIELDS} fields, found {len(parts)}")

    head = parts[:LEADING_FIELDS]
    tail = parts[-TRAILING_FIELDS:]
    team_name = delimiter.join(parts[LEADING_FIELDS:-TRAILING_FIELDS])
    return [p.strip() for p in head + [team_name] + tail]


def scan_csv(text: str, delimiter: str = ',') -> Tuple[List[CsvRow], List[MalformedLine]]:
    """
    Parse CSV text, keeping track of lines that could not be read.

    Args:
        text: Raw CSV text (no header handling; a header row is just a row)
        delimiter: Field delimiter

    Returns:
        Tuple of (rows, malformed_lines); line numbers are 1-based physical
        lines of the input, blank lines are ignored
    """
    rows: List[CsvRow] = []
    malformed: List[MalformedLine] = []

    for index, raw_line in enumerate(text.split('\n')):
        line = raw_line.strip()
        if not line:
            continue

        line_number = index + 1
        try:
            portfolio, csv_group, team_name, role, location, vendor, name = split_csv_line(line, delimiter)
        except ValueError as e:
            malformed.append(MalformedLine(line_number=line_number, text=line, reason=f"Malformed row: {e}"))
            continue

        rows.append(CsvRow(
            portfolio=portfolio,
            csv_group=csv_group,
            team_name=team_name,
            role=role,
            location=location,
            vendor=vendor,
            name=name,
            line_number=line_number,
        ))

    if malformed:
        logger.warning(f"{len(malformed)} CSV line(s) had fewer than {MIN_FIELDS} fields and were not read")
    logger.debug(f"Parsed {len(rows)} CSV row(s)")
    return rows, malformed


def parse_csv(text: str, delimiter: str = ',') -> List[CsvRow]:
    """
    Parse CSV text into rows. Lines with fewer than 7 fields are dropped;
    use scan_csv() to see them.
    """
    rows, _ = scan_csv(text, delimiter)
    return rows
