"""
OrgChart Interchange - Import Report Export
===========================================
Flattens an ImportReport into pandas DataFrames and writes them as CSV files
for review in a spreadsheet.
"""

import logging
from pathlib import Path
from typing import Dict, Union

import pandas as pd

from orgchart.importer.report import ImportReport

logger = logging.getLogger(__name__)

TEAM_CHANGE_COLUMNS = [
    'csv_group', 'csv_team', 'app_division', 'app_group', 'app_team',
    'manager_confirmed', 'score', 'change', 'name', 'role', 'location', 'vendor', 'type',
]
SKIPPED_COLUMNS = [
    'line_number', 'portfolio', 'csv_group', 'team_name', 'role', 'location', 'vendor', 'name', 'reason',
]
UNMATCHED_COLUMNS = ['csv_group', 'csv_team', 'row_count', 'reason']
MALFORMED_COLUMNS = ['line_number', 'text', 'reason']


def report_to_frames(report: ImportReport) -> Dict[str, pd.DataFrame]:
    """
    Build one DataFrame per report table.

    team_changes has one row per added or removed person, labelled in the
    'change' column.
    """
    change_records = []
    for change in report.team_changes:
        match = change.match.to_dict()
        base = {k: match[k] for k in TEAM_CHANGE_COLUMNS[:7]}
        for label, people in (('added', change.added), ('removed', change.removed)):
            for person in people:
                change_records.append({**base, 'change': label, **person.to_dict()})

    skipped_records = [{**s.row.to_dict(), 'reason': s.reason} for s in report.skipped_rows]

    return {
        'team_changes': pd.DataFrame(change_records, columns=TEAM_CHANGE_COLUMNS),
        'skipped_rows': pd.DataFrame(skipped_records, columns=SKIPPED_COLUMNS),
        'unmatched_teams': pd.DataFrame(
            [u.to_dict() for u in report.unmatched_teams], columns=UNMATCHED_COLUMNS
        ),
        'malformed_lines': pd.DataFrame(
            [m.to_dict() for m in report.malformed_lines], columns=MALFORMED_COLUMNS
        ),
    }


def write_report_csvs(report: ImportReport, out_dir: Union[str, Path]) -> Dict[str, Path]:
    """
    Write every report table as <out_dir>/<table>.csv.

    Returns:
        Mapping of table name to written path
    """
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    written = {}
    for name, frame in report_to_frames(report).items():
        path = out_dir / f"{name}.csv"
        frame.to_csv(path, index=False)
        written[name] = path
        logger.info(f"Wrote {len(frame)} row(s) to {path}")
    return written
