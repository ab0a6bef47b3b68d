"""
Import Report Export Tests
==========================
Run with: pytest tests/test_report_export.py -v
"""

import sys
from pathlib import Path

import pandas as pd

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from orgchart.importer import analyse_import, report_to_frames, write_report_csvs

CSV_TEXT = "\n".join([
    "Payments,Core,Settlement,Engineer,Offshore,TCS,Ann Lee",
    "Payments,Core,Settlement,Architect,Onshore,M&S,Ivy",
    "Payments,Mobile,Wallet,Engineer,Onshore,M&S,Bo Chen",
    "broken,line",
])


def test_report_to_frames(sample_portfolio):
    report = analyse_import(CSV_TEXT, sample_portfolio).report
    frames = report_to_frames(report)

    changes = frames['team_changes']
    # 1 added + 4 removed on Settlement
    assert len(changes) == 5
    assert list(changes['change']) == ['added', 'removed', 'removed', 'removed', 'removed']
    assert set(changes['app_team']) == {'Settlement'}

    skipped = frames['skipped_rows']
    assert list(skipped['name']) == ['Ivy', 'Bo Chen']
    assert len(frames['unmatched_teams']) == 1
    assert frames['malformed_lines'].iloc[0]['line_number'] == 4


def test_empty_report_keeps_columns(sample_portfolio):
    frames = report_to_frames(analyse_import("", sample_portfolio).report)
    assert all(frame.empty for frame in frames.values())
    assert 'reason' in frames['skipped_rows'].columns


def test_write_report_csvs(tmp_path, sample_portfolio):
    report = analyse_import(CSV_TEXT, sample_portfolio).report
    paths = write_report_csvs(report, tmp_path / "reports")

    assert set(paths) == {'team_changes', 'skipped_rows', 'unmatched_teams', 'malformed_lines'}
    for path in paths.values():
        assert path.exists()

    unmatched = pd.read_csv(paths['unmatched_teams'])
    assert unmatched.iloc[0]['csv_team'] == 'Wallet'
    print(f"✓ Wrote {len(paths)} report tables")
