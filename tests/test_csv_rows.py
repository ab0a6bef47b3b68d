"""
CSV Row Parsing Tests
=====================
Tests fixed-ends CSV parsing and malformed-line tracking.

Run with: pytest tests/test_csv_rows.py -v
"""

import sys
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from orgchart.importer import parse_csv, scan_csv
from orgchart.importer.csv_rows import split_csv_line


def test_simple_row():
    rows = parse_csv("Payments,Core,Settlement,Engineer,Offshore,TCS,Mr. John Smith\n")

    assert len(rows) == 1
    row = rows[0]
    assert row.portfolio == "Payments"
    assert row.csv_group == "Core"
    assert row.team_name == "Settlement"
    assert row.role == "Engineer"
    assert row.location == "Offshore"
    assert row.vendor == "TCS"
    assert row.name == "Mr. John Smith"
    assert row.line_number == 1


def test_team_name_with_commas():
    rows = parse_csv("Payments, Core ,Inbound, Tax & Control,Engineer,Onshore,M&S,Ann Lee")

    assert rows[0].team_name == "Inbound, Tax & Control"
    assert rows[0].csv_group == "Core"
    assert rows[0].name == "Ann Lee"


def test_split_keeps_both_ends_fixed():
    assert split_csv_line("a,b,c,d,e,f,g,h,i") == ["a", "b", "c,d,e", "f", "g", "h", "i"]


def test_split_rejects_short_line():
    with pytest.raises(ValueError):
        split_csv_line("a,b,c")


def test_custom_delimiter():
    rows = parse_csv("P;G;T;Engineer;Onshore;M&S;Ann", delimiter=";")
    assert rows[0].team_name == "T"


def test_blank_and_malformed_lines():
    text = "\n".join([
        "",
        "Payments,Core,Settlement,Engineer,Onshore,M&S,Ann Lee",
        "too,few,fields",
        "   ",
        "Payments,Core,Settlement,Senior Engineer,Offshore,TCS,Bo Chen",
    ])
    rows, malformed = scan_csv(text)

    assert [r.line_number for r in rows] == [2, 5]
    assert len(malformed) == 1
    assert malformed[0].line_number == 3
    assert malformed[0].text == "too,few,fields"
    assert malformed[0].reason == "Malformed row: expected at least 7 fields, found 3"
    # parse_csv drops the malformed line
    assert len(parse_csv(text)) == 2
    print(f"✓ Malformed line reported: {malformed[0].reason}")


def test_windows_line_endings():
    rows = parse_csv("P,G,T,Engineer,Onshore,M&S,Ann\r\nP,G,T,Engineer,Onshore,M&S,Bo\r\n")
    assert [r.name for r in rows] == ["Ann", "Bo"]


def test_header_row_is_just_a_row():
    rows = parse_csv("Portfolio,Group,Team,Role,Location,Vendor,Name")
    assert rows[0].role == "Role"
