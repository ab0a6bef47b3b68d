"""
Markdown Parser Tests
=====================
Tests decoding of (hand-edited) markdown documents, including the
all-or-nothing error contract.

Run with: pytest tests/test_markdown_parser.py -v
"""

import sys
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from conftest import SAMPLE_MARKDOWN, counter_ids, strip_ids
from orgchart.markdown import (
    ParseError,
    PersonLineError,
    decode,
    encode,
    parse_markdown,
    parse_person_line,
)
from orgchart.models import EmployeeType, Location, Portfolio, Role
from orgchart.serialization import portfolio_to_dict


# ============================================================================
# ROUND TRIP
# ============================================================================

def test_round_trip_preserves_structure(sample_portfolio):
    """encode -> decode gives back the same tree (ids aside)."""
    result = decode(encode(sample_portfolio))

    assert result.ok, result.errors
    decoded = result.portfolio.to_portfolio()
    assert strip_ids(portfolio_to_dict(decoded)) == strip_ids(portfolio_to_dict(sample_portfolio))
    print("✓ Round trip preserved structure")


def test_re_encode_is_stable(sample_portfolio):
    decoded = decode(SAMPLE_MARKDOWN).portfolio.to_portfolio()
    assert encode(decoded) == SAMPLE_MARKDOWN


def test_apply_to_keeps_portfolio_id(sample_portfolio):
    update = decode(SAMPLE_MARKDOWN).portfolio
    replaced = update.apply_to(sample_portfolio)
    assert replaced.id == "p-payments"
    assert replaced.onshore_target_percentage == 60


def test_fresh_ids_from_factory():
    text = "# P\n\n## G\n### T\n- 2x Engineer\n"
    result = parse_markdown(text, id_factory=counter_ids("x"))

    group = result.portfolio.groups[0]
    assert group.id == "x-1"
    assert group.teams[0].id == "x-2"
    assert [m.id for m in group.teams[0].members] == ["x-3", "x-4"]


# ============================================================================
# HEADINGS & DEFAULTS
# ============================================================================

def test_default_onshore_target():
    result = decode("# Payments\n")
    assert result.ok
    assert result.portfolio.name == "Payments"
    assert result.portfolio.onshore_target_percentage == 50


def test_target_parsed_from_heading():
    result = decode("# Retail Banking (75% onshore target)\n")
    assert result.portfolio.name == "Retail Banking"
    assert result.portfolio.onshore_target_percentage == 75


def test_division_groups_and_direct_groups():
    text = "\n".join([
        "# P",
        "## Division: North",
        "### Alpha",
        "#### Team A",
        "## Bravo",
        "### Team B",
    ])
    update = decode(text).portfolio

    assert [d.name for d in update.divisions] == ["North"]
    assert [g.name for g in update.divisions[0].groups] == ["Alpha"]
    assert [t.name for t in update.divisions[0].groups[0].teams] == ["Team A"]
    assert [g.name for g in update.groups] == ["Bravo"]
    assert [t.name for t in update.groups[0].teams] == ["Team B"]


def test_comments_and_decoration_ignored():
    text = "\n".join([
        "# P",
        "> reviewed by finance",
        "---",
        "<!-- draft -->",
        "## G",
        "### T",
        "- Engineer",
    ])
    result = decode(text)
    assert result.ok
    assert len(result.portfolio.groups[0].teams[0].members) == 1


# ============================================================================
# PEOPLE
# ============================================================================

def test_quantity_expansion():
    text = "# P\n## G\n### T\n- 3x Senior Engineer [contractor, offshore, TCS]\n"
    members = decode(text).portfolio.groups[0].teams[0].members

    assert len(members) == 3
    assert len({m.id for m in members}) == 3
    for member in members:
        assert member.role == Role.SENIOR_ENGINEER
        assert member.type == EmployeeType.CONTRACTOR
        assert member.location == Location.OFFSHORE
        assert member.vendor == "TCS"
        assert member.name is None


def test_employee_invariant_enforced():
    text = "# P\n## G\n### T\n- Jane Doe, Engineer [employee, offshore, TCS]\n"
    member = decode(text).portfolio.groups[0].teams[0].members[0]

    assert member.type == EmployeeType.EMPLOYEE
    assert member.location == Location.ONSHORE
    assert member.vendor is None


def test_leader_lines():
    text = "\n".join([
        "# P",
        "Head of Engineering: Ada Lovelace",
        "Principal Engineer: Alan Turing [contractor, nearshore, Acme]",
        "## G",
        "Manager: Unnamed",
        "Staff: Barbara Liskov",
    ])
    update = decode(text).portfolio

    assert update.head_of_engineering.name == "Ada Lovelace"
    assert update.head_of_engineering.role == Role.HEAD_OF_ENGINEERING
    principal = update.principal_engineers[0]
    assert principal.role == Role.PRINCIPAL_ENGINEER
    assert principal.location == Location.NEARSHORE
    assert principal.vendor == "Acme"
    group = update.groups[0]
    assert group.manager.role == Role.ENGINEERING_MANAGER
    assert group.manager.name is None
    assert group.staff_engineers[0].name == "Barbara Liskov"


def test_managed_by_label():
    update = decode("# P\n## G\nManaged by: TPM\n").portfolio
    assert update.groups[0].managed_by == "TPM"
    assert update.groups[0].manager is None


def test_parse_person_line_forms():
    named = parse_person_line("Jane Doe, Engineer [contractor]")
    assert len(named) == 1
    assert named[0].name == "Jane Doe"
    assert named[0].type == EmployeeType.CONTRACTOR
    assert named[0].location == Location.ONSHORE

    bare = parse_person_line("staff engineer")
    assert bare[0].role == Role.STAFF_ENGINEER
    assert bare[0].name is None

    with pytest.raises(PersonLineError):
        parse_person_line("Wizard")


# ============================================================================
# ERRORS
# ============================================================================

def test_all_or_nothing_single_error():
    text = "\n".join([
        "# P",
        "## G",
        "### T",
        "- 2x Engineer",
        "- 2x Wizard",
        "- Jane Doe, Engineer",
    ])
    result = decode(text)

    assert not result.ok
    assert result.portfolio is None
    assert result.errors == [ParseError(line=5, message='Unknown role "Wizard"')]
    assert str(result.errors[0]) == 'Line 5: Unknown role "Wizard"'
    print(f"✓ Rejected with: {result.errors[0]}")


def test_all_errors_collected():
    text = "\n".join([
        "# P",
        "- Engineer",
        "Manager: Grace Hopper",
        "#### Orphan team",
        "### Orphan",
        "what is this",
    ])
    result = decode(text)

    assert result.portfolio is None
    assert [e.line for e in result.errors] == [2, 3, 4, 5, 6]
    messages = [e.message for e in result.errors]
    assert messages[0] == 'List item found outside of a team. Place it under a team heading.'
    assert messages[1] == 'Manager line found outside of a group'
    assert messages[2] == 'Team heading (####) found outside of a group'
    assert messages[3] == 'Heading ### found outside expected context (no division or group)'
    assert messages[4] == 'Unrecognized line: "what is this"'


def test_missing_heading_reported_on_line_one():
    result = decode("## G\n### T\n")
    assert result.errors == [ParseError(line=1, message='Missing portfolio heading (# Portfolio Name)')]


def test_leadership_line_inside_group_is_an_error():
    result = decode("# P\n## G\nHead of Engineering: Ada\n")
    assert result.errors[0].line == 3
    assert result.errors[0].message.startswith("Unrecognized line")


def test_leader_with_quantity_rejected():
    result = decode("# P\n## G\nStaff: 2x Staff Engineer\n")
    assert result.errors == [ParseError(line=3, message='Expected exactly one person for "Staff:"')]


def test_errors_have_no_partial_state():
    """A failed decode never mutates the caller's portfolio."""
    original = Portfolio(id="keep", name="Keep")
    result = decode("# New\n- Engineer\n")
    assert result.portfolio is None
    assert original.name == "Keep"
