"""
Markdown Generator Tests
========================
Tests the portfolio -> markdown rendering.

Run with: pytest tests/test_markdown_generator.py -v
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from conftest import SAMPLE_MARKDOWN
from orgchart.markdown import encode, generate_markdown
from orgchart.markdown.generator import format_team_members, person_props
from orgchart.models import EmployeeType, Location, Person, Portfolio, Role


def test_sample_portfolio_document(sample_portfolio):
    """Full document layout for a portfolio with a division and a direct group."""
    assert generate_markdown(sample_portfolio) == SAMPLE_MARKDOWN
    print("✓ Sample portfolio rendered")


def test_encode_alias(sample_portfolio):
    assert encode(sample_portfolio) == generate_markdown(sample_portfolio)


def test_missing_target_renders_default():
    portfolio = Portfolio(id="p", name="Empty")
    assert generate_markdown(portfolio) == "# Empty (50% onshore target)\n\n"


def test_person_props():
    employee = Person(id="1", role=Role.ENGINEER)
    onshore_contractor = Person(id="2", role=Role.ENGINEER, type=EmployeeType.CONTRACTOR)
    offshore = Person(id="3", role=Role.ENGINEER, type=EmployeeType.CONTRACTOR,
                      location=Location.OFFSHORE, vendor="TCS")

    assert person_props(employee) == ""
    assert person_props(onshore_contractor) == " [contractor]"
    assert person_props(offshore) == " [contractor, offshore, TCS]"


def test_unnamed_members_collapse_before_named():
    members = [
        Person(id="1", role=Role.ENGINEER, name="Zoe"),
        Person(id="2", role=Role.ENGINEER),
        Person(id="3", role=Role.SENIOR_ENGINEER),
        Person(id="4", role=Role.ENGINEER),
        Person(id="5", role=Role.ENGINEER, type=EmployeeType.CONTRACTOR),
    ]

    assert format_team_members(members) == [
        "- 2x Engineer",
        "- Senior Engineer",
        "- Engineer [contractor]",
        "- Zoe, Engineer",
    ]


def test_unnamed_leader_renders_placeholder():
    portfolio = Portfolio(
        id="p",
        name="Ops",
        head_of_engineering=Person(id="h", role=Role.HEAD_OF_ENGINEERING),
        onshore_target_percentage=70,
    )
    text = generate_markdown(portfolio)
    assert "Head of Engineering: Unnamed\n" in text
    assert text.startswith("# Ops (70% onshore target)\n")
