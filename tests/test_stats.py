"""
Portfolio Statistics Tests
==========================
Run with: pytest tests/test_stats.py -v
"""

import sys
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from orgchart.models import EmployeeType, Location, OrgData, Portfolio, Role
from orgchart.stats import calculate_portfolio_stats, calculate_stats, portfolio_people


def test_totals_match_people_in_tree(sample_portfolio):
    stats = calculate_portfolio_stats(sample_portfolio)

    assert stats.total_engineers == len(portfolio_people(sample_portfolio)) == 10
    assert stats.by_role[Role.ENGINEER] == 2
    assert stats.by_role[Role.SENIOR_ENGINEER] == 3
    assert stats.by_role[Role.STAFF_ENGINEER] == 2
    assert stats.senior_plus_count == 8
    assert stats.senior_plus_ratio == pytest.approx(80.0)
    print(f"✓ {stats.total_engineers} engineers, {stats.senior_plus_ratio:.0f}% senior+")


def test_location_and_type_breakdown(sample_portfolio):
    stats = calculate_portfolio_stats(sample_portfolio)

    assert stats.by_location[Location.OFFSHORE] == 3
    assert stats.by_location[Location.NEARSHORE] == 1
    assert stats.by_location[Location.ONSHORE] == 6
    assert stats.by_type[EmployeeType.CONTRACTOR] == 4
    assert stats.location_percentages[Location.ONSHORE] == pytest.approx(60.0)


def test_to_dict_uses_enum_values(sample_portfolio):
    data = calculate_portfolio_stats(sample_portfolio).to_dict()
    assert data['by_role']['senior_engineer'] == 3
    assert data['by_type']['employee'] == 6


def test_empty_org():
    stats = calculate_stats(OrgData(portfolios=[Portfolio(id="p", name="Empty")]))
    assert stats.total_engineers == 0
    assert stats.senior_plus_ratio == 0.0
    assert stats.type_percentages[EmployeeType.EMPLOYEE] == 0.0
