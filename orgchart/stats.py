"""
OrgChart Interchange - Headcount Statistics
===========================================
Headcount breakdowns for a portfolio or a whole org document: totals by
role, location and employment type, plus the senior-plus ratio.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List

from orgchart.models import EmployeeType, Group, Location, OrgData, Person, Portfolio, Role

# Everyone except plain engineers
SENIOR_PLUS_ROLES = (
    Role.SENIOR_ENGINEER,
    Role.STAFF_ENGINEER,
    Role.ENGINEERING_MANAGER,
    Role.HEAD_OF_ENGINEERING,
    Role.PRINCIPAL_ENGINEER,
)


def _pct(count: int, total: int) -> float:
    return (count / total) * 100 if total > 0 else 0.0


@dataclass
class OrgStats:
    total_engineers: int = 0
    senior_plus_count: int = 0
    by_role: Dict[Role, int] = field(default_factory=lambda: {r: 0 for r in Role})
    by_location: Dict[Location, int] = field(default_factory=lambda: {loc: 0 for loc in Location})
    by_type: Dict[EmployeeType, int] = field(default_factory=lambda: {t: 0 for t in EmployeeType})

    @property
    def senior_plus_ratio(self) -> float:
        return _pct(self.senior_plus_count, self.total_engineers)

    @property
    def location_percentages(self) -> Dict[Location, float]:
        return {loc: _pct(n, self.total_engineers) for loc, n in self.by_location.items()}

    @property
    def type_percentages(self) -> Dict[EmployeeType, float]:
        return {t: _pct(n, self.total_engineers) for t, n in self.by_type.items()}

    def to_dict(self):
        return {
            'total_engineers': self.total_engineers,
            'senior_plus_count': self.senior_plus_count,
            'senior_plus_ratio': self.senior_plus_ratio,
            'by_role': {r.value: n for r, n in self.by_role.items()},
            'by_location': {loc.value: n for loc, n in self.by_location.items()},
            'location_percentages': {loc.value: p for loc, p in self.location_percentages.items()},
            'by_type': {t.value: n for t, n in self.by_type.items()},
            'type_percentages': {t.value: p for t, p in self.type_percentages.items()},
        }


def _group_people(group: Group) -> Iterator[Person]:
    if group.manager:
        yield group.manager
    yield from group.staff_engineers
    for team in group.teams:
        yield from team.members


def portfolio_people(portfolio: Portfolio) -> List[Person]:
    """Every person in a portfolio, leadership first."""
    people = []
    if portfolio.head_of_engineering:
        people.append(portfolio.head_of_engineering)
    people.extend(portfolio.principal_engineers)
    for _, group in portfolio.iter_groups():
        people.extend(_group_people(group))
    return people


def calculate_stats(org: OrgData) -> OrgStats:
    stats = OrgStats()
    for portfolio in org.portfolios:
        for person in portfolio_people(portfolio):
            stats.total_engineers += 1
            stats.by_role[person.role] += 1
            stats.by_type[person.type] += 1
            stats.by_location[person.location or Location.ONSHORE] += 1

    stats.senior_plus_count = sum(stats.by_role[r] for r in SENIOR_PLUS_ROLES)
    return stats


def calculate_portfolio_stats(portfolio: Portfolio) -> OrgStats:
    return calculate_stats(OrgData(portfolios=[portfolio]))
