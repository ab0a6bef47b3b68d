"""
OrgChart Interchange - Org Tree Models
======================================
Dataclass definitions for the engineering hierarchy:

- Person: an individual engineer or leader
- Team: a set of team members
- Group: teams under an (optional) engineering manager
- Division: optional grouping of groups
- Portfolio: top of the hierarchy, with leadership and an onshore target
- OrgData: the document root holding every portfolio

Both interchange engines build people through build_person() so that the
employee/contractor invariant holds no matter where the data came from.
"""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional


# Callable used to mint identifiers for newly created entities
IdFactory = Callable[[], str]

DEFAULT_ONSHORE_TARGET = 50


def new_id() -> str:
    """Default identifier factory (random UUID4 string)."""
    return str(uuid.uuid4())


# ============================================================================
# ENUMS
# ============================================================================

class Role(str, Enum):
    ENGINEER = "engineer"
    SENIOR_ENGINEER = "senior_engineer"
    STAFF_ENGINEER = "staff_engineer"
    ENGINEERING_MANAGER = "engineering_manager"
    HEAD_OF_ENGINEERING = "head_of_engineering"
    PRINCIPAL_ENGINEER = "principal_engineer"


class Location(str, Enum):
    ONSHORE = "onshore"
    NEARSHORE = "nearshore"
    OFFSHORE = "offshore"


class EmployeeType(str, Enum):
    EMPLOYEE = "employee"
    CONTRACTOR = "contractor"


ROLE_LABELS: Dict[Role, str] = {
    Role.ENGINEER: "Engineer",
    Role.SENIOR_ENGINEER: "Senior Engineer",
    Role.STAFF_ENGINEER: "Staff Engineer",
    Role.ENGINEERING_MANAGER: "Engineering Manager",
    Role.HEAD_OF_ENGINEERING: "Head of Engineering",
    Role.PRINCIPAL_ENGINEER: "Principal Engineer",
}

LOCATION_LABELS: Dict[Location, str] = {
    Location.ONSHORE: "Onshore",
    Location.NEARSHORE: "Nearshore",
    Location.OFFSHORE: "Offshore",
}

TYPE_LABELS: Dict[EmployeeType, str] = {
    EmployeeType.EMPLOYEE: "Employee",
    EmployeeType.CONTRACTOR: "Contractor",
}

# Roles that the CSV importer replaces wholesale on a matched team
ENGINEER_ROLES = (Role.ENGINEER, Role.SENIOR_ENGINEER)

_ROLE_BY_LABEL: Dict[str, Role] = {label.lower(): role for role, label in ROLE_LABELS.items()}


def role_from_label(label: Optional[str]) -> Optional[Role]:
    """
    Look up a role by its display label, case-insensitively.

    Examples:
        >>> role_from_label("senior engineer")
        <Role.SENIOR_ENGINEER: 'senior_engineer'>
        >>> role_from_label("Architect") is None
        True
    """
    if not label:
        return None
    return _ROLE_BY_LABEL.get(label.strip().lower())


def location_from_text(text: Optional[str]) -> Location:
    """Map free text to a Location, defaulting to onshore."""
    if not text:
        return Location.ONSHORE
    try:
        return Location(text.strip().lower())
    except ValueError:
        return Location.ONSHORE


# ============================================================================
# ORG TREE
# ============================================================================

@dataclass
class Person:
    id: str
    role: Role
    type: EmployeeType = EmployeeType.EMPLOYEE
    location: Location = Location.ONSHORE
    name: Optional[str] = None
    vendor: Optional[str] = None

    @property
    def role_label(self) -> str:
        return ROLE_LABELS[self.role]


@dataclass
class Team:
    id: str
    name: str
    members: List[Person] = field(default_factory=list)


@dataclass
class Group:
    id: str
    name: str
    manager: Optional[Person] = None
    managed_by: Optional[str] = None  # external discipline label, e.g. "TPM"
    staff_engineers: List[Person] = field(default_factory=list)
    teams: List[Team] = field(default_factory=list)


@dataclass
class Division:
    id: str
    name: str
    groups: List[Group] = field(default_factory=list)


@dataclass
class Portfolio:
    id: str
    name: str
    head_of_engineering: Optional[Person] = None
    principal_engineers: List[Person] = field(default_factory=list)
    divisions: List[Division] = field(default_factory=list)
    groups: List[Group] = field(default_factory=list)
    onshore_target_percentage: Optional[int] = None

    @property
    def onshore_target(self) -> int:
        if self.onshore_target_percentage is None:
            return DEFAULT_ONSHORE_TARGET
        return self.onshore_target_percentage

    def iter_groups(self):
        """Yield (division, group) for every group; division is None for direct groups."""
        for division in self.divisions:
            for group in division.groups:
                yield division, group
        for group in self.groups:
            yield None, group

    def find_team(self, team_id: str) -> Optional[Team]:
        for _, group in self.iter_groups():
            for team in group.teams:
                if team.id == team_id:
                    return team
        return None


@dataclass
class OrgData:
    portfolios: List[Portfolio] = field(default_factory=list)

    def get_portfolio(self, portfolio_id: str) -> Optional[Portfolio]:
        for portfolio in self.portfolios:
            if portfolio.id == portfolio_id:
                return portfolio
        return None


def build_person(
    role: Role,
    type: EmployeeType = EmployeeType.EMPLOYEE,
    location: Optional[Location] = None,
    vendor: Optional[str] = None,
    name: Optional[str] = None,
    id_factory: IdFactory = new_id,
) -> Person:
    """
    Create a Person, enforcing the employment invariant.

    Employees are always onshore with no vendor. Contractors keep the given
    location (onshore when missing) and vendor (None when blank).

    Args:
        role: Person role
        type: Employee or contractor
        location: Work location (ignored for employees)
        vendor: Supplying vendor (ignored for employees)
        name: Display name, None or blank for an unnamed position
        id_factory: Callable minting the new identifier

    Returns:
        New Person with a fresh identifier
    """
    if type == EmployeeType.EMPLOYEE:
        location = Location.ONSHORE
        vendor = None
    else:
        location = location or Location.ONSHORE
        vendor = vendor or None

    return Person(
        id=id_factory(),
        role=role,
        type=type,
        location=location,
        name=name or None,
        vendor=vendor,
    )
