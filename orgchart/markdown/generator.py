"""
OrgChart Interchange - Markdown Generator
=========================================
Renders a Portfolio as an editable markdown document.

Heading depth encodes nesting:

    # Payments (60% onshore target)
    Head of Engineering: Ada Lovelace
    Principal Engineer: Alan Turing [contractor, nearshore, Acme]

    ## Division: Core
    ### Ledger                      <- group inside a division
    Manager: Grace Hopper
    #### Settlement                 <- team inside that group
    - 3x Senior Engineer [contractor, offshore, TCS]
    - Linus Torvalds, Engineer

    ## Checkout                     <- direct group
    Managed by: TPM
    ### Basket                      <- team inside a direct group

The output is the canonical form accepted by orgchart.markdown.parser.
"""

import logging
from typing import Dict, List, Tuple

from orgchart.models import (
    ROLE_LABELS,
    Division,
    EmployeeType,
    Group,
    Location,
    Person,
    Portfolio,
)

logger = logging.getLogger(__name__)

UNNAMED = 'Unnamed'


def person_props(person: Person) -> str:
    """
    Bracketed property suffix, empty for a default (onshore) employee.

    Examples:
        contractor offshore with vendor -> " [contractor, offshore, TCS]"
        contractor onshore, no vendor  -> " [contractor]"
    """
    if person.type == EmployeeType.EMPLOYEE:
        return ''
    parts = ['contractor']
    if person.location and person.location != Location.ONSHORE:
        parts.append(person.location.value)
    if person.vendor:
        parts.append(person.vendor)
    return f" [{', '.join(parts)}]"


def named_person_line(person: Person) -> str:
    return f"{person.name or UNNAMED}, {ROLE_LABELS[person.role]}{person_props(person)}"


def leader_person_line(person: Person) -> str:
    """Leadership slot line; the role is implied by the slot."""
    return f"{person.name or UNNAMED}{person_props(person)}"


def _grouping_key(person: Person) -> Tuple[str, str, str, str]:
    location = person.location.value if person.location else Location.ONSHORE.value
    return (person.role.value, person.type.value, location, person.vendor or '')


def format_team_members(members: List[Person]) -> List[str]:
    """
    Team member list items.

    Unnamed members with identical role/type/location/vendor collapse into a
    single "Nx Role" line and come first; named members follow, one per line.
    """
    named: List[Person] = []
    unnamed: Dict[Tuple[str, str, str, str], List] = {}

    for member in members:
        if member.name:
            named.append(member)
            continue
        key = _grouping_key(member)
        if key in unnamed:
            unnamed[key][1] += 1
        else:
            unnamed[key] = [member, 1]

    lines = []
    for person, count in unnamed.values():
        prefix = f"{count}x " if count > 1 else ''
        lines.append(f"- {prefix}{ROLE_LABELS[person.role]}{person_props(person)}")

    for person in named:
        lines.append(f"- {named_person_line(person)}")

    return lines


def generate_group_markdown(group: Group, depth: int) -> str:
    lines = [f"{'#' * depth} {group.name}"]

    if group.manager:
        lines.append(f"Manager: {leader_person_line(group.manager)}")
    elif group.managed_by:
        lines.append(f"Managed by: {group.managed_by}")

    for staff in group.staff_engineers:
        lines.append(f"Staff: {leader_person_line(staff)}")

    for team in group.teams:
        lines.append('')
        lines.append(f"{'#' * (depth + 1)} {team.name}")
        lines.extend(format_team_members(team.members))

    return '\n'.join(lines)


def generate_division_markdown(division: Division) -> str:
    lines = [f"## Division: {division.name}", '']
    for i, group in enumerate(division.groups):
        if i > 0:
            lines.append('')
        lines.append(generate_group_markdown(group, 3))
    return '\n'.join(lines)


def generate_markdown(portfolio: Portfolio) -> str:
    """
    Render a portfolio as a markdown document.

    Args:
        portfolio: Portfolio snapshot (not modified)

    Returns:
        Document text ending in a single newline
    """
    lines = [f"# {portfolio.name} ({portfolio.onshore_target}% onshore target)", '']

    if portfolio.head_of_engineering:
        lines.append(f"Head of Engineering: {leader_person_line(portfolio.head_of_engineering)}")
    for principal in portfolio.principal_engineers:
        lines.append(f"Principal Engineer: {leader_person_line(principal)}")

    for division in portfolio.divisions:
        lines.append('')
        lines.append(generate_division_markdown(division))

    for group in portfolio.groups:
        lines.append('')
        lines.append(generate_group_markdown(group, 2))

    text = '\n'.join(lines) + '\n'
    logger.debug(f"Generated markdown for portfolio '{portfolio.name}': {text.count(chr(10))} lines")
    return text


encode = generate_markdown
