"""
OrgChart Interchange - Markdown Parser
======================================
Parses a (possibly hand-edited) markdown document back into a portfolio.

Key Features:
- Single forward scan with an explicit context stack of
  (DIVISION | GROUP | TEAM) frames; "###" means group inside a division
  and team inside a direct group
- Every error carries the 1-based line it came from
- Scanning never stops at the first error
- All-or-nothing: a document with any error yields no portfolio
- Fresh identifiers for every entity (no identity carried across edits)
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, NamedTuple, Optional, Tuple, Union

from orgchart.models import (
    DEFAULT_ONSHORE_TARGET,
    Division,
    EmployeeType,
    Group,
    IdFactory,
    Location,
    Person,
    Portfolio,
    Role,
    Team,
    build_person,
    new_id,
    role_from_label,
)
from orgchart.markdown.generator import UNNAMED

logger = logging.getLogger(__name__)

# Heading and line patterns (matched against the stripped line)
H1_PATTERN = re.compile(r'^#\s+(.+)$')
H2_PATTERN = re.compile(r'^##\s+(.+)$')
H3_PATTERN = re.compile(r'^###\s+(.+)$')
H4_PATTERN = re.compile(r'^####\s+(.+)$')
TARGET_PATTERN = re.compile(r'\((\d+)%\s*onshore\s*target\)\s*$', re.IGNORECASE)
DIVISION_PATTERN = re.compile(r'^Division:\s*(.+)$', re.IGNORECASE)
HEAD_PATTERN = re.compile(r'^Head of Engineering:\s*(.+)$', re.IGNORECASE)
PRINCIPAL_PATTERN = re.compile(r'^Principal Engineer:\s*(.+)$', re.IGNORECASE)
MANAGER_PATTERN = re.compile(r'^Manager:\s*(.+)$', re.IGNORECASE)
MANAGED_BY_PATTERN = re.compile(r'^Managed by:\s*(.+)$', re.IGNORECASE)
STAFF_PATTERN = re.compile(r'^Staff:\s*(.+)$', re.IGNORECASE)
LIST_ITEM_PATTERN = re.compile(r'^-\s+(.+)$')
PROPS_PATTERN = re.compile(r'\[([^\]]*)\]\s*$')
QUANTITY_PATTERN = re.compile(r'^(\d+)x\s+(.+)$', re.IGNORECASE)

# Comment / decoration prefixes that are never errors
IGNORED_PREFIXES = ('>', '---', '<!--')


# ============================================================================
# RESULT TYPES
# ============================================================================

@dataclass
class ParseError:
    line: int
    message: str

    def __str__(self) -> str:
        return f"Line {self.line}: {self.message}"

    def to_dict(self):
        return {'line': self.line, 'message': self.message}


@dataclass
class PortfolioUpdate:
    """Portfolio content decoded from a document (everything but the id)."""
    name: str
    onshore_target_percentage: int = DEFAULT_ONSHORE_TARGET
    head_of_engineering: Optional[Person] = None
    principal_engineers: List[Person] = field(default_factory=list)
    divisions: List[Division] = field(default_factory=list)
    groups: List[Group] = field(default_factory=list)

    def apply_to(self, portfolio: Portfolio) -> Portfolio:
        """Return a new Portfolio with this content and the given portfolio's id."""
        return Portfolio(
            id=portfolio.id,
            name=self.name,
            head_of_engineering=self.head_of_engineering,
            principal_engineers=list(self.principal_engineers),
            divisions=list(self.divisions),
            groups=list(self.groups),
            onshore_target_percentage=self.onshore_target_percentage,
        )

    def to_portfolio(self, id_factory: IdFactory = new_id) -> Portfolio:
        return self.apply_to(Portfolio(id=id_factory(), name=self.name))


@dataclass
class DecodeResult:
    portfolio: Optional[PortfolioUpdate] = None
    errors: List[ParseError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.portfolio is not None and not self.errors


# ============================================================================
# PERSON LINES
# ============================================================================

class PersonLineError(ValueError):
    """A person line that cannot be interpreted."""


class PersonDraft(NamedTuple):
    role: Role
    type: EmployeeType
    location: Location
    vendor: Optional[str]
    name: Optional[str] = None

    def build(self, id_factory: IdFactory) -> Person:
        return build_person(
            role=self.role,
            type=self.type,
            location=self.location,
            vendor=self.vendor,
            name=self.name,
            id_factory=id_factory,
        )


def parse_props(inner: str) -> Tuple[EmployeeType, Location, Optional[str]]:
    """
    Interpret the text between brackets, e.g. "contractor, offshore, TCS".

    "contractor"/"employee" set the type, a location word sets the location,
    anything else is the vendor. Employees are always onshore with no vendor.
    """
    emp_type = EmployeeType.EMPLOYEE
    location = Location.ONSHORE
    vendor = None

    for part in (p.strip() for p in inner.split(',')):
        if not part:
            continue
        lower = part.lower()
        if lower == EmployeeType.CONTRACTOR.value:
            emp_type = EmployeeType.CONTRACTOR
        elif lower == EmployeeType.EMPLOYEE.value:
            emp_type = EmployeeType.EMPLOYEE
        elif lower in (loc.value for loc in Location):
            location = Location(lower)
        else:
            vendor = part

    if emp_type == EmployeeType.EMPLOYEE:
        location = Location.ONSHORE
        vendor = None

    return emp_type, location, vendor


def split_props(text: str) -> Tuple[str, Tuple[EmployeeType, Location, Optional[str]]]:
    """Split "main part [props]" into the main part and parsed props."""
    match = PROPS_PATTERN.search(text)
    if not match:
        return text, (EmployeeType.EMPLOYEE, Location.ONSHORE, None)
    return text[:match.start()].strip(), parse_props(match.group(1))


def _lookup_role(label: str) -> Role:
    role = role_from_label(label)
    if role is None:
        raise PersonLineError(f'Unknown role "{label.strip()}"')
    return role


def parse_person_line(text: str) -> List[PersonDraft]:
    """
    Parse a team member line.

    Accepted forms:
        "3x Senior Engineer [contractor, offshore, TCS]"  -> 3 unnamed people
        "Jane Doe, Engineer [contractor]"                  -> 1 named person
        "Staff Engineer"                                   -> 1 unnamed person

    Raises:
        PersonLineError: Empty line or unknown role label
    """
    trimmed = text.strip()
    if not trimmed:
        raise PersonLineError('Empty person line')

    main_part, (emp_type, location, vendor) = split_props(trimmed)

    quantity = QUANTITY_PATTERN.match(main_part)
    if quantity:
        count = int(quantity.group(1))
        role = _lookup_role(quantity.group(2))
        return [PersonDraft(role, emp_type, location, vendor) for _ in range(count)]

    # Names cannot contain commas; role labels never do
    comma = main_part.rfind(',')
    if comma != -1:
        name = main_part[:comma].strip()
        role = _lookup_role(main_part[comma + 1:])
        return [PersonDraft(role, emp_type, location, vendor, name or None)]

    role = _lookup_role(main_part)
    return [PersonDraft(role, emp_type, location, vendor)]


def parse_leader_line(text: str, slot_role: Role, label: str) -> PersonDraft:
    """
    Parse the person after a leadership prefix ("Manager:", "Staff:", ...).

    Accepts "Name, Role [props]" or "Name [props]"; when the full person form
    does not parse, the whole remainder is taken as the name. The slot
    decides the role.

    Raises:
        PersonLineError: Missing details, or a quantity yielding several people
    """
    remainder = text.strip()
    if not remainder:
        raise PersonLineError(f'Missing person details after "{label}"')

    try:
        drafts = parse_person_line(remainder)
    except PersonLineError:
        main_part, (emp_type, location, vendor) = split_props(remainder)
        name = re.sub(r',\s*$', '', main_part).strip()
        drafts = [PersonDraft(slot_role, emp_type, location, vendor, name or None)]

    if len(drafts) != 1:
        raise PersonLineError(f'Expected exactly one person for "{label}"')

    draft = drafts[0]
    name = None if draft.name == UNNAMED else draft.name
    return draft._replace(role=slot_role, name=name)


# ============================================================================
# DOCUMENT PARSER
# ============================================================================

class FrameKind(Enum):
    DIVISION = 1
    GROUP = 2
    TEAM = 3


@dataclass
class _Frame:
    kind: FrameKind
    node: Union[Division, Group, Team]


class MarkdownParser:
    """
    One-shot parser for a markdown document.

    The context stack only ever holds frames in DIVISION < GROUP < TEAM
    order. Opening a frame first commits every open frame at the same or a
    deeper level into its parent.
    """

    def __init__(self, id_factory: IdFactory = new_id):
        self.id_factory = id_factory
        self.errors: List[ParseError] = []
        self.portfolio_name: Optional[str] = None
        self.onshore_target = DEFAULT_ONSHORE_TARGET
        self.head_of_engineering: Optional[Person] = None
        self.principal_engineers: List[Person] = []
        self.divisions: List[Division] = []
        self.direct_groups: List[Group] = []
        self._stack: List[_Frame] = []

    # ------------------------------------------------------------------
    # Context stack
    # ------------------------------------------------------------------

    def _current(self, kind: FrameKind):
        for frame in reversed(self._stack):
            if frame.kind == kind:
                return frame.node
        return None

    def _close(self, kind: FrameKind):
        """Commit open frames at `kind`'s level or deeper."""
        while self._stack and self._stack[-1].kind.value >= kind.value:
            frame = self._stack.pop()
            parent = self._stack[-1] if self._stack else None

            if frame.kind == FrameKind.TEAM:
                parent.node.teams.append(frame.node)
            elif frame.kind == FrameKind.GROUP:
                if parent is not None and parent.kind == FrameKind.DIVISION:
                    parent.node.groups.append(frame.node)
                else:
                    self.direct_groups.append(frame.node)
            else:
                self.divisions.append(frame.node)

    def _open(self, kind: FrameKind, node):
        self._close(kind)
        self._stack.append(_Frame(kind, node))

    def _new_group(self, name: str) -> Group:
        return Group(id=self.id_factory(), name=name.strip())

    def _new_team(self, name: str) -> Team:
        return Team(id=self.id_factory(), name=name.strip())

    def _error(self, line_num: int, message: str):
        self.errors.append(ParseError(line=line_num, message=message))

    # ------------------------------------------------------------------
    # Line handlers
    # ------------------------------------------------------------------

    def _portfolio_heading(self, heading: str):
        heading = heading.strip()
        target = TARGET_PATTERN.search(heading)
        if target:
            self.onshore_target = int(target.group(1))
            self.portfolio_name = heading[:target.start()].strip()
        else:
            self.portfolio_name = heading

    def _h3(self, line_num: int, heading: str):
        if self._current(FrameKind.DIVISION) is not None:
            self._open(FrameKind.GROUP, self._new_group(heading))
        elif self._current(FrameKind.GROUP) is not None:
            self._open(FrameKind.TEAM, self._new_team(heading))
        else:
            self._error(line_num, 'Heading ### found outside expected context (no division or group)')

    def _h2(self, heading: str):
        heading = heading.strip()
        division = DIVISION_PATTERN.match(heading)
        if division:
            node = Division(id=self.id_factory(), name=division.group(1).strip())
            self._open(FrameKind.DIVISION, node)
        else:
            self._close(FrameKind.DIVISION)
            self._stack.append(_Frame(FrameKind.GROUP, self._new_group(heading)))

    def _leader(self, line_num: int, text: str, role: Role, label: str) -> Optional[Person]:
        try:
            draft = parse_leader_line(text, role, label)
        except PersonLineError as e:
            self._error(line_num, str(e))
            return None
        return draft.build(self.id_factory)

    def _leadership_line(self, line_num: int, trimmed: str) -> bool:
        head = HEAD_PATTERN.match(trimmed)
        if head:
            person = self._leader(line_num, head.group(1), Role.HEAD_OF_ENGINEERING, 'Head of Engineering:')
            if person:
                self.head_of_engineering = person
            return True

        principal = PRINCIPAL_PATTERN.match(trimmed)
        if principal:
            person = self._leader(line_num, principal.group(1), Role.PRINCIPAL_ENGINEER, 'Principal Engineer:')
            if person:
                self.principal_engineers.append(person)
            return True

        return False

    def _group_line(self, line_num: int, trimmed: str) -> bool:
        group = self._current(FrameKind.GROUP)

        manager = MANAGER_PATTERN.match(trimmed)
        if manager:
            if group is None:
                self._error(line_num, 'Manager line found outside of a group')
            else:
                person = self._leader(line_num, manager.group(1), Role.ENGINEERING_MANAGER, 'Manager:')
                if person:
                    group.manager = person
            return True

        managed_by = MANAGED_BY_PATTERN.match(trimmed)
        if managed_by:
            if group is None:
                self._error(line_num, 'Managed by line found outside of a group')
            else:
                group.managed_by = managed_by.group(1).strip()
            return True

        staff = STAFF_PATTERN.match(trimmed)
        if staff:
            if group is None:
                self._error(line_num, 'Staff line found outside of a group')
            else:
                person = self._leader(line_num, staff.group(1), Role.STAFF_ENGINEER, 'Staff:')
                if person:
                    group.staff_engineers.append(person)
            return True

        return False

    def _list_item(self, line_num: int, text: str):
        team = self._current(FrameKind.TEAM)
        if team is None:
            self._error(line_num, 'List item found outside of a team. Place it under a team heading.')
            return
        try:
            drafts = parse_person_line(text)
        except PersonLineError as e:
            self._error(line_num, str(e))
            return
        team.members.extend(draft.build(self.id_factory) for draft in drafts)

    def _line(self, line_num: int, trimmed: str):
        h1 = H1_PATTERN.match(trimmed)
        if h1:
            self._portfolio_heading(h1.group(1))
            return

        h4 = H4_PATTERN.match(trimmed)
        if h4:
            if self._current(FrameKind.GROUP) is None:
                self._error(line_num, 'Team heading (####) found outside of a group')
            else:
                self._open(FrameKind.TEAM, self._new_team(h4.group(1)))
            return

        h3 = H3_PATTERN.match(trimmed)
        if h3:
            self._h3(line_num, h3.group(1))
            return

        h2 = H2_PATTERN.match(trimmed)
        if h2:
            self._h2(h2.group(1))
            return

        # Leadership lines only before the first division/group
        if not self._stack and self._leadership_line(line_num, trimmed):
            return

        if self._group_line(line_num, trimmed):
            return

        item = LIST_ITEM_PATTERN.match(trimmed)
        if item:
            self._list_item(line_num, item.group(1))
            return

        if not trimmed.startswith(IGNORED_PREFIXES):
            self._error(line_num, f'Unrecognized line: "{trimmed}"')

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def parse(self, text: str) -> DecodeResult:
        lines = text.split('\n')
        for index, line in enumerate(lines):
            trimmed = line.strip()
            if trimmed:
                self._line(index + 1, trimmed)

        self._close(FrameKind.DIVISION)

        if not self.portfolio_name:
            self._error(1, 'Missing portfolio heading (# Portfolio Name)')

        if self.errors:
            logger.info(f"Markdown parse failed with {len(self.errors)} error(s)")
            return DecodeResult(portfolio=None, errors=self.errors)

        update = PortfolioUpdate(
            name=self.portfolio_name,
            onshore_target_percentage=self.onshore_target,
            head_of_engineering=self.head_of_engineering,
            principal_engineers=self.principal_engineers,
            divisions=self.divisions,
            groups=self.direct_groups,
        )
        logger.debug(
            f"Parsed portfolio '{update.name}' from {len(lines)} lines: "
            f"{len(update.divisions)} division(s), {len(update.groups)} direct group(s)"
        )
        return DecodeResult(portfolio=update, errors=[])


def parse_markdown(text: str, id_factory: IdFactory = new_id) -> DecodeResult:
    """
    Parse a markdown document into a PortfolioUpdate.

    Args:
        text: Document text
        id_factory: Callable minting identifiers for every parsed entity

    Returns:
        DecodeResult holding either the portfolio or the line-numbered errors
    """
    return MarkdownParser(id_factory=id_factory).parse(text)


decode = parse_markdown
