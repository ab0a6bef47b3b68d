"""
OrgChart Interchange - CSV Import Engine
========================================
Analyses a spreadsheet extract against a portfolio and produces a change
report plus a replacement plan.

Process:
1. Parse CSV lines into rows (malformed lines are reported, not read)
2. Group rows into (group, team) team-groups
3. Greedily match each team-group to the best unclaimed app team
4. For each match, turn Engineer / Senior Engineer rows into new members
   and slate the team's current engineers for removal
5. Emit one TeamMemberReplacement (full member list) per matched team

The portfolio is never modified. Running the same CSV twice yields the same
replacement lists, so applying an import is idempotent.
"""

import logging
from typing import List, Optional, Set, Tuple

from orgchart.config import ImportSettings
from orgchart.importer.csv_rows import scan_csv
from orgchart.importer.matching import (
    AppTeamLocation,
    CsvTeamGroup,
    MatchScore,
    best_candidate,
    describe_candidate,
    enumerate_teams,
    group_csv_rows,
)
from orgchart.importer.name_similarity import strip_honorific
from orgchart.importer.report import (
    CsvRow,
    ImportReport,
    ImportResult,
    ImportSummary,
    MatchedTeam,
    PersonChange,
    SkippedRow,
    TeamChange,
    TeamMemberReplacement,
    UnmatchedTeam,
)
from orgchart.models import (
    ENGINEER_ROLES,
    ROLE_LABELS,
    EmployeeType,
    IdFactory,
    Location,
    Person,
    Portfolio,
    Role,
    build_person,
    location_from_text,
    new_id,
    role_from_label,
)

logger = logging.getLogger(__name__)

LEADERSHIP_ROLES = (Role.PRINCIPAL_ENGINEER, Role.HEAD_OF_ENGINEERING)


def map_type_and_vendor(vendor: str, settings: ImportSettings) -> Tuple[EmployeeType, Optional[str]]:
    """Own-company vendor labels (e.g. "M&S") mean employee; anything else is a contractor."""
    if settings.is_employee_vendor(vendor):
        return EmployeeType.EMPLOYEE, None
    return EmployeeType.CONTRACTOR, vendor.strip() or None


def person_from_row(row: CsvRow, role: Role, settings: ImportSettings, id_factory: IdFactory) -> Person:
    emp_type, vendor = map_type_and_vendor(row.vendor, settings)
    location = Location.ONSHORE if emp_type == EmployeeType.EMPLOYEE else location_from_text(row.location)
    return build_person(
        role=role,
        type=emp_type,
        location=location,
        vendor=vendor,
        name=strip_honorific(row.name),
        id_factory=id_factory,
    )


class ImportAnalyser:
    """
    Single-use analysis of one CSV extract against one portfolio.

    Holds the claimed-team set and the report being built; create a new
    instance per analysis.
    """

    def __init__(
        self,
        portfolio: Portfolio,
        settings: Optional[ImportSettings] = None,
        id_factory: IdFactory = new_id,
    ):
        self.portfolio = portfolio
        self.settings = settings or ImportSettings()
        self.id_factory = id_factory
        self.report = ImportReport()
        self.replacements: List[TeamMemberReplacement] = []
        self._claimed: Set[str] = set()

    def run(self, csv_text: str) -> ImportResult:
        rows, malformed = scan_csv(csv_text, self.settings.delimiter)
        self.report.malformed_lines = malformed

        team_groups = group_csv_rows(rows)
        app_teams = enumerate_teams(self.portfolio)
        logger.info(
            f"Analysing {len(rows)} row(s) in {len(team_groups)} CSV team(s) "
            f"against {len(app_teams)} team(s) in portfolio '{self.portfolio.name}'"
        )

        for team_group in team_groups:
            app_team, match = best_candidate(team_group, app_teams, self._claimed, self.settings)
            if app_team is None or match is None or match.score < self.settings.match_threshold:
                self._unmatched(team_group, app_team, match)
                continue

            self._claimed.add(app_team.team_id)
            self._matched(team_group, app_team, match)

        self.report.summary = self._summarize()
        logger.info(
            f"Import analysis: {self.report.summary.teams_matched} matched, "
            f"{self.report.summary.teams_unmatched} unmatched, "
            f"{self.report.summary.rows_skipped} row(s) skipped"
        )
        return ImportResult(report=self.report, replacements=self.replacements)

    def _unmatched(
        self,
        team_group: CsvTeamGroup,
        app_team: Optional[AppTeamLocation],
        match: Optional[MatchScore],
    ):
        if app_team is not None and match is not None:
            reason = (
                f"Best candidate: {describe_candidate(app_team)}, "
                f"score {match.score * 100:.0f}% "
                f"(below {self.settings.match_threshold * 100:.0f}% threshold)"
            )
        else:
            reason = 'No candidate teams found in portfolio'

        logger.debug(f'Unmatched CSV team "{team_group.csv_team}": {reason}')
        self.report.unmatched_teams.append(UnmatchedTeam(
            csv_group=team_group.csv_group,
            csv_team=team_group.csv_team,
            row_count=len(team_group.rows),
            reason=reason,
        ))
        for row in team_group.rows:
            self.report.skipped_rows.append(SkippedRow(
                row=row,
                reason=f'No matching team found for "{team_group.csv_team}" in group "{team_group.csv_group}"',
            ))

    def _skip(self, row: CsvRow, reason: str):
        self.report.skipped_rows.append(SkippedRow(row=row, reason=reason))

    def _matched(self, team_group: CsvTeamGroup, app_team: AppTeamLocation, match: MatchScore):
        logger.debug(
            f'Matched CSV team "{team_group.csv_team}" to {describe_candidate(app_team)} '
            f'(score {match.score:.3f})'
        )
        matched = MatchedTeam(
            csv_group=team_group.csv_group,
            csv_team=team_group.csv_team,
            app_division=app_team.division_name,
            app_group=app_team.group_name,
            app_team=app_team.team_name,
            match_reason=match.reason,
            manager_confirmed=match.manager_confirmed,
            score=match.score,
        )

        new_members: List[Person] = []
        added: List[PersonChange] = []

        for row in team_group.rows:
            role = role_from_label(row.role)
            if role is None:
                self._skip(row, f'Unknown role: "{row.role}"')
                continue
            if role == Role.ENGINEERING_MANAGER:
                self._skip(row, 'Engineering Manager: used for matching only, not imported')
                continue
            if role == Role.STAFF_ENGINEER:
                self._skip(row, 'Staff Engineer: management layer, not imported')
                continue
            if role in LEADERSHIP_ROLES:
                self._skip(row, f'{row.role}: leadership layer, not imported')
                continue

            person = person_from_row(row, role, self.settings, self.id_factory)
            new_members.append(person)
            added.append(PersonChange(
                name=person.name or '',
                role=row.role,
                location=row.location,
                vendor=row.vendor,
                type=person.type,
            ))

        kept: List[Person] = []
        removed: List[PersonChange] = []
        existing = self.portfolio.find_team(app_team.team_id)
        for member in existing.members if existing else []:
            if member.role in ENGINEER_ROLES:
                removed.append(PersonChange(
                    name=member.name or 'Unnamed',
                    role=ROLE_LABELS[member.role],
                    location=member.location.value,
                    vendor=member.vendor or '',
                    type=member.type,
                ))
            else:
                kept.append(member)

        self.report.team_changes.append(TeamChange(match=matched, added=added, removed=removed))
        self.replacements.append(TeamMemberReplacement(
            portfolio_id=self.portfolio.id,
            division_id=app_team.division_id,
            group_id=app_team.group_id,
            team_id=app_team.team_id,
            new_members=kept + new_members,
        ))

    def _summarize(self) -> ImportSummary:
        changes = self.report.team_changes
        return ImportSummary(
            teams_matched=len(changes),
            teams_unmatched=len(self.report.unmatched_teams),
            members_added=sum(len(c.added) for c in changes),
            members_removed=sum(len(c.removed) for c in changes),
            rows_skipped=len(self.report.skipped_rows),
            malformed_lines=len(self.report.malformed_lines),
        )


def analyse_import(
    csv_text: str,
    portfolio: Portfolio,
    settings: Optional[ImportSettings] = None,
    id_factory: IdFactory = new_id,
) -> ImportResult:
    """
    Analyse CSV data against a portfolio.

    Args:
        csv_text: Raw CSV text (Portfolio, Group, Team, Role, Location, Vendor, Name)
        portfolio: Portfolio snapshot to match against (not modified)
        settings: Scoring/mapping settings, defaults when None
        id_factory: Callable minting identifiers for imported people

    Returns:
        ImportResult with the report and one replacement per matched team
    """
    return ImportAnalyser(portfolio, settings=settings, id_factory=id_factory).run(csv_text)
