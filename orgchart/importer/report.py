"""
OrgChart Interchange - Import Report Types
==========================================
Dataclasses produced by the CSV import engine. None of them are persisted;
they describe what an import would change so that a reviewer (or the apply
layer) can act on it.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from orgchart.models import EmployeeType, Person
from orgchart.serialization import person_to_dict


@dataclass
class CsvRow:
    """One spreadsheet row: Portfolio, Group, Team, Role, Location, Vendor, Name"""
    portfolio: str
    csv_group: str
    team_name: str
    role: str
    location: str
    vendor: str
    name: str
    line_number: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'portfolio': self.portfolio,
            'csv_group': self.csv_group,
            'team_name': self.team_name,
            'role': self.role,
            'location': self.location,
            'vendor': self.vendor,
            'name': self.name,
            'line_number': self.line_number,
        }


@dataclass
class MalformedLine:
    """A CSV line with too few fields to be read as a row"""
    line_number: int
    text: str
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {'line_number': self.line_number, 'text': self.text, 'reason': self.reason}


@dataclass
class MatchedTeam:
    csv_group: str
    csv_team: str
    app_group: str
    app_team: str
    match_reason: str
    manager_confirmed: bool
    score: float
    app_division: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'csv_group': self.csv_group,
            'csv_team': self.csv_team,
            'app_division': self.app_division,
            'app_group': self.app_group,
            'app_team': self.app_team,
            'match_reason': self.match_reason,
            'manager_confirmed': self.manager_confirmed,
            'score': self.score,
        }


@dataclass
class PersonChange:
    name: str
    role: str
    location: str
    vendor: str
    type: EmployeeType

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'role': self.role,
            'location': self.location,
            'vendor': self.vendor,
            'type': self.type.value,
        }


@dataclass
class TeamChange:
    match: MatchedTeam
    added: List[PersonChange] = field(default_factory=list)
    removed: List[PersonChange] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'match': self.match.to_dict(),
            'added': [p.to_dict() for p in self.added],
            'removed': [p.to_dict() for p in self.removed],
        }


@dataclass
class SkippedRow:
    row: CsvRow
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {'row': self.row.to_dict(), 'reason': self.reason}


@dataclass
class UnmatchedTeam:
    csv_group: str
    csv_team: str
    row_count: int
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'csv_group': self.csv_group,
            'csv_team': self.csv_team,
            'row_count': self.row_count,
            'reason': self.reason,
        }


@dataclass
class ImportSummary:
    teams_matched: int = 0
    teams_unmatched: int = 0
    members_added: int = 0
    members_removed: int = 0
    rows_skipped: int = 0
    malformed_lines: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'teams_matched': self.teams_matched,
            'teams_unmatched': self.teams_unmatched,
            'members_added': self.members_added,
            'members_removed': self.members_removed,
            'rows_skipped': self.rows_skipped,
            'malformed_lines': self.malformed_lines,
        }


@dataclass
class ImportReport:
    team_changes: List[TeamChange] = field(default_factory=list)
    skipped_rows: List[SkippedRow] = field(default_factory=list)
    unmatched_teams: List[UnmatchedTeam] = field(default_factory=list)
    malformed_lines: List[MalformedLine] = field(default_factory=list)
    summary: ImportSummary = field(default_factory=ImportSummary)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'team_changes': [c.to_dict() for c in self.team_changes],
            'skipped_rows': [s.to_dict() for s in self.skipped_rows],
            'unmatched_teams': [u.to_dict() for u in self.unmatched_teams],
            'malformed_lines': [m.to_dict() for m in self.malformed_lines],
            'summary': self.summary.to_dict(),
        }

    def summary_text(self) -> str:
        """Human-readable summary block for logs and the CLI."""
        s = self.summary
        lines = [
            "=" * 50,
            "CSV IMPORT SUMMARY",
            "=" * 50,
            f"  Teams matched:    {s.teams_matched}",
            f"  Teams unmatched:  {s.teams_unmatched}",
            f"  Members added:    {s.members_added}",
            f"  Members removed:  {s.members_removed}",
            f"  Rows skipped:     {s.rows_skipped}",
            f"  Malformed lines:  {s.malformed_lines}",
            "=" * 50,
        ]
        return "\n".join(lines)


@dataclass
class TeamMemberReplacement:
    """Instruction for the apply layer: replace a team's member list wholesale"""
    portfolio_id: str
    group_id: str
    team_id: str
    new_members: List[Person] = field(default_factory=list)
    division_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'portfolio_id': self.portfolio_id,
            'division_id': self.division_id,
            'group_id': self.group_id,
            'team_id': self.team_id,
            'new_members': [person_to_dict(p) for p in self.new_members],
        }


@dataclass
class ImportResult:
    report: ImportReport
    replacements: List[TeamMemberReplacement] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'report': self.report.to_dict(),
            'replacements': [r.to_dict() for r in self.replacements],
        }
