"""
OrgChart Interchange - Team Matching
====================================
Scores CSV team-groups against the teams of a portfolio.

Score = team_name_sim * 0.55 + context_sim * 0.30 + manager_bonus (0.15)

- team_name_sim: CSV team name vs app team name
- context_sim: CSV group vs the app division or group name (best of both)
- manager_bonus: any CSV Engineering Manager row names the app group's manager

The total can exceed 1.0 when the manager confirms. Assignment is greedy in
CSV order and a claimed team is never offered again in the same run; this is
simpler than an optimal bipartite assignment and can give a different (worse)
overall pairing when two CSV teams compete for the same app team.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from orgchart.config import ImportSettings
from orgchart.importer.name_similarity import names_match, similarity_score
from orgchart.importer.report import CsvRow
from orgchart.models import ENGINEER_ROLES, Portfolio, Role, role_from_label

logger = logging.getLogger(__name__)


@dataclass
class CsvTeamGroup:
    """All CSV rows sharing one (group, team) key"""
    csv_group: str
    csv_team: str
    rows: List[CsvRow] = field(default_factory=list)
    managers: List[CsvRow] = field(default_factory=list)
    engineers: List[CsvRow] = field(default_factory=list)


@dataclass
class AppTeamLocation:
    """An existing team with its place in the hierarchy"""
    group_id: str
    group_name: str
    team_id: str
    team_name: str
    division_id: Optional[str] = None
    division_name: Optional[str] = None
    manager_name: Optional[str] = None


@dataclass
class MatchScore:
    score: float
    reason: str
    manager_confirmed: bool


def group_csv_rows(rows: List[CsvRow]) -> List[CsvTeamGroup]:
    """Group rows by (csv_group, team_name), keeping first-seen order."""
    groups: Dict[Tuple[str, str], CsvTeamGroup] = {}

    for row in rows:
        key = (row.csv_group, row.team_name)
        if key not in groups:
            groups[key] = CsvTeamGroup(csv_group=row.csv_group, csv_team=row.team_name)
        team_group = groups[key]
        team_group.rows.append(row)

        role = role_from_label(row.role)
        if role == Role.ENGINEERING_MANAGER:
            team_group.managers.append(row)
        elif role in ENGINEER_ROLES:
            team_group.engineers.append(row)

    return list(groups.values())


def enumerate_teams(portfolio: Portfolio) -> List[AppTeamLocation]:
    """Every team in the portfolio; division teams first, then direct groups."""
    result = []
    for division, group in portfolio.iter_groups():
        for team in group.teams:
            result.append(AppTeamLocation(
                division_id=division.id if division else None,
                division_name=division.name if division else None,
                group_id=group.id,
                group_name=group.name,
                team_id=team.id,
                team_name=team.name,
                manager_name=group.manager.name if group.manager else None,
            ))
    return result


def _pct(value: float) -> str:
    return f"{value * 100:.0f}%"


def score_match(
    team_group: CsvTeamGroup,
    app_team: AppTeamLocation,
    settings: ImportSettings,
) -> MatchScore:
    """Score one CSV team-group against one app team."""
    team_score = similarity_score(team_group.csv_team, app_team.team_name)

    if app_team.division_name:
        div_score = similarity_score(team_group.csv_group, app_team.division_name)
        grp_score = similarity_score(team_group.csv_group, app_team.group_name)
        context_score = max(div_score, grp_score)
        if div_score >= grp_score:
            context_reason = f'division "{app_team.division_name}"'
        else:
            context_reason = f'group "{app_team.group_name}"'
    else:
        context_score = similarity_score(team_group.csv_group, app_team.group_name)
        context_reason = f'group "{app_team.group_name}"'

    manager_confirmed = any(names_match(m.name, app_team.manager_name) for m in team_group.managers)
    manager_bonus = settings.manager_bonus if manager_confirmed else 0.0

    total = (
        team_score * settings.team_name_weight
        + context_score * settings.context_weight
        + manager_bonus
    )

    reasons = [
        f'team name "{team_group.csv_team}" → "{app_team.team_name}" ({_pct(team_score)})',
        f'context match to {context_reason} ({_pct(context_score)})',
    ]
    if manager_confirmed:
        reasons.append('manager confirmed')

    return MatchScore(score=total, reason='; '.join(reasons), manager_confirmed=manager_confirmed)


def best_candidate(
    team_group: CsvTeamGroup,
    app_teams: List[AppTeamLocation],
    claimed: Set[str],
    settings: ImportSettings,
) -> Tuple[Optional[AppTeamLocation], Optional[MatchScore]]:
    """
    Highest-scoring unclaimed team for a CSV team-group.

    Ties keep the earlier candidate. Returns (None, None) when every team is
    already claimed or the portfolio has no teams.
    """
    best_team: Optional[AppTeamLocation] = None
    best_score: Optional[MatchScore] = None

    for app_team in app_teams:
        if app_team.team_id in claimed:
            continue
        result = score_match(team_group, app_team, settings)
        if best_score is None or result.score > best_score.score:
            best_team, best_score = app_team, result

    return best_team, best_score


def describe_candidate(app_team: AppTeamLocation) -> str:
    division = f'division "{app_team.division_name}", ' if app_team.division_name else ''
    return f'"{app_team.team_name}" in {division}group "{app_team.group_name}"'
