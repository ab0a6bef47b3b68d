"""
OrgChart Interchange - Replacement Apply Layer
==============================================
Applies TeamMemberReplacement instructions to an org snapshot.

Works on a deep copy and returns it; the input snapshot is left untouched.
Each instruction replaces the addressed team's member list wholesale, so
applying the same plan twice gives the same result.
"""

import copy
import logging
from typing import Iterable, Optional, Union

from orgchart.importer.report import TeamMemberReplacement
from orgchart.models import Group, OrgData, Portfolio

logger = logging.getLogger(__name__)


def _find_group(portfolio: Portfolio, group_id: str, division_id: Optional[str]) -> Optional[Group]:
    if division_id:
        groups = [g for d in portfolio.divisions if d.id == division_id for g in d.groups]
    else:
        groups = portfolio.groups
    for group in groups:
        if group.id == group_id:
            return group
    return None


def _apply_one(portfolio: Portfolio, replacement: TeamMemberReplacement) -> bool:
    group = _find_group(portfolio, replacement.group_id, replacement.division_id)
    if group is None:
        return False
    for team in group.teams:
        if team.id == replacement.team_id:
            team.members = copy.deepcopy(replacement.new_members)
            return True
    return False


def apply_replacements(
    snapshot: Union[OrgData, Portfolio],
    replacements: Iterable[TeamMemberReplacement],
) -> Union[OrgData, Portfolio]:
    """
    Apply replacements to a portfolio or a whole org document.

    Instructions addressing another portfolio or an unknown team are ignored
    and logged.

    Returns:
        Updated deep copy of the snapshot (same type as the input)
    """
    updated = copy.deepcopy(snapshot)
    portfolios = updated.portfolios if isinstance(updated, OrgData) else [updated]
    by_id = {p.id: p for p in portfolios}

    applied = 0
    for replacement in replacements:
        portfolio = by_id.get(replacement.portfolio_id)
        if portfolio is not None and _apply_one(portfolio, replacement):
            applied += 1
        else:
            logger.warning(
                f"Replacement for team {replacement.team_id} (group {replacement.group_id}, "
                f"portfolio {replacement.portfolio_id}) did not match any team; ignored"
            )

    logger.info(f"Applied {applied} team member replacement(s)")
    return updated
