"""
OrgChart Interchange - Org JSON Serialization
=============================================
Converts between the org tree dataclasses and the JSON export format
({"portfolios": [...]}) with camelCase keys:

    {
      "id": "...", "name": "Payments",
      "headOfEngineering": {...}, "principalEngineers": [...],
      "divisions": [...], "groups": [...],
      "onshoreTargetPercentage": 50
    }

The wire format is declared once as pydantic models (PersonJson ...
OrgDataJson). Incoming documents are validated against them, so a wrongly
typed field surfaces as OrgDataError instead of failing somewhere inside an
engine. The API request schemas reuse the same models.

Persons without a type or location (older exports) load as onshore employees.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from orgchart.models import (
    Division,
    EmployeeType,
    Group,
    Location,
    OrgData,
    Person,
    Portfolio,
    Role,
    Team,
)

logger = logging.getLogger(__name__)


class OrgDataError(ValueError):
    """Raised when an org JSON document cannot be mapped onto the org tree."""


# ============================================================================
# WIRE MODELS
# ============================================================================

class PersonJson(BaseModel):
    id: str
    role: Role
    type: Optional[EmployeeType] = None
    location: Optional[Location] = None
    name: Optional[str] = None
    vendor: Optional[str] = None


class TeamJson(BaseModel):
    id: str
    name: str
    members: List[PersonJson] = []


class GroupJson(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    manager: Optional[PersonJson] = None
    managed_by: Optional[str] = Field(None, alias="managedBy")
    staff_engineers: List[PersonJson] = Field([], alias="staffEngineers")
    teams: List[TeamJson] = []


class DivisionJson(BaseModel):
    id: str
    name: str
    groups: List[GroupJson] = []


class PortfolioJson(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    head_of_engineering: Optional[PersonJson] = Field(None, alias="headOfEngineering")
    principal_engineers: List[PersonJson] = Field([], alias="principalEngineers")
    divisions: Optional[List[DivisionJson]] = None
    groups: List[GroupJson] = []
    onshore_target_percentage: Optional[int] = Field(None, alias="onshoreTargetPercentage")


class OrgDataJson(BaseModel):
    portfolios: List[PortfolioJson]


def describe_validation_error(exc: ValidationError, where: str) -> str:
    """
    One-line summary of a pydantic ValidationError.

    Example:
        "portfolio: groups.0.teams.1.name: Input should be a valid string (got 123)"
    """
    problems = []
    for err in exc.errors():
        loc = '.'.join(str(part) for part in err['loc']) or 'document'
        if err['type'] == 'missing':
            problems.append(f"{loc}: missing required field")
            continue
        value = err.get('input')
        if isinstance(value, (dict, list)):
            problems.append(f"{loc}: {err['msg']}")
        else:
            problems.append(f"{loc}: {err['msg']} (got {value!r})")
    return f"{where}: " + '; '.join(problems)


def _validate(model_cls, data: Any, where: str):
    try:
        return model_cls.model_validate(data)
    except ValidationError as e:
        raise OrgDataError(describe_validation_error(e, where))


# ============================================================================
# WIRE MODEL -> DATACLASS
# ============================================================================

def person_from_model(model: PersonJson) -> Person:
    return Person(
        id=model.id,
        role=model.role,
        type=model.type or EmployeeType.EMPLOYEE,
        location=model.location or Location.ONSHORE,
        name=model.name or None,
        vendor=model.vendor or None,
    )


def _optional_person(model: Optional[PersonJson]) -> Optional[Person]:
    return person_from_model(model) if model else None


def team_from_model(model: TeamJson) -> Team:
    return Team(
        id=model.id,
        name=model.name,
        members=[person_from_model(m) for m in model.members],
    )


def group_from_model(model: GroupJson) -> Group:
    return Group(
        id=model.id,
        name=model.name,
        manager=_optional_person(model.manager),
        managed_by=model.managed_by or None,
        staff_engineers=[person_from_model(p) for p in model.staff_engineers],
        teams=[team_from_model(t) for t in model.teams],
    )


def division_from_model(model: DivisionJson) -> Division:
    return Division(
        id=model.id,
        name=model.name,
        groups=[group_from_model(g) for g in model.groups],
    )


def portfolio_from_model(model: PortfolioJson) -> Portfolio:
    return Portfolio(
        id=model.id,
        name=model.name,
        head_of_engineering=_optional_person(model.head_of_engineering),
        principal_engineers=[person_from_model(p) for p in model.principal_engineers],
        divisions=[division_from_model(d) for d in model.divisions or []],
        groups=[group_from_model(g) for g in model.groups],
        onshore_target_percentage=model.onshore_target_percentage,
    )


# ============================================================================
# DICT -> DATACLASS
# ============================================================================

def person_from_dict(data: Any, where: str = "person") -> Person:
    return person_from_model(_validate(PersonJson, data, where))


def portfolio_from_dict(data: Any, where: str = "portfolio") -> Portfolio:
    """
    Build a Portfolio from its JSON representation.

    Raises:
        OrgDataError: If the document does not match the portfolio schema
    """
    return portfolio_from_model(_validate(PortfolioJson, data, where))


def portfolio_from_json(text: Union[str, bytes], where: str = "portfolio") -> Portfolio:
    """Validate a JSON string straight into a Portfolio."""
    try:
        model = PortfolioJson.model_validate_json(text)
    except ValidationError as e:
        raise OrgDataError(describe_validation_error(e, where))
    return portfolio_from_model(model)


def org_data_from_dict(data: Any) -> OrgData:
    model = _validate(OrgDataJson, data, "org data")
    return OrgData(portfolios=[portfolio_from_model(p) for p in model.portfolios])


# ============================================================================
# DATACLASS -> DICT
# ============================================================================

def person_to_model(person: Person) -> PersonJson:
    return PersonJson(
        id=person.id,
        role=person.role,
        type=person.type,
        location=person.location,
        name=person.name or None,
        vendor=person.vendor or None,
    )


def group_to_model(group: Group) -> GroupJson:
    return GroupJson(
        id=group.id,
        name=group.name,
        manager=person_to_model(group.manager) if group.manager else None,
        managed_by=group.managed_by or None,
        staff_engineers=[person_to_model(p) for p in group.staff_engineers],
        teams=[
            TeamJson(id=t.id, name=t.name, members=[person_to_model(m) for m in t.members])
            for t in group.teams
        ],
    )


def portfolio_to_model(portfolio: Portfolio) -> PortfolioJson:
    divisions = [
        DivisionJson(id=d.id, name=d.name, groups=[group_to_model(g) for g in d.groups])
        for d in portfolio.divisions
    ]
    return PortfolioJson(
        id=portfolio.id,
        name=portfolio.name,
        head_of_engineering=(
            person_to_model(portfolio.head_of_engineering)
            if portfolio.head_of_engineering else None
        ),
        principal_engineers=[person_to_model(p) for p in portfolio.principal_engineers],
        divisions=divisions or None,
        groups=[group_to_model(g) for g in portfolio.groups],
        onshore_target_percentage=portfolio.onshore_target,
    )


def _dump(model: BaseModel) -> Dict[str, Any]:
    # Absent optional fields are left out of the export, enums become their values
    return model.model_dump(mode='json', by_alias=True, exclude_none=True)


def person_to_dict(person: Person) -> Dict[str, Any]:
    return _dump(person_to_model(person))


def portfolio_to_dict(portfolio: Portfolio) -> Dict[str, Any]:
    return _dump(portfolio_to_model(portfolio))


def org_data_to_dict(org: OrgData) -> Dict[str, Any]:
    return {'portfolios': [portfolio_to_dict(p) for p in org.portfolios]}


# ============================================================================
# FILE HELPERS
# ============================================================================

def load_org_data(path: Union[str, Path]) -> OrgData:
    """
    Load an org JSON export from disk.

    A file holding a single portfolio object (no "portfolios" key) is
    accepted and wrapped into an OrgData.

    Raises:
        FileNotFoundError: If the file does not exist
        OrgDataError: If the file is not JSON or does not match the schema
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Org data file not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise OrgDataError(f"{path.name}: invalid JSON ({e})")

    if isinstance(data, dict) and 'portfolios' not in data:
        org = OrgData(portfolios=[portfolio_from_dict(data, path.name)])
    else:
        model = _validate(OrgDataJson, data, path.name)
        org = OrgData(portfolios=[portfolio_from_model(p) for p in model.portfolios])

    logger.info(f"Loaded {len(org.portfolios)} portfolio(s) from {path}")
    return org


def save_org_data(org: OrgData, path: Union[str, Path]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(org_data_to_dict(org), f, indent=2)
    logger.info(f"Wrote {len(org.portfolios)} portfolio(s) to {path}")
    return path


def select_portfolio(org: OrgData, key: Optional[str] = None) -> Portfolio:
    """
    Pick a portfolio by id or (case-insensitive) name.

    With no key the document must hold exactly one portfolio.
    """
    if key is None:
        if len(org.portfolios) != 1:
            names: List[str] = [p.name for p in org.portfolios]
            raise OrgDataError(f"Select a portfolio, document holds {len(names)}: {names}")
        return org.portfolios[0]

    for portfolio in org.portfolios:
        if portfolio.id == key or portfolio.name.lower() == key.lower():
            return portfolio
    raise OrgDataError(f"Portfolio not found: {key}")
