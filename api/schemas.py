"""
OrgChart Interchange API - Pydantic Schemas
===========================================
Request and response models for the interchange API.

Portfolios travel in the org JSON export format (camelCase keys). Request
bodies reuse the wire models from orgchart.serialization, so a wrongly typed
portfolio is rejected with 422 before an endpoint runs.
"""

from typing import Any, Dict, List, Optional
from datetime import datetime
from pydantic import BaseModel, Field

from orgchart.serialization import PersonJson, PortfolioJson


# =====================================================================
# HEALTH
# =====================================================================

class HealthStatus(BaseModel):
    """Health check response."""
    status: str = Field(description="Overall API status")
    version: str = Field(description="API version")
    match_threshold: float = Field(description="Active CSV match threshold")
    timestamp: datetime = Field(default_factory=datetime.utcnow)


# =====================================================================
# MARKDOWN
# =====================================================================

class EncodeRequest(BaseModel):
    portfolio: PortfolioJson = Field(description="Portfolio in org JSON format")


class EncodeResponse(BaseModel):
    markdown: str


class DecodeRequest(BaseModel):
    text: str = Field(description="Markdown document")
    portfolio_id: Optional[str] = Field(
        default=None,
        description="Identifier to keep for the decoded portfolio (new one if omitted)"
    )


class ParseErrorOut(BaseModel):
    line: int
    message: str


class DecodeResponse(BaseModel):
    ok: bool
    portfolio: Optional[Dict[str, Any]] = None
    errors: List[ParseErrorOut] = []


# =====================================================================
# CSV IMPORT
# =====================================================================

class ParseCsvRequest(BaseModel):
    csv_text: str


class CsvRowOut(BaseModel):
    portfolio: str
    csv_group: str
    team_name: str
    role: str
    location: str
    vendor: str
    name: str
    line_number: int


class MalformedLineOut(BaseModel):
    line_number: int
    text: str
    reason: str


class ParseCsvResponse(BaseModel):
    rows: List[CsvRowOut]
    malformed_lines: List[MalformedLineOut] = []


class AnalyseImportRequest(BaseModel):
    csv_text: str
    portfolio: PortfolioJson = Field(description="Portfolio in org JSON format")


class MatchedTeamOut(BaseModel):
    csv_group: str
    csv_team: str
    app_division: Optional[str] = None
    app_group: str
    app_team: str
    match_reason: str
    manager_confirmed: bool
    score: float


class PersonChangeOut(BaseModel):
    name: str
    role: str
    location: str
    vendor: str
    type: str


class TeamChangeOut(BaseModel):
    match: MatchedTeamOut
    added: List[PersonChangeOut] = []
    removed: List[PersonChangeOut] = []


class SkippedRowOut(BaseModel):
    row: CsvRowOut
    reason: str


class UnmatchedTeamOut(BaseModel):
    csv_group: str
    csv_team: str
    row_count: int
    reason: str


class ImportSummaryOut(BaseModel):
    teams_matched: int
    teams_unmatched: int
    members_added: int
    members_removed: int
    rows_skipped: int
    malformed_lines: int


class ImportReportOut(BaseModel):
    team_changes: List[TeamChangeOut] = []
    skipped_rows: List[SkippedRowOut] = []
    unmatched_teams: List[UnmatchedTeamOut] = []
    malformed_lines: List[MalformedLineOut] = []
    summary: ImportSummaryOut


class ReplacementModel(BaseModel):
    portfolio_id: str
    division_id: Optional[str] = None
    group_id: str
    team_id: str
    new_members: List[PersonJson] = Field(description="Persons in org JSON format")


class AnalyseImportResponse(BaseModel):
    report: ImportReportOut
    replacements: List[ReplacementModel] = []


class ApplyRequest(BaseModel):
    portfolio: PortfolioJson
    replacements: List[ReplacementModel]


class PortfolioResponse(BaseModel):
    portfolio: Dict[str, Any]


# =====================================================================
# STATS
# =====================================================================

class PortfolioRequest(BaseModel):
    portfolio: PortfolioJson


class StatsResponse(BaseModel):
    total_engineers: int
    senior_plus_count: int
    senior_plus_ratio: float
    by_role: Dict[str, int]
    by_location: Dict[str, int]
    location_percentages: Dict[str, float]
    by_type: Dict[str, int]
    type_percentages: Dict[str, float]
