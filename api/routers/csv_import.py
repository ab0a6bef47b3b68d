"""
OrgChart Interchange API - CSV Import Router
============================================
Endpoints for analysing spreadsheet extracts against a portfolio.

POST /api/v1/import/parse-csv - Parse CSV text into rows
POST /api/v1/import/analyse   - Match CSV rows to teams, return report + plan
POST /api/v1/import/upload    - Same as analyse, with a multipart CSV file
POST /api/v1/import/apply     - Apply a replacement plan to a portfolio
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from api.deps import get_import_settings, parse_portfolio
from api.schemas import (
    AnalyseImportRequest,
    AnalyseImportResponse,
    ApplyRequest,
    ParseCsvRequest,
    ParseCsvResponse,
    PortfolioResponse,
    ReplacementModel,
)
from orgchart.config import ImportSettings
from orgchart.importer import TeamMemberReplacement, analyse_import, apply_replacements, scan_csv
from orgchart.models import Portfolio
from orgchart.serialization import person_from_model, portfolio_from_json, portfolio_to_dict

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/import", tags=["CSV Import"])

MAX_UPLOAD_BYTES = 5 * 1024 * 1024


def _analyse(csv_text: str, portfolio: Portfolio, settings: ImportSettings) -> AnalyseImportResponse:
    result = analyse_import(csv_text, portfolio, settings=settings)
    summary = result.report.summary
    logger.info(
        f"Import analysed for '{portfolio.name}': {summary.teams_matched} matched, "
        f"{summary.teams_unmatched} unmatched, {summary.rows_skipped} skipped"
    )
    return AnalyseImportResponse(**result.to_dict())


def _to_replacement(model: ReplacementModel) -> TeamMemberReplacement:
    return TeamMemberReplacement(
        portfolio_id=model.portfolio_id,
        division_id=model.division_id,
        group_id=model.group_id,
        team_id=model.team_id,
        new_members=[person_from_model(m) for m in model.new_members],
    )


@router.post("/parse-csv", response_model=ParseCsvResponse)
def parse_csv_text(
    request: ParseCsvRequest,
    settings: ImportSettings = Depends(get_import_settings)
):
    """
    Parse CSV text into rows.

    Lines with fewer than 7 fields are returned under malformed_lines.
    """
    rows, malformed = scan_csv(request.csv_text, delimiter=settings.delimiter)
    return ParseCsvResponse(
        rows=[r.to_dict() for r in rows],
        malformed_lines=[m.to_dict() for m in malformed]
    )


@router.post("/analyse", response_model=AnalyseImportResponse)
def analyse_csv(
    request: AnalyseImportRequest,
    settings: ImportSettings = Depends(get_import_settings)
):
    """
    Analyse CSV text against a portfolio.

    The portfolio is not modified; the response carries the change report and
    one full-replace instruction per matched team.
    """
    return _analyse(request.csv_text, parse_portfolio(request.portfolio), settings)


@router.post("/upload", response_model=AnalyseImportResponse)
async def upload_csv(
    file: UploadFile = File(..., description="CSV extract"),
    portfolio_json: str = Form(..., description="Portfolio in org JSON format"),
    settings: ImportSettings = Depends(get_import_settings)
):
    """
    Analyse an uploaded CSV file against a portfolio.
    """
    if not file.filename:
        raise HTTPException(status_code=400, detail="No file provided")

    if not file.filename.lower().endswith(('.csv', '.txt')):
        raise HTTPException(status_code=400, detail="Invalid file type. Allowed: .csv, .txt")

    content = await file.read()
    if len(content) > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail="File too large")

    try:
        csv_text = content.decode('utf-8-sig')
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="File is not valid UTF-8 text")

    # OrgDataError is answered with 422 by the app-level handler
    portfolio = portfolio_from_json(portfolio_json, "portfolio_json")

    logger.info(f"CSV upload received: {file.filename} ({len(content)} bytes)")
    return _analyse(csv_text, portfolio, settings)


@router.post("/apply", response_model=PortfolioResponse)
def apply_plan(request: ApplyRequest):
    """
    Apply replacement instructions to a portfolio and return the result.

    Instructions for unknown teams are ignored.
    """
    portfolio = parse_portfolio(request.portfolio)
    replacements: List[TeamMemberReplacement] = [_to_replacement(r) for r in request.replacements]
    updated = apply_replacements(portfolio, replacements)
    return PortfolioResponse(portfolio=portfolio_to_dict(updated))
