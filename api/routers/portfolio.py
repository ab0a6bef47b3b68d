"""
OrgChart Interchange API - Portfolio Router
===========================================
Headcount statistics for a portfolio.
"""

from fastapi import APIRouter

from api.deps import parse_portfolio
from api.schemas import PortfolioRequest, StatsResponse
from orgchart.stats import calculate_portfolio_stats

router = APIRouter(prefix="/api/v1/portfolio", tags=["Portfolio"])


@router.post("/stats", response_model=StatsResponse)
def portfolio_stats(request: PortfolioRequest):
    """
    Headcount by role, location and employment type, plus senior-plus ratio.
    """
    portfolio = parse_portfolio(request.portfolio)
    return StatsResponse(**calculate_portfolio_stats(portfolio).to_dict())
