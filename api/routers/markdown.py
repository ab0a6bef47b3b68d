"""
OrgChart Interchange API - Markdown Router
==========================================
Encode a portfolio to its markdown document and decode it back.

POST /api/v1/markdown/encode - Portfolio JSON to markdown
POST /api/v1/markdown/decode - Markdown to portfolio JSON (or line errors)
"""

import logging

from fastapi import APIRouter

from api.deps import parse_portfolio
from api.schemas import DecodeRequest, DecodeResponse, EncodeRequest, EncodeResponse, ParseErrorOut
from orgchart.markdown import generate_markdown, parse_markdown
from orgchart.models import Portfolio
from orgchart.serialization import portfolio_to_dict

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/markdown", tags=["Markdown"])


@router.post("/encode", response_model=EncodeResponse)
def encode_portfolio(request: EncodeRequest):
    """
    Render a portfolio as an editable markdown document.
    """
    portfolio = parse_portfolio(request.portfolio)
    return EncodeResponse(markdown=generate_markdown(portfolio))


@router.post("/decode", response_model=DecodeResponse)
def decode_markdown(request: DecodeRequest):
    """
    Parse a markdown document into a portfolio.

    Always answers 200: a document with errors comes back with ok=false,
    no portfolio and every line error found.
    """
    result = parse_markdown(request.text)

    if not result.ok:
        logger.info(f"Markdown decode rejected with {len(result.errors)} error(s)")
        return DecodeResponse(
            ok=False,
            portfolio=None,
            errors=[ParseErrorOut(**e.to_dict()) for e in result.errors]
        )

    if request.portfolio_id:
        portfolio = result.portfolio.apply_to(Portfolio(id=request.portfolio_id, name=""))
    else:
        portfolio = result.portfolio.to_portfolio()

    return DecodeResponse(ok=True, portfolio=portfolio_to_dict(portfolio), errors=[])
