"""
OrgChart Interchange API
========================
HTTP API for the org chart markdown codec and CSV import engine.

This API provides:
- Health check
- Markdown encode/decode of a portfolio
- CSV parsing, import analysis (report + replacement plan) and apply
- Portfolio headcount statistics

The API is stateless: every request carries the portfolio it works on.

Usage:
    uvicorn api.main:app --host 0.0.0.0 --port 8000 --reload

Or via the entrypoint script:
    python scripts/run_api.py
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api import __version__
from api.deps import get_config, reset_config
from api.routers import (
    health_router,
    markdown_router,
    csv_import_router,
    portfolio_router
)
from orgchart.serialization import OrgDataError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup/shutdown events.
    """
    # Startup
    logger.info("OrgChart Interchange API starting up...")
    get_config()
    yield
    # Shutdown
    logger.info("OrgChart Interchange API shutting down...")
    reset_config()


# Create FastAPI app
app = FastAPI(
    title="OrgChart Interchange API",
    description="""
## OrgChart Interchange API

Text interchange for an engineering org chart
(portfolio > division > group > team > person).

- **Markdown**: render a portfolio as an editable document and parse it back,
  with line-numbered errors and all-or-nothing results
- **CSV Import**: fuzzy-match spreadsheet extracts to existing teams and get a
  change report plus a full-replace plan per matched team
- **Portfolio**: headcount statistics

Portfolios travel in the org JSON export format (camelCase keys).
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# Add CORS middleware (configure origins for production)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


@app.exception_handler(OrgDataError)
async def org_data_exception_handler(request: Request, exc: OrgDataError):
    logger.warning(f"Invalid org data on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=422,
        content={
            "error": "Invalid org data",
            "detail": str(exc),
            "status_code": 422
        }
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": str(exc),
            "status_code": 500
        }
    )


# Include routers
app.include_router(health_router)
app.include_router(markdown_router)
app.include_router(csv_import_router)
app.include_router(portfolio_router)


# Root endpoint
@app.get("/", tags=["Root"])
def root():
    """
    API root - returns welcome message and links.
    """
    return {
        "message": "Welcome to OrgChart Interchange API",
        "version": __version__,
        "docs": "/docs",
        "redoc": "/redoc",
        "endpoints": {
            "health": "/api/v1/health",
            "markdown_encode": "/api/v1/markdown/encode",
            "markdown_decode": "/api/v1/markdown/decode",
            "import_analyse": "/api/v1/import/analyse",
            "portfolio_stats": "/api/v1/portfolio/stats"
        }
    }


@app.get("/api/v1", tags=["Root"])
def api_v1_root():
    """
    API v1 root - returns available endpoints.
    """
    return {
        "api_version": "v1",
        "endpoints": [
            {"path": "/api/v1/health", "method": "GET", "description": "Health check"},
            {"path": "/api/v1/markdown/encode", "method": "POST", "description": "Portfolio to markdown"},
            {"path": "/api/v1/markdown/decode", "method": "POST", "description": "Markdown to portfolio"},
            {"path": "/api/v1/import/parse-csv", "method": "POST", "description": "Parse CSV rows"},
            {"path": "/api/v1/import/analyse", "method": "POST", "description": "Analyse CSV import"},
            {"path": "/api/v1/import/upload", "method": "POST", "description": "Analyse uploaded CSV file"},
            {"path": "/api/v1/import/apply", "method": "POST", "description": "Apply replacement plan"},
            {"path": "/api/v1/portfolio/stats", "method": "POST", "description": "Headcount statistics"}
        ]
    }
