"""
OrgChart Interchange API - Dependencies
=======================================
Settings injection and request helpers for FastAPI endpoints.
"""

import logging
from typing import Optional

from orgchart.config import AppConfig, ImportSettings, resolve_config
from orgchart.models import Portfolio
from orgchart.serialization import PortfolioJson, portfolio_from_model

logger = logging.getLogger(__name__)

# Global config instance (singleton)
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get or create the global AppConfig.
    Path comes from ORGCHART_CONFIG_PATH (default: config/orgchart_config.yml).
    """
    global _config

    if _config is None:
        _config = resolve_config()
        logger.info(f"Config loaded (match threshold {_config.import_settings.match_threshold})")

    return _config


def get_import_settings() -> ImportSettings:
    """
    FastAPI dependency yielding the import settings.

    Usage in endpoints:
        @router.post("/endpoint")
        def endpoint(settings: ImportSettings = Depends(get_import_settings)):
            ...
    """
    return get_config().import_settings


def reset_config():
    """Drop the cached config (used on shutdown and by tests)."""
    global _config
    _config = None


def parse_portfolio(model: PortfolioJson) -> Portfolio:
    """
    Convert a validated request portfolio into the org tree.

    Type errors never reach here: FastAPI answers 422 while validating the
    request body against PortfolioJson.
    """
    return portfolio_from_model(model)
