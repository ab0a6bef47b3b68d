"""
API Routers Package
"""
from .health import router as health_router
from .markdown import router as markdown_router
from .csv_import import router as csv_import_router
from .portfolio import router as portfolio_router

__all__ = [
    'health_router',
    'markdown_router',
    'csv_import_router',
    'portfolio_router'
]
