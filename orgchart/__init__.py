"""
OrgChart Interchange
====================
Text-based interchange for an engineering org chart
(portfolio -> division -> group -> team -> person).

Provides:
- Markdown codec: encode a portfolio to an editable document and decode it back
- CSV import engine: fuzzy-match spreadsheet rows to teams and plan replacements
- Org JSON serialization, apply layer and headcount statistics
"""

__version__ = "1.0.0"

from orgchart.markdown import encode, decode
from orgchart.importer import parse_csv, analyse_import, apply_replacements

__all__ = [
    '__version__',
    'encode',
    'decode',
    'parse_csv',
    'analyse_import',
    'apply_replacements',
]
