"""
OrgChart Interchange - Markdown Codec
=====================================
Round-trips a portfolio through an editable markdown document.

Provides:
- generate_markdown / encode: portfolio -> text
- parse_markdown / decode: text -> PortfolioUpdate or line-numbered errors
"""

from orgchart.markdown.generator import (
    generate_markdown,
    encode,
)

from orgchart.markdown.parser import (
    parse_markdown,
    decode,
    parse_person_line,
    DecodeResult,
    ParseError,
    PortfolioUpdate,
    PersonLineError,
)

__all__ = [
    'generate_markdown',
    'encode',
    'parse_markdown',
    'decode',
    'parse_person_line',
    'DecodeResult',
    'ParseError',
    'PortfolioUpdate',
    'PersonLineError',
]
