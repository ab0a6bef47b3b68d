"""
OrgChart Interchange - CSV Import Engine
========================================
Fuzzy import of spreadsheet extracts into an existing portfolio.

Provides:
- Fixed-ends CSV parsing (team names may contain commas)
- Name similarity scoring and person-name matching
- Greedy team matching with claim exclusivity
- Change report and full-replace member plans
- Apply layer and CSV report export
"""

from orgchart.importer.name_similarity import (
    normalize_name,
    similarity_score,
    strip_honorific,
    names_match,
)

from orgchart.importer.csv_rows import (
    parse_csv,
    scan_csv,
)

from orgchart.importer.report import (
    CsvRow,
    MalformedLine,
    MatchedTeam,
    PersonChange,
    TeamChange,
    SkippedRow,
    UnmatchedTeam,
    ImportSummary,
    ImportReport,
    ImportResult,
    TeamMemberReplacement,
)

from orgchart.importer.engine import (
    analyse_import,
    ImportAnalyser,
)

from orgchart.importer.apply import apply_replacements

from orgchart.importer.report_export import (
    report_to_frames,
    write_report_csvs,
)

__all__ = [
    'normalize_name',
    'similarity_score',
    'strip_honorific',
    'names_match',
    'parse_csv',
    'scan_csv',
    'CsvRow',
    'MalformedLine',
    'MatchedTeam',
    'PersonChange',
    'TeamChange',
    'SkippedRow',
    'UnmatchedTeam',
    'ImportSummary',
    'ImportReport',
    'ImportResult',
    'TeamMemberReplacement',
    'analyse_import',
    'ImportAnalyser',
    'apply_replacements',
    'report_to_frames',
    'write_report_csvs',
]
