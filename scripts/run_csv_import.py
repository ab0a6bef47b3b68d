"""
OrgChart Interchange - CSV Import Script
Analyse a spreadsheet extract against a portfolio and print the change report

Usage:
    python scripts/run_csv_import.py --org data/org.json --csv extract.csv

    Write report tables and apply the plan:
    python scripts/run_csv_import.py --org data/org.json --csv extract.csv \\
        --report-dir reports/ --apply-out data/org_imported.json
"""

import sys
import argparse
import logging
from pathlib import Path
from datetime import datetime

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from orgchart.config import resolve_config
from orgchart.logging_config import setup_logging
from orgchart.importer import analyse_import, apply_replacements, write_report_csvs
from orgchart.models import Location
from orgchart.serialization import OrgDataError, load_org_data, save_org_data, select_portfolio
from orgchart.stats import calculate_portfolio_stats


def log_headcount(logger, label, portfolio):
    stats = calculate_portfolio_stats(portfolio)
    logger.info(
        f"{label}: {stats.total_engineers} people, "
        f"{stats.senior_plus_ratio:.0f}% senior+, "
        f"{stats.location_percentages[Location.ONSHORE]:.0f}% onshore "
        f"(target {portfolio.onshore_target}%)"
    )


def main():
    """Run a CSV import analysis"""

    parser = argparse.ArgumentParser(description='OrgChart CSV Import')
    parser.add_argument('--org', required=True, help='Path to org JSON export')
    parser.add_argument('--csv', required=True, help='Path to CSV extract')
    parser.add_argument('--portfolio', default=None, help='Portfolio id or name (required if several)')
    parser.add_argument('--report-dir', default=None, help='Directory for report CSV tables')
    parser.add_argument('--apply-out', default=None, help='Write the org JSON with replacements applied')
    parser.add_argument('--config', default=None, help='Path to config YAML')
    args = parser.parse_args()

    try:
        config = resolve_config(args.config)
        setup_logging(config.logging)
    except (FileNotFoundError, ValueError) as e:
        print(f"ERROR: {e}")
        return 1

    logger = logging.getLogger(__name__)

    start_time = datetime.now()
    logger.info("=" * 80)
    logger.info("OrgChart CSV Import Started")
    logger.info(f"Start time: {start_time.strftime('%Y-%m-%d %H:%M:%S')}")
    logger.info("=" * 80)

    try:
        org = load_org_data(args.org)
        portfolio = select_portfolio(org, args.portfolio)
        csv_text = Path(args.csv).read_text(encoding='utf-8-sig')
    except (FileNotFoundError, OrgDataError) as e:
        logger.error(f"Cannot load input: {e}")
        return 1

    log_headcount(logger, "Before import", portfolio)
    result = analyse_import(csv_text, portfolio, settings=config.import_settings)
    print(result.report.summary_text())

    if args.report_dir:
        paths = write_report_csvs(result.report, args.report_dir)
        logger.info(f"✓ Wrote {len(paths)} report table(s) to {args.report_dir}")

    if args.apply_out:
        updated = apply_replacements(org, result.replacements)
        save_org_data(updated, args.apply_out)
        log_headcount(logger, "After import", select_portfolio(updated, portfolio.id))
        logger.info(f"✓ Applied {len(result.replacements)} replacement(s)")

    duration = (datetime.now() - start_time).total_seconds()
    logger.info(f"Duration: {duration:.2f} seconds")
    return 0


if __name__ == "__main__":
    sys.exit(main())
