"""
OrgChart Interchange - Markdown Apply Script
Parse an edited markdown document and write it back into an org JSON export

The document replaces the selected portfolio's content (its id is kept).
Nothing is written when the document has errors.

Usage:
    python scripts/apply_markdown.py --org data/org.json --markdown payments.md
    python scripts/apply_markdown.py --org data/org.json --markdown new.md --new --out data/org_v2.json
"""

import sys
import argparse
import logging
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from orgchart.config import resolve_config
from orgchart.logging_config import setup_logging
from orgchart.markdown import parse_markdown
from orgchart.serialization import OrgDataError, load_org_data, save_org_data, select_portfolio


def main():
    """Apply a markdown document to an org JSON export"""

    parser = argparse.ArgumentParser(description='OrgChart Markdown Apply')
    parser.add_argument('--org', required=True, help='Path to org JSON export')
    parser.add_argument('--markdown', required=True, help='Path to markdown document')
    parser.add_argument('--portfolio', default=None, help='Portfolio id or name to replace')
    parser.add_argument('--new', action='store_true', help='Add as a new portfolio instead of replacing')
    parser.add_argument('--out', default=None, help='Output JSON file (default: overwrite --org)')
    parser.add_argument('--config', default=None, help='Path to config YAML')
    args = parser.parse_args()

    try:
        config = resolve_config(args.config)
        setup_logging(config.logging)
    except (FileNotFoundError, ValueError) as e:
        print(f"ERROR: {e}")
        return 1

    logger = logging.getLogger(__name__)

    try:
        org = load_org_data(args.org)
        text = Path(args.markdown).read_text(encoding='utf-8')
    except (FileNotFoundError, OrgDataError) as e:
        logger.error(f"Cannot load input: {e}")
        return 1

    result = parse_markdown(text)
    if not result.ok:
        logger.error(f"{args.markdown}: {len(result.errors)} error(s), nothing applied")
        for error in result.errors:
            logger.error(f"  {error}")
        return 1

    if args.new:
        portfolio = result.portfolio.to_portfolio()
        org.portfolios.append(portfolio)
        logger.info(f"✓ Added portfolio '{portfolio.name}' ({portfolio.id})")
    else:
        try:
            current = select_portfolio(org, args.portfolio)
        except OrgDataError as e:
            logger.error(str(e))
            return 1
        index = org.portfolios.index(current)
        org.portfolios[index] = result.portfolio.apply_to(current)
        logger.info(f"✓ Replaced portfolio '{current.name}' with '{result.portfolio.name}'")

    save_org_data(org, args.out or args.org)
    return 0


if __name__ == "__main__":
    sys.exit(main())
