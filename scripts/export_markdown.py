"""
OrgChart Interchange - Markdown Export Script
Render a portfolio from an org JSON export as a markdown document

Usage:
    python scripts/export_markdown.py --org data/org.json
    python scripts/export_markdown.py --org data/org.json --portfolio "Payments" --out payments.md
"""

import sys
import argparse
import logging
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from orgchart.config import resolve_config
from orgchart.logging_config import setup_logging
from orgchart.markdown import generate_markdown
from orgchart.serialization import OrgDataError, load_org_data, select_portfolio


def main():
    """Export one portfolio to markdown"""

    parser = argparse.ArgumentParser(description='OrgChart Markdown Export')
    parser.add_argument('--org', required=True, help='Path to org JSON export')
    parser.add_argument('--portfolio', default=None, help='Portfolio id or name (required if several)')
    parser.add_argument('--out', default=None, help='Output markdown file (default: stdout)')
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
        portfolio = select_portfolio(load_org_data(args.org), args.portfolio)
    except (FileNotFoundError, OrgDataError) as e:
        logger.error(f"Cannot load portfolio: {e}")
        return 1

    markdown = generate_markdown(portfolio)

    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(markdown, encoding='utf-8')
        logger.info(f"✓ Wrote '{portfolio.name}' to {out_path}")
    else:
        sys.stdout.write(markdown)

    return 0


if __name__ == "__main__":
    sys.exit(main())
