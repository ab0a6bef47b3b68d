#!/usr/bin/env python
"""
OrgChart Interchange - API Server Entrypoint
============================================
Starts the OrgChart Interchange API using Uvicorn.

Usage:
    python scripts/run_api.py
    python scripts/run_api.py --port 8080
    python scripts/run_api.py --host 127.0.0.1 --port 8000 --reload

Environment Variables:
    ORGCHART_CONFIG_PATH: Path to config (default: config/orgchart_config.yml)
"""

import os
import sys
import argparse
from pathlib import Path

import uvicorn

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from orgchart.config import CONFIG_PATH_ENV, DEFAULT_CONFIG_PATH, resolve_config
from orgchart.logging_config import setup_logging


def print_banner():
    """Print the application banner."""
    print()
    print("=" * 70)
    print("  OrgChart Interchange API")
    print("  Markdown codec + CSV import engine")
    print("=" * 70)
    print()


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='OrgChart Interchange API Server',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                           # Start on 0.0.0.0:8000
  %(prog)s --port 8080               # Start on port 8080
  %(prog)s --host 127.0.0.1          # Localhost only
  %(prog)s --reload                  # Auto-reload on code changes
  %(prog)s --workers 4               # Use 4 worker processes

API Documentation:
  Swagger UI: http://localhost:8000/docs
  ReDoc:      http://localhost:8000/redoc

Key Endpoints:
  GET  /api/v1/health              - Health check
  POST /api/v1/markdown/encode     - Portfolio to markdown
  POST /api/v1/markdown/decode     - Markdown to portfolio
  POST /api/v1/import/analyse      - Analyse a CSV import
  POST /api/v1/import/apply        - Apply a replacement plan
  POST /api/v1/portfolio/stats     - Headcount statistics
        """
    )

    parser.add_argument(
        '--host',
        default='0.0.0.0',
        help='Host to bind to (default: 0.0.0.0)'
    )

    parser.add_argument(
        '--port',
        type=int,
        default=8000,
        help='Port to bind to (default: 8000)'
    )

    parser.add_argument(
        '--reload',
        action='store_true',
        help='Enable auto-reload for development'
    )

    parser.add_argument(
        '--workers',
        type=int,
        default=1,
        help='Number of worker processes (default: 1, use >1 for production)'
    )

    parser.add_argument(
        '--config',
        default=None,
        help=f'Path to config file (default: ${CONFIG_PATH_ENV} or {DEFAULT_CONFIG_PATH})'
    )

    parser.add_argument(
        '--log-level',
        default='info',
        choices=['debug', 'info', 'warning', 'error'],
        help='Logging level (default: info)'
    )

    args = parser.parse_args()

    if args.config:
        # Verify config exists
        if not Path(args.config).exists():
            print(f"ERROR: Config not found: {args.config}")
            return 1
        os.environ[CONFIG_PATH_ENV] = args.config

    config = resolve_config(args.config)
    setup_logging(config.logging, level=args.log_level)

    print_banner()
    print(f"  Host:       {args.host}")
    print(f"  Port:       {args.port}")
    print(f"  Reload:     {args.reload}")
    print(f"  Workers:    {args.workers}")
    print(f"  Config:     {os.environ.get(CONFIG_PATH_ENV, DEFAULT_CONFIG_PATH)}")
    print(f"  Threshold:  {config.import_settings.match_threshold}")
    print(f"  Log Level:  {args.log_level}")
    print()
    print(f"  API Docs:   http://{args.host if args.host != '0.0.0.0' else 'localhost'}:{args.port}/docs")
    print()
    print("=" * 70)
    print()

    # Run the server
    uvicorn.run(
        "api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        workers=args.workers if not args.reload else 1,  # Workers doesn't work with reload
        log_level=args.log_level
    )
    return 0


if __name__ == '__main__':
    sys.exit(main())
