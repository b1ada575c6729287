#!/usr/bin/env python
"""
CLI for running the Housing Dashboard API Server.

Usage:
    python -m canhousing.cli.dashboard_server
    python -m canhousing.cli.dashboard_server --port 8080
    python -m canhousing.cli.dashboard_server --data data/HouseListings.csv --debug
"""

import argparse
import sys

from canhousing.config import get_config
from canhousing.exceptions import DatasetError
from canhousing.logging_config import setup_logging, get_logger


def main(argv=None):
    """Main entry point for the dashboard server CLI."""
    parser = argparse.ArgumentParser(
        description="Canadian Housing Insights Dashboard Server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m canhousing.cli.dashboard_server
    python -m canhousing.cli.dashboard_server --port 8080
    python -m canhousing.cli.dashboard_server --host 0.0.0.0 --data listings.csv
        """,
    )
    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Host to bind to (default: from config or 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to bind to (default: from config or 5000)",
    )
    parser.add_argument(
        "--data",
        type=str,
        default=None,
        help="Listings CSV (default: CANHOUSING_DATA_PATH or data/HouseListings.csv)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set log level",
    )

    args = parser.parse_args(argv)

    setup_logging(level=args.log_level)
    logger = get_logger(__name__)

    config = get_config()
    host = args.host or config.api.host
    port = args.port or config.api.port
    debug = args.debug or config.api.debug

    logger.info("Starting Housing Dashboard Server")
    logger.info("Host: %s, Port: %d, Debug: %s", host, port, debug)

    try:
        from canhousing.api.server import run_server
        run_server(host=host, port=port, debug=debug, data_path=args.data)
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
        sys.exit(0)
    except DatasetError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        logger.error("Server error: %s", e, exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
