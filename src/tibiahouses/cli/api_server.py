#!/usr/bin/env python
"""
CLI for running the Tibia Houses API Server.

Command-line options override the environment configuration for this
process only.

Usage:
    python -m tibiahouses.cli.api_server
    python -m tibiahouses.cli.api_server --port 8080 --max-workers 5
    python -m tibiahouses.cli.api_server --community-url http://localhost:9000/community/ --timeout 5
"""

import argparse
import dataclasses
import sys

from tibiahouses.api.server import run_server
from tibiahouses.config import Config, get_config
from tibiahouses.exceptions import ConfigurationError
from tibiahouses.logging_config import setup_logging, get_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Serve Tibia house listings as JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m tibiahouses.cli.api_server --host 0.0.0.0
    python -m tibiahouses.cli.api_server --max-workers 1 --log-level DEBUG
    python -m tibiahouses.cli.api_server --log-file logs/api.log
        """,
    )
    server = parser.add_argument_group("server")
    server.add_argument("--host", default=None, help="Host to bind to (default: 127.0.0.1)")
    server.add_argument("--port", type=int, default=None, help="Port to bind to (default: 7032)")
    server.add_argument("--debug", action="store_true", help="Enable Flask debug mode")

    upstream = parser.add_argument_group("upstream")
    upstream.add_argument("--community-url", default=None, help="Community page URL to scrape")
    upstream.add_argument("--timeout", type=float, default=None, help="Seconds per upstream request")
    upstream.add_argument(
        "--max-workers",
        type=int,
        default=None,
        help="Concurrent page fetches for all-towns requests",
    )

    logs = parser.add_argument_group("logging")
    logs.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set log level",
    )
    logs.add_argument("--log-file", default=None, help="Also write logs to this file")
    return parser


def apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    """Apply command-line options to the configuration in place.

    Raises:
        ConfigurationError: If an upstream override is invalid.
    """
    upstream = {
        "community_url": args.community_url,
        "timeout": args.timeout,
        "max_workers": args.max_workers,
    }
    upstream = {name: value for name, value in upstream.items() if value is not None}
    if upstream:
        # replace() re-runs validation
        config.upstream = dataclasses.replace(config.upstream, **upstream)

    if args.host:
        config.api.host = args.host
    if args.port:
        config.api.port = args.port
    if args.debug:
        config.api.debug = True
    if args.log_level:
        config.logging.level = args.log_level
    if args.log_file:
        config.logging.log_file = args.log_file
    return config


def main(argv=None) -> int:
    """Main entry point for the API server CLI."""
    args = build_parser().parse_args(argv)

    try:
        config = apply_overrides(get_config(), args)
    except ConfigurationError as e:
        print(f"Invalid configuration: {e.message}", file=sys.stderr)
        return 2

    setup_logging(force=True)
    logger = get_logger(__name__)
    logger.info(
        "Starting Tibia Houses API on %s:%d (upstream %s, %d workers)",
        config.api.host,
        config.api.port,
        config.upstream.community_url,
        config.upstream.max_workers,
    )

    try:
        run_server(host=config.api.host, port=config.api.port, debug=config.api.debug)
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except OSError as e:
        logger.error("Could not start server: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
