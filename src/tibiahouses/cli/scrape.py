#!/usr/bin/env python
"""
CLI for scraping one town's house listings.

Usage:
    python -m tibiahouses.cli.scrape --world Antica --town Thais
    python -m tibiahouses.cli.scrape --world Antica --town Thais --type guildhall
    python -m tibiahouses.cli.scrape --file tests/fixtures/houses-thais-200.html --town Thais
"""

import argparse
import json
import sys
from pathlib import Path

from tibiahouses.core.models import ResidenceType
from tibiahouses.exceptions import ScraperError, ValidationError
from tibiahouses.logging_config import setup_logging, get_logger
from tibiahouses.scraper import extract_houses, scrape_town


def main(argv=None) -> int:
    """Main entry point for the scrape CLI."""
    parser = argparse.ArgumentParser(
        description="Scrape Tibia house listings into JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--town", required=True, help="Town name, e.g. Thais")
    parser.add_argument("--world", default=None, help="World name (required unless --file)")
    parser.add_argument(
        "--type",
        default="house",
        help="Residence type: house or guildhall (default: house)",
    )
    parser.add_argument(
        "--file",
        type=Path,
        default=None,
        help="Extract from a saved HTML page instead of fetching",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set log level (default: WARNING)",
    )

    args = parser.parse_args(argv)

    # stdout carries the JSON result
    setup_logging(level=args.log_level, force=True, stream=sys.stderr)
    logger = get_logger(__name__)

    if args.file is None and args.world is None:
        parser.error("--world is required when not reading from --file")

    try:
        residence_type = ResidenceType.parse(args.type)
        if args.file is not None:
            result = extract_houses(
                args.file.read_bytes(), args.town, args.world, residence_type
            )
        else:
            result = scrape_town(args.world, args.town, residence_type)
    except (ScraperError, ValidationError) as e:
        logger.error("Scrape failed: %s", e.message)
        print(json.dumps({"status": "error", "error": type(e).__name__, "message": e.message}))
        return 1

    print(json.dumps(result.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
