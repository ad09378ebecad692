#!/usr/bin/env python3
"""
Verify seeded provisions character-by-character against normalized source text.

Usage:
    # Every provision of every ingested document
    python scripts/verify_provisions.py

    # Specific provisions
    python scripts/verify_provisions.py --check ma-loi-05-20:1 --check ma-loi-43-20:1
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir / "src"))

from dotenv import load_dotenv
load_dotenv(root_dir / ".env")

from lexmaroc.config import get_settings
from lexmaroc.verify import ProvisionCheck, verify_provisions

logger = logging.getLogger(__name__)


def parse_check(value: str) -> ProvisionCheck:
    document_id, sep, section = value.rpartition(":")
    if not sep or not document_id or not section:
        raise argparse.ArgumentTypeError(f"Expected DOCUMENT_ID:SECTION, got {value!r}")
    return ProvisionCheck(document_id=document_id, section=section)


def main():
    settings = get_settings()

    # Configure logging
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(
        description="Check that every seeded provision appears verbatim in its source text."
    )
    parser.add_argument(
        "--check",
        type=parse_check,
        action="append",
        default=None,
        help="DOCUMENT_ID:SECTION to verify (repeatable; default: all ingested provisions)",
    )
    args = parser.parse_args()

    try:
        results = verify_provisions(
            Path(settings.seed_dir),
            Path(settings.source_text_dir),
            checks=args.check,
        )
    except FileNotFoundError as e:
        logger.error(str(e))
        sys.exit(1)

    failures = [r for r in results if not r.passed]
    for result in results:
        if result.passed:
            logger.info(f"PASS {result.document_id} section {result.section}")
        else:
            logger.error(f"FAIL {result.document_id} section {result.section}: {result.reason}")

    logger.info(f"Verified {len(results) - len(failures)}/{len(results)} provisions.")
    if failures:
        sys.exit(1)


if __name__ == "__main__":
    main()
