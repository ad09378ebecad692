#!/usr/bin/env python3
"""
Validate the source catalog and rewrite it in canonical form.

Entries are parsed into source records, so unknown keys are dropped, empty
optional fields are removed and enum values are checked. The result is
written back as indented UTF-8 JSON.

Usage:
    # Validate and rewrite the configured catalog in place
    python scripts/normalize_catalog.py

    # Validate only
    python scripts/normalize_catalog.py --check

    # Write the normalized catalog elsewhere
    python scripts/normalize_catalog.py --catalog data/my_catalog.json --output /tmp/catalog.json
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

from lexmaroc.catalog import load_catalog, write_catalog
from lexmaroc.config import get_settings
from lexmaroc.types import SourceEncoding

logger = logging.getLogger(__name__)


def main():
    settings = get_settings()

    # Configure logging
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(
        description="Validate the source catalog and rewrite it in canonical form."
    )
    parser.add_argument(
        "--catalog",
        type=Path,
        default=Path(settings.catalog_path),
        help="Path to the source catalog JSON (default: from settings)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Where to write the normalized catalog (default: overwrite --catalog)",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only validate; do not write anything",
    )
    args = parser.parse_args()

    try:
        documents = load_catalog(args.catalog)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Invalid catalog: {e}")
        sys.exit(1)

    obfuscated = sum(1 for d in documents if d.source_encoding is SourceEncoding.OBFUSCATED)
    logger.info(f"Catalog OK: {len(documents)} documents ({obfuscated} obfuscated)")

    if args.check:
        return

    write_catalog(documents, args.output or args.catalog)


if __name__ == "__main__":
    main()
