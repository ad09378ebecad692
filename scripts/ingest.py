#!/usr/bin/env python3
"""
CLI script for parsing official Moroccan legal texts into seed JSON files.

Raw sources are read from the raw source directory as `{id}.txt` (text already
extracted from PDF/DOCX) or `{id}.html` (saved portal pages). Nothing is
fetched over the network.

Usage:
    # Ingest every document in the catalog
    python scripts/ingest.py

    # Only the first 5 catalog entries
    python scripts/ingest.py --limit 5

    # A single document, by id or loose title
    python scripts/ingest.py --only "Loi 05-20"

    # Custom catalog
    python scripts/ingest.py --catalog data/my_catalog.json
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

from lexmaroc.catalog import load_catalog, resolve_document_id
from lexmaroc.config import get_settings
from lexmaroc.ingest import ingest_documents

logger = logging.getLogger(__name__)


def main():
    settings = get_settings()

    # Configure logging
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(
        description="Parse official Moroccan legal texts into article-level seed files."
    )
    parser.add_argument(
        "--catalog",
        type=Path,
        default=Path(settings.catalog_path),
        help="Path to the source catalog JSON (default: from settings)",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Only ingest the first N catalog entries",
    )
    parser.add_argument(
        "--only",
        type=str,
        default=None,
        help="Only ingest the document matching this id, title or short name",
    )
    args = parser.parse_args()

    try:
        documents = load_catalog(args.catalog)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Failed to load catalog: {e}")
        sys.exit(1)

    if args.only:
        document_id = resolve_document_id(documents, args.only)
        if document_id is None:
            logger.error(f"No catalog entry matches {args.only!r}")
            sys.exit(1)
        documents = [d for d in documents if d.id == document_id]

    if args.limit:
        documents = documents[: args.limit]

    logger.info(f"Ingesting {len(documents)} document(s) from {settings.source_raw_dir}")

    report = ingest_documents(
        documents,
        raw_dir=Path(settings.source_raw_dir),
        text_dir=Path(settings.source_text_dir),
        seed_dir=Path(settings.seed_dir),
        min_article_chars=settings.min_article_chars,
        chapter_lookback=settings.chapter_lookback_chars,
        definition_section=settings.definition_section,
    )

    summary = report.summary
    logger.info("")
    logger.info("=" * 60)
    logger.info("Ingestion report")
    logger.info("=" * 60)
    logger.info(f"  Processed:   {summary['processed']}")
    logger.info(f"  Ingested:    {summary['ingested']}")
    logger.info(f"  Skipped:     {summary['skipped']}")
    logger.info(f"  Failed:      {summary['failed']}")
    logger.info(f"  Provisions:  {summary['total_provisions']}")
    logger.info(f"  Definitions: {summary['total_definitions']}")
    logger.info("=" * 60)


if __name__ == "__main__":
    main()
