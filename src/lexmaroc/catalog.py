"""Source catalog: the list of official documents to parse, with their hints."""

import json
import logging
from pathlib import Path
from typing import Iterable

from .types import SourceDocument

logger = logging.getLogger(__name__)


def load_catalog(catalog_path: Path) -> list[SourceDocument]:
    """
    Load the source catalog from JSON.

    Args:
        catalog_path: Path to a JSON list of source records

    Returns:
        SourceDocument records in catalog order

    Raises:
        FileNotFoundError: If the catalog file doesn't exist
        ValueError: If the file is not a JSON list or an entry is invalid
    """
    if not catalog_path.exists():
        raise FileNotFoundError(f"Catalog not found: {catalog_path}")

    with open(catalog_path, "r", encoding="utf-8") as f:
        try:
            entries = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Malformed catalog: {catalog_path}") from e

    if not isinstance(entries, list):
        raise ValueError(f"Catalog must be a JSON list: {catalog_path}")

    documents = [SourceDocument.from_dict(entry) for entry in entries]

    seen_ids: set[str] = set()
    for document in documents:
        if document.id in seen_ids:
            raise ValueError(f"Duplicate document id in catalog: {document.id}")
        seen_ids.add(document.id)

    logger.info(f"Loaded {len(documents)} source documents from {catalog_path}")
    return documents


def write_catalog(documents: Iterable[SourceDocument], output_path: Path) -> None:
    """Write catalog records to a JSON file."""
    entries = [document.to_dict() for document in documents]
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(entries, f, ensure_ascii=False, indent=2)
    logger.info(f"Catalog written to {output_path} ({len(entries)} entries)")


def resolve_document_id(documents: Iterable[SourceDocument], query: str) -> str | None:
    """
    Resolve a loose document reference to a catalog id.

    Tries, in order: exact id, then a case-insensitive substring of the title,
    short name or English title ("Loi 05-20", "cybersécurité").
    """
    trimmed = (query or "").strip()
    if not trimmed:
        return None

    documents = list(documents)
    for document in documents:
        if document.id == trimmed:
            return document.id

    needle = trimmed.lower()
    for document in documents:
        names = (document.title, document.short_name, document.title_en)
        if any(name and needle in name.lower() for name in names):
            return document.id

    return None
