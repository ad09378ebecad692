"""Lexmaroc - article-level parsing of official Moroccan legal texts."""

__version__ = "0.1.0"

# Types
from .types import (
    DocumentStatus,
    SourceEncoding,
    IngestionStatus,
    SourceDocument,
    ParsedProvision,
    ParsedDefinition,
    ParsedDocument,
    ParseResult,
)

# Parsing engine
from .parser import parse_official_document, SKIP_NO_HEADINGS, SKIP_NO_CONTENT
from .normalize import normalize_source_text, clean_article_content
from .obfuscation import decode_obfuscated_text
from .headings import (
    FRENCH_STATUTE_RULES,
    HeadingRules,
    HeadingMatch,
    find_matches,
    resolve_start,
    resolve_end,
)
from .segmenter import normalize_section, segment_articles
from .definitions import extract_definitions

# Catalog / ingestion / verification
from .catalog import load_catalog, write_catalog, resolve_document_id
from .ingest import ingest_documents, IngestionReport
from .verify import verify_provisions, ProvisionCheck, VerificationResult

__all__ = [
    # types
    "DocumentStatus",
    "SourceEncoding",
    "IngestionStatus",
    "SourceDocument",
    "ParsedProvision",
    "ParsedDefinition",
    "ParsedDocument",
    "ParseResult",
    # parsing
    "parse_official_document",
    "SKIP_NO_HEADINGS",
    "SKIP_NO_CONTENT",
    "normalize_source_text",
    "clean_article_content",
    "decode_obfuscated_text",
    "FRENCH_STATUTE_RULES",
    "HeadingRules",
    "HeadingMatch",
    "find_matches",
    "resolve_start",
    "resolve_end",
    "normalize_section",
    "segment_articles",
    "extract_definitions",
    # catalog / ingestion / verification
    "load_catalog",
    "write_catalog",
    "resolve_document_id",
    "ingest_documents",
    "IngestionReport",
    "verify_provisions",
    "ProvisionCheck",
    "VerificationResult",
]
