"""Parse raw text of an official Moroccan legal document into provisions.

Pipeline: optional de-obfuscation, whitespace normalization, slicing of the
operative text, artifact scrubbing, article segmentation and extraction of
Article 2 definitions. Failures never raise: a document that yields no
articles comes back as a skipped result with a readable reason.
"""

import logging
from typing import Iterable

from .definitions import DEFINITIONS_SECTION, extract_definitions
from .headings import DEFAULT_CHAPTER_LOOKBACK, FRENCH_STATUTE_RULES, HeadingRules, resolve_end, resolve_start
from .normalize import normalize_source_text, scrub_page_artifacts
from .obfuscation import decode_obfuscated_text
from .segmenter import DEFAULT_MIN_ARTICLE_CHARS, segment_articles
from .types import (
    IngestionStatus,
    ParsedDefinition,
    ParsedDocument,
    ParsedProvision,
    ParseResult,
    SourceDocument,
    SourceEncoding,
)

logger = logging.getLogger(__name__)

SKIP_NO_HEADINGS = (
    "No extractable article headings found (likely image-only PDF or inaccessible source text)."
)
SKIP_NO_CONTENT = (
    "Article headings were detected but no substantive article content could be extracted."
)


def _build_document(
    doc: SourceDocument,
    provisions: Iterable[ParsedProvision] = (),
    definitions: Iterable[ParsedDefinition] = (),
    status: IngestionStatus = IngestionStatus.INGESTED,
    notes: str | None = None,
) -> ParsedDocument:
    """Carry the catalog metadata over to a parsed document."""
    return ParsedDocument(
        id=doc.id,
        type=doc.type,
        title=doc.title,
        title_en=doc.title_en,
        short_name=doc.short_name,
        status=doc.status,
        issued_date=doc.issued_date,
        in_force_date=doc.in_force_date,
        url=doc.url,
        description=doc.description,
        provisions=tuple(provisions),
        definitions=tuple(definitions),
        ingestion_status=status,
        ingestion_notes=notes,
    )


def skipped_document(doc: SourceDocument, notes: str | None = None) -> ParsedDocument:
    """Empty, skipped document for a source that produced no provisions."""
    return _build_document(doc, status=IngestionStatus.SKIPPED, notes=notes)


def prepare_source_text(raw_text: str, doc: SourceDocument) -> str:
    """Decode (when needed) and normalize raw extracted text."""
    if doc.source_encoding is SourceEncoding.OBFUSCATED:
        raw_text = decode_obfuscated_text(raw_text)
    return normalize_source_text(raw_text)


def parse_official_document(
    doc: SourceDocument,
    raw_text: str,
    rules: HeadingRules = FRENCH_STATUTE_RULES,
    min_article_chars: int = DEFAULT_MIN_ARTICLE_CHARS,
    chapter_lookback: int = DEFAULT_CHAPTER_LOOKBACK,
    definition_section: str = DEFINITIONS_SECTION,
) -> ParseResult:
    """
    Parse one document's raw text into a ParseResult.

    Args:
        doc: Catalog record with metadata, encoding and slicing hints
        raw_text: Text extracted from the official source (HTML body, PDF text layer, OCR)
        rules: Heading patterns for this family of documents
        min_article_chars: Minimum cleaned body length for an article to be kept
        chapter_lookback: Characters searched before a heading for its chapter
        definition_section: Section label whose body holds the definitions

    Returns:
        ParseResult whose normalized_source_text contains every provision's
        content verbatim. Skipped results carry a skip_reason.
    """
    normalized = prepare_source_text(raw_text, doc)
    start = resolve_start(normalized, doc)
    end = resolve_end(normalized, doc, start.index)
    source_text = scrub_page_artifacts(normalized[start.index:end.index])

    segmentation = segment_articles(
        source_text,
        rules=rules,
        min_article_chars=min_article_chars,
        chapter_lookback=chapter_lookback,
    )

    if segmentation.heading_count == 0:
        skip_reason = SKIP_NO_HEADINGS
    elif not segmentation.provisions:
        skip_reason = SKIP_NO_CONTENT
    else:
        skip_reason = None

    if skip_reason:
        logger.info(f"{doc.id}: skipped ({skip_reason})")
        return ParseResult(
            parsed=skipped_document(doc),
            normalized_source_text=source_text,
            skip_reason=skip_reason,
            start_rule=start.rule,
            end_rule=end.rule,
        )

    definitions: list[ParsedDefinition] = []
    for provision in segmentation.provisions:
        if provision.section == definition_section:
            definitions.extend(extract_definitions(provision.content, provision.provision_ref))

    logger.info(
        f"{doc.id}: {len(segmentation.provisions)} provisions from "
        f"{segmentation.heading_count} headings, {len(definitions)} definitions"
    )

    return ParseResult(
        parsed=_build_document(doc, segmentation.provisions, definitions),
        normalized_source_text=source_text,
        start_rule=start.rule,
        end_rule=end.rule,
    )
