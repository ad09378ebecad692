"""Batch ingestion of locally available source text into seed JSON files."""

import json
import logging
import time
from dataclasses import asdict, dataclass, field, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable

from .definitions import DEFINITIONS_SECTION
from .headings import DEFAULT_CHAPTER_LOOKBACK
from .parser import parse_official_document, skipped_document
from .segmenter import DEFAULT_MIN_ARTICLE_CHARS
from .sources import find_raw_source, load_raw_text
from .types import ParsedDocument, SourceDocument

logger = logging.getLogger(__name__)

REPORT_FILENAME = "_ingestion-report.json"

STATUS_INGESTED = "ingested"
STATUS_SKIPPED = "skipped"
STATUS_FAILED = "failed"


@dataclass
class IngestionReportItem:
    id: str
    title: str
    source_url: str
    source_authority: str
    status: str
    provisions: int = 0
    definitions: int = 0
    notes: str | None = None


@dataclass
class IngestionReport:
    """Per-document outcomes of one ingestion run."""

    generated_at: str
    documents: list[IngestionReportItem] = field(default_factory=list)

    def count(self, status: str) -> int:
        return sum(1 for item in self.documents if item.status == status)

    @property
    def summary(self) -> dict[str, int]:
        return {
            "processed": len(self.documents),
            "ingested": self.count(STATUS_INGESTED),
            "skipped": self.count(STATUS_SKIPPED),
            "failed": self.count(STATUS_FAILED),
            "total_provisions": sum(item.provisions for item in self.documents),
            "total_definitions": sum(item.definitions for item in self.documents),
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "generated_at": self.generated_at,
            "summary": self.summary,
            "documents": [
                {k: v for k, v in asdict(item).items() if v is not None}
                for item in self.documents
            ],
        }


def seed_filename(document: SourceDocument) -> str:
    return document.seed_file or f"{document.id}.json"


def _clean_outputs(seed_dir: Path, text_dir: Path) -> None:
    """Remove outputs of a previous run; `_`-prefixed seed files are kept."""
    for path in seed_dir.glob("*.json"):
        if not path.name.startswith("_"):
            path.unlink()
    for path in text_dir.glob("*.txt"):
        path.unlink()


def _write_json(payload: Any, output_path: Path) -> None:
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)


def _report_item(document: SourceDocument, status: str, **kwargs: Any) -> IngestionReportItem:
    return IngestionReportItem(
        id=document.id,
        title=document.title,
        source_url=document.source_url,
        source_authority=document.source_authority,
        status=status,
        **kwargs,
    )


def ingest_document(
    document: SourceDocument,
    raw_dir: Path,
    text_dir: Path,
    seed_dir: Path,
    min_article_chars: int = DEFAULT_MIN_ARTICLE_CHARS,
    chapter_lookback: int = DEFAULT_CHAPTER_LOOKBACK,
    definition_section: str = DEFINITIONS_SECTION,
) -> IngestionReportItem:
    """
    Parse one document from its raw source and write its outputs.

    Writes the normalized source text to `{text_dir}/{id}.txt` and the parsed
    document to `{seed_dir}/{seed file}`. A skipped parse still writes both,
    with the skip reason as ingestion notes.

    Raises:
        FileNotFoundError: If the document has no raw source
        ValueError: If the raw source cannot be read as text
    """
    raw_text = load_raw_text(find_raw_source(raw_dir, document.id))
    result = parse_official_document(
        document,
        raw_text,
        min_article_chars=min_article_chars,
        chapter_lookback=chapter_lookback,
        definition_section=definition_section,
    )

    (text_dir / f"{document.id}.txt").write_text(result.normalized_source_text, encoding="utf-8")

    parsed: ParsedDocument = result.parsed
    if result.skip_reason:
        parsed = replace(parsed, ingestion_notes=result.skip_reason)
    _write_json(parsed.to_dict(), seed_dir / seed_filename(document))

    if result.skip_reason:
        return _report_item(document, STATUS_SKIPPED, notes=result.skip_reason)
    return _report_item(
        document,
        STATUS_INGESTED,
        provisions=len(parsed.provisions),
        definitions=len(parsed.definitions),
    )


def ingest_documents(
    documents: Iterable[SourceDocument],
    raw_dir: Path,
    text_dir: Path,
    seed_dir: Path,
    min_article_chars: int = DEFAULT_MIN_ARTICLE_CHARS,
    chapter_lookback: int = DEFAULT_CHAPTER_LOOKBACK,
    definition_section: str = DEFINITIONS_SECTION,
) -> IngestionReport:
    """
    Ingest every document and write `_ingestion-report.json` to seed_dir.

    A document whose source cannot be loaded is recorded as failed and gets a
    skipped seed file; the run continues with the next document.
    """
    text_dir.mkdir(parents=True, exist_ok=True)
    seed_dir.mkdir(parents=True, exist_ok=True)
    _clean_outputs(seed_dir, text_dir)

    report = IngestionReport(generated_at=datetime.now(timezone.utc).isoformat())
    start_time = time.time()

    for document in documents:
        try:
            item = ingest_document(
                document,
                raw_dir,
                text_dir,
                seed_dir,
                min_article_chars=min_article_chars,
                chapter_lookback=chapter_lookback,
                definition_section=definition_section,
            )
        except (OSError, ValueError) as e:
            logger.warning(f"{document.id}: failed ({e})")
            item = _report_item(document, STATUS_FAILED, notes=str(e))
            fallback = skipped_document(document, notes=f"Source text unavailable: {e}")
            try:
                _write_json(fallback.to_dict(), seed_dir / seed_filename(document))
            except OSError as write_error:
                logger.error(f"{document.id}: could not write fallback seed ({write_error})")

        if item.status == STATUS_INGESTED:
            logger.info(f"  {document.id}: {item.provisions} provisions, {item.definitions} definitions")
        elif item.status == STATUS_SKIPPED:
            logger.info(f"  {document.id}: skipped ({item.notes})")
        report.documents.append(item)

    report_path = seed_dir / REPORT_FILENAME
    _write_json(report.to_dict(), report_path)

    summary = report.summary
    logger.info(
        f"Ingestion complete in {time.time() - start_time:.1f}s: "
        f"{summary['ingested']} ingested, {summary['skipped']} skipped, {summary['failed']} failed "
        f"({summary['total_provisions']} provisions, {summary['total_definitions']} definitions)"
    )
    logger.info(f"Report written to {report_path}")
    return report
