"""Shared dataclasses for source records and parse output.

No imports from other lexmaroc modules, so this is safe as a foundation
that any module can import without risk of circular dependencies.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from typing import Any, Optional


class DocumentStatus(str, Enum):
    IN_FORCE = "in_force"
    AMENDED = "amended"
    REPEALED = "repealed"
    NOT_YET_IN_FORCE = "not_yet_in_force"


class SourceEncoding(str, Enum):
    PLAIN = "plain"
    OBFUSCATED = "obfuscated"


class IngestionStatus(str, Enum):
    INGESTED = "ingested"
    SKIPPED = "skipped"


def _compact(value: Any) -> Any:
    """Drop None entries and flatten enums so the result is JSON-ready."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _compact(v) for k, v in value.items() if v is not None}
    if isinstance(value, (list, tuple)):
        return [_compact(v) for v in value]
    return value


@dataclass(frozen=True, slots=True)
class SourceDocument:
    """One official legal text as described by the source catalog."""

    id: str
    title: str
    status: DocumentStatus
    url: str
    source_url: str
    source_authority: str
    source_encoding: SourceEncoding = SourceEncoding.PLAIN
    type: str = "statute"
    seed_file: Optional[str] = None
    title_en: Optional[str] = None
    short_name: Optional[str] = None
    issued_date: Optional[str] = None
    in_force_date: Optional[str] = None
    description: Optional[str] = None
    law_number: Optional[str] = None
    start_hint: Optional[str] = None
    end_hint: Optional[str] = None
    ocr_page_start: Optional[int] = None
    ocr_page_end: Optional[int] = None

    @property
    def has_ocr_hints(self) -> bool:
        return bool(self.ocr_page_start or self.ocr_page_end)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SourceDocument":
        """
        Build a SourceDocument from a catalog JSON entry.

        Raises:
            ValueError: If a required key is missing or status/encoding is unknown
        """
        missing = [
            name for name in ("id", "title", "status", "url", "source_url", "source_authority")
            if not data.get(name)
        ]
        if missing:
            raise ValueError(f"Catalog entry {data.get('id', '?')!r} is missing: {', '.join(missing)}")

        try:
            status = DocumentStatus(data["status"])
        except ValueError as e:
            raise ValueError(f"Unknown document status {data['status']!r} for {data['id']}") from e

        try:
            encoding = SourceEncoding(data.get("source_encoding") or SourceEncoding.PLAIN.value)
        except ValueError as e:
            raise ValueError(
                f"Unknown source encoding {data.get('source_encoding')!r} for {data['id']}"
            ) from e

        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known}
        values["status"] = status
        values["source_encoding"] = encoding
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        return _compact(asdict(self))


@dataclass(frozen=True, slots=True)
class ParsedProvision:
    """A single article of a legal text."""

    provision_ref: str
    section: str
    title: str
    content: str
    chapter: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ParsedDefinition:
    term: str
    definition: str
    source_provision: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ParsedDocument:
    """Assembled output for one source document."""

    id: str
    title: str
    status: DocumentStatus
    url: str
    type: str = "statute"
    title_en: Optional[str] = None
    short_name: Optional[str] = None
    issued_date: Optional[str] = None
    in_force_date: Optional[str] = None
    description: Optional[str] = None
    provisions: tuple[ParsedProvision, ...] = field(default_factory=tuple)
    definitions: tuple[ParsedDefinition, ...] = field(default_factory=tuple)
    ingestion_status: IngestionStatus = IngestionStatus.INGESTED
    ingestion_notes: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return _compact(asdict(self))


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Parsed document plus the source text its provisions were cut from."""

    parsed: ParsedDocument
    normalized_source_text: str
    skip_reason: Optional[str] = None
    start_rule: Optional[str] = None
    """Name of the anchor rule that fixed the start of the operative text."""
    end_rule: Optional[str] = None

    @property
    def skipped(self) -> bool:
        return self.parsed.ingestion_status is IngestionStatus.SKIPPED

    def to_dict(self) -> dict[str, Any]:
        return _compact(asdict(self))
