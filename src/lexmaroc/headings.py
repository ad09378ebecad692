"""Heading detection and operative-text anchoring.

Heading patterns are kept as data (`HeadingRules`) so a new family of
documents can bring its own patterns without touching the segmenter. All
scans go through `find_matches`, which returns ordered, immutable match
records instead of exposing regex iterator state.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional

from .types import SourceDocument

logger = logging.getLogger(__name__)

# "Article"-like tokens tolerate common OCR damage ("Articel", "Articlle").
ARTICLE_HEADING_RE = re.compile(
    r"(?:^|[\n\r]|[«\"“”]\s*)"
    r"(?:ARTICLE|Article|ART\.?|Artic[ecll]{1,5})"
    r"(?:\s+)"
    r"(premier|PREMIER|1er|unique|UNIQUE|[0-9]+(?:\s*[-–—]\s*[0-9]+)?(?:\s+(?:bis|ter|quater))?)"
    r"(?:\s*[:.\-–—])?"
)

CHAPTER_HEADING_RE = re.compile(
    r"(?:^|\n)\s*("
    r"CHAPITRE\s+[A-Z0-9IVX\-]+[^\n]*"
    r"|Chapitre\s+[A-Za-z0-9IVX\-]+[^\n]*"
    r"|TITRE\s+[A-Z0-9IVX\-]+[^\n]*"
    r"|Titre\s+[A-Za-z0-9IVX\-]+[^\n]*"
    r"|SECTION\s+[A-Z0-9IVX\-]+[^\n]*"
    r"|Section\s+[A-Za-z0-9IVX\-]+[^\n]*"
    r")"
)

DEFAULT_CHAPTER_LOOKBACK = 2000


@dataclass(frozen=True, slots=True)
class HeadingMatch:
    """Position and captured label of one pattern match."""

    start: int
    end: int
    label: str
    text: str


@dataclass(frozen=True, slots=True)
class HeadingRules:
    """Heading patterns for one family of documents.

    Both patterns must expose the heading label as capture group 1.
    """

    name: str
    article: re.Pattern
    chapter: re.Pattern


FRENCH_STATUTE_RULES = HeadingRules(
    name="french_statute",
    article=ARTICLE_HEADING_RE,
    chapter=CHAPTER_HEADING_RE,
)


@dataclass(frozen=True, slots=True)
class Anchor:
    """Resolved slice boundary and the rule that produced it."""

    index: int
    rule: str


def find_matches(pattern: re.Pattern, text: str) -> tuple[HeadingMatch, ...]:
    """
    Return all non-overlapping matches of pattern in text, in order.

    The label is capture group 1, or the whole match for patterns without groups.
    """
    return tuple(
        HeadingMatch(
            start=match.start(),
            end=match.end(),
            label=(match.group(1) if pattern.groups else match.group(0)) or "",
            text=match.group(0),
        )
        for match in pattern.finditer(text)
    )


def find_article_headings(text: str, rules: HeadingRules = FRENCH_STATUTE_RULES) -> tuple[HeadingMatch, ...]:
    return find_matches(rules.article, text)


def find_chapter(
    text: str,
    article_start: int,
    rules: HeadingRules = FRENCH_STATUTE_RULES,
    lookback: int = DEFAULT_CHAPTER_LOOKBACK,
) -> str | None:
    """
    Return the nearest chapter/section/title heading before an article.

    Only the `lookback` characters preceding the article heading are searched;
    an article with no heading in that window has no chapter.
    """
    window_start = max(0, article_start - lookback)
    headings = find_matches(rules.chapter, text[window_start:article_start])
    if not headings:
        return None
    return headings[-1].label.strip()


def _literal_pattern(value: str) -> re.Pattern:
    return re.compile(re.escape(value), flags=re.IGNORECASE)


def _law_number_pattern(law_number: str) -> re.Pattern:
    return re.compile(rf"LOI\s+N[^\n]{{0,20}}{re.escape(law_number)}", flags=re.IGNORECASE)


def _law_number_first(text: str, doc: SourceDocument) -> int | None:
    # OCR of Bulletin Officiel scans can reorder columns; later hits are unreliable.
    if not doc.law_number or not doc.has_ocr_hints:
        return None
    match = _law_number_pattern(doc.law_number).search(text)
    return match.start() if match else None


def _law_number_last(text: str, doc: SourceDocument) -> int | None:
    # The last hit skips promulgation headers that cite the law before its text begins.
    if not doc.law_number or doc.has_ocr_hints:
        return None
    matches = find_matches(_law_number_pattern(doc.law_number), text)
    return matches[-1].start if matches else None


def _start_hint(text: str, doc: SourceDocument) -> int | None:
    if not doc.start_hint:
        return None
    match = _literal_pattern(doc.start_hint).search(text)
    return match.start() if match else None


StartRule = Callable[[str, SourceDocument], Optional[int]]

START_RULES: tuple[tuple[str, StartRule], ...] = (
    ("law_number_first", _law_number_first),
    ("law_number_last", _law_number_last),
    ("start_hint", _start_hint),
)


def resolve_start(text: str, doc: SourceDocument) -> Anchor:
    """Evaluate the start rules in order; the first one that finds a position wins."""
    for name, rule in START_RULES:
        index = rule(text, doc)
        if index is not None:
            logger.debug(f"{doc.id}: operative text starts at {index} ({name})")
            return Anchor(index=index, rule=name)
    logger.debug(f"{doc.id}: no start anchor matched, using document start")
    return Anchor(index=0, rule="document_start")


def resolve_end(text: str, doc: SourceDocument, start: int) -> Anchor:
    """Cut at the first end hint occurrence after start, or keep the whole text."""
    if doc.end_hint:
        match = _literal_pattern(doc.end_hint).search(text, start)
        if match:
            return Anchor(index=match.start(), rule="end_hint")
        logger.debug(f"{doc.id}: end hint {doc.end_hint!r} not found")
    return Anchor(index=len(text), rule="document_end")
