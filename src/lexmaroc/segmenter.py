"""Slice normalized legal text into article-level provisions."""

import logging
import re
from dataclasses import dataclass

from .headings import (
    DEFAULT_CHAPTER_LOOKBACK,
    FRENCH_STATUTE_RULES,
    HeadingRules,
    find_article_headings,
    find_chapter,
)
from .normalize import clean_article_content
from .types import ParsedProvision

logger = logging.getLogger(__name__)

# Shorter bodies are cross-references ("... prévu à l'article 12.") rather than articles.
DEFAULT_MIN_ARTICLE_CHARS = 40

_FIRST_ARTICLE_RE = re.compile(r"^(premier|1er)$", flags=re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")
_PROVISION_REF_STRIP_RE = re.compile(r"[^0-9A-Za-z\-]")


@dataclass(frozen=True, slots=True)
class Segmentation:
    """Outcome of segmenting one document's operative text."""

    heading_count: int
    provisions: tuple[ParsedProvision, ...]
    short_discarded: int = 0
    duplicates_discarded: int = 0


def normalize_section(section_raw: str) -> str:
    """
    Normalize a captured article designator into a section label.

    Examples:
        "premier" -> "1"
        "1er" -> "1"
        " 3 bis " -> "3bis"
        "12 – 3" -> "12-3"
    """
    cleaned = _WHITESPACE_RE.sub(" ", section_raw).strip()
    if _FIRST_ARTICLE_RE.match(cleaned):
        return "1"
    return _WHITESPACE_RE.sub("", cleaned).replace("–", "-").replace("—", "-")


def provision_ref_for(section: str) -> str:
    """Build the document-unique reference key for a section label ("3bis" -> "art3bis")."""
    return f"art{_PROVISION_REF_STRIP_RE.sub('', section)}"


def segment_articles(
    text: str,
    rules: HeadingRules = FRENCH_STATUTE_RULES,
    min_article_chars: int = DEFAULT_MIN_ARTICLE_CHARS,
    chapter_lookback: int = DEFAULT_CHAPTER_LOOKBACK,
) -> Segmentation:
    """
    Cut text into provisions at each article heading.

    Each body runs from the end of its heading to the start of the next
    heading (or the end of text). Bodies shorter than `min_article_chars`
    after cleanup are dropped, and a repeated section keeps only its first
    occurrence.
    """
    headings = find_article_headings(text, rules)
    provisions: list[ParsedProvision] = []
    seen_refs: set[str] = set()
    short_discarded = 0
    duplicates_discarded = 0

    for idx, heading in enumerate(headings):
        if not heading.label:
            continue

        section = normalize_section(heading.label)
        body_end = headings[idx + 1].start if idx + 1 < len(headings) else len(text)
        body = clean_article_content(text[heading.end:body_end])

        if len(body) < min_article_chars:
            short_discarded += 1
            continue

        provision_ref = provision_ref_for(section)
        if provision_ref in seen_refs:
            duplicates_discarded += 1
            continue
        seen_refs.add(provision_ref)

        provisions.append(
            ParsedProvision(
                provision_ref=provision_ref,
                chapter=find_chapter(text, heading.start, rules, chapter_lookback),
                section=section,
                title=f"Article {section}",
                content=body,
            )
        )

    if short_discarded or duplicates_discarded:
        logger.debug(
            f"Discarded {short_discarded} short and {duplicates_discarded} duplicate "
            f"article bodies out of {len(headings)} headings"
        )

    return Segmentation(
        heading_count=len(headings),
        provisions=tuple(provisions),
        short_discarded=short_discarded,
        duplicates_discarded=duplicates_discarded,
    )
