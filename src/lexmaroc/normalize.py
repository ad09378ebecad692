"""Whitespace and page-artifact normalization for extracted legal text."""

import re

_HORIZONTAL_WS_RE = re.compile(r"[ \t]+")
_EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")

# Page artifacts left behind by text-layer extraction and OCR of Bulletin Officiel scans.
_PAGE_MARKER_RE = re.compile(r"\n\s*\[\[PAGE\s+\d+\]\]\s*\n", flags=re.IGNORECASE)
_MASTHEAD_RE = re.compile(
    r"\n\s*(BULLETIN OFFICIEL|Nº\s*\d+[^\n]*|N°\s*\d+[^\n]*)\s*",
    flags=re.IGNORECASE,
)
_PAGE_NUMBER_LINE_RE = re.compile(r"\n\s*\d+\s*\n")

# A numeral on its own line right after one of these tokens belongs to a heading
# ("ARTICLE\n2", "CHAPITRE\n3"), not to the page footer.
_HEADING_KEYWORD_TAIL_RE = re.compile(
    r"\b(?:ARTICLE|ART\.?|Artic[ecl]{1,5}|CHAPITRE|TITRE|SECTION)[ \t]*$",
    flags=re.IGNORECASE,
)

# Bounds the fixpoint loop in scrub_page_artifacts; each pass strictly shortens the text.
_MAX_SCRUB_PASSES = 50


def normalize_source_text(text: str) -> str:
    """
    Canonicalize line breaks and whitespace in raw extracted text.

    Idempotent: normalizing already normalized text returns it unchanged.
    """
    text = text.replace("\r", "")
    text = text.replace("\f", "\n")
    text = text.replace("\u00a0", " ")
    text = _HORIZONTAL_WS_RE.sub(" ", text)
    text = _EXCESS_NEWLINES_RE.sub("\n\n", text)
    return text.strip()


def _collapse_whitespace(text: str) -> str:
    text = _HORIZONTAL_WS_RE.sub(" ", text)
    return _EXCESS_NEWLINES_RE.sub("\n\n", text)


def _drop_page_number(match: re.Match) -> str:
    line_start = match.string.rfind("\n", 0, match.start()) + 1
    if _HEADING_KEYWORD_TAIL_RE.search(match.string, line_start, match.start()):
        return match.group(0)
    return "\n"


def _remove_page_artifacts(text: str) -> str:
    text = _PAGE_MARKER_RE.sub("\n", text)
    text = _MASTHEAD_RE.sub("\n", text)
    text = _PAGE_NUMBER_LINE_RE.sub(_drop_page_number, text)
    return _collapse_whitespace(text)


def clean_article_content(content: str) -> str:
    """Strip page markers, mastheads and bare page numbers from an article body."""
    return _remove_page_artifacts(content).strip()


def scrub_page_artifacts(text: str) -> str:
    """
    Remove page artifacts until none are left.

    A single substitution pass can leave new artifacts behind (two page
    numbers on consecutive lines share a newline), so passes repeat until the
    text stops changing. On scrubbed text, clean_article_content only trims.
    """
    for _ in range(_MAX_SCRUB_PASSES):
        scrubbed = _remove_page_artifacts(text)
        if scrubbed == text:
            break
        text = scrubbed
    return text
