"""Load raw source text from local files.

PDF and DOCX extraction happen upstream; this module only reads text that
has already been extracted (`.txt`) and the body text of saved HTML pages.
"""

import logging
from pathlib import Path

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

RAW_SOURCE_SUFFIXES = (".txt", ".html", ".htm")

_NON_CONTENT_TAGS = ("script", "style", "noscript", "head")


def html_to_text(html: str | bytes) -> str:
    """Extract the visible text of an HTML page, one block per line."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup.find_all(_NON_CONTENT_TAGS):
        tag.decompose()
    return soup.get_text(separator="\n")


def load_raw_text(path: Path) -> str:
    """
    Read raw text for one source document.

    Args:
        path: A `.txt` file with extracted text, or a saved `.html`/`.htm` page

    Returns:
        The raw (not yet normalized) text

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the suffix is unsupported or a text file is not UTF-8
    """
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".txt":
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            logger.error(f"Failed to decode {path}: {e}")
            raise ValueError(f"Cannot decode file as UTF-8: {path}") from e

    if suffix in (".html", ".htm"):
        # Bytes let BeautifulSoup sniff the charset; Adala pages are not all UTF-8.
        return html_to_text(path.read_bytes())

    raise ValueError(f"Unsupported raw source format {suffix!r}: {path} (extract text upstream)")


def find_raw_source(raw_dir: Path, document_id: str) -> Path:
    """
    Locate the raw source file for a document id.

    Raises:
        FileNotFoundError: If no `{id}.txt`, `{id}.html` or `{id}.htm` exists
    """
    for suffix in RAW_SOURCE_SUFFIXES:
        candidate = raw_dir / f"{document_id}{suffix}"
        if candidate.is_file():
            return candidate
    raise FileNotFoundError(f"No raw source for {document_id} in {raw_dir}")
