"""Pytest configuration and shared fixtures."""

import pytest
import sys
from pathlib import Path

# Add src to path so we can import lexmaroc
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from lexmaroc.types import DocumentStatus, SourceDocument, SourceEncoding


@pytest.fixture
def make_document():
    """Factory for SourceDocument records with sensible catalog defaults."""

    def _make(**overrides) -> SourceDocument:
        values = {
            "id": "ma-loi-00-00",
            "title": "Loi n° 00-00 relative aux essais",
            "short_name": "Loi 00-00",
            "status": DocumentStatus.IN_FORCE,
            "url": "https://www.dgssi.gov.ma/fr/loi-00-00",
            "source_url": "https://www.dgssi.gov.ma/sites/default/files/loi%2000-00.pdf",
            "source_authority": "DGSSI",
            "source_encoding": SourceEncoding.PLAIN,
        }
        values.update(overrides)
        return SourceDocument(**values)

    return _make


def _obfuscate(text: str) -> str:
    """Apply the substitution seen in obfuscated DGSSI PDFs (inverse of the decoder)."""
    punctuation = {" ": "\x03", "\n": "\x0c", ",": "\x0f", "-": "\x10", ".": "\x11", "/": "\x12"}
    out = []
    for ch in text:
        if ch in punctuation:
            out.append(punctuation[ch])
        elif "0" <= ch <= "9":
            out.append(chr(19 + int(ch)))
        elif "A" <= ch <= "Z":
            out.append(chr((ord(ch) - 65 + 3) % 26 + 65))
        elif "a" <= ch <= "z":
            out.append(chr((ord(ch) - 97 + 3) % 26 + 97))
        else:
            out.append(ch)
    return "".join(out)


@pytest.fixture
def obfuscate():
    return _obfuscate
