"""Extraction of quoted-term definitions from a definitions article."""

import re

from .types import ParsedDefinition

# Moroccan statutes usually enumerate their definitions in Article 2.
DEFINITIONS_SECTION = "2"

DEFINITION_PATTERNS: tuple[re.Pattern, ...] = (
    # «Terme» : définition
    re.compile(r"[«\"]\s*([^»\":\n]{2,120})\s*[»\"]\s*[:\-–]\s*([^\n]{4,400})"),
    # - «Terme» : définition
    re.compile(r"[-–]\s*[«\"]\s*([^»\":\n]{2,120})\s*[»\"]\s*[:\-–]\s*([^\n]{4,400})"),
)

_MIN_TERM_CHARS = 2
_MIN_DEFINITION_CHARS = 4
_TRAILING_PUNCT_RE = re.compile(r"[.;]$")


def extract_definitions(content: str, provision_ref: str | None = None) -> list[ParsedDefinition]:
    """
    Collect term/definition pairs from an article body.

    Pairs are deduplicated case-insensitively on (term, definition), keeping
    the first one seen.
    """
    unique: dict[tuple[str, str], ParsedDefinition] = {}

    for pattern in DEFINITION_PATTERNS:
        for match in pattern.finditer(content):
            term = match.group(1).strip()
            definition = _TRAILING_PUNCT_RE.sub("", match.group(2).strip())
            if len(term) < _MIN_TERM_CHARS or len(definition) < _MIN_DEFINITION_CHARS:
                continue

            key = (term.lower(), definition.lower())
            if key not in unique:
                unique[key] = ParsedDefinition(
                    term=term,
                    definition=definition,
                    source_provision=provision_ref,
                )

    return list(unique.values())
