"""
Reversal of the glyph substitution found in some DGSSI brochure PDFs.

The text layer of these PDFs maps spaces, punctuation and digits onto low
control codes and shifts letters by +3. The mapping was reverse-engineered
from a handful of documents, so decoding is best-effort: characters without a
known mapping pass through unchanged and the decoder never raises.
"""

import re

_CONTROL_MAP = {
    3: " ",
    12: "\n",
    15: ",",
    16: "-",
    17: ".",
    18: "/",
}

_DIGIT_BASE = 19
_DIGIT_LAST = 28
_ALT_UPPER_FIRST = 36
_ALT_UPPER_LAST = 61
_ALT_UPPER_OFFSET = 29
_CAESAR_SHIFT = 3

_RESIDUAL_CONTROLS_RE = re.compile("[\u0004\u0007\u0008\u000e\u001d\u001e\u007f]")


def _shift_back(ch: str, base: str) -> str:
    return chr((ord(ch) - ord(base) - _CAESAR_SHIFT) % 26 + ord(base))


def decode_char(ch: str) -> str:
    """Decode a single character; unknown characters are returned as-is."""
    code = ord(ch)

    mapped = _CONTROL_MAP.get(code)
    if mapped is not None:
        return mapped

    if _DIGIT_BASE <= code <= _DIGIT_LAST:
        return str(code - _DIGIT_BASE)

    # Alternate uppercase glyph map (ASCII punctuation + 29 => A-Z).
    if _ALT_UPPER_FIRST <= code <= _ALT_UPPER_LAST:
        candidate = chr(code + _ALT_UPPER_OFFSET)
        if "A" <= candidate <= "Z":
            return candidate

    if "A" <= ch <= "Z":
        return _shift_back(ch, "A")
    if "a" <= ch <= "z":
        return _shift_back(ch, "a")

    return ch


def decode_obfuscated_text(text: str) -> str:
    """
    Decode text extracted from an obfuscated source PDF.

    Deterministic and total: the output never depends on anything but the
    input, and no input makes it fail.
    """
    decoded = "".join(decode_char(ch) for ch in text)
    decoded = decoded.replace("Â", "")
    decoded = _RESIDUAL_CONTROLS_RE.sub(" ", decoded)
    return decoded.replace("\u00a0", " ")
