"""Tests for the obfuscated-glyph decoder."""

import pytest
from lexmaroc.obfuscation import decode_char, decode_obfuscated_text


class TestDecodeChar:
    def test_first_and_last_digit(self):
        assert decode_char(chr(19)) == "0"
        assert decode_char(chr(28)) == "9"

    @pytest.mark.parametrize("code,expected", [(3, " "), (12, "\n"), (15, ","), (16, "-"), (17, "."), (18, "/")])
    def test_control_codes(self, code, expected):
        assert decode_char(chr(code)) == expected

    def test_alternate_uppercase_map(self):
        assert decode_char(chr(36)) == "A"
        assert decode_char(chr(61)) == "Z"

    def test_caesar_shift_upper(self):
        assert decode_char("D") == "A"
        assert decode_char("A") == "X"

    def test_caesar_shift_lower(self):
        assert decode_char("d") == "a"
        assert decode_char("c") == "z"

    @pytest.mark.parametrize("ch", ["é", "!", "#", "°", "«", "\x00", "\U0001F600"])
    def test_unmapped_passes_through(self, ch):
        assert decode_char(ch) == ch


class TestDecodeObfuscatedText:
    def test_law_number(self):
        assert decode_obfuscated_text("Orl\x03q°\x03\x13\x1c\x10\x13\x1b") == "Loi n° 09-08"

    def test_decodes_encoded_sentence(self, obfuscate):
        plain = "Article premier.\nLe present texte, 12 pages/an."
        assert decode_obfuscated_text(obfuscate(plain)) == plain

    def test_removes_stray_circumflex_a(self):
        assert decode_obfuscated_text("Â\x03Â") == " "

    def test_residual_controls_become_spaces(self):
        assert decode_obfuscated_text("\x04\x07\x08\x0e\x1d\x1e\x7f") == " " * 7

    def test_non_breaking_space(self):
        assert decode_obfuscated_text("\u00a0") == " "

    def test_empty(self):
        assert decode_obfuscated_text("") == ""

    @pytest.mark.parametrize(
        "text",
        [
            "".join(chr(code) for code in range(0, 256)),
            "".join(chr(code) for code in range(0x2000, 0x2100)),
            "\ud800",
            "ÂÂÂÂ",
        ],
    )
    def test_total_and_never_longer(self, text):
        decoded = decode_obfuscated_text(text)
        assert isinstance(decoded, str)
        assert len(decoded) <= len(text)

    def test_deterministic(self):
        text = "".join(chr(code) for code in range(0, 128)) * 3
        assert decode_obfuscated_text(text) == decode_obfuscated_text(text)
