"""Unit tests for tone normalization and classification."""

import pytest

from chant_pointer.core.rules import PointingRules
from chant_pointer.core.tones import normalize_tone, uses_first_stanza_accent


class TestNormalizeTone:

    @pytest.mark.parametrize("raw,expected", [
        ("2", "2"),
        (" 6 ", "6"),
        ("6C", "6c"),
        ("1 A", "1a"),
        ("Tone-8", "tone8"),
        ("", ""),
    ])
    def test_normalize(self, raw, expected):
        assert normalize_tone(raw) == expected


class TestFirstStanzaAccent:
    """Tones 1, 2, 5, 6 and 8 accent the first half-line."""

    @pytest.mark.parametrize("tone", ["1", "2", "5", "6", "8", " 8 ", "6."])
    def test_accented(self, tone):
        assert uses_first_stanza_accent(tone) is True

    @pytest.mark.parametrize("tone", ["3", "4", "7", "1A", "6C", "P", "Tone 2"])
    def test_not_accented(self, tone):
        assert uses_first_stanza_accent(tone) is False

    def test_no_tone(self):
        assert uses_first_stanza_accent(None) is False
        assert uses_first_stanza_accent("") is False

    def test_custom_tone_set(self):
        rules = PointingRules(first_stanza_accent_tones=frozenset({"1a"}))
        assert uses_first_stanza_accent("1A", rules) is True
        assert uses_first_stanza_accent("1", rules) is False
