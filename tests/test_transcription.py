"""
Transcription tests

Tests the X-SAMPA table and the ordered application of substitution pairs.
"""

from vvsml.lib.transcription import Transcription, XSAMPA, TRANSCRIPTIONS


class TestXSampa:
    """Test X-SAMPA -> IPA translation"""

    def test_word(self):
        assert XSAMPA.translate('h@"loU') == "həˈloʊ"

    def test_fricatives(self):
        assert XSAMPA.translate("TiNS") == "θiŋʃ"

    def test_length_mark(self):
        assert XSAMPA.translate("i:") == "iː"

    def test_multi_character_before_prefix(self):
        assert XSAMPA.translate("b_<") == "ɓ"

    def test_rhotic_mark_applies_before_vowels(self):
        assert XSAMPA.translate("@`") == "ə˞"

    def test_click_not_shadowed_by_syllabic_mark(self):
        assert XSAMPA.translate("=\\") == "ǂ"

    def test_braces(self):
        assert XSAMPA.translate("{}") == "æʉ"

    def test_registered_under_x(self):
        assert TRANSCRIPTIONS['x'] is XSAMPA


class TestOrdering:
    """Test that pairs apply strictly in listed order"""

    def test_longer_first(self):
        table = Transcription("test", [("ab", "X"), ("a", "Y")])
        assert table.translate("aba") == "XY"

    def test_prefix_first_shadows(self):
        table = Transcription("test", [("a", "Y"), ("ab", "X")])
        assert table.translate("aba") == "YbY"
