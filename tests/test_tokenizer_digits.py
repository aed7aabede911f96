"""
Digit suppression tests

Words containing a digit are only scanned at their first character and
their last one or two characters.
"""

from emphdown.lib.tokenizer import TokensParser
from emphdown.lib.converter import markdown_convert
from emphdown.models.tags import TagKind, TagState


def markers_of(word):
    token = TokensParser().parse(word)[1]
    return [(m.kind, m.state, m.offset) for m in token.markers]


class TestInteriorSuppressed:
    """Interior underscores of digit words stay literal"""

    def test_interior_pair_ignored(self):
        """'a_1_b' has no edge delimiters, so nothing pairs"""
        assert markers_of("a_1_b") == []

    def test_same_shape_without_digit_pairs(self):
        """The digit-free counterpart does pair"""
        assert markers_of("a_b_c") == [
            (TagKind.ITALIC, TagState.OPEN, 1),
            (TagKind.ITALIC, TagState.CLOSE, 3),
        ]

    def test_interior_underscore_left_in_span(self):
        """Edges pair while the interior '_' stays literal"""
        assert markers_of("_1_2_") == [
            (TagKind.ITALIC, TagState.OPEN, 0),
            (TagKind.ITALIC, TagState.CLOSE, 4),
        ]
        assert markdown_convert("_1_2_") == "<span> <i>1_2</i> </span>"


class TestEdges:
    """Edge delimiters of digit words still work"""

    def test_italic_edges(self):
        assert markdown_convert("_1st_") == "<span> <i>1st</i> </span>"

    def test_bold_edges(self):
        """The tail is tried two characters from the end first"""
        assert markdown_convert("__2024__") == "<span> <b>2024</b> </span>"

    def test_close_across_words(self):
        assert markdown_convert("_chapter 12_") == "<span> <i>chapter 12</i> </span>"

    def test_short_digit_words(self):
        """One- and two-character digit words are scanned safely"""
        assert markdown_convert("7") == "<span> 7 </span>"
        assert markdown_convert("_1") == "<span> _1 </span>"
        assert markdown_convert("1_") == "<span> 1_ </span>"

    def test_head_bold_not_rescanned(self):
        """In '__1' the tail offset lies inside the head delimiter"""
        assert markers_of("__1") == []
