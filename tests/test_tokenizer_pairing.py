"""
Pairing tests - open/close matching on the line stack

Tests bold and italic pairing within and across words, nesting,
bold/italic crossings, and that pairs never cross lines.
"""

import pytest

from emphdown.lib.tokenizer import TokensParser
from emphdown.models.tags import TagKind, TagState


def word_markers(text):
    """Word tokens of the first line with (kind, state, offset) marker lists"""
    tokens = TokensParser().parse(text)
    words = tokens[1:tokens.index(next(t for t in tokens if t.is_lineBreak)) - 1]
    return [(t.content, [(m.kind, m.state, m.offset) for m in t.markers]) for t in words]


B, I = TagKind.BOLD, TagKind.ITALIC
OPEN, CLOSE = TagState.OPEN, TagState.CLOSE


class TestSingleWord:
    """Test delimiters wrapping one word"""

    def test_bold(self):
        assert word_markers("__bold__") == [("__bold__", [(B, OPEN, 0), (B, CLOSE, 6)])]

    def test_italic(self):
        assert word_markers("_it_") == [("_it_", [(I, OPEN, 0), (I, CLOSE, 3)])]

    def test_markers_reference_each_other(self):
        """Paired markers hold each other's handle"""
        tokens = TokensParser().parse("_it_")
        opener, closer = tokens[1].markers

        assert opener.paired_with is not None
        assert closer.paired_with is not None
        assert opener.paired_with != closer.paired_with

    def test_unclosed_italic(self):
        """An opener with no closer leaves the word literal"""
        assert word_markers("_open") == [("_open", [])]

    def test_unopened_close(self):
        """A closer with no opener leaves the word literal"""
        assert word_markers("close_") == [("close_", [])]


class TestAcrossWords:
    """Test pairs spanning several words"""

    def test_italic_across_words(self):
        assert word_markers("_a b_") == [
            ("_a", [(I, OPEN, 0)]),
            ("b_", [(I, CLOSE, 1)]),
        ]

    def test_bold_across_words(self):
        assert word_markers("__a b c__") == [
            ("__a", [(B, OPEN, 0)]),
            ("b", []),
            ("c__", [(B, CLOSE, 1)]),
        ]

    def test_nearest_opener_wins(self):
        """A closer pairs with the most recent opener of its kind"""
        assert word_markers("_a _b c_") == [
            ("_a", []),
            ("_b", [(I, OPEN, 0)]),
            ("c_", [(I, CLOSE, 1)]),
        ]

    def test_failed_close_keeps_stack(self):
        """A closer that finds nothing leaves the opener for a later closer"""
        assert word_markers("_a b__ c_") == [
            ("_a", [(I, OPEN, 0)]),
            ("b__", []),
            ("c_", [(I, CLOSE, 1)]),
        ]

    def test_failed_close_restores_order(self):
        """After a failed search the nearer opener is still found first"""
        assert word_markers("_a _b c__ d_ e_") == [
            ("_a", [(I, OPEN, 0)]),
            ("_b", [(I, OPEN, 0)]),
            ("c__", []),
            ("d_", [(I, CLOSE, 1)]),
            ("e_", [(I, CLOSE, 1)]),
        ]

    def test_skips_foreign_within_word_opener(self):
        """A mid-word opener from another word is passed over and kept"""
        assert word_markers("_a x_y c_") == [
            ("_a", [(I, OPEN, 0)]),
            ("x_y", []),
            ("c_", [(I, CLOSE, 1)]),
        ]

    def test_bold_skips_within_word_italic(self):
        assert word_markers("__a x_y b__") == [
            ("__a", [(B, OPEN, 0)]),
            ("x_y", []),
            ("b__", [(B, CLOSE, 1)]),
        ]


class TestWithinWord:
    """Test delimiters in the middle of a word"""

    def test_italic_within_word(self):
        """Mid-word delimiters alternate open/close by parity"""
        assert word_markers("a_b_c") == [("a_b_c", [(I, OPEN, 1), (I, CLOSE, 3)])]

    def test_bold_within_word(self):
        assert word_markers("a__b__c") == [("a__b__c", [(B, OPEN, 1), (B, CLOSE, 4)])]

    def test_within_word_opener_needs_same_word(self):
        """A mid-word opener cannot be closed from another word"""
        assert word_markers("a_b c_") == [("a_b", []), ("c_", [])]

    def test_within_word_openers_in_different_words(self):
        """Two mid-word openers in different words stay unpaired"""
        assert word_markers("a_b c_d") == [("a_b", []), ("c_d", [])]

    def test_boundary_beats_parity(self):
        """After a mid-word close, a trailing '_' still tries to close"""
        assert word_markers("_a_b_") == [("_a_b_", [(I, OPEN, 0), (I, CLOSE, 2)])]

    def test_bold_skips_second_underscore(self):
        """'__' inside a word is not read as two italic delimiters"""
        assert word_markers("_bold__word_") == [
            ("_bold__word_", [(I, OPEN, 0), (I, CLOSE, 11)]),
        ]


class TestNesting:
    """Test properly nested bold and italic"""

    def test_bold_inside_italic(self):
        assert word_markers("_a __b__ c_") == [
            ("_a", [(I, OPEN, 0)]),
            ("__b__", [(B, OPEN, 0), (B, CLOSE, 3)]),
            ("c_", [(I, CLOSE, 1)]),
        ]

    def test_italic_inside_bold(self):
        assert word_markers("__a _b_ c__") == [
            ("__a", [(B, OPEN, 0)]),
            ("_b_", [(I, OPEN, 0), (I, CLOSE, 2)]),
            ("c__", [(B, CLOSE, 1)]),
        ]


class TestCrossing:
    """Test that overlapping bold/italic pairs drop the italic pair"""

    def test_italic_opens_inside_closed_bold(self):
        """Bold opens first, italic closes after the bold closed"""
        assert word_markers("__a _b__ c_") == [
            ("__a", [(B, OPEN, 0)]),
            ("_b__", [(B, CLOSE, 2)]),
            ("c_", []),
        ]

    def test_italic_opens_before_bold(self):
        """Italic opens first and closes between the bold's open and close"""
        assert word_markers("_a __b_ c__") == [
            ("_a", []),
            ("__b_", [(B, OPEN, 0)]),
            ("c__", [(B, CLOSE, 1)]),
        ]

    def test_crossing_within_one_word(self):
        assert word_markers("_a__b_c__") == [("_a__b_c__", [(B, OPEN, 2), (B, CLOSE, 7)])]

    def test_no_overlap_survives(self):
        """Every crossing input yields properly nested output markers"""
        for text in ("__a _b__ c_", "_a __b_ c__", "_a__b_c__"):
            stack = []
            for content, markers in word_markers(text):
                for kind, state, _ in sorted(markers, key=lambda m: m[2]):
                    if state is OPEN:
                        stack.append(kind)
                    else:
                        assert stack.pop() is kind


class TestLineBoundaries:
    """Test that matching never crosses a newline"""

    def test_no_cross_line_pair(self):
        tokens = TokensParser().parse("_a\nb_")

        assert all(
            m.kind is TagKind.SPAN for token in tokens for m in token.markers
        )

    def test_pairs_on_each_line(self):
        tokens = TokensParser().parse("_a_\n__b__")
        kinds = [m.kind for token in tokens for m in token.markers if m.kind is not TagKind.SPAN]

        assert kinds == [I, I, B, B]

    @pytest.mark.parametrize("text", ["__a\nb__", "a_b\nc_d"])
    def test_stack_cleared(self, text):
        tokens = TokensParser().parse(text)

        assert all(m.kind is TagKind.SPAN for token in tokens for m in token.markers)


class TestOnlyFinalMarkers:
    """Test that provisional and invalidated markers never leave the tokenizer"""

    @pytest.mark.parametrize(
        "text", ["_a", "a_", "a_b c_d", "__a _b__ c_", "_a __b_ c__", "_bold__word_", "___"]
    )
    def test_states_are_final(self, text):
        tokens = TokensParser().parse(text)

        assert all(m.state.is_final for token in tokens for m in token.markers)
