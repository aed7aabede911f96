"""
Tag vocabulary and tag definitions

Closed enumerations for the kinds and states a tag marker can take, plus
the TagDefinition record the renderer uses to turn a kind into HTML.
"""

from enum import Enum
from dataclasses import dataclass


class TagKind(Enum):
    """
    Kinds of tag the converter knows about

    NONE is what a delimiter scan yields when the character under the
    cursor is not a delimiter at all.
    """
    HEADER = "header"    # '#' as first word of a line
    BOLD = "bold"        # __text__
    ITALIC = "italic"    # _text_
    SPAN = "span"        # paragraph wrapper, one per line
    NONE = "none"

    @property
    def width(self) -> int:
        """Number of source characters the delimiter occupies"""
        if self is TagKind.BOLD:
            return 2
        return 1


class TagState(Enum):
    """
    Lifecycle states of a tag marker

    OPEN and CLOSE are final. The provisional states only exist while the
    matcher is still pairing delimiters on a line; NONE marks a delimiter
    that lost (unpaired or invalidated) and renders as literal text.
    """
    OPEN = "open"
    CLOSE = "close"
    PROVISIONAL_OPEN = "provisional_open"
    PROVISIONAL_OPEN_WITHIN_WORD = "provisional_open_within_word"
    PROVISIONAL_CLOSE = "provisional_close"
    NONE = "none"

    @property
    def is_final(self) -> bool:
        return self is TagState.OPEN or self is TagState.CLOSE

    @property
    def is_provisional_open(self) -> bool:
        return self is TagState.PROVISIONAL_OPEN or self is TagState.PROVISIONAL_OPEN_WITHIN_WORD


@dataclass(frozen=True)
class TagDefinition:
    """
    HTML rendering of one tag kind

    Attributes:
        kind: The TagKind this definition renders
        html_tag: HTML element name (e.g., "b", "strong", "span")
        markdown_symbol: Source delimiter for the kind (e.g., "__")

    Example:
        >>> TagDefinition(TagKind.BOLD, "b", "__").opening()
        '<b>'
    """
    kind: TagKind
    html_tag: str
    markdown_symbol: str

    def opening(self) -> str:
        return f"<{self.html_tag}>"

    def closing(self) -> str:
        return f"</{self.html_tag}>"


HEADER_SYMBOL = "#"
ITALIC_SYMBOL = "_"
BOLD_SYMBOL = "__"

# Words that are bare delimiter runs (or nothing at all) and never carry emphasis
LITERAL_WORDS = frozenset({"", " ", BOLD_SYMBOL, BOLD_SYMBOL * 2})
