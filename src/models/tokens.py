"""
Token and marker models

Data structures produced by the tokenizer and consumed by the renderer.
Markers live in a MarkerArena during matching and refer to their partner
by integer handle, so an open/close pair never owns each other directly.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .tags import TagKind, TagState


@dataclass
class TagMarker:
    """
    A single open or close instruction anchored inside a word

    Attributes:
        kind: Which tag this marker opens or closes
        state: Current state (provisional while matching, final afterwards)
        offset: Character index in the owning word where the delimiter begins
        source_word: Word text at detection time, used to tell apart
                     within-word openers that came from different words
        paired_with: Arena handle of the partner marker, once paired

    Example:
        For the word "_it_" the matcher produces:
        TagMarker(kind=TagKind.ITALIC, state=TagState.OPEN, offset=0, source_word="_it_", paired_with=<close handle>)
        TagMarker(kind=TagKind.ITALIC, state=TagState.CLOSE, offset=3, source_word="_it_", paired_with=<open handle>)
    """
    kind: TagKind
    state: TagState
    offset: int
    source_word: str = ""
    paired_with: Optional[int] = None


class MarkerArena:
    """
    Owner of every marker created during one parse

    Markers are addressed by the integer handle returned from add().
    Pairing and invalidation are plain field writes on arena entries.
    """

    def __init__(self) -> None:
        self.markers: List[TagMarker] = []

    def add(self, marker: TagMarker) -> int:
        """Store a marker and return its handle"""
        self.markers.append(marker)
        return len(self.markers) - 1

    def __getitem__(self, handle: int) -> TagMarker:
        return self.markers[handle]

    def __len__(self) -> int:
        return len(self.markers)

    def pair(self, open_handle: int, close_handle: int) -> None:
        """
        Link an opener and a closer and make both final

        Args:
            open_handle: Handle of the opening marker (becomes OPEN)
            close_handle: Handle of the closing marker (becomes CLOSE)
        """
        opener = self.markers[open_handle]
        closer = self.markers[close_handle]
        opener.state = TagState.OPEN
        closer.state = TagState.CLOSE
        opener.paired_with = close_handle
        closer.paired_with = open_handle

    def invalidate(self, handle: int) -> None:
        """Demote a marker and its partner (if any) to NONE"""
        marker = self.markers[handle]
        marker.state = TagState.NONE
        if marker.paired_with is not None:
            self.markers[marker.paired_with].state = TagState.NONE


@dataclass(frozen=True)
class Token:
    """
    One renderable unit: a word, a paragraph boundary or a line boundary

    Attributes:
        content: Word text, " " for a paragraph boundary, "\\n" for a line end
        markers: Final (OPEN/CLOSE) markers attached to this token, in
                 discovery order, not display order

    Example:
        Token(content="__bold__", markers=(<BOLD OPEN @0>, <BOLD CLOSE @6>))
    """
    content: str
    markers: Tuple[TagMarker, ...] = field(default_factory=tuple)

    @property
    def is_lineBreak(self) -> bool:
        return self.content == "\n"
