"""
Tokenizer and tag matcher for the emphasis dialect

Turns markdown text into a flat list of Tokens, each carrying the final
open/close markers anchored at character offsets inside its word.

The tokenizer operates in three phases per line:
1. Splitting: the line is split on single spaces into words
2. Scanning: every word is scanned for '_' / '__' delimiters and each
   delimiter gets a provisional state from its position in the word
3. Pairing: provisional closers search the line's stack for their opener;
   bold/italic crossings are invalidated so tags always nest

Unmatched delimiters are never an error; they simply stay literal text.

Example:
    >>> tokens = TokensParser().parse("__bold__ _it_")
    >>> [t.content for t in tokens]
    [' ', '__bold__', '_it_', ' ', '\\n']
    >>> [(m.kind.name, m.state.name, m.offset) for m in tokens[1].markers]
    [('BOLD', 'OPEN', 0), ('BOLD', 'CLOSE', 6)]
"""

from typing import List, Optional
from dataclasses import dataclass, field

from ..models.tags import TagKind, TagState, HEADER_SYMBOL, ITALIC_SYMBOL, LITERAL_WORDS
from ..models.tokens import TagMarker, MarkerArena, Token
from .log import LOG, verbosity_get


@dataclass
class TokenDraft:
    """
    A token under construction

    Holds arena handles rather than markers; the final Token is built once
    the whole document has been matched and marker states are settled.
    """
    content: str
    handles: List[int] = field(default_factory=list)


def delimiter_detect(word: str, offset: int) -> TagKind:
    """
    Classify the delimiter starting at offset

    Returns:
        BOLD for '__', ITALIC for a lone '_', NONE otherwise
    """
    if word[offset] != ITALIC_SYMBOL:
        return TagKind.NONE
    if offset < len(word) - 1 and word[offset + 1] == ITALIC_SYMBOL:
        return TagKind.BOLD
    return TagKind.ITALIC


class LineMatcher:
    """
    Pairs delimiters within a single line

    A new LineMatcher (and therefore a new stack) is created for every
    line, which is what keeps pairs from crossing line boundaries.
    """

    def __init__(self, arena: MarkerArena, trace: bool = False) -> None:
        self.arena = arena
        self.stack: List[int] = []
        self.trace = trace

    def word_process(self, word: str, word_index: int) -> TokenDraft:
        """
        Scan one word and attach the markers it produces

        Args:
            word: Word text (may be empty for consecutive spaces)
            word_index: Position of the word in its line

        Returns:
            TokenDraft for the word
        """
        draft = TokenDraft(word)

        if word_index == 0 and word == HEADER_SYMBOL:
            draft.handles.append(self.arena.add(TagMarker(TagKind.HEADER, TagState.OPEN, 0, word)))

        if word in LITERAL_WORDS:
            return draft

        if any(char.isdigit() for char in word):
            self.edges_scan(word, draft)
            return draft

        offset = 0
        while offset < len(word):
            kind = self.symbol_process(word, offset, draft)
            # '__' consumes two characters; skip its second underscore
            offset += kind.width
        return draft

    def edges_scan(self, word: str, draft: TokenDraft) -> None:
        """
        Scan only the first and the last one or two characters

        Digits inside a word suppress mid-word emphasis. The tail is tried
        at len-2 first so a closing '__' wins over a closing '_'. Tail
        offsets already covered by the head delimiter are not rescanned.
        """
        head = self.symbol_process(word, 0, draft)
        floor = head.width

        tail = len(word) - 2
        if tail >= floor and self.symbol_process(word, tail, draft) is not TagKind.NONE:
            return

        tail = len(word) - 1
        if tail >= floor:
            self.symbol_process(word, tail, draft)

    def symbol_process(self, word: str, offset: int, draft: TokenDraft) -> TagKind:
        """
        Recognise, classify and pair the delimiter at offset

        Returns:
            The delimiter kind found at offset (NONE when there is none),
            whether or not it ended up paired
        """
        kind = delimiter_detect(word, offset)
        if kind is TagKind.NONE:
            return kind

        state = self.state_determine(word, kind, offset, draft)
        if state is TagState.NONE:
            return TagKind.NONE

        handle = self.stack_handle(kind, state, offset, word)
        if handle is not None:
            draft.handles.append(handle)
        return kind

    def state_determine(self, word: str, kind: TagKind, offset: int, draft: TokenDraft) -> TagState:
        """
        Provisional state of a delimiter from its position in the word

        Boundary rules win over the parity rule: a delimiter at offset 0
        always opens, one that ends the word always closes. Mid-word
        delimiters alternate open/close by the count of same-kind markers
        already attached to this word.
        """
        if kind is not TagKind.BOLD and kind is not TagKind.ITALIC:
            return TagState.NONE

        if offset == 0:
            return TagState.PROVISIONAL_OPEN

        if offset == len(word) - kind.width:
            return TagState.PROVISIONAL_CLOSE

        attached = sum(1 for handle in draft.handles if self.arena[handle].kind is kind)
        if attached % 2 == 0:
            return TagState.PROVISIONAL_OPEN_WITHIN_WORD
        return TagState.PROVISIONAL_CLOSE

    def stack_handle(self, kind: TagKind, state: TagState, offset: int, word: str) -> Optional[int]:
        """
        Push an opener or resolve a closer against the stack

        Returns:
            Handle of the marker to attach to the current word, or None
            when a closer found nothing to pair with
        """
        if state.is_provisional_open:
            handle = self.arena.add(TagMarker(kind, state, offset, word))
            self.stack.append(handle)
            if self.trace:
                LOG(f"{kind.name} open @{offset} in {word!r} pushed", level=3)
            return handle

        if state is TagState.PROVISIONAL_CLOSE:
            return self.close_resolve(kind, offset, word)

        return None

    def opener_matches(self, handle: int, kind: TagKind, word: str) -> bool:
        """Can the stacked marker at handle be closed by this delimiter"""
        marker = self.arena[handle]
        if marker.kind is not kind:
            return False
        if marker.state is TagState.PROVISIONAL_OPEN:
            return True
        return marker.state is TagState.PROVISIONAL_OPEN_WITHIN_WORD and marker.source_word == word

    def close_resolve(self, kind: TagKind, offset: int, word: str) -> Optional[int]:
        """
        Find the nearest opener for a closing delimiter

        Pops the stack into an auxiliary list until an opener matches, then
        pushes everything back in its original order. While restoring,
        closed markers of the other emphasis kind whose opener lies outside
        the popped range reveal a bold/italic crossing; the italic pair of
        the crossing is invalidated.

        Returns:
            Handle of the new CLOSE marker, or None when no opener matched
        """
        popped: List[int] = []
        match: Optional[int] = None
        while self.stack:
            handle = self.stack.pop()
            popped.append(handle)
            if self.opener_matches(handle, kind, word):
                match = handle
                break

        in_range = set(popped)
        crossings: List[int] = []
        for handle in reversed(popped):
            marker = self.arena[handle]
            if (
                match is not None
                and marker.state is TagState.CLOSE
                and self.crossing_kinds(kind, marker.kind)
                and marker.paired_with not in in_range
            ):
                crossings.append(handle)
            self.stack.append(handle)

        if match is None:
            if self.trace:
                LOG(f"{kind.name} close @{offset} in {word!r}: no opener", level=3)
            return None

        close_handle = self.arena.add(TagMarker(kind, TagState.PROVISIONAL_CLOSE, offset, word))
        self.arena.pair(match, close_handle)
        self.stack.append(close_handle)

        if crossings:
            if kind is TagKind.ITALIC:
                # italic opened inside a bold span that already closed
                self.arena.invalidate(match)
            else:
                # bold closes inside an italic span opened before the bold
                for handle in crossings:
                    self.arena.invalidate(handle)

        if self.trace:
            outcome = "crossed, italic dropped" if crossings else "paired"
            LOG(f"{kind.name} close @{offset} in {word!r}: {outcome}", level=3)
        return close_handle

    @staticmethod
    def crossing_kinds(resolving: TagKind, popped: TagKind) -> bool:
        return {resolving, popped} == {TagKind.BOLD, TagKind.ITALIC}


class TokensParser:
    """
    Tokenizer for the emphasis dialect

    Handles:
    - '#' header opener as the first word of a line
    - __bold__ and _italic_ delimiters, within and across words
    - Digit-bearing words (edge-only delimiter scanning)
    - Paragraph wrapping of every line
    - Literal passthrough of anything that does not pair

    A TokensParser keeps no state between parse() calls.
    """

    def parse(self, text: str) -> List[Token]:
        """
        Tokenize text into paragraph, word and line-break tokens

        Args:
            text: Markdown source (may be empty)

        Returns:
            Tokens in document order; each token carries only final
            (OPEN/CLOSE) markers. Empty text yields an empty list.

        Example:
            >>> tokens = TokensParser().parse("_it_")
            >>> tokens[1].content, [m.state.name for m in tokens[1].markers]
            ('_it_', ['OPEN', 'CLOSE'])
        """
        if not text:
            return []

        arena = MarkerArena()
        drafts: List[TokenDraft] = []
        trace = verbosity_get() >= 3

        lines = text.split("\n")
        for line in lines:
            matcher = LineMatcher(arena, trace=trace)

            paragraph_open = arena.add(TagMarker(TagKind.SPAN, TagState.OPEN, 0))
            drafts.append(TokenDraft(" ", [paragraph_open]))

            for index, word in enumerate(line.split(" ")):
                drafts.append(matcher.word_process(word, index))

            paragraph_close = arena.add(TagMarker(TagKind.SPAN, TagState.CLOSE, 0))
            arena.pair(paragraph_open, paragraph_close)
            drafts.append(TokenDraft(" ", [paragraph_close]))

            drafts.append(TokenDraft("\n"))

        LOG(f"Tokenized {len(lines)} lines into {len(drafts)} tokens, {len(arena)} markers", level=3)
        return [self.token_finalize(draft, arena) for draft in drafts]

    @staticmethod
    def token_finalize(draft: TokenDraft, arena: MarkerArena) -> Token:
        """Freeze a draft, keeping only markers that ended up OPEN or CLOSE"""
        markers = tuple(arena[handle] for handle in draft.handles if arena[handle].state.is_final)
        return Token(draft.content, markers)
