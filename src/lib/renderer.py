"""
Renderer for tokenized markdown

Splices HTML tags into each token's text at the offsets recorded by the
tokenizer and joins tokens with single spaces.
"""

from operator import attrgetter
from types import MappingProxyType
from typing import Iterable, List, Mapping

from ..models.tags import TagKind, TagState, TagDefinition
from ..models.tokens import TagMarker, Token
from .log import LOG
from .tagtable import tagTable_default


class RenderError(Exception):
    """Raised when a token carries a marker the renderer cannot emit"""
    pass


class HtmlRenderer:
    """
    Renders a token stream to an HTML fragment

    The tag table is injected and kept read-only; rendering the same
    tokens with a different table only changes element names. Kinds the
    table leaves out render with their default definition.

    Example:
        >>> from emphdown.lib.tagtable import tagTable_default
        >>> from emphdown.lib.tokenizer import TokensParser
        >>> renderer = HtmlRenderer(tagTable_default())
        >>> renderer.render(TokensParser().parse("__bold__"))
        '<span> <b>bold</b> </span>'
    """

    def __init__(self, tags: Mapping[TagKind, TagDefinition]) -> None:
        """
        Args:
            tags: Mapping of tag kind to its HTML definition
        """
        self.tags: Mapping[TagKind, TagDefinition] = MappingProxyType({**tagTable_default(), **tags})

    def render(self, tokens: Iterable[Token]) -> str:
        """
        Render tokens to HTML

        Every token except a line break is followed by one space; the
        assembled string is stripped at both ends.

        Args:
            tokens: Token stream from TokensParser.parse()

        Returns:
            HTML fragment ("" for an empty stream)
        """
        parts: List[str] = []
        count = 0
        for token in tokens:
            parts.append(self.token_render(token))
            if not token.is_lineBreak:
                parts.append(" ")
            count += 1

        LOG(f"Rendered {count} tokens", level=3)
        return "".join(parts).strip()

    def token_render(self, token: Token) -> str:
        """
        Render one token, replacing each delimiter with its HTML tag

        Markers are applied in offset order (stable on ties). Text between
        markers is copied verbatim; the delimiter characters themselves
        (one, or two for bold) are replaced by the tag.
        """
        if not token.markers:
            return token.content

        content = token.content
        out: List[str] = []
        cursor = 0
        for marker in sorted(token.markers, key=attrgetter("offset")):
            out.append(content[cursor:marker.offset])
            out.append(self.tag_make(marker))
            cursor = marker.offset + marker.kind.width
        out.append(content[cursor:])
        return "".join(out)

    def tag_make(self, marker: TagMarker) -> str:
        """Opening or closing HTML tag for a final marker"""
        definition = self.tags[marker.kind]
        if marker.state is TagState.OPEN:
            return definition.opening()
        if marker.state is TagState.CLOSE:
            return definition.closing()
        raise RenderError(
            f"{marker.kind.name} marker at offset {marker.offset} in "
            f"{marker.source_word!r} is not final ({marker.state.name})"
        )
