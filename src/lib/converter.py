"""
Markdown to HTML conversion in one call
"""

from typing import Mapping, Optional

from ..models.tags import TagKind, TagDefinition
from .tokenizer import TokensParser
from .renderer import HtmlRenderer
from .tagtable import tagTable_default


class MarkdownConverter:
    """
    Tokenizes and renders markdown text

    Example:
        >>> MarkdownConverter().html_convert("_it_ and __bold__")
        '<span> <i>it</i> and <b>bold</b> </span>'
    """

    def __init__(
        self,
        parser: Optional[TokensParser] = None,
        tags: Optional[Mapping[TagKind, TagDefinition]] = None,
    ) -> None:
        """
        Args:
            parser: Tokenizer to use (default: a new TokensParser)
            tags: Tag table for the renderer (default: from appsettings)
        """
        self.parser = parser or TokensParser()
        self.renderer = HtmlRenderer(tags if tags is not None else tagTable_default())

    def html_convert(self, text: str) -> str:
        """Convert markdown text to an HTML fragment"""
        return self.renderer.render(self.parser.parse(text))


def markdown_convert(text: str) -> str:
    """Convert markdown text with the default tokenizer and tag table"""
    return MarkdownConverter().html_convert(text)
