"""
emphdown - restricted markdown to HTML converter

Bold, italic, header and paragraph markup rendered as an HTML fragment.
"""

__version__ = "1.0.0"

from .tokenizer import TokensParser
from .renderer import HtmlRenderer, RenderError
from .converter import MarkdownConverter, markdown_convert
from .tagtable import TagTableError, tagTable_default, tagTable_fromSettings, tagTable_load
from .log import LOG, state_connectToLogger

__all__ = [
    "TokensParser",
    "HtmlRenderer",
    "RenderError",
    "MarkdownConverter",
    "markdown_convert",
    "TagTableError",
    "tagTable_default",
    "tagTable_fromSettings",
    "tagTable_load",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
