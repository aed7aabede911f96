"""
emphdown - restricted markdown to HTML converter

Converts '#' headers, __bold__ and _italic_ emphasis and implicit
paragraphs into an HTML fragment.
"""

__version__ = "1.0.0"

from .lib import (
    TokensParser,
    HtmlRenderer,
    MarkdownConverter,
    markdown_convert,
    LOG,
    state_connectToLogger,
)

__all__ = [
    "TokensParser",
    "HtmlRenderer",
    "MarkdownConverter",
    "markdown_convert",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
