"""
Tag table construction

The renderer receives its tag table as a plain mapping. This module builds
that mapping from AppSettings, optionally overlaid with a YAML file that
renames elements:

    # tags.yaml
    bold: strong
    italic: em
    span: p
"""

import yaml
from pathlib import Path
from typing import Any, Dict, Optional

from ..config import AppSettings, HTML_ELEMENT_PATTERN, appsettings
from ..models.tags import TagKind, TagDefinition, HEADER_SYMBOL, BOLD_SYMBOL, ITALIC_SYMBOL


class TagTableError(Exception):
    """Raised when a tag table file cannot be loaded or validated"""
    pass


SYMBOLS: Dict[TagKind, str] = {
    TagKind.HEADER: HEADER_SYMBOL,
    TagKind.BOLD: BOLD_SYMBOL,
    TagKind.ITALIC: ITALIC_SYMBOL,
    TagKind.SPAN: "",
}


def tagTable_fromSettings(settings: AppSettings) -> Dict[TagKind, TagDefinition]:
    """
    Build the tag table from configured element names.

    Args:
        settings: Application settings

    Returns:
        Mapping of every renderable TagKind to its definition
    """
    elements = {
        TagKind.HEADER: settings.header_element,
        TagKind.BOLD: settings.bold_element,
        TagKind.ITALIC: settings.italic_element,
        TagKind.SPAN: settings.span_element,
    }
    return {kind: TagDefinition(kind, element, SYMBOLS[kind]) for kind, element in elements.items()}


def tagTable_default() -> Dict[TagKind, TagDefinition]:
    """Tag table from the process-wide settings singleton"""
    return tagTable_fromSettings(appsettings)


def tagTable_load(
    path: Path, settings: Optional[AppSettings] = None
) -> Dict[TagKind, TagDefinition]:
    """
    Load a YAML tag table and overlay it on the settings table.

    Keys are tag kind names (header, bold, italic, span), values are HTML
    element names. Kinds not listed keep their configured element.

    Args:
        path: YAML file path
        settings: Settings providing the base table (default: appsettings)

    Returns:
        Complete tag table

    Raises:
        TagTableError: If the file is missing, unparsable, or names an
                       unknown kind or an invalid element
    """
    table = tagTable_fromSettings(settings or appsettings)
    overrides = _yaml_load(path)

    for key, element in overrides.items():
        try:
            kind = TagKind(str(key).lower())
        except ValueError:
            raise TagTableError(f"{path.name}: unknown tag kind '{key}'")
        if kind is TagKind.NONE:
            raise TagTableError(f"{path.name}: tag kind 'none' cannot be rendered")
        if not isinstance(element, str) or not HTML_ELEMENT_PATTERN.match(element):
            raise TagTableError(f"{path.name}: invalid HTML element for '{key}': {element!r}")
        table[kind] = TagDefinition(kind, element, SYMBOLS[kind])

    return table


def _yaml_load(path: Path) -> Dict[Any, Any]:
    """Read a YAML mapping, treating an empty file as no overrides"""
    if not path.exists():
        raise TagTableError(f"Tag table not found: {path}")
    try:
        with open(path, 'r', encoding='utf-8') as f:
            config: Any = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise TagTableError(f"Failed to parse {path.name}: {e}")

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise TagTableError(f"{path.name}: expected a mapping of tag kind to element")
    return config
