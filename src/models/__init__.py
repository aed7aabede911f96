"""
Models package for emphdown

Contains data structures and type definitions for the conversion pipeline.
"""

from .state import ProgramState, pipeline
from .tags import TagKind, TagState, TagDefinition
from .tokens import TagMarker, MarkerArena, Token

__all__ = [
    "ProgramState",
    "pipeline",
    "TagKind",
    "TagState",
    "TagDefinition",
    "TagMarker",
    "MarkerArena",
    "Token",
]
