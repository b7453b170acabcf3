"""Sidebar entry parsers for tab content."""

from .collection import coerce_entries, normalize, overview_item
from .shapes import (
    DEFAULT_REGISTRY,
    CharacterArrayParser,
    ClassifiedEntry,
    CorruptedIndexMapParser,
    LegacyStringParser,
    ShapeParser,
    ShapeRegistry,
    ShapeTag,
    StructuredItemParser,
    classify,
    reconstruct,
)

__all__ = [
    "DEFAULT_REGISTRY",
    "CharacterArrayParser",
    "ClassifiedEntry",
    "CorruptedIndexMapParser",
    "LegacyStringParser",
    "ShapeParser",
    "ShapeRegistry",
    "ShapeTag",
    "StructuredItemParser",
    "classify",
    "coerce_entries",
    "normalize",
    "overview_item",
    "reconstruct",
]
