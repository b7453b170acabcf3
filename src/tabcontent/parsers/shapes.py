"""Shape classification and reconstruction of raw sidebar entries.

Persisted sidebar entries went through several incompatible encodings:

- ``"Cardiology"``: plain strings (the first schema)
- ``{"id": ..., "title": ..., ...}``: structured objects (the current schema)
- ``["C", "a", "r", ...]``: strings that were spread into character lists
- ``{"0": "C", "1": "a", ...}``: strings serialized as index-keyed maps

Each entry is first tagged with its shape, then rebuilt into a canonical
``SidebarItem`` by the parser registered for that shape. Neither step raises.
"""

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from tabcontent.models import (
    ServiceListItem,
    SidebarItem,
    optional_int,
    optional_str,
)


logger = logging.getLogger(__name__)

INDEX_KEY = re.compile(r"[0-9]+")


class ShapeTag(str, Enum):
    """Known encodings of a raw sidebar entry."""

    LEGACY_STRING = "legacy_string"
    CHARACTER_ARRAY = "character_array"
    STRUCTURED_ITEM = "structured_item"
    CORRUPTED_INDEX_MAP = "corrupted_index_map"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class ClassifiedEntry:
    """A raw entry tagged with its shape and its position in the source list."""

    tag: ShapeTag
    index: int
    value: Any


def has_usable_title(value: Any) -> bool:
    title = value.get("title")
    return isinstance(title, str) and bool(title.strip())


def read_index_map(value: dict) -> str:
    """Concatenate the values of keys "0", "1", ... until a gap or non-string."""
    chars: list[str] = []
    position = 0
    while True:
        part = value.get(str(position))
        if not isinstance(part, str):
            break
        chars.append(part)
        position += 1
    return "".join(chars)


class ShapeParser(ABC):
    """Abstract base class for sidebar entry shapes."""

    @property
    @abstractmethod
    def tag(self) -> ShapeTag:
        """Return the shape this parser handles."""
        pass

    @abstractmethod
    def matches(self, value: Any) -> bool:
        """Check if the raw value has this shape."""
        pass

    @abstractmethod
    def build(self, index: int, value: Any) -> Optional[SidebarItem]:
        """Rebuild a canonical item, or return None to drop the entry."""
        pass


class LegacyStringParser(ShapeParser):
    """Plain string entries from the first schema."""

    @property
    def tag(self) -> ShapeTag:
        return ShapeTag.LEGACY_STRING

    def matches(self, value: Any) -> bool:
        return isinstance(value, str)

    def build(self, index: int, value: Any) -> Optional[SidebarItem]:
        if not value.strip():
            return None
        return SidebarItem(id=f"legacy_{index}", title=value, sort_order=index)


class CharacterArrayParser(ShapeParser):
    """Strings that were spread into a list of single characters."""

    @property
    def tag(self) -> ShapeTag:
        return ShapeTag.CHARACTER_ARRAY

    def matches(self, value: Any) -> bool:
        if not isinstance(value, (list, tuple)) or not value:
            return False
        if not all(isinstance(c, str) and len(c) == 1 for c in value):
            return False
        return bool("".join(value).strip())

    def build(self, index: int, value: Any) -> Optional[SidebarItem]:
        title = "".join(value)
        if not title.strip():
            return None
        return SidebarItem(id=f"recovered_{index}", title=title, sort_order=index)


class StructuredItemParser(ShapeParser):
    """Objects following the current ``SidebarItem`` schema."""

    @property
    def tag(self) -> ShapeTag:
        return ShapeTag.STRUCTURED_ITEM

    def matches(self, value: Any) -> bool:
        return isinstance(value, dict) and has_usable_title(value)

    def build(self, index: int, value: Any) -> Optional[SidebarItem]:
        raw_id = value.get("id")
        if isinstance(raw_id, str):
            item_id = raw_id
        elif optional_int(raw_id) is not None:
            # Database-backed rows sometimes carry numeric ids
            item_id = str(raw_id)
        else:
            item_id = f"item_{index}"

        sort_order = optional_int(value.get("sort_order"))

        return SidebarItem(
            id=item_id,
            title=value["title"],
            image=optional_str(value.get("image")),
            description=optional_str(value.get("description")),
            service_list=ServiceListItem.coerce_list(value.get("service_list")),
            sort_order=index if sort_order is None else sort_order,
        )


class CorruptedIndexMapParser(ShapeParser):
    """Strings serialized as ``{"0": "H", "1": "i"}`` maps."""

    @property
    def tag(self) -> ShapeTag:
        return ShapeTag.CORRUPTED_INDEX_MAP

    def matches(self, value: Any) -> bool:
        if not isinstance(value, dict) or not value or has_usable_title(value):
            return False
        return all(isinstance(k, str) and INDEX_KEY.fullmatch(k) for k in value)

    def build(self, index: int, value: Any) -> Optional[SidebarItem]:
        title = read_index_map(value)
        if not title.strip():
            return None
        return SidebarItem(id=f"item_{index}", title=title, sort_order=index)


class ShapeRegistry:
    """Ordered registry of shape parsers; the first match wins."""

    def __init__(self) -> None:
        self._parsers: list[ShapeParser] = []

    def register(self, parser: ShapeParser) -> None:
        """Register a parser after the existing ones."""
        self._parsers.append(parser)

    def get_parser(self, tag: ShapeTag) -> Optional[ShapeParser]:
        for parser in self._parsers:
            if parser.tag == tag:
                return parser
        return None

    def classify(self, value: Any, index: int = 0) -> ClassifiedEntry:
        """Tag a raw entry with the first shape that matches it."""
        for parser in self._parsers:
            if parser.matches(value):
                return ClassifiedEntry(parser.tag, index, value)
        return ClassifiedEntry(ShapeTag.UNRECOGNIZED, index, value)

    def reconstruct(self, entry: ClassifiedEntry) -> Optional[SidebarItem]:
        """Rebuild a classified entry, or return None if it is dropped."""
        parser = self.get_parser(entry.tag)
        if parser is None:
            logger.debug("Dropping unrecognized sidebar entry at %d: %r", entry.index, entry.value)
            return None
        item = parser.build(entry.index, entry.value)
        if item is None:
            logger.debug("Dropping blank %s entry at %d", entry.tag.value, entry.index)
        return item

    @classmethod
    def default(cls) -> "ShapeRegistry":
        """Create a registry with the shapes in classification priority order."""
        registry = cls()
        registry.register(LegacyStringParser())
        registry.register(CharacterArrayParser())
        registry.register(StructuredItemParser())
        registry.register(CorruptedIndexMapParser())
        return registry


DEFAULT_REGISTRY = ShapeRegistry.default()


def classify(value: Any, index: int = 0) -> ClassifiedEntry:
    """Classify a raw sidebar entry with the default registry."""
    return DEFAULT_REGISTRY.classify(value, index)


def reconstruct(entry: ClassifiedEntry) -> Optional[SidebarItem]:
    """Rebuild a classified entry with the default registry."""
    return DEFAULT_REGISTRY.reconstruct(entry)
