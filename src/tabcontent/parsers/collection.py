"""Normalization of a tab's full sidebar entry list."""

import logging
from typing import Any, Optional, Union

from tabcontent.models import (
    OVERVIEW_ITEM_ID,
    OVERVIEW_TITLE,
    SidebarItem,
    TabType,
)
from tabcontent.parsers.shapes import DEFAULT_REGISTRY, ShapeRegistry


logger = logging.getLogger(__name__)


def overview_item() -> SidebarItem:
    """Synthetic Overview entry for tabs whose upstream data lacks one."""
    return SidebarItem(id=OVERVIEW_ITEM_ID, title=OVERVIEW_TITLE, sort_order=-1)


# Largest array index a JSON object key can name (2**32 - 2)
MAX_INDEX_KEY = 4294967294


def is_index_key(key: Any) -> bool:
    """Check for a canonical array index key: "0", "1", ... without leading zeros."""
    if not isinstance(key, str) or not key.isascii() or not key.isdigit():
        return False
    if key != "0" and key.startswith("0"):
        return False
    return len(key) <= 10 and int(key) <= MAX_INDEX_KEY


def _map_key_order(key: Any) -> tuple[int, int]:
    if is_index_key(key):
        return (0, int(key))
    return (1, 0)


def coerce_entries(raw_items: Any) -> list[Any]:
    """Turn the stored ``sidebar_items`` value into an ordered list of entries.

    Arrays are used as-is. Maps are enumerated like a JSON object in the
    browser: array index keys ascending, then the rest in insertion order,
    keeping only string, object or array values. Anything else is empty.
    """
    if isinstance(raw_items, (list, tuple)):
        return list(raw_items)
    if isinstance(raw_items, dict):
        # sorted() is stable, so non-integer keys keep their insertion order
        keys = sorted(raw_items, key=_map_key_order)
        return [
            raw_items[k] for k in keys
            if isinstance(raw_items[k], (str, dict, list, tuple))
        ]
    if raw_items is not None:
        logger.debug("Ignoring sidebar_items of type %s", type(raw_items).__name__)
    return []


def normalize(
    raw_items: Any,
    include_overview: bool,
    tab_type: Union[TabType, str, None],
    registry: Optional[ShapeRegistry] = None,
) -> list[SidebarItem]:
    """Normalize raw sidebar entries into ordered canonical items.

    Args:
        raw_items: The untyped ``sidebar_items`` value of a tab content record.
        include_overview: Prepend a synthetic Overview entry. Ignored for tabs
            whose upstream data already embeds one.
        tab_type: Tab the entries belong to; unknown values never embed.
        registry: Shape registry to use (defaults to the built-in shapes).

    Returns:
        Items in display order: Overview first, then the raw entries in their
        original order. Entries that yield no title are dropped.
    """
    registry = registry or DEFAULT_REGISTRY
    items: list[SidebarItem] = []

    if include_overview and not TabType.embeds(tab_type):
        items.append(overview_item())

    for index, value in enumerate(coerce_entries(raw_items)):
        item = registry.reconstruct(registry.classify(value, index))
        if item is not None:
            items.append(item)

    return items
