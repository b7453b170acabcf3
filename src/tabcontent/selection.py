"""Active sidebar selection, tracked per tab."""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Union

from tabcontent.models import OVERVIEW_ITEM_ID, SidebarItem, TabType


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActiveSelection:
    """Either the Overview sentinel (``item_id`` is None) or a specific item."""

    item_id: Optional[str] = None

    @property
    def is_overview(self) -> bool:
        return self.item_id is None

    @classmethod
    def for_item(cls, item_id: Optional[str]) -> "ActiveSelection":
        """Select an item; the synthetic Overview entry maps to the sentinel."""
        if item_id is None or item_id == OVERVIEW_ITEM_ID:
            return OVERVIEW
        return cls(item_id)

    def __str__(self) -> str:
        return "Overview" if self.is_overview else f"Item({self.item_id})"


OVERVIEW = ActiveSelection()


class SelectionState:
    """Selection state machine for a tabbed sidebar.

    States are ``Overview`` (initial) and ``Item(id)``. Changing tab always
    returns to ``Overview``; picking an item moves to ``Item(id)``; a data
    reload never changes the state, even when the picked id has disappeared.
    """

    def __init__(self, tab: Union[TabType, str] = TabType.OVERVIEW) -> None:
        self.tab = tab
        self.selection = OVERVIEW

    def change_tab(self, tab: Union[TabType, str]) -> ActiveSelection:
        """Switch tabs, discarding any item picked on the previous tab."""
        if tab != self.tab:
            self.tab = tab
            self.selection = OVERVIEW
        return self.selection

    def pick(self, item_id: Optional[str]) -> ActiveSelection:
        """Pick a sidebar item by id."""
        self.selection = ActiveSelection.for_item(item_id)
        return self.selection

    def pick_overview(self) -> ActiveSelection:
        self.selection = OVERVIEW
        return self.selection

    def reload(self, items: Iterable[SidebarItem]) -> bool:
        """Report whether the current selection is missing from refreshed items.

        The selection is left untouched; resolution falls back to tab-level
        content for stale ids.
        """
        if self.selection.is_overview:
            return False
        stale = all(item.id != self.selection.item_id for item in items)
        if stale:
            logger.debug("Selection %s not found after reload of tab %s", self.selection, self.tab)
        return stale
