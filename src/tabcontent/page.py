"""Department page model: tabs, sidebar and resolved content for one department."""

from dataclasses import dataclass
from typing import Optional, Union

from tabcontent.models import (
    TAB_LABELS,
    Department,
    RawTabContent,
    ResolvedContent,
    SidebarItem,
    TabType,
)
from tabcontent.parsers import normalize
from tabcontent.resolver import resolve
from tabcontent.selection import ActiveSelection, SelectionState


@dataclass(frozen=True)
class TabEntry:
    """A tab as shown in the tab strip."""

    tab_type: TabType
    label: str
    active: bool = False


class DepartmentPage:
    """Renderer-facing view of a fetched department.

    Holds the department record and the selection state; every read is
    recomputed from them, so the page can be re-rendered at any time.
    """

    def __init__(
        self,
        department: Department,
        include_overview: bool = True,
        initial_tab: Union[TabType, str] = TabType.OVERVIEW,
    ) -> None:
        self.department = department
        self.include_overview = include_overview
        self.state = SelectionState(initial_tab)

    @property
    def active_tab(self) -> Union[TabType, str]:
        return self.state.tab

    @property
    def selection(self) -> ActiveSelection:
        return self.state.selection

    def tabs(self) -> list[TabEntry]:
        """Tab strip entries in display order."""
        return [
            TabEntry(tab_type=tab, label=label, active=tab == self.state.tab)
            for tab, label in TAB_LABELS.items()
        ]

    def current_content(self) -> Optional[RawTabContent]:
        return self.department.tab_content(self.state.tab)

    def sidebar(self) -> list[SidebarItem]:
        """Normalized sidebar items for the active tab."""
        content = self.current_content()
        return normalize(
            content.sidebar_items if content is not None else None,
            self.include_overview,
            self.state.tab,
        )

    def content(self) -> ResolvedContent:
        """Resolved payload for the active tab and selection."""
        return resolve(
            self.state.selection,
            self.sidebar(),
            self.current_content(),
            tab_type=self.state.tab,
        )

    def select_tab(self, tab: Union[TabType, str]) -> ActiveSelection:
        return self.state.change_tab(tab)

    def select_item(self, item_id: Optional[str]) -> ActiveSelection:
        return self.state.pick(item_id)

    def reload(self, department: Department) -> bool:
        """Swap in a refreshed department; returns True if the selection went stale."""
        self.department = department
        return self.state.reload(self.sidebar())
