"""Data models for tab content."""

from .schemas import (
    EMBEDDED_OVERVIEW_TABS,
    OVERVIEW_ITEM_ID,
    OVERVIEW_TITLE,
    TAB_LABELS,
    ContentSource,
    Department,
    RawTabContent,
    ResolvedContent,
    ServiceListItem,
    SidebarItem,
    SubSection,
    TabType,
    optional_int,
    optional_str,
)

__all__ = [
    "EMBEDDED_OVERVIEW_TABS",
    "OVERVIEW_ITEM_ID",
    "OVERVIEW_TITLE",
    "TAB_LABELS",
    "ContentSource",
    "Department",
    "RawTabContent",
    "ResolvedContent",
    "ServiceListItem",
    "SidebarItem",
    "SubSection",
    "TabType",
    "optional_int",
    "optional_str",
]
