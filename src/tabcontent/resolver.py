"""Resolution of the display payload for a tab and its active selection.

Fallback order:

============================  ==================  ==============================
Selection                     Tab                 Source
============================  ==================  ==============================
Overview                      embeds Overview     the "Overview" sidebar item
Overview                      any other           tab-level ``main_*`` fields
Item(id), found               any                 that item's fields
Item(id), not found           any                 tab-level ``main_*`` fields
============================  ==================  ==============================
"""

from typing import Optional, Sequence, Union

from tabcontent.models import (
    ContentSource,
    RawTabContent,
    ResolvedContent,
    SidebarItem,
    TabType,
)
from tabcontent.selection import ActiveSelection


def find_item(items: Sequence[SidebarItem], item_id: str) -> Optional[SidebarItem]:
    """Find an item by id. With duplicate ids the first one wins."""
    for item in items:
        if item.id == item_id:
            return item
    return None


def find_overview(items: Sequence[SidebarItem]) -> Optional[SidebarItem]:
    for item in items:
        if item.is_overview:
            return item
    return None


def from_item(item: SidebarItem) -> ResolvedContent:
    return ResolvedContent(
        image=item.image,
        description=item.description,
        service_list=list(item.service_list),
        source=ContentSource.ITEM,
        item_id=item.id,
    )


def from_tab(raw_content: Optional[RawTabContent]) -> ResolvedContent:
    if raw_content is None:
        return ResolvedContent()
    return ResolvedContent(
        image=raw_content.main_image,
        description=raw_content.main_description,
        service_list=list(raw_content.service_list),
    )


def resolve(
    selection: Union[ActiveSelection, str, None],
    items: Sequence[SidebarItem],
    raw_content: Optional[RawTabContent],
    tab_type: Union[TabType, str, None] = None,
) -> ResolvedContent:
    """Pick the image, description and service list to display.

    Args:
        selection: Active selection; a bare id or None is accepted too.
        items: Normalized sidebar items of the active tab.
        raw_content: The tab's content record, or None if it has none.
        tab_type: Overrides ``raw_content.tab_type`` when given.

    Returns:
        A payload that is never None. Missing tab content yields an empty one.
    """
    if not isinstance(selection, ActiveSelection):
        selection = ActiveSelection.for_item(selection)
    if tab_type is None and raw_content is not None:
        tab_type = raw_content.tab_type

    if selection.is_overview:
        if TabType.embeds(tab_type):
            overview = find_overview(items)
            if overview is not None:
                return from_item(overview)
        return from_tab(raw_content)

    item = find_item(items, selection.item_id)
    if item is not None:
        return from_item(item)
    return from_tab(raw_content)
