"""SQLModel schemas for department tab content."""

from enum import Enum
from typing import Any, Optional, Union

from sqlmodel import Field, SQLModel


OVERVIEW_TITLE = "Overview"
OVERVIEW_ITEM_ID = "overview_main"


def optional_str(value: Any) -> Optional[str]:
    """Return value if it is a string, otherwise None."""
    return value if isinstance(value, str) else None


def optional_int(value: Any) -> Optional[int]:
    """Return value if it is a real integer (bools excluded), otherwise None."""
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


class TabType(str, Enum):
    """Content tabs shown on a department page."""

    OVERVIEW = "overview"
    DOCTORS = "doctors"
    OPD_SERVICES = "opd_services"
    INPATIENT_SERVICES = "inpatient_services"
    INVESTIGATIONS = "investigations"
    SUCCESS_STORIES = "success_stories"

    @classmethod
    def parse(cls, value: Any) -> Optional["TabType"]:
        """Look up a tab type by value, returning None for unknown values."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except (ValueError, TypeError):
            return None

    @classmethod
    def embeds(cls, value: Union["TabType", str, None]) -> bool:
        """Check if a (possibly unknown) tab type ships its own Overview entry."""
        tab = cls.parse(value)
        return tab is not None and tab.embeds_overview

    @property
    def embeds_overview(self) -> bool:
        """Service tabs carry an "Overview" entry inside sidebar_items upstream."""
        return self in EMBEDDED_OVERVIEW_TABS

    @property
    def has_tab_content(self) -> bool:
        """Doctors and success stories are rendered without a tab content record."""
        return self not in (TabType.DOCTORS, TabType.SUCCESS_STORIES)

    @property
    def label(self) -> str:
        return TAB_LABELS[self]


EMBEDDED_OVERVIEW_TABS = frozenset(
    {TabType.OPD_SERVICES, TabType.INPATIENT_SERVICES, TabType.INVESTIGATIONS}
)

# Display order of the tab strip
TAB_LABELS: dict[TabType, str] = {
    TabType.OVERVIEW: "Overview",
    TabType.DOCTORS: "Doctors",
    TabType.OPD_SERVICES: "OPD Services",
    TabType.INPATIENT_SERVICES: "Inpatient Services",
    TabType.INVESTIGATIONS: "Investigations",
    TabType.SUCCESS_STORIES: "Success Stories",
}


class ContentSource(str, Enum):
    """Where a resolved payload was taken from."""

    TAB = "tab"  # RawTabContent.main_* fields
    ITEM = "item"  # A normalized sidebar item


class ServiceListItem(SQLModel):
    """A titled group of service bullet points."""

    title: Optional[str] = None
    items: list[str] = Field(default_factory=list)

    @classmethod
    def coerce_list(cls, value: Any) -> list["ServiceListItem"]:
        """Build a service list from untrusted data, skipping malformed entries."""
        if not isinstance(value, list):
            return []
        services: list[ServiceListItem] = []
        for entry in value:
            if isinstance(entry, ServiceListItem):
                services.append(entry)
                continue
            if not isinstance(entry, dict):
                continue
            items = entry.get("items")
            services.append(
                cls(
                    title=optional_str(entry.get("title")),
                    items=[i for i in items if isinstance(i, str)] if isinstance(items, list) else [],
                )
            )
        return services


class SubSection(SQLModel):
    """Image + text block shown on the overview tab."""

    image: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    position: str = "left"  # left, right

    @classmethod
    def coerce_list(cls, value: Any) -> list["SubSection"]:
        """Build sub-sections from untrusted data, skipping non-object entries."""
        if not isinstance(value, list):
            return []
        return [
            cls(
                image=optional_str(entry.get("image")),
                title=optional_str(entry.get("title")),
                description=optional_str(entry.get("description")),
                position="right" if entry.get("position") == "right" else "left",
            )
            for entry in value
            if isinstance(entry, dict)
        ]


class SidebarItem(SQLModel):
    """Canonical, selectable unit of content within a tab.

    Produced only by the normalizer; the title is never blank.
    """

    id: str
    title: str
    image: Optional[str] = None
    description: Optional[str] = None
    service_list: list[ServiceListItem] = Field(default_factory=list)
    sort_order: int = 0

    @property
    def is_overview(self) -> bool:
        return self.title.strip().lower() == OVERVIEW_TITLE.lower()


class RawTabContent(SQLModel):
    """Persisted content record for one department tab.

    Everything except ``sidebar_items`` is sanitized on load; the sidebar
    entries stay untyped until they go through the normalizer.
    """

    id: Optional[int] = None
    department_id: Optional[int] = None
    tab_type: str = TabType.OVERVIEW.value  # Unknown values are kept verbatim
    main_image: Optional[str] = None
    main_description: Optional[str] = None
    quote_text: Optional[str] = None
    sub_sections: list[SubSection] = Field(default_factory=list)
    service_list: list[ServiceListItem] = Field(default_factory=list)
    sidebar_items: Any = None
    is_active: bool = True
    sort_order: int = 0

    @property
    def kind(self) -> Optional[TabType]:
        """The tab type, or None when the record carries an unknown one."""
        return TabType.parse(self.tab_type)

    @classmethod
    def from_payload(cls, data: Any) -> "RawTabContent":
        """Build a tab content record from an API payload without raising."""
        if not isinstance(data, dict):
            data = {}
        tab_type = data.get("tab_type")
        return cls(
            id=optional_int(data.get("id")),
            department_id=optional_int(data.get("department_id")),
            tab_type=tab_type if isinstance(tab_type, str) else TabType.OVERVIEW.value,
            main_image=optional_str(data.get("main_image")),
            main_description=optional_str(data.get("main_description")),
            quote_text=optional_str(data.get("quote_text")),
            sub_sections=SubSection.coerce_list(data.get("sub_sections")),
            service_list=ServiceListItem.coerce_list(data.get("service_list")),
            sidebar_items=data.get("sidebar_items"),
            is_active=data.get("is_active", True) is not False,
            sort_order=optional_int(data.get("sort_order")) or 0,
        )


class Department(SQLModel):
    """A hospital department with its tab contents."""

    id: int
    name: str
    icon: Optional[str] = None
    description: Optional[str] = None
    is_active: bool = True
    tab_contents: list[RawTabContent] = Field(default_factory=list)

    @classmethod
    def from_payload(cls, data: dict) -> "Department":
        """Build a department from the ``/departments/{id}/details`` payload."""
        contents = data.get("tab_contents")
        return cls(
            id=data["id"],
            name=optional_str(data.get("name")) or "",
            icon=optional_str(data.get("icon")),
            description=optional_str(data.get("description")),
            is_active=data.get("is_active", True) is not False,
            tab_contents=[
                RawTabContent.from_payload(c) for c in contents
            ] if isinstance(contents, list) else [],
        )

    def tab_content(self, tab_type: Union[TabType, str]) -> Optional[RawTabContent]:
        """Get the content record for a tab, if that tab has one."""
        tab = TabType.parse(tab_type)
        if tab is not None and not tab.has_tab_content:
            return None
        for content in self.tab_contents:
            if content.tab_type == tab_type:
                return content
        return None


class ResolvedContent(SQLModel):
    """Display payload for one (tab, selection) pair."""

    image: Optional[str] = None
    description: Optional[str] = None
    service_list: list[ServiceListItem] = Field(default_factory=list)
    source: ContentSource = ContentSource.TAB
    item_id: Optional[str] = None  # Set when source is ITEM
