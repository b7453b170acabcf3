"""
Tabcontent - normalize evolving department tab content and resolve what each tab displays.
"""

__version__ = "0.1.0"

from tabcontent.models import (
    ContentSource,
    Department,
    RawTabContent,
    ResolvedContent,
    ServiceListItem,
    SidebarItem,
    TabType,
)
from tabcontent.parsers import ShapeTag, classify, normalize, reconstruct
from tabcontent.resolver import resolve
from tabcontent.selection import OVERVIEW, ActiveSelection, SelectionState
from tabcontent.page import DepartmentPage, TabEntry

__all__ = [
    "ActiveSelection",
    "ContentSource",
    "Department",
    "DepartmentPage",
    "OVERVIEW",
    "RawTabContent",
    "ResolvedContent",
    "SelectionState",
    "ServiceListItem",
    "ShapeTag",
    "SidebarItem",
    "TabEntry",
    "TabType",
    "classify",
    "normalize",
    "reconstruct",
    "resolve",
    "__version__",
]
