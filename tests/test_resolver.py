"""Tests for content resolution."""

import pytest

from tabcontent.models import (
    ContentSource,
    RawTabContent,
    ResolvedContent,
    ServiceListItem,
    TabType,
)
from tabcontent.parsers import normalize
from tabcontent.resolver import find_item, resolve
from tabcontent.selection import OVERVIEW, ActiveSelection


@pytest.fixture
def overview_content() -> RawTabContent:
    """Overview tab whose sidebar is plain strings."""
    return RawTabContent.from_payload(
        {
            "tab_type": "overview",
            "main_image": "https://cdn.example.com/main.png",
            "main_description": "Department overview",
            "service_list": [{"title": "Clinics", "items": ["A", "B"]}],
            "sidebar_items": [
                "Cardiology",
                {"id": "echo", "title": "Echo", "image": "echo.png", "description": "Echo lab"},
            ],
        }
    )


@pytest.fixture
def services_content() -> RawTabContent:
    """OPD tab whose sidebar embeds its own Overview entry."""
    return RawTabContent.from_payload(
        {
            "tab_type": "opd_services",
            "main_image": "tab.png",
            "main_description": "Tab-level text",
            "sidebar_items": [
                {
                    "id": "ov",
                    "title": "Overview",
                    "image": "ov.png",
                    "description": "OPD overview",
                    "service_list": [{"title": "Hours", "items": ["9-5"]}],
                },
                {"id": "endo", "title": "Endoscopy", "description": "Scopes"},
            ],
        }
    )


class TestResolveOverview:
    """Tests for resolving the Overview selection."""

    def test_non_embedding_tab_uses_main_fields(self, overview_content: RawTabContent) -> None:
        items = normalize(overview_content.sidebar_items, True, overview_content.tab_type)
        resolved = resolve(OVERVIEW, items, overview_content)
        assert resolved.image == overview_content.main_image
        assert resolved.description == overview_content.main_description
        assert resolved.service_list == [ServiceListItem(title="Clinics", items=["A", "B"])]
        assert resolved.source == ContentSource.TAB
        assert resolved.item_id is None

    def test_embedding_tab_uses_overview_item(self, services_content: RawTabContent) -> None:
        items = normalize(services_content.sidebar_items, True, services_content.tab_type)
        resolved = resolve(OVERVIEW, items, services_content)
        assert resolved.image == "ov.png"
        assert resolved.description == "OPD overview"
        assert resolved.service_list == [ServiceListItem(title="Hours", items=["9-5"])]
        assert resolved.source == ContentSource.ITEM
        assert resolved.item_id == "ov"

    def test_embedding_tab_matches_overview_loosely(self) -> None:
        """Test the embedded entry is found regardless of case and padding."""
        content = RawTabContent.from_payload(
            {"tab_type": "investigations", "sidebar_items": [{"title": " overview ", "image": "o.png"}]}
        )
        items = normalize(content.sidebar_items, True, content.tab_type)
        assert resolve(OVERVIEW, items, content).image == "o.png"

    def test_embedding_tab_without_overview_falls_back(self) -> None:
        content = RawTabContent.from_payload(
            {"tab_type": "inpatient_services", "main_image": "tab.png", "sidebar_items": ["Ward"]}
        )
        items = normalize(content.sidebar_items, True, content.tab_type)
        resolved = resolve(OVERVIEW, items, content)
        assert resolved.image == "tab.png"
        assert resolved.source == ContentSource.TAB

    def test_synthetic_overview_id_resolves_like_overview(self, overview_content: RawTabContent) -> None:
        """Test picking the synthetic entry shows tab-level content, not its empty fields."""
        items = normalize(overview_content.sidebar_items, True, overview_content.tab_type)
        resolved = resolve(items[0].id, items, overview_content)
        assert resolved.image == overview_content.main_image

    def test_tab_type_override(self, services_content: RawTabContent) -> None:
        """Test an explicit tab type wins over the record's own."""
        items = normalize(services_content.sidebar_items, False, services_content.tab_type)
        resolved = resolve(OVERVIEW, items, services_content, tab_type=TabType.OVERVIEW)
        assert resolved.image == "tab.png"


class TestResolveItem:
    """Tests for resolving a specific item selection."""

    def test_found_item(self, overview_content: RawTabContent) -> None:
        items = normalize(overview_content.sidebar_items, True, overview_content.tab_type)
        resolved = resolve(ActiveSelection.for_item("echo"), items, overview_content)
        assert resolved.image == "echo.png"
        assert resolved.description == "Echo lab"
        assert resolved.service_list == []
        assert resolved.item_id == "echo"

    def test_found_legacy_item_has_no_content(self, overview_content: RawTabContent) -> None:
        """Test legacy entries resolve to their own (empty) fields."""
        items = normalize(overview_content.sidebar_items, True, overview_content.tab_type)
        resolved = resolve("legacy_0", items, overview_content)
        assert resolved.source == ContentSource.ITEM
        assert resolved.image is None
        assert resolved.description is None

    def test_missing_item_falls_back(self, services_content: RawTabContent) -> None:
        """Test a stale id falls back to tab-level content."""
        items = normalize(services_content.sidebar_items, True, services_content.tab_type)
        resolved = resolve(ActiveSelection.for_item("missing-id"), items, services_content)
        assert isinstance(resolved, ResolvedContent)
        assert resolved.image == "tab.png"
        assert resolved.description == "Tab-level text"
        assert resolved.source == ContentSource.TAB

    def test_missing_content_record(self) -> None:
        """Test resolution without any tab record yields an empty payload."""
        resolved = resolve(ActiveSelection.for_item("x"), [], None)
        assert resolved == ResolvedContent()

    def test_duplicate_ids_first_wins(self) -> None:
        items = normalize(
            [{"id": "d", "title": "A", "image": "1.png"}, {"id": "d", "title": "B", "image": "2.png"}],
            False,
            TabType.OVERVIEW,
        )
        assert find_item(items, "d").title == "A"
        assert resolve("d", items, None).image == "1.png"

    def test_deterministic(self, services_content: RawTabContent) -> None:
        """Test identical inputs always give equal payloads."""
        items = normalize(services_content.sidebar_items, True, services_content.tab_type)
        selection = ActiveSelection.for_item("endo")
        assert resolve(selection, items, services_content) == resolve(selection, items, services_content)

    def test_resolve_does_not_mutate_items(self, services_content: RawTabContent) -> None:
        items = normalize(services_content.sidebar_items, True, services_content.tab_type)
        resolved = resolve(OVERVIEW, items, services_content)
        resolved.service_list.append(ServiceListItem(title="extra"))
        assert len(items[0].service_list) == 1
