"""Tests for Tabcontent preview API."""

import pytest
from fastapi.testclient import TestClient

from tabcontent.api.main import app


@pytest.fixture
def client():
    """Create a test client."""
    with TestClient(app) as client:
        yield client


class TestRootEndpoint:
    """Tests for the root endpoint."""

    def test_root(self, client: TestClient) -> None:
        """Test root endpoint returns API info."""
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Tabcontent API"
        assert data["version"] == "0.1.0"


class TestHealthEndpoint:
    """Tests for the health check endpoint."""

    def test_health_check(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestTabTypesEndpoint:
    """Tests for the tab types endpoint."""

    def test_tab_types(self, client: TestClient) -> None:
        data = client.get("/tab-types").json()
        assert "opd_services" in data["types"]
        assert data["labels"]["inpatient_services"] == "Inpatient Services"
        assert sorted(data["embedded_overview"]) == [
            "inpatient_services",
            "investigations",
            "opd_services",
        ]


class TestNormalizeEndpoint:
    """Tests for the normalize endpoint."""

    def test_normalize(self, client: TestClient) -> None:
        response = client.post(
            "/normalize",
            json={"sidebar_items": ["a", {"0": "H", "1": "i"}], "tab_type": "overview"},
        )
        assert response.status_code == 200
        items = response.json()
        assert [i["title"] for i in items] == ["Overview", "a", "Hi"]
        assert items[0]["sort_order"] == -1

    def test_normalize_map_input(self, client: TestClient) -> None:
        response = client.post(
            "/normalize",
            json={"sidebar_items": {"1": "b", "0": "a"}, "include_overview": False},
        )
        assert [i["title"] for i in response.json()] == ["a", "b"]

    def test_normalize_garbage(self, client: TestClient) -> None:
        """Test unusable input yields an empty list rather than an error."""
        response = client.post(
            "/normalize",
            json={"sidebar_items": [None, 5, [1, 2]], "include_overview": False},
        )
        assert response.status_code == 200
        assert response.json() == []


class TestResolveEndpoint:
    """Tests for the resolve endpoint."""

    @pytest.fixture
    def tab_content(self) -> dict:
        return {
            "tab_type": "investigations",
            "main_image": "tab.png",
            "sidebar_items": [
                {"id": "ov", "title": "Overview", "image": "ov.png"},
                {"id": "mri", "title": "MRI", "image": "mri.png"},
            ],
        }

    def test_resolve_overview(self, client: TestClient, tab_content: dict) -> None:
        response = client.post("/resolve", json={"tab_content": tab_content})
        assert response.status_code == 200
        data = response.json()
        assert [i["title"] for i in data["items"]] == ["Overview", "MRI"]
        assert data["content"]["image"] == "ov.png"
        assert data["content"]["source"] == "item"

    def test_resolve_item(self, client: TestClient, tab_content: dict) -> None:
        response = client.post("/resolve", json={"tab_content": tab_content, "selection": "mri"})
        assert response.json()["content"]["image"] == "mri.png"

    def test_resolve_stale_item(self, client: TestClient, tab_content: dict) -> None:
        response = client.post("/resolve", json={"tab_content": tab_content, "selection": "gone"})
        content = response.json()["content"]
        assert content["image"] == "tab.png"
        assert content["source"] == "tab"

    def test_resolve_requires_object(self, client: TestClient) -> None:
        response = client.post("/resolve", json={"tab_content": ["not", "an", "object"]})
        assert response.status_code == 422
