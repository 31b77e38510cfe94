"""Tests for the catalogue HTTP endpoints."""

from __future__ import annotations

from typing import Iterator, List

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from conftest import FakeSource, make_entry

from app.catalog.schemas import Entry
from app.main import create_app


async def _settle(app: FastAPI) -> None:
    await app.state.catalog_load
    await app.state.catalog_view.wait_pending()


@pytest.fixture
def app(starters: List[Entry]) -> FastAPI:
    return create_app(FakeSource(starters))


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as c:
        c.portal.call(_settle, app)
        yield c


class TestPage:
    """Tests for reading and filtering the catalogue page."""

    def test_health_check(self, client: TestClient) -> None:
        response = client.get("/")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "loaded": True}

    def test_get_page(self, client: TestClient) -> None:
        body = client.get("/api/catalog/view").json()

        assert body["page"] == 1
        assert body["page_size"] == 18
        assert body["total"] == 6
        assert body["total_pages"] == 1
        assert body["loaded"] is True
        assert body["items"][1]["name"] == "charmander"
        assert body["items"][1]["icons"] == ["🔥"]
        assert body["items"][1]["highlight_color"] == "transparent"

    def test_search(self, client: TestClient) -> None:
        body = client.put("/api/catalog/view/search", json={"text": "pika"}).json()

        assert [i["name"] for i in body["items"]] == ["pikachu"]
        assert body["search_text"] == "pika"

    def test_category(self, client: TestClient) -> None:
        body = client.put("/api/catalog/view/category", json={"category": "fire"}).json()

        assert [i["name"] for i in body["items"]] == ["charmander", "charizard"]
        assert body["category"] == "fire"

        body = client.put("/api/catalog/view/category", json={"category": None}).json()
        assert body["total"] == 6

    def test_unknown_category_is_rejected(self, client: TestClient) -> None:
        response = client.put("/api/catalog/view/category", json={"category": "cosmic"})

        assert response.status_code == 422

    def test_hover_highlights_cell(self, client: TestClient) -> None:
        body = client.put("/api/catalog/view/hover", json={"name": "squirtle"}).json()

        colors = {i["name"]: i["highlight_color"] for i in body["items"]}
        assert colors["squirtle"] == "#6890F0"
        assert colors["charmander"] == "transparent"

        body = client.put("/api/catalog/view/hover", json={"name": None}).json()
        assert all(i["highlight_color"] == "transparent" for i in body["items"])


class TestPaging:
    """Tests for the pagination endpoints."""

    @pytest.fixture
    def app(self) -> FastAPI:
        return create_app(FakeSource([make_entry(f"mon{i:02d}") for i in range(40)]))

    def test_navigation(self, client: TestClient) -> None:
        body = client.post("/api/catalog/view/next").json()
        assert body["page"] == 2
        assert body["page_links"] == [1, 2, 3]

        body = client.post("/api/catalog/view/last").json()
        assert body["page"] == 3
        assert [i["name"] for i in body["items"]] == ["mon36", "mon37", "mon38", "mon39"]

        body = client.post("/api/catalog/view/next").json()
        assert body["page"] == 3

        body = client.post("/api/catalog/view/previous").json()
        assert body["page"] == 2

        body = client.post("/api/catalog/view/first").json()
        assert body["page"] == 1

    def test_go_to_page(self, client: TestClient) -> None:
        assert client.post("/api/catalog/view/page/3").json()["page"] == 3
        assert client.post("/api/catalog/view/page/4").json()["page"] == 3
        assert client.post("/api/catalog/view/page/0").json()["page"] == 3

    def test_search_resets_page(self, client: TestClient) -> None:
        client.post("/api/catalog/view/page/2")

        body = client.put("/api/catalog/view/search", json={"text": "mon"}).json()

        assert body["page"] == 1


class TestDetail:
    """Tests for the detail overlay endpoints."""

    def test_closed_by_default(self, client: TestClient) -> None:
        body = client.get("/api/catalog/view/detail").json()

        assert body["status"] == "closed"
        assert body["entry"] is None

    def test_select_and_load(self, app: FastAPI, client: TestClient) -> None:
        body = client.post("/api/catalog/view/select", json={"name": "charizard"}).json()
        assert body["entry"]["name"] == "charizard"
        assert body["status"] in ("loading", "ready")

        client.portal.call(_settle, app)
        body = client.get("/api/catalog/view/detail").json()

        assert body["status"] == "ready"
        assert body["icons"] == ["🔥", "🦅"]
        assert body["abilities"] == [{"name": "charizard-ability"}]
        assert [m["name"] for m in body["moves"]] == ["charizard-move-1", "charizard-move-2"]
        assert [s["name"] for s in body["entry"]["stats"]] == ["hp", "speed"]

    def test_select_unknown(self, client: TestClient) -> None:
        response = client.post("/api/catalog/view/select", json={"name": "mew"})

        assert response.status_code == 404

    def test_deselect(self, app: FastAPI, client: TestClient) -> None:
        client.post("/api/catalog/view/select", json={"name": "pikachu"})

        body = client.delete("/api/catalog/view/select").json()
        assert body["status"] == "closed"

        client.portal.call(_settle, app)
        assert client.get("/api/catalog/view/detail").json()["status"] == "closed"


class TestCategories:
    def test_lists_all_categories(self, client: TestClient) -> None:
        body = client.get("/api/catalog/categories").json()

        assert len(body) == 18
        assert body[0] == {"name": "normal", "color": "#A8A878", "icon": "🔘"}
