"""
Route definitions for the catalogue API.

Endpoints under /api/catalog bind a front-end's UI events to the view
engine handlers:
- GET    /view             : current page of the catalogue
- PUT    /view/search      : set search text (resets to page 1)
- PUT    /view/category    : set or clear the category filter (resets to page 1)
- POST   /view/page/{n}    : jump to a page (ignored when out of range)
- POST   /view/next, /view/previous, /view/first, /view/last
- PUT    /view/hover       : set or clear the hovered entry
- POST   /view/select      : open the detail overlay on an entry
- DELETE /view/select      : close the detail overlay
- GET    /view/detail      : contents of the detail overlay
- GET    /categories       : known categories with colour and icon
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request

from .categories import CATEGORY_COLORS, CATEGORY_ICONS, Category, category_icons
from .engine import CatalogView
from .schemas import (
    CatalogPage,
    CategoryInfo,
    CategoryRequest,
    EntryCard,
    HoverRequest,
    Overlay,
    SearchRequest,
    SelectRequest,
)

router = APIRouter(prefix="/api/catalog", tags=["catalog"])


def get_view(request: Request) -> CatalogView:
    return request.app.state.catalog_view


def _render_page(view: CatalogView) -> CatalogPage:
    filtered = view.view()
    state = view.state
    cards = [
        EntryCard(
            name=e.name,
            image_url=e.image_url,
            types=list(e.types),
            icons=category_icons(e.types),
            highlight_color=view.highlight_color(e),
        )
        for e in filtered.items
    ]
    return CatalogPage(
        page=state.page,
        page_size=state.page_size,
        total=filtered.total,
        total_pages=filtered.total_pages,
        items=cards,
        page_links=view.page_links(),
        search_text=state.search_text,
        category=state.category,
        loaded=state.loaded,
    )


def _render_overlay(view: CatalogView) -> Overlay:
    state = view.state
    selected = state.selected
    if selected is None:
        return Overlay(status=view.overlay_status)
    return Overlay(
        status=view.overlay_status,
        entry=selected,
        icons=category_icons(selected.types),
        abilities=list(state.abilities),
        moves=list(state.moves),
    )


@router.get("/view", response_model=CatalogPage)
async def get_page(view: CatalogView = Depends(get_view)) -> CatalogPage:
    return _render_page(view)


@router.put("/view/search", response_model=CatalogPage)
async def set_search(req: SearchRequest, view: CatalogView = Depends(get_view)) -> CatalogPage:
    view.set_search_text(req.text)
    return _render_page(view)


@router.put("/view/category", response_model=CatalogPage)
async def set_category(req: CategoryRequest, view: CatalogView = Depends(get_view)) -> CatalogPage:
    view.set_category_filter(req.category)
    return _render_page(view)


@router.post("/view/page/{page}", response_model=CatalogPage)
async def go_to_page(page: int, view: CatalogView = Depends(get_view)) -> CatalogPage:
    view.go_to_page(page)
    return _render_page(view)


@router.post("/view/next", response_model=CatalogPage)
async def next_page(view: CatalogView = Depends(get_view)) -> CatalogPage:
    view.next_page()
    return _render_page(view)


@router.post("/view/previous", response_model=CatalogPage)
async def previous_page(view: CatalogView = Depends(get_view)) -> CatalogPage:
    view.previous_page()
    return _render_page(view)


@router.post("/view/first", response_model=CatalogPage)
async def first_page(view: CatalogView = Depends(get_view)) -> CatalogPage:
    view.first_page()
    return _render_page(view)


@router.post("/view/last", response_model=CatalogPage)
async def last_page(view: CatalogView = Depends(get_view)) -> CatalogPage:
    view.last_page()
    return _render_page(view)


@router.put("/view/hover", response_model=CatalogPage)
async def set_hover(req: HoverRequest, view: CatalogView = Depends(get_view)) -> CatalogPage:
    """Set the hovered entry; an unknown or null name clears it."""
    entry = view.find_entry(req.name) if req.name else None
    view.hover(entry)
    return _render_page(view)


@router.post("/view/select", response_model=Overlay)
async def select_entry(req: SelectRequest, view: CatalogView = Depends(get_view)) -> Overlay:
    """Open the overlay on an entry.

    The response reflects the overlay right after selection, normally in
    the ``loading`` state; abilities and moves are fetched in the
    background and show up in ``GET /view/detail`` once resolved.
    """
    entry = view.find_entry(req.name)
    if entry is None:
        raise HTTPException(status_code=404, detail="Entry not found")
    view.select(entry)
    return _render_overlay(view)


@router.delete("/view/select", response_model=Overlay)
async def deselect_entry(view: CatalogView = Depends(get_view)) -> Overlay:
    view.deselect()
    return _render_overlay(view)


@router.get("/view/detail", response_model=Overlay)
async def get_detail(view: CatalogView = Depends(get_view)) -> Overlay:
    return _render_overlay(view)


@router.get("/categories", response_model=List[CategoryInfo])
async def list_categories() -> List[CategoryInfo]:
    return [
        CategoryInfo(name=c, color=CATEGORY_COLORS[c], icon=CATEGORY_ICONS[c])
        for c in Category
    ]
