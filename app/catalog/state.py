"""
View state of the catalogue and the transitions over it.

``ViewState`` is an immutable record. Every handler in this module takes
the current state and returns a new one (or the same object when the
request is a no-op), so a caller can hold a single reference and replace
it after each UI event. No handler performs I/O.

Filtering is a conjunction of a case-insensitive substring match on the
entry name and an exact match of the selected category against the
entry's tags. Pagination is 1-indexed with a fixed page size; changing
the search text or the category always returns to page 1.

Detail loading is guarded by a generation id: ``select`` and ``deselect``
bump it, and ``commit_details`` only accepts lists fetched for the
current generation. A slow fetch for an earlier selection therefore can
never overwrite a newer one or reopen a closed overlay.
"""

from __future__ import annotations

import math
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from ..config import PAGE_SIZE
from .categories import DEFAULT_COLOR, Category, category_color
from .schemas import AbilityRef, Entry, FilteredView, MoveRef, OverlayStatus

# Number of numbered buttons in the pagination bar
PAGE_LINK_COUNT = 5


class ViewState(BaseModel):
    model_config = ConfigDict(frozen=True)

    entries: Tuple[Entry, ...] = ()
    page: int = 1
    page_size: int = PAGE_SIZE
    search_text: str = ""
    category: Optional[Category] = None
    hovered: Optional[Entry] = None
    selected: Optional[Entry] = None
    abilities: Tuple[AbilityRef, ...] = ()
    moves: Tuple[MoveRef, ...] = ()
    generation: int = 0
    details_ready: bool = False
    loaded: bool = False


def _norm(s: Optional[str]) -> str:
    return (s or "").lower()


def _matches(entry: Entry, needle: str, category: Optional[Category]) -> bool:
    if needle and needle not in _norm(entry.name):
        return False
    if category is not None and category.value not in entry.types:
        return False
    return True


def filter_entries(state: ViewState) -> List[Entry]:
    """All entries passing the current search text and category."""
    needle = _norm(state.search_text)
    return [e for e in state.entries if _matches(e, needle, state.category)]


def total_pages(state: ViewState) -> int:
    return math.ceil(len(filter_entries(state)) / state.page_size)


def compute_filtered_view(state: ViewState) -> FilteredView:
    """Filter the collection and slice out the current page.

    Returns
    -------
    FilteredView
        The entries of the current page, the number of entries matching
        the filters and the number of pages they span.
    """
    items = filter_entries(state)
    total = len(items)
    start = (state.page - 1) * state.page_size
    end = state.page * state.page_size
    return FilteredView(
        items=items[start:end],
        total=total,
        total_pages=math.ceil(total / state.page_size),
    )


def _max_page(state: ViewState) -> int:
    return max(1, total_pages(state))


def load_entries(state: ViewState, entries: List[Entry]) -> ViewState:
    return state.model_copy(update={"entries": tuple(entries), "loaded": True})


def set_search_text(state: ViewState, text: str) -> ViewState:
    return state.model_copy(update={"search_text": text or "", "page": 1})


def set_category_filter(state: ViewState, category: Optional[Category]) -> ViewState:
    return state.model_copy(update={"category": category, "page": 1})


def go_to_page(state: ViewState, page: int) -> ViewState:
    """Jump to ``page``; out-of-range requests are ignored."""
    if 1 <= page <= total_pages(state):
        return state.model_copy(update={"page": page})
    return state


def next_page(state: ViewState) -> ViewState:
    return state.model_copy(update={"page": min(state.page + 1, _max_page(state))})


def previous_page(state: ViewState) -> ViewState:
    return state.model_copy(update={"page": max(min(state.page - 1, _max_page(state)), 1)})


def first_page(state: ViewState) -> ViewState:
    return state.model_copy(update={"page": 1})


def last_page(state: ViewState) -> ViewState:
    return state.model_copy(update={"page": _max_page(state)})


def page_links(state: ViewState) -> List[int]:
    """Page numbers for the numbered pagination buttons.

    Up to ``PAGE_LINK_COUNT`` candidates are taken starting one page before
    the current one; candidates outside ``[1, total_pages]`` are dropped.
    """
    pages = total_pages(state)
    candidates = range(state.page - 1, state.page - 1 + min(pages, PAGE_LINK_COUNT))
    return [p for p in candidates if 1 <= p <= pages]


def hover(state: ViewState, entry: Optional[Entry]) -> ViewState:
    return state.model_copy(update={"hovered": entry})


def highlight_color(state: ViewState, cell: Entry) -> str:
    """Background colour of a catalogue cell.

    Only the hovered cell is tinted, using the colour of its first
    category, provided the hovered entry carries that category. Since the
    hovered entry is the cell itself the second check always holds for a
    cell with at least one category.
    """
    hovered = state.hovered
    if hovered is None or hovered.name != cell.name or not cell.types:
        return DEFAULT_COLOR
    first = cell.types[0]
    if first in hovered.types:
        return category_color(first)
    return DEFAULT_COLOR


def select(state: ViewState, entry: Entry) -> ViewState:
    """Open the overlay on ``entry`` and start a new detail generation."""
    return state.model_copy(
        update={
            "selected": entry,
            "generation": state.generation + 1,
            "abilities": (),
            "moves": (),
            "details_ready": False,
        }
    )


def commit_details(
    state: ViewState,
    generation: int,
    abilities: List[AbilityRef],
    moves: List[MoveRef],
) -> ViewState:
    """Store fetched details unless they belong to a stale generation."""
    if state.selected is None or generation != state.generation:
        return state
    return state.model_copy(
        update={
            "abilities": tuple(abilities),
            "moves": tuple(moves),
            "details_ready": True,
        }
    )


def deselect(state: ViewState) -> ViewState:
    # Loaded lists stay; the next select replaces them.
    return state.model_copy(
        update={"selected": None, "generation": state.generation + 1}
    )


def overlay_status(state: ViewState) -> OverlayStatus:
    if state.selected is None:
        return OverlayStatus.CLOSED
    if not state.details_ready:
        return OverlayStatus.LOADING
    return OverlayStatus.READY
