"""
The catalogue view engine.

``CatalogView`` owns the single ``ViewState`` of a session together with
the data source it loads from. Handlers replace the state through the
pure transitions in ``state``; the only asynchronous work is the initial
catalogue load and the per-selection detail fetch.
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Protocol, Set

from . import state as view_state
from .categories import Category
from .schemas import AbilityRef, Entry, FilteredView, MoveRef, OverlayStatus
from .state import ViewState


logger = logging.getLogger(__name__)


class EntrySource(Protocol):
    """What the engine needs from a data source.

    Implementations must not raise: failures are reported as empty lists.
    The ``pokeapi_service`` module satisfies this protocol.
    """

    async def list_entries(self) -> List[Entry]: ...

    async def get_abilities(self, name: str) -> List[AbilityRef]: ...

    async def get_moves(self, name: str) -> List[MoveRef]: ...


class CatalogView:
    def __init__(self, source: EntrySource, initial: Optional[ViewState] = None) -> None:
        self.source = source
        self.state = initial if initial is not None else ViewState()
        # Detail fetches are never cancelled; keep references until done.
        self._pending: Set[asyncio.Task] = set()

    async def initialize(self) -> None:
        entries = await self.source.list_entries()
        self.state = view_state.load_entries(self.state, entries)
        logger.info("Catalogue ready with %d entries", len(entries))

    def find_entry(self, name: str) -> Optional[Entry]:
        return next((e for e in self.state.entries if e.name == name), None)

    def view(self) -> FilteredView:
        return view_state.compute_filtered_view(self.state)

    def page_links(self) -> List[int]:
        return view_state.page_links(self.state)

    def highlight_color(self, cell: Entry) -> str:
        return view_state.highlight_color(self.state, cell)

    @property
    def overlay_status(self) -> OverlayStatus:
        return view_state.overlay_status(self.state)

    def set_search_text(self, text: str) -> None:
        self.state = view_state.set_search_text(self.state, text)

    def set_category_filter(self, category: Optional[Category]) -> None:
        self.state = view_state.set_category_filter(self.state, category)

    def go_to_page(self, page: int) -> None:
        self.state = view_state.go_to_page(self.state, page)

    def next_page(self) -> None:
        self.state = view_state.next_page(self.state)

    def previous_page(self) -> None:
        self.state = view_state.previous_page(self.state)

    def first_page(self) -> None:
        self.state = view_state.first_page(self.state)

    def last_page(self) -> None:
        self.state = view_state.last_page(self.state)

    def hover(self, entry: Optional[Entry]) -> None:
        self.state = view_state.hover(self.state, entry)

    def select(self, entry: Entry) -> asyncio.Task:
        """Open the overlay on ``entry`` and start fetching its details.

        The selection is applied before this returns. The returned task
        resolves once abilities and moves have been fetched and either
        committed or discarded as stale; must be called from a running
        event loop.
        """
        self.state = view_state.select(self.state, entry)
        task = asyncio.create_task(self._load_details(entry, self.state.generation))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _load_details(self, entry: Entry, generation: int) -> bool:
        try:
            abilities, moves = await asyncio.gather(
                self.source.get_abilities(entry.name),
                self.source.get_moves(entry.name),
            )
        except Exception:
            logger.exception("Error loading details for %s", entry.name)
            abilities, moves = [], []
        committed = view_state.commit_details(self.state, generation, abilities, moves)
        if committed is self.state:
            logger.debug("Discarding stale details for %s (generation %d)", entry.name, generation)
            return False
        self.state = committed
        return True

    def deselect(self) -> None:
        self.state = view_state.deselect(self.state)

    async def wait_pending(self) -> None:
        """Wait for every in-flight detail fetch to settle."""
        if self._pending:
            await asyncio.gather(*list(self._pending))
