"""
Pydantic schema definitions for the creature catalogue.

``Entry`` is the record loaded once from the remote API and held for the
whole session. ``AbilityRef`` and ``MoveRef`` are fetched on demand when an
entry is opened in the detail overlay. The remaining models describe what
the HTTP layer returns to a front-end: a rendered catalogue page and the
overlay contents.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .categories import Category


class Stat(BaseModel):
    """One base stat of an entry, e.g. ``hp`` = 45."""

    model_config = ConfigDict(frozen=True)

    name: str
    base_stat: int


class Entry(BaseModel):
    """A single catalogue entry.

    ``types`` holds the raw category tag names in the order the API lists
    them. They are kept as plain strings rather than ``Category`` values so
    that an unknown tag still loads; lookups of its colour or icon degrade
    to the defaults in ``categories``. ``image_url`` is the official
    artwork URL, or ``None`` when the API has none.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    types: List[str] = Field(default_factory=list)
    stats: List[Stat] = Field(default_factory=list)
    image_url: Optional[str] = None


class AbilityRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str


class MoveRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str


class OverlayStatus(str, Enum):
    CLOSED = "closed"
    LOADING = "loading"
    READY = "ready"


class FilteredView(BaseModel):
    """Result of filtering and slicing the collection for the current page."""

    items: List[Entry]
    total: int
    total_pages: int


class CategoryInfo(BaseModel):
    name: Category
    color: str
    icon: str


class EntryCard(BaseModel):
    """An entry as rendered in a catalogue cell."""

    name: str
    image_url: Optional[str] = None
    types: List[str] = Field(default_factory=list)
    icons: List[str] = Field(default_factory=list)
    highlight_color: str


class CatalogPage(BaseModel):
    """A wrapper for the page returned from ``/view``.

    ``page_links`` are the numbered buttons of the pagination bar. A
    front-end hides the bar entirely when ``total_pages <= 1``. ``loaded``
    stays ``False`` until the initial catalogue load has completed.
    """

    page: int
    page_size: int
    total: int
    total_pages: int
    items: List[EntryCard]
    page_links: List[int] = Field(default_factory=list)
    search_text: str = ""
    category: Optional[Category] = None
    loaded: bool = False


class Overlay(BaseModel):
    """Contents of the detail overlay for the selected entry."""

    status: OverlayStatus
    entry: Optional[Entry] = None
    icons: List[str] = Field(default_factory=list)
    abilities: List[AbilityRef] = Field(default_factory=list)
    moves: List[MoveRef] = Field(default_factory=list)


class SearchRequest(BaseModel):
    text: str = ""


class CategoryRequest(BaseModel):
    category: Optional[Category] = None


class HoverRequest(BaseModel):
    name: Optional[str] = None


class SelectRequest(BaseModel):
    name: str
