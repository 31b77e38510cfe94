"""
Catalog package for the creature catalogue viewer.

This package loads the full creature list from PokeAPI once, keeps it in
memory and exposes a view engine that filters it by name and category,
paginates it, and loads per-entry abilities and moves for a detail
overlay. The ``router`` module binds those handlers to HTTP endpoints so
that a browser front-end only has to render what it receives.
"""

from .router import router as catalog_router  # noqa: F401
