# app/main.py
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from .catalog import catalog_router
from .catalog import pokeapi_service
from .catalog.engine import CatalogView, EntrySource
from .config import CATALOG_LOG_LEVEL


logger = logging.getLogger(__name__)


def create_app(source: Optional[EntrySource] = None) -> FastAPI:
    """Build the application around a data source (PokeAPI by default).

    The catalogue load starts in the background at startup, so ``/view``
    answers with an empty page until it completes.
    """
    logging.basicConfig(level=CATALOG_LOG_LEVEL)
    view = CatalogView(source if source is not None else pokeapi_service)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        load = asyncio.create_task(view.initialize())
        app.state.catalog_load = load
        yield
        if not load.done():
            load.cancel()
        await asyncio.gather(load, return_exceptions=True)
        await view.wait_pending()

    app = FastAPI(
        title="Creature Catalog",
        description=(
            "Browse the PokeAPI creature list with search, type filter, "
            "pagination and a per-entry detail overlay."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.catalog_view = view
    app.include_router(catalog_router)

    @app.get("/")
    async def health_check():
        return {"status": "ok", "loaded": view.state.loaded}

    return app


app = create_app()
