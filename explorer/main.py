# explorer/main.py
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from dotenv import load_dotenv
from fastapi import FastAPI

from .catalog import catalog_router, mount_view, page_router
from .catalog.pokeapi_service import PokeApiClient
from .config import Settings


logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    await_initial_load: bool = False,
) -> FastAPI:
    """FastAPI app factory.

    ``transport`` replaces the network transport of the PokeAPI client
    (tests pass an ``httpx.MockTransport``). With ``await_initial_load``
    the app only starts serving once the first load has settled.
    """
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        http = httpx.AsyncClient(transport=transport, follow_redirects=True)
        app.state.pokeapi = PokeApiClient(http, settings.api_base_url, settings.request_timeout)
        task = mount_view(app)
        if await_initial_load:
            await task
        try:
            yield
        finally:
            current = app.state.load_task
            if not current.done():
                current.cancel()
                await asyncio.gather(current, return_exceptions=True)
            await http.aclose()

    app = FastAPI(
        title="Pokémon Explorer",
        description=(
            "Browse the first page of Pokémon from PokeAPI, "
            "searching by name and filtering by type."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    @app.get("/health")
    async def health_check():
        return {"status": "ok"}

    app.include_router(page_router)
    app.include_router(catalog_router)
    return app


load_dotenv()
_settings = Settings.from_env()
logging.basicConfig(level=getattr(logging, _settings.log_level, logging.INFO))

app = create_app(_settings)


def run() -> None:
    """Console entry point: serve ``app`` with uvicorn."""
    import uvicorn

    uvicorn.run(app, host=_settings.host, port=_settings.port, log_level=_settings.log_level.lower())
