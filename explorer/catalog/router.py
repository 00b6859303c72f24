"""
Route definitions for the explorer.

Page routes:
- GET  /          : the explorer page for the current view state
- GET  /results   : HTML fragment of the results section

Endpoints under /api/catalog:
- GET  /view        : snapshot of the view state (filtered entries included)
- GET  /types       : type names offered by the selector
- PUT  /view/query  : set the search text
- PUT  /view/type   : set (or clear) the selected type
- POST /reload      : discard the view and load it again

The view lives on ``app.state.view``. Handlers are ``async def`` so
that they run on the event loop, the same thread as the loader task;
the state therefore has exactly one writer at a time.

There is one view per process, shared by every client: a query or type
set from one browser tab is what every other tab sees on its next
request.
"""

from __future__ import annotations

import asyncio
import logging
from typing import List

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import HTMLResponse

from .pokeapi_service import PokeApiClient
from .schemas import QueryUpdate, TypeUpdate, ViewSnapshot
from .store import ViewState, load_view, set_query, set_selected_tag, snapshot
from .ui import render_page, render_results


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/catalog", tags=["catalog"])
page_router = APIRouter(tags=["page"])


def mount_view(app: FastAPI) -> asyncio.Task:
    """Create a fresh view on ``app`` and start loading it.

    Any load still running for a previous view is cancelled first, so a
    stale loader can never write into the new state.
    """
    previous = getattr(app.state, "load_task", None)
    if previous is not None and not previous.done():
        previous.cancel()
    state = ViewState()
    app.state.view = state
    client: PokeApiClient = app.state.pokeapi
    task = asyncio.create_task(load_view(state, client, app.state.settings.page_limit))
    app.state.load_task = task
    return task


def _view(request: Request) -> ViewState:
    return request.app.state.view


@page_router.get("/", response_class=HTMLResponse)
async def explorer_page(request: Request) -> HTMLResponse:
    return HTMLResponse(render_page(_view(request)))


@page_router.get("/results", response_class=HTMLResponse)
async def explorer_results(request: Request) -> HTMLResponse:
    return HTMLResponse(render_results(_view(request)))


@router.get("/view", response_model=ViewSnapshot)
async def get_view(request: Request) -> ViewSnapshot:
    return snapshot(_view(request))


@router.get("/types", response_model=List[str])
async def list_types(request: Request) -> List[str]:
    return list(_view(request).available_tags)


@router.put("/view/query", response_model=ViewSnapshot)
async def update_query(update: QueryUpdate, request: Request) -> ViewSnapshot:
    state = _view(request)
    set_query(state, update.query)
    return snapshot(state)


@router.put("/view/type", response_model=ViewSnapshot)
async def update_type(update: TypeUpdate, request: Request) -> ViewSnapshot:
    """Select a type, or clear the selection with ``null`` / ``""``.

    Names that are not in the type list are accepted; they simply match
    nothing.
    """
    state = _view(request)
    set_selected_tag(state, update.type)
    return snapshot(state)


@router.post("/reload", response_model=ViewSnapshot, status_code=202)
async def reload_view(request: Request) -> ViewSnapshot:
    logger.info("Reloading catalog view")
    mount_view(request.app)
    return snapshot(_view(request))
