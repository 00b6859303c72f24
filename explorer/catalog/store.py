"""
View state for the explorer page.

A single ``ViewState`` is owned by the running application. It is
created empty (and loading) when the view is mounted, filled once by
``load_view()``, and afterwards only the search inputs and the derived
``filtered_entries`` change. Every change goes through one of the
transition functions below; each of them ends by re-running the filter
so ``filtered_entries`` never drifts from ``entries``.

All transitions are synchronous and are only called from the event
loop thread, so the state needs no locking.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .pokeapi_service import CatalogError, PokeApiClient
from .schemas import Entry, ViewSnapshot, ViewStatus


logger = logging.getLogger(__name__)


@dataclass
class ViewState:
    entries: List[Entry] = field(default_factory=list)
    filtered_entries: List[Entry] = field(default_factory=list)
    loading: bool = True
    error: Optional[str] = None
    query: str = ""
    selected_tag: Optional[str] = None
    available_tags: List[str] = field(default_factory=list)


def _norm_tag(tag: Optional[str]) -> Optional[str]:
    # The "All Types" option posts an empty string.
    return tag or None


def filter_entries(entries: Iterable[Entry], query: str = "", tag: Optional[str] = None) -> List[Entry]:
    """Return the entries matching both the name query and the type.

    The name test is a case-insensitive substring match; the type test
    is an exact match on the type name and is skipped when ``tag`` is
    empty. Order is preserved.
    """
    needle = (query or "").lower()
    tag = _norm_tag(tag)
    return [
        entry
        for entry in entries
        if needle in entry.name.lower() and (tag is None or entry.has_type(tag))
    ]


def refilter(state: ViewState) -> None:
    state.filtered_entries = filter_entries(state.entries, state.query, state.selected_tag)


def set_query(state: ViewState, query: Optional[str]) -> None:
    state.query = query or ""
    refilter(state)


def set_selected_tag(state: ViewState, tag: Optional[str]) -> None:
    state.selected_tag = _norm_tag(tag)
    refilter(state)


def apply_tags(state: ViewState, names: Iterable[str]) -> None:
    state.available_tags = list(names)


def apply_load_success(state: ViewState, entries: Iterable[Entry]) -> None:
    state.entries = list(entries)
    state.error = None
    state.loading = False
    refilter(state)


def apply_load_failure(state: ViewState, reason: str) -> None:
    state.entries = []
    state.error = reason
    state.loading = False
    refilter(state)


def view_status(state: ViewState) -> ViewStatus:
    if state.error:
        return ViewStatus.ERROR
    if state.loading:
        return ViewStatus.LOADING
    if not state.filtered_entries:
        return ViewStatus.EMPTY
    return ViewStatus.RESULTS


def snapshot(state: ViewState) -> ViewSnapshot:
    return ViewSnapshot(
        status=view_status(state),
        error=state.error,
        query=state.query,
        selected_tag=state.selected_tag,
        available_tags=list(state.available_tags),
        total=len(state.entries),
        count=len(state.filtered_entries),
        entries=list(state.filtered_entries),
    )


async def _load_tags(state: ViewState, client: PokeApiClient) -> None:
    try:
        names = await client.fetch_type_names()
    except CatalogError as exc:
        # The selector just falls back to "All Types".
        logger.warning("Error fetching types: %s", exc)
        return
    except Exception:
        logger.exception("Unexpected error while loading types")
        return
    apply_tags(state, names)
    logger.info("Loaded %d types", len(names))


async def _load_entries(state: ViewState, client: PokeApiClient, limit: int) -> None:
    try:
        entries = await client.fetch_entries(limit)
    except CatalogError as exc:
        logger.error("Error fetching entries: %s", exc)
        apply_load_failure(state, str(exc))
        return
    except Exception as exc:
        logger.exception("Unexpected error while loading entries")
        apply_load_failure(state, str(exc) or exc.__class__.__name__)
        return
    apply_load_success(state, entries)
    logger.info("Loaded %d entries", len(entries))


async def load_view(state: ViewState, client: PokeApiClient, limit: int) -> None:
    """Populate ``state`` from the remote API.

    The type list and the entry page are loaded side by side; a failure
    of the former never affects the latter.
    """
    logger.info("Loading catalog view (limit=%d)", limit)
    await asyncio.gather(
        _load_tags(state, client),
        _load_entries(state, client, limit),
    )
