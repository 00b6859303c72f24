import logging

import httpx
import pytest

from conftest import BASE_URL
from explorer.catalog.pokeapi_service import PokeApiClient
from explorer.catalog.schemas import ViewStatus
from explorer.catalog.store import ViewState, load_view, view_status


async def run_load(fake_api, limit=150):
    state = ViewState()
    async with httpx.AsyncClient(transport=fake_api.transport()) as http:
        await load_view(state, PokeApiClient(http, BASE_URL), limit)
    return state


@pytest.mark.asyncio
async def test_successful_load_reaches_results(fake_api):
    state = await run_load(fake_api)
    assert state.loading is False
    assert state.error is None
    assert len(state.entries) == 4
    assert state.filtered_entries == state.entries
    assert state.available_tags == fake_api.type_names
    assert view_status(state) is ViewStatus.RESULTS


@pytest.mark.asyncio
async def test_type_failure_does_not_fail_the_load(fake_api):
    fake_api.fail["/api/v2/type"] = 500
    state = await run_load(fake_api)
    assert state.error is None
    assert state.available_tags == []
    assert view_status(state) is ViewStatus.RESULTS


@pytest.mark.asyncio
async def test_type_transport_failure_does_not_fail_the_load(fake_api):
    fake_api.fail["/api/v2/type"] = httpx.ConnectError("down")
    state = await run_load(fake_api)
    assert view_status(state) in (ViewStatus.RESULTS, ViewStatus.EMPTY)
    assert state.available_tags == []


@pytest.mark.asyncio
async def test_type_failure_with_empty_page_reaches_empty(fake_api):
    fake_api.species = []
    fake_api.fail["/api/v2/type"] = 500
    state = await run_load(fake_api)
    assert view_status(state) is ViewStatus.EMPTY


@pytest.mark.asyncio
async def test_detail_failure_reaches_error_with_no_entries(fake_api):
    fake_api.fail["/api/v2/pokemon/1/"] = 500
    state = await run_load(fake_api)
    assert view_status(state) is ViewStatus.ERROR
    assert state.entries == []
    assert state.filtered_entries == []
    assert state.loading is False
    # Types still load independently.
    assert state.available_tags == fake_api.type_names


@pytest.mark.asyncio
async def test_page_failure_reports_reason(fake_api):
    fake_api.fail["/api/v2/pokemon"] = 500
    state = await run_load(fake_api)
    assert state.error == "Network response was not ok"
    assert state.entries == []


@pytest.mark.asyncio
async def test_warning_level_hides_info_records(fake_api, caplog):
    caplog.set_level(logging.WARNING)
    # Capture whatever the loggers let through, whatever its level.
    caplog.handler.setLevel(logging.NOTSET)
    await run_load(fake_api)
    info = [r for r in caplog.records if r.name.startswith("explorer") and r.levelno < logging.WARNING]
    assert info == []


@pytest.mark.asyncio
async def test_debug_level_lets_info_records_through(fake_api, caplog):
    caplog.set_level(logging.DEBUG)
    await run_load(fake_api)
    messages = [r.getMessage() for r in caplog.records if r.name.startswith("explorer")]
    assert "Loading catalog view (limit=150)" in messages
    assert "Loaded 4 entries" in messages
