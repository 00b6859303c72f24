"""
PokeAPI integration for the catalogue.

This module is the only place where the explorer talks to the remote
API. It exposes ``PokeApiClient`` with two operations:

* ``fetch_type_names()`` — the names of every type in ``/type``, in the
  order the API returns them.

* ``fetch_entries()`` — the first ``limit`` entries of ``/pokemon``,
  each resolved to its full detail record. Detail requests are issued
  concurrently and the batch is all-or-nothing: the first failure
  cancels the requests still in flight and is raised to the caller.

Every payload is validated against the boundary schemas in
``schemas.py``; a body that is not JSON or is missing required fields
raises ``MalformedResponse``. Transport errors, timeouts and non-2xx
statuses raise ``UpstreamError``. Nothing is cached and nothing is
retried.
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from .schemas import Entry, EntryDetail, NamedResource, NamedResourceList


logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# Shown to the user when the entry page request is refused.
PAGE_STATUS_MESSAGE = "Network response was not ok"


class CatalogError(Exception):
    """Base class for failures while loading catalog data."""


class UpstreamError(CatalogError):
    """The remote API could not be reached or answered with an error status."""

    def __init__(self, message: str, url: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class MalformedResponse(CatalogError):
    """The remote API answered, but not with the expected shape."""

    def __init__(self, message: str, url: str):
        super().__init__(message)
        self.url = url


class PokeApiClient:
    """Thin async wrapper around an ``httpx.AsyncClient``.

    The caller owns the underlying client and closes it; this keeps the
    connection pool shared with the application lifespan and lets tests
    hand in a client built on ``httpx.MockTransport``.
    """

    def __init__(self, http: httpx.AsyncClient, base_url: str, timeout: float = 10.0):
        self.http = http
        self.base_url = base_url.rstrip("/")
        self.timeout = httpx.Timeout(timeout)

    async def _get_json(self, url: str, status_message: Optional[str] = None) -> object:
        """GET ``url`` and return the decoded JSON body.

        ``status_message`` replaces the default error text when the
        response status is not a success.
        """
        try:
            response = await self.http.get(
                url,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
        except httpx.TimeoutException as exc:
            logger.error("Request to %s timed out: %s", url, exc)
            raise UpstreamError(f"Request to {url} timed out", url) from exc
        except httpx.RequestError as exc:
            logger.error("Error fetching %s: %s", url, exc)
            raise UpstreamError(f"Could not reach {url}: {exc}", url) from exc
        if not response.is_success:
            logger.warning("Request to %s returned status %s", url, response.status_code)
            raise UpstreamError(
                status_message or f"Request to {url} returned status {response.status_code}",
                url,
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise MalformedResponse(f"Response from {url} is not valid JSON", url) from exc

    async def _get_model(
        self, url: str, model: Type[ModelT], status_message: Optional[str] = None
    ) -> ModelT:
        data = await self._get_json(url, status_message=status_message)
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            logger.error("Unexpected payload from %s: %s", url, exc)
            raise MalformedResponse(
                f"Response from {url} does not look like a {model.__name__} "
                f"({exc.error_count()} problem(s))",
                url,
            ) from exc

    async def fetch_type_names(self) -> List[str]:
        listing = await self._get_model(f"{self.base_url}/type", NamedResourceList)
        return [item.name for item in listing.results]

    async def fetch_entry_refs(self, limit: int) -> List[NamedResource]:
        url = f"{self.base_url}/pokemon?limit={int(limit)}"
        listing = await self._get_model(url, NamedResourceList, status_message=PAGE_STATUS_MESSAGE)
        return listing.results

    async def fetch_entry(self, ref: NamedResource) -> Entry:
        detail = await self._get_model(ref.url, EntryDetail)
        return detail.to_entry()

    async def fetch_entries(self, limit: int) -> List[Entry]:
        """Fetch the first ``limit`` entries with their details.

        Results keep the page order. If any detail request fails, the
        others are cancelled before the error propagates, so no partial
        list ever leaves this method.
        """
        refs = await self.fetch_entry_refs(limit)
        logger.info("Fetching details for %d entries", len(refs))
        tasks = [asyncio.ensure_future(self.fetch_entry(ref)) for ref in refs]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            # Let the cancelled siblings finish unwinding before re-raising.
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
