"""Pytest fixtures: a fake PokeAPI served through ``httpx.MockTransport``."""

import httpx
import pytest

from explorer.catalog.schemas import CategoryTag, Entry
from explorer.config import Settings


BASE_URL = "https://pokeapi.test/api/v2"

SPECIES = [
    (25, "pikachu", ["electric"]),
    (4, "charmander", ["fire"]),
    (1, "bulbasaur", ["grass", "poison"]),
    (7, "squirtle", ["water"]),
]

TYPE_NAMES = ["normal", "fire", "water", "electric", "grass", "poison"]


def detail_payload(pid, name, types):
    return {
        "id": pid,
        "name": name,
        "height": 4,
        "sprites": {"front_default": f"https://img.test/{pid}.png", "back_default": None},
        "types": [
            {"slot": i + 1, "type": {"name": t, "url": f"{BASE_URL}/type/{t}/"}}
            for i, t in enumerate(types)
        ],
    }


class FakePokeApi:
    """Routes requests to canned payloads and records what was asked for.

    ``fail`` maps a URL path to either a status code or an exception
    instance to raise instead of answering.
    """

    def __init__(self, species=SPECIES, type_names=TYPE_NAMES):
        self.species = list(species)
        self.type_names = list(type_names)
        self.fail = {}
        self.requests = []

    def detail_url(self, pid):
        return f"{BASE_URL}/pokemon/{pid}/"

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        failure = self.fail.get(path)
        if isinstance(failure, Exception):
            raise failure
        if isinstance(failure, int):
            return httpx.Response(failure, text="Not Found")
        if path == "/api/v2/type":
            return httpx.Response(
                200,
                json={
                    "count": len(self.type_names),
                    "results": [
                        {"name": t, "url": f"{BASE_URL}/type/{t}/"} for t in self.type_names
                    ],
                },
            )
        if path == "/api/v2/pokemon":
            limit = int(request.url.params.get("limit", 20))
            return httpx.Response(
                200,
                json={
                    "count": len(self.species),
                    "results": [
                        {"name": name, "url": self.detail_url(pid)}
                        for pid, name, _ in self.species[:limit]
                    ],
                },
            )
        for pid, name, types in self.species:
            if path == f"/api/v2/pokemon/{pid}/":
                return httpx.Response(200, json=detail_payload(pid, name, types))
        return httpx.Response(404, text="Not Found")

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def fake_api():
    return FakePokeApi()


@pytest.fixture
def settings():
    return Settings(api_base_url=BASE_URL, page_limit=150, request_timeout=5.0)


def make_entry(pid, name, types):
    return Entry(
        id=pid,
        name=name,
        sprite_url=f"https://img.test/{pid}.png",
        types=[CategoryTag(name=t) for t in types],
    )


@pytest.fixture
def entries():
    return [
        make_entry(25, "Pikachu", ["electric"]),
        make_entry(4, "Charmander", ["fire"]),
        make_entry(6, "Charizard", ["fire", "flying"]),
        make_entry(1, "Bulbasaur", ["grass", "poison"]),
    ]
