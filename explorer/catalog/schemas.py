"""
Pydantic schema definitions for the catalog module.

Two families of models live here. The boundary models
(``NamedResource``, ``NamedResourceList``, ``EntryDetail``) mirror the
PokeAPI payloads closely enough to validate them on arrival; anything
missing or mistyped is rejected there instead of surfacing later while
rendering. The view models (``Entry``, ``CategoryTag``,
``ViewSnapshot``) carry only what the explorer page needs to render a
card or a filter option.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CategoryTag(BaseModel):
    """A named classification (a Pokémon type such as ``fire``)."""

    model_config = ConfigDict(frozen=True)

    name: str


class Entry(BaseModel):
    """A single catalog entry.

    Entries are immutable once fetched. ``types`` keeps the order in
    which the remote source lists them, which is also the order the
    badges are drawn on a card. ``sprite_url`` is an empty string when
    the source has no default sprite.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    sprite_url: str = ""
    types: List[CategoryTag] = Field(default_factory=list)

    def has_type(self, tag: str) -> bool:
        return any(t.name == tag for t in self.types)


class NamedResource(BaseModel):
    name: str
    url: str


class NamedResourceList(BaseModel):
    """Envelope of the ``/type`` and ``/pokemon`` list endpoints."""

    results: List[NamedResource]


class SpriteSet(BaseModel):
    front_default: Optional[str] = None


class TypeSlot(BaseModel):
    type: NamedResource


class EntryDetail(BaseModel):
    """The subset of a ``/pokemon/{id}`` record the explorer uses."""

    id: int
    name: str
    sprites: SpriteSet
    types: List[TypeSlot]

    def to_entry(self) -> Entry:
        return Entry(
            id=self.id,
            name=self.name,
            sprite_url=self.sprites.front_default or "",
            types=[CategoryTag(name=slot.type.name) for slot in self.types],
        )


class ViewStatus(str, Enum):
    """Mutually exclusive presentation states, in priority order."""

    ERROR = "error"
    LOADING = "loading"
    EMPTY = "empty"
    RESULTS = "results"


class ViewSnapshot(BaseModel):
    """Read-only picture of the view state returned by the JSON API."""

    status: ViewStatus
    error: Optional[str] = None
    query: str = ""
    selected_tag: Optional[str] = None
    available_tags: List[str] = Field(default_factory=list)
    # Size of the loaded set before filtering
    total: int = 0
    count: int = 0
    entries: List[Entry] = Field(default_factory=list)


class QueryUpdate(BaseModel):
    query: str = ""


class TypeUpdate(BaseModel):
    type: Optional[str] = None
