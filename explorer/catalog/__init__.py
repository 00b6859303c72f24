"""
Catalog package for the Pokémon explorer.

This package loads one page of Pokémon and the list of types from
PokeAPI when the view is mounted, keeps them in a single in-memory
view state, and lets the user narrow the page down by name and by
type. The routes render that state as an HTML page and expose it as
JSON under ``/api/catalog``.
"""

from .router import mount_view  # noqa: F401
from .router import page_router  # noqa: F401
from .router import router as catalog_router  # noqa: F401
