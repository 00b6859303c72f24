from __future__ import annotations

from html import escape
from typing import Iterable, List, Optional

from .schemas import Entry, ViewStatus
from .store import ViewState, view_status

# NOTE:
# - Templates are plain strings with __PLACEHOLDER__ markers, not f-strings:
#   the CSS and JS below are full of braces.

TYPE_COLORS = {
    "normal": "#9ca3af",
    "fire": "#ef4444",
    "water": "#3b82f6",
    "electric": "#facc15",
    "grass": "#22c55e",
    "ice": "#bfdbfe",
    "fighting": "#b91c1c",
    "poison": "#a855f7",
    "ground": "#a16207",
    "flying": "#a5b4fc",
    "psychic": "#ec4899",
    "bug": "#16a34a",
    "rock": "#ca8a04",
    "ghost": "#7e22ce",
    "dragon": "#4338ca",
    "dark": "#1f2937",
    "steel": "#6b7280",
    "fairy": "#f9a8d4",
}
DEFAULT_TYPE_COLOR = "#9ca3af"

EMPTY_MESSAGE = "No Pokémon found matching your criteria. Try adjusting your search."

_STYLE = r"""
    body { margin: 0; background: #f3f4f6; font-family: system-ui, -apple-system, Segoe UI, Roboto, sans-serif; }
    header { background: #dc2626; color: #fff; padding: 16px; box-shadow: 0 2px 6px rgba(0,0,0,.2); }
    header h1 { margin: 0 auto; max-width: 1100px; font-size: 28px; }
    main { max-width: 1100px; margin: 0 auto; padding: 16px; }
    .controls { background: #fff; border-radius: 8px; padding: 16px; margin-bottom: 24px; display: flex; gap: 16px; flex-wrap: wrap; }
    .controls .field { flex: 1; min-width: 200px; }
    .controls label { display: block; font-weight: 600; color: #374151; margin-bottom: 8px; }
    .controls input, .controls select { width: 100%; padding: 8px; border: 1px solid #d1d5db; border-radius: 4px; box-sizing: border-box; }
    .grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(220px, 1fr)); gap: 16px; }
    .card { background: #fff; border-radius: 8px; overflow: hidden; box-shadow: 0 1px 4px rgba(0,0,0,.15); }
    .card-head { background: #f3f4f6; padding: 12px 16px; display: flex; justify-content: space-between; align-items: center; }
    .card-head h2 { margin: 0; font-size: 20px; text-transform: capitalize; }
    .card-head .num { color: #6b7280; font-weight: 600; }
    .card-img { display: flex; justify-content: center; padding: 16px; }
    .card-img img { width: 128px; height: 128px; object-fit: contain; }
    .badges { display: flex; gap: 8px; flex-wrap: wrap; padding: 0 16px 16px; }
    .badge { color: #fff; padding: 4px 12px; border-radius: 999px; font-size: 14px; text-transform: capitalize; }
    .empty { background: #fef9c3; border: 1px solid #facc15; color: #a16207; padding: 16px; border-radius: 4px; text-align: center; }
    .loading { display: flex; justify-content: center; align-items: center; height: 256px; }
    .spinner { width: 64px; height: 64px; border-radius: 50%; border-top: 4px solid #ef4444; animation: spin 1s linear infinite; }
    @keyframes spin { to { transform: rotate(360deg); } }
    .error-page { display: flex; align-items: center; justify-content: center; min-height: 100vh; padding: 16px; }
    .error { background: #fee2e2; border: 1px solid #f87171; color: #b91c1c; padding: 12px 16px; border-radius: 4px; }
"""

_PAGE_TEMPLATE = r"""<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>Pokémon Explorer</title>
  <style>__STYLE__</style>
</head>
<body>
  <header><h1>Pokémon Explorer</h1></header>
  <main>
    <div class="controls">
      <div class="field">
        <label for="search">Search Pokémon</label>
        <input type="text" id="search" value="__QUERY__" placeholder="Enter Pokémon name..." autocomplete="off" />
      </div>
      <div class="field">
        <label for="type-filter">Filter by Type</label>
        <select id="type-filter">
__OPTIONS__
        </select>
      </div>
    </div>
    <div id="results">
__RESULTS__
    </div>
  </main>
  <script>
    const resultsEl = document.getElementById('results');

    function currentStatus() {
      const el = resultsEl.querySelector('[data-status]');
      return el ? el.dataset.status : '';
    }

    async function refreshResults() {
      const resp = await fetch('results');
      resultsEl.innerHTML = await resp.text();
    }

    // Updates run one after another; only the newest one repaints.
    let pending = Promise.resolve();
    let latestSeq = 0;

    function put(path, body) {
      const seq = ++latestSeq;
      pending = pending.then(async () => {
        await fetch(path, {
          method: 'PUT',
          headers: {'Content-Type': 'application/json'},
          body: JSON.stringify(body),
        });
        if (seq === latestSeq) {
          await refreshResults();
        }
      }).catch((err) => console.error('Update failed:', err));
      return pending;
    }

    document.getElementById('search').addEventListener('input', (e) => {
      put('api/catalog/view/query', {query: e.target.value});
    });
    document.getElementById('type-filter').addEventListener('change', (e) => {
      put('api/catalog/view/type', {type: e.target.value});
    });

    // The type list and entries arrive after the first paint.
    async function pollWhileLoading() {
      if (currentStatus() !== 'loading') return;
      const resp = await fetch('api/catalog/view');
      const view = await resp.json();
      if (view.status === 'loading') {
        setTimeout(pollWhileLoading, 1000);
      } else {
        window.location.reload();
      }
    }
    pollWhileLoading();
  </script>
</body>
</html>
"""

_ERROR_TEMPLATE = r"""<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <title>Pokémon Explorer</title>
  <style>__STYLE__</style>
</head>
<body>
  <div class="error-page">
    <div class="error" role="alert" data-status="error">
      <strong>Error!</strong>
      <span> __ERROR__</span>
    </div>
  </div>
</body>
</html>
"""


def type_color(name: str) -> str:
    return TYPE_COLORS.get(name, DEFAULT_TYPE_COLOR)


def option_label(name: str) -> str:
    """``fire`` -> ``Fire``; only the first letter changes."""
    return name[:1].upper() + name[1:]


def render_type_options(tags: Iterable[str], selected: Optional[str]) -> str:
    lines: List[str] = []
    lines.append(
        '          <option value=""%s>All Types</option>' % (" selected" if not selected else "")
    )
    for tag in tags:
        sel = " selected" if tag == selected else ""
        lines.append(
            f'          <option value="{escape(tag)}"{sel}>{escape(option_label(tag))}</option>'
        )
    return "\n".join(lines)


def render_card(entry: Entry) -> str:
    badges = "".join(
        f'<span class="badge" style="background:{type_color(t.name)}">{escape(t.name)}</span>'
        for t in entry.types
    )
    name = escape(entry.name)
    return (
        '<div class="card">'
        f'<div class="card-head"><h2>{name}</h2><span class="num">#{entry.id}</span></div>'
        f'<div class="card-img"><img src="{escape(entry.sprite_url)}" alt="{name}" /></div>'
        f'<div class="badges">{badges}</div>'
        "</div>"
    )


def render_results(state: ViewState) -> str:
    """Render the part of the page below the controls."""
    status = view_status(state)
    if status is ViewStatus.ERROR:
        return (
            '<div class="error" role="alert" data-status="error">'
            f"<strong>Error!</strong> <span>{escape(state.error or '')}</span></div>"
        )
    if status is ViewStatus.LOADING:
        return '<div class="loading" data-status="loading"><div class="spinner"></div></div>'
    if status is ViewStatus.EMPTY:
        return f'<div class="empty" data-status="empty">{escape(EMPTY_MESSAGE)}</div>'
    cards = "\n".join(render_card(e) for e in state.filtered_entries)
    return f'<div class="grid" data-status="results">\n{cards}\n</div>'


def render_page(state: ViewState) -> str:
    """Render the whole explorer page for the current state.

    A failed load replaces the page with a blocking error message; there
    is no way back except reloading the view.
    """
    if view_status(state) is ViewStatus.ERROR:
        return _ERROR_TEMPLATE.replace("__STYLE__", _STYLE).replace(
            "__ERROR__", escape(state.error or "")
        )
    return (
        _PAGE_TEMPLATE.replace("__STYLE__", _STYLE)
        .replace("__OPTIONS__", render_type_options(state.available_tags, state.selected_tag))
        .replace("__RESULTS__", render_results(state))
        # User text goes in last so it is never scanned for markers.
        .replace("__QUERY__", escape(state.query))
    )
