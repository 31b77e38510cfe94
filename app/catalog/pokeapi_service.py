"""
PokeAPI integration for the catalogue.  This module is the only place
that talks to the remote creature API.  It exposes three coroutines:

* ``list_entries()`` — walk the whole ``/pokemon`` index and resolve
  every item's detail document in a parallel fan-out.  Results are
  mapped into the ``Entry`` schema.

* ``get_abilities()`` / ``get_moves()`` — fetch one entry's detail and
  flatten its abilities or moves into ``{name}`` records.

Requests are anonymous and use only the Python standard library.  The
blocking calls run in worker threads so the event loop is never held up.
None of these functions raise: any failure is logged and reported to the
caller as an empty list, which the view treats as a normal, renderable
state.
"""

from __future__ import annotations

import asyncio
import functools
import json
import logging
import urllib.parse
import urllib.request
from typing import Any, Dict, List, Optional, Tuple

from ..config import (
    POKEAPI_BASE_URL,
    POKEAPI_INDEX_LIMIT,
    POKEAPI_MAX_CONCURRENCY,
    POKEAPI_TIMEOUT,
)
from .schemas import AbilityRef, Entry, MoveRef, Stat


logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


def _http_get_json(url: str) -> Optional[dict]:
    """Perform an HTTP GET and return parsed JSON or ``None`` on failure.

    Network errors, non-200 statuses and undecodable bodies are logged
    and ``None`` is returned.  A body that decodes to anything but a JSON
    object is rejected the same way, so callers can rely on ``dict``.
    """
    try:
        request = urllib.request.Request(
            url,
            headers={
                'User-Agent': 'creature-catalog/1.0 (+https://pokeapi.co)',
                'Accept': 'application/json',
            },
        )
        with urllib.request.urlopen(request, timeout=POKEAPI_TIMEOUT) as response:
            if response.status != 200:
                logger.warning(
                    "PokeAPI request to %s returned status %s", url, response.status
                )
                return None
            data = response.read().decode('utf-8', errors='ignore')
            parsed = json.loads(data)
    except Exception as exc:
        logger.error("Error fetching %s: %s", url, exc)
        return None
    if not isinstance(parsed, dict):
        logger.error("Unexpected payload from %s: %s", url, type(parsed).__name__)
        return None
    return parsed


async def _get_json(url: str) -> Optional[dict]:
    return await asyncio.to_thread(_http_get_json, url)


# (ability names, move names) of one entry
DetailNames = Tuple[Tuple[str, ...], Tuple[str, ...]]

# Flattened detail names keyed by lowercased entry name. Only successful
# fetches are cached; raw documents are never kept.
_names_cache: Dict[str, DetailNames] = {}
# Detail requests in flight, shared by concurrent callers for the same name
_inflight: Dict[str, asyncio.Future] = {}


def _index_url() -> str:
    params = {'limit': max(1, int(POKEAPI_INDEX_LIMIT)), 'offset': 0}
    return f"{POKEAPI_BASE_URL}/pokemon?{urllib.parse.urlencode(params)}"


def _detail_url(name: str) -> str:
    return f"{POKEAPI_BASE_URL}/pokemon/{urllib.parse.quote(name.strip().lower())}"


def _artwork_url(sprites: Any) -> Optional[str]:
    """Dig ``sprites.other["official-artwork"].front_default`` out safely."""
    if not isinstance(sprites, dict):
        return None
    other = sprites.get('other')
    if not isinstance(other, dict):
        return None
    artwork = other.get('official-artwork')
    if not isinstance(artwork, dict):
        return None
    url = artwork.get('front_default')
    return url if isinstance(url, str) and url else None


def parse_entry(data: dict) -> Optional[Entry]:
    """Map a ``/pokemon/{name}`` document to an ``Entry``.

    Only the name is required.  Malformed ``types`` or ``stats`` items are
    skipped rather than rejecting the whole entry.
    """
    name = data.get('name')
    if not name or not isinstance(name, str):
        return None
    types: List[str] = []
    for slot in data.get('types') or []:
        if isinstance(slot, dict):
            tinfo = slot.get('type')
            if isinstance(tinfo, dict) and isinstance(tinfo.get('name'), str):
                types.append(tinfo['name'])
    stats: List[Stat] = []
    for item in data.get('stats') or []:
        if not isinstance(item, dict):
            continue
        sinfo = item.get('stat')
        value = item.get('base_stat')
        if isinstance(sinfo, dict) and isinstance(sinfo.get('name'), str) and isinstance(value, int):
            stats.append(Stat(name=sinfo['name'], base_stat=value))
    return Entry(
        name=name,
        types=types,
        stats=stats,
        image_url=_artwork_url(data.get('sprites')),
    )


def _flatten_names(data: dict, list_key: str, item_key: str) -> List[str]:
    names: List[str] = []
    for item in data.get(list_key) or []:
        if isinstance(item, dict):
            info = item.get(item_key)
            if isinstance(info, dict) and isinstance(info.get('name'), str):
                names.append(info['name'])
    return names


def _detail_names(data: dict) -> DetailNames:
    return (
        tuple(_flatten_names(data, 'abilities', 'ability')),
        tuple(_flatten_names(data, 'moves', 'move')),
    )


async def _fetch_index() -> Optional[List[str]]:
    """Collect every detail URL of the remote index, following ``next``."""
    urls: List[str] = []
    next_url: Optional[str] = _index_url()
    seen = set()
    while next_url:
        if next_url in seen:
            logger.warning("PokeAPI index loops back to %s; stopping", next_url)
            break
        seen.add(next_url)
        page = await _get_json(next_url)
        if page is None or not isinstance(page.get('results'), list):
            return None
        for item in page['results']:
            if isinstance(item, dict) and isinstance(item.get('url'), str):
                urls.append(item['url'])
        nxt = page.get('next')
        next_url = nxt if isinstance(nxt, str) and nxt else None
    return urls


async def list_entries() -> List[Entry]:
    """Fetch the full catalogue.

    All detail documents are requested concurrently, with at most
    ``POKEAPI_MAX_CONCURRENCY`` in flight.  The load is all-or-nothing: if
    the index or any detail cannot be fetched or parsed, an empty list is
    returned.  The ability and move names of every loaded entry are kept
    so that opening it later needs no request.
    """
    urls = await _fetch_index()
    if urls is None:
        logger.error("Error fetching PokeAPI index; catalogue will be empty")
        return []
    semaphore = asyncio.Semaphore(max(1, POKEAPI_MAX_CONCURRENCY))

    async def _fetch(url: str) -> Optional[dict]:
        async with semaphore:
            return await _get_json(url)

    documents = await asyncio.gather(*(_fetch(u) for u in urls))
    entries: List[Entry] = []
    names: Dict[str, DetailNames] = {}
    for url, doc in zip(urls, documents):
        entry = parse_entry(doc) if doc is not None else None
        if entry is None:
            logger.error("Error fetching entry detail from %s; catalogue will be empty", url)
            return []
        names[entry.name.lower()] = _detail_names(doc)
        entries.append(entry)
    _names_cache.update(names)
    logger.info("Loaded %d catalogue entries", len(entries))
    return entries


async def _fetch_detail_names(key: str) -> Optional[DetailNames]:
    data = await _get_json(_detail_url(key))
    if data is None:
        return None
    names = _detail_names(data)
    _names_cache[key] = names
    return names


def _forget_inflight(key: str, task: asyncio.Future) -> None:
    if _inflight.get(key) is task:
        del _inflight[key]


async def _get_detail_names(name: str) -> Optional[DetailNames]:
    """Ability and move names of one entry, fetched at most once.

    Concurrent callers for the same name share a single request.  A failed
    request is not remembered, so the next call tries again.
    """
    key = (name or '').strip().lower()
    if not key:
        return None
    if key in _names_cache:
        return _names_cache[key]
    task = _inflight.get(key)
    if task is None:
        task = asyncio.ensure_future(_fetch_detail_names(key))
        _inflight[key] = task
        task.add_done_callback(functools.partial(_forget_inflight, key))
    return await asyncio.shield(task)


async def get_abilities(name: str) -> List[AbilityRef]:
    """Return the abilities of the named entry, or ``[]`` on failure."""
    names = await _get_detail_names(name)
    if names is None:
        return []
    return [AbilityRef(name=n) for n in names[0]]


async def get_moves(name: str) -> List[MoveRef]:
    """Return the moves of the named entry, or ``[]`` on failure."""
    names = await _get_detail_names(name)
    if names is None:
        return []
    return [MoveRef(name=n) for n in names[1]]


def clear_cache() -> None:
    _names_cache.clear()
    _inflight.clear()
