"""Pytest fixtures for the catalogue tests."""

from __future__ import annotations

import asyncio
from typing import Dict, List, Optional

import pytest

from app.catalog.schemas import AbilityRef, Entry, MoveRef, Stat


def make_entry(name: str, types: Optional[List[str]] = None) -> Entry:
    return Entry(
        name=name,
        types=types if types is not None else ["normal"],
        stats=[Stat(name="hp", base_stat=45), Stat(name="speed", base_stat=60)],
        image_url=f"https://img.example/{name}.png",
    )


class FakeSource:
    """In-memory data source.

    Detail fetches for a name listed in ``gates`` block until the matching
    ``asyncio.Event`` is set, which lets tests control resolution order.
    """

    def __init__(self, entries: Optional[List[Entry]] = None) -> None:
        self.entries = entries or []
        self.gates: Dict[str, asyncio.Event] = {}
        self.calls: List[str] = []

    def gate(self, name: str) -> asyncio.Event:
        event = asyncio.Event()
        self.gates[name] = event
        return event

    async def _wait(self, name: str) -> None:
        if name in self.gates:
            await self.gates[name].wait()

    async def list_entries(self) -> List[Entry]:
        return list(self.entries)

    async def get_abilities(self, name: str) -> List[AbilityRef]:
        self.calls.append(f"abilities:{name}")
        await self._wait(name)
        return [AbilityRef(name=f"{name}-ability")]

    async def get_moves(self, name: str) -> List[MoveRef]:
        self.calls.append(f"moves:{name}")
        await self._wait(name)
        return [MoveRef(name=f"{name}-move-1"), MoveRef(name=f"{name}-move-2")]


@pytest.fixture
def twenty_entries() -> List[Entry]:
    return [make_entry(f"mon{i:02d}") for i in range(20)]


@pytest.fixture
def starters() -> List[Entry]:
    return [
        make_entry("bulbasaur", ["grass", "poison"]),
        make_entry("charmander", ["fire"]),
        make_entry("squirtle", ["water"]),
        make_entry("pikachu", ["electric"]),
        make_entry("raichu", ["electric"]),
        make_entry("charizard", ["fire", "flying"]),
    ]


@pytest.fixture
def fake_source(starters: List[Entry]) -> FakeSource:
    return FakeSource(starters)
