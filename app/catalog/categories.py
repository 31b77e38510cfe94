"""
Creature categories (elemental types) and their display attributes.

The catalogue knows a fixed set of 18 categories. Each one has a colour,
used to tint a hovered cell, and an icon glyph shown next to an entry's
name and in the detail overlay. Lookups accept any string: a tag outside
the known set resolves to ``DEFAULT_COLOR`` and an empty icon so that a
new category appearing in the remote data never breaks rendering.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional

DEFAULT_COLOR = "transparent"
DEFAULT_ICON = ""


class Category(str, Enum):
    NORMAL = "normal"
    FIRE = "fire"
    WATER = "water"
    ELECTRIC = "electric"
    GRASS = "grass"
    ICE = "ice"
    FIGHTING = "fighting"
    POISON = "poison"
    GROUND = "ground"
    FLYING = "flying"
    PSYCHIC = "psychic"
    BUG = "bug"
    ROCK = "rock"
    GHOST = "ghost"
    DRAGON = "dragon"
    DARK = "dark"
    STEEL = "steel"
    FAIRY = "fairy"


CATEGORY_COLORS: Dict[Category, str] = {
    Category.NORMAL: "#A8A878",
    Category.FIRE: "#F08030",
    Category.WATER: "#6890F0",
    Category.ELECTRIC: "#F8D030",
    Category.GRASS: "#78C850",
    Category.ICE: "#98D8D8",
    Category.FIGHTING: "#C03028",
    Category.POISON: "#A040A0",
    Category.GROUND: "#E0C068",
    Category.FLYING: "#A890F0",
    Category.PSYCHIC: "#F85888",
    Category.BUG: "#A8B820",
    Category.ROCK: "#B8A038",
    Category.GHOST: "#705898",
    Category.DRAGON: "#7038F8",
    Category.DARK: "#705848",
    Category.STEEL: "#B8B8D0",
    Category.FAIRY: "#EE99AC",
}

CATEGORY_ICONS: Dict[Category, str] = {
    Category.NORMAL: "🔘",
    Category.FIRE: "🔥",
    Category.WATER: "💧",
    Category.ELECTRIC: "⚡",
    Category.GRASS: "🌿",
    Category.ICE: "❄️",
    Category.FIGHTING: "🥊",
    Category.POISON: "☠️",
    Category.GROUND: "⛰️",
    Category.FLYING: "🦅",
    Category.PSYCHIC: "🔮",
    Category.BUG: "🐛",
    Category.ROCK: "🪨",
    Category.GHOST: "👻",
    Category.DRAGON: "🐉",
    Category.DARK: "⚫",
    Category.STEEL: "🔩",
    Category.FAIRY: "🧚",
}


def parse_category(tag: Optional[str]) -> Optional[Category]:
    """Return the ``Category`` named by ``tag`` or ``None`` if unknown."""
    if not tag:
        return None
    try:
        return Category(tag)
    except ValueError:
        return None


def category_color(tag: Optional[str]) -> str:
    category = parse_category(tag)
    if category is None:
        return DEFAULT_COLOR
    return CATEGORY_COLORS[category]


def category_icon(tag: Optional[str]) -> str:
    category = parse_category(tag)
    if category is None:
        return DEFAULT_ICON
    return CATEGORY_ICONS[category]


def category_icons(tags: List[str]) -> List[str]:
    """Icons for an ordered list of tags; unknown tags map to ``""``."""
    return [category_icon(t) for t in tags]
