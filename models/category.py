"""
Category model - a named, colored bucket for assets.

A fixed set of built-in categories always exists. Users can append their
own; nothing ever deletes one.
"""

import random
import re
from dataclasses import dataclass
from typing import Optional

from .records import read_field


@dataclass
class Category:
    """A grouping bucket shown as a colored chip."""

    id: str
    name: str
    color: str

    def to_dict(self) -> dict:
        """Serialize category to dictionary."""
        return {"id": self.id, "name": self.name, "color": self.color}

    @classmethod
    def from_dict(cls, data: dict) -> "Category":
        """Deserialize category from dictionary."""
        return cls(
            id=read_field(data, "id", str),
            name=read_field(data, "name", str),
            color=read_field(data, "color", str, default="#94a3b8"),
        )


# Order matters: "all" is first and doubles as the render-time fallback
DEFAULT_CATEGORIES = (
    Category(id="all", name="All Assets", color="#6366f1"),
    Category(id="cars", name="Cars", color="#ef4444"),
    Category(id="characters", name="Characters", color="#10b981"),
    Category(id="weapons", name="Weapons", color="#8b5cf6"),
    Category(id="props", name="Props", color="#ec4899"),
    Category(id="environments", name="Environments", color="#06b6d4"),
)

CATEGORY_COLORS = [
    "#ef4444",  # red
    "#f59e0b",  # amber
    "#10b981",  # emerald
    "#06b6d4",  # cyan
    "#6366f1",  # indigo
    "#8b5cf6",  # violet
    "#ec4899",  # pink
    "#94a3b8",  # slate
]

ALL_CATEGORY_ID = "all"
LEGACY_CATEGORY_IDS = frozenset({"humans", "non-humans"})
CHARACTERS_CATEGORY_ID = "characters"
CORE_OR_LEGACY_IDS = frozenset(c.id for c in DEFAULT_CATEGORIES) | LEGACY_CATEGORY_IDS

_WHITESPACE = re.compile(r"\s+")


def default_categories() -> list[Category]:
    """Fresh copies of the built-ins, safe to append to."""
    return [Category(c.id, c.name, c.color) for c in DEFAULT_CATEGORIES]


def category_id_for(name: str) -> str:
    """Lower-case the name and collapse whitespace runs into one hyphen."""
    return _WHITESPACE.sub("-", name.lower())


def find_by_name(categories: list[Category], name: str) -> Optional[Category]:
    """Case-insensitive lookup by display name."""
    wanted = name.lower()
    for category in categories:
        if category.name.lower() == wanted:
            return category
    return None


def pick_color(
    categories: list[Category],
    palette: list[str] = CATEGORY_COLORS,
    rng: Optional[random.Random] = None,
) -> str:
    """
    Choose a color for a new category.

    Unused palette colors are preferred. Once the palette is exhausted, any
    color except the one on the most recently added category is allowed, so
    two new categories in a row never share a color. A palette of one color
    always returns that color.
    """
    rng = rng or random.Random()
    used = {c.color for c in categories}
    unused = [c for c in palette if c not in used]
    if unused:
        return rng.choice(unused)

    last_color = categories[-1].color if categories else None
    recyclable = [c for c in palette if c != last_color]
    if not recyclable:
        return palette[0]
    return rng.choice(recyclable)


def allocate_category(
    categories: list[Category],
    name: str,
    palette: list[str] = CATEGORY_COLORS,
    rng: Optional[random.Random] = None,
) -> str:
    """
    Return the id of the category called `name`, creating it if needed.

    Matching is case-insensitive, so "Vehicles" and "vehicles" map to the
    same category. New categories are appended to `categories` in place.
    """
    name = name.strip()
    if not name:
        raise ValueError("Category must have a name")

    existing = find_by_name(categories, name)
    if existing:
        return existing.id

    # "Sci Fi" and "sci-fi" differ by name but share an id; ids stay unique
    new_id = category_id_for(name)
    if any(c.id == new_id for c in categories):
        return new_id

    new_category = Category(
        id=new_id,
        name=name,
        color=pick_color(categories, palette, rng),
    )
    categories.append(new_category)
    return new_category.id
