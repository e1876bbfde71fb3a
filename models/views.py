"""
Derived views - read-only projections of the collection.

Nothing here is stored or cached. Every function takes the current assets
and filter state and returns a new list, leaving its inputs untouched.
"""

import unicodedata
from dataclasses import dataclass, field
from typing import Iterable, Literal

from .asset import ModelAsset
from .category import ALL_CATEGORY_ID, Category

SortOption = Literal["newest", "oldest", "alphabetical"]
SORT_OPTIONS: tuple[str, ...] = ("newest", "oldest", "alphabetical")

# Labels shown next to the sort selector
SORT_LABELS = {
    "newest": "Chronological",
    "oldest": "Historical",
    "alphabetical": "Index A-Z",
}

PLACEHOLDER_IMAGE = "https://picsum.photos/seed/{id}/400/300"


def collation_key(text: str) -> tuple:
    """
    Sort key approximating a locale-aware string compare.

    Letters compare case- and accent-insensitively first ("apple" before
    "Banana", "éclair" next to "eclair"); accents and then case only break
    ties, lowercase first.
    """
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (base.casefold(), decomposed.casefold(), text.swapcase())


def available_tags(assets: Iterable[ModelAsset]) -> list[str]:
    """Every tag used by any asset, deduplicated and sorted."""
    tags = set()
    for asset in assets:
        tags.update(asset.tags)
    return sorted(tags)


def combined_tags(available: Iterable[str], selected: Iterable[str]) -> list[str]:
    """Tag vocabulary for the form: existing tags plus the ones being added."""
    return sorted(set(available) | set(selected))


def toggle_tag(selected: list[str], tag: str) -> list[str]:
    """Return a copy of `selected` with `tag` added or removed."""
    if tag in selected:
        return [t for t in selected if t != tag]
    return [*selected, tag]


def matches_category(asset: ModelAsset, category_filter: str) -> bool:
    return category_filter == ALL_CATEGORY_ID or asset.category_id == category_filter


def matches_search(asset: ModelAsset, search_text: str) -> bool:
    if not search_text:
        return True
    needle = search_text.lower()
    return needle in asset.name.lower() or needle in asset.description.lower()


def matches_tags(asset: ModelAsset, tag_filter: Iterable[str]) -> bool:
    # AND semantics: every selected tag must be on the asset
    return all(tag in asset.tags for tag in tag_filter)


def sort_assets(assets: list[ModelAsset], sort_option: str) -> list[ModelAsset]:
    """Stable sort by the given option; unknown options keep list order."""
    if sort_option == "newest":
        return sorted(assets, key=lambda a: a.created_at, reverse=True)
    if sort_option == "oldest":
        return sorted(assets, key=lambda a: a.created_at)
    if sort_option == "alphabetical":
        return sorted(assets, key=lambda a: collation_key(a.name))
    return list(assets)


def filtered_and_sorted(
    assets: Iterable[ModelAsset],
    category_filter: str = ALL_CATEGORY_ID,
    tag_filter: Iterable[str] = (),
    search_text: str = "",
    sort_option: str = "newest",
) -> list[ModelAsset]:
    """
    The visible gallery.

    An asset is shown when it passes the category, search and tag
    predicates. `sorted` is stable, and `reverse=True` keeps equal keys in
    their original order too, so ties never reshuffle.
    """
    tag_filter = list(tag_filter)
    visible = [
        asset
        for asset in assets
        if matches_category(asset, category_filter)
        and matches_search(asset, search_text)
        and matches_tags(asset, tag_filter)
    ]
    return sort_assets(visible, sort_option)


@dataclass
class ViewFilter:
    """The gallery's filter and sort controls."""

    category_id: str = ALL_CATEGORY_ID
    tags: list[str] = field(default_factory=list)
    search: str = ""
    sort: str = "newest"

    @property
    def is_active(self) -> bool:
        """True when any filter narrows the gallery."""
        return bool(self.search or self.category_id != ALL_CATEGORY_ID or self.tags)

    def apply(self, assets: Iterable[ModelAsset]) -> list[ModelAsset]:
        return filtered_and_sorted(
            assets, self.category_id, self.tags, self.search, self.sort
        )


def category_for(asset: ModelAsset, categories: list[Category]) -> Category:
    """The asset's category, or the first category if the id is dangling."""
    for category in categories:
        if category.id == asset.category_id:
            return category
    return categories[0]


def thumbnail_url(asset: ModelAsset) -> str:
    """The asset's image, or a placeholder that is stable per asset."""
    return asset.image_url or PLACEHOLDER_IMAGE.format(id=asset.id)


def empty_state_message(view_filter: ViewFilter) -> str:
    if view_filter.is_active:
        return "No models match your current filters. Clear them to reveal your archive."
    return (
        "Your collection is currently empty. "
        "Start curating your studio by adding high-end assets."
    )
