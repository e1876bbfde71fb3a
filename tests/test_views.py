"""
Test: Derived Views

Verifies that:
1. The tag vocabulary is the sorted union of all tags
2. Category, search and tag predicates are all enforced (tags use AND)
3. No filters returns every asset
4. Sorting by newest/oldest/alphabetical, stable on ties
5. Inputs are never mutated

Run: python tests/test_views.py
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from models.asset import ModelAsset
from models.category import default_categories
from models.views import (
    ViewFilter,
    available_tags,
    category_for,
    collation_key,
    empty_state_message,
    filtered_and_sorted,
    thumbnail_url,
    toggle_tag,
)


def make_asset(asset_id, name, created_at, category_id="props", tags=(), description=""):
    return ModelAsset(
        id=asset_id,
        name=name,
        source_url=f"https://models.example/{asset_id}",
        image_url=f"https://img.example/{asset_id}.png",
        category_id=category_id,
        description=description,
        tags=list(tags),
        created_at=created_at,
    )


ASSETS = [
    make_asset("a", "Plasma Rifle", 300, "weapons", ["sci-fi", "military"], "Glowing coils"),
    make_asset("b", "Oak Barrel", 100, "props", ["fantasy"], "A sturdy barrel"),
    make_asset("c", "Hover Tank", 200, "cars", ["sci-fi", "military", "heavy"]),
    make_asset("d", "elven bow", 250, "weapons", ["fantasy"], "Carved from SILVER wood"),
]


def test_available_tags():
    assert available_tags(ASSETS) == ["fantasy", "heavy", "military", "sci-fi"]
    assert available_tags([]) == []
    print("✓ Tag vocabulary")


def test_no_filters_returns_everything():
    result = filtered_and_sorted(ASSETS, "all", [], "", "newest")
    assert {a.id for a in result} == {"a", "b", "c", "d"}
    print("✓ No filters shows all assets")


def test_category_filter():
    result = filtered_and_sorted(ASSETS, "weapons")
    assert [a.id for a in result] == ["a", "d"]
    assert filtered_and_sorted(ASSETS, "environments") == []
    print("✓ Category predicate")


def test_search_is_case_insensitive_on_name_and_description():
    assert [a.id for a in filtered_and_sorted(ASSETS, search_text="RIFLE")] == ["a"]
    assert [a.id for a in filtered_and_sorted(ASSETS, search_text="silver")] == ["d"]
    assert filtered_and_sorted(ASSETS, search_text="zeppelin") == []
    print("✓ Search predicate")


def test_tags_use_and_semantics():
    result = filtered_and_sorted(ASSETS, tag_filter=["sci-fi", "military"])
    assert [a.id for a in result] == ["a", "c"]

    result = filtered_and_sorted(ASSETS, tag_filter=["sci-fi", "fantasy"])
    assert result == []
    print("✓ Tag predicate (AND)")


def test_predicates_combine():
    view = ViewFilter(category_id="cars", tags=["military"], search="tank")
    assert [a.id for a in view.apply(ASSETS)] == ["c"]

    for asset in filtered_and_sorted(ASSETS, "weapons", ["fantasy"], "bow"):
        assert asset.category_id == "weapons"
        assert "fantasy" in asset.tags
        assert "bow" in asset.name.lower() or "bow" in asset.description.lower()
    print("✓ All predicates enforced together")


def test_sort_newest_and_oldest():
    assets = [make_asset("x", "X", 100), make_asset("y", "Y", 300), make_asset("z", "Z", 200)]

    newest = filtered_and_sorted(assets, sort_option="newest")
    assert [a.created_at for a in newest] == [300, 200, 100]

    oldest = filtered_and_sorted(assets, sort_option="oldest")
    assert [a.created_at for a in oldest] == [100, 200, 300]
    print("✓ Chronological sorts")


def test_sort_alphabetical_is_locale_aware():
    assets = [make_asset("1", "Banana", 1), make_asset("2", "apple", 2)]
    result = filtered_and_sorted(assets, sort_option="alphabetical")
    assert [a.name for a in result] == ["apple", "Banana"]

    assert collation_key("éclair") < collation_key("Fig")
    assert collation_key("a") < collation_key("A")
    print("✓ Alphabetical sort")


def test_sort_is_stable_on_ties():
    assets = [make_asset("p", "Same", 500), make_asset("q", "Same", 500), make_asset("r", "Same", 500)]
    for option in ("newest", "oldest", "alphabetical"):
        assert [a.id for a in filtered_and_sorted(assets, sort_option=option)] == ["p", "q", "r"]
    print("✓ Ties keep relative order")


def test_inputs_not_mutated():
    assets = list(ASSETS)
    tags = ["fantasy"]
    filtered_and_sorted(assets, "all", tags, "", "alphabetical")
    assert assets == ASSETS
    assert tags == ["fantasy"]
    print("✓ Inputs untouched")


def test_toggle_tag():
    selected = toggle_tag([], "sci-fi")
    assert selected == ["sci-fi"]
    assert toggle_tag(selected, "fantasy") == ["sci-fi", "fantasy"]
    assert toggle_tag(selected, "sci-fi") == []
    assert selected == ["sci-fi"]
    print("✓ Tag toggling")


def test_render_helpers():
    categories = default_categories()
    orphan = make_asset("o", "Orphan", 1, category_id="humans")
    assert category_for(orphan, categories).id == "all"
    assert category_for(ASSETS[0], categories).id == "weapons"

    blank = make_asset("n", "No Image", 1)
    blank.image_url = ""
    assert thumbnail_url(blank) == "https://picsum.photos/seed/n/400/300"
    assert thumbnail_url(ASSETS[0]) == "https://img.example/a.png"

    assert "empty" in empty_state_message(ViewFilter())
    assert "match" in empty_state_message(ViewFilter(search="x"))
    print("✓ Render helpers")


if __name__ == "__main__":
    print("\n" + "=" * 60)
    print(" DERIVED VIEW TESTS")
    print("=" * 60 + "\n")

    test_available_tags()
    test_no_filters_returns_everything()
    test_category_filter()
    test_search_is_case_insensitive_on_name_and_description()
    test_tags_use_and_semantics()
    test_predicates_combine()
    test_sort_newest_and_oldest()
    test_sort_alphabetical_is_locale_aware()
    test_sort_is_stable_on_ties()
    test_inputs_not_mutated()
    test_toggle_tag()
    test_render_helpers()

    print("\n✅ ALL TESTS PASSED\n")
