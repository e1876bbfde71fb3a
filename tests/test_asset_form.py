"""
Test: Asset Form Session

Verifies that:
1. New drafts default to the first real category; edits prefill
2. Typed tags are trimmed, lower-cased and not duplicated
3. Suggestions merge title, category (created if unknown) and tags
4. Missing text, missing key and failures leave the draft unchanged
5. A suggestion finishing after the form closed is discarded
6. Submit validates, saves and closes
7. Submitting an edit of a deleted asset reports it and saves nothing

Run: python tests/test_asset_form.py
"""

import asyncio
import random
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from models.asset import AssetData
from models.asset_form import ASSET_GONE_MESSAGE, NEED_TEXT_MESSAGE, AssetForm
from models.storage import MemoryStore
from models.vault import Vault
from skills.suggest_metadata import (
    MetadataSuggester,
    MetadataSuggestion,
    SuggestionError,
)


class FakeSuggester:
    """Returns a fixed suggestion, or raises, and records prompts."""

    def __init__(self, result=None, error=None, gate=None):
        self.result = result
        self.error = error
        self.gate = gate
        self.prompts = []

    async def suggest(self, description, existing_categories):
        self.prompts.append((description, list(existing_categories)))
        if self.gate is not None:
            await self.gate.wait()
        if self.error:
            raise self.error
        return self.result


SUGGESTION = MetadataSuggestion(
    title="Hover Tank",
    category="Vehicles",
    tags=["Sci-Fi", "Heavy", "sci-fi"],
    reasoning="Anti-grav armor",
)


def new_form():
    vault = Vault.load(MemoryStore(), rng=random.Random(3))
    return AssetForm(vault)


def test_open_defaults_and_prefill():
    form = new_form()
    form.open()
    assert form.is_open and not form.is_editing
    assert form.title == "Add New Asset"
    assert form.data.category_id == "cars"

    asset = form.vault.add_asset(AssetData(
        name="Sword", source_url="https://x", image_url="https://y",
        category_id="weapons", tags=["steel"],
    ))
    form.open(asset)
    assert form.title == "Edit Asset"
    assert form.data.name == "Sword"
    assert form.data.category_id == "weapons"

    # The draft is a copy, editing it does not touch the saved asset
    form.add_tag("rusty")
    assert asset.tags == ["steel"]
    print("✓ Defaults and prefill")


def test_tags():
    form = new_form()
    form.open()
    assert form.add_tag("  Cyberpunk ") is True
    assert form.add_tag("cyberpunk") is False
    assert form.add_tag("   ") is False
    form.toggle_tag("stylized")
    form.toggle_tag("cyberpunk")
    assert form.data.tags == ["stylized"]
    assert form.tag_choices() == ["stylized"]
    print("✓ Tag editing")


def test_suggestion_merges_into_draft():
    form = new_form()
    form.open()
    form.data.name = "tank"
    form.data.description = "floating armored tank"
    form.data.tags = ["heavy", "military"]
    suggester = FakeSuggester(result=SUGGESTION)

    applied = asyncio.run(form.suggest(suggester))

    assert applied is True
    prompt, categories = suggester.prompts[0]
    assert prompt == "floating armored tank"
    assert "All Assets" in categories and "Weapons" in categories

    assert form.data.name == "Hover Tank"
    assert form.data.category_id == "vehicles"
    assert form.vault.get_category("vehicles").name == "Vehicles"
    assert form.data.tags == ["heavy", "military", "sci-fi"]
    assert form.reasoning == "Anti-grav armor"
    assert form.error == ""
    print("✓ Suggestion merged")


def test_suggestion_reuses_existing_category():
    form = new_form()
    form.open()
    form.data.name = "jeep"
    before = len(form.vault.categories)
    suggestion = MetadataSuggestion(title="Jeep", category="cars", tags=[])

    asyncio.run(form.suggest(FakeSuggester(result=suggestion)))

    assert form.data.category_id == "cars"
    assert len(form.vault.categories) == before
    print("✓ Existing category reused")


def test_name_is_prompt_fallback():
    form = new_form()
    form.open()
    form.data.name = "Oak Barrel"
    suggester = FakeSuggester(result=SUGGESTION)
    asyncio.run(form.suggest(suggester))
    assert suggester.prompts[0][0] == "Oak Barrel"
    print("✓ Name used when description is empty")


def test_no_text_blocks_suggestion():
    form = new_form()
    form.open()
    suggester = FakeSuggester(result=SUGGESTION)
    assert asyncio.run(form.suggest(suggester)) is False
    assert form.error == NEED_TEXT_MESSAGE
    assert suggester.prompts == []
    print("✓ Empty draft cannot ask for suggestions")


def test_missing_key_prompts_for_configuration():
    form = new_form()
    form.open()
    form.data.name = "Tank"
    assert asyncio.run(form.suggest(MetadataSuggester(api_key=None))) is False
    assert form.needs_api_key is True
    assert "API Key" in form.error
    assert form.data.name == "Tank"
    print("✓ Missing key asks for configuration")


def test_failure_leaves_draft_unchanged():
    form = new_form()
    form.open()
    form.data.name = "Tank"
    form.data.tags = ["heavy"]
    before = len(form.vault.categories)

    applied = asyncio.run(form.suggest(FakeSuggester(error=SuggestionError("boom"))))

    assert applied is False
    assert form.error == SuggestionError.MESSAGE
    assert form.data.name == "Tank"
    assert form.data.tags == ["heavy"]
    assert len(form.vault.categories) == before
    assert form.is_suggesting is False
    print("✓ Failure changes nothing")


def test_stale_suggestion_discarded():
    async def scenario():
        form = new_form()
        form.open()
        form.data.name = "tank"
        gate = asyncio.Event()
        task = asyncio.create_task(form.suggest(FakeSuggester(result=SUGGESTION, gate=gate)))
        await asyncio.sleep(0)
        assert form.is_suggesting

        # User closes the modal and starts a new asset before Gemini answers
        form.close()
        form.open()
        gate.set()
        applied = await task
        return form, applied

    form, applied = asyncio.run(scenario())
    assert applied is False
    assert form.data.name == ""
    assert form.vault.get_category("vehicles") is None
    assert form.is_suggesting is False
    print("✓ Stale suggestion dropped")


def test_submit():
    form = new_form()
    form.open()
    form.data.name = "Sword"
    assert form.submit() is None
    assert form.error == "Please fill in all required fields (Name, Source, Image)."
    assert form.is_open and form.vault.assets == ()

    form.data.source_url = "https://x"
    form.data.image_url = "https://y"
    saved = form.submit()
    assert saved is not None and not form.is_open
    assert form.vault.assets[0].id == saved.id

    form.open(saved)
    form.data.description = "A fine blade"
    updated = form.submit()
    assert updated.id == saved.id
    assert form.vault.get_asset(saved.id).description == "A fine blade"
    assert len(form.vault.assets) == 1
    print("✓ Submit validates, saves and closes")


def test_submit_after_asset_deleted():
    form = new_form()
    asset = form.vault.add_asset(AssetData(
        name="Sword", source_url="https://x", image_url="https://y",
    ))
    form.open(asset)
    form.vault.delete_asset(asset.id, lambda a: True)

    form.data.name = "Longsword"
    assert form.submit() is None
    assert form.error == ASSET_GONE_MESSAGE
    assert form.is_open
    assert form.vault.assets == ()

    # The deleted asset is reported even when the draft is incomplete
    form.data.name = ""
    form.submit()
    assert form.error == ASSET_GONE_MESSAGE
    print("✓ Editing a deleted asset is reported")


if __name__ == "__main__":
    print("\n" + "=" * 60)
    print(" ASSET FORM TESTS")
    print("=" * 60 + "\n")

    test_open_defaults_and_prefill()
    test_tags()
    test_suggestion_merges_into_draft()
    test_suggestion_reuses_existing_category()
    test_name_is_prompt_fallback()
    test_no_text_blocks_suggestion()
    test_missing_key_prompts_for_configuration()
    test_failure_leaves_draft_unchanged()
    test_stale_suggestion_discarded()
    test_submit()
    test_submit_after_asset_deleted()

    print("\n✅ ALL TESTS PASSED\n")
