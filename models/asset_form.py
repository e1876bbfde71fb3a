"""
Asset form - the add/edit session for a single asset.

The form owns a draft (AssetData) that is only written to the vault on
submit. AI suggestions merge into the draft; a suggestion that arrives
after the form was closed or reopened belongs to a different session and
is dropped.
"""

import logging
from typing import Optional

from skills.suggest_metadata import MissingApiKeyError, SuggestionError

from .asset import AssetData, AssetValidationError, ModelAsset, normalize_tags
from .category import ALL_CATEGORY_ID
from .vault import Vault
from .views import available_tags, combined_tags, toggle_tag

logger = logging.getLogger(__name__)

NEED_TEXT_MESSAGE = "Provide at least a name or description for AI suggestions."
ASSET_GONE_MESSAGE = "This asset was removed while you were editing it."


class AssetForm:
    """Draft state for adding a new asset or editing an existing one."""

    def __init__(self, vault: Vault):
        self.vault = vault
        self.is_open = False
        self.editing_id: Optional[str] = None
        self.data = AssetData()
        self.error = ""
        self.needs_api_key = False
        self.reasoning: Optional[str] = None
        self.is_suggesting = False
        # Bumped on every open/close; suggestions carry the value they started with
        self._session = 0

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    @property
    def title(self) -> str:
        return "Edit Asset" if self.is_editing else "Add New Asset"

    def default_category_id(self) -> str:
        categories = self.vault.categories
        return categories[1].id if len(categories) > 1 else ALL_CATEGORY_ID

    def open(self, asset: Optional[ModelAsset] = None) -> None:
        """Start a session, prefilled from `asset` when editing."""
        self._session += 1
        self.is_open = True
        self.reasoning = None
        self.error = ""
        self.needs_api_key = False
        self.is_suggesting = False
        if asset is not None:
            self.editing_id = asset.id
            self.data = asset.to_data()
        else:
            self.editing_id = None
            self.data = AssetData(category_id=self.default_category_id())

    def close(self) -> None:
        self._session += 1
        self.is_open = False
        self.editing_id = None
        self.is_suggesting = False

    # =========================================================================
    # Tags
    # =========================================================================

    def tag_choices(self) -> list[str]:
        """Existing vault tags plus anything already picked in this draft."""
        return combined_tags(available_tags(self.vault.assets), self.data.tags)

    def toggle_tag(self, tag: str) -> None:
        self.data.tags = toggle_tag(self.data.tags, tag)

    def add_tag(self, text: str) -> bool:
        """Add a typed tag. Blank or already selected tags are ignored."""
        clean = text.strip().lower()
        if not clean or clean in self.data.tags:
            return False
        self.data.tags = [*self.data.tags, clean]
        return True

    # =========================================================================
    # AI suggestions
    # =========================================================================

    async def suggest(self, suggester) -> bool:
        """
        Ask the suggester for metadata and merge it into the draft.

        Returns True when a suggestion was applied. Missing text, a missing
        key or a failed call set `error` and leave the draft as it was.
        """
        prompt = self.data.description or self.data.name
        if not prompt.strip():
            self.error = NEED_TEXT_MESSAGE
            return False

        session = self._session
        self.is_suggesting = True
        self.error = ""
        self.needs_api_key = False
        try:
            result = await suggester.suggest(prompt, self.vault.category_names())
        except MissingApiKeyError as e:
            self._finish(session, error=str(e), needs_api_key=True)
            return False
        except SuggestionError:
            self._finish(session, error=SuggestionError.MESSAGE)
            return False

        if session != self._session:
            logger.info("Discarding suggestion for a closed form")
            return False
        self._finish(session)
        self.apply_suggestion(result)
        return True

    def _finish(self, session: int, error: str = "", needs_api_key: bool = False) -> None:
        if session != self._session:
            return
        self.is_suggesting = False
        self.error = error
        self.needs_api_key = needs_api_key

    def apply_suggestion(self, suggestion) -> None:
        """Merge title, category and tags from a suggestion into the draft."""
        self.reasoning = getattr(suggestion, "reasoning", None)
        if suggestion.title:
            self.data.name = suggestion.title
        if suggestion.category and suggestion.category.strip():
            self.data.category_id = self.vault.add_category(suggestion.category)
        if suggestion.tags:
            self.data.tags = normalize_tags([*self.data.tags, *suggestion.tags])

    # =========================================================================
    # Submit
    # =========================================================================

    def submit(self) -> Optional[ModelAsset]:
        """
        Save the draft to the vault and close the form.

        Returns the saved asset. On failure returns None and the form stays
        open with `error` set: the validation message when required fields
        are missing, ASSET_GONE_MESSAGE when the asset being edited was
        deleted meanwhile (nothing is saved).
        """
        try:
            if self.editing_id is not None:
                asset = self.vault.update_asset(self.editing_id, self.data)
            else:
                asset = self.vault.add_asset(self.data)
        except AssetValidationError as e:
            self.error = str(e)
            return None
        if asset is None:
            logger.info(f"Edited asset {self.editing_id} no longer exists")
            self.error = ASSET_GONE_MESSAGE
            return None
        self.close()
        return asset
