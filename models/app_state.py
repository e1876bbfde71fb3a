"""
Application state - everything a running vault session holds.

One AppState is created at startup and handed to whatever drives the
session (the HTTP server, a script, a test). It owns the vault, the
gallery filters, the preferences and the add/edit form. Nothing here is a
module-level singleton.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Optional

from config import API_KEY_KEY, BACKGROUND_KEY, GOOGLE_API_KEY
from skills.suggest_metadata import MetadataSuggester

from .asset import ModelAsset
from .asset_form import AssetForm
from .storage import KeyValueStore
from .theme import BackgroundPreset, ThemeState, find_preset_by_name
from .vault import Vault
from .views import SORT_OPTIONS, ViewFilter, available_tags, toggle_tag

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    """Top-level session state, loaded once from a key-value store."""

    store: KeyValueStore
    vault: Vault
    filter: ViewFilter = field(default_factory=ViewFilter)
    theme: ThemeState = field(default_factory=ThemeState)
    api_key: str = ""
    form: Optional[AssetForm] = None

    def __post_init__(self):
        if self.form is None:
            self.form = AssetForm(self.vault)

    @classmethod
    def load(cls, store: KeyValueStore, rng: Optional[random.Random] = None) -> "AppState":
        """Read every record and preference, migrating as needed."""
        return cls(
            store=store,
            vault=Vault.load(store, rng=rng),
            theme=ThemeState.from_saved(store.load(BACKGROUND_KEY)),
            api_key=store.load(API_KEY_KEY) or "",
        )

    # =========================================================================
    # Gallery
    # =========================================================================

    def visible_assets(self) -> list[ModelAsset]:
        return self.filter.apply(self.vault.assets)

    def available_tags(self) -> list[str]:
        return available_tags(self.vault.assets)

    def select_category(self, category_id: str) -> None:
        self.filter.category_id = category_id

    def set_search(self, text: str) -> None:
        self.filter.search = text

    def set_sort(self, sort_option: str) -> None:
        if sort_option not in SORT_OPTIONS:
            raise ValueError(f"Unknown sort option: {sort_option}")
        self.filter.sort = sort_option

    def toggle_tag(self, tag: str) -> None:
        self.filter.tags = toggle_tag(self.filter.tags, tag)

    def reset_tags(self) -> None:
        self.filter.tags = []

    def delete_asset(self, asset_id: str, confirm) -> bool:
        return self.vault.delete_asset(asset_id, confirm)

    # =========================================================================
    # Settings
    # =========================================================================

    def save_api_key(self, key: str) -> None:
        self.api_key = key.strip()
        self.store.save(API_KEY_KEY, self.api_key)
        logger.info("API key saved" if self.api_key else "API key cleared")

    @property
    def effective_api_key(self) -> Optional[str]:
        """The saved key, or the environment key when none is saved."""
        return self.api_key or GOOGLE_API_KEY

    def suggester(self) -> MetadataSuggester:
        return MetadataSuggester(api_key=self.effective_api_key)

    def _save_background(self) -> None:
        self.store.save(BACKGROUND_KEY, self.theme.background)

    def select_preset(self, preset: BackgroundPreset) -> None:
        self.theme.select_preset(preset)
        self._save_background()

    def select_preset_named(self, name: str) -> BackgroundPreset:
        preset = find_preset_by_name(name)
        if preset is None:
            raise ValueError(f"Unknown background preset: {name}")
        self.select_preset(preset)
        return preset

    def pick_background_color(self, color: str) -> None:
        self.theme.pick_color(color)
        self._save_background()

    def set_background_gradient(self, gradient: bool) -> None:
        self.theme.set_gradient(gradient)
        self._save_background()

    def reset_background(self) -> None:
        self.theme.reset()
        self._save_background()
