"""
Data models for the Asset Vault.

These models represent a user's catalog of externally hosted 3D assets:
- Assets (links to a model/mod plus name, category, tags, description)
- Categories (built-in and user-created colored buckets)
- The vault that owns both and persists every change
- The session state around it (filters, theme, add/edit form)
"""

from .asset import AssetData, AssetValidationError, ModelAsset
from .category import Category, DEFAULT_CATEGORIES, CATEGORY_COLORS
from .storage import FileStore, KeyValueStore, MemoryStore
from .vault import Vault
from .views import ViewFilter, available_tags, filtered_and_sorted
from .theme import BG_PRESETS, ThemeState
from .asset_form import AssetForm
from .app_state import AppState

__all__ = [
    "AssetData",
    "AssetValidationError",
    "ModelAsset",
    "Category",
    "DEFAULT_CATEGORIES",
    "CATEGORY_COLORS",
    "FileStore",
    "KeyValueStore",
    "MemoryStore",
    "Vault",
    "ViewFilter",
    "available_tags",
    "filtered_and_sorted",
    "BG_PRESETS",
    "ThemeState",
    "AssetForm",
    "AppState",
]
