"""
Vault model - the collection store.

The vault is the single owner of the asset and category lists. Every
mutation follows the same order:

1. update the in-memory list
2. write both lists back to storage (write-through, no batching)
3. notify subscribers

Callers get read-only views through the `assets` and `categories`
properties.
"""

import json
import logging
import random
from typing import Callable, Optional

from config import ASSETS_KEY, CATEGORIES_KEY
from .asset import AssetData, ModelAsset
from .category import Category, allocate_category, default_categories
from .migration import load_assets, load_categories
from .storage import KeyValueStore

logger = logging.getLogger(__name__)

Listener = Callable[["Vault"], None]
Confirm = Callable[[ModelAsset], bool]


class Vault:
    """
    The user's asset collection.

    Newest assets sit at the front of the list, mirroring the order they
    were added in.
    """

    def __init__(
        self,
        store: KeyValueStore,
        assets: Optional[list[ModelAsset]] = None,
        categories: Optional[list[Category]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.store = store
        self._assets: list[ModelAsset] = list(assets or [])
        self._categories: list[Category] = list(categories or default_categories())
        self._listeners: list[Listener] = []
        self._rng = rng or random.Random()

    @classmethod
    def load(cls, store: KeyValueStore, rng: Optional[random.Random] = None) -> "Vault":
        """Load both records from storage and run the migration pass."""
        assets = load_assets(store.load(ASSETS_KEY), ASSETS_KEY)
        categories = load_categories(store.load(CATEGORIES_KEY), CATEGORIES_KEY)
        logger.info(f"Loaded vault: {len(assets)} assets, {len(categories)} categories")
        return cls(store, assets, categories, rng=rng)

    # =========================================================================
    # Read access
    # =========================================================================

    @property
    def assets(self) -> tuple[ModelAsset, ...]:
        return tuple(self._assets)

    @property
    def categories(self) -> tuple[Category, ...]:
        return tuple(self._categories)

    def get_asset(self, asset_id: str) -> Optional[ModelAsset]:
        """Get an asset by ID."""
        for asset in self._assets:
            if asset.id == asset_id:
                return asset
        return None

    def get_category(self, category_id: str) -> Optional[Category]:
        """Get a category by ID."""
        for category in self._categories:
            if category.id == category_id:
                return category
        return None

    def resolve_category(self, category_id: str) -> Category:
        """Category for display; dangling ids fall back to the first one."""
        return self.get_category(category_id) or self._categories[0]

    def category_names(self) -> list[str]:
        return [c.name for c in self._categories]

    # =========================================================================
    # Asset Management
    # =========================================================================

    def add_asset(self, data: AssetData) -> ModelAsset:
        """Validate, stamp with id and creation time, prepend and persist."""
        data.validate()
        asset = ModelAsset.create(data)
        self._assets.insert(0, asset)
        logger.info(f"Added asset {asset.id}: {asset.name}")
        self._commit()
        return asset

    def update_asset(self, asset_id: str, data: AssetData) -> Optional[ModelAsset]:
        """Replace the editable fields of an asset. Unknown ids are a no-op."""
        asset = self.get_asset(asset_id)
        if asset is None:
            logger.info(f"Update skipped, no asset {asset_id}")
            return None
        data.validate()
        asset.apply(data)
        logger.info(f"Updated asset {asset_id}")
        self._commit()
        return asset

    def delete_asset(self, asset_id: str, confirm: Confirm) -> bool:
        """
        Remove an asset after the user confirms.

        Returns True only when something was removed. Unknown ids and
        declined confirmations leave the vault untouched.
        """
        asset = self.get_asset(asset_id)
        if asset is None:
            return False
        if not confirm(asset):
            logger.info(f"Delete of {asset_id} declined")
            return False
        self._assets = [a for a in self._assets if a.id != asset_id]
        logger.info(f"Deleted asset {asset_id}")
        self._commit()
        return True

    # =========================================================================
    # Category Management
    # =========================================================================

    def add_category(self, name: str) -> str:
        """Return the id for `name`, creating the category if it is new."""
        count = len(self._categories)
        category_id = allocate_category(self._categories, name, rng=self._rng)
        if len(self._categories) != count:
            logger.info(f"Added category {category_id}")
            self._commit()
        return category_id

    # =========================================================================
    # Persistence & notification
    # =========================================================================

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call `listener` after every mutation. Returns an unsubscribe hook."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def save(self) -> None:
        """Write both full lists back to storage."""
        self.store.save(ASSETS_KEY, json.dumps([a.to_dict() for a in self._assets]))
        self.store.save(
            CATEGORIES_KEY, json.dumps([c.to_dict() for c in self._categories])
        )

    def _commit(self) -> None:
        self.save()
        for listener in list(self._listeners):
            listener(self)

    def summary(self) -> str:
        """Get a summary of the vault."""
        return f"""
Assets: {len(self._assets)}
Categories: {len(self._categories)}
"""
