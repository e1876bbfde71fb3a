"""
Migration - reconcile persisted records with the current schema on load.

Two things changed since the first release:
1. "humans" and "non-humans" were merged into "characters"
2. Built-in categories are defined in code, not read back from storage

Both passes are idempotent, so running them on every startup is safe.
"""

import json
import logging
from typing import Optional

from .asset import ModelAsset
from .category import (
    CHARACTERS_CATEGORY_ID,
    CORE_OR_LEGACY_IDS,
    LEGACY_CATEGORY_IDS,
    Category,
    default_categories,
)

logger = logging.getLogger(__name__)


def decode_record(raw: Optional[str], key: str) -> list:
    """
    Decode a stored JSON array.

    A missing record, undecodable JSON or a non-array value all come back
    as an empty list, so a corrupted record resets instead of crashing.
    """
    if raw is None:
        return []
    try:
        decoded = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning(f"Stored record '{key}' is not valid JSON, resetting: {e}")
        return []
    if not isinstance(decoded, list):
        logger.warning(f"Stored record '{key}' is not a list, resetting")
        return []
    return decoded


def migrate_asset_records(records: list) -> list[dict]:
    """Rewrite legacy category ids on raw asset records."""
    migrated = []
    for record in records:
        if not isinstance(record, dict):
            logger.warning(f"Skipping malformed asset record: {record!r}")
            continue
        category_id = record.get("categoryId")
        if isinstance(category_id, str) and category_id in LEGACY_CATEGORY_IDS:
            record = {**record, "categoryId": CHARACTERS_CATEGORY_ID}
        migrated.append(record)
    return migrated


def migrate_category_records(records: list) -> list[dict]:
    """Built-ins first, then user categories in their stored order."""
    merged = [c.to_dict() for c in default_categories()]
    for record in records:
        if not isinstance(record, dict):
            logger.warning(f"Skipping malformed category record: {record!r}")
            continue
        category_id = record.get("id")
        if not (isinstance(category_id, str) and category_id in CORE_OR_LEGACY_IDS):
            merged.append(record)
    return merged


def load_assets(raw: Optional[str], key: str = "assets") -> list[ModelAsset]:
    """Decode, migrate and build assets from a stored record."""
    assets = []
    for record in migrate_asset_records(decode_record(raw, key)):
        try:
            assets.append(ModelAsset.from_dict(record))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Skipping malformed asset record ({e}): {record!r}")
    return assets


def load_categories(raw: Optional[str], key: str = "categories") -> list[Category]:
    """Decode, migrate and build categories from a stored record."""
    categories = []
    for record in migrate_category_records(decode_record(raw, key)):
        try:
            categories.append(Category.from_dict(record))
        except (KeyError, TypeError) as e:
            logger.warning(f"Skipping malformed category record ({e}): {record!r}")
    return categories
