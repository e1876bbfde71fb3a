"""
Asset model - a cataloged link to an externally hosted 3D model or mod.

The vault never stores the files themselves, only where they live
(source link), what they look like (thumbnail link) and how the user
organizes them (category, tags, description).
"""

import time
import uuid
from dataclasses import dataclass, field
from typing import Iterable

from .records import read_field, read_str_list


class AssetValidationError(ValueError):
    """Raised when a save is attempted without the required fields."""

    MESSAGE = "Please fill in all required fields (Name, Source, Image)."

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(self.MESSAGE)


def now_ms() -> int:
    """Current time in milliseconds since the epoch."""
    return int(time.time() * 1000)


def normalize_tags(tags: Iterable[str]) -> list[str]:
    """Lower-case, trim and dedupe tags, keeping first-seen order."""
    seen = []
    for tag in tags:
        clean = str(tag).strip().lower()
        if clean and clean not in seen:
            seen.append(clean)
    return seen


@dataclass
class AssetData:
    """
    The user-editable part of an asset.

    This is what the add/edit form produces. The vault adds the id and
    creation time on save.
    """

    name: str = ""
    source_url: str = ""
    image_url: str = ""
    category_id: str = "cars"
    description: str = ""
    tags: list[str] = field(default_factory=list)

    def __post_init__(self):
        self.tags = normalize_tags(self.tags)

    def missing_fields(self) -> list[str]:
        """Names of required fields that are blank."""
        required = {
            "name": self.name,
            "source_url": self.source_url,
            "image_url": self.image_url,
        }
        return [k for k, v in required.items() if not v.strip()]

    def validate(self) -> None:
        """Raise AssetValidationError if a required field is blank."""
        missing = self.missing_fields()
        if missing:
            raise AssetValidationError(missing)


@dataclass
class ModelAsset:
    """A saved asset. `id` and `created_at` never change after creation."""

    name: str
    source_url: str
    image_url: str
    category_id: str
    description: str = ""
    tags: list[str] = field(default_factory=list)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: int = field(default_factory=now_ms)

    def __post_init__(self):
        self.tags = normalize_tags(self.tags)

    @classmethod
    def create(cls, data: AssetData) -> "ModelAsset":
        """Build a new asset with a fresh id and the current timestamp."""
        return cls(
            name=data.name,
            source_url=data.source_url,
            image_url=data.image_url,
            category_id=data.category_id,
            description=data.description,
            tags=list(data.tags),
        )

    def apply(self, data: AssetData) -> None:
        """Replace every editable field, keeping id and created_at."""
        self.name = data.name
        self.source_url = data.source_url
        self.image_url = data.image_url
        self.category_id = data.category_id
        self.description = data.description
        self.tags = normalize_tags(data.tags)

    def to_data(self) -> AssetData:
        """Editable copy, used to prefill the edit form."""
        return AssetData(
            name=self.name,
            source_url=self.source_url,
            image_url=self.image_url,
            category_id=self.category_id,
            description=self.description,
            tags=list(self.tags),
        )

    def to_dict(self) -> dict:
        """Serialize to the persisted (camelCase) record shape."""
        return {
            "id": self.id,
            "name": self.name,
            "sourceUrl": self.source_url,
            "imageUrl": self.image_url,
            "categoryId": self.category_id,
            "description": self.description,
            "tags": list(self.tags),
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ModelAsset":
        """
        Deserialize from the persisted record shape.

        Raises KeyError or TypeError when a field is missing or mistyped.
        """
        return cls(
            id=read_field(data, "id", str),
            name=read_field(data, "name", str),
            source_url=read_field(data, "sourceUrl", str, default=""),
            image_url=read_field(data, "imageUrl", str, default=""),
            category_id=read_field(data, "categoryId", str, default="all"),
            description=read_field(data, "description", str, default=""),
            tags=read_str_list(data, "tags"),
            created_at=int(read_field(data, "createdAt", (int, float), default=0)),
        )
