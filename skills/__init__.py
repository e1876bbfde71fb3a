"""
Skills - Gemini-backed capabilities for the Asset Vault.

Each skill is a directory containing:
- skill_name.py: Implementation
- __init__.py: Public names re-exported here
"""

from pathlib import Path

# Skill directories
SKILLS_DIR = Path(__file__).parent

from .suggest_metadata.suggest_metadata import (
    MetadataSuggester,
    MetadataSuggestion,
    MissingApiKeyError,
    SuggestionError,
)

__all__ = [
    "MetadataSuggester",
    "MetadataSuggestion",
    "MissingApiKeyError",
    "SuggestionError",
    "SKILLS_DIR",
]
