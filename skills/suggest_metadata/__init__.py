"""Metadata suggestion skill using Gemini structured output."""
from .suggest_metadata import (
    MetadataSuggester,
    MetadataSuggestion,
    MissingApiKeyError,
    SuggestionError,
)

__all__ = ["MetadataSuggester", "MetadataSuggestion", "MissingApiKeyError", "SuggestionError"]
