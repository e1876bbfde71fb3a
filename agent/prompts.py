"""
Prompt templates for Gemini interactions.

These prompts are designed to:
1. Turn a loose description of a 3D model or mod into catalog metadata
2. Reuse the user's existing categories before inventing new ones
3. Keep tags thematic and short so they work as filters

Philosophy:
- The user's own vocabulary wins: pick an existing category when one fits
- Suggestions are a starting point; the user edits before saving
"""


class Prompts:
    """Collection of prompt templates for the metadata assistant."""

    # =========================================================================
    # CATALOG PROMPTS
    # =========================================================================

    SUGGEST_METADATA = """
Given this user description of a 3D model/mod: "{description}",
suggest a concise title, pick the best category from this list: [{categories}],
and suggest 3-5 relevant thematic tags (e.g., Sci-fi, Fantasy, Modern, Military, Realistic, Cyberpunk, Stylized).
If no category matches perfectly, suggest a new single-word category name.

Respond in JSON format:
{{
    "title": "A catchy title for the asset",
    "category": "The most relevant category name",
    "tags": ["3-5", "relevant", "thematic", "tags"],
    "reasoning": "Why this category and tags were chosen"
}}
"""

    @classmethod
    def suggest_metadata(cls, description: str, categories: list[str]) -> str:
        """Fill the metadata prompt for one asset."""
        return cls.SUGGEST_METADATA.format(
            description=description,
            categories=", ".join(categories),
        )
