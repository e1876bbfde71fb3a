"""
Metadata Suggestion Skill - Gemini drafts catalog metadata.

Given the free-text description of an asset and the user's category
names, Gemini returns:
- a concise title
- the best-fitting category (existing or a new single-word one)
- 3-5 thematic tags

One attempt per request. Failures surface once and change nothing.
"""

import asyncio
import json
import logging
from typing import Optional

from google import genai
from google.genai import types
from pydantic import BaseModel, ValidationError

from config import GEMINI_MODEL, TEMPERATURE_SUGGESTION, get_gemini_client
from agent.prompts import Prompts

logger = logging.getLogger(__name__)


class MissingApiKeyError(ValueError):
    """No Gemini key is configured; the call is never attempted."""

    MESSAGE = "Please set your Google Gemini API Key in the Settings first!"

    def __init__(self):
        super().__init__(self.MESSAGE)


class SuggestionError(RuntimeError):
    """The Gemini call or its response parsing failed."""

    MESSAGE = "AI Suggestion Failed. Check your API Key or try again."


class MetadataSuggestion(BaseModel):
    """Structured answer requested from Gemini."""

    title: str
    category: str
    tags: list[str]
    reasoning: Optional[str] = None


class MetadataSuggester:
    """
    Gemini powered metadata drafts for new assets.

    The client is built lazily from the API key, so a missing key is
    reported before any network work.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        client: genai.Client = None,
        model: str = GEMINI_MODEL,
    ):
        self.api_key = api_key.strip() if api_key else None
        self.client = client
        self.model = model

    def _get_client(self) -> genai.Client:
        if self.client is None:
            if not self.api_key:
                raise MissingApiKeyError()
            self.client = get_gemini_client(self.api_key)
        return self.client

    async def suggest(
        self,
        description: str,
        existing_categories: list[str],
    ) -> MetadataSuggestion:
        """
        Ask Gemini for a title, category and tags.

        Args:
            description: Free text about the asset (never empty)
            existing_categories: Current category display names

        Returns:
            MetadataSuggestion parsed from the JSON response

        Raises:
            MissingApiKeyError: no key configured
            SuggestionError: the call failed or returned unusable JSON
        """
        if not description or not description.strip():
            raise ValueError("Description must not be empty")

        client = self._get_client()
        prompt = Prompts.suggest_metadata(description.strip(), existing_categories)

        logger.info(f"Requesting metadata suggestion ({len(description)} chars)")

        try:
            response = await asyncio.to_thread(
                client.models.generate_content,
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    temperature=TEMPERATURE_SUGGESTION,
                    response_mime_type="application/json",
                    response_schema=MetadataSuggestion,
                ),
            )
        except Exception as e:
            logger.error(f"Gemini metadata suggestion failed: {e}")
            raise SuggestionError(SuggestionError.MESSAGE) from e

        try:
            suggestion = MetadataSuggestion.model_validate(json.loads(response.text or "{}"))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.error(f"Failed to parse suggestion response: {e}")
            logger.error(f"Raw response: {response.text}")
            raise SuggestionError(SuggestionError.MESSAGE) from e

        logger.info(f"Suggestion: '{suggestion.title}' in {suggestion.category}")
        return suggestion
