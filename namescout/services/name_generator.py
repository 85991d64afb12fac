"""
NameScout - Name Suggestion Generator
Asks Google Gemini for brandable alternatives to a name and turns its
free-text answer into a clean list of strings.
"""
import json
import logging
import re
from typing import Optional

from google import genai

logger = logging.getLogger("namescout.ai")

PROMPT_TEMPLATE = """\
Generate {count} creative and brandable alternative names similar to "{name}".

Rules:
- Each name should be 2-15 characters long
- Easy to pronounce and remember
- Suitable for a brand/company name
- Mix of variations (slight modifications, synonyms, related words, combinations)
- Should be unique and catchy

Return ONLY a JSON array of strings with the alternative names. Example format:
["name1", "name2", "name3", ...]

Do not include any explanation or additional text, just the JSON array.
"""

MAX_FALLBACK_LENGTH = 30

_JSON_ARRAY = re.compile(r"\[[\s\S]*\]")


class NameGeneratorError(Exception):
    """The language model call failed or returned nothing usable."""


class NameGeneratorUnavailable(NameGeneratorError):
    """No API key configured."""


def parse_suggestions(text: str, name: str, count: int) -> list[str]:
    """
    Extract up to ``count`` names from a model reply.

    Tries the first JSON array in the text, then the whole text as JSON,
    then a newline/comma split. Falls back to ``[name]`` when nothing
    survives.
    """
    suggestions: list[str] = []
    try:
        match = _JSON_ARRAY.search(text)
        parsed = json.loads(match.group(0) if match else text)
        if isinstance(parsed, list):
            suggestions = [s.strip() for s in parsed if isinstance(s, str) and s.strip()]
    except ValueError:
        logger.warning("Model reply was not JSON, falling back to line split")
        suggestions = [
            part.strip().strip("\"'")
            for part in re.split(r"[\n,]", text)
        ]
        suggestions = [s for s in suggestions if 0 < len(s) < MAX_FALLBACK_LENGTH]

    if not suggestions:
        suggestions = [name]
    return suggestions[:count]


class NameGenerator:
    """Thin wrapper over the Gemini async client."""

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        client: Optional[genai.Client] = None,
    ):
        self.api_key = api_key
        self.model = model
        self._client = client

    def _get_client(self) -> genai.Client:
        """Return a cached Gemini client, creating it on first call."""
        if self._client is None:
            if not self.api_key:
                raise NameGeneratorUnavailable(
                    "GOOGLE_API_KEY is not configured. Add it to your .env file."
                )
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def generate(self, name: str, count: int = 10) -> list[str]:
        client = self._get_client()
        try:
            response = await client.aio.models.generate_content(
                model=self.model,
                contents=PROMPT_TEMPLATE.format(name=name, count=count),
                config=genai.types.GenerateContentConfig(
                    temperature=0.8,
                    max_output_tokens=1024,
                ),
            )
        except Exception as exc:
            logger.error("Gemini generation error: %s", exc)
            raise NameGeneratorError(str(exc)) from exc

        return parse_suggestions(response.text or "[]", name, count)
