"""
Breakdown Service - AI-assisted task breakdown through the Gemini API.

Architecture Decision: Failures stop at this boundary
Network, auth and malformed-response errors are logged and mapped to a tagged
BreakdownResult; nothing raised inside the request ever reaches the caller.
A missing API key is reported as UNAVAILABLE so callers can tell a disabled
feature apart from "no suggestions".
"""

import json
import logging
from typing import Any, List, Optional

from pydantic import ValidationError

from droidplan.domain.models import BreakdownResult, BreakdownStatus, SuggestedTask

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = "You are a helpful productivity assistant. Provide output in JSON format."

PROMPT_TEMPLATE = (
    'Break down the following goal into 3-5 concrete, actionable tasks: "{goal}". '
    "Keep descriptions concise."
)

RESPONSE_SCHEMA = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "content": {"type": "STRING", "description": "The specific actionable task content"},
            "estimatedDurationHours": {"type": "NUMBER", "description": "Estimated time in hours"},
            "priority": {"type": "STRING", "enum": ["high", "medium", "low"]},
        },
        "required": ["content", "estimatedDurationHours", "priority"],
        "property_ordering": ["content", "estimatedDurationHours", "priority"],
    },
}


def parse_suggestions(text: str) -> List[SuggestedTask]:
    """
    Parse the model's JSON answer into suggestions.

    Items that fail validation are dropped.

    Raises:
        ValueError: if the text is not a JSON array
    """
    data = json.loads(text)
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array, got {type(data).__name__}")

    suggestions = []
    for item in data:
        try:
            suggestions.append(SuggestedTask.model_validate(item))
        except ValidationError as e:
            logger.warning(f"Dropping invalid suggestion {item!r}: {e.error_count()} error(s)")
    return suggestions


class BreakdownService:
    """
    Asks Gemini to split a goal into a handful of concrete tasks.
    """

    def __init__(self, api_key: Optional[str] = None,
                 model_name: str = "gemini-3-flash-preview",
                 client: Any = None):
        """
        Args:
            api_key: Gemini API key; without one the feature is unavailable
            model_name: Gemini model used for generation
            client: Optional pre-built google-genai client (for testing)
        """
        self.api_key = api_key
        self.model_name = model_name
        self._client = client

    @classmethod
    def from_settings(cls, settings) -> 'BreakdownService':
        return cls(api_key=settings.gemini_api_key, model_name=settings.preferences.gemini_model)

    @property
    def is_available(self) -> bool:
        return bool(self._client is not None or self.api_key)

    def _get_client(self):
        if self._client is None:
            from google import genai
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def suggest_breakdown(self, goal: str) -> BreakdownResult:
        """
        Request task suggestions for a goal.

        Args:
            goal: Free-text goal, e.g. "Launch personal website"

        Returns:
            AVAILABLE with zero or more suggestions, UNAVAILABLE without an
            API key, FAILED if the request or its response was unusable.
        """
        if not self.is_available:
            logger.warning("No Gemini API key configured, task breakdown unavailable")
            return BreakdownResult(status=BreakdownStatus.UNAVAILABLE)

        goal = (goal or "").strip()
        if not goal:
            return BreakdownResult(status=BreakdownStatus.AVAILABLE)

        try:
            from google.genai import types

            client = self._get_client()
            response = await client.aio.models.generate_content(
                model=self.model_name,
                contents=PROMPT_TEMPLATE.format(goal=goal),
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=RESPONSE_SCHEMA,
                    system_instruction=SYSTEM_INSTRUCTION,
                ),
            )
            text = (response.text or "").strip()
            if not text:
                return BreakdownResult(status=BreakdownStatus.AVAILABLE)

            suggestions = parse_suggestions(text)
        except Exception as e:
            logger.warning(f"Gemini breakdown request failed: {e}")
            return BreakdownResult(status=BreakdownStatus.FAILED)

        logger.info(f"Received {len(suggestions)} suggestion(s) for goal")
        return BreakdownResult(status=BreakdownStatus.AVAILABLE, suggestions=suggestions)
