"""Claude-powered sentiment scoring via forced tool use."""

from __future__ import annotations

import json
from typing import Any

from anthropic import Anthropic

from sentiment_service.scoring.models import Analysis, WordScore

# Tool definition for Claude structured output
SENTIMENT_TOOL: dict[str, Any] = {
    "name": "record_sentiment",
    "description": (
        "Record the sentiment of a text. Call this once with the overall "
        "classification and a polarity for every word, in order."
    ),
    "input_schema": {
        "type": "object",
        "properties": {
            "score": {
                "type": "integer",
                "enum": [0, 1],
                "description": "1 if the text is positive overall, 0 if negative or neutral.",
            },
            "words": {
                "type": "array",
                "description": "Every word of the text, in order, with its polarity.",
                "items": {
                    "type": "object",
                    "properties": {
                        "word": {"type": "string", "description": "The word, lower-cased."},
                        "score": {
                            "type": "integer",
                            "enum": [-1, 0, 1],
                            "description": "-1 negative, 0 neutral, 1 positive.",
                        },
                    },
                    "required": ["word", "score"],
                },
            },
        },
        "required": ["score", "words"],
    },
}

SYSTEM_PROMPT = (
    "You are a sentiment analysis engine. Classify the sentiment of the text "
    "provided and rate the polarity of each word in context.\n\n"
    "Use the record_sentiment tool to return your results. Do not add words "
    "that are not in the text."
)


class ClaudeScorer:
    """Scores text with Claude, returning the same Analysis shape as LexiconScorer."""

    def __init__(self, api_key: str, model: str, client: Any | None = None) -> None:
        self.model = model
        self._client = client or Anthropic(api_key=api_key)

    def score(self, text: str) -> Analysis:
        response = self._client.messages.create(
            model=self.model,
            max_tokens=4096,
            system=SYSTEM_PROMPT,
            tools=[SENTIMENT_TOOL],
            tool_choice={"type": "tool", "name": "record_sentiment"},
            messages=[
                {
                    "role": "user",
                    "content": f"Analyse the sentiment of this text:\n\n{text}",
                }
            ],
        )
        return _parse_tool_response(response)


def _parse_tool_response(response: Any) -> Analysis:
    """Parse the Claude tool_use response into an Analysis."""
    for block in response.content:
        if block.type != "tool_use":
            continue
        if block.name != "record_sentiment":
            continue

        data = block.input
        if isinstance(data, str):
            data = json.loads(data)

        return Analysis(
            score=1 if int(data.get("score", 0)) > 0 else 0,
            words=[
                WordScore(word=str(item["word"]), score=int(item.get("score", 0)))
                for item in data.get("words", [])
            ],
        )

    raise ValueError("Claude response did not contain a record_sentiment tool call")
