"""Generative AI client interface and response parsing."""

import json
import re
from collections.abc import AsyncIterator, Sequence
from typing import Protocol

from nutriai.domain.chat import ChatMessage

_CODE_FENCE = re.compile(r"```(?:json)?")


class GenerativeClient(Protocol):
    """Interface for the external generative-AI API."""

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        prompt: str,
        schema: dict[str, object] | None = None,
        schema_name: str | None = None,
        image_data_urls: Sequence[str] = (),
    ) -> str:
        """Return the model's text response, schema-constrained when given."""

    def stream(
        self,
        *,
        model: str,
        instructions: str,
        messages: Sequence[ChatMessage],
    ) -> AsyncIterator[str]:
        """Yield incremental text chunks for the next chat turn."""


def parse_json_response(text: str) -> object:
    """Parse a JSON response after trimming whitespace and code fences."""
    cleaned = _CODE_FENCE.sub("", text.strip()).strip()
    return json.loads(cleaned)
