"""OpenAI Responses API client for text, vision and chat generation."""

from collections.abc import AsyncIterator, Sequence
from dataclasses import dataclass

from openai import AsyncOpenAI

from nutriai.domain.chat import ChatMessage
from nutriai.services.generation import GenerativeClient

_ROLES = {"user": "user", "model": "assistant"}


@dataclass
class OpenAIGenerativeClient(GenerativeClient):
    """Generative client backed by the OpenAI Responses API."""

    client: AsyncOpenAI
    reasoning_effort: str | None = None
    store: bool = False

    @classmethod
    def create(
        cls, api_key: str, reasoning_effort: str | None = None, store: bool = False
    ) -> "OpenAIGenerativeClient":
        """Create an OpenAI generative client."""
        return cls(
            client=AsyncOpenAI(api_key=api_key),
            reasoning_effort=reasoning_effort,
            store=store,
        )

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        prompt: str,
        schema: dict[str, object] | None = None,
        schema_name: str | None = None,
        image_data_urls: Sequence[str] = (),
    ) -> str:
        """Call the Responses API, with structured output when a schema is given."""
        content: list[dict[str, object]] = [
            {"type": "input_image", "image_url": url} for url in image_data_urls
        ]
        content.append({"type": "input_text", "text": prompt})
        request_payload: dict[str, object] = {
            "model": model,
            "input": [{"role": "user", "content": content}],
            "store": self.store,
        }
        if schema is not None:
            request_payload["text"] = {
                "format": {
                    "type": "json_schema",
                    "name": schema_name or "response",
                    "strict": True,
                    "schema": schema,
                }
            }
        if self.reasoning_effort:
            request_payload["reasoning"] = {"effort": self.reasoning_effort}

        response = await self.client.responses.create(**request_payload)
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return output_text

    async def stream(
        self,
        *,
        model: str,
        instructions: str,
        messages: Sequence[ChatMessage],
    ) -> AsyncIterator[str]:
        """Stream text deltas for the next assistant turn."""
        request_payload: dict[str, object] = {
            "model": model,
            "instructions": instructions,
            "input": [
                {"role": _ROLES[message.role], "content": message.text}
                for message in messages
            ],
            "store": self.store,
            "stream": True,
        }
        if self.reasoning_effort:
            request_payload["reasoning"] = {"effort": self.reasoning_effort}

        events = await self.client.responses.create(**request_payload)
        async for event in events:
            if event.type == "response.output_text.delta":
                yield event.delta
            elif event.type in {"response.failed", "error"}:
                raise RuntimeError(f"OpenAI stream failed: {event.type}")
