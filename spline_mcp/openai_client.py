"""Minimal OpenAI chat-completion client used by generateTextWithOpenAI."""

from __future__ import annotations

import httpx

from .api_client import ApiError, send_json
from .config import OpenAIConfig

SYSTEM_PROMPT = 'You are a helpful assistant.'


class OpenAIClient:

    def __init__(self, config: OpenAIConfig, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.config = config
        self._transport = transport

    async def generate_text(
        self,
        prompt: str,
        model: str = 'gpt-3.5-turbo',
        max_tokens: int = 256,
        temperature: float = 0.7,
    ) -> str:
        """Generate a completion for ``prompt`` and return its text."""
        if not self.config.api_key:
            raise ApiError(None, "OPENAI_API_KEY is not configured")

        data = await send_json(
            'POST',
            f"{self.config.base_url.rstrip('/')}/chat/completions",
            headers={
                'Authorization': f"Bearer {self.config.api_key}",
                'Content-Type': 'application/json',
            },
            timeout=self.config.timeout,
            payload={
                'model': model,
                'messages': [
                    {'role': 'system', 'content': SYSTEM_PROMPT},
                    {'role': 'user', 'content': prompt},
                ],
                'max_tokens': max_tokens,
                'temperature': temperature,
            },
            transport=self._transport,
        )

        try:
            return data['choices'][0]['message']['content'].strip()
        except (KeyError, IndexError, TypeError, AttributeError):
            raise ApiError(None, "Unexpected response from OpenAI: no completion returned")
