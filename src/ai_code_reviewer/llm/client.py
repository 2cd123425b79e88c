"""
Completion Client

Thin wrapper around an OpenAI-compatible chat completion endpoint
(OpenRouter by default).
"""

import logging
from typing import Optional

from openai import AsyncOpenAI, OpenAIError

from ..config import LLMConfig


logger = logging.getLogger(__name__)

OPENROUTER_HEADERS = {
    'HTTP-Referer': 'https://github.com/actions',
    'X-Title': 'AI Code Reviewer',
}


class CompletionError(Exception):
    """Completion endpoint could not be reached or rejected the request."""


class CompletionClient:
    """Sends single-message prompts and returns the reply text."""

    def __init__(self, api_key: str, model: str, base_url: str, client: Optional[AsyncOpenAI] = None):
        """
        Args:
            api_key: OpenRouter or OpenAI API key
            model: Model identifier
            base_url: API base URL
            client: Preconfigured SDK client, mainly for tests
        """
        self.model = model
        self.client = client or AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            default_headers=OPENROUTER_HEADERS,
        )

    @classmethod
    def from_config(cls, config: LLMConfig) -> "CompletionClient":
        return cls(api_key=config.api_key, model=config.model, base_url=config.base_url)

    async def complete(self, prompt: str, max_tokens: int) -> str:
        """
        Send `prompt` as one user message.

        Returns:
            Reply content, or an empty string if the model returned none

        Raises:
            CompletionError: on transport, authentication or API errors
        """
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[{'role': 'user', 'content': prompt}],
                max_tokens=max_tokens,
            )
        except OpenAIError as e:
            raise CompletionError(str(e)) from e

        if not response.choices:
            return ''
        return response.choices[0].message.content or ''

    async def aclose(self) -> None:
        await self.client.close()
