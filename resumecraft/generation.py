"""OpenAI chat-completion wrapper used by the enhancers."""

from __future__ import annotations

import logging
from typing import Optional

from openai import OpenAI, OpenAIError

logger = logging.getLogger(__name__)

MAX_TOKENS = 1500
TEMPERATURE = 0.7


class GenerationError(Exception):
    """Raised for any failed generation: transport, upstream status or a malformed body."""


class GenerationClient:
    """Issues one chat-completion request per call and returns the trimmed text.

    The underlying SDK client is created on first use so the service can start
    without a key. SDK-level retries are disabled.
    """

    def __init__(self, api_key: str, model: str = "gpt-4o", client: Optional[OpenAI] = None):
        self.api_key = api_key
        self.model = model
        self._client = client

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            self._client = OpenAI(api_key=self.api_key, max_retries=0)
        return self._client

    def generate(self, system_prompt: str, user_prompt: str) -> str:
        logger.info("generation.start model=%s prompt_chars=%d", self.model, len(user_prompt))
        try:
            resp = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                max_tokens=MAX_TOKENS,
                temperature=TEMPERATURE,
            )
        except OpenAIError as e:
            logger.warning("generation.failure model=%s error=%s: %s", self.model, type(e).__name__, e)
            raise GenerationError("Failed to generate AI content") from e

        try:
            text = resp.choices[0].message.content.strip()
        except (AttributeError, IndexError, TypeError) as e:
            logger.warning("generation.failure model=%s error=malformed response", self.model)
            raise GenerationError("Failed to generate AI content") from e

        logger.info("generation.success model=%s chars=%d", self.model, len(text))
        return text
