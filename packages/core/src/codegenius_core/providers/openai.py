"""OpenAI chat completions provider (optional ``openai`` extra)."""

from __future__ import annotations

import logging

try:
    from openai import OpenAI as _OpenAI
except ImportError:
    _OpenAI = None  # type: ignore[assignment,misc]

from codegenius_core.providers.base import BaseProvider

logger = logging.getLogger(__name__)


class OpenAIProvider(BaseProvider):
    MODEL = "gpt-4o"
    TEMPERATURE = 0.2

    def __init__(self, api_key: str, model: str | None = None, **kwargs):
        super().__init__(**kwargs)
        if _OpenAI is None:
            raise ImportError("OpenAIProvider needs the openai SDK: pip install 'codegenius[openai]'")
        self.model = model or self.MODEL
        self.client = _OpenAI(api_key=api_key, timeout=self.timeout, max_retries=0)

    def _call_api(self, system_prompt: str, user_prompt: str) -> str:
        completion = self.client.chat.completions.create(
            model=self.model,
            max_tokens=self.MAX_TOKENS,
            temperature=self.TEMPERATURE,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        )
        choice = completion.choices[0]
        if choice.finish_reason == "length":
            logger.warning("OpenAI response cut off at %d tokens", self.MAX_TOKENS)
        return (choice.message.content or "").strip()
