"""Anthropic Messages API provider (optional ``anthropic`` extra)."""

from __future__ import annotations

import logging

from codegenius_core.providers.base import BaseProvider

logger = logging.getLogger(__name__)


class AnthropicProvider(BaseProvider):
    MODEL = "claude-sonnet-4-20250514"
    TEMPERATURE = 0.3

    def __init__(self, api_key: str, model: str | None = None, **kwargs):
        super().__init__(**kwargs)
        try:
            import anthropic
        except ImportError as e:
            raise ImportError("AnthropicProvider needs the anthropic SDK: pip install 'codegenius[anthropic]'") from e
        self.model = model or self.MODEL
        # Retries happen in BaseProvider._call_with_retry, not in the SDK.
        self.client = anthropic.Anthropic(api_key=api_key, timeout=self.timeout, max_retries=0)

    def _call_api(self, system_prompt: str, user_prompt: str) -> str:
        message = self.client.messages.create(
            model=self.model,
            max_tokens=self.MAX_TOKENS,
            temperature=self.TEMPERATURE,
            system=system_prompt,
            messages=[{"role": "user", "content": user_prompt}],
        )
        if message.stop_reason == "max_tokens":
            logger.warning("Anthropic response cut off at %d tokens", self.MAX_TOKENS)
        return "".join(block.text for block in message.content if block.type == "text").strip()
