from __future__ import annotations

from codegenius_core.config import API_KEY_ENV
from codegenius_core.errors import ConfigError
from codegenius_core.providers.base import BaseProvider

PROVIDERS = tuple(API_KEY_ENV)


def get_provider(config: dict, api_key: str) -> BaseProvider:
    """Instantiate the provider named by ``config["model"]``."""
    model = config.get("model")
    ai = config.get("ai") or {}
    kwargs = {
        "timeout": float(config.get("timeout", 30)),
        "max_retries": int(config.get("max_retries", 3)),
        "context_templates": ai.get("context_templates"),
    }

    if model == "gemini":
        from codegenius_core.providers.gemini import GeminiProvider

        return GeminiProvider(api_key=api_key, model=ai.get("gemini_model"), **kwargs)
    if model == "anthropic":
        from codegenius_core.providers.anthropic import AnthropicProvider

        return AnthropicProvider(api_key=api_key, model=ai.get("anthropic_model"), **kwargs)
    if model == "openai":
        from codegenius_core.providers.openai import OpenAIProvider

        return OpenAIProvider(api_key=api_key, model=ai.get("openai_model"), **kwargs)
    raise ConfigError(f"Unknown model provider: {model!r}. Choose one of: {', '.join(PROVIDERS)}.")
