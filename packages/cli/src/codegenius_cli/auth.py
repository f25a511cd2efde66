"""API key resolution for the configured AI provider.

Resolution order (stops at first success):
  1. The provider's environment variable (GEMINI_API_KEY, ANTHROPIC_API_KEY, OPENAI_API_KEY)
  2. ``api_key`` in .codegenius.yml
"""

from __future__ import annotations

import logging

import click

from codegenius_core.config import API_KEY_ENV

logger = logging.getLogger(__name__)


def resolve_api_key(config: dict) -> str | None:
    """Return the API key for ``config["model"]`` or None if none is available.

    Never raises; use require_api_key() where a missing key is fatal.
    """
    model = config.get("model", "")
    token = config.get(f"{model}_api_key")
    if token:
        return token

    token = config.get("api_key")
    if token:
        logger.debug("Using api_key from the config file for %s.", model)
        return token

    return None


def require_api_key(config: dict) -> str:
    model = config.get("model", "")
    if model not in API_KEY_ENV:
        raise click.UsageError(f"Unknown model provider: {model!r}. Choose one of: {', '.join(API_KEY_ENV)}.")
    token = resolve_api_key(config)
    if not token:
        raise click.UsageError(f"{API_KEY_ENV[model]} environment variable is not set.")
    return token
