"""Gemini provider over the public generateContent REST endpoint.

Talks HTTP directly with requests instead of an SDK: the endpoint is a single
JSON POST and the API key travels as a query parameter.
"""

from __future__ import annotations

import requests

from codegenius_core.providers.base import BaseProvider

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"


class GeminiProvider(BaseProvider):
    MODEL = "gemini-2.0-flash"

    def __init__(
        self,
        api_key: str,
        model: str | None = None,
        base_url: str = GEMINI_BASE_URL,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.api_key = api_key
        self.model = model or self.MODEL
        self.base_url = base_url.rstrip("/")

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/{self.model}:generateContent"

    def _call_api(self, system_prompt: str, user_prompt: str) -> str:
        payload = {
            "systemInstruction": {"parts": [{"text": system_prompt}]},
            "contents": [{"role": "user", "parts": [{"text": user_prompt}]}],
            "generationConfig": {"maxOutputTokens": self.MAX_TOKENS},
        }
        r = requests.post(
            self.endpoint,
            params={"key": self.api_key},
            json=payload,
            timeout=self.timeout,
        )
        if not r.ok:
            raise RuntimeError(f"Gemini API request failed with status {r.status_code}: {r.text[:500]}")

        candidates = r.json().get("candidates") or []
        if not candidates:
            raise RuntimeError("no response from AI")
        parts = (candidates[0].get("content") or {}).get("parts") or []
        if not parts:
            raise RuntimeError("no response from AI")
        return parts[0].get("text", "")
