"""No-op store: used when history is disabled (``store: none``).

Using a NoOpStore rather than None lets the CLI always record accepted
commit messages without conditional checks.
"""

from __future__ import annotations

from codegenius_store.base import BaseStore
from codegenius_store.models import WorkHistory


class NoOpStore(BaseStore):
    """Always loads an empty history and silently discards saves."""

    def load(self) -> WorkHistory:
        return WorkHistory()

    def save(self, history: WorkHistory) -> None:
        pass  # intentional no-op
