"""JSONFileStore: the work history as one JSON document on disk.

Data format: ``{"entries": [{"date": "02 Jan 2024", "summary": "..."}, ...]}``,
oldest entries first. The default location sits inside ``.git`` so the log
never shows up as an untracked file.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from codegenius_store.base import BaseStore, StoreError
from codegenius_store.models import WorkHistory

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_PATH = ".git/work_history.json"


class JSONFileStore(BaseStore):
    def __init__(self, path: str = DEFAULT_HISTORY_PATH):
        self.path = Path(path or DEFAULT_HISTORY_PATH)

    def load(self) -> WorkHistory:
        if not self.path.exists():
            return WorkHistory()
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except OSError as e:
            raise StoreError(f"error reading work history file {self.path}: {e}") from e
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise StoreError(f"error parsing work history {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StoreError(f"error parsing work history {self.path}: expected a JSON object")
        entries = data.get("entries") or []
        if not isinstance(entries, list) or not all(isinstance(e, dict) for e in entries):
            raise StoreError(f"error parsing work history {self.path}: entries must be a list of objects")
        return WorkHistory.from_dict(data)

    def save(self, history: WorkHistory) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StoreError(f"error creating directory {self.path.parent}: {e}") from e
        try:
            self.path.write_text(json.dumps(history.to_dict(), indent=2), encoding="utf-8")
        except OSError as e:
            raise StoreError(f"error writing work history file {self.path}: {e}") from e
        logger.debug("Saved %d history entries to %s", len(history.entries), self.path)
