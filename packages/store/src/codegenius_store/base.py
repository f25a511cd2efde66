"""Abstract store interface.

The history manager and the CLI depend on BaseStore, not on a concrete
backend, so backends are swappable without touching either.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from codegenius_store.models import WorkHistory


class StoreError(Exception):
    """Reading or writing the persisted work history failed."""


class BaseStore(ABC):
    """Whole-log persistence for the work history.

    The log is always read and written in full; there are no partial updates
    and no locking, so two processes saving the same store can lose updates.
    """

    @abstractmethod
    def load(self) -> WorkHistory:
        """Return the persisted history, or an empty one if nothing is stored yet.

        Raises StoreError when stored data exists but cannot be read.
        """

    @abstractmethod
    def save(self, history: WorkHistory) -> None:
        """Replace the persisted history with ``history``.

        Raises StoreError when the location cannot be created or written.
        """

    def close(self) -> None:
        """Release any resources held by the store (connections, file handles).

        Optional; subclasses that need cleanup should override this.
        Default is a no-op so callers can always call close() safely.
        """
