"""Work history operations on top of a BaseStore.

WorkHistoryManager owns the in-memory log for one run: it loads the whole
log on first use, appends accepted commit messages and rewrites the store on
every append. Filtering, statistics and grouping all preserve insertion order
inside a group.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import date

from codegenius_store.base import BaseStore, StoreError
from codegenius_store.models import HistoryEntry, HistoryStats, WorkHistory

logger = logging.getLogger(__name__)

# Fixed English abbreviations so stored dates do not depend on the process locale.
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
_MONTH_INDEX = {name: i + 1 for i, name in enumerate(_MONTHS)}


def format_date(d: date) -> str:
    """Format as "02 Jan 2024"."""
    return f"{d.day:02d} {_MONTHS[d.month - 1]} {d.year:04d}"


def parse_date(value: str) -> date | None:
    """Parse a "02 Jan 2024" string, or return None if it is not in that shape."""
    parts = value.split()
    if len(parts) != 3 or parts[1] not in _MONTH_INDEX:
        return None
    try:
        return date(int(parts[2]), _MONTH_INDEX[parts[1]], int(parts[0]))
    except ValueError:
        return None


def month_label(date_str: str) -> str:
    """Return "<Mon> <YYYY>" for an entry date.

    Unparseable dates fall back to their second and third words, or to the
    raw string when there are fewer than three.
    """
    parsed = parse_date(date_str)
    if parsed is not None:
        return f"{_MONTHS[parsed.month - 1]} {parsed.year:04d}"
    parts = date_str.split()
    if len(parts) >= 3:
        return f"{parts[1]} {parts[2]}"
    return date_str


def _chronological_key(label: str) -> tuple:
    parts = label.split()
    if len(parts) == 2 and parts[0] in _MONTH_INDEX and parts[1].isdigit():
        return (0, int(parts[1]), _MONTH_INDEX[parts[0]], 0, label)
    parsed = parse_date(label)
    if parsed is not None:
        return (0, parsed.year, parsed.month, parsed.day, label)
    return (1, 0, 0, 0, label)


def _group(entries: Iterable[HistoryEntry], key: Callable[[HistoryEntry], str]) -> dict[str, list[HistoryEntry]]:
    groups: dict[str, list[HistoryEntry]] = {}
    for entry in entries:
        groups.setdefault(key(entry), []).append(entry)
    return {label: groups[label] for label in sorted(groups, key=_chronological_key)}


def group_by_date(entries: Iterable[HistoryEntry]) -> dict[str, list[HistoryEntry]]:
    """Group entries by exact date string, oldest date first."""
    return _group(entries, lambda e: e.date)


def group_by_month(entries: Iterable[HistoryEntry]) -> dict[str, list[HistoryEntry]]:
    """Group entries by month label, oldest month first."""
    return _group(entries, lambda e: month_label(e.date))


class WorkHistoryManager:
    def __init__(self, store: BaseStore, today: Callable[[], date] = date.today):
        self.store = store
        self._today = today
        self._history: WorkHistory | None = None

    @property
    def is_loaded(self) -> bool:
        return self._history is not None

    def load(self) -> WorkHistory:
        self._history = self.store.load()
        return self._history

    def save(self) -> None:
        if self._history is None:
            raise StoreError("no history data to save")
        self.store.save(self._history)

    def _ensure_loaded(self) -> WorkHistory:
        if self._history is None:
            return self.load()
        return self._history

    @property
    def entries(self) -> list[HistoryEntry]:
        return list(self._ensure_loaded().entries)

    def add_entry(self, message: str) -> HistoryEntry:
        """Append ``message`` dated today and persist the whole log.

        A blank message raises ValueError before anything is loaded or written.
        """
        if not message.strip():
            raise ValueError("commit message cannot be empty")

        history = self._ensure_loaded()
        entry = HistoryEntry(date=format_date(self._today()), summary=message)
        history.entries.append(entry)
        self.save()
        return entry

    def clear(self) -> None:
        self._history = WorkHistory()
        self.save()

    def filter_by_month_year(self, token: str) -> list[HistoryEntry]:
        """Entries whose date contains ``token`` as a plain substring."""
        return [e for e in self._ensure_loaded().entries if token in e.date]

    def entries_for_date(self, date_str: str) -> list[HistoryEntry]:
        return [e for e in self._ensure_loaded().entries if e.date == date_str]

    def entries_in_range(self, start: date, end: date) -> list[HistoryEntry]:
        """Entries dated between ``start`` and ``end`` inclusive. Unparseable dates are skipped."""
        results = []
        for entry in self._ensure_loaded().entries:
            parsed = parse_date(entry.date)
            if parsed is not None and start <= parsed <= end:
                results.append(entry)
        return results

    def get_stats(self) -> HistoryStats:
        """Total commits, per-month counts and the most active month.

        Ties for most active go to the month that appears first in the log.
        """
        entries = self._ensure_loaded().entries
        breakdown: dict[str, int] = {}
        for entry in entries:
            label = month_label(entry.date)
            breakdown[label] = breakdown.get(label, 0) + 1

        most_active = ""
        best = 0
        for label, count in breakdown.items():
            if count > best:
                best = count
                most_active = label

        return HistoryStats(
            total_commits=len(entries),
            monthly_breakdown=breakdown,
            most_active_month=most_active,
        )
