"""Work history data models.

Decoupled from codegenius_core so the store layer can be used independently
and codegenius_core has no knowledge of persistence concerns.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class HistoryEntry:
    """One accepted commit message. Entries from the same day share a date."""

    date: str  # "02 Jan 2024", no time component
    summary: str

    def to_dict(self) -> dict:
        return {"date": self.date, "summary": self.summary}

    @classmethod
    def from_dict(cls, d: dict) -> HistoryEntry:
        return cls(date=str(d.get("date", "")), summary=str(d.get("summary", "")))


@dataclass
class WorkHistory:
    """Insertion-ordered log of history entries, persisted as a whole."""

    entries: list[HistoryEntry] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"entries": [e.to_dict() for e in self.entries]}

    @classmethod
    def from_dict(cls, d: dict) -> WorkHistory:
        return cls(entries=[HistoryEntry.from_dict(e) for e in d.get("entries") or []])


@dataclass
class HistoryStats:
    total_commits: int = 0
    monthly_breakdown: dict[str, int] = field(default_factory=dict)
    most_active_month: str = ""
