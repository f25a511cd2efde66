"""Capability interfaces the CLI wires together.

Commands depend on these protocols rather than on GitRepository or a
concrete provider, so tests can pass in any object with the right methods.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class VersionControl(Protocol):
    def get_staged_diff(self) -> str: ...

    def get_changed_files(self) -> list[str]: ...

    def get_current_branch(self) -> str: ...

    def has_staged_changes(self) -> bool: ...

    def commit(self, message: str) -> None: ...

    def get_recent_commits(self, limit: int = 10) -> list[str]: ...

    def edit_message(self, message: str) -> str: ...


@runtime_checkable
class AIClient(Protocol):
    def analyze(self, text: str, category: str) -> str: ...

    def generate_commit_message(
        self,
        diff: str,
        files: list[str],
        branch: str,
        extra_context: str = "",
    ) -> str: ...
