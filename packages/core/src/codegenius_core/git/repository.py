"""Local git access through the git command-line tool."""

from __future__ import annotations

import logging
import os
import subprocess
import tempfile

from codegenius_core.errors import GitError, ValidationError
from codegenius_core.utils.files import should_ignore_file

logger = logging.getLogger(__name__)

_GIT_TIMEOUT = 30
# Added/removed lines shorter than this carry too little signal for the digest.
_MIN_CHANGE_LEN = 10
_MAX_KEY_CHANGES = 5


class GitRepository:
    """Thin wrapper over ``git`` run in ``working_dir``.

    Every failing git invocation raises GitError carrying git's stderr.
    """

    def __init__(self, working_dir: str = "."):
        self.working_dir = working_dir or "."

    def _run(self, *args: str, check: bool = True) -> subprocess.CompletedProcess:
        try:
            result = subprocess.run(
                ["git", *args],
                cwd=self.working_dir,
                capture_output=True,
                text=True,
                timeout=_GIT_TIMEOUT,
            )
        except FileNotFoundError:
            raise GitError("git executable not found on PATH")
        except subprocess.TimeoutExpired:
            raise GitError(f"git {args[0]} timed out after {_GIT_TIMEOUT}s")
        if check and result.returncode != 0:
            raise GitError(f"git {' '.join(args)} failed: {result.stderr.strip() or result.returncode}")
        return result

    def ensure_repo(self) -> None:
        result = self._run("rev-parse", "--git-dir", check=False)
        if result.returncode != 0:
            raise GitError("not a git repository (or any of the parent directories)")

    def get_staged_diff(self) -> str:
        self.ensure_repo()
        return self._run("diff", "--cached").stdout

    def get_changed_files(self) -> list[str]:
        self.ensure_repo()
        output = self._run("diff", "--cached", "--name-only").stdout
        return [line for line in output.strip().split("\n") if line]

    def get_current_branch(self) -> str:
        self.ensure_repo()
        return self._run("branch", "--show-current").stdout.strip()

    def get_recent_commits(self, limit: int = 10) -> list[str]:
        self.ensure_repo()
        output = self._run("log", f"-{limit}", "--pretty=format:%s").stdout
        return [line for line in output.strip().split("\n") if line]

    def has_staged_changes(self) -> bool:
        self.ensure_repo()
        # --quiet exits 1 when there are differences, 0 when there are none.
        result = self._run("diff", "--cached", "--quiet", check=False)
        if result.returncode == 1:
            return True
        if result.returncode == 0:
            return False
        raise GitError(f"error checking staged changes: {result.stderr.strip()}")

    def is_clean(self) -> bool:
        self.ensure_repo()
        return self._run("status", "--porcelain").stdout.strip() == ""

    def commit(self, message: str) -> None:
        if not message.strip():
            raise ValidationError("commit message cannot be empty")
        self.ensure_repo()
        self._run("commit", "-m", message)
        logger.debug("Committed: %s", message.splitlines()[0])

    def edit_message(self, message: str) -> str:
        """Open ``$EDITOR`` (default nano) on ``message`` and return the edited text."""
        editor = os.environ.get("EDITOR") or "nano"
        fd, path = tempfile.mkstemp(prefix="commit_message_", suffix=".txt")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(message)
            try:
                subprocess.run([editor, path], cwd=self.working_dir, check=True)
            except (FileNotFoundError, subprocess.CalledProcessError) as e:
                raise GitError(f"error running editor {editor!r}: {e}")
            with open(path, encoding="utf-8") as f:
                return f.read().strip()
        finally:
            os.unlink(path)


def analyze_diff_context(diff: str, ignore_patterns: list[str] | None = None) -> tuple[str, list[str]]:
    """Build a short "Modified files / Key changes" digest from a unified diff.

    Returns the digest and the list of files named in ``diff --git`` headers,
    minus those matching ``ignore_patterns``.
    """
    patterns = ignore_patterns or []
    files: list[str] = []
    changes: list[str] = []
    current_ignored = False

    for raw in diff.split("\n"):
        line = raw.strip()
        if not line:
            continue
        if line.startswith("diff --git"):
            # diff --git a/path b/path
            path = line.split()[-1]
            if path.startswith("b/"):
                path = path[2:]
            current_ignored = should_ignore_file(path, patterns)
            if not current_ignored:
                files.append(path)
            continue
        if current_ignored or len(line) <= _MIN_CHANGE_LEN:
            continue
        if line.startswith("+") and not line.startswith("+++"):
            changes.append(line[1:])
        elif line.startswith("-") and not line.startswith("---"):
            changes.append("REMOVED: " + line[1:])

    context = f"Modified files: {', '.join(files)}\nKey changes: {'; '.join(changes[:_MAX_KEY_CHANGES])}"
    return context, files
