"""Tests for the git command wrapper and diff digest."""

import subprocess
from unittest.mock import MagicMock

import pytest

from codegenius_core.errors import GitError, ValidationError
from codegenius_core.git.repository import GitRepository, analyze_diff_context


def _completed(returncode=0, stdout="", stderr=""):
    return MagicMock(returncode=returncode, stdout=stdout, stderr=stderr)


@pytest.fixture
def run(mocker):
    return mocker.patch("codegenius_core.git.repository.subprocess.run", return_value=_completed())


class TestGitRepository:
    def test_staged_diff(self, run):
        run.return_value = _completed(stdout="diff --git a/x b/x\n")
        assert GitRepository("/repo").get_staged_diff() == "diff --git a/x b/x\n"

        args = run.call_args.args[0]
        assert args == ["git", "diff", "--cached"]
        assert run.call_args.kwargs["cwd"] == "/repo"

    def test_changed_files_drops_blank_lines(self, run):
        run.return_value = _completed(stdout="a.py\nb/c.py\n\n")
        assert GitRepository().get_changed_files() == ["a.py", "b/c.py"]

    def test_current_branch_is_stripped(self, run):
        run.return_value = _completed(stdout="feature/login\n")
        assert GitRepository().get_current_branch() == "feature/login"

    def test_recent_commits_uses_limit(self, run):
        run.return_value = _completed(stdout="feat: a\nfix: b")
        assert GitRepository().get_recent_commits(limit=2) == ["feat: a", "fix: b"]
        assert "-2" in run.call_args.args[0]

    def test_not_a_repository(self, run):
        run.return_value = _completed(returncode=128, stderr="fatal: not a git repository")
        with pytest.raises(GitError, match="not a git repository"):
            GitRepository().get_staged_diff()

    def test_git_failure_carries_stderr(self, run):
        run.side_effect = [_completed(), _completed(returncode=1, stderr="bad revision")]
        with pytest.raises(GitError, match="bad revision"):
            GitRepository().get_current_branch()

    def test_missing_git_binary(self, run):
        run.side_effect = FileNotFoundError("git")
        with pytest.raises(GitError, match="not found"):
            GitRepository().ensure_repo()

    def test_timeout(self, run):
        run.side_effect = subprocess.TimeoutExpired(cmd="git", timeout=30)
        with pytest.raises(GitError, match="timed out"):
            GitRepository().ensure_repo()


class TestHasStagedChanges:
    def test_exit_one_means_changes(self, run):
        run.side_effect = [_completed(), _completed(returncode=1)]
        assert GitRepository().has_staged_changes() is True

    def test_exit_zero_means_clean_index(self, run):
        run.side_effect = [_completed(), _completed(returncode=0)]
        assert GitRepository().has_staged_changes() is False

    def test_other_exit_code_is_an_error(self, run):
        run.side_effect = [_completed(), _completed(returncode=129, stderr="usage")]
        with pytest.raises(GitError):
            GitRepository().has_staged_changes()


class TestCommit:
    def test_commit_passes_message(self, run):
        GitRepository().commit("feat: add login")
        assert run.call_args.args[0] == ["git", "commit", "-m", "feat: add login"]

    def test_blank_message_rejected_before_running_git(self, run):
        with pytest.raises(ValidationError):
            GitRepository().commit("   ")
        run.assert_not_called()

    def test_is_clean(self, run):
        run.side_effect = [_completed(), _completed(stdout=" M app.py\n")]
        assert GitRepository().is_clean() is False


class TestEditMessage:
    def test_returns_edited_text(self, mocker, monkeypatch):
        monkeypatch.setenv("EDITOR", "fake-editor")

        def fake_editor(cmd, **kwargs):
            with open(cmd[1], "w", encoding="utf-8") as f:
                f.write("fix: edited message\n")
            return _completed()

        run = mocker.patch("codegenius_core.git.repository.subprocess.run", side_effect=fake_editor)
        assert GitRepository().edit_message("fix: draft") == "fix: edited message"
        assert run.call_args.args[0][0] == "fake-editor"

    def test_editor_failure(self, mocker, monkeypatch):
        monkeypatch.setenv("EDITOR", "missing-editor")
        mocker.patch("codegenius_core.git.repository.subprocess.run", side_effect=FileNotFoundError("missing"))
        with pytest.raises(GitError, match="missing-editor"):
            GitRepository().edit_message("draft")


DIFF = """diff --git a/app/server.py b/app/server.py
index 1111111..2222222 100644
--- a/app/server.py
+++ b/app/server.py
@@ -1,3 +1,3 @@
-    timeout = read_timeout()
+    timeout = read_timeout(default=30)
+x = 1
diff --git a/poetry.lock b/poetry.lock
--- a/poetry.lock
+++ b/poetry.lock
+some-locked-dependency = "1.0"
"""


class TestAnalyzeDiffContext:
    def test_files_and_key_changes(self):
        context, files = analyze_diff_context(DIFF)
        assert files == ["app/server.py", "poetry.lock"]
        assert "Modified files: app/server.py, poetry.lock" in context
        assert "REMOVED: " in context
        assert "timeout = read_timeout(default=30)" in context

    def test_short_lines_are_skipped(self):
        context, _ = analyze_diff_context(DIFF)
        assert "x = 1" not in context

    def test_ignored_files_are_dropped(self):
        context, files = analyze_diff_context(DIFF, ["*.lock"])
        assert files == ["app/server.py"]
        assert "some-locked-dependency" not in context

    def test_at_most_five_changes(self):
        diff = "diff --git a/a.py b/a.py\n" + "".join(f"+value_{n} = compute_something()\n" for n in range(8))
        context, _ = analyze_diff_context(diff)
        assert "value_4" in context
        assert "value_5" not in context

    def test_empty_diff(self):
        assert analyze_diff_context("") == ("Modified files: \nKey changes: ", [])
