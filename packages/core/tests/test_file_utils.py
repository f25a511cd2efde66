"""Tests for file filtering and text truncation utilities."""

from codegenius_core.utils.files import filter_files, should_ignore_file
from codegenius_core.utils.text import truncate_diff, truncate_line


class TestShouldIgnoreFile:
    def test_basename_glob(self):
        assert should_ignore_file("frontend/yarn.lock", ["*.lock"]) is True

    def test_full_path_glob(self):
        assert should_ignore_file("src/generated/api.py", ["src/generated/*.py"]) is True

    def test_directory_prefix(self):
        assert should_ignore_file("node_modules/react/index.js", ["node_modules/"]) is True

    def test_nested_directory(self):
        assert should_ignore_file("web/node_modules/react/index.js", ["node_modules/"]) is True

    def test_directory_without_trailing_slash(self):
        assert should_ignore_file("vendor/lib.go", ["vendor"]) is True

    def test_similar_name_is_not_a_directory_match(self):
        assert should_ignore_file("vendored.go", ["vendor/"]) is False

    def test_no_patterns(self):
        assert should_ignore_file("app.py", []) is False


class TestFilterFiles:
    def test_keeps_order(self):
        files = ["b.py", "poetry.lock", "a.py", ".git/config"]
        assert filter_files(files, ["*.lock", ".git/"]) == ["b.py", "a.py"]


class TestTruncation:
    def test_short_diff_unchanged(self):
        assert truncate_diff("+a", 100) == "+a"

    def test_long_diff_is_marked(self):
        result = truncate_diff("x" * 50, 10)
        assert result.startswith("x" * 10)
        assert result.endswith("[diff truncated]")

    def test_zero_limit_disables_truncation(self):
        assert truncate_diff("x" * 50, 0) == "x" * 50

    def test_truncate_line(self):
        assert truncate_line("a" * 70, 60) == "a" * 57 + "..."
        assert truncate_line("short", 60) == "short"
