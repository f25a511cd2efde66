"""Filtering of staged file names against ``project.ignore_files``."""

import fnmatch


def _as_directory(pattern: str) -> str:
    return pattern.rstrip("/") + "/"


def should_ignore_file(filename: str, patterns: list[str]) -> bool:
    """True when ``filename`` is covered by one of the ignore patterns.

    A pattern hides a file when it globs the whole path, globs just the file
    name (so "*.lock" catches lock files at any depth), or names a directory
    anywhere on the path ("node_modules/" and "node_modules" behave the same).
    """
    basename = filename.rsplit("/", 1)[-1]
    padded = "/" + filename
    for pattern in patterns:
        if fnmatch.fnmatch(filename, pattern) or fnmatch.fnmatch(basename, pattern):
            return True
        if "/" + _as_directory(pattern) in padded:
            return True
    return False


def filter_files(files: list[str], patterns: list[str]) -> list[str]:
    """Keep the files no pattern ignores, in their original order."""
    return [f for f in files if not should_ignore_file(f, patterns)]
