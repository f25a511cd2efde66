"""Exception hierarchy shared by every codegenius layer.

The CLI catches CodeGeniusError at the command boundary and turns it into a
readable non-zero exit. Core code never prints errors itself.
"""

from __future__ import annotations


class CodeGeniusError(Exception):
    """Base class for all errors raised by codegenius_core."""


class ConfigError(CodeGeniusError):
    """A required setting is missing or the config file cannot be used."""


class ProviderError(CodeGeniusError):
    """The AI provider failed or returned nothing usable."""


class GitError(CodeGeniusError):
    """A git command failed, or the working directory is not a repository."""


class ValidationError(CodeGeniusError, ValueError):
    """Input rejected before any side effect (blank message, unknown review type)."""
