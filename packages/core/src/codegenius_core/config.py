import copy
import os
from pathlib import Path
from typing import Optional

import yaml

from codegenius_core.errors import ConfigError

DEFAULT_CONFIG_PATH = ".codegenius.yml"

DEFAULT_REVIEW_TYPES = ["security", "performance", "style", "structure"]

DEFAULT_CONFIG: dict = {
    "model": "gemini",  # gemini | anthropic | openai
    "timeout": 30,  # seconds per AI request
    "max_retries": 3,
    "max_diff_chars": 20000,
    "store": "json",  # json | none
    "history_path": ".git/work_history.json",
    "project": {
        "name": "My Project",
        "language": "unknown",
        "overview": "",
        "scopes": ["core", "api", "docs", "deps", "scripts", "ci", "build"],
        "ignore_files": ["*.lock", "node_modules/", ".git/"],
    },
    "ai": {
        "gemini_model": "gemini-2.0-flash",
        "context_templates": {
            "default": "This is a standard commit message generation request.",
            "bugfix": "Focus on describing the bug that was fixed and its impact.",
            "feature": "Emphasize the new functionality and its benefits to users.",
        },
    },
    "review": {
        "enabled_types": list(DEFAULT_REVIEW_TYPES),
    },
}

# Environment variable holding the API key for each provider.
API_KEY_ENV = {
    "gemini": "GEMINI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "openai": "OPENAI_API_KEY",
}

_SECTIONS = ("project", "ai", "review")
_CREDENTIAL_KEYS = ("gemini_api_key", "anthropic_api_key", "openai_api_key")

# Marker file → language, checked in order.
_LANGUAGE_MARKERS = [
    ("go.mod", "go"),
    ("package.json", "javascript"),
    ("pyproject.toml", "python"),
    ("requirements.txt", "python"),
    ("Cargo.toml", "rust"),
    ("pom.xml", "java"),
    ("Gemfile", "ruby"),
]


def load_config(config_path: str = DEFAULT_CONFIG_PATH, cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .codegenius.yml in the current directory
      3. CLI argument overrides

    The ``project``, ``ai`` and ``review`` sections are merged key by key so a
    file that only sets ``review.enabled_types`` keeps the default ``ai`` block.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        try:
            with open(path) as f:
                file_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Could not parse {config_path}: {e}") from e
        if not isinstance(file_config, dict):
            raise ConfigError(f"{config_path} must contain a YAML mapping at the top level.")
        for key, value in file_config.items():
            if key in _SECTIONS and isinstance(value, dict):
                config[key].update(value)
            else:
                config[key] = value

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    # Resolve credentials from environment variables
    config["gemini_api_key"] = os.environ.get("GEMINI_API_KEY")
    config["anthropic_api_key"] = os.environ.get("ANTHROPIC_API_KEY")
    config["openai_api_key"] = os.environ.get("OPENAI_API_KEY")

    return config


def write_config(config: dict, config_path: str = DEFAULT_CONFIG_PATH) -> None:
    """Write the user-facing part of ``config`` to YAML. Credentials are never written."""
    data = {k: v for k, v in config.items() if k not in _CREDENTIAL_KEYS and k != "api_key"}
    Path(config_path).write_text(yaml.dump(data, default_flow_style=False, sort_keys=False))


def detect_project_language(root: str = ".") -> str:
    """Guess the project language from well-known marker files in ``root``."""
    base = Path(root)
    for marker, language in _LANGUAGE_MARKERS:
        if (base / marker).exists():
            return language
    return "unknown"


def review_types(config: dict) -> list[str]:
    """Return the configured review categories, or the defaults when none are set."""
    types = (config.get("review") or {}).get("enabled_types") or []
    return list(types) if types else list(DEFAULT_REVIEW_TYPES)
