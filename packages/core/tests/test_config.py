"""Tests for configuration loading."""

import pytest
import yaml

from codegenius_core.config import (
    DEFAULT_REVIEW_TYPES,
    detect_project_language,
    load_config,
    review_types,
    write_config,
)
from codegenius_core.errors import ConfigError


def test_defaults_applied_when_no_config_file(tmp_path):
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["model"] == "gemini"
    assert config["timeout"] == 30
    assert config["max_retries"] == 3
    assert config["store"] == "json"
    assert config["history_path"] == ".git/work_history.json"
    assert config["review"]["enabled_types"] == DEFAULT_REVIEW_TYPES


def test_config_file_overrides_defaults(tmp_path):
    cfg = tmp_path / ".codegenius.yml"
    cfg.write_text("model: openai\ntimeout: 10\n")
    config = load_config(config_path=str(cfg))
    assert config["model"] == "openai"
    assert config["timeout"] == 10


def test_sections_are_merged_key_by_key(tmp_path):
    cfg = tmp_path / ".codegenius.yml"
    cfg.write_text("project:\n  name: Billing\nreview:\n  enabled_types:\n    - security\n")
    config = load_config(config_path=str(cfg))
    assert config["project"]["name"] == "Billing"
    assert "*.lock" in config["project"]["ignore_files"]
    assert config["review"]["enabled_types"] == ["security"]
    assert "bugfix" in config["ai"]["context_templates"]


def test_invalid_yaml_raises_config_error(tmp_path):
    cfg = tmp_path / ".codegenius.yml"
    cfg.write_text("model: [unterminated\n")
    with pytest.raises(ConfigError):
        load_config(config_path=str(cfg))


def test_non_mapping_file_raises_config_error(tmp_path):
    cfg = tmp_path / ".codegenius.yml"
    cfg.write_text("- just\n- a list\n")
    with pytest.raises(ConfigError):
        load_config(config_path=str(cfg))


def test_empty_file_uses_defaults(tmp_path):
    cfg = tmp_path / ".codegenius.yml"
    cfg.write_text("")
    assert load_config(config_path=str(cfg))["model"] == "gemini"


def test_cli_overrides_config_file(tmp_path):
    cfg = tmp_path / ".codegenius.yml"
    cfg.write_text("model: openai\n")
    config = load_config(config_path=str(cfg), cli_overrides={"model": "anthropic"})
    assert config["model"] == "anthropic"


def test_none_cli_overrides_ignored(tmp_path):
    cfg = tmp_path / ".codegenius.yml"
    cfg.write_text("model: openai\n")
    config = load_config(config_path=str(cfg), cli_overrides={"model": None})
    assert config["model"] == "openai"


def test_env_vars_loaded(monkeypatch, tmp_path):
    monkeypatch.setenv("GEMINI_API_KEY", "gem-key")
    monkeypatch.setenv("ANTHROPIC_API_KEY", "ant-key")
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["gemini_api_key"] == "gem-key"
    assert config["anthropic_api_key"] == "ant-key"
    assert config["openai_api_key"] is None


def test_nested_defaults_are_not_shared_reference(tmp_path):
    """Mutating one config's nested lists must not affect another."""
    config_a = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    config_b = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    config_a["project"]["ignore_files"].append("dist/")
    assert "dist/" not in config_b["project"]["ignore_files"]


class TestWriteConfig:
    def test_credentials_are_never_written(self, tmp_path, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "secret")
        config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
        config["api_key"] = "also-secret"
        path = tmp_path / ".codegenius.yml"

        write_config(config, str(path))

        text = path.read_text()
        assert "secret" not in text
        data = yaml.safe_load(text)
        assert data["model"] == "gemini"
        assert "gemini_api_key" not in data

    def test_written_file_loads_back(self, tmp_path):
        path = tmp_path / ".codegenius.yml"
        config = load_config(config_path=str(path))
        config["model"] = "anthropic"
        write_config(config, str(path))
        assert load_config(config_path=str(path))["model"] == "anthropic"


class TestDetectProjectLanguage:
    def test_go_module(self, tmp_path):
        (tmp_path / "go.mod").write_text("module example.com/x\n")
        assert detect_project_language(str(tmp_path)) == "go"

    def test_python_project(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text("[project]\n")
        assert detect_project_language(str(tmp_path)) == "python"

    def test_first_marker_wins(self, tmp_path):
        (tmp_path / "package.json").write_text("{}")
        (tmp_path / "requirements.txt").write_text("")
        assert detect_project_language(str(tmp_path)) == "javascript"

    def test_unknown(self, tmp_path):
        assert detect_project_language(str(tmp_path)) == "unknown"


class TestReviewTypes:
    def test_configured(self):
        assert review_types({"review": {"enabled_types": ["style"]}}) == ["style"]

    def test_empty_list_falls_back_to_defaults(self):
        assert review_types({"review": {"enabled_types": []}}) == DEFAULT_REVIEW_TYPES

    def test_missing_section(self):
        assert review_types({}) == DEFAULT_REVIEW_TYPES
