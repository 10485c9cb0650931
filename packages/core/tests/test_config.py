"""Tests for configuration loading."""

import pytest

from commitlens_core.config import api_key_for, load_config


@pytest.fixture(autouse=True)
def _clear_keys(monkeypatch):
    for name in ("GEMINI_API_KEY", "GOOGLE_API_KEY", "OPENAI_API_KEY", "ANTHROPIC_API_KEY"):
        monkeypatch.delenv(name, raising=False)


def test_defaults_applied_when_no_config_file(tmp_path):
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["provider"] == "gemini"
    assert config["model"] is None
    assert config["github_api_url"] == "https://api.github.com"
    assert config["default_repo_url"] == "https://github.com/facebook/react"


def test_config_file_overrides_defaults(tmp_path):
    cfg = tmp_path / ".commitlens.yml"
    cfg.write_text("provider: openai\nmodel: gpt-4o-mini\n")
    config = load_config(config_path=str(cfg))
    assert config["provider"] == "openai"
    assert config["model"] == "gpt-4o-mini"


def test_empty_config_file(tmp_path):
    cfg = tmp_path / ".commitlens.yml"
    cfg.write_text("")
    assert load_config(config_path=str(cfg))["provider"] == "gemini"


def test_cli_overrides_config_file(tmp_path):
    cfg = tmp_path / ".commitlens.yml"
    cfg.write_text("provider: openai\n")
    config = load_config(config_path=str(cfg), cli_overrides={"provider": "anthropic"})
    assert config["provider"] == "anthropic"


def test_none_cli_overrides_ignored(tmp_path):
    cfg = tmp_path / ".commitlens.yml"
    cfg.write_text("provider: openai\n")
    config = load_config(config_path=str(cfg), cli_overrides={"provider": None, "model": None})
    assert config["provider"] == "openai"


def test_env_vars_loaded(monkeypatch, tmp_path):
    monkeypatch.setenv("GEMINI_API_KEY", "gem-key")
    monkeypatch.setenv("OPENAI_API_KEY", "oai-key")
    monkeypatch.setenv("ANTHROPIC_API_KEY", "ant-key")
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["gemini_api_key"] == "gem-key"
    assert config["openai_api_key"] == "oai-key"
    assert config["anthropic_api_key"] == "ant-key"


def test_google_api_key_fallback(monkeypatch, tmp_path):
    monkeypatch.setenv("GOOGLE_API_KEY", "google-key")
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["gemini_api_key"] == "google-key"


def test_api_key_for_selected_provider():
    config = {"provider": "openai", "openai_api_key": "oai", "gemini_api_key": "gem"}
    assert api_key_for(config) == "oai"


def test_api_key_for_unknown_provider():
    assert api_key_for({"provider": "mystery"}) is None
