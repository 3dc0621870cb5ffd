"""Tests for configuration management."""
import json

import httpx
import pytest

from bodyfuzz import config
from bodyfuzz.config import PROVIDERS, get_api_key, get_timeout, load_config, save_config


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point the config file at a temp dir and clear provider env vars."""
    monkeypatch.setattr(config, "CONFIG_DIR", tmp_path)
    monkeypatch.setattr(config, "CONFIG_FILE", tmp_path / "config.json")
    for info in PROVIDERS.values():
        if info.env_var:
            monkeypatch.delenv(info.env_var, raising=False)
    monkeypatch.delenv("OLLAMA_HOST", raising=False)

    def no_ollama(*args, **kwargs):
        raise httpx.ConnectError("no ollama")

    monkeypatch.setattr(config.httpx, "get", no_ollama)
    return tmp_path / "config.json"


def test_providers_defined():
    """PROVIDERS should include the local default and hosted options."""
    assert "ollama" in PROVIDERS
    assert "openai" in PROVIDERS
    assert "anthropic" in PROVIDERS


def test_provider_entries_are_complete():
    for pid, info in PROVIDERS.items():
        assert info.name and info.base_url and info.model, f"Provider {pid} incomplete"
        assert info.base_url.startswith(("http://", "https://"))
    assert PROVIDERS["ollama"].env_var is None


def test_nothing_configured(isolated_config):
    assert get_api_key() == (None, None, None, None)


def test_env_var_wins(isolated_config, monkeypatch):
    save_config("anthropic", "file-key")
    monkeypatch.setenv("OPENAI_API_KEY", "env-key")
    provider, key, base_url, model = get_api_key()
    assert (provider, key) == ("openai", "env-key")
    assert base_url == PROVIDERS["openai"].base_url


def test_config_file_used(isolated_config):
    save_config("groq", "file-key")
    assert json.loads(isolated_config.read_text())["ai_provider"] == "groq"
    assert get_api_key()[:2] == ("groq", "file-key")


def test_ollama_selected_in_config(isolated_config, monkeypatch):
    monkeypatch.setenv("OLLAMA_HOST", "http://gpu-box:11434/")
    save_config("ollama")
    provider, key, base_url, model = get_api_key()
    assert provider == "ollama"
    assert key == ""
    assert base_url == "http://gpu-box:11434/v1"
    assert model == PROVIDERS["ollama"].model


def test_running_ollama_detected(isolated_config, monkeypatch):
    monkeypatch.setattr(config.httpx, "get", lambda *a, **k: httpx.Response(200, json={"models": []}))
    assert get_api_key()[0] == "ollama"


def test_corrupt_config_ignored(isolated_config):
    isolated_config.write_text("{not json")
    assert load_config() == {}


def test_timeout_from_config(isolated_config):
    assert get_timeout() == config.DEFAULT_TIMEOUT
    isolated_config.write_text(json.dumps({"timeout": 2.5}))
    assert get_timeout() == 2.5
    isolated_config.write_text(json.dumps({"timeout": "soon"}))
    assert get_timeout() == config.DEFAULT_TIMEOUT


def test_save_config_keeps_other_keys(isolated_config):
    isolated_config.write_text(json.dumps({"timeout": 3}))
    save_config("openai", "k")
    data = load_config()
    assert data["timeout"] == 3
    assert data["model"] == PROVIDERS["openai"].model
