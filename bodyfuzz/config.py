"""
bodyfuzz configuration — AI provider config and runner defaults.

Config file: ~/.bodyfuzz/config.json
Resolution order: env var → config file → local Ollama → None
"""

import json
import os
from pathlib import Path
from typing import NamedTuple, Optional, Tuple

import httpx

CONFIG_DIR = Path.home() / ".bodyfuzz"
CONFIG_FILE = CONFIG_DIR / "config.json"

DEFAULT_TIMEOUT = 10.0
DEFAULT_METHOD = "POST"


class Provider(NamedTuple):
    name: str
    base_url: str
    model: str
    env_var: Optional[str]  # None: no key needed
    key_url: str
    note: str


PROVIDERS = {
    "ollama": Provider("Ollama", "http://localhost:11434/v1", "llama3:latest",
                       None, "https://ollama.com/download", "local, free"),
    "openai": Provider("OpenAI", "https://api.openai.com/v1", "gpt-4o-mini",
                       "OPENAI_API_KEY", "https://platform.openai.com/api-keys", "GPT-4o"),
    "groq": Provider("Groq", "https://api.groq.com/openai/v1", "llama-3.3-70b-versatile",
                     "GROQ_API_KEY", "https://console.groq.com/keys", "fast, free tier"),
    "anthropic": Provider("Anthropic", "https://api.anthropic.com/v1", "claude-sonnet-4-20250514",
                          "ANTHROPIC_API_KEY", "https://console.anthropic.com/", "Claude"),
}

Resolved = Tuple[Optional[str], Optional[str], Optional[str], Optional[str]]


def ollama_host() -> str:
    """Ollama server root, overridable with OLLAMA_HOST."""
    return os.environ.get("OLLAMA_HOST", "http://localhost:11434").rstrip("/")


def load_config() -> dict:
    """Read ~/.bodyfuzz/config.json; a missing or unreadable file is empty."""
    try:
        return json.loads(CONFIG_FILE.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return {}


def save_config(provider: str, api_key: str = "") -> None:
    """Merge the chosen provider into the config file, keeping other keys."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)

    config = load_config()
    config["ai_provider"] = provider
    config["api_key"] = api_key
    known = PROVIDERS.get(provider)
    config["model"] = known.model if known else ""
    config["base_url"] = known.base_url if known else ""
    CONFIG_FILE.write_text(json.dumps(config, indent=2), encoding="utf-8")


def get_timeout() -> float:
    """Per-request timeout for the HTTP runner (config key ``timeout``)."""
    try:
        return float(load_config().get("timeout", DEFAULT_TIMEOUT))
    except (TypeError, ValueError):
        return DEFAULT_TIMEOUT


def _from_env() -> Optional[Resolved]:
    for provider_id, p in PROVIDERS.items():
        if p.env_var and os.environ.get(p.env_var):
            return provider_id, os.environ[p.env_var], p.base_url, p.model
    return None


def _from_file(config: dict) -> Optional[Resolved]:
    provider_id = config.get("ai_provider")
    if not (provider_id and config.get("api_key")):
        return None
    known = PROVIDERS.get(provider_id)
    return (
        provider_id,
        config["api_key"],
        config.get("base_url") or (known.base_url if known else ""),
        config.get("model") or (known.model if known else ""),
    )


def _ollama_running() -> bool:
    try:
        return httpx.get(f"{ollama_host()}/api/tags", timeout=2.0).status_code == 200
    except httpx.HTTPError:
        return False


def get_api_key() -> Resolved:
    """
    Resolve the AI provider as (provider, api_key, base_url, model).

    Provider env vars win over the config file. Ollama needs no key: it is
    used when the config file selects it or when a local server answers.
    Returns all None when nothing is available.
    """
    resolved = _from_env()
    if resolved:
        return resolved

    config = load_config()
    resolved = _from_file(config)
    if resolved:
        return resolved

    model = PROVIDERS["ollama"].model
    if config.get("ai_provider") == "ollama":
        return "ollama", "", f"{ollama_host()}/v1", config.get("model") or model
    if _ollama_running():
        return "ollama", "", f"{ollama_host()}/v1", model

    return None, None, None, None
