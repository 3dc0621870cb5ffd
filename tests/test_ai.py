"""Tests for LLM-assisted test case generation."""
import asyncio
import json

import httpx
import pytest

from bodyfuzz.ai import AICaseGenerator, AIGenerationError, LLMClient, summarize_categories
from bodyfuzz.importer import import_cases


def _client(handler, provider="ollama") -> LLMClient:
    return LLMClient(
        provider=provider,
        api_key="k",
        base_url="http://llm.test/v1/",
        model="llama3:latest",
        transport=httpx.MockTransport(handler),
    )


def _completion(content: str) -> httpx.Response:
    return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})


MODEL_OUTPUT = """Here are your test cases:
[
  {
    name: "Valid user",
    "description": "Happy path",
    "category": "valid",
    "fields": {"email": "a@b.com"},  // normal input
    "expectedResponse": {"status": 201, "message": "Created"},
  },
  {
    "name": "Same fields again",
    "description": "Duplicate of the first",
    "category": "valid",
    "fields": {"email": "a@b.com"}
  },
  /* missing description */
  {"name": "No description", "fields": {"email": ""}},
  {
    "name": "SQL injection",
    "description": "Quote in email",
    "category": "security",
    "fields": {"email": "' OR 1=1 --"}
  }
]
Hope this helps."""


# ─── Parsing ─────────────────────────────────────────────────────────────────

def test_parse_cases_cleans_and_validates():
    cases = AICaseGenerator(_client(lambda r: _completion(""))).parse_cases(MODEL_OUTPUT)

    assert [c["name"] for c in cases] == ["Valid user", "SQL injection"]
    for case in cases:
        assert case["generated"] is True
        assert case["id"].startswith("tc_")
        assert case["timestamp"]


def test_parse_cases_without_array():
    gen = AICaseGenerator(_client(lambda r: _completion("")))
    with pytest.raises(AIGenerationError, match="No valid JSON array"):
        gen.parse_cases("I cannot help with that.")


def test_parse_cases_unparseable_array():
    gen = AICaseGenerator(_client(lambda r: _completion("")))
    with pytest.raises(AIGenerationError, match="Failed to parse"):
        gen.parse_cases('[{"name": "x", "fields": {"a": "x" * 256}}]')


def test_parse_cases_quotes_bare_keys():
    gen = AICaseGenerator(_client(lambda r: _completion("")))
    cases = gen.parse_cases('[{name: "x", description: "d", fields: {email: "a@b.com"},}]')
    assert cases[0]["fields"] == {"email": "a@b.com"}


def test_parse_cases_key_quoting_reaches_into_strings():
    """Text shaped like ", word:" inside a string value is rewritten as a key."""
    gen = AICaseGenerator(_client(lambda r: _completion("")))
    with pytest.raises(AIGenerationError, match="Failed to parse"):
        gen.parse_cases('[{"name": "x", "description": "a, b: c", "fields": {}}]')


def test_summarize_categories():
    cases = [{"category": "valid"}, {"category": "security"}, {"category": "valid"}, {}]
    assert summarize_categories(cases) == {"valid": 2, "invalid": 0, "security": 1, "edge": 0}


def test_generated_cases_feed_bulk_import():
    cases = AICaseGenerator(_client(lambda r: _completion(""))).parse_cases(MODEL_OUTPUT)
    imported = import_cases(json.dumps(cases), {"email": "base@example.com", "name": "A"})
    assert imported[0].expected_status == 201
    assert imported[1].body == {"email": "' OR 1=1 --", "name": "A"}


# ─── LLM round trip ──────────────────────────────────────────────────────────

def test_generate_calls_openai_compatible_endpoint():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("authorization")
        seen["payload"] = json.loads(request.content)
        return _completion(MODEL_OUTPUT)

    cases = asyncio.run(AICaseGenerator(_client(handler)).generate('{"email": "a@b.com"}'))

    assert len(cases) == 2
    assert seen["url"] == "http://llm.test/v1/chat/completions"
    assert seen["auth"] == "Bearer k"
    assert seen["payload"]["model"] == "llama3:latest"
    assert '{"email": "a@b.com"}' in seen["payload"]["messages"][1]["content"]


def test_generate_includes_history():
    seen = {}

    def handler(request):
        seen["payload"] = json.loads(request.content)
        return _completion(MODEL_OUTPUT)

    asyncio.run(AICaseGenerator(_client(handler)).generate("{}", history=["PREVIOUS"]))
    assert "PREVIOUS" in seen["payload"]["messages"][1]["content"]


def test_anthropic_provider():
    def handler(request):
        assert str(request.url) == "http://llm.test/v1/messages"
        assert request.headers["x-api-key"] == "k"
        return httpx.Response(200, json={"content": [{"text": "hello"}]})

    assert asyncio.run(_client(handler, provider="anthropic").chat("s", "u")) == "hello"


def test_server_error_raises_generation_error():
    gen = AICaseGenerator(_client(lambda r: httpx.Response(500, text="boom")))
    with pytest.raises(AIGenerationError, match="no response"):
        asyncio.run(gen.generate('{"a": 1}'))


def test_empty_body_rejected():
    gen = AICaseGenerator(_client(lambda r: _completion(MODEL_OUTPUT)))
    with pytest.raises(AIGenerationError, match="Invalid request body"):
        asyncio.run(gen.generate(""))


def test_unavailable_provider():
    client = LLMClient(provider="ollama")
    client.provider = None
    assert not client.available
    assert asyncio.run(client.chat("s", "u")) is None
    with pytest.raises(AIGenerationError, match="No AI provider"):
        asyncio.run(AICaseGenerator(client).generate("{}"))
