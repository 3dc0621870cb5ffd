"""AI case generator — asks an LLM for test cases against a request body."""

import json
import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, List

from bodyfuzz.ai.llm_client import LLMClient

logger = logging.getLogger(__name__)

CATEGORIES = ("valid", "invalid", "security", "edge")

CASE_SYSTEM_PROMPT = """You are a testing expert. Given an API request body,
generate ALL useful test cases for it.

STRICT RULES:
1. Use ONLY plain string values
2. NO string multiplication (e.g., NO "x" * 256)
3. NO JavaScript expressions or code
4. NO concatenation operations
5. Write out the full string for long values
6. Return ONE single JSON array

Format your response as ONE array:
[
  {
    "name": "Valid Input Test",
    "description": "Test with valid input values",
    "category": "valid" | "invalid" | "security" | "edge",
    "fields": {"fieldName": "actual plain string value"},
    "expectedResponse": {"status": 200, "message": "Success message here"}
  }
]

Include test cases for:
- Valid data (happy path, short values, long values)
- Invalid data (missing fields, empty values, invalid formats)
- Security tests (SQL injection, XSS, special chars)
- Edge cases (max length, whitespace, boundaries)

Response must be ONE valid JSON array only. No headers, no sections, no explanations."""


class AIGenerationError(RuntimeError):
    """The model gave no usable test cases."""


class AICaseGenerator:
    """Generates import-ready test case objects using an LLM."""

    def __init__(self, client: LLMClient | None = None):
        self.client = client or LLMClient()

    @property
    def available(self) -> bool:
        return self.client.available

    async def generate(self, request_body: str, history: List[str] | None = None) -> List[Dict[str, Any]]:
        """Return validated, de-duplicated case dicts in the bulk-import shape."""
        if not request_body or not isinstance(request_body, str):
            raise AIGenerationError("Invalid request body provided")
        if not self.available:
            raise AIGenerationError("No AI provider configured. Run `bodyfuzz setup`.")

        prompt = f"Analyze this API request body and generate test cases:\n{request_body}"
        if history:
            prompt += "\n\nPreviously generated (do not repeat these):\n" + "\n".join(history)

        response = await self.client.chat(CASE_SYSTEM_PROMPT, prompt)
        if not response:
            raise AIGenerationError(f"{self.client.provider} returned no response")

        return self.parse_cases(response)

    def parse_cases(self, response: str) -> List[Dict[str, Any]]:
        """Pull the JSON array out of a model response and validate its entries."""
        text = _extract_array(response)
        try:
            parsed = json.loads(_sanitize(text))
        except json.JSONDecodeError as e:
            raise AIGenerationError("Failed to parse cleaned test cases JSON") from e

        if not isinstance(parsed, list):
            raise AIGenerationError("No valid JSON array found in LLM response")

        now = datetime.now(timezone.utc)
        stamp = int(now.timestamp() * 1000)
        cases: List[Dict[str, Any]] = []
        seen: set[str] = set()

        for idx, tc in enumerate(parsed):
            if not (isinstance(tc, dict) and tc.get("name") and tc.get("description")
                    and isinstance(tc.get("fields"), dict)):
                logger.warning("Skipping invalid test case at index %d", idx)
                continue

            # duplicates are judged by their fields only
            key = json.dumps(tc["fields"], sort_keys=True)
            if key in seen:
                continue
            seen.add(key)

            cases.append({
                **tc,
                "id": f"tc_{stamp}_{idx}",
                "generated": True,
                "timestamp": now.isoformat(),
            })

        return cases


def _extract_array(text: str) -> str:
    start = text.find("[")
    end = text.rfind("]")
    if start == -1 or end == -1 or start >= end:
        raise AIGenerationError("No valid JSON array found in LLM response")
    return text[start:end + 1]


def _sanitize(text: str) -> str:
    """Strip comments and trailing commas, quote bare object keys."""
    text = re.sub(r"//.*$", "", text, flags=re.MULTILINE)
    text = re.sub(r"/\*[\s\S]*?\*/", "", text)
    text = re.sub(r",(\s*[}\]])", r"\1", text)
    # not string-aware: ", word:" inside a string value is rewritten too
    text = re.sub(r'([{,]\s*)([a-zA-Z_$][a-zA-Z0-9_$]*)(\s*:)', r'\1"\2"\3', text)
    return text.strip()


def summarize_categories(cases: List[Dict[str, Any]]) -> Dict[str, int]:
    """Count cases per category."""
    return {cat: sum(1 for c in cases if c.get("category") == cat) for cat in CATEGORIES}
