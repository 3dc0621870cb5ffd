import json
import logging
import time
from typing import Optional

import httpx

from bodyfuzz.config import DEFAULT_METHOD, DEFAULT_TIMEOUT
from bodyfuzz.generator.base import TestCase
from bodyfuzz.jsontree import to_jsonable
from bodyfuzz.models import RunResult

logger = logging.getLogger(__name__)


class HttpRunner:
    """
    Sends test case bodies to an HTTP endpoint.
    Supports custom headers and bearer-token authentication.
    """

    def __init__(
        self,
        url: str,
        method: str = DEFAULT_METHOD,
        timeout: float = DEFAULT_TIMEOUT,
        headers: Optional[dict] = None,
        token: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.url = url
        self.method = method.upper()
        self.timeout = timeout
        self.headers = dict(headers or {})
        # Ensure Content-Type if not provided
        if "content-type" not in {k.lower() for k in self.headers}:
            self.headers["Content-Type"] = "application/json"
        if token:
            self.headers["Authorization"] = f"Bearer {token}"

        self.transport = transport
        self.test_count = 0
        self.error_count = 0

    def _client(self) -> httpx.Client:
        return httpx.Client(timeout=self.timeout, transport=self.transport)

    def run(self, case: TestCase) -> RunResult:
        """Send one case body and capture the response. Never raises on transport errors."""
        self.test_count += 1
        body = json.dumps(to_jsonable(case.body)).encode("utf-8")
        logger.debug("Running %s: %s %s", case.name, self.method, self.url)

        result = RunResult(
            name=case.name,
            description=case.description,
            expected_status=case.expected_status,
        )

        start = time.perf_counter()
        try:
            with self._client() as client:
                response = client.request(
                    self.method,
                    self.url,
                    content=body,
                    headers=self.headers,
                )
        except httpx.TimeoutException:
            self.error_count += 1
            result.error = "HTTP Timeout"
            logger.debug("%s: timeout", case.name)
            return result
        except httpx.HTTPError as e:
            self.error_count += 1
            result.error = str(e) or type(e).__name__
            logger.debug("%s: %s", case.name, result.error)
            return result

        result.elapsed_ms = (time.perf_counter() - start) * 1000
        result.status = response.status_code
        result.ok = 200 <= response.status_code < 300
        result.response = _parse_body(response)
        logger.debug("%s: HTTP %d in %.1fms", case.name, result.status, result.elapsed_ms)
        return result

    def run_all(self, cases: list[TestCase]) -> list[RunResult]:
        """Run cases one after another, in order."""
        return [self.run(case) for case in cases]


def _parse_body(response: httpx.Response):
    """JSON body when it parses, raw text otherwise."""
    if not response.content:
        return {}
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return response.text
