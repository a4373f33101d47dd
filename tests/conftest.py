from __future__ import annotations

import json
from typing import Any, List, Optional

import httpx
import pytest

from snapapi import AsyncSnapAPI, SnapAPI
from snapapi.config import ENV_API_KEY, ENV_BASE_URL, ENV_TIMEOUT

BASE_URL = "https://api.test.snapapi.dev"


class StubTransport:
    """Canned-response handler for ``httpx.MockTransport`` that records requests."""

    def __init__(
        self,
        status_code: int = 200,
        content: bytes = b"",
        json_body: Any = None,
        exc: Optional[Exception] = None,
    ):
        self.status_code = status_code
        self.content = json.dumps(json_body).encode() if json_body is not None else content
        self.exc = exc
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        return httpx.Response(self.status_code, content=self.content)

    @property
    def called(self) -> bool:
        return bool(self.requests)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


def make_client(stub: StubTransport, **kwargs: Any) -> SnapAPI:
    kwargs.setdefault("base_url", BASE_URL)
    return SnapAPI(api_key="sk_test_123", transport=httpx.MockTransport(stub), **kwargs)


def make_async_client(stub: StubTransport, **kwargs: Any) -> AsyncSnapAPI:
    kwargs.setdefault("base_url", BASE_URL)
    return AsyncSnapAPI(api_key="sk_test_123", transport=httpx.MockTransport(stub), **kwargs)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Hide any SNAPAPI_* variables from the developer's shell.

    setenv before delenv so monkeypatch restores the original state even for
    variables that a test (or load_dotenv) sets later.
    """
    for name in (ENV_API_KEY, ENV_BASE_URL, ENV_TIMEOUT):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
