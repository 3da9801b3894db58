"""
Test configuration and fixtures for the AI Readiness service.

Network access is replaced with ``httpx.MockTransport``: each test declares
the URLs that exist and every other URL answers 404.
"""

from typing import Callable

import httpx
import pytest

from readiness.base import CheckResult


class FakeWeb:
    """Serves canned responses and records every requested URL in order."""

    def __init__(self, routes: dict[str, httpx.Response | Exception | str]):
        self.routes = routes
        self.requested: list[str] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requested.append(url)

        route = self.routes.get(url)
        if route is None:
            return httpx.Response(404, text="<!DOCTYPE html><html><body>Page not found</body></html>")
        if isinstance(route, Exception):
            raise route
        if isinstance(route, str):
            return httpx.Response(200, text=route)
        return route

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def fake_web() -> Callable[..., FakeWeb]:
    """Factory fixture: ``fake_web({url: body_or_response_or_exception})``."""

    def _make(routes: dict | None = None) -> FakeWeb:
        return FakeWeb(routes or {})

    return _make


def make_result(check_id: str, score: float, status: str = "pass") -> CheckResult:
    return CheckResult(
        id=check_id,
        label=check_id,
        status=status,
        score=score,
        details="",
        recommendation="",
    )


MINIMAL_HTML = (
    "<html><head><title>T</title></head>"
    "<body><h1>H</h1><p>short text.</p></body></html>"
)
